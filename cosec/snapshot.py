"""
cosec.snapshot
==============

Serialisation of the :class:`~cosec.models.CompanyState` aggregate into the
single text blob kept by a storage backend.

The blob is JSON with an explicit schema version::

    {"version": 1, "saved_at": "2025-04-01T09:30:00Z", "state": {...}}

Payloads without a ``version`` field are the legacy browser export
(camelCase keys, ``companyDetails`` at the top level) and are treated as
version 0.  :data:`MIGRATIONS` maps each old version to a function that
lifts a raw payload one step forward.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from pydantic import TypeAdapter, ValidationError

from .errors import SnapshotError
from .models import CompanyState

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1


@dataclass
class Snapshot:
    """Envelope written to storage."""
    version: int
    saved_at: datetime
    state: CompanyState


_SNAPSHOT = TypeAdapter(Snapshot)


# ---------------------------------------------------------------------------
# Migrations
# ---------------------------------------------------------------------------
_LEGACY_RENAMES = {
    "registrationDate": "incorporation_date",
    "incorporationDate": "incorporation_date",
    "type": "meeting_type",
    "subType": "sub_type",
}


def _snake(key: str) -> str:
    return _LEGACY_RENAMES.get(key) or re.sub(r"(?<!^)(?=[A-Z])", "_", key).lower()


_OPTIONAL_KEYS = {"website", "filingDate", "documentPath"}


def _legacy_record(rec: Any, where: str) -> Dict[str, Any]:
    if not isinstance(rec, dict):
        raise SnapshotError(f"legacy {where} record must be an object, got {type(rec).__name__}")
    # the browser form stored "" for cleared optional fields
    return {
        _snake(k): v
        for k, v in rec.items()
        if not (k in _OPTIONAL_KEYS and v == "")
    }


def _legacy_list(raw: Dict[str, Any], key: str) -> List[Dict[str, Any]]:
    items = raw.get(key) or []
    if not isinstance(items, list):
        raise SnapshotError(f"legacy {key} must be a list, got {type(items).__name__}")
    return [_legacy_record(r, key) for r in items]


def _from_legacy(raw: Dict[str, Any]) -> Dict[str, Any]:
    """Version 0 (unversioned browser payload) → version 1."""
    details = raw.get("companyDetails")
    return {
        "version": 1,
        "saved_at": datetime.now(timezone.utc).isoformat(),
        "state": {
            "company_details": _legacy_record(details, "companyDetails") if details is not None else None,
            "directors": _legacy_list(raw, "directors"),
            "members": _legacy_list(raw, "members"),
            "meetings": _legacy_list(raw, "meetings"),
            "filings": _legacy_list(raw, "filings"),
        },
    }


MIGRATIONS: Dict[int, Callable[[Dict[str, Any]], Dict[str, Any]]] = {
    0: _from_legacy,
}


def migrate(raw: Dict[str, Any]) -> Dict[str, Any]:
    """Bring a raw payload up to :data:`SCHEMA_VERSION`."""
    version = raw.get("version", 0)
    if not isinstance(version, int) or isinstance(version, bool):
        raise SnapshotError(f"snapshot version must be an integer, got {version!r}")
    if version > SCHEMA_VERSION:
        raise SnapshotError(
            f"snapshot version {version} is newer than supported version {SCHEMA_VERSION}"
        )
    while version < SCHEMA_VERSION:
        step = MIGRATIONS.get(version)
        if step is None:
            raise SnapshotError(f"no migration from snapshot version {version}")
        logger.info(f"Migrating snapshot from version {version}")
        raw = step(raw)
        version = raw["version"]
    return raw


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def dump_state(state: CompanyState, saved_at: Optional[datetime] = None) -> str:
    """Serialise *state* into a versioned JSON blob."""
    snap = Snapshot(
        version=SCHEMA_VERSION,
        saved_at=saved_at or datetime.now(timezone.utc),
        state=state,
    )
    return _SNAPSHOT.dump_json(snap).decode("utf-8")


def load_state(text: str) -> CompanyState:
    """
    Parse a blob written by :func:`dump_state` (or a legacy browser export).

    Raises :class:`~cosec.errors.SnapshotError` if the blob is not JSON, has
    an unknown version, or does not match the record shapes.
    """
    try:
        raw = json.loads(text)
    except (TypeError, ValueError) as exc:
        raise SnapshotError(f"snapshot is not valid JSON: {exc}") from exc
    if not isinstance(raw, dict):
        raise SnapshotError("snapshot must be a JSON object")

    raw = migrate(raw)
    try:
        return _SNAPSHOT.validate_python(raw).state
    except ValidationError as exc:
        raise SnapshotError(f"snapshot does not match the record schema: {exc}") from exc
