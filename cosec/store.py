"""
cosec.store
===========

:class:`CompanyStore` is the single owner of the
:class:`~cosec.models.CompanyState` aggregate.  It is constructed once with
a storage backend and handed to whatever needs it; there is no module‑level
instance.

Every successful mutation writes the *whole* aggregate back to storage.
Mutations never raise for environmental problems: they return a
:class:`StoreResult` whose ``status`` tells the caller whether the record was
found and whether the write went through.  Callers who prefer exceptions can
chain ``.raise_for_status()``.

The store performs no domain validation (see :pymod:`cosec.validation`); it
only insists on being handed the right record type.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, List, Optional, Tuple

from .errors import PersistenceError, RecordNotFound, SnapshotError
from .ids import new_id
from .models import (
    CompanyProfile,
    CompanyState,
    Director,
    FilingReport,
    MeetingDocument,
    Member,
)
from .settings import STORAGE_KEY
from .snapshot import dump_state, load_state
from .storage import SnapshotStorage

logger = logging.getLogger(__name__)

# collection attribute on CompanyState → record type it holds
RECORD_TYPES = {
    "directors": Director,
    "members": Member,
    "meetings": MeetingDocument,
    "filings": FilingReport,
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ResultStatus(Enum):
    """Outcome of a store operation."""
    OK = "ok"
    NOT_FOUND = "not_found"
    PERSIST_FAILED = "persist_failed"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class StoreResult:
    """
    What a mutation did.

    Parameters
    ----------
    state : CompanyState
        Copy of the in‑memory state after the operation.
    status : ResultStatus
    record_id : str | None
        Id of the record that was added, updated or removed (or looked for).
    collection : str | None
        Name of the collection the operation targeted.
    error : PersistenceError | None
        Set when *status* is ``PERSIST_FAILED``.  The change is still applied
        in memory; :meth:`CompanyStore.save` retries the write.
    """
    state: CompanyState
    status: ResultStatus = ResultStatus.OK
    record_id: Optional[str] = None
    collection: Optional[str] = None
    error: Optional[PersistenceError] = None

    @property
    def ok(self) -> bool:
        return self.status is ResultStatus.OK

    @property
    def found(self) -> bool:
        return self.status is not ResultStatus.NOT_FOUND

    def raise_for_status(self) -> "StoreResult":
        """Raise :class:`RecordNotFound` / :class:`PersistenceError`, else return self."""
        if self.status is ResultStatus.NOT_FOUND:
            raise RecordNotFound(self.collection or "", self.record_id or "")
        if self.status is ResultStatus.PERSIST_FAILED:
            raise self.error or PersistenceError("persist failed")
        return self


class CompanyStore:
    """
    Owner and only mutator of a company's records.

    Example
    -------
    >>> from cosec.storage import MemoryStorage
    >>> store = CompanyStore(MemoryStorage())
    >>> res = store.add_filing(FilingReport("Annual Return", "MGT-7", date(2025, 11, 29)))
    >>> store.filings[0].id == res.record_id
    True
    """

    def __init__(
        self,
        storage: SnapshotStorage,
        key: str = STORAGE_KEY,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._storage = storage
        self.key = key
        self._clock = clock or _utcnow
        self.dirty = False
        self.load_error: Optional[Exception] = None
        self._state = self._load()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _load(self) -> CompanyState:
        """Read the persisted snapshot; anything unreadable means 'start empty'."""
        self.load_error = None
        try:
            text = self._storage.read(self.key)
        except PersistenceError as exc:
            logger.warning(f"Could not read stored state, starting empty: {exc}")
            self.load_error = exc
            return CompanyState()
        if text is None:
            return CompanyState()
        try:
            return load_state(text)
        except SnapshotError as exc:
            logger.warning(f"Stored state under {self.key!r} is unreadable, starting empty: {exc}")
            self.load_error = exc
            return CompanyState()

    def _persist(self, record_id: Optional[str] = None, collection: Optional[str] = None) -> StoreResult:
        try:
            self._storage.write(self.key, dump_state(self._state, saved_at=self._clock()))
        except PersistenceError as exc:
            logger.error(f"Persisting company state failed: {exc}")
            self.dirty = True
            return StoreResult(self.state, ResultStatus.PERSIST_FAILED, record_id, collection, exc)
        self.dirty = False
        return StoreResult(self.state, ResultStatus.OK, record_id, collection)

    def _not_found(self, record_id: str, collection: str) -> StoreResult:
        logger.debug(f"{collection}: no record with id {record_id!r}, nothing changed")
        return StoreResult(self.state, ResultStatus.NOT_FOUND, record_id, collection)

    @staticmethod
    def _check_type(collection: str, record) -> None:
        expected = RECORD_TYPES[collection]
        if not isinstance(record, expected):
            raise TypeError(f"{collection} holds {expected.__name__}, got {type(record).__name__}")

    @staticmethod
    def _fresh_id(records) -> str:
        taken = {r.id for r in records}
        rid = new_id()
        while rid in taken:
            rid = new_id()
        return rid

    def _records(self, collection: str) -> list:
        return getattr(self._state, collection)

    def _add(self, collection: str, record, **stamp) -> StoreResult:
        self._check_type(collection, record)
        records = self._records(collection)
        added = replace(copy.deepcopy(record), id=self._fresh_id(records), **stamp)
        records.append(added)
        logger.debug(f"{collection}: added {added.id}")
        return self._persist(added.id, collection)

    def _update(self, collection: str, record_id: str, data, keep: Tuple[str, ...] = ()) -> StoreResult:
        self._check_type(collection, data)
        records = self._records(collection)
        for i, current in enumerate(records):
            if current.id == record_id:
                carried = {name: getattr(current, name) for name in keep}
                records[i] = replace(copy.deepcopy(data), id=record_id, **carried)
                logger.debug(f"{collection}: updated {record_id}")
                return self._persist(record_id, collection)
        return self._not_found(record_id, collection)

    def _remove(self, collection: str, record_id: str) -> StoreResult:
        records = self._records(collection)
        for i, current in enumerate(records):
            if current.id == record_id:
                del records[i]
                logger.debug(f"{collection}: removed {record_id}")
                return self._persist(record_id, collection)
        return self._not_found(record_id, collection)

    def _get(self, collection: str, record_id: str):
        for r in self._records(collection):
            if r.id == record_id:
                return copy.deepcopy(r)
        return None

    # ------------------------------------------------------------------
    # Read side (copies only)
    # ------------------------------------------------------------------
    @property
    def state(self) -> CompanyState:
        return copy.deepcopy(self._state)

    @property
    def company_details(self) -> Optional[CompanyProfile]:
        return copy.deepcopy(self._state.company_details)

    @property
    def directors(self) -> List[Director]:
        return copy.deepcopy(self._state.directors)

    @property
    def members(self) -> List[Member]:
        return copy.deepcopy(self._state.members)

    @property
    def meetings(self) -> List[MeetingDocument]:
        return copy.deepcopy(self._state.meetings)

    @property
    def filings(self) -> List[FilingReport]:
        return copy.deepcopy(self._state.filings)

    def get_director(self, record_id: str) -> Optional[Director]:
        return self._get("directors", record_id)

    def get_member(self, record_id: str) -> Optional[Member]:
        return self._get("members", record_id)

    def get_meeting(self, record_id: str) -> Optional[MeetingDocument]:
        return self._get("meetings", record_id)

    def get_filing(self, record_id: str) -> Optional[FilingReport]:
        return self._get("filings", record_id)

    # ------------------------------------------------------------------
    # Whole‑state operations
    # ------------------------------------------------------------------
    def reload(self) -> CompanyState:
        """Discard in‑memory state and re‑read the persisted snapshot."""
        self._state = self._load()
        self.dirty = False
        return self.state

    def save(self) -> StoreResult:
        """Write the current state again (e.g. after a ``PERSIST_FAILED``)."""
        return self._persist()

    def replace_state(self, state: CompanyState) -> StoreResult:
        """Swap in a complete aggregate (used when importing an export)."""
        if not isinstance(state, CompanyState):
            raise TypeError(f"expected CompanyState, got {type(state).__name__}")
        self._state = copy.deepcopy(state)
        logger.info("Company state replaced")
        return self._persist()

    def clear(self) -> StoreResult:
        """Reset to the empty state and persist it."""
        self._state = CompanyState()
        logger.info("Company state cleared")
        return self._persist()

    # ------------------------------------------------------------------
    # Company profile
    # ------------------------------------------------------------------
    def set_company_profile(self, details: CompanyProfile) -> StoreResult:
        """
        Replace the company profile wholesale.

        The existing profile id is kept; a fresh one is assigned only when
        there was no profile before.
        """
        if not isinstance(details, CompanyProfile):
            raise TypeError(f"expected CompanyProfile, got {type(details).__name__}")
        previous = self._state.company_details
        profile_id = previous.id if previous and previous.id else new_id()
        self._state.company_details = replace(copy.deepcopy(details), id=profile_id)
        logger.debug(f"company profile set ({profile_id})")
        return self._persist(profile_id, "company_details")

    # ------------------------------------------------------------------
    # Directors
    # ------------------------------------------------------------------
    def add_director(self, director: Director) -> StoreResult:
        return self._add("directors", director)

    def update_director(self, record_id: str, director: Director) -> StoreResult:
        return self._update("directors", record_id, director)

    def remove_director(self, record_id: str) -> StoreResult:
        return self._remove("directors", record_id)

    # ------------------------------------------------------------------
    # Members
    # ------------------------------------------------------------------
    def add_member(self, member: Member) -> StoreResult:
        return self._add("members", member)

    def update_member(self, record_id: str, member: Member) -> StoreResult:
        return self._update("members", record_id, member)

    def remove_member(self, record_id: str) -> StoreResult:
        return self._remove("members", record_id)

    # ------------------------------------------------------------------
    # Meetings
    # ------------------------------------------------------------------
    def add_meeting(self, meeting: MeetingDocument) -> StoreResult:
        """Append *meeting*, stamping ``generated_on`` with the current time."""
        return self._add("meetings", meeting, generated_on=self._clock())

    def update_meeting(self, record_id: str, meeting: MeetingDocument) -> StoreResult:
        """Replace a meeting; its original ``generated_on`` is kept as is."""
        return self._update("meetings", record_id, meeting, keep=("generated_on",))

    def remove_meeting(self, record_id: str) -> StoreResult:
        return self._remove("meetings", record_id)

    # ------------------------------------------------------------------
    # Filings
    # ------------------------------------------------------------------
    def add_filing(self, filing: FilingReport) -> StoreResult:
        return self._add("filings", filing)

    def update_filing(self, record_id: str, filing: FilingReport) -> StoreResult:
        return self._update("filings", record_id, filing)

    def remove_filing(self, record_id: str) -> StoreResult:
        return self._remove("filings", record_id)
