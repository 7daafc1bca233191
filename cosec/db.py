"""
cosec.db
========

SQLite persistence layer for cosec.

This module exposes:

* ``engine`` – a global SQLModel engine pointing at *cosec.db*
* ``SessionLocal`` – a session factory used via ``with SessionLocal() as s:``
* ``create_all()`` – helper to create tables at first run
* :class:`SQLiteStorage` – the :class:`~cosec.storage.SnapshotStorage`
  implementation backed by the ``snapshot`` table
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Column, Text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Field, Session, SQLModel, create_engine

from cosec.errors import PersistenceError
from cosec.settings import DB_ECHO, DB_URL
from cosec.snapshot import SCHEMA_VERSION

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Engine (SQLite file lives in project root unless COSEC_DB_FILE says otherwise)
# ---------------------------------------------------------------------------
engine = create_engine(DB_URL, echo=DB_ECHO)


# ---------------------------------------------------------------------------
# Session factory
# ---------------------------------------------------------------------------
def SessionLocal(bind: Optional[Engine] = None) -> Session:  # noqa: N802 (factory camel‑case)
    """Return a new Session bound to *bind* (default: the global engine)."""
    return Session(bind or engine)


# ---------------------------------------------------------------------------
# ORM model: one row per storage key
# ---------------------------------------------------------------------------
class SnapshotRow(SQLModel, table=True):
    """
    One persisted snapshot blob.

    *version* mirrors the ``version`` field inside *payload* so a schema
    mismatch can be spotted with plain SQL.
    """

    __tablename__ = "snapshot"

    key: str = Field(primary_key=True, index=True)
    version: int = 0
    payload: str = Field(sa_column=Column(Text, nullable=False))
    saved_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class SQLiteStorage:
    """
    Snapshot storage backed by the ``snapshot`` table.

    A short‑lived session is opened per call, so the object is safe to keep
    for the lifetime of the application.
    """

    def __init__(self, bind: Optional[Engine] = None, create: bool = True) -> None:
        self._engine = bind or engine
        if create:
            create_all(self._engine)

    def read(self, key: str) -> Optional[str]:
        try:
            with SessionLocal(self._engine) as s:
                row = s.get(SnapshotRow, key)
                return row.payload if row else None
        except SQLAlchemyError as exc:
            raise PersistenceError(f"could not read snapshot {key!r}: {exc}") from exc

    def write(self, key: str, text: str) -> None:
        row = SnapshotRow(
            key=key,
            version=SCHEMA_VERSION,
            payload=text,
            saved_at=datetime.now(timezone.utc),
        )
        try:
            with SessionLocal(self._engine) as s:
                s.merge(row)
                s.commit()
        except SQLAlchemyError as exc:
            logger.error(f"Snapshot write for {key!r} failed: {exc}")
            raise PersistenceError(f"could not write snapshot {key!r}: {exc}") from exc

    def delete(self, key: str) -> None:
        try:
            with SessionLocal(self._engine) as s:
                row = s.get(SnapshotRow, key)
                if row is not None:
                    s.delete(row)
                    s.commit()
        except SQLAlchemyError as exc:
            raise PersistenceError(f"could not delete snapshot {key!r}: {exc}") from exc


# ---------------------------------------------------------------------------
# Utility: create tables
# ---------------------------------------------------------------------------
def create_all(bind: Optional[Engine] = None) -> None:
    """Create all tables for imported SQLModel subclasses, including SnapshotRow."""
    SQLModel.metadata.create_all(bind or engine)


# ---------------------------------------------------------------------------
# Lightweight CLI
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    """
    Maintenance helper.

    Examples
    --------
    $ python -m cosec.db --create                   # first‑time table creation
    $ python -m cosec.db --show                     # summary of the stored data
    $ python -m cosec.db --import-legacy data.json  # load a browser export
    $ python -m cosec.db --reset                    # wipe the stored aggregate
    """
    import argparse
    import sys
    import textwrap
    from pathlib import Path

    from cosec.compliance import summarize
    from cosec.errors import SnapshotError
    from cosec.settings import settings
    from cosec.snapshot import load_state
    from cosec.store import CompanyStore

    logging.basicConfig(level=settings.log_level)

    parser = argparse.ArgumentParser(
        prog="python -m cosec.db",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description=textwrap.dedent(
            """\
            cosec DB utilities
            ------------------
            --create         Create all SQLModel tables (safe if they already exist)
            --show           Print a summary of the stored company data
            --import-legacy  Replace the stored data with a JSON export taken
                             from the browser version of the application
            --reset          Delete all stored company data
            """
        ),
    )
    parser.add_argument("--create", action="store_true", help="create tables")
    parser.add_argument("--show", action="store_true", help="print a summary")
    parser.add_argument("--import-legacy", metavar="FILE", type=Path, help="import a browser export")
    parser.add_argument("--reset", action="store_true", help="clear the stored aggregate")
    args = parser.parse_args()

    if args.create:
        create_all()
        print("✅ cosec.db schema initialised")

    storage = SQLiteStorage()

    if args.reset:
        result = CompanyStore(storage).clear()
        if not result.ok:
            print(f"❌ reset failed: {result.error}")
            sys.exit(1)
        print("✅ stored company data cleared")

    if args.import_legacy:
        try:
            imported = load_state(args.import_legacy.read_text(encoding="utf-8"))
        except (OSError, SnapshotError) as exc:
            print(f"❌ import failed: {exc}")
            sys.exit(1)
        result = CompanyStore(storage).replace_state(imported)
        if not result.ok:
            print(f"❌ import failed: {result.error}")
            sys.exit(1)
        print(f"✅ imported {args.import_legacy}")

    if args.show:
        summary = summarize(CompanyStore(storage).state)
        print(f"Company:    {summary.company_name or '(no profile)'}")
        print(f"Directors:  {summary.directors}")
        print(f"Members:    {summary.members}")
        print(f"Meetings:   {summary.meetings}")
        print(f"Filings:    {summary.filings}  ({summary.compliance_percentage}% filed)")
        for f in summary.upcoming:
            print(f"  upcoming: {f.form_number} {f.name} due {f.due_date.isoformat()}")
