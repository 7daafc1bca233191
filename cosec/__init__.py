"""
cosec
=====

A local compliance record‑keeper for a private company: company profile,
directors, members, meetings and ROC filings, plus the notices, minutes and
annual return rendered from them.

Import structure
----------------
`import cosec` is intentionally cheap: sub‑modules are imported on demand.
Only :pymod:`cosec.db` pulls in SQLModel/SQLAlchemy.

Sub‑modules
~~~~~~~~~~~
- :pymod:`cosec.models`      – record dataclasses + enums, ``CompanyState`` aggregate
- :pymod:`cosec.ids`         – ``new_id()`` record identifiers
- :pymod:`cosec.snapshot`    – versioned JSON snapshot of the aggregate (+ migrations)
- :pymod:`cosec.storage`     – storage port + ``MemoryStorage``
- :pymod:`cosec.db`          – ``SQLiteStorage`` (SQLModel) and the maintenance CLI
- :pymod:`cosec.store`       – ``CompanyStore``, the only mutator of the aggregate
- :pymod:`cosec.templates`   – notices, minutes, annual return
- :pymod:`cosec.documents`   – template dispatch, filenames, export
- :pymod:`cosec.compliance`  – compliance percentage, upcoming/delayed filings
- :pymod:`cosec.lifecycle`   – filing status transitions (`advance_filing`)
- :pymod:`cosec.validation`  – input forms (pydantic) and policy checks

Quick start
-----------
>>> from datetime import date
>>> from cosec.models import FilingReport
>>> from cosec.storage import MemoryStorage
>>> from cosec.store import CompanyStore
>>> store = CompanyStore(MemoryStorage())
>>> store.add_filing(FilingReport("Annual Return", "MGT-7", date(2025, 11, 29))).ok
True

"""

__all__ = [
    "models",
    "ids",
    "snapshot",
    "storage",
    "db",
    "store",
    "templates",
    "documents",
    "compliance",
    "lifecycle",
    "validation",
]

__version__ = "0.1.0"
