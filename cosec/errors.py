"""
cosec.errors
============

Exception types raised by the data layer.
"""

from __future__ import annotations


class CosecError(Exception):
    """Base class for every cosec error."""


class PersistenceError(CosecError):
    """The storage medium could not be read or written."""


class SnapshotError(CosecError):
    """A stored snapshot could not be parsed, validated or migrated."""


class RecordNotFound(CosecError, KeyError):
    """No record with the requested id exists in the collection."""

    def __init__(self, collection: str, record_id: str) -> None:
        super().__init__(f"{collection}: no record with id {record_id!r}")
        self.collection = collection
        self.record_id = record_id

    def __str__(self) -> str:  # KeyError would repr() the message
        return self.args[0]


class DocumentError(CosecError, ValueError):
    """A document was requested for missing or unsuitable data."""
