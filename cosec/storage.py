"""
cosec.storage
=============

Key → text storage used by :class:`cosec.store.CompanyStore` to keep its
snapshot.  Any object with ``read``/``write``/``delete`` fits
:class:`SnapshotStorage`; :class:`MemoryStorage` is the dictionary‑backed
implementation (handy for tests and embedding), the SQLite one lives in
:pymod:`cosec.db`.
"""

from __future__ import annotations

from typing import Dict, Optional, Protocol

from .errors import PersistenceError


class SnapshotStorage(Protocol):
    """Port: persist one text blob per key."""

    def read(self, key: str) -> Optional[str]:
        """Return the stored text, or ``None`` if nothing is stored."""
        ...

    def write(self, key: str, text: str) -> None:
        """Store *text*, raising :class:`PersistenceError` on failure."""
        ...

    def delete(self, key: str) -> None: ...


class MemoryStorage:
    """
    Dictionary‑backed storage.

    An optional *quota* (in bytes, summed over all keys) makes writes fail
    the way a full browser storage area would.

    Example
    -------
    >>> ms = MemoryStorage()
    >>> ms.write("companyData", "{}")
    >>> ms.read("companyData")
    '{}'
    """

    def __init__(self, quota: Optional[int] = None) -> None:
        self._data: Dict[str, str] = {}
        self.quota = quota

    def read(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def write(self, key: str, text: str) -> None:
        if self.quota is not None:
            others = sum(len(v.encode("utf-8")) for k, v in self._data.items() if k != key)
            if others + len(text.encode("utf-8")) > self.quota:
                raise PersistenceError(f"storage quota of {self.quota} bytes exceeded")
        self._data[key] = text

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)
