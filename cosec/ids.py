"""
cosec.ids
=========

Record identifiers: short lower‑case alphanumeric tokens.  Uniqueness is
only needed within one local dataset, so 12 random characters from
:mod:`secrets` are plenty.
"""

from __future__ import annotations

import secrets
import string

ALPHABET = string.ascii_lowercase + string.digits
ID_LENGTH = 12


def new_id() -> str:
    """Return a fresh, non‑empty identifier."""
    return "".join(secrets.choice(ALPHABET) for _ in range(ID_LENGTH))
