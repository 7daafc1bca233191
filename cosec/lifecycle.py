"""
cosec.lifecycle
===============

State‑transition guard for a :class:`cosec.models.FilingReport`.

A tiny finite‑state‑machine describes which statuses are legal successors
of each status.  :pyfunc:`advance_filing` returns an updated **copy**
(ready for :meth:`cosec.store.CompanyStore.update_filing`) after validating
the transition.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Optional

from .models import FilingReport, FilingStatus

# ---------------------------------------------------------------------
# Allowed transitions: source status → set[valid target statuses]
# ---------------------------------------------------------------------
RULES = {
    FilingStatus.PENDING: {FilingStatus.FILED, FilingStatus.DELAYED},
    FilingStatus.DELAYED: {FilingStatus.FILED},
    FilingStatus.FILED:   set(),
}


def advance_filing(
    filing: FilingReport,
    new_status: FilingStatus,
    filed_on: Optional[date] = None,
) -> FilingReport:
    """
    Return *filing* moved to *new_status*, or raise :class:`ValueError`
    if the transition is illegal.

    Moving to ``Filed`` records *filed_on* (default: today) as the filing
    date.

    Examples
    --------
    >>> f = FilingReport("Annual Return", "MGT-7", date(2025, 11, 29))
    >>> advance_filing(f, FilingStatus.FILED, date(2025, 11, 20)).filing_date
    datetime.date(2025, 11, 20)
    >>> advance_filing(f, FilingStatus.PENDING)
    Traceback (most recent call last):
        ...
    ValueError: illegal transition Pending → Pending
    """
    current = filing.status
    if new_status not in RULES.get(current, set()):
        raise ValueError(f"illegal transition {current} → {new_status}")
    if new_status is FilingStatus.FILED:
        return replace(filing, status=new_status, filing_date=filed_on or date.today())
    return replace(filing, status=new_status, filing_date=None)


def is_overdue(filing: FilingReport, today: Optional[date] = None) -> bool:
    """True for a filing still pending after its due date."""
    today = today or date.today()
    return filing.status is FilingStatus.PENDING and filing.due_date < today
