"""
cosec.compliance
================

Figures derived from the stored records: how many filings are done, what
falls due soon, how late things are.  Everything here is read‑only and
takes *today* as an argument so results are reproducible.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional, Sequence

from .models import (
    CompanyState,
    FilingReport,
    FilingStatus,
    MeetingDocument,
    MeetingType,
    Member,
)
from .settings import settings


def compliance_percentage(filings: Sequence[FilingReport]) -> int:
    """Share of filings with status Filed, in whole percent (0 when there are none)."""
    if not filings:
        return 0
    filed = sum(1 for f in filings if f.status is FilingStatus.FILED)
    # round half up
    return math.floor(filed * 100 / len(filings) + 0.5)


def days_until_due(filing: FilingReport, today: Optional[date] = None) -> int:
    """Days from *today* to the due date; negative once overdue."""
    today = today or date.today()
    return (filing.due_date - today).days


def upcoming_filings(
    filings: Iterable[FilingReport],
    today: Optional[date] = None,
    window_days: Optional[int] = None,
) -> List[FilingReport]:
    """
    Pending filings due after *today* and within *window_days*
    (default ``settings.upcoming_window_days``), soonest first.
    """
    today = today or date.today()
    window = window_days if window_days is not None else settings.upcoming_window_days
    horizon = today + timedelta(days=window)
    due = [
        f for f in filings
        if f.status is FilingStatus.PENDING and today < f.due_date <= horizon
    ]
    return sorted(due, key=lambda f: f.due_date)


def delayed_filings(filings: Iterable[FilingReport]) -> List[FilingReport]:
    return [f for f in filings if f.status is FilingStatus.DELAYED]


def filings_by_status(filings: Iterable[FilingReport]) -> Dict[FilingStatus, int]:
    """Count per status; every status appears, zeroes included."""
    counts = {s: 0 for s in FilingStatus}
    for f in filings:
        counts[f.status] += 1
    return counts


def meetings_by_type(meetings: Iterable[MeetingDocument]) -> Dict[MeetingType, int]:
    counts = {t: 0 for t in MeetingType}
    for m in meetings:
        counts[m.meeting_type] += 1
    return counts


def recent_meetings(meetings: Iterable[MeetingDocument], limit: int = 3) -> List[MeetingDocument]:
    """Most recent meetings by meeting date, newest first."""
    return sorted(meetings, key=lambda m: m.date, reverse=True)[:limit]


def total_shares(members: Iterable[Member]) -> int:
    return sum(m.number_of_shares for m in members)


@dataclass
class ComplianceSummary:
    """Dashboard‑style snapshot of a :class:`CompanyState`."""
    company_name: Optional[str]
    directors: int
    members: int
    meetings: int
    filings: int
    compliance_percentage: int
    total_shares: int
    by_status: Dict[FilingStatus, int] = field(default_factory=dict)
    upcoming: List[FilingReport] = field(default_factory=list)
    delayed: List[FilingReport] = field(default_factory=list)


def summarize(state: CompanyState, today: Optional[date] = None) -> ComplianceSummary:
    """Collect the headline figures for *state*."""
    profile = state.company_details
    return ComplianceSummary(
        company_name=profile.name if profile else None,
        directors=len(state.directors),
        members=len(state.members),
        meetings=len(state.meetings),
        filings=len(state.filings),
        compliance_percentage=compliance_percentage(state.filings),
        total_shares=total_shares(state.members),
        by_status=filings_by_status(state.filings),
        upcoming=upcoming_filings(state.filings, today),
        delayed=delayed_filings(state.filings),
    )
