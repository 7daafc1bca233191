"""
cosec.models
============

Dataclasses and enums for the records kept by a company secretary: the
company profile, its directors, members (shareholders), meetings and ROC
filings, plus the :class:`CompanyState` aggregate that holds them all.

Like the rest of the data layer these objects carry **no** external‑library
dependencies.  Identity (``id``) is always assigned by
:class:`cosec.store.CompanyStore`; callers leave it as ``None``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional, Union


class MeetingType(Enum):
    """Class of a meeting."""
    BOARD = "Board"
    GENERAL = "General"

    def __str__(self) -> str:
        return self.value


class MeetingSubType(Enum):
    """Sub‑class of a meeting (Regular/Committee for Board, AGM/EGM for General)."""
    REGULAR = "Regular"
    COMMITTEE = "Committee"
    AGM = "AGM"
    EGM = "EGM"

    def __str__(self) -> str:
        return self.value


# Which sub‑classes belong to which meeting class
SUB_TYPES = {
    MeetingType.BOARD:   {MeetingSubType.REGULAR, MeetingSubType.COMMITTEE},
    MeetingType.GENERAL: {MeetingSubType.AGM, MeetingSubType.EGM},
}


class FilingStatus(Enum):
    """Progress of a regulatory filing."""
    PENDING = "Pending"
    FILED = "Filed"
    DELAYED = "Delayed"

    def __str__(self) -> str:
        return self.value


def split_agenda(text: str) -> List[str]:
    """
    Turn multi‑line agenda text into agenda items.

    Only ``\\n`` separates items; a single trailing ``\\r`` is dropped so
    CRLF text splits the same way.  Blank (whitespace‑only) lines are
    dropped; the remaining lines are kept verbatim, in order.

    >>> split_agenda("Item1\\n\\nItem2\\n")
    ['Item1', 'Item2']
    """
    lines = (line[:-1] if line.endswith("\r") else line for line in text.split("\n"))
    return [line for line in lines if line.strip()]


@dataclass
class CompanyProfile:
    """
    The company whose records are being kept.

    Parameters
    ----------
    name : str
        Legal name (e.g. "Acme Pvt Ltd").
    cin : str
        Corporate Identity Number, 21 characters starting with ``U``.
    incorporation_date : datetime.date
    registered_address : str
    authorized_capital : decimal.Decimal
    paid_up_capital : decimal.Decimal
        Should not exceed *authorized_capital*; see
        :func:`cosec.validation.check_state`.
    email : str
    phone : str
    financial_year_end : datetime.date
    website : str | None, default=None
    id : str | None
        Assigned by the store.
    """
    name: str
    cin: str
    incorporation_date: date
    registered_address: str
    authorized_capital: Decimal
    paid_up_capital: Decimal
    email: str
    phone: str
    financial_year_end: date
    website: Optional[str] = None
    id: Optional[str] = None


@dataclass
class Director:
    """A director on the board, identified by DIN."""
    name: str
    din: str
    pan: str
    date_of_birth: date
    date_of_appointment: date
    residential_address: str
    email: str
    phone: str
    designation: str
    id: Optional[str] = None


@dataclass
class Member:
    """A shareholder entry in the register of members."""
    name: str
    folio_number: str
    pan: str
    address: str
    email: str
    phone: str
    number_of_shares: int
    percentage_holding: float
    id: Optional[str] = None


@dataclass
class MeetingDocument:
    """
    A board or general meeting.

    *agenda* may be given as multi‑line text; it is split with
    :func:`split_agenda` on construction.  *generated_on* is stamped by the
    store when the meeting is first added and is not refreshed by updates.
    """
    meeting_type: MeetingType
    title: str
    date: date
    time: str
    venue: str
    agenda: Union[List[str], str] = field(default_factory=list)
    sub_type: Optional[MeetingSubType] = None
    id: Optional[str] = None
    generated_on: Optional[datetime] = None
    document_path: Optional[str] = None

    def __post_init__(self):
        if isinstance(self.agenda, str):
            self.agenda = split_agenda(self.agenda)


@dataclass
class FilingReport:
    """A ROC filing tracked against its due date."""
    name: str
    form_number: str
    due_date: date
    status: FilingStatus = FilingStatus.PENDING
    filing_date: Optional[date] = None
    id: Optional[str] = None
    document_path: Optional[str] = None


@dataclass
class CompanyState:
    """The whole aggregate: profile (or ``None``) plus the four collections."""
    company_details: Optional[CompanyProfile] = None
    directors: List[Director] = field(default_factory=list)
    members: List[Member] = field(default_factory=list)
    meetings: List[MeetingDocument] = field(default_factory=list)
    filings: List[FilingReport] = field(default_factory=list)

    def is_empty(self) -> bool:
        return self.company_details is None and not (
            self.directors or self.members or self.meetings or self.filings
        )
