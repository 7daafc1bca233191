"""
cosec.validation
================

Checks that sit *in front of* :class:`cosec.store.CompanyStore`, which
itself accepts whatever record it is given.

Two layers:

* **Input forms**: pydantic models with the field rules of the data‑entry
  screens (CIN format, DIN/PAN lengths, email syntax, ...).  Build one from
  raw user input, then call ``to_record()`` to get the dataclass the store
  expects.  Bad input raises :class:`pydantic.ValidationError`.
* **Policy pass**: :func:`check_state` looks across a whole
  :class:`~cosec.models.CompanyState` for business‑rule problems (paid‑up
  above authorized capital, holdings above 100 %, duplicate DINs or folio
  numbers) and *reports* them as :class:`PolicyIssue` values.
"""

from __future__ import annotations

import datetime as dt
import math
from collections import defaultdict
from dataclasses import dataclass
from decimal import Decimal
from typing import Annotated, Dict, Iterable, List, Optional, Tuple

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    EmailStr,
    Field,
    HttpUrl,
    model_validator,
)

from .models import (
    SUB_TYPES,
    CompanyProfile,
    CompanyState,
    Director,
    FilingReport,
    FilingStatus,
    MeetingDocument,
    MeetingSubType,
    MeetingType,
    Member,
    split_agenda,
)

CIN_PATTERN = r"^U[A-Z0-9]{20}$"
MIN_PHONE_DIGITS = 10


def _check_phone(value: str) -> str:
    if sum(ch.isdigit() for ch in value) < MIN_PHONE_DIGITS:
        raise ValueError(f"phone number must have at least {MIN_PHONE_DIGITS} digits")
    return value


def _blank_to_none(value):
    return None if value == "" else value


Phone = Annotated[str, AfterValidator(_check_phone)]
OptionalUrl = Annotated[Optional[HttpUrl], BeforeValidator(_blank_to_none)]
OptionalDate = Annotated[Optional[dt.date], BeforeValidator(_blank_to_none)]


class _Form(BaseModel):
    model_config = ConfigDict(extra="forbid")


# ---------------------------------------------------------------------------
# Input forms
# ---------------------------------------------------------------------------
class CompanyProfileForm(_Form):
    name: str = Field(min_length=1)
    cin: str = Field(min_length=21, max_length=21, pattern=CIN_PATTERN)
    incorporation_date: dt.date
    registered_address: str = Field(min_length=1)
    authorized_capital: Decimal = Field(gt=0)
    paid_up_capital: Decimal = Field(gt=0)
    email: EmailStr
    phone: Phone
    financial_year_end: dt.date
    website: OptionalUrl = None

    def to_record(self) -> CompanyProfile:
        return CompanyProfile(
            name=self.name,
            cin=self.cin,
            incorporation_date=self.incorporation_date,
            registered_address=self.registered_address,
            authorized_capital=self.authorized_capital,
            paid_up_capital=self.paid_up_capital,
            email=str(self.email),
            phone=self.phone,
            financial_year_end=self.financial_year_end,
            website=str(self.website) if self.website else None,
        )


class DirectorForm(_Form):
    name: str = Field(min_length=2)
    din: str = Field(min_length=8, max_length=8)
    pan: str = Field(min_length=10, max_length=10)
    date_of_birth: dt.date
    date_of_appointment: dt.date
    residential_address: str = Field(min_length=5)
    email: EmailStr
    phone: Phone
    designation: str = Field(min_length=2)

    def to_record(self) -> Director:
        return Director(**self.model_dump())


class MemberForm(_Form):
    name: str = Field(min_length=2)
    folio_number: str = Field(min_length=1)
    pan: str = Field(min_length=10, max_length=10)
    address: str = Field(min_length=5)
    email: EmailStr
    phone: Phone
    number_of_shares: int = Field(ge=1)
    percentage_holding: float = Field(ge=0, le=100)

    def to_record(self) -> Member:
        return Member(**self.model_dump())


class MeetingForm(_Form):
    """Meeting input; *agenda* is the raw multi‑line text."""
    meeting_type: MeetingType
    sub_type: MeetingSubType
    title: str = Field(min_length=2)
    date: dt.date
    time: str = Field(min_length=1)
    venue: str = Field(min_length=5)
    agenda: str = Field(min_length=5)

    @model_validator(mode="after")
    def check_sub_type(self) -> "MeetingForm":
        if self.sub_type not in SUB_TYPES[self.meeting_type]:
            raise ValueError(f"{self.sub_type} is not a {self.meeting_type} meeting")
        return self

    def to_record(self) -> MeetingDocument:
        return MeetingDocument(
            meeting_type=self.meeting_type,
            sub_type=self.sub_type,
            title=self.title,
            date=self.date,
            time=self.time,
            venue=self.venue,
            agenda=split_agenda(self.agenda),
        )


class FilingForm(_Form):
    name: str = Field(min_length=2)
    form_number: str = Field(min_length=1)
    due_date: dt.date
    filing_date: OptionalDate = None
    status: FilingStatus = FilingStatus.PENDING

    @model_validator(mode="after")
    def check_filing_date(self) -> "FilingForm":
        if self.filing_date is not None and self.status is not FilingStatus.FILED:
            raise ValueError("a filing date is only recorded once the status is Filed")
        return self

    def to_record(self) -> FilingReport:
        return FilingReport(**self.model_dump())


# ---------------------------------------------------------------------------
# Policy pass
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class PolicyIssue:
    """One business‑rule problem found in the stored data."""
    code: str
    message: str
    record_ids: Tuple[str, ...] = ()


def check_capital(profile: Optional[CompanyProfile]) -> List[PolicyIssue]:
    if profile is None or profile.paid_up_capital <= profile.authorized_capital:
        return []
    return [PolicyIssue(
        "paid_up_exceeds_authorized",
        f"paid-up capital {profile.paid_up_capital} exceeds authorized capital "
        f"{profile.authorized_capital}",
        (profile.id,) if profile.id else (),
    )]


def check_holdings(members: Iterable[Member]) -> List[PolicyIssue]:
    members = list(members)
    total = math.fsum(m.percentage_holding for m in members)
    if total <= 100 + 1e-9:
        return []
    return [PolicyIssue(
        "holdings_exceed_100",
        f"member holdings add up to {total:g}%",
        tuple(m.id for m in members if m.id),
    )]


def _duplicates(records, attr: str, code: str, label: str) -> List[PolicyIssue]:
    seen: Dict[str, List] = defaultdict(list)
    for r in records:
        seen[getattr(r, attr)].append(r)
    return [
        PolicyIssue(code, f"{label} {value} is used by {len(rs)} records", tuple(r.id for r in rs if r.id))
        for value, rs in seen.items()
        if len(rs) > 1
    ]


def check_state(state: CompanyState) -> List[PolicyIssue]:
    """Run every policy check over *state*; an empty list means all clear."""
    return [
        *check_capital(state.company_details),
        *check_holdings(state.members),
        *_duplicates(state.directors, "din", "duplicate_din", "DIN"),
        *_duplicates(state.members, "folio_number", "duplicate_folio", "folio number"),
    ]
