"""
cosec.templates
===============

Plain‑text compliance documents rendered from company records.

Every function here is pure: it reads the records it is given and returns a
string.  Functions that stamp "today" on the document take an optional
*today* argument, so two calls with the same inputs and the same *today*
produce identical text.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import List, Optional, Sequence, Union

from .models import CompanyProfile, Director, FilingReport, MeetingDocument, Member

CURRENCY = "Rs."
MINUTES_ATTENDEES = 3

FORM_DESCRIPTIONS = {
    "MGT-7": "Annual Return",
    "AOC-4": "Financial Statements",
    "DIR-12": "Changes in Directors",
    "MGT-14": "Filing of Resolutions",
    "ADT-1": "Appointment of Auditor",
}


# ---------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------
def long_date(d: date) -> str:
    """``5 March 2025``"""
    return f"{d.day} {d:%B} {d.year}"


def short_date(d: date) -> str:
    """``05/03/2025``"""
    return f"{d:%d/%m/%Y}"


def grouped(value: Union[int, float, Decimal]) -> str:
    """Thousands‑grouped number: ``1000000`` → ``1,000,000``."""
    if isinstance(value, Decimal) and value == value.to_integral_value():
        value = int(value)
    return f"{value:,}"


def _percent(value: float) -> str:
    # 25.0 → "25", 12.5 → "12.5"
    return f"{value:g}"


def _numbered(items: Sequence[str]) -> List[str]:
    return [f"{i}. {item}" for i, item in enumerate(items, start=1)]


def _render(lines: List[str]) -> str:
    return "\n".join(lines) + "\n"


def _header(company: CompanyProfile) -> List[str]:
    return [
        company.name,
        f"CIN: {company.cin}",
        f"Registered Office: {company.registered_address}",
    ]


# ---------------------------------------------------------------------
# Meeting documents
# ---------------------------------------------------------------------
def board_meeting_notice(
    company: CompanyProfile,
    meeting: MeetingDocument,
    today: Optional[date] = None,
) -> str:
    """Notice convening a board meeting, with the numbered agenda."""
    today = today or date.today()
    return _render([
        "NOTICE OF BOARD MEETING",
        "",
        *_header(company),
        "",
        f"Date: {short_date(today)}",
        "",
        f"NOTICE is hereby given that a Meeting of the Board of Directors of "
        f"{company.name} will be held on {long_date(meeting.date)} at {meeting.time} "
        f"at {meeting.venue} to transact the following business:",
        "",
        "AGENDA:",
        *_numbered(meeting.agenda),
        "",
        "By Order of the Board",
        f"For {company.name}",
        "",
        "Company Secretary",
    ])


def board_meeting_minutes(
    company: CompanyProfile,
    meeting: MeetingDocument,
    directors: Sequence[Director],
) -> str:
    """
    Minutes of a board meeting.

    The first three directors (collection order) are recorded as present and
    the first of them chairs; with no directors the chair is
    "The Director".  Each agenda item gets its own resolution paragraph.
    """
    when = long_date(meeting.date)
    present = list(directors[:MINUTES_ATTENDEES])
    chair = present[0].name if present else "The Director"

    lines = [
        f"MINUTES OF THE MEETING OF BOARD OF DIRECTORS OF {company.name.upper()}",
        f"HELD ON {when.upper()} AT {meeting.time} AT {meeting.venue.upper()}",
        "",
        "PRESENT:",
        *[f"{d.name} - {d.designation}" for d in present],
        "",
        "IN ATTENDANCE:",
        "Company Secretary",
        "",
        "CHAIRPERSON:",
        chair,
        "",
        "The Chairperson welcomed the Directors to the Meeting. The requisite quorum "
        "being present, the Chairperson called the Meeting to order.",
        "",
        "MINUTES OF THE PREVIOUS MEETING:",
        "The Minutes of the previous Board Meeting were read and confirmed.",
        "",
        "AGENDA ITEMS:",
    ]
    for i, item in enumerate(meeting.agenda, start=1):
        lines += ["", f"ITEM {i}: {item}", f"The Board discussed and approved {item}."]
    lines += [
        "",
        "CONCLUSION:",
        "There being no other business, the Meeting concluded with a vote of thanks to the Chair.",
        "",
        f"Date: {when}",
        "",
        "_______________________",
        "CHAIRPERSON",
    ]
    return _render(lines)


def meeting_place(venue: str) -> str:
    """Town part of a venue: text after the last comma, trimmed."""
    return venue.rsplit(",", 1)[-1].strip()


def agm_notice(
    company: CompanyProfile,
    meeting: MeetingDocument,
    today: Optional[date] = None,
) -> str:
    """Notice of an Annual General Meeting."""
    today = today or date.today()
    return _render([
        "NOTICE OF ANNUAL GENERAL MEETING",
        "",
        *_header(company),
        "",
        f"NOTICE is hereby given that the Annual General Meeting of {company.name} "
        f"will be held on {long_date(meeting.date)} at {meeting.time} at {meeting.venue} "
        f"to transact the following business:",
        "",
        "ORDINARY BUSINESS:",
        *_numbered(meeting.agenda),
        "",
        "By Order of the Board",
        f"For {company.name}",
        "",
        f"Place: {meeting_place(meeting.venue)}",
        f"Date: {short_date(today)}",
        "",
        "Company Secretary",
        "",
        "Notes:",
        "1. A MEMBER ENTITLED TO ATTEND AND VOTE IS ENTITLED TO APPOINT A PROXY TO "
        "ATTEND AND VOTE INSTEAD OF HIMSELF.",
        "2. THE REGISTER OF MEMBERS AND SHARE TRANSFER BOOKS WILL REMAIN CLOSED FROM "
        "[DATE] TO [DATE] (BOTH DAYS INCLUSIVE).",
    ])


# ---------------------------------------------------------------------
# Annual return (MGT-7)
# ---------------------------------------------------------------------
def annual_return(
    company: CompanyProfile,
    directors: Sequence[Director],
    members: Sequence[Member],
    today: Optional[date] = None,
) -> str:
    """
    Annual return in the layout of form MGT-7.

    Sections: company details, capital structure, directors, shareholders
    and a summary with the totals.  Directors and members are listed in the
    order given.
    """
    today = today or date.today()
    total_shares = sum(m.number_of_shares for m in members)

    lines = [
        "ANNUAL RETURN",
        "[FORM MGT-7]",
        "",
        f"For the financial year ended: {company.financial_year_end.isoformat()}",
        f"Prepared on: {short_date(today)}",
        "",
        "1. COMPANY DETAILS:",
        f"   Name: {company.name}",
        f"   CIN: {company.cin}",
        f"   Registration Date: {company.incorporation_date.isoformat()}",
        f"   Registered Office: {company.registered_address}",
        f"   Email: {company.email}",
        f"   Phone: {company.phone}",
        f"   Website: {company.website or 'N/A'}",
        "",
        "2. CAPITAL STRUCTURE:",
        f"   Authorized Capital: {CURRENCY} {grouped(company.authorized_capital)}",
        f"   Paid-up Capital: {CURRENCY} {grouped(company.paid_up_capital)}",
        "",
        "3. DIRECTORS:",
    ]
    for i, d in enumerate(directors, start=1):
        lines += [
            f"   {i}. Name: {d.name}",
            f"      DIN: {d.din}",
            f"      Designation: {d.designation}",
            f"      Date of Appointment: {d.date_of_appointment.isoformat()}",
        ]
    lines += ["", "4. SHAREHOLDERS:"]
    for i, m in enumerate(members, start=1):
        lines += [
            f"   {i}. Name: {m.name}",
            f"      Folio Number: {m.folio_number}",
            f"      Shares: {grouped(m.number_of_shares)} ({_percent(m.percentage_holding)}%)",
        ]
    lines += [
        "",
        "5. SUMMARY:",
        f"   Total Number of Directors: {len(directors)}",
        f"   Total Number of Members: {len(members)}",
        f"   Total Number of Shares: {grouped(total_shares)}",
    ]
    return _render(lines)


# ---------------------------------------------------------------------
# Other ROC forms
# ---------------------------------------------------------------------
def form_description(form_number: str) -> str:
    """Human name of a ROC form (the form number itself if unknown)."""
    return FORM_DESCRIPTIONS.get(form_number, form_number)


def filing_form_document(company: CompanyProfile, filing: FilingReport) -> str:
    """Placeholder text for forms that have no template of their own."""
    return _render([
        f"FORM {filing.form_number}",
        filing.name,
        "",
        f"Company Name: {company.name}",
        f"CIN: {company.cin}",
        "",
        f"This is a placeholder for the {filing.form_number} form content.",
    ])
