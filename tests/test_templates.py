"""
tests/test_templates.py
=======================

Rendered text of the notices, minutes and annual return.
"""

from datetime import date
from decimal import Decimal

from cosec.templates import (
    agm_notice,
    annual_return,
    board_meeting_minutes,
    board_meeting_notice,
    filing_form_document,
    form_description,
    grouped,
    long_date,
    meeting_place,
    short_date,
)

from factories import company, director, filing, meeting, member

TODAY = date(2025, 2, 20)


def test_date_formats():
    assert long_date(date(2025, 3, 5)) == "5 March 2025"
    assert short_date(date(2025, 3, 5)) == "05/03/2025"


def test_grouped_numbers():
    assert grouped(Decimal("1000000")) == "1,000,000"
    assert grouped(1234567) == "1,234,567"
    assert grouped(Decimal("2500.50")) == "2,500.50"


def test_board_notice():
    text = board_meeting_notice(company(), meeting(agenda=["Accounts", "Auditor"]), today=TODAY)

    assert text.startswith("NOTICE OF BOARD MEETING\n")
    assert "CIN: U12345MH2020PTC123456" in text
    assert "Registered Office: 12 Marine Drive, Mumbai" in text
    assert "Date: 20/02/2025" in text
    assert "will be held on 5 March 2025 at 10:30 at Board Room, 12 Marine Drive, Mumbai" in text
    assert "AGENDA:\n1. Accounts\n2. Auditor\n" in text


def test_agenda_rendered_verbatim_and_in_order():
    items = ["  Zeta item", "Alpha item"]
    text = board_meeting_notice(company(), meeting(agenda=items), today=TODAY)
    assert "1.   Zeta item\n2. Alpha item" in text


def test_minutes_with_fewer_than_three_directors():
    text = board_meeting_minutes(company(), meeting(), [director("Asha", "Managing Director")])

    assert text.startswith("MINUTES OF THE MEETING OF BOARD OF DIRECTORS OF ACME PVT LTD\n")
    assert "HELD ON 5 MARCH 2025 AT 10:30 AT BOARD ROOM, 12 MARINE DRIVE, MUMBAI" in text
    assert "PRESENT:\nAsha - Managing Director\n\n" in text
    assert "CHAIRPERSON:\nAsha\n" in text


def test_minutes_without_directors_uses_placeholder_chair():
    text = board_meeting_minutes(company(), meeting(agenda=["Accounts"]), [])
    assert "CHAIRPERSON:\nThe Director\n" in text
    assert "ITEM 1: Accounts\nThe Board discussed and approved Accounts." in text


def test_agm_notice():
    text = agm_notice(company(), meeting(venue="Registered Office, Mumbai", agenda=["Adopt accounts"]),
                      today=TODAY)

    assert text.startswith("NOTICE OF ANNUAL GENERAL MEETING\n")
    assert "ORDINARY BUSINESS:\n1. Adopt accounts\n" in text
    assert "Place: Mumbai\nDate: 20/02/2025\n" in text
    assert "APPOINT A PROXY" in text
    assert "(BOTH DAYS INCLUSIVE)" in text


def test_meeting_place():
    assert meeting_place("Hall 2, Nariman Point, Mumbai ") == "Mumbai"
    assert meeting_place("Mumbai") == "Mumbai"
    assert meeting_place("") == ""


def test_annual_return_sections():
    directors = [director("A", "Managing Director"), director("B", din="07654321")]
    members = [member("M1", shares=30000, pct=60.0, folio="F-001"),
               member("M2", shares=20000, pct=40.0, folio="F-002")]

    text = annual_return(company(), directors, members, today=TODAY)

    assert text.startswith("ANNUAL RETURN\n[FORM MGT-7]\n")
    assert "For the financial year ended: 2025-03-31" in text
    assert "Prepared on: 20/02/2025" in text
    assert "Website: N/A" in text
    assert "Authorized Capital: Rs. 1,000,000" in text
    assert "Paid-up Capital: Rs. 500,000" in text
    assert "   1. Name: A\n      DIN: 01234567\n      Designation: Managing Director\n" in text
    assert "   2. Name: B\n      DIN: 07654321" in text
    assert "      Shares: 30,000 (60%)" in text
    assert "   2. Name: M2\n      Folio Number: F-002" in text
    assert "Total Number of Directors: 2" in text
    assert "Total Number of Members: 2" in text
    assert "Total Number of Shares: 50,000" in text


def test_annual_return_website_present():
    text = annual_return(company(website="https://acme.example"), [], [], today=TODAY)
    assert "Website: https://acme.example" in text
    assert "Total Number of Shares: 0" in text


def test_annual_return_is_deterministic():
    args = (company(), [director("A")], [member("M")])
    assert annual_return(*args, today=TODAY) == annual_return(*args, today=TODAY)


def test_form_helpers():
    assert form_description("AOC-4") == "Financial Statements"
    assert form_description("XYZ-1") == "XYZ-1"

    text = filing_form_document(company(), filing("Appointment of Auditor", "ADT-1"))
    assert text.startswith("FORM ADT-1\nAppointment of Auditor\n")
    assert "placeholder for the ADT-1 form content" in text
