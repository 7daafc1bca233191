"""
tests/test_validation.py
========================

Input forms (pydantic) and the business-policy pass.
"""

from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from cosec.models import CompanyState, FilingStatus, MeetingSubType, MeetingType
from cosec.validation import (
    CompanyProfileForm,
    DirectorForm,
    FilingForm,
    MeetingForm,
    MemberForm,
    check_state,
)

from factories import company, director, member

PROFILE_INPUT = dict(
    name="Acme Pvt Ltd",
    cin="U12345MH2020PTC123456",
    incorporation_date="2020-01-15",
    registered_address="12 Marine Drive, Mumbai",
    authorized_capital="1000000",
    paid_up_capital="500000",
    email="cs@acmecorp.in",
    phone="+91 98200 12345",
    financial_year_end="2025-03-31",
    website="",
)


def test_profile_form_to_record():
    rec = CompanyProfileForm(**PROFILE_INPUT).to_record()
    assert rec.incorporation_date == date(2020, 1, 15)
    assert rec.authorized_capital == Decimal("1000000")
    assert rec.website is None
    assert rec.id is None


@pytest.mark.parametrize("cin", [
    "L12345MH2020PTC123456",   # must start with U
    "U12345MH2020PTC12345",    # 20 chars
    "U12345mh2020PTC123456",   # lower case
])
def test_profile_form_rejects_bad_cin(cin):
    with pytest.raises(ValidationError):
        CompanyProfileForm(**{**PROFILE_INPUT, "cin": cin})


@pytest.mark.parametrize("field,value", [
    ("authorized_capital", "0"),
    ("email", "not-an-email"),
    ("phone", "12345"),
    ("website", "not a url"),
])
def test_profile_form_field_rules(field, value):
    with pytest.raises(ValidationError):
        CompanyProfileForm(**{**PROFILE_INPUT, field: value})


def test_director_form():
    data = dict(
        name="Asha Mehta", din="01234567", pan="ABCDE1234F",
        date_of_birth="1975-04-02", date_of_appointment="2020-01-15",
        residential_address="4 Hill Road, Mumbai", email="asha@acmecorp.in",
        phone="9820011111", designation="Managing Director",
    )
    assert DirectorForm(**data).to_record().din == "01234567"
    with pytest.raises(ValidationError):
        DirectorForm(**{**data, "din": "123"})
    with pytest.raises(ValidationError):
        DirectorForm(**{**data, "pan": "ABCDE1234"})


def test_member_form_limits():
    data = dict(
        name="Ravi Iyer", folio_number="F-002", pan="PQRSX6789K",
        address="8 Lake View, Pune", email="ravi@acmecorp.in", phone="9820022222",
        number_of_shares=2000, percentage_holding=20,
    )
    assert MemberForm(**data).to_record().percentage_holding == 20.0
    with pytest.raises(ValidationError):
        MemberForm(**{**data, "number_of_shares": 0})
    with pytest.raises(ValidationError):
        MemberForm(**{**data, "percentage_holding": 101})


def test_meeting_form_splits_agenda_and_checks_sub_type():
    data = dict(
        meeting_type="Board", sub_type="Regular", title="Board Meeting",
        date="2025-03-05", time="10:30", venue="Board Room, Mumbai",
        agenda="Item1\n\nItem2\n",
    )
    rec = MeetingForm(**data).to_record()
    assert rec.meeting_type is MeetingType.BOARD
    assert rec.sub_type is MeetingSubType.REGULAR
    assert rec.agenda == ["Item1", "Item2"]

    with pytest.raises(ValidationError):
        MeetingForm(**{**data, "sub_type": "AGM"})


def test_filing_form_filing_date_only_when_filed():
    data = dict(name="Annual Return", form_number="MGT-7", due_date="2025-11-29")
    assert FilingForm(**data, filing_date="").to_record().filing_date is None

    filed = FilingForm(**data, status="Filed", filing_date="2025-11-20").to_record()
    assert filed.status is FilingStatus.FILED
    assert filed.filing_date == date(2025, 11, 20)

    with pytest.raises(ValidationError):
        FilingForm(**data, status="Pending", filing_date="2025-11-20")


def test_policy_pass_clean_state():
    state = CompanyState(
        company_details=company(),
        directors=[director("A", din="01234567"), director("B", din="07654321")],
        members=[member("M1", pct=60, folio="F-1"), member("M2", pct=40, folio="F-2")],
    )
    assert check_state(state) == []


def test_policy_pass_reports_problems():
    state = CompanyState(
        company_details=company(paid_up_capital=Decimal("2000000")),
        directors=[director("A", id="d1"), director("B", id="d2")],
        members=[member("M1", pct=70, id="m1"), member("M2", pct=40, folio="F-2", id="m2")],
    )
    codes = {i.code for i in check_state(state)}
    assert codes == {"paid_up_exceeds_authorized", "holdings_exceed_100", "duplicate_din"}

    dup = next(i for i in check_state(state) if i.code == "duplicate_din")
    assert dup.record_ids == ("d1", "d2")
