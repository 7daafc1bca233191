"""
tests/test_snapshot.py
======================

Versioned snapshot format and the legacy-browser migration.
"""

import json
from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from cosec.errors import SnapshotError
from cosec.models import CompanyState, FilingStatus, MeetingSubType, MeetingType
from cosec.snapshot import SCHEMA_VERSION, dump_state, load_state

from factories import company, director, filing, meeting, member


def _state():
    return CompanyState(
        company_details=company(id="c1", website="https://acme.example"),
        directors=[director("A", id="d1")],
        members=[member("M", id="m1", pct=12.5)],
        meetings=[meeting(id="g1", generated_on=datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc))],
        filings=[filing(id="f1", status=FilingStatus.FILED, filing_date=date(2025, 10, 1))],
    )


def test_dump_carries_version_and_round_trips():
    text = dump_state(_state())
    raw = json.loads(text)

    assert raw["version"] == SCHEMA_VERSION
    assert raw["state"]["filings"][0]["status"] == "Filed"
    assert load_state(text) == _state()


def test_empty_state_round_trips():
    assert load_state(dump_state(CompanyState())) == CompanyState()


@pytest.mark.parametrize("text", [
    "",
    "{broken",
    "[]",
    '{"version": 1, "state": {"directors": 3}}',
    # legacy payloads with the wrong shape
    '{"directors": [1]}',
    '{"companyDetails": "x"}',
    '{"directors": "abc"}',
    '{"members": {"name": "M"}}',
])
def test_unreadable_payloads_raise(text):
    with pytest.raises(SnapshotError):
        load_state(text)


def test_newer_version_rejected():
    raw = json.loads(dump_state(CompanyState()))
    raw["version"] = SCHEMA_VERSION + 1
    with pytest.raises(SnapshotError):
        load_state(json.dumps(raw))


def test_legacy_browser_payload_is_migrated():
    legacy = {
        "companyDetails": {
            "id": "abc123",
            "name": "Acme Pvt Ltd",
            "cin": "U12345MH2020PTC123456",
            "registrationDate": "2020-01-15",
            "registeredAddress": "12 Marine Drive, Mumbai",
            "authorizedCapital": 1000000,
            "paidUpCapital": 500000,
            "email": "cs@acme.example",
            "phone": "9820012345",
            "website": "",
            "financialYearEnd": "2025-03-31",
        },
        "directors": [],
        "members": [{
            "id": "m1", "name": "Ravi", "folioNumber": "F-002", "pan": "PQRSX6789K",
            "address": "8 Lake View, Pune", "email": "r@acme.example", "phone": "9820022222",
            "numberOfShares": 2000, "percentageHolding": 20,
        }],
        "meetings": [{
            "id": "g1", "type": "General", "subType": "AGM", "title": "AGM 2025",
            "date": "2025-09-25", "time": "10:30", "venue": "Registered Office, Mumbai",
            "agenda": ["Adoption of accounts"], "generatedOn": "2025-08-01T10:00:00.000Z",
        }],
        "filings": [{
            "id": "f1", "name": "Annual Return", "formNumber": "MGT-7",
            "dueDate": "2025-11-29", "status": "Pending",
        }],
    }

    state = load_state(json.dumps(legacy))

    assert state.company_details.id == "abc123"
    assert state.company_details.incorporation_date == date(2020, 1, 15)
    assert state.company_details.authorized_capital == Decimal("1000000")
    assert state.company_details.website is None
    assert state.members[0].folio_number == "F-002"
    assert state.meetings[0].meeting_type is MeetingType.GENERAL
    assert state.meetings[0].sub_type is MeetingSubType.AGM
    assert state.meetings[0].generated_on == datetime(2025, 8, 1, 10, tzinfo=timezone.utc)
    assert state.filings[0].status is FilingStatus.PENDING
