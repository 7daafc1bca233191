#!/usr/bin/env python
"""
Seed the store with a sample company for testing.

Creates a company profile, directors, members, meetings and filings so
the documents and compliance figures have something to show.
"""

import sys
from datetime import date, timedelta
from decimal import Decimal

from cosec.models import (
    CompanyProfile,
    Director,
    FilingReport,
    FilingStatus,
    MeetingDocument,
    MeetingSubType,
    MeetingType,
    Member,
)
from cosec.store import CompanyStore

SAMPLE_COMPANY = CompanyProfile(
    name="Acme Pvt Ltd",
    cin="U12345MH2020PTC123456",
    incorporation_date=date(2020, 1, 15),
    registered_address="12 Marine Drive, Mumbai",
    authorized_capital=Decimal("1000000"),
    paid_up_capital=Decimal("500000"),
    email="secretary@acme.example",
    phone="+91 98200 12345",
    financial_year_end=date(2025, 3, 31),
    website="https://acme.example",
)

SAMPLE_DIRECTORS = [
    Director("Asha Mehta", "01234567", "ABCDE1234F", date(1975, 4, 2), date(2020, 1, 15),
             "4 Hill Road, Mumbai", "asha@acme.example", "9820011111", "Managing Director"),
    Director("Ravi Iyer", "07654321", "PQRSX6789K", date(1980, 9, 12), date(2020, 1, 15),
             "8 Lake View, Pune", "ravi@acme.example", "9820022222", "Director"),
    Director("Meera Nair", "02468135", "LMNOP2468Q", date(1985, 2, 28), date(2022, 6, 1),
             "21 Park Street, Kolkata", "meera@acme.example", "9820033333", "Independent Director"),
]

SAMPLE_MEMBERS = [
    Member("Asha Mehta", "F-001", "ABCDE1234F", "4 Hill Road, Mumbai",
           "asha@acme.example", "9820011111", 30000, 60.0),
    Member("Ravi Iyer", "F-002", "PQRSX6789K", "8 Lake View, Pune",
           "ravi@acme.example", "9820022222", 20000, 40.0),
]


def sample_meetings():
    return [
        MeetingDocument(MeetingType.BOARD, "Quarterly Board Meeting", date(2025, 5, 20), "11:00",
                        "Board Room, 12 Marine Drive, Mumbai",
                        "Approval of audited accounts\nAppointment of statutory auditor\n",
                        sub_type=MeetingSubType.REGULAR),
        MeetingDocument(MeetingType.GENERAL, "Annual General Meeting", date(2025, 9, 25), "10:30",
                        "Registered Office, 12 Marine Drive, Mumbai",
                        "Adoption of financial statements\nDeclaration of dividend",
                        sub_type=MeetingSubType.AGM),
    ]


def sample_filings(today: date):
    return [
        FilingReport("Annual Return", "MGT-7", today + timedelta(days=20)),
        FilingReport("Financial Statements", "AOC-4", today + timedelta(days=5),
                     status=FilingStatus.FILED, filing_date=today),
        FilingReport("Appointment of Auditor", "ADT-1", today - timedelta(days=10),
                     status=FilingStatus.DELAYED),
    ]


def seed_database(store: CompanyStore, today: date = None) -> int:
    """Add the sample records to *store*; return the number of failed writes."""
    today = today or date.today()
    results = [store.set_company_profile(SAMPLE_COMPANY)]
    results += [store.add_director(d) for d in SAMPLE_DIRECTORS]
    results += [store.add_member(m) for m in SAMPLE_MEMBERS]
    results += [store.add_meeting(m) for m in sample_meetings()]
    results += [store.add_filing(f) for f in sample_filings(today)]

    failed = sum(1 for r in results if not r.ok)
    print(f"Added {len(results) - failed} records for {SAMPLE_COMPANY.name}")
    return failed


if __name__ == "__main__":
    from cosec.db import SQLiteStorage

    print("Ensuring database tables exist...")
    store = CompanyStore(SQLiteStorage())

    print("Seeding database with a sample company...")
    store.clear()
    failed = seed_database(store)
    if failed:
        print(f"{failed} writes failed")
        sys.exit(1)

    print("\nDone! Inspect the data with:")
    print("python -m cosec.db --show")
