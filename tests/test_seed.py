"""
tests/test_seed.py
==================

The sample data script populates a store end to end.
"""

from datetime import date

from cosec.compliance import summarize
from cosec.store import CompanyStore
from cosec.validation import check_state

from seed_database import SAMPLE_COMPANY, seed_database


def test_seed_populates_store(storage):
    store = CompanyStore(storage)
    assert seed_database(store, today=date(2025, 6, 1)) == 0

    reloaded = CompanyStore(storage)
    s = summarize(reloaded.state, date(2025, 6, 1))
    assert s.company_name == SAMPLE_COMPANY.name
    assert (s.directors, s.members, s.meetings, s.filings) == (3, 2, 2, 3)
    assert s.compliance_percentage == 33
    assert [f.form_number for f in s.upcoming] == ["MGT-7"]
    assert check_state(reloaded.state) == []
