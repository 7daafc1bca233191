"""
tests/test_lifecycle.py
=======================

Unit tests for cosec.lifecycle.advance_filing
"""

from datetime import date

import pytest

from cosec.lifecycle import advance_filing, is_overdue
from cosec.models import FilingStatus

from factories import filing


def test_good_transition_records_filing_date():
    """Pending → Filed should succeed and stamp the filing date."""
    f = filing()
    filed = advance_filing(f, FilingStatus.FILED, date(2025, 11, 20))
    assert filed.status is FilingStatus.FILED
    assert filed.filing_date == date(2025, 11, 20)
    # original untouched
    assert f.status is FilingStatus.PENDING


def test_delayed_then_filed():
    f = advance_filing(filing(), FilingStatus.DELAYED)
    assert f.filing_date is None
    assert advance_filing(f, FilingStatus.FILED).filing_date == date.today()


def test_illegal_transition_raises():
    """Filed → Pending is not allowed and should raise ValueError."""
    f = filing(status=FilingStatus.FILED, filing_date=date(2025, 1, 1))
    with pytest.raises(ValueError):
        advance_filing(f, FilingStatus.PENDING)


def test_transition_through_store(store):
    fid = store.add_filing(filing()).record_id
    store.update_filing(fid, advance_filing(store.get_filing(fid), FilingStatus.FILED, date(2025, 11, 1)))
    assert store.get_filing(fid).status is FilingStatus.FILED
    assert store.get_filing(fid).id == fid


def test_is_overdue():
    f = filing(due=date(2025, 6, 1))
    assert is_overdue(f, date(2025, 6, 2))
    assert not is_overdue(f, date(2025, 6, 1))
    assert not is_overdue(filing(due=date(2025, 6, 1), status=FilingStatus.DELAYED), date(2025, 7, 1))
