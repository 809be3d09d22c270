from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from conftest import period, utc
from core.domain.models import Period, TimeSheet


A = period(utc(2024, 6, 15, 8), utc(2024, 6, 15, 10))
B = period(utc(2024, 6, 15, 9), utc(2024, 6, 15, 12))
C = period(utc(2024, 6, 15, 10), utc(2024, 6, 15, 11))


def test_overlap_partial():
    assert A.overlap(B) == timedelta(hours=1)


@pytest.mark.parametrize("a, b", [(A, B), (A, C), (B, C), (A, A)])
def test_overlap_is_commutative(a, b):
    assert a.overlap(b) == b.overlap(a)


def test_self_overlap_is_length():
    assert A.overlap(A) == A.end - A.start


def test_touching_intervals_do_not_overlap():
    # half-open: A ends exactly where C starts
    assert A.overlap(C) == timedelta(0)


def test_disjoint_intervals_do_not_overlap():
    later = period(utc(2024, 6, 16, 8), utc(2024, 6, 16, 9))
    assert A.overlap(later) == timedelta(0)


def test_inverted_interval_yields_zero():
    inverted = period(utc(2024, 6, 15, 10), utc(2024, 6, 15, 8))
    assert inverted.overlap(inverted) == timedelta(0)
    assert inverted.overlap(A) == timedelta(0)
    assert inverted.duration == timedelta(0)


def test_contained_interval():
    outer = period(utc(2024, 6, 15), utc(2024, 6, 16))
    assert outer.overlap(B) == B.duration
    assert outer.contains(B)
    assert not B.contains(outer)


def test_period_normalizes_offsets_to_utc():
    plus_two = timezone(timedelta(hours=2))
    p = Period(
        start=datetime(2024, 6, 15, 10, tzinfo=plus_two),
        end=datetime(2024, 6, 15, 12, tzinfo=plus_two),
    )
    assert p.start == utc(2024, 6, 15, 8)
    assert p.start.utcoffset() == timedelta(0)


def test_period_rejects_naive_datetimes():
    with pytest.raises(ValidationError):
        Period(start=datetime(2024, 6, 15, 8), end=datetime(2024, 6, 15, 9))


def test_period_is_immutable():
    with pytest.raises(ValidationError):
        A.start = utc(2024, 1, 1)


def test_time_sheet_defaults_to_idle():
    sheet = TimeSheet()
    assert sheet.periods == []
    assert sheet.active_period_start is None
    assert not sheet.is_tracking
    assert sheet.active_period(utc(2024, 6, 15)) is None


def test_active_period_is_closed_at_now():
    sheet = TimeSheet(active_period_start=utc(2024, 6, 15, 8))
    active = sheet.active_period(utc(2024, 6, 15, 9))
    assert active == period(utc(2024, 6, 15, 8), utc(2024, 6, 15, 9))
    assert sheet.is_tracking
