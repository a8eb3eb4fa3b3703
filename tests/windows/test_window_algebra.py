from __future__ import annotations

from datetime import datetime

from src.workforce_scheduling.workforce_scheduling.windows.algebra import contains, merge, overlaps, subtract
from src.workforce_scheduling.workforce_scheduling.windows.model import TimeWindow


def w(start: str, end: str) -> TimeWindow:
    day = "2026-03-02"
    return TimeWindow(datetime.fromisoformat(f"{day}T{start}"), datetime.fromisoformat(f"{day}T{end}"))


def test_touching_windows_do_not_overlap():
    assert not overlaps(w("09:00", "12:00"), w("12:00", "15:00"))
    assert overlaps(w("09:00", "12:01"), w("12:00", "15:00"))


def test_merge_empty_is_empty():
    assert merge([]) == []


def test_merge_folds_overlapping_and_adjacent_windows():
    merged = merge([w("13:00", "14:00"), w("09:00", "10:00"), w("09:30", "11:00"), w("11:00", "12:00")])

    assert merged == [w("09:00", "12:00"), w("13:00", "14:00")]


def test_merge_keeps_longest_end_when_contained():
    assert merge([w("08:00", "18:00"), w("09:00", "10:00")]) == [w("08:00", "18:00")]


def test_merge_is_sorted_non_overlapping_and_idempotent():
    windows = [w("15:00", "16:00"), w("08:00", "09:00"), w("08:30", "10:00"), w("20:00", "21:00"), w("15:30", "15:45")]

    merged = merge(windows)

    assert merged == sorted(merged, key=lambda x: x.start)
    for a, b in zip(merged, merged[1:]):
        assert a.end < b.start
    assert merge(merged) == merged


def test_subtract_splits_window_around_cut():
    assert subtract([w("09:00", "17:00")], [w("12:00", "13:00")]) == [w("09:00", "12:00"), w("13:00", "17:00")]


def test_subtract_drops_fully_covered_windows():
    assert subtract([w("10:00", "11:00"), w("14:00", "15:00")], [w("09:00", "12:00")]) == [w("14:00", "15:00")]


def test_subtract_applies_cuts_sequentially():
    result = subtract([w("08:00", "18:00")], [w("09:00", "10:00"), w("12:00", "13:00"), w("17:00", "19:00")])

    assert result == [w("08:00", "09:00"), w("10:00", "12:00"), w("13:00", "17:00")]


def test_subtract_self_is_empty_and_nothing_is_merge():
    windows = [w("09:00", "10:00"), w("09:30", "11:00"), w("13:00", "14:00")]

    assert subtract(windows, windows) == []
    assert subtract(windows, []) == merge(windows)


def test_contains_requires_full_inclusion():
    window = w("08:00", "09:30")

    assert contains(window, w("08:30", "09:15"))
    assert contains(window, window)
    assert not contains(window, w("09:00", "10:00"))
