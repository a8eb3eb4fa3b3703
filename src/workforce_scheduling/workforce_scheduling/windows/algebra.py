"""Interval-set operations over half-open time windows."""

from __future__ import annotations

from typing import Iterable, List

from .model import TimeWindow


def overlaps(a: TimeWindow, b: TimeWindow) -> bool:
    """True iff the windows share an instant. Touching endpoints do not overlap."""
    return a.start < b.end and a.end > b.start


def contains(outer: TimeWindow, inner: TimeWindow) -> bool:
    return outer.start <= inner.start and inner.end <= outer.end


def merge(windows: Iterable[TimeWindow]) -> List[TimeWindow]:
    """Fold overlapping or adjacent windows into a minimal ascending list."""
    ordered = sorted(windows, key=lambda w: w.start)
    out: List[TimeWindow] = []
    for w in ordered:
        if out and w.start <= out[-1].end:
            last = out[-1]
            out[-1] = TimeWindow(last.start, max(last.end, w.end))
        else:
            out.append(w)
    return out


def subtract(base: Iterable[TimeWindow], cuts: Iterable[TimeWindow]) -> List[TimeWindow]:
    """Remove every cut from the base windows.

    The base is normalized first, then cuts are applied one after another
    against the current remainder. Remainders are not merged again.
    """
    result = merge(base)
    for cut in cuts:
        remainder: List[TimeWindow] = []
        for w in result:
            if not overlaps(w, cut):
                remainder.append(w)
                continue
            if w.start < cut.start:
                remainder.append(TimeWindow(w.start, cut.start))
            if w.end > cut.end:
                remainder.append(TimeWindow(cut.end, w.end))
        result = remainder
    return result
