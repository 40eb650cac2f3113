"""Cherry filter: candidates strictly better than their same-expiry neighbour.

A row is a cherry when, compared with the row just before it in the same
expiry, it sits closer to the money (smaller |percentage_from_strike|) and
pays a strictly higher premium.
"""
from __future__ import annotations

from itertools import groupby
from typing import List, Literal, Sequence

from .data_models import AnalysisResult

CherryMode = Literal["grouped", "sequential"]


def _dominates(curr: AnalysisResult, prev: AnalysisResult) -> bool:
    return (abs(curr.percentage_from_strike) < abs(prev.percentage_from_strike)
            and curr.bid > prev.bid)


def _adjacent_cherries(rows: Sequence[AnalysisResult]) -> List[AnalysisResult]:
    return [curr for prev, curr in zip(rows, rows[1:]) if _dominates(curr, prev)]


def filter_cherries_sequential(options: Sequence[AnalysisResult]) -> List[AnalysisResult]:
    """Legacy scan over the list as given; caller must pre-sort by expiry, strike."""
    options = list(options)
    return [
        curr for prev, curr in zip(options, options[1:])
        if curr.exp_date_str == prev.exp_date_str and _dominates(curr, prev)
    ]


def filter_cherries_grouped(options: Sequence[AnalysisResult]) -> List[AnalysisResult]:
    ordered = sorted(options, key=lambda o: (o.exp_date_str, o.strike_price))
    cherries = []
    for _, group in groupby(ordered, key=lambda o: o.exp_date_str):
        cherries.extend(_adjacent_cherries(list(group)))
    return cherries


def filter_cherries(options: Sequence[AnalysisResult], mode: CherryMode = "grouped") -> List[AnalysisResult]:
    if mode == "grouped":
        return filter_cherries_grouped(options)
    if mode == "sequential":
        return filter_cherries_sequential(options)
    raise ValueError(f"Unknown cherry mode: {mode!r}")
