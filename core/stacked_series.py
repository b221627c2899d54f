from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from core.aggregate import Aggregation
from core.data import format_thousands

DEFAULT_Y_MAX = 1000.0


@dataclass(frozen=True)
class StackSegment:
    category: str
    start: float
    end: float
    value: float
    percent_of_quarter: float


@dataclass(frozen=True)
class StackedBar:
    quarter: str
    segments: List[StackSegment]
    total: float
    total_label: str


@dataclass(frozen=True)
class StackedSeries:
    quarters: List[str] = field(default_factory=list)
    categories: List[str] = field(default_factory=list)
    bars: List[StackedBar] = field(default_factory=list)
    y_max: float = DEFAULT_Y_MAX


def project_stacked_series(aggregation: Aggregation) -> StackedSeries:
    """Stack each quarter's category ACV in the aggregation's category order.

    Zero-ACV categories keep a zero-height segment so a category sits at the
    same stack position (and colour) in every quarter.
    """
    bars: List[StackedBar] = []
    for quarter in aggregation.quarters:
        segments: List[StackSegment] = []
        offset = 0.0
        for category in aggregation.categories:
            cell = aggregation.cell(quarter, category)
            segments.append(
                StackSegment(
                    category=category,
                    start=offset,
                    end=offset + cell.acv,
                    value=cell.acv,
                    percent_of_quarter=cell.percent_of_quarter,
                )
            )
            offset += cell.acv
        total = aggregation.quarter_totals[quarter].acv
        bars.append(StackedBar(quarter=quarter, segments=segments, total=total, total_label=format_thousands(total)))

    tops = [seg.end for bar in bars for seg in bar.segments]
    y_max = max(tops) if tops and max(tops) > 0 else DEFAULT_Y_MAX

    return StackedSeries(
        quarters=list(aggregation.quarters),
        categories=list(aggregation.categories),
        bars=bars,
        y_max=y_max,
    )
