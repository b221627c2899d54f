"""Quarter x category aggregation of ACV records.

Quarters come out in ascending lexical order, categories in the order they are
first seen in the input. Every (quarter, category) pair of the cross-product has
a cell, zero-filled when no record matches it. Negative `acv` or `count` values
are summed as-is.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Sequence, Tuple, Union

import pandas as pd

from core.records import CategoryKind, Record, parse_records, resolve_selector


@dataclass(frozen=True)
class AggregationCell:
    opp_count: int = 0
    acv: float = 0.0
    percent_of_quarter: float = 0.0


@dataclass(frozen=True)
class CategoryTotal:
    category: str
    total_opp_count: int = 0
    total_acv: float = 0.0
    percent_of_grand_total: float = 0.0


@dataclass(frozen=True)
class QuarterTotal:
    quarter: str
    opp_count: int = 0
    acv: float = 0.0
    # A quarter is always 100% of itself.
    percent_of_total: float = 100.0


@dataclass(frozen=True)
class GrandTotal:
    opp_count: int = 0
    acv: float = 0.0
    percent: float = 100.0


@dataclass(frozen=True)
class Aggregation:
    kind: CategoryKind
    quarters: List[str] = field(default_factory=list)
    categories: List[str] = field(default_factory=list)
    cells: Dict[Tuple[str, str], AggregationCell] = field(default_factory=dict)
    category_totals: Dict[str, CategoryTotal] = field(default_factory=dict)
    quarter_totals: Dict[str, QuarterTotal] = field(default_factory=dict)
    grand_total: GrandTotal = field(default_factory=GrandTotal)

    def cell(self, quarter: str, category: str) -> AggregationCell:
        return self.cells[(quarter, category)]

    @property
    def is_empty(self) -> bool:
        return not self.quarters


def percent_of(value: float, total: float) -> float:
    """Return `value` as a percentage of `total`; 0.0 when `total` is zero."""
    if not total:
        return 0.0
    return float(value) / float(total) * 100.0


def aggregate_records(records: Sequence[Record], kind: Union[CategoryKind, str]) -> Aggregation:
    kind = resolve_selector(kind)
    if not records:
        return Aggregation(kind=kind)

    frame = pd.DataFrame(
        {
            "quarter": [r.quarter for r in records],
            "category": [r.category for r in records],
            "acv": [float(r.acv) for r in records],
            "count": [int(r.count) for r in records],
        }
    )
    quarters = sorted(frame["quarter"].unique().tolist())
    categories = list(dict.fromkeys(frame["category"].tolist()))

    index = pd.MultiIndex.from_product([quarters, categories], names=["quarter", "category"])
    grid = (
        frame.groupby(["quarter", "category"], sort=False)[["acv", "count"]]
        .sum()
        .reindex(index, fill_value=0)
    )

    acv = {key: float(value) for key, value in zip(grid.index, grid["acv"])}
    count = {key: int(value) for key, value in zip(grid.index, grid["count"])}

    # Totals are left-to-right sums of the cells in display order: a quarter over
    # categories, a category over quarters. Stacked offsets add up the same way.
    quarter_totals = {
        q: QuarterTotal(
            quarter=q,
            opp_count=sum(count[(q, c)] for c in categories),
            acv=float(sum(acv[(q, c)] for c in categories)),
        )
        for q in quarters
    }
    grand_total = GrandTotal(
        opp_count=sum(t.opp_count for t in quarter_totals.values()),
        acv=float(sum(t.acv for t in quarter_totals.values())),
    )

    # Denominators are final before any percentage is taken.
    cells: Dict[Tuple[str, str], AggregationCell] = {
        (q, c): AggregationCell(
            opp_count=count[(q, c)],
            acv=acv[(q, c)],
            percent_of_quarter=percent_of(acv[(q, c)], quarter_totals[q].acv),
        )
        for q in quarters
        for c in categories
    }

    category_totals = {}
    for category in categories:
        total_acv = float(sum(acv[(q, category)] for q in quarters))
        category_totals[category] = CategoryTotal(
            category=category,
            total_opp_count=sum(count[(q, category)] for q in quarters),
            total_acv=total_acv,
            percent_of_grand_total=percent_of(total_acv, grand_total.acv),
        )

    return Aggregation(
        kind=kind,
        quarters=quarters,
        categories=categories,
        cells=cells,
        category_totals=category_totals,
        quarter_totals=quarter_totals,
        grand_total=grand_total,
    )


def aggregate(rows: Iterable[Mapping[str, Any]], selector: Union[CategoryKind, str]) -> Aggregation:
    """Parse raw dataset rows with `selector` and aggregate them.

    Raises:
        InvalidCategorySelector: if the selector is unknown or a row lacks the
            selected category field.
        MalformedRow: if a row has no fiscal quarter.
    """
    kind = resolve_selector(selector)
    return aggregate_records(parse_records(rows, kind), kind)
