from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

import pandas as pd

from core.aggregate import Aggregation
from core.data import format_currency_0, format_percent_0

QUARTER_HEADER = "Closed Fiscal Quarter"
TOTAL_LABEL = "Total"
SUB_COLUMNS: Tuple[str, str, str] = ("# of Opps", "ACV", "% of Total")


@dataclass(frozen=True)
class TableCellGroup:
    opp_count: int
    acv: float
    percent: float
    display: Tuple[str, str, str]


@dataclass(frozen=True)
class TableRow:
    label: str
    groups: List[TableCellGroup]
    total: TableCellGroup
    is_total: bool = False


@dataclass(frozen=True)
class CrossTab:
    category_label: str
    quarters: List[str] = field(default_factory=list)
    rows: List[TableRow] = field(default_factory=list)
    total_row: TableRow | None = None

    @property
    def group_headers(self) -> List[str]:
        return [QUARTER_HEADER, *self.quarters, TOTAL_LABEL]

    @property
    def sub_headers(self) -> List[str]:
        return [self.category_label, *(list(SUB_COLUMNS) * (len(self.quarters) + 1))]


def _group(opp_count: int, acv: float, percent: float) -> TableCellGroup:
    return TableCellGroup(
        opp_count=int(opp_count),
        acv=float(acv),
        percent=float(percent),
        display=(str(int(opp_count)), format_currency_0(acv), format_percent_0(percent)),
    )


def project_cross_tab(aggregation: Aggregation, category_label: str) -> CrossTab:
    """Quarter x category table with a Total column-group and a Total row.

    A category's Total group shows its share of the grand total; every percent
    in the Total row is 100.
    """
    rows: List[TableRow] = []
    for category in aggregation.categories:
        groups = [
            _group(cell.opp_count, cell.acv, cell.percent_of_quarter)
            for cell in (aggregation.cell(q, category) for q in aggregation.quarters)
        ]
        cat_total = aggregation.category_totals[category]
        rows.append(
            TableRow(
                label=category,
                groups=groups,
                total=_group(cat_total.total_opp_count, cat_total.total_acv, cat_total.percent_of_grand_total),
            )
        )

    grand = aggregation.grand_total
    total_row = TableRow(
        label=TOTAL_LABEL,
        groups=[
            _group(qt.opp_count, qt.acv, qt.percent_of_total)
            for qt in (aggregation.quarter_totals[q] for q in aggregation.quarters)
        ],
        total=_group(grand.opp_count, grand.acv, grand.percent),
        is_total=True,
    )

    return CrossTab(
        category_label=category_label,
        quarters=list(aggregation.quarters),
        rows=rows,
        total_row=total_row,
    )


def cross_tab_frame(table: CrossTab) -> pd.DataFrame:
    """Flatten the display values into a DataFrame for `st.dataframe`.

    Row labels go in the first column over a positional index, since a category
    may itself be called "Total". The Total row is always last.
    """
    columns = [table.category_label] + [
        f"{group} | {sub}" for group in [*table.quarters, TOTAL_LABEL] for sub in SUB_COLUMNS
    ]
    all_rows = table.rows + ([table.total_row] if table.total_row is not None else [])
    data = [[row.label, *(text for group in [*row.groups, row.total] for text in group.display)] for row in all_rows]
    return pd.DataFrame(data, columns=columns)
