from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, Iterable, Mapping

from core.aggregate import Aggregation, aggregate
from core.charts import category_colors, doughnut_chart, stacked_bar_chart, to_vega_spec
from core.cross_tab import project_cross_tab
from core.data import DatasetSpec, get_dataset
from core.proportional import project_proportional
from core.stacked_series import project_stacked_series


def summarize_totals(aggregation: Aggregation) -> Dict[str, Any]:
    return {
        "grand_total": asdict(aggregation.grand_total),
        "quarter_totals": [asdict(aggregation.quarter_totals[q]) for q in aggregation.quarters],
        "category_totals": [asdict(aggregation.category_totals[c]) for c in aggregation.categories],
    }


def compute_dashboard(
    rows: Iterable[Mapping[str, Any]],
    dataset: str | DatasetSpec,
    *,
    include_charts: bool = True,
) -> Dict[str, Any]:
    """Build every view of one dataset: stacked bars, doughnut, table and totals.

    Raises:
        InvalidCategorySelector: if the rows do not carry the dataset's category field.
        MalformedRow: if a row has no fiscal quarter.
        ValueError: for an unknown dataset name.
    """
    spec = dataset if isinstance(dataset, DatasetSpec) else get_dataset(dataset)
    aggregation = aggregate(rows, spec.kind)

    stacked = project_stacked_series(aggregation)
    proportional = project_proportional(aggregation)
    table = project_cross_tab(aggregation, spec.category_label)

    charts: Dict[str, Any] = {}
    if include_charts and not aggregation.is_empty:
        bar = stacked_bar_chart(stacked)
        doughnut = doughnut_chart(proportional)
        charts = {
            "stacked_bar": to_vega_spec(bar) if bar is not None else None,
            "doughnut": to_vega_spec(doughnut) if doughnut is not None else None,
        }

    return {
        "dataset": spec.name,
        "category_key": spec.kind.field,
        "category_label": spec.category_label,
        "title": spec.title,
        "quarters": list(aggregation.quarters),
        "categories": list(aggregation.categories),
        "colors": category_colors(aggregation.categories),
        "stacked_series": asdict(stacked),
        "proportional": asdict(proportional),
        "table": {
            "group_headers": table.group_headers,
            "sub_headers": table.sub_headers,
            **asdict(table),
        },
        "totals": summarize_totals(aggregation),
        "charts": charts,
    }


def compute_account_industry(rows: Iterable[Mapping[str, Any]], **kwargs: Any) -> Dict[str, Any]:
    return compute_dashboard(rows, "accountIndustry", **kwargs)


def compute_customer_type(rows: Iterable[Mapping[str, Any]], **kwargs: Any) -> Dict[str, Any]:
    return compute_dashboard(rows, "customerType", **kwargs)


def compute_team(rows: Iterable[Mapping[str, Any]], **kwargs: Any) -> Dict[str, Any]:
    return compute_dashboard(rows, "team", **kwargs)
