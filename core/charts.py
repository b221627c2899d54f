from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

import altair as alt
import pandas as pd

from core.proportional import ProportionalChart
from core.stacked_series import StackedSeries

alt.data_transformers.disable_max_rows()

# d3.schemeCategory10
CATEGORY10 = [
    "#1f77b4",
    "#ff7f0e",
    "#2ca02c",
    "#d62728",
    "#9467bd",
    "#8c564b",
    "#e377c2",
    "#7f7f7f",
    "#bcbd22",
    "#17becf",
]


def to_vega_spec(chart: alt.Chart | alt.LayerChart) -> Dict[str, Any]:
    """Convert an Altair chart into a Vega-Lite spec dict (JSON-serializable)."""
    return chart.to_dict()


def category_colors(categories: Sequence[str]) -> Dict[str, str]:
    """Map categories to the palette in order, cycling after ten."""
    return {c: CATEGORY10[i % len(CATEGORY10)] for i, c in enumerate(categories)}


def _color_scale(categories: Sequence[str]) -> alt.Scale:
    colors = category_colors(categories)
    return alt.Scale(domain=list(colors), range=list(colors.values()))


def stacked_bar_chart(series: StackedSeries, *, width: int = 700, height: int = 320) -> Optional[alt.LayerChart]:
    if not series.bars:
        return None

    segments = pd.DataFrame(
        [
            {
                "quarter": bar.quarter,
                "category": seg.category,
                "start": seg.start,
                "end": seg.end,
                "value": seg.value,
                "percent": seg.percent_of_quarter,
            }
            for bar in series.bars
            for seg in bar.segments
        ]
    )
    totals = pd.DataFrame([{"quarter": b.quarter, "total": b.total, "label": b.total_label} for b in series.bars])

    x = alt.X("quarter:N", sort=list(series.quarters), title=None, axis=alt.Axis(labelAngle=0))
    bars = (
        alt.Chart(segments)
        .mark_bar()
        .encode(
            x=x,
            y=alt.Y(
                "start:Q",
                title=None,
                scale=alt.Scale(domain=[0, series.y_max], nice=True),
                axis=alt.Axis(format="~s", gridDash=[4, 4], domain=False, ticks=False),
            ),
            y2="end",
            color=alt.Color(
                "category:N",
                sort=list(series.categories),
                scale=_color_scale(series.categories),
                legend=alt.Legend(orient="bottom", title=None, columns=4),
            ),
            tooltip=[
                "quarter",
                "category",
                alt.Tooltip("value:Q", format=",.0f", title="Value"),
                alt.Tooltip("percent:Q", format=".1f", title="Percentage"),
            ],
        )
    )
    labels = (
        alt.Chart(totals)
        .mark_text(dy=-6, fontSize=12, color="black")
        .encode(x=x, y="total:Q", text="label:N")
    )
    return alt.layer(bars, labels).properties(width=width, height=height)


def doughnut_chart(chart: ProportionalChart) -> Optional[alt.LayerChart]:
    if not chart.arcs or not chart.total:
        return None

    arcs = pd.DataFrame(
        [
            {
                "category": a.category,
                "start_angle": a.start_angle,
                "end_angle": a.end_angle,
                "value": a.value,
                "percent": a.percent,
            }
            for a in chart.arcs
        ]
    )
    layers: List[alt.Chart] = [
        alt.Chart(arcs)
        .mark_arc(innerRadius=chart.inner_radius, outerRadius=chart.outer_radius)
        .encode(
            theta=alt.Theta("start_angle:Q", scale=None),
            theta2="end_angle",
            color=alt.Color("category:N", scale=_color_scale([a.category for a in chart.arcs]), legend=None),
            tooltip=["category", alt.Tooltip("value:Q", format="$,.0f"), alt.Tooltip("percent:Q", format=".1f")],
        )
    ]

    # Label offsets are relative to the centre; Vega-Lite pixels start top-left.
    for anchor, align in (("start", "left"), ("end", "right")):
        rows = [
            {"category": lbl.category, "text": lbl.text, "x": lbl.x + chart.width / 2, "y": lbl.y + chart.height / 2}
            for lbl in chart.labels
            if lbl.anchor == anchor
        ]
        if rows:
            layers.append(
                alt.Chart(pd.DataFrame(rows))
                .mark_text(fontSize=16, align=align, baseline="middle")
                .encode(x=alt.X("x:Q", scale=None, axis=None), y=alt.Y("y:Q", scale=None, axis=None), text="text:N")
            )

    title, amount = chart.center_label
    layers.append(
        alt.Chart(pd.DataFrame([{"text": f"{title}\n{amount}"}]))
        .mark_text(fontWeight="bold", lineBreak="\n", align="center", baseline="middle")
        .encode(x=alt.value(chart.width / 2), y=alt.value(chart.height / 2), text="text:N")
    )
    return alt.layer(*layers).properties(width=chart.width, height=chart.height)
