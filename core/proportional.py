"""Doughnut geometry over category totals.

Angles are radians measured clockwise from twelve o'clock, so they can be fed
straight to Vega-Lite's `theta`/`theta2` channels. Label coordinates are pixel
offsets from the chart centre with y growing downwards.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import Dict, List, Sequence, Tuple

from core.aggregate import Aggregation
from core.data import format_percent_0, format_thousands

TAU = 2 * math.pi

INNER_RADIUS_RATIO = 0.3
OUTER_RADIUS_RATIO = 0.7
LABEL_RADIUS_RATIO = 1.2
MIN_LABEL_SPACING = 20.0
LABEL_MARGIN = 20.0


@dataclass(frozen=True)
class Arc:
    category: str
    value: float
    start_angle: float
    end_angle: float
    percent: float

    @property
    def sweep(self) -> float:
        return self.end_angle - self.start_angle

    @property
    def mid_angle(self) -> float:
        return (self.start_angle + self.end_angle) / 2


@dataclass(frozen=True)
class LabelPoint:
    category: str
    x: float
    y: float


@dataclass(frozen=True)
class ArcLabel:
    category: str
    text: str
    x: float
    y: float
    anchor: str


@dataclass(frozen=True)
class ProportionalChart:
    width: int
    height: int
    inner_radius: float
    outer_radius: float
    total: float = 0.0
    arcs: List[Arc] = field(default_factory=list)
    labels: List[ArcLabel] = field(default_factory=list)
    center_label: Tuple[str, str] = ("Total", "$0K")


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _cluster_positions(naturals: List[float], spacing: float) -> List[float]:
    center = sum(naturals) / len(naturals)
    offset = (len(naturals) - 1) / 2
    return [center + (i - offset) * spacing for i in range(len(naturals))]


def layout_labels(
    points: Sequence[LabelPoint],
    *,
    min_spacing: float = MIN_LABEL_SPACING,
    half_width: float,
    half_height: float,
    margin: float = LABEL_MARGIN,
) -> List[LabelPoint]:
    """Spread labels vertically so no two sit closer than `min_spacing`.

    Labels are sorted by y (ties keep input order). Colliding neighbours are
    merged into a cluster spaced exactly `min_spacing` apart and centred on the
    mean of their natural positions, so a colliding pair moves apart
    symmetrically around its midpoint. Positions are then clamped to `margin`
    inside the box `[-half_width, half_width] x [-half_height, half_height]`.
    Returns new points ordered top to bottom.
    """
    ordered = sorted(points, key=lambda p: p.y)
    eps = 1e-9

    # Each cluster is the list of natural y positions it holds.
    clusters: List[List[float]] = []
    for p in ordered:
        clusters.append([p.y])
        while len(clusters) > 1:
            upper, lower = clusters[-2], clusters[-1]
            upper_bottom = _cluster_positions(upper, min_spacing)[-1]
            lower_top = _cluster_positions(lower, min_spacing)[0]
            if lower_top - upper_bottom >= min_spacing - eps:
                break
            clusters[-2:] = [upper + lower]

    ys = [y for cluster in clusters for y in _cluster_positions(cluster, min_spacing)]

    return [
        replace(
            p,
            x=_clamp(p.x, -half_width + margin, half_width - margin),
            y=_clamp(y, -half_height + margin, half_height - margin),
        )
        for p, y in zip(ordered, ys)
    ]


def project_proportional(aggregation: Aggregation, *, width: int = 500, height: int = 300) -> ProportionalChart:
    radius = min(width, height) / 2
    total = aggregation.grand_total.acv

    arcs: List[Arc] = []
    angle = 0.0
    for category in aggregation.categories:
        cat_total = aggregation.category_totals[category]
        sweep = cat_total.total_acv / total * TAU if total else 0.0
        arcs.append(
            Arc(
                category=category,
                value=cat_total.total_acv,
                start_angle=angle,
                end_angle=angle + sweep,
                percent=cat_total.percent_of_grand_total,
            )
        )
        angle += sweep

    label_radius = radius * LABEL_RADIUS_RATIO
    points = [
        LabelPoint(
            category=arc.category,
            x=math.cos(arc.mid_angle - math.pi / 2) * label_radius,
            y=math.sin(arc.mid_angle - math.pi / 2) * label_radius,
        )
        for arc in arcs
        if arc.sweep != 0
    ]
    placed = layout_labels(points, half_width=width / 2, half_height=height / 2)

    by_category: Dict[str, Arc] = {arc.category: arc for arc in arcs}
    labels = [
        ArcLabel(
            category=p.category,
            text=format_percent_0(by_category[p.category].percent),
            x=p.x,
            y=p.y,
            anchor="start" if p.x > 0 else "end",
        )
        for p in placed
    ]

    return ProportionalChart(
        width=width,
        height=height,
        inner_radius=radius * INNER_RADIUS_RATIO,
        outer_radius=radius * OUTER_RADIUS_RATIO,
        total=total,
        arcs=arcs,
        labels=labels,
        center_label=("Total", format_thousands(total, suffix="K")),
    )
