from __future__ import annotations

import json

import pytest

from core.dashboard import compute_account_industry, compute_customer_type, compute_dashboard, compute_team
from core.records import InvalidCategorySelector


def test_compute_dashboard_payload(scenario_rows) -> None:
    payload = compute_dashboard(scenario_rows, "team")

    assert payload["dataset"] == "team"
    assert payload["category_key"] == "Team"
    assert payload["title"] == "Won ACV Mix by Team"
    assert payload["quarters"] == ["Q1", "Q2"]
    assert payload["categories"] == ["A", "B"]
    assert payload["totals"]["grand_total"] == {"opp_count": 3, "acv": 400.0, "percent": 100.0}
    assert [t["category"] for t in payload["totals"]["category_totals"]] == ["A", "B"]
    assert [b["total_label"] for b in payload["stacked_series"]["bars"]] == ["$0k", "$0k"]
    assert payload["table"]["group_headers"] == ["Closed Fiscal Quarter", "Q1", "Q2", "Total"]
    assert set(payload["charts"]) == {"stacked_bar", "doughnut"}
    json.dumps(payload)


def test_compute_dashboard_without_charts(scenario_rows) -> None:
    assert compute_dashboard(scenario_rows, "team", include_charts=False)["charts"] == {}


def test_compute_dashboard_empty_rows() -> None:
    payload = compute_dashboard([], "customerType")
    assert payload["quarters"] == []
    assert payload["stacked_series"]["bars"] == []
    assert payload["proportional"]["arcs"] == []
    assert payload["table"]["rows"] == []
    assert payload["totals"]["grand_total"]["acv"] == 0
    assert payload["charts"] == {}


def test_per_dataset_functions_check_the_category_field(scenario_rows) -> None:
    assert compute_team(scenario_rows, include_charts=False)["category_label"] == "Team"
    with pytest.raises(InvalidCategorySelector):
        compute_account_industry(scenario_rows)
    with pytest.raises(InvalidCategorySelector):
        compute_customer_type(scenario_rows)
