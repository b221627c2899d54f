from __future__ import annotations

import json
from pathlib import Path

import pytest


@pytest.fixture
def scenario_rows() -> list[dict]:
    return [
        {"Team": "A", "closed_fiscal_quarter": "Q1", "acv": 100, "count": 1},
        {"Team": "B", "closed_fiscal_quarter": "Q1", "acv": 300, "count": 2},
        {"Team": "A", "closed_fiscal_quarter": "Q2", "acv": 0, "count": 0},
    ]


@pytest.fixture
def sparse_rows() -> list[dict]:
    # "Retail" never closes in FY24 Q1 and quarters arrive out of order.
    return [
        {"Acct_Industry": "Manufacturing", "closed_fiscal_quarter": "FY24 Q2", "acv": 500.0, "count": 5},
        {"Acct_Industry": "Retail", "closed_fiscal_quarter": "FY24 Q2", "acv": 250.0, "count": 2},
        {"Acct_Industry": "Manufacturing", "closed_fiscal_quarter": "FY24 Q1", "acv": 400.0, "count": 4},
        {"Acct_Industry": "Education", "closed_fiscal_quarter": "FY24 Q1", "acv": 100.0, "count": 1},
        {"Acct_Industry": "Manufacturing", "closed_fiscal_quarter": "FY24 Q2", "acv": 250.0, "count": 1},
    ]


@pytest.fixture
def cents_rows() -> list[dict]:
    # Two-decimal amounts whose float sums depend on the order they are added in.
    return [
        {"Team": "Asia Pac", "closed_fiscal_quarter": "FY23 Q3", "acv": 428301.55, "count": 18},
        {"Team": "Europe", "closed_fiscal_quarter": "FY23 Q3", "acv": 519677.82, "count": 22},
        {"Team": "North America", "closed_fiscal_quarter": "FY23 Q3", "acv": 323488.65, "count": 16},
        {"Team": "Latin America", "closed_fiscal_quarter": "FY23 Q3", "acv": 100132.67, "count": 4},
        {"Team": "Asia Pac", "closed_fiscal_quarter": "FY23 Q4", "acv": 471058.29, "count": 15},
        {"Team": "Europe", "closed_fiscal_quarter": "FY23 Q4", "acv": 602554.13, "count": 20},
        {"Team": "North America", "closed_fiscal_quarter": "FY23 Q4", "acv": 598091.29, "count": 20},
        {"Team": "Europe", "closed_fiscal_quarter": "FY24 Q1", "acv": 0.1, "count": 1},
        {"Team": "Europe", "closed_fiscal_quarter": "FY24 Q1", "acv": 0.2, "count": 1},
        {"Team": "Asia Pac", "closed_fiscal_quarter": "FY24 Q1", "acv": 0.3, "count": 1},
        {"Team": "Latin America", "closed_fiscal_quarter": "FY24 Q1", "acv": 963506.61, "count": 9},
    ]


@pytest.fixture
def bundled_data_dir() -> Path:
    return Path(__file__).resolve().parents[1] / "data"


@pytest.fixture
def data_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    datasets = {
        "customerType.json": [
            {"count": 3, "acv": 3000, "closed_fiscal_quarter": "FY24 Q1", "Cust_Type": "Existing Customer"},
            {"count": 1, "acv": 1000, "closed_fiscal_quarter": "FY24 Q1", "Cust_Type": "New Customer"},
        ],
        "accountIndustry.json": [
            {"count": 2, "acv": 1500, "closed_fiscal_quarter": "FY24 Q1", "Acct_Industry": "Retail"},
            {"count": 1, "acv": 500, "closed_fiscal_quarter": "FY24 Q2", "Acct_Industry": "Education"},
        ],
        "team.json": [
            {"count": 4, "acv": 2000, "closed_fiscal_quarter": "FY24 Q2", "Team": "Europe"},
        ],
    }
    for filename, rows in datasets.items():
        (tmp_path / filename).write_text(json.dumps(rows), encoding="utf-8")
    monkeypatch.setenv("ACV_DATA_DIR", str(tmp_path))
    return tmp_path
