from __future__ import annotations

import pytest

from core.records import (
    CategoryKind,
    InvalidCategorySelector,
    MalformedRow,
    Record,
    parse_records,
    resolve_selector,
)


@pytest.mark.parametrize(
    "selector, expected",
    [
        ("Cust_Type", CategoryKind.CUSTOMER_TYPE),
        ("Acct_Industry", CategoryKind.ACCOUNT_INDUSTRY),
        ("Team", CategoryKind.TEAM),
        ("TEAM", CategoryKind.TEAM),
        (CategoryKind.TEAM, CategoryKind.TEAM),
    ],
)
def test_resolve_selector(selector, expected) -> None:
    assert resolve_selector(selector) is expected


def test_resolve_selector_rejects_unknown() -> None:
    with pytest.raises(InvalidCategorySelector):
        resolve_selector("Region")


def test_parse_records_builds_tagged_records() -> None:
    rows = [{"count": 2, "acv": "1500.5", "closed_fiscal_quarter": "FY24 Q1", "Acct_Industry": "Retail"}]
    assert parse_records(rows, "Acct_Industry") == [
        Record(kind=CategoryKind.ACCOUNT_INDUSTRY, category="Retail", quarter="FY24 Q1", acv=1500.5, count=2)
    ]


def test_parse_records_missing_numbers_default_to_zero() -> None:
    (record,) = parse_records([{"closed_fiscal_quarter": "Q1", "Team": "Europe", "acv": None}], CategoryKind.TEAM)
    assert record.acv == 0.0
    assert record.count == 0


def test_parse_records_fails_before_returning_anything() -> None:
    rows = [
        {"count": 1, "acv": 10, "closed_fiscal_quarter": "Q1", "Team": "Europe"},
        {"count": 1, "acv": 10, "closed_fiscal_quarter": "Q1", "Cust_Type": "New Customer"},
    ]
    with pytest.raises(InvalidCategorySelector):
        parse_records(rows, CategoryKind.TEAM)


@pytest.mark.parametrize("quarter_field", [{}, {"closed_fiscal_quarter": None}, {"closed_fiscal_quarter": ""}])
def test_parse_records_rejects_rows_without_a_quarter(quarter_field) -> None:
    rows = [{"count": 1, "acv": 10, "Team": "Europe", **quarter_field}]
    with pytest.raises(MalformedRow):
        parse_records(rows, CategoryKind.TEAM)
