from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, List, Mapping, Union

QUARTER_FIELD = "closed_fiscal_quarter"


class InvalidCategorySelector(ValueError):
    """The selector is unknown or does not match the shape of the rows."""


class MalformedRow(ValueError):
    """A row has no fiscal quarter to place it in."""


class CategoryKind(str, Enum):
    """Category dimension of a dataset. Values are the raw JSON field names."""

    CUSTOMER_TYPE = "Cust_Type"
    ACCOUNT_INDUSTRY = "Acct_Industry"
    TEAM = "Team"

    @property
    def field(self) -> str:
        return self.value


@dataclass(frozen=True)
class Record:
    kind: CategoryKind
    category: str
    quarter: str
    acv: float
    count: int


def resolve_selector(selector: Union[CategoryKind, str]) -> CategoryKind:
    if isinstance(selector, CategoryKind):
        return selector
    text = str(selector)
    # Field names ("Team") and member names ("TEAM") are both accepted.
    for kind in CategoryKind:
        if text in (kind.value, kind.name):
            return kind
    raise InvalidCategorySelector(f"Invalid category selector {selector!r}")


def _as_number(value: Any) -> float:
    if value is None or value == "":
        return 0.0
    return float(value)


def parse_record(row: Mapping[str, Any], kind: CategoryKind) -> Record:
    if kind.field not in row:
        raise InvalidCategorySelector(f"Invalid category selector {kind.field!r} for row {dict(row)!r}")
    quarter = row.get(QUARTER_FIELD)
    if quarter is None or quarter == "":
        raise MalformedRow(f"Row has no {QUARTER_FIELD!r}: {dict(row)!r}")
    # Missing amounts count as zero.
    return Record(
        kind=kind,
        category=str(row[kind.field]),
        quarter=str(quarter),
        acv=_as_number(row.get("acv")),
        count=int(_as_number(row.get("count"))),
    )


def parse_records(rows: Iterable[Mapping[str, Any]], selector: Union[CategoryKind, str]) -> List[Record]:
    """Parse raw dataset rows into records of a single category kind.

    Every row is checked before anything is returned, so a selector that does not
    fit the rows never yields partial output.
    """
    kind = resolve_selector(selector)
    return [parse_record(row, kind) for row in rows]
