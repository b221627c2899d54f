from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_DOWN, ROUND_HALF_UP, Decimal
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from core.records import CategoryKind
from core.settings import get_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DatasetSpec:
    name: str
    kind: CategoryKind
    filename: str
    title: str
    category_label: str


DATASETS: Dict[str, DatasetSpec] = {
    "customerType": DatasetSpec(
        name="customerType",
        kind=CategoryKind.CUSTOMER_TYPE,
        filename="customerType.json",
        title="Won ACV Mix by Customer Type",
        category_label="Cust Type",
    ),
    "accountIndustry": DatasetSpec(
        name="accountIndustry",
        kind=CategoryKind.ACCOUNT_INDUSTRY,
        filename="accountIndustry.json",
        title="Won ACV Mix by Account Industry",
        category_label="Acct Industry",
    ),
    "team": DatasetSpec(
        name="team",
        kind=CategoryKind.TEAM,
        filename="team.json",
        title="Won ACV Mix by Team",
        category_label="Team",
    ),
}


def get_dataset(name: str) -> DatasetSpec:
    try:
        return DATASETS[name]
    except KeyError:
        raise ValueError(f"Unknown dataset {name!r}; expected one of {sorted(DATASETS)}") from None


def dataset_path(name: str, data_dir: Optional[Path] = None) -> Path:
    base = data_dir if data_dir is not None else get_settings().data_dir
    return Path(base) / get_dataset(name).filename


def file_signature(path: Path) -> Tuple[str, float]:
    return (str(path), path.stat().st_mtime)


@lru_cache(maxsize=8)
def _read_json_cached(file_sig: Tuple[str, float]) -> Tuple[Dict[str, Any], ...]:
    path = Path(file_sig[0])
    with path.open("r", encoding="utf-8") as fh:
        payload = json.load(fh)
    if not isinstance(payload, list):
        raise ValueError(f"{path.name} must contain a JSON array, got {type(payload).__name__}")
    logger.info("Loaded %d rows from %s", len(payload), path)
    return tuple(payload)


def load_dataset(name: str, data_dir: Optional[Path] = None) -> List[Dict[str, Any]]:
    """Read one dataset file and return its rows.

    The parsed file is cached per (path, mtime), so edits on disk are picked up
    on the next call. Callers receive fresh row dicts.

    Raises:
        ValueError: unknown dataset name, or the file is not a JSON array.
        FileNotFoundError: the dataset file is missing.
    """
    path = dataset_path(name, data_dir)
    if not path.exists():
        raise FileNotFoundError(f"Dataset file not found: {path}")
    return [dict(row) for row in _read_json_cached(file_signature(path))]


# ---------------- Formatting ----------------
def round_half_up(value: object, ndigits: int = 0) -> Optional[float]:
    """Round with ties toward +infinity: 2.5 -> 3, -2.5 -> -2."""
    if value is None:
        return None
    q = Decimal(10) ** -ndigits
    d = Decimal(str(value))
    rounded = d.quantize(q, rounding=ROUND_HALF_UP if d >= 0 else ROUND_HALF_DOWN)
    # Adding 0.0 turns -0.0 into 0.0 so "-0%" is never displayed.
    return float(rounded) + 0.0


def format_currency_0(value: object) -> str:
    if value is None:
        return "N/A"
    return f"${round_half_up(value):,.0f}"


def format_thousands(value: object, suffix: str = "k") -> str:
    """Format an amount as whole thousands, e.g. 12_499 -> "$12k"."""
    if value is None:
        return "N/A"
    return f"${round_half_up(float(value) / 1000):.0f}{suffix}"


def format_percent_0(value: object) -> str:
    if value is None:
        return "N/A"
    return f"{round_half_up(value):.0f}%"
