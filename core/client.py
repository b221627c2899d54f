"""HTTP access to the dataset API for the Streamlit frontend.

Each dataset is fetched on its own; a failure for one dataset is reported in the
error map and leaves the others untouched.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, Iterable, List, Optional, Tuple

import requests

from core.data import DATASETS, get_dataset

log = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 60


class SourceUnavailable(RuntimeError):
    """A dataset could not be fetched from the API."""


def dataset_url(backend_url: str, name: str) -> str:
    get_dataset(name)
    return f"{backend_url.rstrip('/')}/api/{name}"


def fetch_dataset(name: str, backend_url: str, timeout: float = DEFAULT_TIMEOUT) -> List[Dict[str, Any]]:
    """Fetch one dataset's raw rows.

    Raises:
        SourceUnavailable: on a transport error, a non-2xx status, or a body
            that is not a JSON array.
    """
    url = dataset_url(backend_url, name)
    log.info("Fetching %s", url)
    try:
        r = requests.get(url, timeout=timeout)
        r.raise_for_status()
        payload = r.json()
    except (requests.RequestException, ValueError) as exc:
        raise SourceUnavailable(f"Unable to fetch {name}: {exc}") from exc

    if not isinstance(payload, list):
        raise SourceUnavailable(f"Unable to fetch {name}: expected a JSON array, got {type(payload).__name__}")
    return payload


def fetch_datasets(
    backend_url: str,
    names: Optional[Iterable[str]] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> Tuple[Dict[str, List[Dict[str, Any]]], Dict[str, str]]:
    """Fetch several datasets concurrently.

    Returns:
        A tuple of (rows by dataset name, error message by dataset name).
    """
    names = list(names) if names is not None else list(DATASETS)
    results: Dict[str, List[Dict[str, Any]]] = {}
    errors: Dict[str, str] = {}

    with ThreadPoolExecutor(max_workers=max(1, len(names))) as pool:
        futures = {name: pool.submit(fetch_dataset, name, backend_url, timeout) for name in names}
        for name, future in futures.items():
            try:
                results[name] = future.result()
            except SourceUnavailable as exc:
                log.warning("%s", exc)
                errors[name] = str(exc)
    return results, errors
