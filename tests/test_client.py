from __future__ import annotations

import pytest
import requests

from core import client
from core.client import SourceUnavailable, dataset_url, fetch_dataset, fetch_datasets


class _FakeResponse:
    def __init__(self, payload, status_code: int = 200) -> None:
        self._payload = payload
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return self._payload


def test_dataset_url() -> None:
    assert dataset_url("http://localhost:4000/", "team") == "http://localhost:4000/api/team"
    with pytest.raises(ValueError):
        dataset_url("http://localhost:4000", "region")


def test_fetch_dataset_returns_rows(monkeypatch) -> None:
    rows = [{"count": 1, "acv": 10, "closed_fiscal_quarter": "Q1", "Team": "Europe"}]
    seen = {}

    def fake_get(url, timeout):
        seen["url"] = url
        return _FakeResponse(rows)

    monkeypatch.setattr(client.requests, "get", fake_get)
    assert fetch_dataset("team", "http://api") == rows
    assert seen["url"] == "http://api/api/team"


def test_fetch_dataset_wraps_http_errors(monkeypatch) -> None:
    monkeypatch.setattr(client.requests, "get", lambda url, timeout: _FakeResponse({}, status_code=500))
    with pytest.raises(SourceUnavailable):
        fetch_dataset("team", "http://api")


def test_fetch_dataset_rejects_error_body(monkeypatch) -> None:
    monkeypatch.setattr(client.requests, "get", lambda url, timeout: _FakeResponse({"error": "Unable to read file"}))
    with pytest.raises(SourceUnavailable):
        fetch_dataset("team", "http://api")


def test_fetch_datasets_isolates_failures(monkeypatch) -> None:
    def fake_get(url, timeout):
        if url.endswith("/team"):
            raise requests.ConnectionError("refused")
        return _FakeResponse([{"url": url}])

    monkeypatch.setattr(client.requests, "get", fake_get)
    results, errors = fetch_datasets("http://api")

    assert set(results) == {"customerType", "accountIndustry"}
    assert results["customerType"] == [{"url": "http://api/api/customerType"}]
    assert set(errors) == {"team"}
    assert "refused" in errors["team"]
