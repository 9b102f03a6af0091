"""Tests for data fetching."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any, List

import pytest
import requests

from aboki.fetcher import EmptyResponseError, Fetcher, TransportError


def _response(status: int, text: str = "") -> Any:
    return SimpleNamespace(status_code=status, text=text)


def test_successful_fetch(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: List[Any] = []

    def fake_request(method: str, url: str, **kwargs: Any) -> Any:
        calls.append((method, url, kwargs))
        return _response(200, "<html>ok</html>")

    monkeypatch.setattr(requests, "request", fake_request)
    fetcher = Fetcher(timeout=1, max_retries=3)

    assert fetcher.fetch() == "<html>ok</html>"
    assert len(calls) == 1
    method, url, kwargs = calls[0]
    assert method == "GET"
    assert url == "https://www.abokifx.com"
    assert kwargs["data"] is None
    assert kwargs["timeout"] == 1


def test_fetch_builds_path_and_query(monkeypatch: pytest.MonkeyPatch) -> None:
    urls: List[str] = []

    def fake_request(method: str, url: str, **kwargs: Any) -> Any:
        urls.append(url)
        return _response(200, "<html></html>")

    monkeypatch.setattr(requests, "request", fake_request)
    fetcher = Fetcher(base_url="https://rates.example/", max_retries=1)

    fetcher.fetch("ratetypes", params={"rates": "lagos_previous"})

    assert urls == ["https://rates.example/ratetypes?rates=lagos_previous"]


def test_post_sends_form_data(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: List[Any] = []

    def fake_request(method: str, url: str, **kwargs: Any) -> Any:
        calls.append((method, kwargs))
        return _response(200, "<html></html>")

    monkeypatch.setattr(requests, "request", fake_request)
    fetcher = Fetcher(max_retries=1)

    fetcher.fetch("search", method="post", data={"q": "usd"})

    method, kwargs = calls[0]
    assert method == "POST"
    assert kwargs["data"] == {"q": "usd"}
    assert kwargs["headers"]["Content-Type"] == "application/x-www-form-urlencoded"


def test_retry_on_5xx_then_success(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: List[str] = []
    responses = iter([_response(502), _response(200, "recovered")])

    def fake_request(method: str, url: str, **kwargs: Any) -> Any:
        calls.append(url)
        return next(responses)

    monkeypatch.setattr(requests, "request", fake_request)
    fetcher = Fetcher(timeout=1, max_retries=3)

    assert fetcher.fetch() == "recovered"
    assert len(calls) == 2


def test_no_retry_on_4xx(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: List[str] = []

    def fake_request(method: str, url: str, **kwargs: Any) -> Any:
        calls.append(url)
        return _response(404)

    monkeypatch.setattr(requests, "request", fake_request)
    fetcher = Fetcher(timeout=1, max_retries=5)

    with pytest.raises(TransportError) as excinfo:
        fetcher.fetch("missing")
    assert excinfo.value.status == 404
    assert len(calls) == 1


def test_transport_error_after_all_retries(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: List[str] = []

    def fake_request(method: str, url: str, **kwargs: Any) -> Any:
        calls.append(url)
        raise requests.exceptions.ConnectionError("boom")

    monkeypatch.setattr(requests, "request", fake_request)
    fetcher = Fetcher(timeout=0.1, max_retries=2)

    with pytest.raises(TransportError) as excinfo:
        fetcher.fetch()
    assert excinfo.value.status is None
    assert len(calls) == 2


def test_empty_body_raises_empty_response(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(requests, "request", lambda method, url, **kwargs: _response(200, "  \n"))
    fetcher = Fetcher(max_retries=3)

    with pytest.raises(EmptyResponseError):
        fetcher.fetch()
