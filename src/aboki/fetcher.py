"""HTTP fetcher for the rates website with simple retry support."""

from __future__ import annotations

import logging
from typing import Dict, Mapping, Optional
from urllib.parse import urlencode

import requests
from requests import Response

log = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://www.abokifx.com"


class TransportError(RuntimeError):
    """Raised when fetching a page fails after retries."""

    def __init__(self, url: str, status: Optional[int], message: str | None = None) -> None:
        self.url = url
        self.status = status
        self.message = message or "Failed to fetch URL"
        super().__init__(f"{self.message}: {url} (status={status})")


class EmptyResponseError(RuntimeError):
    """Raised when the server answers successfully but sends no content."""

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"Empty response body from {url}")


class Fetcher:
    """Lightweight HTTP client with retry on transient failures."""

    DEFAULT_HEADERS: Dict[str, str] = {
        "User-Agent": "aboki/1.0 (+https://www.abokifx.com)",
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": "en-US,en;q=0.5",
    }

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        max_retries: int = 3,
        headers: dict | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self.headers = {**self.DEFAULT_HEADERS, **(headers or {})}

    def build_url(self, path: str = "", params: Mapping[str, str] | None = None) -> str:
        url = self.base_url
        if path:
            url += "/" + path.lstrip("/")
        if params:
            url += "?" + urlencode(params)
        return url

    def _should_retry(self, response: Response | None, exc: Exception | None) -> bool:
        if exc is not None:
            return True
        if response is None:
            return False
        return 500 <= response.status_code < 600

    def fetch(
        self,
        path: str = "",
        params: Mapping[str, str] | None = None,
        method: str = "GET",
        data: Mapping[str, str] | None = None,
    ) -> str:
        """Request a page of the site and return its HTML body."""
        method = method.upper()
        url = self.build_url(path, params)
        headers = dict(self.headers)
        if method != "GET":
            headers["Content-Type"] = "application/x-www-form-urlencoded"

        last_status: Optional[int] = None
        for attempt in range(self.max_retries):
            response: Response | None = None
            error: Exception | None = None
            log.debug("%s %s (attempt %d/%d)", method, url, attempt + 1, self.max_retries)
            try:
                response = requests.request(
                    method,
                    url,
                    headers=headers,
                    data=None if method == "GET" else data,
                    timeout=self.timeout,
                )
                last_status = response.status_code
                if 200 <= response.status_code < 300:
                    body = response.text
                    if not body or not body.strip():
                        raise EmptyResponseError(url)
                    return body
                log.warning("%s %s returned status %d", method, url, response.status_code)
                if not self._should_retry(response, None):
                    break
            except requests.exceptions.RequestException as exc:
                log.warning("%s %s failed: %s", method, url, exc)
                error = exc
            if attempt == self.max_retries - 1 or not self._should_retry(response, error):
                break
        raise TransportError(url, last_status)
