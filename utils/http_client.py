"""Thin HTTP client over requests.Session."""
import time
import logging
import requests

logger = logging.getLogger("dcasim.http")


class APIError(Exception):
    """API request error with status code and response body."""
    def __init__(self, message, status_code=None, response_body=None, source=None):
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body
        self.source = source


class HTTPClient:
    """Single-attempt JSON GET client. Failures surface as APIError."""

    def __init__(self, base_url, timeout=15, headers=None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({"User-Agent": "DCASimulator/1.0"})
        if headers:
            self.session.headers.update(headers)

    def get(self, path="", params=None):
        url = f"{self.base_url}/{path.lstrip('/')}" if path else self.base_url
        try:
            start = time.time()
            resp = self.session.get(url, params=params, timeout=self.timeout)
            latency = int((time.time() - start) * 1000)
            logger.debug(f"GET {url} → {resp.status_code} ({latency}ms)")
        except requests.exceptions.RequestException as e:
            raise APIError(f"Request error for {url}: {e}", source=self.base_url) from e

        if resp.status_code != 200:
            raise APIError(
                f"HTTP {resp.status_code} from {url}",
                status_code=resp.status_code,
                response_body=resp.text,
                source=self.base_url,
            )
        try:
            return resp.json()
        except ValueError as e:
            raise APIError(f"Invalid JSON from {url}", status_code=resp.status_code,
                           response_body=resp.text, source=self.base_url) from e
