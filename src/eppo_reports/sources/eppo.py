from __future__ import annotations

import logging
from typing import Any, Dict

import requests

from eppo_reports.config import ConfigError

logger = logging.getLogger(__name__)


class EppoError(Exception):
    """Base class for failed experiment fetches."""


class EppoTransportError(EppoError):
    """The request went out but no response came back."""


class EppoApiError(EppoError):
    def __init__(self, status_code: int, reason: str, body: Any) -> None:
        message = f"API Error: {status_code} - {reason}" if reason else f"API Error: {status_code}"
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason
        self.body = body


def fetch_experiments(
    *,
    base_url: str,
    api_key: str,
    timeout_s: float = 30.0,
) -> Any:
    """Fetch the full experiment collection.

    Endpoint: {base_url}/experiments

    Returns the decoded JSON payload as-is. The API is expected to answer
    with a list of experiment objects, but the payload is not validated here:
    callers decide what to do with anything else. A 2xx body that is not JSON
    comes back as its raw text.

    Notes:
    - Exactly one request, no pagination and no retries.
    - requests' timeout is (connect, read).
    """

    if not api_key or not api_key.strip():
        raise ConfigError("EPPO_API_KEY environment variable is required")
    if timeout_s <= 0:
        raise ConfigError(f"EPPO_TIMEOUT_S must be positive, got {timeout_s}")

    url = f"{base_url.rstrip('/')}/experiments"
    headers: Dict[str, str] = {
        "X-Eppo-Token": api_key,
        "Content-Type": "application/json",
    }
    timeout = (min(5.0, float(timeout_s)), float(timeout_s))

    logger.info("Fetching experiments from %s", url)
    try:
        resp = requests.get(url, headers=headers, timeout=timeout)
    except requests.RequestException as exc:
        raise EppoTransportError(
            f"Network Error: No response received from API ({type(exc).__name__}: {exc})"
        ) from exc

    if not 200 <= resp.status_code < 300:
        raise EppoApiError(resp.status_code, resp.reason or "", _response_body(resp))

    try:
        return resp.json()
    except ValueError:
        logger.warning("Experiments response is not valid JSON (%d bytes)", len(resp.text or ""))
        return resp.text


def _response_body(resp: requests.Response) -> Any:
    try:
        return resp.json()
    except ValueError:
        return resp.text
