"""
util/http.py

Tiny HTTP helpers for JSON GET/POST used by every provider adapter.
- Timeout can be configured via HTTP_TIMEOUT env (default 8s)
- No retries: transport errors, HTTP status errors and non-JSON bodies are
  re-raised as ProviderLookupFailure tagged with the provider name
"""

import logging
import os

import requests

from assistant.errors import ProviderLookupFailure


logger = logging.getLogger(__name__)


def _env_timeout():
    try:
        return float(os.getenv("HTTP_TIMEOUT", "8"))
    except ValueError:
        return 8.0


def _decode(resp, provider):
    try:
        return resp.json()
    except ValueError as exc:
        raise ProviderLookupFailure(provider, "response was not valid JSON") from exc


def get_json(url, provider, params=None, headers=None, timeout=None):
    """HTTP GET JSON, raising ProviderLookupFailure on any failure."""
    if timeout is None:
        timeout = _env_timeout()
    try:
        resp = requests.get(url, params=params, headers=headers, timeout=timeout)
        resp.raise_for_status()
    except requests.HTTPError as exc:
        status = getattr(exc.response, "status_code", None)
        logger.debug("%s GET %s failed with HTTP %s", provider, url, status)
        raise ProviderLookupFailure(provider, f"HTTP {status}") from exc
    except requests.RequestException as exc:
        logger.debug("%s GET %s failed: %s", provider, url, exc)
        raise ProviderLookupFailure(provider, f"request failed: {exc}") from exc
    return _decode(resp, provider)


def post_json(url, payload, headers=None, timeout=None):
    """HTTP POST a JSON payload and return the decoded body.

    Errors are raised as-is (requests exceptions / ValueError) so callers can
    map them to their own failure type.
    """
    if timeout is None:
        timeout = _env_timeout()
    resp = requests.post(url, json=payload, headers=headers, timeout=timeout)
    resp.raise_for_status()
    return resp.json()
