"""Core HTTP request wrapper used throughout resendpager."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Mapping, MutableMapping, Optional

import requests
from tenacity import (
    Retrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ..exceptions import TransportError

log = logging.getLogger(__name__)


@dataclass
class RequestConfig:
    """Configuration for a single request."""

    method: str = "GET"
    url: str = ""
    params: Mapping[str, Any] = field(default_factory=dict)
    headers: MutableMapping[str, str] = field(default_factory=dict)
    timeout: float = 30
    max_retries: int = 3
    backoff_factor: float = 0.5

    @classmethod
    def from_env(cls, **kwargs: Any) -> RequestConfig:
        """Build a config whose timeout and retries honour the environment.

        ``RESEND_TIMEOUT`` and ``RESEND_MAX_RETRIES`` override the defaults;
        explicit keyword arguments override both.
        """
        if "RESEND_TIMEOUT" in os.environ:
            kwargs.setdefault("timeout", float(os.environ["RESEND_TIMEOUT"]))
        if "RESEND_MAX_RETRIES" in os.environ:
            kwargs.setdefault("max_retries", int(os.environ["RESEND_MAX_RETRIES"]))
        return cls(**kwargs)


class _RetryableResponse(Exception):
    def __init__(self, response: requests.Response):
        super().__init__(f"HTTP {response.status_code}")
        self.response = response


def _should_retry(resp: requests.Response) -> bool:
    """Return True for status codes that merit a retry."""
    return resp.status_code >= 500 or resp.status_code == 429


def _response_body(resp: requests.Response) -> Any:
    try:
        return resp.json()
    except ValueError:
        return resp.text


def _send(config: RequestConfig, headers: Mapping[str, str]) -> requests.Response:
    resp = requests.request(
        method=config.method,
        url=config.url,
        params=config.params,
        headers=headers,
        timeout=config.timeout,
    )
    if _should_retry(resp):
        raise _RetryableResponse(resp)
    return resp


def request(
    config: RequestConfig, auth_token: Optional[str] = None
) -> requests.Response:
    """Perform an HTTP request with retry and error handling.

    Args:
        config: Fully populated ``RequestConfig`` instance.
        auth_token: Optional bearer token; if supplied it is added to the
            ``Authorization`` header.

    Returns:
        The successful ``requests.Response``.

    Raises:
        TransportError: on a network failure or a non-2xx response once
            retries are exhausted.
    """
    headers = dict(config.headers)
    if auth_token:
        headers["Authorization"] = f"Bearer {auth_token}"

    retryer = Retrying(
        reraise=True,
        stop=stop_after_attempt(config.max_retries + 1),
        wait=wait_exponential(multiplier=config.backoff_factor, max=10),
        retry=retry_if_exception_type(
            (requests.ConnectionError, requests.Timeout, _RetryableResponse)
        ),
        before_sleep=before_sleep_log(log, logging.WARNING),
    )
    try:
        resp = retryer(_send, config, headers)
    except _RetryableResponse as exc:
        resp = exc.response
    except requests.RequestException as exc:
        raise TransportError(
            f"{config.method} {config.url} failed: {exc}", url=config.url
        ) from exc

    try:
        resp.raise_for_status()
    except requests.HTTPError as exc:
        raise TransportError(
            f"{config.method} {config.url} returned HTTP {resp.status_code}",
            status_code=resp.status_code,
            url=config.url,
            body=_response_body(resp),
        ) from exc
    return resp


def request_json(config: RequestConfig, auth_token: Optional[str] = None) -> Any:
    """Perform a request and decode its JSON body.

    Raises:
        TransportError: as ``request`` does, or when the body is not JSON.
    """
    resp = request(config, auth_token=auth_token)
    try:
        return resp.json()
    except ValueError as exc:
        raise TransportError(
            f"{config.method} {config.url} returned a body that is not JSON",
            status_code=resp.status_code,
            url=config.url,
            body=resp.text,
        ) from exc
