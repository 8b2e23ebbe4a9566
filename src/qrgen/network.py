"""Network utility helpers."""
from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import httpx

from .errors import NetworkError

logger = logging.getLogger(__name__)


def fetch_json(
    url: str,
    *,
    timeout: float = 15.0,
    headers: Optional[Mapping[str, str]] = None,
    client: Optional[httpx.Client] = None,
) -> Any:
    """GET ``url`` and return the decoded JSON body.

    Transport failures, timeouts, non-200 responses and undecodable bodies
    are all reported as :class:`~qrgen.errors.NetworkError`; the HTTP status
    is kept on the exception when there was one.
    """

    owns_client = client is None
    if client is None:
        client = httpx.Client(timeout=timeout, follow_redirects=True)

    try:
        logger.debug("GET %s", url)
        response = client.get(url, headers=dict(headers or {}))
    except httpx.TimeoutException as exc:
        raise NetworkError(f"request timed out after {timeout}s") from exc
    except httpx.RequestError as exc:
        raise NetworkError(f"request failed: {exc}") from exc
    finally:
        if owns_client:
            client.close()

    if response.status_code != httpx.codes.OK:
        raise NetworkError(
            f"server returned status {response.status_code}",
            status_code=response.status_code,
        )

    try:
        return response.json()
    except ValueError as exc:
        raise NetworkError("response is not valid JSON") from exc


__all__ = ["fetch_json"]
