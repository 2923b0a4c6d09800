"""Helpers for calling external HTTP collaborators."""

import logging
from typing import Optional

import httpx

from exceptions import UpstreamServiceError


logger = logging.getLogger(__name__)

MAX_LOGGED_PAYLOAD = 500


def truncate(text: Optional[str], limit: int = MAX_LOGGED_PAYLOAD) -> str:
    """Shorten a payload for logging."""
    if not text:
        return ""
    return text if len(text) <= limit else text[:limit] + "...[truncated]"


def check_response(service: str, response: httpx.Response) -> httpx.Response:
    """Raise UpstreamServiceError for non-2xx responses.

    Logs the status code and a truncated body; request headers (which carry
    the API keys) are never logged.
    """
    if response.is_success:
        return response

    body = truncate(response.text)
    logger.error(
        f"{service} service returned {response.status_code} for "
        f"{response.request.method} {response.request.url.path}: {body}"
    )
    raise UpstreamServiceError(service, response.status_code, body)


def transport_failure(service: str, error: httpx.HTTPError) -> UpstreamServiceError:
    """Log a transport-level failure and build the error to raise."""
    logger.error(f"{service} service unreachable: {type(error).__name__}: {error}")
    return UpstreamServiceError(service, None, str(error))
