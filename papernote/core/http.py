"""
HTTP fetch primitive shared by metadata sources and the PDF cache
"""
from __future__ import annotations

import logging
import re
from typing import Optional

import requests

from .. import __version__
from .errors import UpstreamError
from .models import HttpResponse

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = f"papernote/{__version__}"


def fetch(
    url: str,
    timeout: Optional[float] = 30.0,
    user_agent: str = DEFAULT_USER_AGENT,
) -> HttpResponse:
    """
    Issue a GET request and return status and body without judging the status

    Raises:
        UpstreamError: If the request could not be completed at all
    """
    headers = {"User-Agent": user_agent}
    try:
        response = requests.get(url, headers=headers, timeout=timeout)
    except requests.RequestException as exc:
        raise UpstreamError(f"Request failed: {url}") from exc

    return HttpResponse(
        status=response.status_code,
        body=response.content,
    )


def http_get(
    url: str,
    timeout: Optional[float] = 30.0,
    user_agent: str = DEFAULT_USER_AGENT,
) -> bytes:
    """GET ``url`` and return the body, treating any non-2xx status as failure"""
    response = fetch(url, timeout=timeout, user_agent=user_agent)
    if not response.ok:
        raise UpstreamError(f"HTTP error: status {response.status} for {url}")
    logger.debug("Fetched %d bytes from %s", len(response.body), url)
    return response.body


def force_https(url: str) -> str:
    """Rewrite an ``http:`` scheme to ``https:``"""
    return re.sub(r"^http:", "https:", url)
