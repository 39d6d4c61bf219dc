"""HTTPS download helper for release artifacts.

GitHub answers release downloads with a redirect to its asset storage.
Exactly one 301/302 hop is followed; anything else but 200 is an error.
"""

from __future__ import annotations

from typing import Any
from urllib.error import HTTPError
from urllib.parse import urljoin
from urllib.request import HTTPRedirectHandler, Request, build_opener

from xynginc.core.errors import DownloadError
from xynginc.core.logging import get_logger

LOGGER = get_logger(__name__)

DEFAULT_TIMEOUT = 60

REDIRECT_STATUSES = (301, 302)

USER_AGENT = "xynginc-plugin"


class _NoRedirectHandler(HTTPRedirectHandler):
    """Hand redirects back to the caller instead of following them."""

    def redirect_request(self, req, fp, code, msg, headers, newurl):  # noqa: D102
        return None


def _open_once(url: str, timeout: int) -> Any:
    """Issue a single GET without following redirects.

    Returns the response object for every HTTP status; HTTP error
    responses are returned as the (file-like) HTTPError itself.
    """
    if not url.startswith("https://"):
        raise DownloadError(f"Invalid download URL: {url}")

    opener = build_opener(_NoRedirectHandler)
    request = Request(url, headers={"User-Agent": USER_AGENT})
    try:
        return opener.open(request, timeout=timeout)  # nosec B310
    except HTTPError as e:
        return e


def secure_urlopen(url: str, timeout: int = DEFAULT_TIMEOUT) -> Any:
    """Open an HTTPS URL, following at most one redirect.

    Args:
        url: HTTPS URL to fetch.
        timeout: Socket timeout in seconds.

    Returns:
        Open response with status 200. The caller must close it.

    Raises:
        DownloadError: On a non-200 final status or a redirect without
            a Location header.
        urllib.error.URLError: On connection failures.
    """
    response = _open_once(url, timeout)
    status = response.getcode()

    if status in REDIRECT_STATUSES:
        location = response.headers.get("Location")
        response.close()
        if not location:
            raise DownloadError(
                f"Failed to download: HTTP {status} without Location header",
                status_code=status,
            )
        location = urljoin(url, location)
        LOGGER.debug(f"Following redirect to {location}")
        response = _open_once(location, timeout)
        status = response.getcode()

    if status != 200:
        response.close()
        raise DownloadError(f"Failed to download: HTTP {status}", status_code=status)

    return response
