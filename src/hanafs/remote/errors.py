"""Map repository HTTP responses onto the filesystem error taxonomy.

The repository does not distinguish authentication failures, CSRF rejections
and ordinary client errors beyond the status code, so every 4xx other than
404 is reported as ``NoPermissions``.
"""

from __future__ import annotations

import logging

import httpx

from hanafs.errors import FileNotFound, FileSystemError, NoPermissions, Unavailable

logger = logging.getLogger(__name__)


def classify(
    status_code: int, detail: str = "", address: str | None = None
) -> FileSystemError | None:
    """Return the error for a status code, or None when it is not a failure."""
    if status_code >= 500:
        return Unavailable(detail or f"Server error {status_code}", address)
    if status_code == 404:
        return FileNotFound(detail, address)
    if status_code >= 400:
        return NoPermissions(detail or f"Request rejected with {status_code}", address)
    return None


def raise_for_status(response: httpx.Response, address: str | None = None) -> None:
    """Raise the mapped error for a failed response; do nothing below 400."""
    if response.status_code < 400:
        return

    error = classify(response.status_code, response.text, address)
    if error is None:
        return

    try:
        target = f"{response.request.method} {response.request.url.path}"
    except RuntimeError:
        # Response built without a request attached.
        target = address or "request"

    logger.warning("%s failed with %d (%s)", target, response.status_code, error.code)
    raise error
