# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""URL validation for request descriptors."""

from __future__ import annotations

from urllib.parse import urlsplit

from ..errors import InvalidURLError

SUPPORTED_SCHEMES = frozenset({"http", "https"})


def validate_url(url: object) -> str:
    """
    Return ``url`` unchanged when it is an absolute http(s) URL, else raise InvalidURLError.

    Rejected:
      "invalid url"          (whitespace)
      "example.com/path"     (no scheme)
      "https:///path"        (no host)
      "ftp://example.com"    (scheme httpx cannot execute)
    """
    if not isinstance(url, str):
        raise InvalidURLError(url, "URL must be a string")
    if not url:
        raise InvalidURLError(url, "empty URL")
    if any(ch.isspace() for ch in url):
        raise InvalidURLError(url, "URL contains whitespace")

    try:
        parts = urlsplit(url)
        # Accessing .port validates the port component.
        _ = parts.port
    except ValueError as exc:
        raise InvalidURLError(url, str(exc), cause=exc) from exc

    if not parts.scheme:
        raise InvalidURLError(url, "missing scheme")
    if not parts.netloc or not parts.hostname:
        raise InvalidURLError(url, "missing host")
    if parts.scheme.lower() not in SUPPORTED_SCHEMES:
        raise InvalidURLError(url, f"unsupported scheme {parts.scheme!r}")
    return url


def is_valid_url(url: object) -> bool:
    """Return True when ``url`` would be accepted by validate_url."""
    try:
        validate_url(url)
    except InvalidURLError:
        return False
    return True


__all__ = ["SUPPORTED_SCHEMES", "is_valid_url", "validate_url"]
