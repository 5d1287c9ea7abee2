# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Header normalization utilities.

HTTP header field names are case-insensitive (RFC 9110). Request descriptors keep
the caller's spelling for the wire but look names up case-insensitively.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any

from ..errors import InvalidRequestError


def _coerce_headers_mapping(headers: Any) -> Mapping[object, object] | None:
    """
    Coerce "dict-like" header containers into a Mapping.

    Accepts plain dicts, httpx.Headers, and iterable-of-pairs (e.g. list[tuple[str, str]]).
    """
    if not headers:
        return None
    if isinstance(headers, Mapping):
        return headers

    items = getattr(headers, "items", None)
    if callable(items):
        return dict(items())

    if isinstance(headers, Iterable):
        try:
            return dict(headers)
        except (TypeError, ValueError) as exc:
            raise InvalidRequestError(f"Headers must be a mapping or pairs, got {type(headers).__name__}") from exc

    raise InvalidRequestError(f"Headers must be a mapping or pairs, got {type(headers).__name__}")


def freeze_headers(headers: Any) -> Mapping[str, str]:
    """Return a read-only copy of ``headers`` with str keys/values, dropping empty names."""
    coerced = _coerce_headers_mapping(headers)
    out: dict[str, str] = {}
    if coerced:
        for key, value in coerced.items():
            if key is None:
                continue
            name = str(key).strip()
            if not name:
                continue
            out[name] = "" if value is None else str(value)
    return MappingProxyType(out)


def normalize_headers(headers: Mapping[object, object] | None) -> dict[str, str]:
    """Return a lowercase-keyed copy of a header mapping."""
    coerced = _coerce_headers_mapping(headers)
    if not coerced:
        return {}
    out: dict[str, str] = {}
    for key, value in coerced.items():
        if key is None:
            continue
        name = str(key).strip().lower()
        if not name:
            continue
        out[name] = "" if value is None else str(value)
    return out


def header_value(headers: Mapping[object, object] | None, name: str, default: str = "") -> str:
    """
    Return a header value using case-insensitive key matching.

    Fast-paths common key casings before falling back to a full scan.
    """
    if not headers or not name:
        return default

    lower = str(name).lower()
    for key in (name, lower, lower.title()):
        if key in headers:
            value = headers.get(key)
            return default if value is None else str(value).strip()

    for key, value in headers.items():
        if key is None:
            continue
        if str(key).lower() == lower:
            return default if value is None else str(value).strip()

    return default


__all__ = ["freeze_headers", "header_value", "normalize_headers"]
