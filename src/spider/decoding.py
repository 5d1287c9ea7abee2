# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Decode raw response bytes into caller-chosen structured types."""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Protocol, TypeVar

from pydantic import TypeAdapter, ValidationError

from .errors import DecodingError
from .result import Failure, Result, Success

T = TypeVar("T")


class Decoder(Protocol):
    """Turns bytes into an instance of ``target``; raises on any mismatch."""

    def decode(self, data: bytes, target: type[T]) -> T: ...


@lru_cache(maxsize=256)
def _adapter_for(target: Any) -> TypeAdapter[Any]:
    return TypeAdapter(target)


def _type_name(target: Any) -> str:
    return getattr(target, "__name__", None) or repr(target)


class JsonDecoder:
    """
    JSON decoder backed by pydantic.

    Targets may be BaseModel subclasses, dataclasses, TypedDicts or containers of
    those (``list[Model]``). Validation is strict: missing required fields and
    type mismatches fail, with no coercion such as "826" to 826;
    unknown extra fields are ignored unless the model forbids them.
    """

    def decode(self, data: bytes, target: type[T]) -> T:
        try:
            adapter = _adapter_for(target)
        except TypeError:
            # Unhashable target (e.g. some typing constructs); skip the cache.
            adapter = TypeAdapter(target)
        return adapter.validate_json(data, strict=True)


def decode(data: bytes, target: type[T], decoder: Decoder | None = None) -> Result[T]:
    """Decode ``data`` into ``target``; any failure becomes a DecodingError result."""
    active = decoder or JsonDecoder()
    try:
        value = active.decode(data, target)
    except ValidationError as exc:
        return Failure(
            DecodingError(
                f"Response does not match {_type_name(target)}: {exc.error_count()} validation error(s)",
                target=target,
                cause=exc,
            )
        )
    except Exception as exc:  # noqa: BLE001
        return Failure(DecodingError(f"Could not decode {_type_name(target)}: {exc}", target=target, cause=exc))
    return Success(value)


__all__ = ["Decoder", "JsonDecoder", "decode"]
