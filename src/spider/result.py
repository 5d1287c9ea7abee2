# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Success/failure result type returned by every Spider operation."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from .errors import ErrorKind, SpiderError

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Success(Generic[T]):
    """Terminal success carrying raw bytes or a decoded value."""

    value: T

    @property
    def is_success(self) -> bool:
        return True

    @property
    def error(self) -> None:
        return None

    def unwrap(self) -> T:
        return self.value

    def map(self, fn: Callable[[T], U]) -> Success[U]:
        return Success(fn(self.value))


@dataclass(frozen=True)
class Failure:
    """Terminal failure carrying exactly one taxonomy error."""

    error: SpiderError

    @property
    def is_success(self) -> bool:
        return False

    @property
    def kind(self) -> ErrorKind:
        return self.error.kind

    def unwrap(self):
        raise self.error

    def map(self, fn: Callable[[object], object]) -> Failure:  # noqa: ARG002
        return self


Result = Union[Success[T], Failure]


def same_outcome(a: Result, b: Result) -> bool:
    """Return True when two results share a classification (success, or the same error kind)."""
    if isinstance(a, Success) and isinstance(b, Success):
        return True
    if isinstance(a, Failure) and isinstance(b, Failure):
        return a.kind == b.kind
    return False


__all__ = ["Failure", "Result", "Success", "same_outcome"]
