# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for Spider."""

import os
from dataclasses import dataclass

from .version import __version__

DEFAULT_USER_AGENT = f"Spider/{__version__} (+python-httpx)"


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class SpiderSettings:
    """Request engine defaults."""

    timeout: float = 30.0
    user_agent: str = DEFAULT_USER_AGENT
    allow_redirects: bool = True
    accept_error_status: bool = False
    max_body_bytes: int = 16 * 1024 * 1024

    @classmethod
    def from_env(cls) -> "SpiderSettings":
        """Create settings from environment variables (evaluated at call time)."""
        timeout = _float_env("SPIDER_HTTP_TIMEOUT", cls.timeout)
        if timeout <= 0:
            timeout = cls.timeout
        max_body_bytes = _int_env("SPIDER_HTTP_MAX_BODY_BYTES", cls.max_body_bytes)
        if max_body_bytes <= 0:
            max_body_bytes = cls.max_body_bytes
        return cls(
            timeout=timeout,
            user_agent=os.getenv("SPIDER_USER_AGENT", cls.user_agent),
            allow_redirects=_bool_env("SPIDER_HTTP_REDIRECTS", cls.allow_redirects),
            accept_error_status=_bool_env("SPIDER_HTTP_ACCEPT_ERROR_STATUS", cls.accept_error_status),
            max_body_bytes=max_body_bytes,
        )


def load_settings() -> SpiderSettings:
    """Load settings from environment with sensible defaults."""
    return SpiderSettings.from_env()
