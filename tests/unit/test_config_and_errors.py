# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import logging
import socket
import ssl

import httpx

from spider import config, log
from spider.config import DEFAULT_USER_AGENT, SpiderSettings
from spider.errors import (
    DecodingError,
    ErrorCategory,
    ErrorKind,
    InvalidURLError,
    TransportError,
    categorize_exception,
    error_category_to_reason,
)


def test_settings_env_overrides(monkeypatch):
    monkeypatch.setenv("SPIDER_HTTP_TIMEOUT", "5.5")
    monkeypatch.setenv("SPIDER_USER_AGENT", "CustomAgent/1.0")
    monkeypatch.setenv("SPIDER_HTTP_REDIRECTS", "false")
    monkeypatch.setenv("SPIDER_HTTP_ACCEPT_ERROR_STATUS", "yes")
    monkeypatch.setenv("SPIDER_HTTP_MAX_BODY_BYTES", "1024")

    settings = config.load_settings()

    assert settings.timeout == 5.5
    assert settings.user_agent == "CustomAgent/1.0"
    assert settings.allow_redirects is False
    assert settings.accept_error_status is True
    assert settings.max_body_bytes == 1024


def test_settings_invalid_env_fall_back(monkeypatch):
    monkeypatch.setenv("SPIDER_HTTP_TIMEOUT", "not-a-number")
    monkeypatch.setenv("SPIDER_HTTP_MAX_BODY_BYTES", "-3")
    monkeypatch.setenv("SPIDER_HTTP_REDIRECTS", "")
    monkeypatch.delenv("SPIDER_USER_AGENT", raising=False)

    settings = config.load_settings()

    assert settings.timeout == SpiderSettings.timeout
    assert settings.max_body_bytes == SpiderSettings.max_body_bytes
    assert settings.allow_redirects is False  # present but not truthy
    assert settings.user_agent == DEFAULT_USER_AGENT


def test_settings_non_positive_timeout_falls_back(monkeypatch):
    monkeypatch.setenv("SPIDER_HTTP_TIMEOUT", "0")
    assert config.load_settings().timeout == SpiderSettings.timeout


def test_load_settings_reads_env_at_call_time(monkeypatch):
    monkeypatch.setenv("SPIDER_HTTP_TIMEOUT", "7.7")
    assert config.load_settings().timeout == 7.7
    monkeypatch.setenv("SPIDER_HTTP_TIMEOUT", "8.8")
    assert config.load_settings().timeout == 8.8


def test_errors_compare_by_kind():
    assert TransportError("connection refused") == TransportError("timed out")
    assert TransportError("x") != DecodingError("x")
    assert DecodingError() == ErrorKind.DECODING_FAILED
    assert InvalidURLError("nope") == ErrorKind.INVALID_URL
    assert isinstance(InvalidURLError("nope"), ValueError)


def test_error_keeps_cause():
    cause = httpx.ConnectError("refused")
    err = TransportError("boom", category=ErrorCategory.CONNECTION_ERROR, cause=cause)
    assert err.cause is cause
    assert err.__cause__ is cause
    assert err.kind is ErrorKind.TRANSPORT_FAILURE
    assert err.message == "boom"


def test_default_message_is_kind_value():
    assert DecodingError().message == "decodingFailed"


def test_categorize_exception_maps_httpx_and_socket_errors():
    assert categorize_exception(httpx.ConnectTimeout("slow")) is ErrorCategory.TIMEOUT
    assert categorize_exception(httpx.ReadTimeout("slow")) is ErrorCategory.TIMEOUT
    assert categorize_exception(httpx.ConnectError("refused")) is ErrorCategory.CONNECTION_ERROR
    assert categorize_exception(httpx.RemoteProtocolError("bad")) is ErrorCategory.CONNECTION_ERROR
    assert categorize_exception(ConnectionRefusedError()) is ErrorCategory.CONNECTION_ERROR
    assert categorize_exception(ssl.SSLError()) is ErrorCategory.SSL_ERROR
    assert categorize_exception(socket.gaierror()) is ErrorCategory.DNS_ERROR
    assert categorize_exception(ValueError("other")) is ErrorCategory.UNKNOWN_ERROR
    assert categorize_exception(None) is ErrorCategory.UNKNOWN_ERROR


def test_categorize_exception_follows_wrapped_cause():
    try:
        try:
            raise socket.gaierror(-2, "Name or service not known")
        except socket.gaierror as inner:
            raise httpx.ConnectError("lookup failed") from inner
    except httpx.ConnectError as exc:
        assert categorize_exception(exc) is ErrorCategory.DNS_ERROR


def test_error_category_to_reason():
    assert error_category_to_reason(ErrorCategory.TIMEOUT) == "Network timeout"
    assert error_category_to_reason(ErrorCategory.HTTP_STATUS)
    assert error_category_to_reason(None) == ""


def test_setup_logging_uses_level(monkeypatch):
    captured = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: captured.update(kwargs))
    log.setup_logging("debug")
    assert captured["level"] == logging.DEBUG
    assert captured["format"] == "%(levelname)s %(name)s: %(message)s"

    log.setup_logging("not-a-level")
    assert captured["level"] == logging.WARNING
