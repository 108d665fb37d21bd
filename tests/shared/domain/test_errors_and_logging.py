"""Tests for the shared error taxonomy and logging configuration."""

import logging

import pytest
import structlog
from shared.errors import AuthorizationError, DispatchError, NotFoundError, PreferenceLookupError
from shared.logging import add_context, clear_context, configure_logging, get_log_level


class TestErrors:
    def test_authorization_error_message(self):
        exc = AuthorizationError("assign", actor_id="seller-1")
        assert exc.action == "assign"
        assert "seller-1" in str(exc)

    def test_not_found_error(self):
        exc = NotFoundError("User", "ghost")
        assert exc.entity == "User"
        assert str(exc) == "User ghost not found"

    def test_dispatch_error(self):
        exc = DispatchError("a@example.com", "timeout")
        assert exc.reason == "timeout"

    def test_preference_lookup_error_keeps_cause(self):
        cause = ConnectionError("down")
        exc = PreferenceLookupError("u1", cause=cause)
        assert exc.cause is cause


class TestLogging:
    @pytest.mark.parametrize(
        "env, level",
        [("production", "INFO"), ("development", "DEBUG"), ("test", "WARNING")],
    )
    def test_level_follows_environment(self, monkeypatch, env, level):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.delenv("ENVIRONMENT", raising=False)
        monkeypatch.setenv("PROTEAN_ENV", env)
        assert get_log_level() == level

    def test_explicit_level_wins(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "ERROR")
        assert get_log_level() == "ERROR"

    def test_configure_logging_quietens_protean(self, monkeypatch):
        monkeypatch.delenv("LOG_DIR", raising=False)
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        try:
            configure_logging()
            assert logging.getLogger("protean").level == logging.WARNING
            assert len(root.handlers) == 1
        finally:
            root.handlers, root.level = handlers, level
            structlog.reset_defaults()

    def test_context_binding(self):
        add_context(request_id="r-1")
        assert structlog.contextvars.get_contextvars()["request_id"] == "r-1"
        clear_context()
        assert "request_id" not in structlog.contextvars.get_contextvars()
