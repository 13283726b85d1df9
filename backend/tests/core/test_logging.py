"""
Tests for structured logging configuration.
"""

import logging

import pytest
import structlog

from apps.accounts.services import DjangoUserStore
from apps.core.logging import (
    _add_datadog_trace_fields,
    _convert_duration_to_nanoseconds,
    _mask_phone_numbers,
    bind_contextvars,
    clear_contextvars,
    configure_logging,
    get_logger,
    mask_phone_number,
)
from tests.accounts.factories import UserFactory


class TestConfigureLogging:
    """Tests for configure_logging function."""

    def test_configure_logging_json_format(self):
        """Test that JSON format configuration works."""
        configure_logging(json_format=True, log_level="INFO")

        assert structlog.is_configured()
        assert logging.getLogger().level == logging.INFO

    def test_configure_logging_console_format(self):
        """Test that console format configuration works."""
        configure_logging(json_format=False, log_level="DEBUG")

        assert structlog.is_configured()
        assert logging.getLogger().level == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self):
        configure_logging(json_format=True, log_level="chatty")

        assert logging.getLogger().level == logging.INFO


class TestGetLogger:
    """Tests for get_logger function."""

    def test_get_logger_returns_bound_logger(self):
        """Test that get_logger returns a structlog logger."""
        logger = get_logger("test.module")
        assert logger is not None

    def test_get_logger_with_none_name(self):
        """Test that get_logger works without a name."""
        logger = get_logger(None)
        assert logger is not None


class TestContextVars:
    """Tests for context variable binding."""

    def setup_method(self):
        """Clear context before each test."""
        clear_contextvars()

    def teardown_method(self):
        """Clear context after each test."""
        clear_contextvars()

    def test_bind_contextvars_adds_context(self):
        """Test that bind_contextvars adds context to logs."""
        bind_contextvars(trace_id="abc123", user_id="user_1")

        from structlog.contextvars import get_contextvars

        ctx = get_contextvars()
        assert ctx.get("trace_id") == "abc123"
        assert ctx.get("user_id") == "user_1"

    def test_clear_contextvars_removes_context(self):
        """Test that clear_contextvars removes all bound context."""
        bind_contextvars(trace_id="abc123", user_id="user_1")
        clear_contextvars()

        from structlog.contextvars import get_contextvars

        ctx = get_contextvars()
        assert ctx.get("trace_id") is None
        assert ctx.get("user_id") is None


class TestPhoneNumberMasking:
    """Tests for phone number masking in log events."""

    def test_mask_keeps_last_four_digits(self):
        assert mask_phone_number("+14155551234") == "***1234"

    def test_mask_passes_empty_values_through(self):
        assert mask_phone_number("") == ""
        assert mask_phone_number(None) is None

    def test_processor_masks_phone_number_field(self):
        event = _mask_phone_numbers(
            logging.getLogger(), "info", {"event": "otp_issued", "phone_number": "+14155551234"}
        )

        assert event["phone_number"] == "***1234"
        assert event["event"] == "otp_issued"

    def test_processor_ignores_events_without_phone_number(self):
        event = _mask_phone_numbers(logging.getLogger(), "info", {"event": "health"})

        assert event == {"event": "health"}


class TestMaskedLogOutput:
    """Tests for masked phone numbers in rendered logs."""

    def setup_method(self):
        """Configure logging before caplog attaches its handler."""
        clear_contextvars()
        configure_logging(json_format=True, log_level="DEBUG")

    def test_full_number_never_rendered(self, caplog):
        """A logged phone number should only appear masked in output."""
        logger = get_logger("test.masking")

        with caplog.at_level(logging.DEBUG, logger="test.masking"):
            logger.info("phone_number_verified", phone_number="+14155551234")

        assert "phone_number_verified" in caplog.text
        assert "+14155551234" not in caplog.text

    @pytest.mark.django_db
    def test_user_create_conflict_hides_number(self, caplog):
        """Temp emails carry the phone digits, so conflicts must not log them."""
        UserFactory.create(email="14155551234@phone.local")

        with caplog.at_level(logging.DEBUG, logger="apps.accounts.services"):
            user = DjangoUserStore().create_user(
                {
                    "email": "14155551234@phone.local",
                    "name": "+14155551234",
                    "phone_number": "+14155551234",
                }
            )

        assert user is None
        assert "user_create_conflict" in caplog.text
        assert "***1234" in caplog.text
        assert "14155551234" not in caplog.text


class TestDatadogFieldRenaming:
    """Tests for Datadog-compatible field renaming."""

    def test_correlation_id_renamed_to_trace_id(self):
        """Test that correlation_id is renamed to trace_id for Datadog."""
        event = _add_datadog_trace_fields(
            logging.getLogger(), "info", {"event": "x", "correlation_id": "abc-123"}
        )

        assert event["trace_id"] == "abc-123"
        assert "correlation_id" not in event

    def test_duration_ms_converted_to_nanoseconds(self):
        """Test that duration_ms is converted to duration (nanoseconds)."""
        event = _convert_duration_to_nanoseconds(
            logging.getLogger(), "info", {"event": "x", "duration_ms": 150.5}
        )

        assert event["duration"] == 150_500_000
        assert "duration_ms" not in event
