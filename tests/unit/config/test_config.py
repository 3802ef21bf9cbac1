"""Tests for settings validation and log redaction."""

import pytest
import structlog
from pydantic import ValidationError

import tradehub.config
from tradehub.config import Settings, bind_message_context, clear_message_context
from tradehub.config.logging import REDACTED, redact_sensitive_values


class TestSettings:
    def test_celery_urls_default_to_redis(self):
        settings = Settings(redis_url="redis://cache:6379/2")

        assert settings.celery_broker_url == "redis://cache:6379/2"
        assert settings.celery_result_backend == "redis://cache:6379/2"

    def test_parser_order_is_normalized(self):
        settings = Settings(parser_order=[" Volbroker_FIX_AE "])

        assert settings.parser_order == ["volbroker_fix_ae"]

    def test_duplicate_parser_names_rejected(self):
        with pytest.raises(ValidationError):
            Settings(parser_order=["volbroker_fix_ae", "VOLBROKER_FIX_AE"])

    def test_batch_size_bounds(self):
        with pytest.raises(ValidationError):
            Settings(parse_batch_size=0)

    def test_sync_url_for_migrations(self):
        settings = Settings(database_url="postgresql+asyncpg://u:p@db/stp")

        assert settings.database_url_sync == "postgresql://u:p@db/stp"


class TestRedaction:
    def test_sensitive_keys_are_replaced_recursively(self):
        event = {
            "event": "process_message.started",
            "message_in_id": 7,
            "raw_payload": "8=FIX.4.4|1903=LEI",
            "settings": {"database_url": "postgresql://u:p@db/stp", "parse_batch_size": 100},
        }

        redacted = redact_sensitive_values(None, "info", event)

        assert redacted["message_in_id"] == 7
        assert redacted["raw_payload"] == REDACTED
        assert redacted["settings"] == {"database_url": REDACTED, "parse_batch_size": 100}


class TestMessageContext:
    def test_public_logging_surface(self):
        assert set(tradehub.config.__all__) == {
            "Settings",
            "get_settings",
            "setup_logging",
            "bind_message_context",
            "clear_message_context",
        }

    def test_bind_replaces_previous_context_and_clear_empties_it(self):
        bind_message_context(1, task_id="t-1")
        bind_message_context(2)

        assert structlog.contextvars.get_contextvars() == {"message_in_id": 2}

        clear_message_context()

        assert structlog.contextvars.get_contextvars() == {}
