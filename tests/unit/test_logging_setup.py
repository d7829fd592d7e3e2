"""
Unit tests for logging configuration.
"""

import json
import logging

import pytest

from taskify.core.config import Settings
from taskify.core.logging_setup import (
    JsonFormatter,
    RequestIdFilter,
    request_id_var,
    setup_logging,
)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def make_record(msg="hello %s", args=("world",), **extra):
    record = logging.LogRecord("taskify.test", logging.INFO, __file__, 1, msg, args, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJsonFormatter:
    def test_fields(self):
        line = JsonFormatter().format(make_record())

        payload = json.loads(line)
        assert payload["message"] == "hello world"
        assert payload["level"] == "INFO"
        assert payload["logger"] == "taskify.test"
        assert "request_id" not in payload

    def test_request_id_included(self):
        payload = json.loads(JsonFormatter().format(make_record(request_id="abc")))

        assert payload["request_id"] == "abc"


class TestRequestIdFilter:
    def test_no_request_in_progress(self):
        record = make_record()

        assert RequestIdFilter().filter(record) is True
        assert record.request_id is None

    def test_stamps_current_request_id(self):
        record = make_record()
        token = request_id_var.set("req-123")
        try:
            RequestIdFilter().filter(record)
        finally:
            request_id_var.reset(token)

        assert record.request_id == "req-123"
        assert json.loads(JsonFormatter().format(record))["request_id"] == "req-123"

    def test_explicit_request_id_kept(self):
        record = make_record(request_id="explicit")
        token = request_id_var.set("req-123")
        try:
            RequestIdFilter().filter(record)
        finally:
            request_id_var.reset(token)

        assert record.request_id == "explicit"

    @pytest.mark.asyncio
    async def test_logs_during_request_carry_response_id(self, client, caplog):
        caplog.handler.addFilter(RequestIdFilter())
        payload = {"name": "Ada", "email": "ada@example.com", "password": "engine"}

        with caplog.at_level(logging.INFO, logger="taskify.domains.auth.service"):
            response = await client.post("/api/auth/register", json=payload)

        records = [r for r in caplog.records if r.getMessage().startswith("Registered user")]
        assert len(records) == 1
        assert records[0].request_id == response.headers["X-Request-ID"]
        assert request_id_var.get() is None


class TestSetupLogging:
    def test_json_format(self, restore_root_logger):
        setup_logging(Settings(_env_file=None, log_format="json", log_level="debug"))

        assert restore_root_logger.level == logging.DEBUG
        assert len(restore_root_logger.handlers) == 1
        assert isinstance(restore_root_logger.handlers[0].formatter, JsonFormatter)

    def test_idempotent(self, restore_root_logger):
        config = Settings(_env_file=None)
        setup_logging(config)
        setup_logging(config)

        assert len(restore_root_logger.handlers) == 1
        assert not isinstance(restore_root_logger.handlers[0].formatter, JsonFormatter)

    def test_handler_has_request_id_filter(self, restore_root_logger):
        setup_logging(Settings(_env_file=None))

        filters = restore_root_logger.handlers[0].filters
        assert any(isinstance(f, RequestIdFilter) for f in filters)
