"""Tests for the JSON formatter and the context filter."""

from __future__ import annotations

import json
import logging

from bookshelf.infra.logging import (
    ContextInjectingFilter,
    JSONFormatter,
    clear_log_context,
    get_log_context,
    set_log_context,
)


def _record(message: str, **extra: object) -> logging.LogRecord:
    record = logging.LogRecord("bookshelf.test", logging.INFO, __file__, 1, message, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_extras_and_static_fields() -> None:
    formatter = JSONFormatter(static={"service": "bookshelf"})

    payload = json.loads(formatter.format(_record("Book created", book_id=7)))

    assert payload["message"] == "Book created"
    assert payload["level"] == "INFO"
    assert payload["service"] == "bookshelf"
    assert payload["book_id"] == 7
    assert payload["timestamp"].endswith("Z")


def test_context_filter_injects_without_overwriting() -> None:
    set_log_context(request_id="req-1", operation="from-context")
    try:
        record = _record("hello", operation="explicit")
        assert ContextInjectingFilter().filter(record) is True
    finally:
        clear_log_context()

    assert record.request_id == "req-1"
    assert record.operation == "explicit"
    assert get_log_context() == {}


def test_configure_logging_installs_filtered_queue_handler() -> None:
    from logging.handlers import QueueHandler

    from bookshelf.infra.logging import configure_logging, shutdown

    root = logging.getLogger()
    previous_level = root.level
    configure_logging(log_level="debug", console_enabled=True, capture_warnings=False)
    try:
        queue_handlers = [h for h in root.handlers if isinstance(h, QueueHandler)]
        assert len(queue_handlers) == 1
        assert any(isinstance(f, ContextInjectingFilter) for f in queue_handlers[0].filters)
        assert root.level == logging.DEBUG
    finally:
        shutdown()
        root.setLevel(previous_level)

    assert not any(isinstance(h, QueueHandler) for h in root.handlers)


def test_configure_logging_without_outputs_skips_queue_handler() -> None:
    from logging.handlers import QueueHandler

    from bookshelf.infra.logging import configure_logging, shutdown

    root = logging.getLogger()
    previous_level = root.level
    configure_logging(log_level="info", console_enabled=False, capture_warnings=False)
    try:
        assert not any(isinstance(h, QueueHandler) for h in root.handlers)
        assert root.level == logging.INFO
    finally:
        shutdown()
        root.setLevel(previous_level)


def test_shutdown_registered_with_atexit_once(monkeypatch) -> None:
    import bookshelf.infra.logging.config as log_config

    registered: list[object] = []
    monkeypatch.setattr(log_config.atexit, "register", registered.append)
    monkeypatch.setattr(log_config, "_SHUTDOWN_REGISTERED", False)

    root = logging.getLogger()
    previous_level = root.level
    try:
        log_config.configure_logging(console_enabled=True, capture_warnings=False)
        log_config.configure_logging(console_enabled=True, capture_warnings=False)
    finally:
        log_config.shutdown()
        root.setLevel(previous_level)

    assert registered == [log_config.shutdown]
