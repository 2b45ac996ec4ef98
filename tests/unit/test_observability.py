"""Unit tests for structured logging utilities in ``observability``."""

from __future__ import annotations

import logging

import pytest

from lib_client_config import bind_trace_id, get_logger
from lib_client_config.observability import TRACE_ID, log_info, make_event


def test_null_handler_present() -> None:
    """Package logger should always include a NullHandler to avoid surprises."""

    logger = get_logger()
    assert any(isinstance(handler, logging.NullHandler) for handler in logger.handlers)


def test_trace_id_in_log(caplog: pytest.LogCaptureFixture) -> None:
    """Structured logs should include the bound trace identifier and contextual fields."""

    caplog.set_level(logging.INFO, logger="lib_client_config")
    bind_trace_id("trace-123")
    try:
        log_info("configuration_finalized", layer="final", service="demo")
    finally:
        bind_trace_id(None)
    record = caplog.records[-1]
    assert getattr(record, "context") == {"trace_id": "trace-123", "layer": "final", "service": "demo"}


def test_bind_trace_id_clears_context() -> None:
    bind_trace_id("trace-temp")
    bind_trace_id(None)
    assert TRACE_ID.get() is None


def test_make_event_merges_optional_payload() -> None:
    assert make_event("builder", "demo", {"filled": ["endpoint"]}) == {
        "layer": "builder",
        "service": "demo",
        "filled": ["endpoint"],
    }
    assert make_event("global", None) == {"layer": "global", "service": None}


def test_pipeline_events_are_documented(caplog: pytest.LogCaptureFixture) -> None:
    """Every event a finalization emits is listed in the module's event catalogue."""

    from lib_client_config import observability
    from tests.support import ScriptedRegionProvider, make_builder

    caplog.set_level(logging.DEBUG, logger="lib_client_config")
    make_builder(region_provider=ScriptedRegionProvider("eu-west-1")).sync_client_configuration()
    emitted = {record.getMessage() for record in caplog.records}
    assert {"layer_applied", "configuration_finalized", "region_detected"} <= emitted
    for event in emitted:
        assert f"``{event}``" in (observability.__doc__ or "")
