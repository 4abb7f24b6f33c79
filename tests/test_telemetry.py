from __future__ import annotations

import pytest

from hxlint.runtime import telemetry


class RecordingLogger:
    def __init__(self) -> None:
        self.records: list[tuple[str, str, dict[str, str]]] = []

    def debug_with(self, message: str, pairs: list[tuple[str, str]]) -> None:
        self.records.append(("debug", message, dict(pairs)))

    def info_with(self, message: str, pairs: list[tuple[str, str]]) -> None:
        self.records.append(("info", message, dict(pairs)))

    def error_with(self, message: str, pairs: list[tuple[str, str]]) -> None:
        self.records.append(("error", message, dict(pairs)))


def test_span_handle_reports_metadata_when_done() -> None:
    logger = RecordingLogger()
    handle = telemetry.SpanHandle(logger=logger, span_name="keymaps::resolve")
    handle.add_metadata("status", "match")

    handle.done()

    assert logger.records == [
        ("debug", "span::done", {"span": "keymaps::resolve", "status": "match"})
    ]


def test_span_handle_fail_includes_reason() -> None:
    logger = RecordingLogger()
    handle = telemetry.SpanHandle(
        logger=logger, span_name="documents::load", component_name="documents"
    )

    handle.fail("file not found")

    ((level, message, payload),) = logger.records
    assert (level, message) == ("error", "span::fail")
    assert payload["component"] == "documents"
    assert payload["reason"] == "file not found"


def test_record_event_uses_structured_pairs(monkeypatch) -> None:
    logger = RecordingLogger()
    monkeypatch.setitem(telemetry._LOGGER_CACHE, "hxlint.test", logger)

    telemetry.record_event(
        "validation.finished", data={"errors": 2}, logger_name="hxlint.test"
    )

    assert logger.records == [
        (
            "info",
            "event::validation.finished",
            {"event": "validation.finished", "errors": "2"},
        )
    ]


def test_configure_rejects_unknown_preset() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(preset="loud")
