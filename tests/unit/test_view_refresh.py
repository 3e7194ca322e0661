from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from fakes import FailingPublisher, RecordingPublisher

from foh.application.mappers.event_envelope import serialize_event
from foh.application.use_cases.context import TraceContext
from foh.application.use_cases.view_refresh import ViewRefresher, view_channel
from foh.infrastructure.messaging.redis_event_listener import view_from_channel
from foh.infrastructure.observability.logging_config import JsonFormatter


def test_notify_publishes_to_each_view_channel() -> None:
    publisher = RecordingPublisher()

    ViewRefresher(publisher).notify(("waiter", "kitchen"), "{}")

    assert publisher.channels == [view_channel("waiter"), view_channel("kitchen")]
    assert view_channel("waiter") == "views:waiter"


def test_notify_swallows_and_logs_broker_errors(caplog) -> None:
    with caplog.at_level(logging.WARNING):
        ViewRefresher(FailingPublisher()).notify(("manager",), "{}")

    assert "view_refresh_publish_failed" in caplog.text


def test_event_envelope_shape() -> None:
    message = serialize_event(
        event_type="bill.paid",
        occurred_at=datetime(2026, 10, 17, 12, 0, tzinfo=timezone.utc),
        payload={"billId": "bil_1"},
        trace_ctx=TraceContext(trace_id="abc", request_id="req-9"),
    )

    envelope = json.loads(message)
    assert envelope["event_type"] == "bill.paid"
    assert envelope["payload"] == {"billId": "bil_1"}
    assert envelope["trace_id"] == "abc"
    assert envelope["occurred_at"].startswith("2026-10-17T12:00:00")


def test_json_formatter_includes_extra_fields() -> None:
    record = logging.LogRecord(
        name="foh.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="table_release_checked",
        args=(),
        exc_info=None,
    )
    record.table_number = 4
    record.released = True

    line = json.loads(JsonFormatter(service="foh-test").format(record))

    assert line["message"] == "table_release_checked"
    assert line["table_number"] == 4
    assert line["released"] is True
    assert line["level"] == "INFO"
    assert line["service"] == "foh-test"


def test_fanout_only_relays_known_views() -> None:
    assert view_from_channel("views:kitchen") == "kitchen"
    assert view_from_channel("views:payroll") is None
    assert view_from_channel("events:kitchen") is None
