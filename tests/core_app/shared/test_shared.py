from __future__ import annotations

import io
import json
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from ledgerx_core_app.shared.telemetry import TelemetryLogger, build_event
from ledgerx_core_app.ui.shared.error_presenter import ErrorPresenter
from ledgerx_core_app.ui.shared.notification_center import NotificationCenter
from ledgerx_core_app.ui.shared.request_sequencer import RequestSequencer
from ledgerx_core_app.ui.shared.validators import parse_amount, validate_shift_declaration
from ledgerx_core_app.ui.shared.view_state import ViewStateStatus, resolve_state


def test_build_event_rejects_unknown_category() -> None:
    with pytest.raises(ValueError):
        build_event(category="billing", name="x", module="pos", action="x")


@pytest.mark.parametrize("key", ["ruc", "Email", "identificacion", "sessionid"])
def test_build_event_rejects_pii_context(key: str) -> None:
    with pytest.raises(ValueError):
        build_event(category="pos", name="checkout", module="pos", action="checkout", context={key: "x"})


def test_telemetry_logger_appends_jsonl(tmp_path) -> None:
    target = tmp_path / "events" / "core_app.jsonl"
    stream = io.StringIO()
    telemetry = TelemetryLogger(app_name="core_app", enabled=True, log_file=target, stdout_sink=True, stdout_stream=stream)
    event = build_event(
        category="inventory",
        name="api_call_result",
        module="inventory",
        action="load",
        success=True,
        duration_ms=12,
        context={"mode": "agrupado"},
        now=datetime(2024, 5, 1, tzinfo=timezone.utc),
    )
    assert telemetry.emit(event) is True
    assert telemetry.emit(event) is True

    lines = target.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    payload = json.loads(lines[0])
    assert payload["app_name"] == "core_app"
    assert payload["timestamp_utc"] == "2024-05-01T00:00:00+00:00"
    assert payload["context"] == {"mode": "agrupado"}
    assert "error_code" not in payload
    assert stream.getvalue().count("\n") == 2


def test_disabled_telemetry_writes_nothing(tmp_path) -> None:
    target = tmp_path / "core_app.jsonl"
    telemetry = TelemetryLogger(app_name="core_app", log_file=target)
    assert telemetry.enabled is False
    assert telemetry.emit(build_event(category="auth", name="login", module="auth", action="login")) is False
    assert not target.exists()


@pytest.mark.parametrize(
    ("is_loading", "error", "has_data", "expected"),
    [
        (True, None, False, ViewStateStatus.LOADING),
        (False, "falló", True, ViewStateStatus.PARTIAL_ERROR),
        (False, "falló", False, ViewStateStatus.FATAL_ERROR),
        (False, None, False, ViewStateStatus.EMPTY),
        (False, None, True, ViewStateStatus.SUCCESS),
    ],
)
def test_resolve_state(is_loading: bool, error: str | None, has_data: bool, expected: ViewStateStatus) -> None:
    assert resolve_state(is_loading=is_loading, error=error, has_data=has_data).status is expected


@pytest.mark.parametrize(
    ("status", "message", "category"),
    [
        (0, "sin red", "transport"),
        (422, "x", "validation"),
        (403, "x", "permission_denied"),
        (409, "x", "conflict"),
        (502, "x", "server"),
        (None, "El campo es obligatorio", "validation"),
        (None, "algo raro", "unknown"),
    ],
)
def test_error_presenter_categories(status: int | None, message: str, category: str) -> None:
    presented = ErrorPresenter().present(message=message, status=status, action="load", allow_retry=True)
    assert presented.category == category
    assert presented.details["message"] == message
    assert presented.safe_to_retry is (category in {"transport", "server"})


def test_notification_center_keeps_order() -> None:
    center = NotificationCenter()
    assert center.last is None
    center.push(level="info", title="POS", message="uno")
    center.push(level="success", title="POS", message="dos")
    assert center.last["message"] == "dos"
    assert center.render()["count"] == 2
    center.clear()
    assert center.render() == {"count": 0, "messages": []}


def test_request_sequencer_only_latest_token_is_current() -> None:
    sequencer = RequestSequencer()
    first = sequencer.issue()
    second = sequencer.issue()
    assert sequencer.is_current(first) is False
    assert sequencer.is_current(second) is True
    sequencer.invalidate()
    assert sequencer.is_current(second) is False


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("120,50", Decimal("120.50")), ("", Decimal("0")), (None, Decimal("0")), ("abc", Decimal("0")), ("NaN", Decimal("0")), (7, Decimal("7"))],
)
def test_parse_amount(raw, expected: Decimal) -> None:
    assert parse_amount(raw) == expected


def test_shift_declaration_rejects_negative_amounts() -> None:
    result = validate_shift_declaration({"efectivo_total": "-1", "tarjeta_total": "5"})
    assert result.ok is False
    assert set(result.field_errors) == {"efectivo_total"}
    assert validate_shift_declaration({}).ok is True
