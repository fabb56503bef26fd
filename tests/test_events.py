import pytest

from rpiforecast.common.events import Signal


def test_emit_calls_handlers_in_order() -> None:
    calls: list[tuple[str, int]] = []
    signal = Signal("changed")
    signal.connect(lambda n: calls.append(("a", n)))
    signal.connect(lambda n: calls.append(("b", n)))

    signal.emit(3)

    assert calls == [("a", 3), ("b", 3)]


def test_connect_is_idempotent_and_usable_as_decorator() -> None:
    calls: list[int] = []
    signal = Signal("changed")

    @signal.connect
    def handler(n: int) -> None:
        calls.append(n)

    signal.connect(handler)
    signal.emit(1)

    assert calls == [1]
    assert len(signal) == 1


def test_disconnect() -> None:
    calls: list[int] = []
    signal = Signal("changed")
    handler = signal.connect(calls.append)

    assert signal.disconnect(handler) is True
    assert signal.disconnect(handler) is False
    signal.emit(1)

    assert calls == []


def test_failing_handler_is_logged_and_skipped(caplog: pytest.LogCaptureFixture) -> None:
    calls: list[str] = []
    signal = Signal("updated")

    def broken() -> None:
        raise RuntimeError("boom")

    signal.connect(broken)
    signal.connect(lambda: calls.append("after"))

    signal.emit()

    assert calls == ["after"]
    assert "signal 'updated' failed" in caplog.text


def test_handler_may_disconnect_itself_during_emit() -> None:
    signal = Signal("once")
    calls: list[int] = []

    def once() -> None:
        calls.append(1)
        signal.disconnect(once)

    signal.connect(once)
    signal.emit()
    signal.emit()

    assert calls == [1]
    assert repr(signal) == "Signal('once', handlers=0)"
