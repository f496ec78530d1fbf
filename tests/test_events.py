from __future__ import annotations

import allure
import pytest

from audio_track_switcher.events import PROGRESS_EVENT, EventEmitter

pytestmark = [
    allure.epic("Audio Tracks"),
    allure.feature("Progress Events"),
]


def test_emit_calls_handlers_in_subscription_order() -> None:
    emitter = EventEmitter()
    calls: list[tuple[str, object]] = []
    emitter.listen(PROGRESS_EVENT, lambda value: calls.append(("first", value)))
    emitter.listen(PROGRESS_EVENT, lambda value: calls.append(("second", value)))
    emitter.listen("other-event", lambda value: calls.append(("other", value)))

    emitter.emit(PROGRESS_EVENT, 12.5)

    assert calls == [("first", 12.5), ("second", 12.5)]


def test_unlisten_stops_delivery() -> None:
    emitter = EventEmitter()
    calls: list[object] = []
    unlisten = emitter.listen(PROGRESS_EVENT, calls.append)

    emitter.emit(PROGRESS_EVENT, 1)
    unlisten()
    unlisten()
    emitter.emit(PROGRESS_EVENT, 2)

    assert calls == [1]


def test_emit_without_listeners_is_noop() -> None:
    EventEmitter().emit(PROGRESS_EVENT, 50)


def test_observer_binds_event_name_and_propagates_errors() -> None:
    emitter = EventEmitter()
    calls: list[object] = []
    emitter.listen("custom-progress", calls.append)
    observer = emitter.observer("custom-progress")

    observer({"progress": 3})
    assert calls == [{"progress": 3}]

    def _broken(_value: object) -> None:
        raise RuntimeError("closed")

    emitter.listen("custom-progress", _broken)
    with pytest.raises(RuntimeError, match="closed"):
        observer(4)
