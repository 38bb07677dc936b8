"""Shared fixtures for formflow tests."""

from typing import Dict, List, Tuple

import pytest

from formflow.core.config import reset_config
from formflow.events import ChangeNotifier
from formflow.utils.logger import LogHandler, LogRecord, get_logger
from formflow.validation import FieldRegistry, FormController


class CaptureHandler(LogHandler):
    """Keeps records in memory."""

    def __init__(self):
        super().__init__()
        self.records: List[LogRecord] = []

    def emit(self, record: LogRecord) -> None:
        self.records.append(record)

    @property
    def messages(self) -> List[str]:
        return [r.message for r in self.records]


class Recorder:
    """Records host callbacks in call order."""

    def __init__(self):
        self.calls: List[Tuple[str, object]] = []

    def values_change(self, name: str, value: str) -> None:
        self.calls.append(("values_change", (name, value)))

    def finish(self, values: Dict[str, str]) -> None:
        self.calls.append(("finish", values))

    def finish_failed(self, values: Dict[str, str]) -> None:
        self.calls.append(("finish_failed", values))

    def named(self, event: str) -> list:
        return [payload for name, payload in self.calls if name == event]


@pytest.fixture(autouse=True)
def fresh_config():
    reset_config()
    yield
    reset_config()


@pytest.fixture
def registry():
    return FieldRegistry()


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def form(recorder):
    notifier = ChangeNotifier(
        on_values_change=recorder.values_change,
        on_finish=recorder.finish,
        on_finish_failed=recorder.finish_failed,
    )
    return FormController(notifier=notifier)


@pytest.fixture
def capture_logs():
    """Attach a capture handler to a named logger."""
    attached = []

    def attach(name: str) -> CaptureHandler:
        handler = CaptureHandler()
        get_logger(name).add_handler(handler)
        attached.append((name, handler))
        return handler

    yield attach

    for name, handler in attached:
        get_logger(name).remove_handler(handler)
