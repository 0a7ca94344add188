from typing import Any

import pytest

from mcp_dispatch import Configuration, Server


class RecordingReporter:
    """Collects every (exception, context) pair handed to the exception reporter."""

    def __init__(self) -> None:
        self.reports: list[tuple[BaseException, dict[str, Any]]] = []

    def __call__(self, exception: BaseException, context: dict[str, Any]) -> None:
        self.reports.append((exception, context))


class RecordingInstrumentation:
    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []

    def __call__(self, data: dict[str, Any]) -> None:
        self.calls.append(data)

    @property
    def last(self) -> dict[str, Any]:
        return self.calls[-1]


class RecordingTransport:
    def __init__(self) -> None:
        self.notifications: list[str] = []

    def send_notification(self, method: str, params: dict[str, Any] | None = None) -> None:
        self.notifications.append(method)


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def instrumentation() -> RecordingInstrumentation:
    return RecordingInstrumentation()


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def configuration(reporter: RecordingReporter, instrumentation: RecordingInstrumentation) -> Configuration:
    return Configuration(exception_reporter=reporter, instrumentation_callback=instrumentation)


@pytest.fixture
def server(configuration: Configuration, transport: RecordingTransport) -> Server:
    return Server("test-server", "1.2.3", configuration=configuration, transport=transport)
