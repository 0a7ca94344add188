"""Severity filter for ``notifications/message`` log notifications."""

from typing import Any, Final

LOG_LEVELS: Final[dict[str, int]] = {
    "debug": 0,
    "info": 1,
    "notice": 2,
    "warning": 3,
    "error": 4,
    "critical": 5,
    "alert": 6,
    "emergency": 7,
}


class LoggingMessageNotification:
    """Decides whether a log message is severe enough to send to the client.

    ``level`` is the threshold the client asked for with ``logging/setLevel``.
    """

    def __init__(self, level: Any):
        self._level = level

    @property
    def level(self) -> Any:
        return self._level

    def valid_level(self) -> bool:
        # str subclasses (e.g. enum members) are not canonical level names
        return type(self._level) is str and self._level in LOG_LEVELS

    def should_notify(self, log_level: str) -> bool:
        """True when ``log_level`` is at or above the threshold.

        Raises:
            KeyError: if either level is not one of the canonical names
        """
        return LOG_LEVELS[log_level] >= LOG_LEVELS[self._level]
