"""Test helpers for asserting on structured ``logger.<level>(event, extra=...)`` calls."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional


@dataclass(frozen=True)
class LogCall:
    level: str
    message: str
    extra: Dict[str, Any] = field(default_factory=dict)
    exc_info: bool = False


class RecordingLogger:
    """Drop-in for a module-level ``logger``; monkeypatch it over the real one."""

    def __init__(self) -> None:
        self.records: List[LogCall] = []

    def _log(self, level: str, message: str, **kwargs: Any) -> None:
        self.records.append(
            LogCall(
                level=level,
                message=message,
                extra=dict(kwargs.get("extra") or {}),
                exc_info=bool(kwargs.get("exc_info")) or level == "exception",
            )
        )

    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._log("debug", message, **kwargs)

    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._log("info", message, **kwargs)

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._log("warning", message, **kwargs)

    def exception(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._log("exception", message, **kwargs)

    def messages(self, level: Optional[str] = None) -> List[str]:
        return [call.message for call in self.records if level in (None, call.level)]


def find_log(records: Iterable[LogCall], *, level: str, message: str) -> LogCall:
    for call in records:
        if (call.level, call.message) == (level, message):
            return call
    raise AssertionError(f"Log '{message}' at level '{level}' not recorded")


def assert_extra_contains(record: LogCall, **expected: Any) -> None:
    mismatched = {
        key: record.extra.get(key)
        for key, value in expected.items()
        if record.extra.get(key) != value
    }
    assert not mismatched, f"{record.message}: unexpected extra values {mismatched!r}"


def assert_extra_has_keys(record: LogCall, keys: Iterable[str]) -> None:
    missing = [key for key in keys if key not in record.extra]
    assert not missing, f"{record.message}: missing keys in log extra {missing}"
