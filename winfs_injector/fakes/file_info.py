"""Recording test double for file information objects."""

from __future__ import annotations

import threading
from datetime import datetime, timezone
from typing import Any, Callable

_METHODS = ("is_dir", "mod_time", "mode", "name", "size", "sys")

_ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)


def _zero_values() -> dict[str, Any]:
    return {
        "is_dir": False,
        "mod_time": _ZERO_TIME,
        "mode": 0,
        "name": "",
        "size": 0,
        "sys": None,
    }


class FileInfo:
    """Answers file information queries with configured values and records each query.

    A callable placed in ``stubs`` under a method name takes precedence over
    configured values until ``set_returns`` or ``set_returns_on_call`` is used
    for that method again.
    """

    def __init__(self) -> None:
        self.stubs: dict[str, Callable[[], Any]] = {}
        self._returns: dict[str, Any] = _zero_values()
        self._returns_on_call: dict[str, dict[int, Any]] = {m: {} for m in _METHODS}
        self._call_counts: dict[str, int] = dict.fromkeys(_METHODS, 0)
        self._invocations: dict[str, list[list]] = {}
        self._lock = threading.Lock()

    @staticmethod
    def _check(method: str) -> None:
        if method not in _METHODS:
            raise ValueError(f"unknown file info method: {method!r}")

    def _call(self, method: str) -> Any:
        with self._lock:
            index = self._call_counts[method]
            specific = self._returns_on_call[method]
            has_specific = index in specific
            value = specific.get(index)
            self._call_counts[method] = index + 1
            self._invocations.setdefault(method, []).append([])
            stub = self.stubs.get(method)
            default = self._returns[method]
        if stub is not None:
            return stub()
        return value if has_specific else default

    def is_dir(self) -> bool:
        return self._call("is_dir")

    def mod_time(self) -> datetime:
        return self._call("mod_time")

    def mode(self) -> int:
        return self._call("mode")

    def name(self) -> str:
        return self._call("name")

    def size(self) -> int:
        return self._call("size")

    def sys(self) -> Any:
        return self._call("sys")

    def set_returns(self, method: str, value: Any) -> None:
        """Make every call of ``method`` return ``value``."""
        self._check(method)
        with self._lock:
            self.stubs.pop(method, None)
            self._returns[method] = value

    def set_returns_on_call(self, method: str, index: int, value: Any) -> None:
        """Make the call of ``method`` with the given zero-based index return ``value``."""
        self._check(method)
        with self._lock:
            self.stubs.pop(method, None)
            self._returns_on_call[method][index] = value

    def call_count(self, method: str) -> int:
        """Number of times ``method`` has been called."""
        self._check(method)
        with self._lock:
            return self._call_counts[method]

    def invocations(self) -> dict[str, list[list]]:
        with self._lock:
            return {name: list(calls) for name, calls in self._invocations.items()}