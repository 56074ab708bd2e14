"""Recording test double for a release extractor."""

from __future__ import annotations

import threading
from typing import Callable, NamedTuple, Optional


class ExtractWindowsFSReleaseCall(NamedTuple):
    input_tile: str
    output_dir: str


class Extractor:
    """Records calls to ``extract_windows_fs_release`` and answers with configured results."""

    def __init__(self) -> None:
        self.extract_windows_fs_release_stub: Optional[Callable[[str, str], str]] = None
        self.extract_windows_fs_release_calls: list[ExtractWindowsFSReleaseCall] = []
        self._result = ""
        self._error: Optional[BaseException] = None
        self._invocations: dict[str, list[list]] = {}
        self._lock = threading.Lock()

    @property
    def extract_windows_fs_release_call_count(self) -> int:
        with self._lock:
            return len(self.extract_windows_fs_release_calls)

    def extract_windows_fs_release(self, input_tile: str, output_dir: str) -> str:
        call = ExtractWindowsFSReleaseCall(input_tile, output_dir)
        with self._lock:
            self.extract_windows_fs_release_calls.append(call)
            self._invocations.setdefault("extract_windows_fs_release", []).append(list(call))
            stub = self.extract_windows_fs_release_stub
            result, error = self._result, self._error
        if stub is not None:
            return stub(input_tile, output_dir)
        if error is not None:
            raise error
        return result

    def extract_windows_fs_release_returns(
        self, result: str, error: Optional[BaseException]
    ) -> None:
        """Make every call return ``result``, or raise ``error`` when it is set."""
        with self._lock:
            self.extract_windows_fs_release_stub = None
            self._result = result
            self._error = error

    def invocations(self) -> dict[str, list[list]]:
        with self._lock:
            return {name: list(calls) for name, calls in self._invocations.items()}