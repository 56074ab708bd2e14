"""Recording test double for the tile zipper."""

from __future__ import annotations

import threading
from typing import Callable, NamedTuple, Optional


class ZipCall(NamedTuple):
    zip_dir: str
    zip_file: str


class UnzipCall(NamedTuple):
    zip_file: str
    dest: str


class Zipper:
    """Records calls to ``zip`` and ``unzip`` and raises configured errors."""

    def __init__(self) -> None:
        self.zip_stub: Optional[Callable[[str, str], None]] = None
        self.unzip_stub: Optional[Callable[[str, str], None]] = None
        self.zip_calls: list[ZipCall] = []
        self.unzip_calls: list[UnzipCall] = []
        self._zip_error: Optional[BaseException] = None
        self._unzip_error: Optional[BaseException] = None
        self._zip_errors_on_call: dict[int, Optional[BaseException]] = {}
        self._unzip_errors_on_call: dict[int, Optional[BaseException]] = {}
        self._invocations: dict[str, list[list]] = {}
        self._lock = threading.Lock()

    @property
    def zip_call_count(self) -> int:
        with self._lock:
            return len(self.zip_calls)

    @property
    def unzip_call_count(self) -> int:
        with self._lock:
            return len(self.unzip_calls)

    def zip(self, zip_dir, zip_file) -> None:
        call = ZipCall(zip_dir, zip_file)
        with self._lock:
            index = len(self.zip_calls)
            has_specific = index in self._zip_errors_on_call
            specific = self._zip_errors_on_call.get(index)
            self.zip_calls.append(call)
            self._invocations.setdefault("zip", []).append(list(call))
            stub = self.zip_stub
            default = self._zip_error
        if stub is not None:
            stub(*call)
            return
        error = specific if has_specific else default
        if error is not None:
            raise error

    def unzip(self, zip_file, dest) -> None:
        call = UnzipCall(zip_file, dest)
        with self._lock:
            index = len(self.unzip_calls)
            has_specific = index in self._unzip_errors_on_call
            specific = self._unzip_errors_on_call.get(index)
            self.unzip_calls.append(call)
            self._invocations.setdefault("unzip", []).append(list(call))
            stub = self.unzip_stub
            default = self._unzip_error
        if stub is not None:
            stub(*call)
            return
        error = specific if has_specific else default
        if error is not None:
            raise error

    def zip_returns(self, error: Optional[BaseException]) -> None:
        """Make every ``zip`` call raise ``error``; ``None`` makes calls succeed."""
        with self._lock:
            self.zip_stub = None
            self._zip_error = error

    def zip_returns_on_call(self, index: int, error: Optional[BaseException]) -> None:
        """Make the ``zip`` call with the given zero-based index raise ``error``."""
        with self._lock:
            self.zip_stub = None
            self._zip_errors_on_call[index] = error

    def unzip_returns(self, error: Optional[BaseException]) -> None:
        """Make every ``unzip`` call raise ``error``; ``None`` makes calls succeed."""
        with self._lock:
            self.unzip_stub = None
            self._unzip_error = error

    def unzip_returns_on_call(self, index: int, error: Optional[BaseException]) -> None:
        """Make the ``unzip`` call with the given zero-based index raise ``error``."""
        with self._lock:
            self.unzip_stub = None
            self._unzip_errors_on_call[index] = error

    def invocations(self) -> dict[str, list[list]]:
        with self._lock:
            return {name: list(calls) for name, calls in self._invocations.items()}