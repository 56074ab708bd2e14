"""Recording test double for the release creator."""

from __future__ import annotations

import threading
from typing import Callable, NamedTuple, Optional


class CreateReleaseCall(NamedTuple):
    release_name: str
    image_name: str
    release_dir: str
    tarball_path: str
    image_tag: str
    registry: str
    version: str


class ReleaseCreator:
    """Records calls to ``create_release`` and raises configured errors."""

    def __init__(self) -> None:
        self.create_release_stub: Optional[Callable[..., None]] = None
        self.create_release_calls: list[CreateReleaseCall] = []
        self._error: Optional[BaseException] = None
        self._errors_on_call: dict[int, Optional[BaseException]] = {}
        self._invocations: dict[str, list[list]] = {}
        self._lock = threading.Lock()

    @property
    def create_release_call_count(self) -> int:
        with self._lock:
            return len(self.create_release_calls)

    def create_release(
        self, release_name, image_name, release_dir, tarball_path, image_tag, registry, version
    ) -> None:
        call = CreateReleaseCall(
            release_name, image_name, release_dir, tarball_path, image_tag, registry, version
        )
        with self._lock:
            index = len(self.create_release_calls)
            has_specific = index in self._errors_on_call
            specific = self._errors_on_call.get(index)
            self.create_release_calls.append(call)
            self._invocations.setdefault("create_release", []).append(list(call))
            stub = self.create_release_stub
            default = self._error
        if stub is not None:
            stub(*call)
            return
        error = specific if has_specific else default
        if error is not None:
            raise error

    def create_release_returns(self, error: Optional[BaseException]) -> None:
        """Make every call raise ``error``; ``None`` makes calls succeed."""
        with self._lock:
            self.create_release_stub = None
            self._error = error

    def create_release_returns_on_call(self, index: int, error: Optional[BaseException]) -> None:
        """Make the call with the given zero-based index raise ``error``."""
        with self._lock:
            self.create_release_stub = None
            self._errors_on_call[index] = error

    def invocations(self) -> dict[str, list[list]]:
        with self._lock:
            return {name: list(calls) for name, calls in self._invocations.items()}