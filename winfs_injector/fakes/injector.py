"""Recording test double for the metadata injector."""

from __future__ import annotations

import threading
from typing import Callable, NamedTuple, Optional


class AddReleaseToMetadataCall(NamedTuple):
    release_path: str
    release_name: str
    release_version: str
    extracted_tile_dir: str


class Injector:
    """Records calls to ``add_release_to_metadata`` and raises configured errors."""

    def __init__(self) -> None:
        self.add_release_to_metadata_stub: Optional[Callable[[str, str, str, str], None]] = None
        self.add_release_to_metadata_calls: list[AddReleaseToMetadataCall] = []
        self._error: Optional[BaseException] = None
        self._errors_on_call: dict[int, Optional[BaseException]] = {}
        self._invocations: dict[str, list[list]] = {}
        self._lock = threading.Lock()

    @property
    def add_release_to_metadata_call_count(self) -> int:
        with self._lock:
            return len(self.add_release_to_metadata_calls)

    def add_release_to_metadata(
        self, release_path, release_name, release_version, extracted_tile_dir
    ) -> None:
        call = AddReleaseToMetadataCall(
            release_path, release_name, release_version, extracted_tile_dir
        )
        with self._lock:
            index = len(self.add_release_to_metadata_calls)
            has_specific = index in self._errors_on_call
            specific = self._errors_on_call.get(index)
            self.add_release_to_metadata_calls.append(call)
            self._invocations.setdefault("add_release_to_metadata", []).append(list(call))
            stub = self.add_release_to_metadata_stub
            default = self._error
        if stub is not None:
            stub(*call)
            return
        error = specific if has_specific else default
        if error is not None:
            raise error

    def add_release_to_metadata_returns(self, error: Optional[BaseException]) -> None:
        """Make every call raise ``error``; ``None`` makes calls succeed."""
        with self._lock:
            self.add_release_to_metadata_stub = None
            self._error = error

    def add_release_to_metadata_returns_on_call(
        self, index: int, error: Optional[BaseException]
    ) -> None:
        """Make the call with the given zero-based index raise ``error``."""
        with self._lock:
            self.add_release_to_metadata_stub = None
            self._errors_on_call[index] = error

    def invocations(self) -> dict[str, list[list]]:
        with self._lock:
            return {name: list(calls) for name, calls in self._invocations.items()}