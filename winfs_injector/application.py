"""Injecting the Windows root file system release into a tile."""

from __future__ import annotations

import os
import re
import shutil
import subprocess
from pathlib import Path
from typing import Any, Callable, Optional

import yaml

IMAGE_NAME = "cloudfoundry/windows2016fs"

_BLOB_PATTERN = re.compile(r"windows.*fs/windows.*fs-(\d+\.\d+\.\d+)\.tgz")


class InjectionError(RuntimeError):
    """Raised when a tile cannot be injected with the file system release."""


def _read_file(path: str) -> bytes:
    return Path(path).read_bytes()


def _remove_all(path: str) -> None:
    if os.path.isdir(path) and not os.path.islink(path):
        shutil.rmtree(path)
    elif os.path.lexists(path):
        os.remove(path)


def _load_yaml(data: bytes) -> Any:
    try:
        return yaml.safe_load(data)
    except yaml.YAMLError as exc:
        raise InjectionError(f"yaml: {exc}") from exc


class Application:
    """Unpacks a tile, builds the embedded release, and repacks the tile."""

    def __init__(
        self,
        release_creator,
        injector,
        zipper,
        read_file: Optional[Callable[[str], bytes]] = None,
        remove_all: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.release_creator = release_creator
        self.injector = injector
        self.zipper = zipper
        self.read_file = read_file or _read_file
        self.remove_all = remove_all or _remove_all

    def run(self, input_tile: str, output_tile: str, registry: str, working_dir: str) -> None:
        """Inject the file system release into ``input_tile`` and write ``output_tile``."""
        if not input_tile:
            raise InjectionError("--input-tile is required")
        if not output_tile:
            raise InjectionError("--output-tile is required")

        extracted_tile_dir = os.path.join(working_dir, "extracted-tile")
        self.zipper.unzip(input_tile, extracted_tile_dir)

        releases_dir = Path(extracted_tile_dir, "releases")
        if releases_dir.is_dir() and any(releases_dir.glob("windows*fs*")):
            print("File system has already been injected in the tile; skipping injection")
            return

        embedded_release_dir = os.path.join(extracted_tile_dir, "embed", "windowsfs-release")
        if not os.path.exists(embedded_release_dir):
            print("No file system found; skipping injection")
            return

        release_version = self._extract_release_version(embedded_release_dir)

        if os.name == "nt":
            self._disable_git_filemode(embedded_release_dir)

        release_name = self._extract_release_name(embedded_release_dir)
        image_tag = self._determine_image_tag(embedded_release_dir)

        tarball_path = os.path.join(
            extracted_tile_dir, "releases", f"{release_name}-{release_version}.tgz"
        )

        self.release_creator.create_release(
            release_name,
            IMAGE_NAME,
            embedded_release_dir,
            tarball_path,
            image_tag,
            registry,
            release_version,
        )
        self.injector.add_release_to_metadata(
            tarball_path, release_name, release_version, extracted_tile_dir
        )
        self.remove_all(embedded_release_dir)
        self.zipper.zip(extracted_tile_dir, output_tile)

    @staticmethod
    def _disable_git_filemode(release_dir: str) -> None:
        commands = (
            ["git", "config", "core.filemode", "false"],
            ["git", "submodule", "foreach", "git", "config", "core.filemode", "false"],
        )
        for command in commands:
            try:
                result = subprocess.run(
                    command,
                    cwd=release_dir,
                    stdout=subprocess.PIPE,
                    stderr=subprocess.STDOUT,
                )
            except OSError as exc:
                raise InjectionError(
                    f"unable to fix file permissions for windows: , {exc}"
                ) from exc
            if result.returncode != 0:
                output = result.stdout.decode(errors="replace")
                raise InjectionError(
                    "unable to fix file permissions for windows: "
                    f"{output}, exit status {result.returncode}"
                )

    def _extract_release_version(self, release_dir: str) -> str:
        raw = self.read_file(os.path.join(release_dir, "VERSION")).decode()
        return raw[:-1] if raw.endswith("\n") else raw

    def _extract_release_name(self, release_dir: str) -> str:
        data = _load_yaml(self.read_file(os.path.join(release_dir, "config", "final.yml")))
        if data is None:
            return ""
        if not isinstance(data, dict):
            raise InjectionError(
                f"yaml: cannot unmarshal {type(data).__name__} into release name file"
            )
        name = data.get("name")
        return "" if name is None else str(name)

    def _determine_image_tag(self, release_dir: str) -> str:
        blobs = _load_yaml(self.read_file(os.path.join(release_dir, "config", "blobs.yml")))
        if blobs is None:
            blobs = {}
        if not isinstance(blobs, dict):
            raise InjectionError(
                f"yaml: cannot unmarshal {type(blobs).__name__} into blobs"
            )

        for key in blobs:
            match = _BLOB_PATTERN.search(str(key))
            if match:
                return match.group(1)

        raise InjectionError(
            "unable to parse tag from embedded rootfs: Please confirm that you are "
            "using the appropriate winfs-injector version for this tile"
        )