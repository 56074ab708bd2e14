"""Building the Windows file system release tarball."""

from __future__ import annotations

import os
import re
import subprocess
import tempfile
from dataclasses import dataclass, field
from typing import Callable, Mapping, Sequence

CommandRunner = Callable[[Sequence[str], Mapping[str, str]], None]

_VERSION_PATTERN = re.compile(
    r"^[0-9A-Za-z_.]+(-[0-9A-Za-z_.\-]+)?(\+[0-9A-Za-z_.\-]+)?$"
)


class ReleaseCreationError(RuntimeError):
    """Raised when fetching the image or creating the release fails."""


def _run_command(args: Sequence[str], env: Mapping[str, str]) -> None:
    try:
        subprocess.run(list(args), env=dict(env), check=True)
    except FileNotFoundError as exc:
        raise ReleaseCreationError(f"unable to run {args[0]}: {exc}") from exc
    except subprocess.CalledProcessError as exc:
        raise ReleaseCreationError(
            f"{' '.join(args)} exited with status {exc.returncode}"
        ) from exc


def _validate_version(version: str) -> None:
    if not _VERSION_PATTERN.match(version):
        raise ValueError(f"Expected version '{version}' to match version format")


@dataclass
class ReleaseCreator:
    """Fetches the root file system image and creates a release tarball."""

    hydrate_command: str = "hydrate"
    bosh_command: str = "bosh"
    runner: CommandRunner = field(default=_run_command)

    def create_release(
        self,
        release_name: str,
        image_name: str,
        release_dir: str,
        tarball_path: str,
        image_tag: str,
        registry: str,
        version: str,
    ) -> None:
        """Download the image into the release blobs and build the tarball."""
        release_blob = os.path.join(release_dir, "blobs", release_name)
        self.runner(
            [
                self.hydrate_command,
                "download",
                "--image", image_name,
                "--tag", image_tag,
                "--outputDir", release_blob,
                "--registry", registry,
            ],
            dict(os.environ),
        )

        _validate_version(version)

        args = [
            self.bosh_command,
            "create-release",
            "--dir", release_dir,
            "--version", version,
        ]
        if tarball_path:
            args += ["--tarball", os.path.abspath(tarball_path)]

        # Release creation leaves large temporary files under HOME.
        with tempfile.TemporaryDirectory(prefix="winfs-create-release") as home:
            env = dict(os.environ)
            env["HOME"] = home
            self.runner(args, env)