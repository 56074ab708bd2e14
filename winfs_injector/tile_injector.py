"""Reading and updating the product metadata inside an extracted tile."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml


class MetadataError(ValueError):
    """Raised when product metadata cannot be located or parsed."""


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return value if isinstance(value, str) else str(value)


@dataclass
class Release:
    """A release entry listed in a tile's product metadata."""

    name: str = ""
    file: str = ""
    version: str = ""

    @classmethod
    def _from_mapping(cls, data: dict) -> Release:
        return cls(
            name=_as_text(data.get("name")),
            file=_as_text(data.get("file")),
            version=_as_text(data.get("version")),
        )

    def _to_mapping(self) -> dict[str, str]:
        return {"name": self.name, "file": self.file, "version": self.version}


@dataclass
class Metadata:
    """Product metadata: the release list plus every other top-level key."""

    releases: list[Release] = field(default_factory=list)
    other: dict[Any, Any] = field(default_factory=dict)

    @classmethod
    def from_yaml(cls, text: str | bytes) -> Metadata:
        """Parse a metadata document."""
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise MetadataError(f"yaml: {exc}") from exc

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise MetadataError(
                f"yaml: cannot unmarshal {type(data).__name__} into product metadata"
            )

        other = dict(data)
        raw_releases = other.pop("releases", None)
        if raw_releases is None:
            raw_releases = []
        if not isinstance(raw_releases, list):
            raise MetadataError(
                f"yaml: cannot unmarshal {type(raw_releases).__name__} into releases"
            )

        releases = []
        for entry in raw_releases:
            if entry is None:
                releases.append(Release())
            elif isinstance(entry, dict):
                releases.append(Release._from_mapping(entry))
            else:
                raise MetadataError(
                    f"yaml: cannot unmarshal {type(entry).__name__} into a release"
                )
        return cls(releases=releases, other=other)

    def to_yaml(self) -> str:
        """Render the metadata as a YAML document."""
        document: dict[Any, Any] = {
            "releases": [release._to_mapping() for release in self.releases]
        }
        for key, value in sorted(self.other.items(), key=lambda item: str(item[0])):
            document[key] = value
        return yaml.safe_dump(document, sort_keys=False, default_flow_style=False)


class TileInjector:
    """Adds releases to the product metadata of an extracted tile."""

    def add_release_to_metadata(
        self, release_path: str, release_name: str, release_version: str, tile_dir: str
    ) -> None:
        """Append a release entry to the tile's single metadata file."""
        release_file_name = os.path.basename(release_path)

        metadata_dir = Path(tile_dir, "metadata")
        metadata_glob = os.path.join(tile_dir, "metadata", "*.yml")
        yaml_files = sorted(metadata_dir.glob("*.yml"))
        if not yaml_files:
            raise MetadataError(
                "expected to find a product metadata file matching path "
                f"'{metadata_glob}', but found none"
            )
        if len(yaml_files) > 1:
            raise MetadataError(
                "expected to find a single metadata file matching path "
                f"'{metadata_glob}', but found multiple"
            )
        metadata_file = yaml_files[0]

        metadata = Metadata.from_yaml(metadata_file.read_text(encoding="utf-8"))
        metadata.releases.append(
            Release(name=release_name, version=release_version, file=release_file_name)
        )
        metadata_file.write_text(metadata.to_yaml(), encoding="utf-8")