"""Command line entry point for winfs-injector."""

from __future__ import annotations

import argparse
import shutil
import sys
import tempfile

from winfs_injector.application import Application
from winfs_injector.release_creator import ReleaseCreator
from winfs_injector.tile_injector import TileInjector
from winfs_injector.zipper import Zipper

DEFAULT_REGISTRY = "https://registry.hub.docker.com"

USAGE = """winfs-injector injects the Windows 2016 root file system into the Windows 2016 Runtime Tile.

Usage: winfs-injector
  --input-tile, -i\t\tpath to input tile (example: /path/to/input.pivotal)
  --output-tile, -o\t\tpath to output tile (example: /path/to/output.pivotal)
  --preserve-extracted, -p\tpreserve the files created during the tile extraction process (useful for debugging)
  --registry, -r\t\tpath to docker registry (example: /path/to/registry, default: "https://registry.hub.docker.com")
  --help, -h\t\t\tprints this usage information
"""


class _UsageError(Exception):
    pass


class _Parser(argparse.ArgumentParser):
    def error(self, message):
        raise _UsageError(message)


def _build_parser() -> argparse.ArgumentParser:
    parser = _Parser(prog="winfs-injector", add_help=False)
    parser.add_argument("-i", "--input-tile", default="")
    parser.add_argument("-o", "--output-tile", default="")
    parser.add_argument("-p", "--preserve-extracted", action="store_true")
    parser.add_argument("-r", "--registry", default=DEFAULT_REGISTRY)
    parser.add_argument("-h", "--help", action="store_true")
    return parser


def main(argv=None) -> int:
    """Run the injector; return the process exit status."""
    try:
        args = _build_parser().parse_args(argv)
    except _UsageError as exc:
        print(exc, file=sys.stderr)
        return 1

    if args.help:
        sys.stdout.write(USAGE)
        return 0

    working_dir = tempfile.mkdtemp()
    if args.preserve_extracted:
        print(f"tile extraction directory: {working_dir}")

    app = Application(ReleaseCreator(), TileInjector(), Zipper())
    try:
        app.run(args.input_tile, args.output_tile, args.registry, working_dir)
    except Exception as exc:
        print(exc, file=sys.stderr)
        return 1
    finally:
        if not args.preserve_extracted:
            shutil.rmtree(working_dir, ignore_errors=True)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())