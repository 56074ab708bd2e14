"""Creating and extracting tile archives."""

from __future__ import annotations

import errno
import os
import shutil
import stat
import zipfile


class Zipper:
    """Zips a directory into a tile and unzips a tile into a directory."""

    def zip(self, zip_dir: str, output_file: str) -> None:
        """Archive every entry under ``zip_dir`` into ``output_file``."""
        if not os.path.isdir(zip_dir):
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), zip_dir)

        staging_file = f"{output_file}.zip"
        try:
            with zipfile.ZipFile(staging_file, "w", zipfile.ZIP_DEFLATED) as archive:
                for dirpath, dirnames, filenames in os.walk(zip_dir):
                    dirnames.sort()
                    for name in sorted(dirnames) + sorted(filenames):
                        path = os.path.join(dirpath, name)
                        arcname = os.path.relpath(path, zip_dir).replace(os.sep, "/")
                        archive.write(path, arcname)
        except BaseException:
            if os.path.exists(staging_file):
                os.remove(staging_file)
            raise

        os.replace(staging_file, output_file)

    def unzip(self, zip_file: str, output_dir: str) -> None:
        """Extract ``zip_file`` into ``output_dir``, keeping file modes."""
        with zipfile.ZipFile(zip_file) as archive:
            os.makedirs(output_dir, exist_ok=True)
            root = os.path.realpath(output_dir)
            for info in archive.infolist():
                self._extract_entry(archive, info, root)

    @staticmethod
    def _extract_entry(archive: zipfile.ZipFile, info: zipfile.ZipInfo, root: str) -> None:
        target = os.path.realpath(os.path.join(root, info.filename))
        if target != root and not target.startswith(root + os.sep):
            raise ValueError(f"illegal file path: {info.filename}")

        mode = info.external_attr >> 16
        if info.is_dir():
            os.makedirs(target, exist_ok=True)
            return

        if os.path.lexists(target):
            raise FileExistsError(errno.EEXIST, "file already exists", target)
        os.makedirs(os.path.dirname(target), exist_ok=True)

        if stat.S_ISLNK(mode):
            link_target = archive.read(info).decode("utf-8")
            os.symlink(link_target, target)
            return

        with archive.open(info) as source, open(target, "wb") as destination:
            shutil.copyfileobj(source, destination)
        if stat.S_IMODE(mode):
            os.chmod(target, stat.S_IMODE(mode))