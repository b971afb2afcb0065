"""
Read access to a downloaded modpack archive: the manifest and the overrides tree.
"""

import asyncio
import io
import json
import logging
import shutil
import zipfile
from pathlib import Path

from pydantic import ValidationError

from modpack_cli.cli.progress_manager import ProgressReporter
from modpack_cli.exceptions import InvalidModpackError
from modpack_cli.models.modpack import Manifest
from modpack_cli.models.stats import InstallStats
from modpack_cli.utils.path import create_dir, resolve_entry_path

log = logging.getLogger(__name__)

MANIFEST_NAME = "manifest.json"


class ModpackArchive:
    """
    An in-memory, read-only view over a modpack zip.

    Use as a context manager so the underlying zip is released once the
    overrides have been extracted.
    """

    def __init__(self, zip_file: zipfile.ZipFile):
        self._zip = zip_file

    @classmethod
    def from_bytes(cls, data: bytes) -> "ModpackArchive":
        try:
            return cls(zipfile.ZipFile(io.BytesIO(data)))
        except zipfile.BadZipFile as e:
            raise InvalidModpackError(f"Modpack download is not a zip archive: {e}") from e

    def __enter__(self) -> "ModpackArchive":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._zip.close()

    def read_manifest(self) -> Manifest:
        """
        Parses the root `manifest.json`.

        Raises:
            InvalidModpackError: If the entry is missing or is not a valid manifest.
        """
        try:
            raw = self._zip.read(MANIFEST_NAME)
        except KeyError:
            raise InvalidModpackError(
                f"invalid modpack: '{MANIFEST_NAME}' not found in archive"
            ) from None

        try:
            # utf-8-sig tolerates manifests written with a byte order mark
            return Manifest.model_validate(json.loads(raw.decode("utf-8-sig")))
        except (UnicodeDecodeError, json.JSONDecodeError, ValidationError) as e:
            raise InvalidModpackError(f"invalid modpack: bad {MANIFEST_NAME}: {e}") from e

    def override_entries(self, folder: str = "overrides") -> list[tuple[str, zipfile.ZipInfo]]:
        """
        Lists `(relative_path, info)` for every entry below `folder`, in
        archive order. The folder's own marker entry is not included.

        Raises:
            InvalidModpackError: If the archive has no `folder` subtree.
        """
        prefix = folder.strip("/") + "/"
        in_folder = [info for info in self._zip.infolist() if info.filename.startswith(prefix)]
        if not in_folder:
            raise InvalidModpackError(f"Missing '{prefix}' in modpack zip.")
        return [
            (info.filename[len(prefix):], info)
            for info in in_folder
            if info.filename != prefix
        ]

    async def extract_overrides(
        self,
        target_dir: Path,
        progress: ProgressReporter,
        stats: InstallStats,
        folder: str = "overrides",
    ) -> None:
        """Copies the overrides tree onto `target_dir`, one entry at a time."""
        entries = self.override_entries(folder)
        # Validate every path before touching the filesystem.
        destinations = [
            (relative, info, resolve_entry_path(target_dir, relative))
            for relative, info in entries
        ]

        for relative, info, destination in destinations:
            if info.is_dir():
                await asyncio.to_thread(create_dir, destination)
                stats.directories_created += 1
            else:
                await asyncio.to_thread(self._write_entry, info, destination)
                stats.overrides_written += 1
            progress.message(relative)

    def _write_entry(self, info: zipfile.ZipInfo, destination: Path) -> None:
        create_dir(destination.parent)
        with self._zip.open(info) as src, open(destination, "wb") as dst:
            shutil.copyfileobj(src, dst)
        log.debug(f"Extracted '{info.filename}' -> '{destination}'")
