"""
Downloads every mod listed in a modpack manifest, a bounded number at a time.
"""

import asyncio
import logging
from pathlib import Path

from modpack_cli.api.client import CurseForgeClient
from modpack_cli.cli.progress_manager import DownloadCounter, ProgressReporter
from modpack_cli.models.modpack import Manifest, ManifestFile
from modpack_cli.models.stats import InstallStats
from modpack_cli.utils.path import create_dir, mod_file_path

from .downloader import Downloader

log = logging.getLogger(__name__)


class ModFetcher:
    """
    Resolves and downloads manifest entries concurrently.

    At most `max_workers` entries are in flight at once. The first failure
    cancels the remaining entries and is re-raised once they have unwound.
    """

    def __init__(
        self,
        client: CurseForgeClient,
        downloader: Downloader,
        progress: ProgressReporter,
        stats: InstallStats,
        max_workers: int = 6,
    ):
        self.client = client
        self.downloader = downloader
        self.progress = progress
        self.stats = stats
        self.semaphore = asyncio.Semaphore(max_workers)

    async def fetch_all(self, manifest: Manifest, mods_dir: Path) -> None:
        await asyncio.to_thread(create_dir, mods_dir)

        total = len(manifest.files)
        self.stats.mods_total = total
        self.progress.message(f"Downloading {total} files...")

        async with self.progress.counter(total) as counter:
            tasks = [
                asyncio.create_task(self._fetch_one(entry, mods_dir, counter))
                for entry in manifest.files
            ]
            try:
                await asyncio.gather(*tasks)
            except BaseException:
                for task in tasks:
                    task.cancel()
                await asyncio.gather(*tasks, return_exceptions=True)
                raise

    async def _fetch_one(
        self, entry: ManifestFile, mods_dir: Path, counter: DownloadCounter
    ) -> None:
        async with self.semaphore:
            metadata = await self.client.fetch_file_metadata(
                entry.project_id, entry.file_id
            )
            destination = mod_file_path(mods_dir, metadata.file_name)
            session = await self.client.get_session()
            size = await self.downloader.download_file(
                session, metadata.download_url, destination
            )

        if metadata.file_length is not None:
            self.stats.bytes_expected += metadata.file_length
            if metadata.file_length != size:
                log.debug(
                    f"'{metadata.file_name}' is {size} bytes, "
                    f"API listed {metadata.file_length}"
                )

        self.stats.mods_downloaded += 1
        self.stats.bytes_downloaded += size
        counter.report(metadata.display_name)
