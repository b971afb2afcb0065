"""
The main orchestrator for installing a modpack into a directory.
"""

import logging

from modpack_cli.api.client import CurseForgeClient
from modpack_cli.cli.progress_manager import ProgressReporter
from modpack_cli.models.config import InstallConfig
from modpack_cli.models.modpack import ModpackReference
from modpack_cli.models.stats import InstallStats
from modpack_cli.utils.formatting import format_duration, format_size

from .archive import ModpackArchive
from .downloader import Downloader
from .mod_fetcher import ModFetcher

log = logging.getLogger(__name__)


class ModpackInstaller:
    """Runs the install steps for one modpack, strictly one after another."""

    def __init__(
        self,
        config: InstallConfig,
        client: CurseForgeClient,
        progress: ProgressReporter,
    ):
        self.config = config
        self.client = client
        self.progress = progress

    async def install(self, reference: ModpackReference) -> InstallStats:
        """
        Installs the modpack identified by `reference` into its target directory.

        The steps are: resolve the modpack file, download the zip, read its
        manifest, download every mod into the mods folder, then copy the
        overrides over the target directory. Any failure aborts the install.
        """
        stats = InstallStats()
        target_dir = reference.target_dir

        modpack_info = await self.client.fetch_file_metadata(
            reference.project_id, reference.file_id
        )
        self.progress.message(f"Modpack name: {modpack_info.display_name}")

        self.progress.message("Downloading modpack zip...", end="")
        try:
            data = await self.client.fetch_bytes(modpack_info.download_url)
            archive = ModpackArchive.from_bytes(data)
        except BaseException:
            self.progress.message("failed")
            raise
        self.progress.message("done")

        with archive:
            manifest = archive.read_manifest()
            if manifest.name:
                log.debug(
                    f"Manifest: {manifest.name} {manifest.version or ''} "
                    f"by {manifest.author or 'unknown'}"
                )

            fetcher = ModFetcher(
                self.client,
                Downloader(),
                self.progress,
                stats,
                max_workers=self.config.max_workers,
            )
            await fetcher.fetch_all(manifest, target_dir / self.config.mods_dir)

            self.progress.message("Expanding overrides...")
            await archive.extract_overrides(
                target_dir, self.progress, stats, folder=manifest.overrides
            )

        self.progress.message("Finish!")
        log.debug(
            f"Installed {stats.mods_downloaded} mods "
            f"({format_size(stats.bytes_downloaded)} of "
            f"{format_size(stats.bytes_expected)} listed), "
            f"{stats.overrides_written} override files and "
            f"{stats.directories_created} directories in "
            f"{format_duration(stats.elapsed)}."
        )
        return stats
