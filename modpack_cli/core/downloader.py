"""
Handles the low-level streaming of a single file over HTTP onto disk.
"""

import logging
from contextlib import suppress
from pathlib import Path

import aiofiles
import aiohttp

log = logging.getLogger(__name__)


class Downloader:
    """Streams HTTP response bodies to files without buffering them in memory."""

    CHUNK_SIZE = 131072  # 128 KB

    def __init__(self, chunk_size: int = CHUNK_SIZE):
        self.chunk_size = chunk_size

    async def download_file(
        self, session: aiohttp.ClientSession, url: str, destination_path: Path
    ) -> int:
        """
        Downloads `url` to `destination_path`, overwriting any existing file.

        Returns the number of bytes written. On any failure, including
        cancellation, the partial file is removed before the error propagates.
        """
        bytes_written = 0
        async with session.get(url, allow_redirects=True) as response:
            response.raise_for_status()
            try:
                async with aiofiles.open(destination_path, "wb") as f:
                    async for chunk in response.content.iter_chunked(self.chunk_size):
                        await f.write(chunk)
                        bytes_written += len(chunk)
            except BaseException:
                with suppress(OSError):
                    destination_path.unlink()
                log.debug(f"Removed partial download '{destination_path.name}'")
                raise

        log.debug(f"Saved {bytes_written} bytes to '{destination_path}'")
        return bytes_written
