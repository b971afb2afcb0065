"""
Async client for the CurseForge addon API and its file CDN.
"""

import logging
import time
from typing import Any, Dict, Optional

import aiohttp

from modpack_cli.models.config import InstallConfig
from modpack_cli.models.modpack import FileMetadata

log = logging.getLogger(__name__)


class CurseForgeClient:
    """
    Async client for the CurseForge addon API (v2).

    A single aiohttp session is shared by metadata lookups and file downloads,
    with the connection pool sized from the configured worker count.
    """

    def __init__(self, config: InstallConfig):
        self.base_url: str = config.api_base_url
        self.user_agent: str = config.user_agent
        self.max_workers: int = config.max_workers
        self.timeout: float = config.timeout

        self._session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self) -> "CurseForgeClient":
        await self._initialize_session()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def _initialize_session(self) -> None:
        """Ensures an active aiohttp session is available."""
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(
                limit=self.max_workers * 2,
                limit_per_host=self.max_workers,
                ttl_dns_cache=300,
            )
            self._session = aiohttp.ClientSession(
                connector=connector,
                headers={
                    "User-Agent": self.user_agent,
                    "Accept-Encoding": "gzip, deflate",
                },
                timeout=aiohttp.ClientTimeout(total=self.timeout or None),
            )
            log.debug(f"Created HTTP session with limit_per_host={self.max_workers}")

    async def get_session(self) -> aiohttp.ClientSession:
        await self._initialize_session()
        return self._session

    async def close(self) -> None:
        """Gracefully closes the aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def api_call(self, endpoint: str) -> Dict[str, Any]:
        """Makes a GET call against the API and returns the decoded JSON body."""
        session = await self.get_session()
        url = f"{self.base_url}/{endpoint}"
        start_time = time.monotonic()

        async with session.get(url) as r:
            duration_ms = (time.monotonic() - start_time) * 1000
            log.debug(f"GET {endpoint} -> {r.status} ({duration_ms:.0f} ms)")
            r.raise_for_status()
            # The API does not always label its JSON as application/json.
            return await r.json(content_type=None)

    async def fetch_file_metadata(
        self, project_id: str | int, file_id: str | int
    ) -> FileMetadata:
        """Resolves a project/file identifier pair to its download metadata."""
        data = await self.api_call(f"addon/{project_id}/file/{file_id}")
        return FileMetadata.model_validate(data)

    async def fetch_bytes(self, url: str) -> bytes:
        """Downloads a whole response body into memory."""
        session = await self.get_session()
        async with session.get(url, allow_redirects=True) as r:
            r.raise_for_status()
            body = await r.read()
        log.debug(f"Fetched {len(body)} bytes from {url}")
        return body
