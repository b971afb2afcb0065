"""Shared pytest fixtures for modpack-cli tests."""

import asyncio
import io
import json
import zipfile

import pytest
import pytest_asyncio
from aiohttp import test_utils, web
from rich.console import Console

from modpack_cli.cli.progress_manager import ProgressReporter
from modpack_cli.models.config import InstallConfig


def build_modpack_zip(manifest: dict | None, entries: dict[str, bytes | None]) -> bytes:
    """Builds a modpack zip in memory. A `None` entry value writes a directory marker."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as zf:
        if manifest is not None:
            zf.writestr("manifest.json", json.dumps(manifest))
        for name, data in entries.items():
            if data is None:
                zf.writestr(zipfile.ZipInfo(name), b"")
            else:
                zf.writestr(name, data)
    return buffer.getvalue()


def manifest_for(*pairs: tuple[int, int]) -> dict:
    return {"files": [{"projectID": p, "fileID": f} for p, f in pairs]}


class FakeCurseForge:
    """An aiohttp app standing in for the CurseForge API and its file CDN."""

    def __init__(self):
        self.base_url = ""
        self.metadata: dict[tuple[str, str], dict] = {}
        self.files: dict[str, bytes] = {}
        self.packs: dict[str, bytes] = {}
        self.file_delay = 0.0
        self.delays: dict[str, float] = {}
        self.stalled: dict[str, tuple[bytes, int]] = {}
        self.stalled_served: list[str] = []
        self.release = asyncio.Event()
        self.file_requests: list[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    def build_app(self) -> web.Application:
        app = web.Application()
        app.router.add_get(
            "/api/v2/addon/{project_id}/file/{file_id}", self.handle_metadata
        )
        app.router.add_get("/files/{name}", self.handle_file)
        app.router.add_get("/packs/{name}", self.handle_pack)
        return app

    @property
    def api_base_url(self) -> str:
        return f"{self.base_url}/api/v2"

    def add_mod(
        self, project_id: int, file_id: int, file_name: str, data: bytes, display_name: str
    ) -> None:
        self.files[file_name] = data
        self.metadata[(str(project_id), str(file_id))] = {
            "id": file_id,
            "displayName": display_name,
            "fileName": file_name,
            "downloadUrl": f"{self.base_url}/files/{file_name}",
            "fileLength": len(data),
            "gameVersion": ["1.20.1"],
        }

    def add_missing_mod(self, project_id: int, file_id: int, file_name: str) -> None:
        """Registers metadata whose download URL answers 404."""
        self.metadata[(str(project_id), str(file_id))] = {
            "id": file_id,
            "displayName": file_name,
            "fileName": file_name,
            "downloadUrl": f"{self.base_url}/files/{file_name}",
        }

    def add_stalled_mod(
        self, project_id: int, file_id: int, file_name: str, head: bytes, total: int
    ) -> None:
        """Registers a mod whose body stops after `head` until `release` is set."""
        self.stalled[file_name] = (head, total)
        self.metadata[(str(project_id), str(file_id))] = {
            "id": file_id,
            "displayName": file_name,
            "fileName": file_name,
            "downloadUrl": f"{self.base_url}/files/{file_name}",
            "fileLength": total,
        }

    def add_modpack(
        self, project_id: int, file_id: int, data: bytes, display_name: str = "Test Pack"
    ) -> None:
        name = f"pack-{project_id}-{file_id}.zip"
        self.packs[name] = data
        self.metadata[(str(project_id), str(file_id))] = {
            "id": file_id,
            "displayName": display_name,
            "fileName": name,
            "downloadUrl": f"{self.base_url}/packs/{name}",
        }

    async def handle_metadata(self, request: web.Request) -> web.Response:
        key = (request.match_info["project_id"], request.match_info["file_id"])
        if key not in self.metadata:
            raise web.HTTPNotFound()
        return web.json_response(self.metadata[key])

    async def handle_file(self, request: web.Request) -> web.Response:
        name = request.match_info["name"]
        self.file_requests.append(name)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.file_delay:
                await asyncio.sleep(self.file_delay)
            if name in self.delays:
                await asyncio.sleep(self.delays[name])
            if name in self.stalled:
                return await self._stall(request, name)
            if name not in self.files:
                raise web.HTTPNotFound()
            return web.Response(body=self.files[name])
        finally:
            self.in_flight -= 1

    async def _stall(self, request: web.Request, name: str) -> web.StreamResponse:
        head, total = self.stalled[name]
        response = web.StreamResponse(headers={"Content-Length": str(total)})
        await response.prepare(request)
        await response.write(head)
        self.stalled_served.append(name)
        await self.release.wait()
        return response

    async def handle_pack(self, request: web.Request) -> web.Response:
        name = request.match_info["name"]
        if name not in self.packs:
            raise web.HTTPNotFound()
        return web.Response(body=self.packs[name])


@pytest_asyncio.fixture
async def fake_curseforge():
    """Runs a FakeCurseForge on a local port for the duration of a test."""
    fake = FakeCurseForge()
    server = test_utils.TestServer(fake.build_app())
    await server.start_server()
    fake.base_url = f"http://{server.host}:{server.port}"
    yield fake
    fake.release.set()
    await server.close()


@pytest.fixture
def output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def progress(output: io.StringIO) -> ProgressReporter:
    console = Console(file=output, width=200, soft_wrap=True, color_system=None)
    return ProgressReporter(console)


@pytest.fixture
def make_config(fake_curseforge):
    def _make(**overrides) -> InstallConfig:
        return InstallConfig(api_base_url=fake_curseforge.api_base_url, **overrides)

    return _make
