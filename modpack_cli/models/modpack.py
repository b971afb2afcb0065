"""
Pydantic models for modpack links, CurseForge file metadata and the
archive manifest.
"""

from pathlib import Path

from pydantic import BaseModel, Field


class ModpackReference(BaseModel):
    """The project/file pair parsed from a curseforge:// link plus the install target."""

    project_id: str
    file_id: str
    target_dir: Path

    class Config:
        frozen = True


class FileMetadata(BaseModel):
    """Metadata describing a single downloadable file on CurseForge."""

    id: int
    display_name: str = Field(alias="displayName")
    file_name: str = Field(alias="fileName")
    download_url: str = Field(alias="downloadUrl")
    file_length: int | None = Field(None, alias="fileLength")

    class Config:
        populate_by_name = True
        extra = "ignore"


class ManifestFile(BaseModel):
    project_id: int = Field(alias="projectID")
    file_id: int = Field(alias="fileID")

    class Config:
        populate_by_name = True
        extra = "ignore"


class Manifest(BaseModel):
    """
    The `manifest.json` index shipped inside a modpack archive.

    Only `files` is required. The descriptive fields are informational and the
    overrides folder falls back to `overrides` when the manifest omits it.
    """

    files: list[ManifestFile]
    name: str | None = None
    version: str | None = None
    author: str | None = None
    overrides: str = "overrides"

    class Config:
        extra = "ignore"
