"""
Data Models Layer.

This package contains Pydantic models that define the core data structures
used throughout the application, such as configuration, API payloads and
statistics.
"""

from .config import InstallConfig
from .modpack import FileMetadata, Manifest, ManifestFile, ModpackReference
from .stats import InstallStats

__all__ = [
    "FileMetadata",
    "InstallConfig",
    "InstallStats",
    "Manifest",
    "ManifestFile",
    "ModpackReference",
]
