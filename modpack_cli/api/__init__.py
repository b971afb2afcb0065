"""
CurseForge API Layer.

This package handles all communication with the CurseForge addon API.
"""

from .client import CurseForgeClient

__all__ = ["CurseForgeClient"]
