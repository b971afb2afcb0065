"""
Storage Layer.

This package manages persistent settings stored on disk.
"""

from .config_manager import ConfigManager

__all__ = ["ConfigManager"]
