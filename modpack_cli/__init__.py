"""
modpack-cli: installs CurseForge modpacks from a curseforge:// link.
"""

__version__ = "1.0.0"
