"""
Defines custom exceptions for the application to allow for more specific error handling.
"""


class ModpackCliError(Exception):
    """Base exception for all application-specific errors."""


class InvalidModpackUrlError(ModpackCliError):
    """Raised when a modpack link is not a valid curseforge://install URI."""


class InvalidModpackError(ModpackCliError):
    """Raised when the modpack archive is unreadable or missing required entries."""


class ConfigurationError(ModpackCliError):
    """Raised for issues related to configuration loading or validation."""
