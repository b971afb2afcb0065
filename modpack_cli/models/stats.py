"""
Dataclass for tracking install session statistics.
"""

import time
from dataclasses import dataclass, field


@dataclass
class InstallStats:
    """Tracks statistics for a single modpack install."""

    mods_total: int = 0
    mods_downloaded: int = 0
    bytes_downloaded: int = 0
    bytes_expected: int = 0  # Sum of the API-reported file lengths
    overrides_written: int = 0
    directories_created: int = 0
    _start_time: float = field(default_factory=time.monotonic, repr=False)

    @property
    def elapsed(self) -> float:
        return time.monotonic() - self._start_time
