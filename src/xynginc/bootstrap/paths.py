"""Path management for the xynginc binary cache.

The cache lives next to the installed package (``<package>/bin``) unless
XYNGINC_HOME points somewhere else.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar

# Name of the engine executable
BINARY_NAME = "xynginc"

# Environment variable to override home directory
XYNGINC_HOME_ENV = "XYNGINC_HOME"


def get_xynginc_home() -> Path:
    """Get the directory holding the binary cache.

    Resolution order:
    1. XYNGINC_HOME environment variable (if set)
    2. The installed xynginc package directory

    Returns:
        Absolute path to the xynginc home directory.
    """
    env_home = os.environ.get(XYNGINC_HOME_ENV)
    if env_home:
        return Path(env_home).absolute()
    return Path(__file__).resolve().parent.parent


@dataclass
class XyngincPaths:
    """Manages paths within the xynginc home directory.

    Directory structure:
        <home>/
            bin/
                xynginc     - downloaded engine binary
    """

    home: Path

    _BIN_DIR: ClassVar[str] = "bin"

    @classmethod
    def default(cls) -> "XyngincPaths":
        """Create paths from the default xynginc home."""
        return cls(get_xynginc_home())

    @property
    def bin_dir(self) -> Path:
        """Directory containing the downloaded engine binary."""
        return self.home / self._BIN_DIR

    @property
    def binary_path(self) -> Path:
        """Location of the cached engine binary."""
        return self.bin_dir / BINARY_NAME
