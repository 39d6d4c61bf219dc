"""Platform detection for binary downloads."""

from __future__ import annotations

import platform
import sys
from dataclasses import dataclass

# Normalised OS names
_OS_ALIASES = {
    "linux": "linux",
    "darwin": "darwin",
    "win32": "windows",
    "cygwin": "windows",
}

# Normalised CPU architecture names
_ARCH_ALIASES = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "x64": "amd64",
    "aarch64": "arm64",
    "arm64": "arm64",
}


@dataclass(frozen=True)
class PlatformInfo:
    """Operating system and CPU architecture of the running machine."""

    os: str
    arch: str


def get_platform_info() -> PlatformInfo:
    """Detect the current platform.

    Returns:
        PlatformInfo with ``os`` in (linux, darwin, windows, ...) and
        ``arch`` in (amd64, arm64, ...). Unknown values are passed
        through lower-cased.
    """
    os_name = _OS_ALIASES.get(sys.platform)
    if os_name is None:
        os_name = sys.platform.rstrip("0123456789").lower()

    machine = platform.machine().lower()
    arch = _ARCH_ALIASES.get(machine, machine)

    return PlatformInfo(os=os_name, arch=arch)
