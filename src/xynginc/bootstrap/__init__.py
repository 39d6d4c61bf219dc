"""
Bootstrap module for xynginc engine binary management.

This module handles:
- Platform detection (OS + architecture)
- Binary cache directory management (<install dir>/bin or $XYNGINC_HOME/bin)
- Downloading release artifacts from GitHub
- Locating an engine binary (explicit path, PATH, cache, download)
- Binary validation utilities
"""

from xynginc.bootstrap.fetcher import fetch_binary
from xynginc.bootstrap.locator import resolve_binary
from xynginc.bootstrap.paths import BINARY_NAME, XyngincPaths, get_xynginc_home
from xynginc.bootstrap.platform import PlatformInfo, get_platform_info
from xynginc.bootstrap.validation import ToolStatus, validate_binary

__all__ = [
    "BINARY_NAME",
    "fetch_binary",
    "resolve_binary",
    "get_platform_info",
    "PlatformInfo",
    "get_xynginc_home",
    "XyngincPaths",
    "validate_binary",
    "ToolStatus",
]
