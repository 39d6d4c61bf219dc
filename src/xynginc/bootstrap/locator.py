"""Engine binary resolution.

Lookup order, first match wins:
1. Explicit path (if it exists)
2. ``xynginc`` on the PATH
3. Previously downloaded copy in the cache directory
4. Fresh download (if allowed)
"""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Optional

from xynginc.bootstrap.fetcher import fetch_binary
from xynginc.bootstrap.paths import BINARY_NAME, XyngincPaths
from xynginc.config.models import DEFAULT_VERSION
from xynginc.core.errors import EngineNotFoundError
from xynginc.core.logging import get_logger

LOGGER = get_logger(__name__)


def resolve_binary(
    explicit_path: Optional[str] = None,
    allow_download: bool = True,
    version: str = DEFAULT_VERSION,
    paths: Optional[XyngincPaths] = None,
) -> Path:
    """Find an engine binary, downloading one if permitted.

    Args:
        explicit_path: Operator-pinned binary location.
        allow_download: Whether a network download may be attempted.
        version: Release tag to download when nothing is found locally.
        paths: Cache layout (defaults to the xynginc home).

    Returns:
        Absolute path to the engine binary.

    Raises:
        EngineNotFoundError: If nothing was found and downloading is off.
        DownloadError: If the download was attempted and failed.
    """
    if paths is None:
        paths = XyngincPaths.default()

    if explicit_path:
        candidate = Path(explicit_path).expanduser()
        if candidate.exists():
            LOGGER.debug(f"Using explicit binary path {candidate}")
            return candidate.absolute()
        LOGGER.warning(f"Configured binary path does not exist: {explicit_path}")

    global_path = shutil.which(BINARY_NAME)
    if global_path and Path(global_path).exists():
        LOGGER.debug(f"Found {BINARY_NAME} on PATH at {global_path}")
        return Path(global_path).absolute()

    cached = paths.binary_path
    if cached.exists():
        LOGGER.debug(f"Found cached binary at {cached}")
        return cached.absolute()

    if allow_download:
        LOGGER.info("Binary not found, downloading...")
        return fetch_binary(version, paths.bin_dir)

    raise EngineNotFoundError(
        f"Binary not found (checked explicit path, PATH and {paths.bin_dir}). "
        f"Install {BINARY_NAME} or set 'auto_download: true'",
        details={"explicit_path": explicit_path, "cache_dir": str(paths.bin_dir)},
    )
