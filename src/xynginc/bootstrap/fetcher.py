"""Engine binary download.

Fetches the ``xynginc-<platform>-<arch>`` release artifact from GitHub into
the local cache directory and marks it executable.
"""

from __future__ import annotations

import shutil
import tempfile
from http.client import HTTPException
from pathlib import Path
from typing import Optional
from urllib.error import URLError

from xynginc.bootstrap.download import secure_urlopen
from xynginc.bootstrap.paths import BINARY_NAME, XyngincPaths
from xynginc.bootstrap.platform import get_platform_info
from xynginc.config.models import DEFAULT_VERSION
from xynginc.core.errors import DownloadError
from xynginc.core.logging import get_logger

LOGGER = get_logger(__name__)

GITHUB_REPO = "Nehonix-Team/xynginc"

SUPPORTED_OS = "linux"

# Map platform arch to release naming
# Examples:
#   xynginc-linux-x64
#   xynginc-linux-arm64
RELEASE_ARCH_NAMES = {
    "amd64": "x64",
    "arm64": "arm64",
}


def artifact_name(os_name: str, arch: str) -> str:
    """Build the release artifact name for a platform."""
    return f"{BINARY_NAME}-{os_name}-{RELEASE_ARCH_NAMES.get(arch, arch)}"


def release_url(version: str, name: str) -> str:
    """Build the download URL for a release artifact.

    Args:
        version: Release tag (e.g. "v1.4.5") or "latest".
        name: Artifact name.

    Returns:
        GitHub releases download URL.
    """
    if version == DEFAULT_VERSION:
        return f"https://github.com/{GITHUB_REPO}/releases/latest/download/{name}"
    return f"https://github.com/{GITHUB_REPO}/releases/download/{version}/{name}"


def fetch_binary(version: str = DEFAULT_VERSION, dest_dir: Optional[Path] = None) -> Path:
    """Download the engine binary into the cache directory.

    Any existing binary at the cache path is replaced. The body is streamed
    to a temporary file in the same directory and moved into place only
    once complete, so a failed download never leaves a partial binary.

    Args:
        version: Release tag or "latest".
        dest_dir: Target directory (defaults to the cache bin directory).

    Returns:
        Path to the downloaded binary.

    Raises:
        DownloadError: On unsupported platforms and on any network,
            HTTP or filesystem failure.
    """
    platform_info = get_platform_info()
    if platform_info.os != SUPPORTED_OS:
        raise DownloadError(
            f"Unsupported platform: {platform_info.os}. Only Linux is supported.",
            details={"platform": platform_info.os, "arch": platform_info.arch},
        )

    if dest_dir is None:
        dest_dir = XyngincPaths.default().bin_dir

    name = artifact_name(platform_info.os, platform_info.arch)
    url = release_url(version, name)
    binary_path = dest_dir / BINARY_NAME

    LOGGER.info(f"Downloading from: {url}")

    tmp_path: Optional[Path] = None
    try:
        dest_dir.mkdir(parents=True, exist_ok=True)
        with secure_urlopen(url) as response:
            with tempfile.NamedTemporaryFile(
                dir=dest_dir, prefix=f".{BINARY_NAME}-", suffix=".part", delete=False
            ) as tmp_file:
                tmp_path = Path(tmp_file.name)
                shutil.copyfileobj(response, tmp_file)

        tmp_path.chmod(0o755)
        tmp_path.replace(binary_path)
        tmp_path = None
    except DownloadError:
        raise
    except (URLError, HTTPException, OSError) as e:
        raise DownloadError(
            f"Failed to download binary: {e}",
            details={"url": url},
        ) from e
    finally:
        if tmp_path is not None:
            tmp_path.unlink(missing_ok=True)

    LOGGER.info(f"Binary downloaded successfully to {binary_path}")
    return binary_path
