"""Binary management commands: locate, fetch."""

from __future__ import annotations

from argparse import Namespace

from xynginc.bootstrap.fetcher import fetch_binary
from xynginc.bootstrap.locator import resolve_binary
from xynginc.bootstrap.paths import XyngincPaths
from xynginc.bootstrap.platform import get_platform_info
from xynginc.bootstrap.validation import ToolStatus, validate_binary
from xynginc.cli.commands import Command
from xynginc.cli.exit_codes import EXIT_BOOTSTRAP_FAILURE, EXIT_SUCCESS
from xynginc.config.models import DEFAULT_VERSION


class LocateCommand(Command):
    """Shows which engine binary would be used."""

    @property
    def name(self) -> str:
        """Command identifier."""
        return "locate"

    def execute(self, args: Namespace) -> int:
        """Resolve the binary and print its path, status and platform.

        Returns:
            EXIT_SUCCESS if the binary is present and executable,
            EXIT_BOOTSTRAP_FAILURE otherwise.
        """
        platform_info = get_platform_info()
        paths = XyngincPaths.default()
        binary = resolve_binary(
            args.binary,
            not args.no_download,
            args.engine_version or DEFAULT_VERSION,
            paths,
        )
        status = validate_binary(binary)

        print(f"Binary: {binary}")
        print(f"Status: {status.value}")
        print(f"Platform: {platform_info.os}-{platform_info.arch}")
        print(f"Cache: {paths.bin_dir}")

        if status != ToolStatus.PRESENT:
            return EXIT_BOOTSTRAP_FAILURE
        return EXIT_SUCCESS


class FetchCommand(Command):
    """Downloads the engine binary into the cache, replacing any existing copy."""

    @property
    def name(self) -> str:
        """Command identifier."""
        return "fetch"

    def execute(self, args: Namespace) -> int:
        """Download the engine binary; the --tag release wins over --engine-version."""
        version = args.release or args.engine_version or DEFAULT_VERSION
        binary = fetch_binary(version, XyngincPaths.default().bin_dir)
        print(f"Downloaded {binary}")
        return EXIT_SUCCESS
