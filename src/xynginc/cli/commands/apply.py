"""Apply command implementation."""

from __future__ import annotations

import asyncio
from argparse import Namespace
from pathlib import Path

from xynginc.bootstrap.locator import resolve_binary
from xynginc.cli.commands import EngineCommand
from xynginc.cli.exit_codes import EXIT_SUCCESS
from xynginc.config.loader import find_options_file, load_options
from xynginc.config.models import PluginOptions
from xynginc.config.validation import validate_options
from xynginc.core.errors import ConfigError
from xynginc.core.logging import get_logger
from xynginc.engine.client import EngineClient

LOGGER = get_logger(__name__)


class ApplyCommand(EngineCommand):
    """Applies a full options file through the engine."""

    @property
    def name(self) -> str:
        """Command identifier."""
        return "apply"

    def execute(self, args: Namespace) -> int:
        """Execute the apply command.

        The options file is taken from ``--config`` or discovered in the
        current directory. Global binary flags override the file's values.

        Args:
            args: Parsed command-line arguments.

        Returns:
            Exit code.
        """
        config_path = args.config or find_options_file(Path.cwd())
        if config_path is None:
            raise ConfigError("No options file given and none found (expected xynginc.yml)")

        options = load_options(Path(config_path))
        self._apply_overrides(options, args)
        validate_options(options)
        LOGGER.info(f"Applying {len(options.domains)} domain(s) from {config_path}")

        binary = resolve_binary(options.binary_path, options.auto_download, options.version)
        client = EngineClient(binary, use_sudo=options.use_sudo)

        output = asyncio.run(client.apply(options, no_backup=args.no_backup, force=args.force))
        if output.strip():
            print(output.rstrip())
        return EXIT_SUCCESS

    def _apply_overrides(self, options: PluginOptions, args: Namespace) -> None:
        """CLI flags take precedence over the options file."""
        if args.binary:
            options.binary_path = args.binary
        if args.no_download:
            options.auto_download = False
        if args.engine_version:
            options.version = args.engine_version
        if args.no_sudo:
            options.use_sudo = False
