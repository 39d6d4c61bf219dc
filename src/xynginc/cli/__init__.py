"""Command-line interface for xynginc.

Thin front end over the engine client: every subcommand resolves the
engine binary and forwards to the matching engine operation.
"""

from __future__ import annotations

import argparse
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from xynginc.cli.commands import (
    AddCommand,
    ApplyCommand,
    CheckCommand,
    CleanCommand,
    Command,
    FetchCommand,
    InstallCommand,
    ListCommand,
    LocateCommand,
    ReloadCommand,
    RemoveCommand,
    RestoreCommand,
    StatusCommand,
    TestCommand,
)
from xynginc.cli.exit_codes import (
    EXIT_BOOTSTRAP_FAILURE,
    EXIT_ENGINE_ERROR,
    EXIT_INVALID_USAGE,
    EXIT_SUCCESS,
)
from xynginc.core.errors import (
    ConfigError,
    DownloadError,
    EngineCommandError,
    EngineNotFoundError,
    RequirementsError,
)
from xynginc.core.logging import configure_logging, get_logger

LOGGER = get_logger(__name__)


def _get_version() -> str:
    try:
        return version("xynginc-plugin")
    except PackageNotFoundError:
        # Fallback for editable installs that have not yet built metadata.
        from xynginc import __version__

        return __version__


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="xynginc-plugin",
        description="xynginc - Nginx & SSL management through the xynginc engine.",
    )

    # Global options
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show plugin version and exit.",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose (info-level) logging.",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Reduce logging output to errors only.",
    )

    # Binary resolution
    parser.add_argument(
        "--binary",
        metavar="PATH",
        default=None,
        help="Path to the xynginc engine binary.",
    )
    parser.add_argument(
        "--no-download",
        action="store_true",
        help="Never download the engine binary.",
    )
    parser.add_argument(
        "--engine-version",
        metavar="TAG",
        default=None,
        help="Engine release to download when none is installed (default: latest).",
    )
    parser.add_argument(
        "--no-sudo",
        action="store_true",
        help="Run the engine without sudo (e.g. when already root).",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    apply_parser = subparsers.add_parser("apply", help="Apply an options file.")
    apply_parser.add_argument(
        "--config",
        metavar="PATH",
        type=Path,
        help="Options file (default: xynginc.yml in the current directory).",
    )
    apply_parser.add_argument(
        "--no-backup",
        action="store_true",
        help="Skip the engine's backup before applying.",
    )
    apply_parser.add_argument(
        "--force",
        action="store_true",
        help="Apply even if the nginx test fails.",
    )

    add_parser = subparsers.add_parser("add", help="Add a domain.")
    add_parser.add_argument("domain", help="Domain name (e.g. api.example.com).")
    add_parser.add_argument("port", type=int, help="Backend port to proxy to.")
    add_parser.add_argument("--ssl", action="store_true", help="Enable SSL with Let's Encrypt.")
    add_parser.add_argument("--email", default=None, help="Let's Encrypt contact email.")
    add_parser.add_argument(
        "--max-body-size",
        default=None,
        help="Maximum client body size (e.g. 20M, 100M).",
    )

    remove_parser = subparsers.add_parser("remove", help="Remove a domain.")
    remove_parser.add_argument("domain", help="Domain name to remove.")

    subparsers.add_parser("list", help="List configured domains.")
    subparsers.add_parser("reload", help="Reload nginx.")
    subparsers.add_parser("test", help="Test the nginx configuration.")
    subparsers.add_parser("status", help="Show status of all domains.")
    subparsers.add_parser("check", help="Check system requirements.")
    subparsers.add_parser("install", help="Install missing system requirements (interactive).")

    clean_parser = subparsers.add_parser("clean", help="Clean broken or conflicting configurations.")
    clean_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Only show what would be removed.",
    )

    restore_parser = subparsers.add_parser("restore", help="Restore from an engine backup.")
    restore_parser.add_argument("backup_id", help="Backup timestamp or 'latest'.")

    subparsers.add_parser("locate", help="Show which engine binary would be used.")

    fetch_parser = subparsers.add_parser("fetch", help="Download the engine binary into the cache.")
    fetch_parser.add_argument(
        "--tag",
        dest="release",
        metavar="TAG",
        default=None,
        help="Release tag to download (default: --engine-version or latest).",
    )

    return parser


class CLIRunner:
    """Parses arguments and dispatches to the matching command."""

    def __init__(self) -> None:
        commands: List[Command] = [
            ApplyCommand(),
            AddCommand(),
            RemoveCommand(),
            ListCommand(),
            ReloadCommand(),
            TestCommand(),
            StatusCommand(),
            CheckCommand(),
            InstallCommand(),
            CleanCommand(),
            RestoreCommand(),
            LocateCommand(),
            FetchCommand(),
        ]
        self.commands: Dict[str, Command] = {cmd.name: cmd for cmd in commands}
        self.parser = build_parser()

    def run(self, argv: Optional[Iterable[str]] = None) -> int:
        """Run the CLI.

        Args:
            argv: Arguments (defaults to sys.argv[1:]).

        Returns:
            Exit code.
        """
        argv_list = list(argv) if argv is not None else None
        args = self.parser.parse_args(argv_list)

        # Configure logging as early as possible.
        configure_logging(debug=args.debug, verbose=args.verbose, quiet=args.quiet)

        if args.version and args.command is None:
            print(_get_version())
            return EXIT_SUCCESS

        command = self.commands.get(args.command) if args.command else None
        if command is None:
            self.parser.print_help()
            return EXIT_SUCCESS

        try:
            return command.execute(args)
        except ConfigError as e:
            LOGGER.error(str(e))
            return EXIT_INVALID_USAGE
        except (EngineNotFoundError, DownloadError) as e:
            LOGGER.error(str(e))
            return EXIT_BOOTSTRAP_FAILURE
        except (EngineCommandError, RequirementsError) as e:
            LOGGER.error(str(e))
            return EXIT_ENGINE_ERROR


def main(argv: Optional[Iterable[str]] = None) -> int:
    """CLI entrypoint.

    Returns an exit code suitable for use as a console script.
    """
    return CLIRunner().run(argv)
