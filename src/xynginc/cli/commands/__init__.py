"""CLI commands package.

This module provides the base Command classes and exports all command implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from argparse import Namespace

from xynginc.bootstrap.locator import resolve_binary
from xynginc.config.models import DEFAULT_VERSION
from xynginc.engine.client import EngineClient


class Command(ABC):
    """Base class for CLI commands.

    All CLI commands should inherit from this class and implement
    the execute method.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Command identifier.

        Returns:
            String name of the command (matches the CLI subcommand).
        """

    @abstractmethod
    def execute(self, args: Namespace) -> int:
        """Execute the command.

        Args:
            args: Parsed command-line arguments.

        Returns:
            Exit code (0 for success, non-zero for error).

        Raises:
            XyNginCError: Mapped to an exit code by the CLI runner.
        """


class EngineCommand(Command):
    """Command that talks to the engine binary resolved from global flags."""

    def get_client(self, args: Namespace) -> EngineClient:
        """Resolve the engine binary and build a client for it."""
        binary = resolve_binary(
            getattr(args, "binary", None),
            not getattr(args, "no_download", False),
            getattr(args, "engine_version", None) or DEFAULT_VERSION,
        )
        return EngineClient(binary, use_sudo=not getattr(args, "no_sudo", False))


# Import command implementations for convenience
# ruff: noqa: E402
from xynginc.cli.commands.apply import ApplyCommand
from xynginc.cli.commands.binary import FetchCommand, LocateCommand
from xynginc.cli.commands.domains import AddCommand, ListCommand, RemoveCommand
from xynginc.cli.commands.engine import (
    CheckCommand,
    CleanCommand,
    InstallCommand,
    ReloadCommand,
    RestoreCommand,
    StatusCommand,
    TestCommand,
)

__all__ = [
    "Command",
    "EngineCommand",
    "AddCommand",
    "ApplyCommand",
    "CheckCommand",
    "CleanCommand",
    "FetchCommand",
    "InstallCommand",
    "ListCommand",
    "LocateCommand",
    "ReloadCommand",
    "RemoveCommand",
    "RestoreCommand",
    "StatusCommand",
    "TestCommand",
]
