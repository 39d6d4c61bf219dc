"""Pass-through engine commands: check, install, test, reload, status, clean, restore."""

from __future__ import annotations

import asyncio
from argparse import Namespace

from xynginc.cli.commands import EngineCommand
from xynginc.cli.exit_codes import EXIT_CHECK_FAILED, EXIT_SUCCESS


def _print_output(output: str) -> None:
    if output.strip():
        print(output.rstrip())


class CheckCommand(EngineCommand):
    """Runs the preflight requirements check."""

    @property
    def name(self) -> str:
        """Command identifier."""
        return "check"

    def execute(self, args: Namespace) -> int:
        """Run the check; exit 1 if requirements are not satisfied."""
        client = self.get_client(args)
        if asyncio.run(client.check()):
            print("System requirements satisfied")
            return EXIT_SUCCESS
        print("System requirements not satisfied")
        return EXIT_CHECK_FAILED


class InstallCommand(EngineCommand):
    """Runs the interactive requirements installer."""

    @property
    def name(self) -> str:
        """Command identifier."""
        return "install"

    def execute(self, args: Namespace) -> int:
        """Run the installer on the current terminal."""
        client = self.get_client(args)
        asyncio.run(client.install())
        return EXIT_SUCCESS


class TestCommand(EngineCommand):
    """Tests the nginx configuration."""

    # Not a pytest test class
    __test__ = False

    @property
    def name(self) -> str:
        """Command identifier."""
        return "test"

    def execute(self, args: Namespace) -> int:
        """Test the nginx configuration; exit 1 if it is invalid."""
        client = self.get_client(args)
        if asyncio.run(client.test()):
            print("Nginx configuration is valid")
            return EXIT_SUCCESS
        print("Nginx configuration test failed")
        return EXIT_CHECK_FAILED


class ReloadCommand(EngineCommand):
    """Reloads nginx."""

    @property
    def name(self) -> str:
        """Command identifier."""
        return "reload"

    def execute(self, args: Namespace) -> int:
        """Reload nginx and print the engine's output."""
        client = self.get_client(args)
        _print_output(asyncio.run(client.reload()))
        return EXIT_SUCCESS


class StatusCommand(EngineCommand):
    """Prints the engine's status report verbatim."""

    @property
    def name(self) -> str:
        """Command identifier."""
        return "status"

    def execute(self, args: Namespace) -> int:
        """Print the engine's status report unchanged."""
        client = self.get_client(args)
        print(asyncio.run(client.status()), end="")
        return EXIT_SUCCESS


class CleanCommand(EngineCommand):
    """Removes broken or conflicting site configurations."""

    @property
    def name(self) -> str:
        """Command identifier."""
        return "clean"

    def execute(self, args: Namespace) -> int:
        """Clean configurations, honouring --dry-run."""
        client = self.get_client(args)
        _print_output(asyncio.run(client.clean(dry_run=args.dry_run)))
        return EXIT_SUCCESS


class RestoreCommand(EngineCommand):
    """Restores nginx configuration from an engine backup."""

    @property
    def name(self) -> str:
        """Command identifier."""
        return "restore"

    def execute(self, args: Namespace) -> int:
        """Restore the given backup and print the engine's output."""
        client = self.get_client(args)
        _print_output(asyncio.run(client.restore(args.backup_id)))
        return EXIT_SUCCESS
