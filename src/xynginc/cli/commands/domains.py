"""Domain management commands: add, remove, list."""

from __future__ import annotations

import asyncio
from argparse import Namespace

from xynginc.cli.commands import EngineCommand
from xynginc.cli.exit_codes import EXIT_SUCCESS


class AddCommand(EngineCommand):
    """Adds a single domain."""

    @property
    def name(self) -> str:
        """Command identifier."""
        return "add"

    def execute(self, args: Namespace) -> int:
        """Add the domain and print the engine's output."""
        client = self.get_client(args)
        output = asyncio.run(client.add_domain(
            args.domain,
            args.port,
            ssl=args.ssl,
            email=args.email,
            max_body_size=args.max_body_size,
        ))
        if output.strip():
            print(output.rstrip())
        return EXIT_SUCCESS


class RemoveCommand(EngineCommand):
    """Removes a single domain."""

    @property
    def name(self) -> str:
        """Command identifier."""
        return "remove"

    def execute(self, args: Namespace) -> int:
        """Remove the domain and print the engine's output."""
        client = self.get_client(args)
        output = asyncio.run(client.remove_domain(args.domain))
        if output.strip():
            print(output.rstrip())
        return EXIT_SUCCESS


class ListCommand(EngineCommand):
    """Prints configured domain names, one per line."""

    @property
    def name(self) -> str:
        """Command identifier."""
        return "list"

    def execute(self, args: Namespace) -> int:
        """Print each configured domain name on its own line."""
        client = self.get_client(args)
        for domain in asyncio.run(client.list_domains()):
            print(domain)
        return EXIT_SUCCESS
