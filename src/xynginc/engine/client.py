"""Command proxy for the xynginc engine binary.

Each public coroutine maps to one engine subcommand run with elevated
privileges:

    check                   preflight diagnostic (exit 0 = satisfied)
    install                 interactive dependency installer
    apply --config -        JSON configuration on stdin
    add / remove / list     single-domain management
    reload / test / status  nginx control
    clean / restore         maintenance

Calls are independent subprocesses; nothing is queued or retried.
"""

from __future__ import annotations

import json
import subprocess
from pathlib import Path
from typing import List, Optional

from xynginc.config.models import PluginOptions
from xynginc.core.errors import EngineCommandError
from xynginc.core.logging import get_logger
from xynginc.core.subprocess_runner import run_captured, run_interactive

LOGGER = get_logger(__name__)

SUDO = "sudo"

# Separator between domain name and detail in `list` output
LIST_SEPARATOR = " - "


def parse_domain_list(output: str) -> List[str]:
    """Extract domain names from ``<bin> list`` output.

    Only lines containing " - " are considered; the part before the
    separator is the domain name.

    Args:
        output: Raw stdout of the list subcommand.

    Returns:
        Domain names in output order.
    """
    return [
        line.strip().split(LIST_SEPARATOR)[0].strip()
        for line in output.splitlines()
        if LIST_SEPARATOR in line
    ]


class EngineClient:
    """Async proxy for the xynginc engine CLI.

    Args:
        binary: Resolved path to the engine executable.
        use_sudo: Prefix every invocation with ``sudo``.
    """

    def __init__(self, binary: Path, use_sudo: bool = True) -> None:
        self._binary = Path(binary)
        self._use_sudo = use_sudo

    @property
    def binary(self) -> Path:
        """Path of the engine executable this client drives."""
        return self._binary

    def build_command(self, *args: str) -> List[str]:
        """Build the argument vector for an engine subcommand."""
        cmd = [str(self._binary), *args]
        if self._use_sudo:
            cmd.insert(0, SUDO)
        return cmd

    async def _run(
        self,
        *args: str,
        action: str,
        input_text: Optional[str] = None,
        log_output: bool = True,
    ) -> subprocess.CompletedProcess:
        """Run a captured subcommand and raise on failure.

        Args:
            *args: Subcommand and its arguments.
            action: Human description used in error messages.
            input_text: Optional text for the process's stdin.
            log_output: Log stdout/stderr of a successful run.

        Raises:
            EngineCommandError: On spawn failure or non-zero exit.
        """
        cmd = self.build_command(*args)
        try:
            result = await run_captured(cmd, input_text=input_text)
        except OSError as e:
            raise EngineCommandError(f"Failed to {action}: {e}", command=cmd) from e

        if result.returncode != 0:
            detail = (result.stderr or result.stdout).strip()
            if not detail:
                detail = f"exit code {result.returncode}"
            raise EngineCommandError(
                f"Failed to {action}: {detail}",
                command=cmd,
                returncode=result.returncode,
                stdout=result.stdout,
                stderr=result.stderr,
            )

        if log_output:
            if result.stdout.strip():
                LOGGER.info(result.stdout.strip())
            if result.stderr.strip():
                LOGGER.warning(result.stderr.strip())
        return result

    async def check(self) -> bool:
        """Run the preflight check.

        Returns:
            True if the engine reports its system requirements satisfied.
            Failures are logged, never raised.
        """
        try:
            await self._run("check", action="check system requirements")
        except EngineCommandError as e:
            LOGGER.warning(f"System requirements check failed: {e.message}")
            return False
        return True

    async def install(self) -> None:
        """Run the engine's interactive dependency installer.

        The subprocess shares this process's terminal so the user can
        answer prompts.

        Raises:
            EngineCommandError: If the installer can't start or exits non-zero.
        """
        cmd = self.build_command("install")
        LOGGER.info("Launching interactive installer...")
        LOGGER.info("Please respond to any prompts in the terminal.")

        try:
            code = await run_interactive(cmd)
        except OSError as e:
            raise EngineCommandError(f"Failed to start installation: {e}", command=cmd) from e

        if code != 0:
            raise EngineCommandError(
                f"Installation failed with exit code {code}",
                command=cmd,
                returncode=code,
            )
        LOGGER.info("System requirements installed successfully")

    async def apply(
        self,
        options: PluginOptions,
        no_backup: bool = False,
        force: bool = False,
    ) -> str:
        """Apply the full configuration.

        Nginx is tested first; a failing test only produces a warning.
        The configuration travels as compact JSON on stdin.

        Args:
            options: Validated plugin options.
            no_backup: Ask the engine to skip its pre-apply backup.
            force: Ask the engine to apply even if its nginx test fails.

        Returns:
            Engine stdout.

        Raises:
            EngineCommandError: If the engine rejects the configuration.
        """
        LOGGER.info("Testing current nginx config...")
        if not await self.test():
            LOGGER.warning("Current nginx config has errors. Attempting to fix...")

        payload = json.dumps(options.to_payload(), separators=(",", ":"))

        args = ["apply", "--config", "-"]
        if no_backup:
            args.append("--no-backup")
        if force:
            args.append("--force")

        try:
            result = await self._run(*args, action="apply configuration", input_text=payload)
        except EngineCommandError as e:
            LOGGER.error(e.message)
            LOGGER.info("Try running: sudo nginx -t")
            LOGGER.info("Check: /etc/nginx/sites-enabled/")
            raise EngineCommandError(
                f"{e.message} (try 'sudo nginx -t' and check /etc/nginx/sites-enabled/)",
                command=e.command,
                returncode=e.returncode,
                stdout=e.stdout,
                stderr=e.stderr,
            ) from e
        return result.stdout

    async def add_domain(
        self,
        domain: str,
        port: int,
        ssl: bool = False,
        email: Optional[str] = None,
        max_body_size: Optional[str] = None,
    ) -> str:
        """Add one domain. Flags for absent values are omitted entirely."""
        args = ["add", "--domain", domain, "--port", str(port)]
        if ssl:
            args.append("--ssl")
        if email:
            args.extend(["--email", email])
        if max_body_size:
            args.extend(["--max-body-size", max_body_size])

        result = await self._run(*args, action="add domain")
        return result.stdout

    async def remove_domain(self, domain: str) -> str:
        """Remove one domain's configuration."""
        result = await self._run("remove", domain, action="remove domain")
        return result.stdout

    async def list_domains(self) -> List[str]:
        """List configured domain names in engine output order."""
        result = await self._run("list", action="list domains", log_output=False)
        return parse_domain_list(result.stdout)

    async def reload(self) -> str:
        """Reload nginx."""
        result = await self._run("reload", action="reload Nginx")
        return result.stdout

    async def test(self) -> bool:
        """Test the nginx configuration.

        Returns:
            True iff the engine exits with status 0. Never raises.
        """
        cmd = self.build_command("test")
        try:
            result = await run_captured(cmd)
        except OSError as e:
            LOGGER.debug(f"Nginx test could not run: {e}")
            return False
        return result.returncode == 0

    async def status(self) -> str:
        """Return the engine's raw status output."""
        result = await self._run("status", action="get status", log_output=False)
        return result.stdout

    async def clean(self, dry_run: bool = False) -> str:
        """Remove broken or conflicting site configurations."""
        args = ["clean"]
        if dry_run:
            args.append("--dry-run")
        result = await self._run(*args, action="clean configurations")
        return result.stdout

    async def restore(self, backup_id: str) -> str:
        """Restore nginx configuration from a backup ("latest" allowed)."""
        result = await self._run("restore", backup_id, action="restore backup")
        return result.stdout
