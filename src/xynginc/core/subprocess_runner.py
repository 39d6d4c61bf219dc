"""Async subprocess execution for engine calls.

Commands are always passed as an argument vector (never through a shell),
so domain names, emails and sizes need no quoting.
"""

from __future__ import annotations

import asyncio
import subprocess
from typing import List, Optional

from xynginc.core.logging import get_logger

LOGGER = get_logger(__name__)


async def run_captured(
    cmd: List[str],
    input_text: Optional[str] = None,
) -> subprocess.CompletedProcess:
    """Run a command to completion and capture its output.

    Args:
        cmd: Command and arguments.
        input_text: Optional text piped to the process's standard input.

    Returns:
        CompletedProcess with decoded stdout/stderr. A non-zero exit code
        is returned, not raised.

    Raises:
        OSError: If the process cannot be spawned.
    """
    LOGGER.debug(f"Running: {' '.join(cmd)}")

    process = await asyncio.create_subprocess_exec(
        *cmd,
        stdin=asyncio.subprocess.PIPE if input_text is not None else asyncio.subprocess.DEVNULL,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    stdin_bytes = input_text.encode("utf-8") if input_text is not None else None
    stdout, stderr = await process.communicate(stdin_bytes)

    return subprocess.CompletedProcess(
        args=cmd,
        returncode=process.returncode,
        stdout=stdout.decode("utf-8", errors="replace"),
        stderr=stderr.decode("utf-8", errors="replace"),
    )


async def run_interactive(cmd: List[str]) -> int:
    """Run a command with this process's stdin/stdout/stderr attached.

    Used for installers that prompt the user. Nothing is captured.

    Args:
        cmd: Command and arguments.

    Returns:
        Exit code of the process.

    Raises:
        OSError: If the process cannot be spawned.
    """
    LOGGER.debug(f"Running interactively: {' '.join(cmd)}")

    process = await asyncio.create_subprocess_exec(*cmd)
    return await process.wait()
