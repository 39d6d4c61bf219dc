"""Exception classes for xynginc.

All exceptions inherit from XyNginCError and carry a message plus
optional structured details.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional


class XyNginCError(Exception):
    """Base exception for all xynginc errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r})"

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class ConfigError(XyNginCError):
    """Raised when plugin options are malformed or an options file can't be loaded."""

    pass


class EngineNotFoundError(XyNginCError):
    """Raised when no engine binary could be located and downloading is off."""

    pass


class DownloadError(XyNginCError):
    """Raised when fetching the engine binary fails (network, HTTP, filesystem, platform)."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.status_code = status_code
        super().__init__(message, details)


class RequirementsError(XyNginCError):
    """Raised when the engine's preflight check fails and auto-install is disabled."""

    pass


class EngineCommandError(XyNginCError):
    """Raised when an engine subcommand exits non-zero or fails to spawn."""

    def __init__(
        self,
        message: str,
        command: Optional[List[str]] = None,
        returncode: Optional[int] = None,
        stdout: str = "",
        stderr: str = "",
    ) -> None:
        self.command = list(command or [])
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(
            message,
            details={"command": self.command, "returncode": returncode},
        )


class PluginStateError(XyNginCError):
    """Raised when a lifecycle hook is invoked out of order."""

    pass
