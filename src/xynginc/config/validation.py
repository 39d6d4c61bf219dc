"""Validation of plugin options.

Runs once, eagerly, before any binary lookup or engine call. The first
violated rule raises ConfigError; nothing is partially applied.
"""

from __future__ import annotations

from typing import Any, Set

from xynginc.config.models import DEFAULT_HOST, DEFAULT_MAX_BODY_SIZE, PluginOptions
from xynginc.core.errors import ConfigError
from xynginc.core.logging import get_logger

LOGGER = get_logger(__name__)

MIN_PORT = 1
MAX_PORT = 65535


def validate_options(options: PluginOptions) -> None:
    """Validate plugin options and fill in domain defaults.

    Rules, checked in order:
    1. The domain list must not be empty.
    2. For each domain in list order: ``domain`` must be a non-empty
       string, ``port`` an integer in [1, 65535], and ``email`` is
       required when ``ssl`` is enabled.
    3. Absent ``host`` becomes "localhost"; absent ``max_body_size``
       becomes "20M".

    The domain entries are modified in place.

    Args:
        options: Plugin options to validate.

    Raises:
        ConfigError: On the first violated rule.
    """
    if not options.domains:
        raise ConfigError("Configuration error: 'domains' list cannot be empty")

    seen: Set[str] = set()

    for entry in options.domains:
        name = getattr(entry, "domain", None)
        if not name or not isinstance(name, str):
            raise ConfigError("Configuration error: 'domain' must be a non-empty string")

        if not _is_valid_port(getattr(entry, "port", None)):
            raise ConfigError(
                f"Configuration error: 'port' must be between {MIN_PORT}-{MAX_PORT} for {name}",
                details={"domain": name, "port": getattr(entry, "port", None)},
            )

        if entry.ssl and not entry.email:
            raise ConfigError(
                f"Configuration error: 'email' is required when SSL is enabled for {name}",
                details={"domain": name},
            )

        if not entry.host:
            entry.host = DEFAULT_HOST

        if not entry.max_body_size:
            entry.max_body_size = DEFAULT_MAX_BODY_SIZE

        # The engine keeps one site per domain; later entries overwrite earlier ones
        if name in seen:
            LOGGER.warning(f"Domain '{name}' is listed more than once")
        seen.add(name)


def _is_valid_port(port: Any) -> bool:
    """Check that port is a real integer (not a bool) inside the TCP range."""
    if isinstance(port, bool) or not isinstance(port, int):
        return False
    return MIN_PORT <= port <= MAX_PORT
