"""Host-framework plugin for xynginc.

Drives the engine through the host's lifecycle hooks:

    on_register      validate options
    on_server_start  resolve binary, ensure requirements, apply config
    on_server_stop   no engine-side action

``on_server_start`` returns the :class:`EngineClient` so the host can
inject it wherever ad-hoc domain management is needed.
"""

from __future__ import annotations

import asyncio
import functools
from enum import Enum
from typing import Any, Optional

from xynginc import __version__
from xynginc.bootstrap.locator import resolve_binary
from xynginc.config.models import PluginOptions
from xynginc.config.validation import validate_options
from xynginc.core.errors import PluginStateError, RequirementsError
from xynginc.core.logging import get_logger
from xynginc.engine.client import EngineClient

LOGGER = get_logger(__name__)


class PluginState(str, Enum):
    """Lifecycle states of the plugin."""

    UNREGISTERED = "unregistered"
    REGISTERED = "registered"
    STARTED = "started"
    STOPPED = "stopped"


class XyNginCPlugin:
    """Nginx & SSL management plugin.

    Args:
        options: Plugin options. Validation fills domain defaults in place.
    """

    name = "xynginc"
    version = __version__
    description = "XyPriss Nginx Controller - Automatic Nginx & SSL management"

    def __init__(self, options: PluginOptions) -> None:
        self.options = options
        self._state = PluginState.UNREGISTERED
        self._engine: Optional[EngineClient] = None

    @property
    def state(self) -> PluginState:
        """Current lifecycle state."""
        return self._state

    @property
    def engine(self) -> EngineClient:
        """Engine client available once the server has started.

        Raises:
            PluginStateError: If the plugin has not started.
        """
        if self._engine is None:
            raise PluginStateError(
                f"Engine is not available in state '{self._state.value}'"
            )
        return self._engine

    async def on_register(self) -> None:
        """Validate options.

        Raises:
            ConfigError: If the options are invalid; registration fails.
            PluginStateError: If already registered.
        """
        if self._state != PluginState.UNREGISTERED:
            raise PluginStateError(f"Cannot register plugin in state '{self._state.value}'")

        LOGGER.info("Registering plugin...")
        validate_options(self.options)
        self._state = PluginState.REGISTERED

    async def on_server_start(self, server: Any = None) -> EngineClient:
        """Bring the engine up and apply the configuration.

        Args:
            server: Host server object. Only used for logging; the engine
                client is returned instead of being attached to it.

        Returns:
            EngineClient bound to the resolved binary.

        Raises:
            PluginStateError: If the plugin was not registered.
            EngineNotFoundError, DownloadError: If no binary is available.
            RequirementsError: If system requirements are missing and
                cannot be installed.
            EngineCommandError: If installing or applying fails.
        """
        if self._state != PluginState.REGISTERED:
            raise PluginStateError(f"Cannot start plugin in state '{self._state.value}'")

        LOGGER.info("Initializing Nginx Controller...")
        if server is not None:
            LOGGER.debug(f"Starting for server {server!r}")

        try:
            loop = asyncio.get_running_loop()
            binary = await loop.run_in_executor(
                None,
                functools.partial(
                    resolve_binary,
                    self.options.binary_path,
                    self.options.auto_download,
                    self.options.version,
                ),
            )
            LOGGER.info(f"Binary located: {binary}")

            engine = EngineClient(binary, use_sudo=self.options.use_sudo)

            await self._ensure_requirements(engine)

            LOGGER.info("Applying configuration...")
            await engine.apply(self.options)
            LOGGER.info("Configuration applied successfully!")
        except Exception as e:
            LOGGER.error(f"Failed to initialize: {e}")
            raise

        self._engine = engine
        self._state = PluginState.STARTED
        return engine

    async def on_server_stop(self) -> None:
        """Stop hook. The engine keeps its configuration; nothing is undone."""
        LOGGER.info("Shutting down Nginx Controller...")
        self._state = PluginState.STOPPED

    async def _ensure_requirements(self, engine: EngineClient) -> None:
        """Run the preflight check, installing requirements if allowed."""
        LOGGER.info("Checking system requirements...")
        if await engine.check():
            return

        if not self.options.install_requirements:
            raise RequirementsError(
                "System requirements not satisfied. Set 'install_requirements: true' "
                f"or run: sudo {engine.binary} install"
            )

        LOGGER.info("Requirements missing, installing automatically...")
        await engine.install()
        LOGGER.info("Requirements installed, re-checking...")

        if await engine.check():
            return

        if self.options.strict_requirements:
            raise RequirementsError("System requirements still not satisfied after installation")
        LOGGER.warning("System requirements still not satisfied after installation; continuing")
