"""xynginc - Nginx and SSL management plugin driven by the xynginc engine.

The plugin validates domain definitions, locates (or downloads) the
``xynginc`` engine binary and forwards operations to it as subprocess calls.
"""

from __future__ import annotations

__version__ = "1.0.7"

from xynginc.config.models import DomainConfig, PluginOptions
from xynginc.core.errors import (
    ConfigError,
    DownloadError,
    EngineCommandError,
    EngineNotFoundError,
    PluginStateError,
    RequirementsError,
    XyNginCError,
)
from xynginc.engine.client import EngineClient
from xynginc.plugin import PluginState, XyNginCPlugin

__all__ = [
    "__version__",
    "DomainConfig",
    "PluginOptions",
    "EngineClient",
    "PluginState",
    "XyNginCPlugin",
    "XyNginCError",
    "ConfigError",
    "DownloadError",
    "EngineCommandError",
    "EngineNotFoundError",
    "PluginStateError",
    "RequirementsError",
]
