"""Configuration data models for xynginc.

Defines the domain and plugin option records handed to the engine.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

DEFAULT_HOST = "localhost"
DEFAULT_MAX_BODY_SIZE = "20M"
DEFAULT_VERSION = "latest"


@dataclass
class DomainConfig:
    """One hostname-to-backend mapping managed by the engine.

    ``host`` and ``max_body_size`` stay ``None`` until validation fills
    them with their defaults.
    """

    domain: str
    port: int
    ssl: bool = False
    email: Optional[str] = None
    host: Optional[str] = None
    max_body_size: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        """Convert to the engine's JSON shape (lower_snake_case keys).

        ``email`` is left out entirely when unset.
        """
        payload: Dict[str, Any] = {
            "domain": self.domain,
            "port": self.port,
            "ssl": self.ssl,
        }
        if self.email is not None:
            payload["email"] = self.email
        payload["host"] = self.host
        payload["max_body_size"] = self.max_body_size
        return payload


@dataclass
class PluginOptions:
    """Complete plugin configuration.

    Example xynginc.yml:
        auto_reload: true
        version: latest
        domains:
          - domain: api.example.com
            port: 3000
            ssl: true
            email: admin@example.com
    """

    domains: List[DomainConfig] = field(default_factory=list)
    auto_reload: bool = True
    binary_path: Optional[str] = None
    auto_download: bool = True
    version: str = DEFAULT_VERSION
    install_requirements: bool = True

    # Prefix every engine call with sudo
    use_sudo: bool = True

    # Fail startup when the check after an automatic install still fails
    strict_requirements: bool = False

    def to_payload(self) -> Dict[str, Any]:
        """Build the document piped to ``<bin> apply --config -``."""
        return {
            "auto_reload": self.auto_reload,
            "domains": [d.to_payload() for d in self.domains],
        }
