"""Options file loading.

Handles loading plugin options from YAML files with:
- Auto-discovery of xynginc.yml in a directory
- Environment variable expansion (${VAR})
- Warnings (with suggestions) for unknown keys
"""

from __future__ import annotations

import os
import re
from difflib import get_close_matches
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Set

import yaml

from xynginc.config.models import DEFAULT_VERSION, DomainConfig, PluginOptions
from xynginc.core.errors import ConfigError
from xynginc.core.logging import get_logger

LOGGER = get_logger(__name__)

OPTIONS_FILE_NAMES = ["xynginc.yml", "xynginc.yaml", ".xynginc.yml", ".xynginc.yaml"]

# Environment variable pattern: ${VAR} or ${VAR:-default}
ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+)(?::-([^}]*))?\}")

VALID_TOP_LEVEL_KEYS: Set[str] = {
    "domains",
    "auto_reload",
    "binary_path",
    "auto_download",
    "version",
    "install_requirements",
    "use_sudo",
    "strict_requirements",
}

VALID_DOMAIN_KEYS: Set[str] = {
    "domain",
    "port",
    "ssl",
    "email",
    "host",
    "max_body_size",
}

# Accepted spellings for booleans that arrive as strings (e.g. from ${VAR})
TRUE_STRINGS = {"true", "yes", "1"}
FALSE_STRINGS = {"false", "no", "0"}


def find_options_file(directory: Path) -> Optional[Path]:
    """Find an options file in a directory.

    Args:
        directory: Directory to search in.

    Returns:
        Path to the first matching file, or None.
    """
    for name in OPTIONS_FILE_NAMES:
        candidate = directory / name
        if candidate.exists():
            return candidate
    return None


def load_options(path: Path) -> PluginOptions:
    """Load plugin options from a YAML file.

    The result is not validated; pass it through
    :func:`xynginc.config.validation.validate_options` before use.

    Args:
        path: Path to YAML file.

    Returns:
        PluginOptions instance.

    Raises:
        ConfigError: If the file is missing, unparsable or not a mapping.
    """
    if not path.exists():
        raise ConfigError(f"Options file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Options file must be a YAML mapping, got {type(data).__name__}")

    data = expand_env_vars(data)
    _warn_unknown_keys(data.keys(), VALID_TOP_LEVEL_KEYS, str(path), prefix="")

    LOGGER.debug(f"Loaded options from {path}")
    return dict_to_options(data, source=str(path))


def dict_to_options(data: Dict[str, Any], source: str = "<dict>") -> PluginOptions:
    """Convert a plain mapping to PluginOptions.

    Args:
        data: Options mapping (snake_case keys).
        source: Where the mapping came from, for warning messages.

    Returns:
        PluginOptions instance.

    Raises:
        ConfigError: If ``domains`` is not a list of mappings or a boolean
            option has an unrecognised value.
    """
    domains_data = data.get("domains") or []
    if not isinstance(domains_data, list):
        raise ConfigError(f"'domains' must be a list, got {type(domains_data).__name__}")

    domains: List[DomainConfig] = []
    for index, entry in enumerate(domains_data):
        if not isinstance(entry, dict):
            raise ConfigError(f"'domains[{index}]' must be a mapping, got {type(entry).__name__}")
        _warn_unknown_keys(entry.keys(), VALID_DOMAIN_KEYS, source, prefix=f"domains[{index}].")
        domains.append(DomainConfig(
            domain=entry.get("domain"),
            port=entry.get("port"),
            ssl=_to_bool(entry.get("ssl", False), f"domains[{index}].ssl"),
            email=entry.get("email"),
            host=entry.get("host"),
            max_body_size=entry.get("max_body_size"),
        ))

    return PluginOptions(
        domains=domains,
        auto_reload=_to_bool(data.get("auto_reload", True), "auto_reload"),
        binary_path=data.get("binary_path"),
        auto_download=_to_bool(data.get("auto_download", True), "auto_download"),
        version=str(data.get("version") or DEFAULT_VERSION),
        install_requirements=_to_bool(
            data.get("install_requirements", True), "install_requirements"
        ),
        use_sudo=_to_bool(data.get("use_sudo", True), "use_sudo"),
        strict_requirements=_to_bool(
            data.get("strict_requirements", False), "strict_requirements"
        ),
    )


def _to_bool(value: Any, key: str) -> bool:
    """Coerce an option value to a real boolean.

    Args:
        value: Raw value from the options mapping.
        key: Option path, for the error message.

    Returns:
        The boolean value.

    Raises:
        ConfigError: If the value is neither a bool nor a recognised string.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in TRUE_STRINGS:
            return True
        if normalized in FALSE_STRINGS:
            return False
    raise ConfigError(
        f"'{key}' must be a boolean (true/false), got {value!r}",
        details={"key": key, "value": value},
    )


def expand_env_vars(data: Any) -> Any:
    """Recursively expand environment variables in option values.

    Supports ${VAR} and ${VAR:-default} syntax.
    """
    if isinstance(data, dict):
        return {k: expand_env_vars(v) for k, v in data.items()}
    elif isinstance(data, list):
        return [expand_env_vars(item) for item in data]
    elif isinstance(data, str):
        return ENV_VAR_PATTERN.sub(_env_var_replacer, data)
    else:
        return data


def _env_var_replacer(match: re.Match[str]) -> str:
    """Replace environment variable reference with its value."""
    var_name = match.group(1)
    default_value = match.group(2)

    value = os.environ.get(var_name)
    if value is not None:
        return value
    if default_value is not None:
        return default_value

    LOGGER.warning(f"Environment variable ${var_name} is not set and has no default")
    return ""


def _warn_unknown_keys(keys: Iterable[Any], valid: Set[str], source: str, prefix: str) -> None:
    for key in keys:
        if key in valid:
            continue
        msg = f"Unknown key '{prefix}{key}' in {source}"
        suggestion = _suggest_key(str(key), valid)
        if suggestion:
            msg += f" (did you mean '{suggestion}'?)"
        LOGGER.warning(msg)


def _suggest_key(invalid_key: str, valid_keys: Set[str]) -> Optional[str]:
    """Suggest a valid key for a potential typo.

    Args:
        invalid_key: The invalid key entered.
        valid_keys: Set of valid keys.

    Returns:
        Closest matching valid key, or None if no good match.
    """
    matches = get_close_matches(invalid_key, list(valid_keys), n=1, cutoff=0.6)
    return matches[0] if matches else None
