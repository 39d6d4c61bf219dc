"""Plugin options: models, validation and file loading."""

from xynginc.config.loader import dict_to_options, find_options_file, load_options
from xynginc.config.models import DomainConfig, PluginOptions
from xynginc.config.validation import validate_options

__all__ = [
    "DomainConfig",
    "PluginOptions",
    "dict_to_options",
    "find_options_file",
    "load_options",
    "validate_options",
]
