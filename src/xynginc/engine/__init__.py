"""Engine command proxy: typed async wrappers around the xynginc CLI."""

from xynginc.engine.client import EngineClient, parse_domain_list

__all__ = ["EngineClient", "parse_domain_list"]
