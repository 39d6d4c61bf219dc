"""Core utilities shared across xynginc: logging, errors, subprocess execution."""
