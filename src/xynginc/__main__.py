"""Allow ``python -m xynginc``."""

from xynginc.cli import main

if __name__ == "__main__":  # pragma: no cover - exercised via console script
    raise SystemExit(main())
