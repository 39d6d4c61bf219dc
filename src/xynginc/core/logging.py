"""Logging setup for xynginc.

Every module grabs its logger through :func:`get_logger`, so all output
lives under the ``xynginc`` hierarchy and can be configured in one place.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "xynginc"

_HANDLER_NAME = "xynginc-rich"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger inside the xynginc hierarchy.

    Args:
        name: Module name (usually ``__name__``). Names outside the
            ``xynginc`` package are nested under it.

    Returns:
        Logger instance.
    """
    if not name or name == ROOT_LOGGER_NAME:
        return logging.getLogger(ROOT_LOGGER_NAME)
    if name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def configure_logging(
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
) -> logging.Logger:
    """Configure the xynginc root logger.

    Precedence: debug > quiet > verbose > default (WARNING).

    Args:
        debug: Enable DEBUG output.
        verbose: Enable INFO output.
        quiet: Only show errors.

    Returns:
        The configured root logger.
    """
    if debug:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)

    # Replace our handler on reconfiguration instead of stacking another one
    for handler in list(logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            logger.removeHandler(handler)

    handler = RichHandler(
        console=Console(file=sys.stderr),
        show_time=debug,
        show_path=debug,
        markup=False,
        rich_tracebacks=debug,
    )
    handler.set_name(_HANDLER_NAME)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False

    return logger
