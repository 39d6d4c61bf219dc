"""Shared pytest fixtures."""

from __future__ import annotations

import logging
from typing import Iterator

import pytest

from xynginc.core.logging import ROOT_LOGGER_NAME


@pytest.fixture(autouse=True)
def reset_xynginc_logger() -> Iterator[None]:
    """Undo configure_logging() so caplog sees records in every test."""
    yield
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
