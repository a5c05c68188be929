from __future__ import annotations

import logging

import pytest


@pytest.fixture(autouse=True)
def _reset_clipfil_logger():
    # setup_logger() binds handlers to the streams of the current CliRunner
    yield
    logger = logging.getLogger("clipfil")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
