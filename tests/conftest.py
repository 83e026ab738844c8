import logging
import os

import pytest

from geoclusters.utils.logging import GeoclustersLogger, LogLevel


@pytest.fixture(autouse=True)
def reset_geoclusters_logging():
    """CLI commands install handlers on stdout streams that die with the test."""
    yield
    root_logger = logging.getLogger("geoclusters")
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
    root_logger.propagate = True
    os.environ.pop("GEOCLUSTERS_EFFECTIVE_LOG_LEVEL", None)
    GeoclustersLogger.set_level(LogLevel.NORMAL)
