import logging

import pytest


@pytest.fixture(autouse=True)
def reset_codeshape_logger():
    """The CLI installs its own handler; undo it so caplog keeps working."""
    logger = logging.getLogger("codeshape")
    handlers, level, propagate = logger.handlers[:], logger.level, logger.propagate
    yield
    logger.handlers = handlers
    logger.setLevel(level)
    logger.propagate = propagate
