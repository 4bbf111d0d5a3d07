import logging

import pytest


@pytest.fixture(autouse=True)
def _reset_snipbox_logger():
    yield
    logger = logging.getLogger("snipbox")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
