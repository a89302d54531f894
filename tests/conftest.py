import logging

import pytest

from skirank.ui import log_helpers


@pytest.fixture(autouse=True)
def reset_logging():
    """Handlers installed by configure_logging hold the stream of the test that made them"""
    yield
    root = logging.getLogger(log_helpers.LOGGER_ROOT)
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.propagate = True
    root.setLevel(logging.NOTSET)
    log_helpers.DEBUG = False
