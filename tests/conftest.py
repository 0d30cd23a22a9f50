import logging

import pytest

from reify.config import Settings


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Run the test from inside tmp_path so entries can use relative paths."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture(autouse=True)
def _reset_reify_logger():
    yield
    logger = logging.getLogger("reify")
    for h in list(logger.handlers):
        logger.removeHandler(h)
    logger.setLevel(logging.NOTSET)
