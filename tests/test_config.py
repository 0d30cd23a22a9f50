import logging

import pytest

from reify.config import Settings
from reify.log import configure_logging


def test_defaults_from_empty_env():
    s = Settings.from_env({})
    assert s == Settings(shell="/bin/bash", prelude="set -xe", chunk_size=1024, log_level="INFO")


def test_env_overrides():
    s = Settings.from_env(
        {
            "REIFY_SHELL": "/usr/bin/env",
            "REIFY_SHELL_PRELUDE": "",
            "REIFY_CHUNK_SIZE": "65536",
            "REIFY_LOG_LEVEL": "debug",
        }
    )
    assert s.shell == "/usr/bin/env"
    assert s.prelude == ""
    assert s.chunk_size == 65536
    assert s.log_level == "DEBUG"


@pytest.mark.parametrize("raw", ["abc", "0", "-5"])
def test_bad_chunk_size(raw):
    with pytest.raises(ValueError, match="REIFY_CHUNK_SIZE"):
        Settings.from_env({"REIFY_CHUNK_SIZE": raw})


def test_configure_logging_attaches_one_handler():
    logger = configure_logging("debug")
    configure_logging(logging.INFO)
    assert logger.name == "reify"
    assert len(logger.handlers) == 1
    assert logger.level == logging.INFO


def test_bad_chunk_size_is_a_reify_error():
    from reify.errors import ConfigError, ReifyError

    with pytest.raises(ReifyError):
        Settings.from_env({"REIFY_CHUNK_SIZE": "nope"})
    assert issubclass(ConfigError, ValueError)
