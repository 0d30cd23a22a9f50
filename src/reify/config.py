# reify/config.py

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from reify.errors import ConfigError

DEFAULT_SHELL = "/bin/bash"
DEFAULT_PRELUDE = "set -xe"
DEFAULT_CHUNK_SIZE = 1024
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class Settings:
    """
    Runtime knobs for hashing and execution.

    Read from the environment:
      REIFY_SHELL          interpreter used to run entry commands
      REIFY_SHELL_PRELUDE  line prepended to every command body
      REIFY_CHUNK_SIZE     read size (bytes) when hashing files
      REIFY_LOG_LEVEL      default level for the reify logger
    """

    shell: str = DEFAULT_SHELL
    prelude: str = DEFAULT_PRELUDE
    chunk_size: int = DEFAULT_CHUNK_SIZE
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ

        raw_chunk = env.get("REIFY_CHUNK_SIZE")
        chunk_size = DEFAULT_CHUNK_SIZE
        if raw_chunk:
            try:
                chunk_size = int(raw_chunk)
            except ValueError:
                raise ConfigError(f"REIFY_CHUNK_SIZE must be an integer, got: {raw_chunk!r}") from None
            if chunk_size <= 0:
                raise ConfigError(f"REIFY_CHUNK_SIZE must be positive, got: {chunk_size}")

        return cls(
            shell=env.get("REIFY_SHELL") or DEFAULT_SHELL,
            prelude=env.get("REIFY_SHELL_PRELUDE", DEFAULT_PRELUDE),
            chunk_size=chunk_size,
            log_level=(env.get("REIFY_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper(),
        )
