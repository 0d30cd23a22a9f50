# reify/entries/execute.py

from __future__ import annotations

import os
import subprocess
from typing import Dict, Optional

from reify.config import Settings
from reify.entries.types import Entry
from reify.errors import AbnormalExit, ExecError
from reify.log import get_logger

log = get_logger("execute")


def command_env(entry: Entry) -> Dict[str, str]:
    """
    Environment for the command: the caller's environment plus
    `files` and `required_files` as newline-joined declared paths.
    """
    return {
        **os.environ,
        "files": "\n".join(entry.files),
        "required_files": "\n".join(entry.required_files),
    }


def script_body(entry: Entry, settings: Settings) -> str:
    if not settings.prelude:
        return entry.cmd
    return "\n".join([settings.prelude, entry.cmd])


def run_command(entry: Entry, settings: Optional[Settings] = None) -> int:
    """
    Run entry.cmd through the shell and return its exit code.

    stdout/stderr are inherited, not captured. Blocks until the process
    exits; there is no timeout.

    Raises:
        ExecError if the shell cannot be spawned.
        AbnormalExit if the process ends without an exit code.
    """
    settings = settings or Settings.from_env()

    log.info("%s: running", entry.display_name)
    try:
        proc = subprocess.run(
            [settings.shell, "-c", script_body(entry, settings)],
            env=command_env(entry),
        )
    except OSError as e:
        raise ExecError(f"could not spawn {settings.shell}: {e}") from e

    # subprocess reports death-by-signal as a negative return code
    if proc.returncode < 0:
        raise AbnormalExit(-proc.returncode)

    log.info("%s: exit %d", entry.display_name, proc.returncode)
    return proc.returncode
