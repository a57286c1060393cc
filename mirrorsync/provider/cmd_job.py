# mirrorsync Command Job
# External process launcher used by every job kind

import logging
import os
import subprocess
from typing import IO, Optional

from mirrorsync.provider.errors import CommandError

logger = logging.getLogger(__name__)


class CmdJob:
    """
    One launch of an external sync command.

    stdout and stderr are both written to the log handle set with
    `set_log_file`; without a handle the output is discarded.
    """

    def __init__(self, command: list[str], working_dir: str, env: Optional[dict[str, str]] = None):
        """
        Initialize command job.

        Args:
            command: Command vector, program first.
            working_dir: Directory the process runs in.
            env: Variables added on top of the current environment.
        """
        self.command = list(command)
        self.working_dir = working_dir
        self.env = dict(env or {})
        self._log_file: Optional[IO[bytes]] = None
        self._process: Optional[subprocess.Popen] = None

    def set_log_file(self, log_file: Optional[IO[bytes]]) -> None:
        self._log_file = log_file

    @property
    def pid(self) -> Optional[int]:
        return self._process.pid if self._process else None

    @property
    def returncode(self) -> Optional[int]:
        return self._process.returncode if self._process else None

    def start(self) -> None:
        """
        Spawn the process without waiting for it.

        Raises:
            OSError: If the program cannot be executed.
        """
        full_env = os.environ.copy()
        full_env.update(self.env)
        output = self._log_file if self._log_file is not None else subprocess.DEVNULL

        logger.debug("Executing %s in %s", self.command[0], self.working_dir or os.getcwd())
        self._process = subprocess.Popen(
            self.command,
            cwd=self.working_dir or None,
            env=full_env,
            stdin=subprocess.DEVNULL,
            stdout=output,
            stderr=subprocess.STDOUT,
        )

    def wait(self) -> None:
        """
        Block until the process exits.

        Raises:
            RuntimeError: If the job was never started.
            CommandError: If the process exits with a non-zero status.
        """
        if self._process is None:
            raise RuntimeError("command job has not been started")

        returncode = self._process.wait()
        if returncode != 0:
            raise CommandError(
                f"Command failed with exit code {returncode}: {self.command[0]}",
                returncode=returncode,
                command=self.command,
            )
