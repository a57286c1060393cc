# mirrorsync Provider Interface
# Capabilities shared by every job kind plus log-file helpers

import os
from collections.abc import Callable
from pathlib import Path
from typing import IO, Optional, Protocol, runtime_checkable

from mirrorsync.config.schema import ProviderType
from mirrorsync.provider.cmd_job import CmdJob
from mirrorsync.provider.context import LOG_DIR_KEY, LOG_FILE_KEY, WORKING_DIR_KEY, Context
from mirrorsync.provider.errors import AlreadyRunningError
from mirrorsync.provider.guard import RunGuard

# (command, working_dir, env) -> launcher
LauncherFactory = Callable[[list[str], str, dict[str, str]], CmdJob]


@runtime_checkable
class MirrorProvider(Protocol):
    """Operations a caller can perform on any kind of sync job."""

    @property
    def name(self) -> str: ...

    @property
    def type(self) -> ProviderType: ...

    @property
    def upstream(self) -> str: ...

    @property
    def data_size(self) -> str: ...

    @property
    def interval(self) -> int: ...

    @property
    def retry(self) -> int: ...

    @property
    def working_dir(self) -> str: ...

    @property
    def log_file(self) -> str: ...

    def is_running(self) -> bool: ...

    def build_command(self) -> list[str]: ...

    def start(self) -> None: ...

    def wait(self) -> None: ...

    def run(self) -> None: ...


def new_job_context(working_dir: str, log_dir: str, log_file: str) -> Context:
    """Create a context publishing a job's paths."""
    ctx = Context()
    ctx.set(WORKING_DIR_KEY, working_dir)
    ctx.set(LOG_DIR_KEY, log_dir)
    ctx.set(LOG_FILE_KEY, log_file)
    return ctx


def prepare_log_file(log_file: str) -> Optional[IO[bytes]]:
    """
    Open a job's log file for writing, truncating earlier output.

    Args:
        log_file: Path of the log file. os.devnull discards output.

    Returns:
        Binary file handle, or None when output is discarded.

    Raises:
        OSError: If the file cannot be created.
    """
    if log_file == os.devnull:
        return None
    path = Path(log_file)
    path.parent.mkdir(parents=True, exist_ok=True)
    return open(path, "wb")


def close_log_file(handle: Optional[IO[bytes]]) -> None:
    if handle is not None and not handle.closed:
        handle.close()


class JobRunner:
    """
    Launches and reaps the process of one job, at most one at a time.

    Job kinds hold a runner and hand it the command and environment
    they assembled.
    """

    def __init__(self, name: str, retry: int, launcher: LauncherFactory = CmdJob):
        self.name = name
        self.cmd: Optional[CmdJob] = None
        self._guard = RunGuard(retry)
        self._launcher = launcher
        self._log_handle: Optional[IO[bytes]] = None

    @property
    def retry(self) -> int:
        return self._guard.retry

    def is_running(self) -> bool:
        return self._guard.is_running()

    def start(self, command: list[str], working_dir: str, env: dict[str, str], log_file: str) -> CmdJob:
        """
        Launch a process without waiting for it.

        Raises:
            AlreadyRunningError: If a process is already in flight.
            OSError: If the log file cannot be prepared or the process cannot be launched.
        """
        with self._guard:
            if self._guard.is_running():
                raise AlreadyRunningError(self.name)

            cmd = self._launcher(command, working_dir, env)
            log_handle = prepare_log_file(log_file)
            cmd.set_log_file(log_handle)
            try:
                cmd.start()
            except Exception:
                close_log_file(log_handle)
                raise

            self.cmd = cmd
            self._log_handle = log_handle
            self._guard.set_running(True)
            return cmd

    def wait(self) -> None:
        """
        Block until the launched process exits.

        Raises:
            RuntimeError: If nothing was started.
            CommandError: If the process exits unsuccessfully.
        """
        if self.cmd is None:
            raise RuntimeError(f"provider {self.name} has not been started")
        try:
            self.cmd.wait()
        finally:
            close_log_file(self._log_handle)
            self._log_handle = None
            with self._guard:
                self._guard.set_running(False)
