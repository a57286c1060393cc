# mirrorsync Command Provider
# Sync jobs backed by an arbitrary script

import logging
import shlex
from pathlib import Path
from typing import Optional

from mirrorsync.config.schema import CmdConfig, ProviderType
from mirrorsync.provider.base import JobRunner, LauncherFactory, new_job_context
from mirrorsync.provider.cmd_job import CmdJob
from mirrorsync.provider.context import LOG_DIR_KEY, LOG_FILE_KEY, WORKING_DIR_KEY
from mirrorsync.utils.size import extract_size_from_log

logger = logging.getLogger(__name__)


class CmdProvider:
    """
    Runs a mirror through a user-supplied command.

    The command learns about the job through MIRROR_* environment variables.
    """

    def __init__(self, config: CmdConfig, launcher: LauncherFactory = CmdJob):
        self.config = config
        self.command = shlex.split(config.command)
        self.ctx = new_job_context(config.working_dir, config.log_dir, config.log_file)
        self._runner = JobRunner(config.name, config.retry, launcher)
        self._data_size = ""

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def type(self) -> ProviderType:
        return ProviderType.COMMAND

    @property
    def upstream(self) -> str:
        return self.config.upstream_url

    @property
    def data_size(self) -> str:
        return self._data_size

    @property
    def interval(self) -> int:
        return self.config.interval

    @property
    def retry(self) -> int:
        return self._runner.retry

    @property
    def working_dir(self) -> str:
        return self.ctx.get(WORKING_DIR_KEY)

    @property
    def log_dir(self) -> str:
        return self.ctx.get(LOG_DIR_KEY)

    @property
    def log_file(self) -> str:
        return self.ctx.get(LOG_FILE_KEY)

    @property
    def cmd(self) -> Optional[CmdJob]:
        """Launcher of the current or last run."""
        return self._runner.cmd

    def is_running(self) -> bool:
        return self._runner.is_running()

    def build_env(self) -> dict[str, str]:
        env = {
            "MIRROR_NAME": self.name,
            "MIRROR_UPSTREAM_URL": self.upstream,
            "MIRROR_WORKING_DIR": self.working_dir,
            "MIRROR_LOG_DIR": self.log_dir,
            "MIRROR_LOG_FILE": self.log_file,
        }
        env.update(self.config.env)
        return env

    def build_command(self) -> list[str]:
        return list(self.command)

    def run(self) -> None:
        """
        Run the command to completion.

        Raises:
            AlreadyRunningError: If a run is already in flight.
            OSError: If the log file cannot be prepared or the command cannot be launched.
            CommandError: If the command exits unsuccessfully.
        """
        self._data_size = ""
        self.start()
        self.wait()

        if not self.config.size_pattern:
            return
        try:
            content = Path(self.log_file).read_bytes()
        except OSError as e:
            logger.debug("Cannot read log of %s: %s", self.name, e)
            return
        self._data_size = extract_size_from_log(content, self.config.size_pattern)

    def start(self) -> None:
        self._runner.start(self.build_command(), self.working_dir, self.build_env(), self.log_file)
        logger.info("Started command job %s", self.name)

    def wait(self) -> None:
        self._runner.wait()
