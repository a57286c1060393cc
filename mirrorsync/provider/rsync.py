# mirrorsync Rsync Provider
# Sync jobs backed by rsync

import logging
from pathlib import Path
from typing import Optional

from mirrorsync.config.schema import ProviderType, RsyncConfig
from mirrorsync.provider.base import JobRunner, LauncherFactory, new_job_context
from mirrorsync.provider.cmd_job import CmdJob
from mirrorsync.provider.context import LOG_DIR_KEY, LOG_FILE_KEY, WORKING_DIR_KEY
from mirrorsync.utils.size import extract_size_from_rsync_log

logger = logging.getLogger(__name__)

# Always passed first, in this order
BASE_RSYNC_OPTIONS: tuple[str, ...] = (
    "-aHvh", "--no-o", "--no-g", "--stats",
    "--exclude", ".~tmp~/",
    "--delete", "--delete-after", "--delay-updates",
    "--safe-links", "--timeout=120", "--contimeout=120",
)  # fmt: skip


def build_rsync_options(config: RsyncConfig) -> tuple[str, ...]:
    """
    Build the rsync argument list for a mirror.

    Extra options come last so they override earlier flags.
    Credentials are never part of the result.

    Args:
        config: Rsync job configuration.

    Returns:
        Ordered options, without upstream and destination.
    """
    options = list(BASE_RSYNC_OPTIONS)

    if config.use_ipv6:
        options.append("-6")
    elif config.use_ipv4:
        options.append("-4")

    if config.exclude_file:
        options.extend(["--exclude-from", config.exclude_file])

    options.extend(config.extra_options)
    return tuple(options)


class RsyncProvider:
    """
    Runs one rsync mirror.

    At most one run is in flight per instance. The size reported by
    `rsync --stats` is kept in `data_size` after each completed run.
    """

    def __init__(self, config: RsyncConfig, launcher: LauncherFactory = CmdJob):
        """
        Initialize provider.

        Args:
            config: Rsync job configuration.
            launcher: Factory creating the process launcher.
        """
        self.config = config
        self.options = build_rsync_options(config)
        self.ctx = new_job_context(config.working_dir, config.log_dir, config.log_file)
        self._runner = JobRunner(config.name, config.retry, launcher)
        self._data_size = ""

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def type(self) -> ProviderType:
        return ProviderType.RSYNC

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
        """Environment carrying the upstream credentials."""
        env: dict[str, str] = {}
        if self.config.username:
            env["USER"] = self.config.username
        if self.config.password:
            env["RSYNC_PASSWORD"] = self.config.password
        return env

    def build_command(self) -> list[str]:
        return [self.config.rsync_cmd, *self.options, self.config.upstream_url, self.working_dir]

    def run(self) -> None:
        """
        Run one sync to completion.

        Raises:
            AlreadyRunningError: If a run is already in flight.
            OSError: If the log file cannot be prepared or rsync cannot be launched.
            CommandError: If rsync exits unsuccessfully.
        """
        self._data_size = ""
        self.start()
        self.wait()

        try:
            content = Path(self.log_file).read_bytes()
        except OSError as e:
            logger.debug("Cannot read log of %s: %s", self.name, e)
            return
        self._data_size = extract_size_from_rsync_log(content)

    def start(self) -> None:
        """
        Launch rsync without waiting for it.

        Raises:
            AlreadyRunningError: If a run is already in flight.
            OSError: If the log file cannot be prepared or rsync cannot be launched.
        """
        self._runner.start(self.build_command(), self.working_dir, self.build_env(), self.log_file)
        logger.info("Started rsync job %s from %s", self.name, self.upstream)

    def wait(self) -> None:
        """
        Block until the running rsync exits.

        Raises:
            RuntimeError: If no run was started.
            CommandError: If rsync exits unsuccessfully.
        """
        self._runner.wait()
