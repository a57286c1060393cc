# mirrorsync Provider Module
# Sync job kinds, their process launcher and run bookkeeping

from mirrorsync.config.schema import ProviderType
from mirrorsync.provider.base import JobRunner, MirrorProvider, prepare_log_file
from mirrorsync.provider.cmd_job import CmdJob
from mirrorsync.provider.command import CmdProvider
from mirrorsync.provider.context import LOG_DIR_KEY, LOG_FILE_KEY, WORKING_DIR_KEY, Context
from mirrorsync.provider.errors import AlreadyRunningError, CommandError, ProviderError
from mirrorsync.provider.factory import build_job_config, build_provider, build_providers
from mirrorsync.provider.guard import RunGuard
from mirrorsync.provider.rsync import BASE_RSYNC_OPTIONS, RsyncProvider, build_rsync_options

__all__ = [
    # Interface
    "MirrorProvider",
    "ProviderType",
    # Job kinds
    "RsyncProvider",
    "CmdProvider",
    "BASE_RSYNC_OPTIONS",
    "build_rsync_options",
    # Collaborators
    "CmdJob",
    "JobRunner",
    "RunGuard",
    "Context",
    "WORKING_DIR_KEY",
    "LOG_DIR_KEY",
    "LOG_FILE_KEY",
    "prepare_log_file",
    # Errors
    "ProviderError",
    "AlreadyRunningError",
    "CommandError",
    # Factory
    "build_job_config",
    "build_provider",
    "build_providers",
]
