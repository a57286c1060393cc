# mirrorsync Provider Factory
# Turn worker config entries into runnable sync jobs

import os

from mirrorsync.config.defaults import LOG_FILE_NAME
from mirrorsync.config.loader import ConfigError
from mirrorsync.config.schema import CmdConfig, GlobalConfig, MirrorConfig, ProviderType, RsyncConfig, WorkerConfig
from mirrorsync.provider.base import MirrorProvider
from mirrorsync.provider.command import CmdProvider
from mirrorsync.provider.rsync import RsyncProvider


def resolve_paths(mirror: MirrorConfig, global_config: GlobalConfig) -> tuple[str, str, str]:
    """
    Compute a mirror's working dir, log dir and log file.

    Returns:
        Tuple of (working_dir, log_dir, log_file).

    Raises:
        ConfigError: If the log dir template uses anything but {name}.
    """
    mirror_dir = mirror.mirror_dir or global_config.mirror_dir
    log_dir_template = mirror.log_dir or global_config.log_dir

    working_dir = os.path.join(mirror_dir, mirror.name)
    try:
        log_dir = log_dir_template.format(name=mirror.name)
    except (KeyError, IndexError, ValueError) as e:
        raise ConfigError(
            f"Mirror '{mirror.name}': invalid log_dir template '{log_dir_template}' ({e!r})"
        ) from e
    log_file = os.path.join(log_dir, LOG_FILE_NAME)
    return working_dir, log_dir, log_file


def build_job_config(mirror: MirrorConfig, global_config: GlobalConfig) -> RsyncConfig | CmdConfig:
    """
    Build the job configuration of a mirror.

    Raises:
        ValidationError: If the resulting job configuration is invalid.
        ConfigError: If the mirror misses provider-specific settings.
    """
    working_dir, log_dir, log_file = resolve_paths(mirror, global_config)
    interval = mirror.interval or global_config.interval
    retry = mirror.retry if mirror.retry is not None else global_config.retry

    if mirror.provider == ProviderType.RSYNC:
        return RsyncConfig(
            name=mirror.name,
            rsync_cmd=mirror.rsync_cmd,
            upstream_url=mirror.upstream,
            username=mirror.username,
            password=mirror.password,
            exclude_file=mirror.exclude_file,
            extra_options=tuple(mirror.rsync_options),
            working_dir=working_dir,
            log_dir=log_dir,
            log_file=log_file,
            use_ipv6=mirror.use_ipv6,
            use_ipv4=mirror.use_ipv4,
            interval=interval,
            retry=retry,
        )

    if not mirror.command:
        raise ConfigError(f"Mirror '{mirror.name}' uses the command provider but has no command")
    return CmdConfig(
        name=mirror.name,
        upstream_url=mirror.upstream,
        command=mirror.command,
        env=mirror.env,
        size_pattern=mirror.size_pattern,
        working_dir=working_dir,
        log_dir=log_dir,
        log_file=log_file,
        interval=interval,
        retry=retry,
    )


def build_provider(mirror: MirrorConfig, global_config: GlobalConfig) -> MirrorProvider:
    """Build the sync job of a mirror."""
    job_config = build_job_config(mirror, global_config)
    if isinstance(job_config, RsyncConfig):
        return RsyncProvider(job_config)
    return CmdProvider(job_config)


def build_providers(config: WorkerConfig) -> list[MirrorProvider]:
    """Build sync jobs for every configured mirror, in file order."""
    return [build_provider(mirror, config.global_) for mirror in config.mirrors]
