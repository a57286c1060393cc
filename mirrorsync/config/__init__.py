# mirrorsync Configuration Module
# Handles YAML-based configuration loading, validation, and defaults

from mirrorsync.config.defaults import (
    DEFAULT_INTERVAL,
    DEFAULT_MAX_RETRY,
    DEFAULT_CONFIG,
    generate_default_config,
)
from mirrorsync.config.loader import (
    ConfigError,
    ensure_config_exists,
    find_mirror,
    get_config_path,
    load_config,
    save_config,
    validate_config_file,
)
from mirrorsync.config.schema import (
    CmdConfig,
    GlobalConfig,
    MirrorConfig,
    ProviderType,
    RsyncConfig,
    WorkerConfig,
)

__all__ = [
    # Schema
    "WorkerConfig",
    "GlobalConfig",
    "MirrorConfig",
    "RsyncConfig",
    "CmdConfig",
    "ProviderType",
    # Loader
    "ConfigError",
    "load_config",
    "save_config",
    "get_config_path",
    "ensure_config_exists",
    "validate_config_file",
    "find_mirror",
    # Defaults
    "DEFAULT_CONFIG",
    "DEFAULT_INTERVAL",
    "DEFAULT_MAX_RETRY",
    "generate_default_config",
]
