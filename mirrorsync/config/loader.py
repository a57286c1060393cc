# mirrorsync Configuration Loader
# Load, save, and validate YAML worker configuration files

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from mirrorsync.config.defaults import generate_default_config
from mirrorsync.config.schema import MirrorConfig, WorkerConfig


class ConfigError(Exception):
    """Exception raised when a worker configuration cannot be used."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


def get_config_dir() -> Path:
    """Get the mirrorsync configuration directory."""
    return Path.home() / ".config" / "mirrorsync"


def get_config_path() -> Path:
    """Get the path to the configuration file."""
    # Allow override via environment variable
    env_path = os.environ.get("MIRRORSYNC_CONFIG")
    if env_path:
        return Path(env_path).expanduser()
    return get_config_dir() / "config.yaml"


def load_config(config_path: Optional[Path] = None) -> WorkerConfig:
    """
    Load configuration from YAML file.

    Args:
        config_path: Optional path to config file. Uses default if not provided.

    Returns:
        WorkerConfig: Validated configuration object.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValidationError: If config file is invalid.
    """
    if config_path is None:
        config_path = get_config_path()

    if not config_path.exists():
        raise FileNotFoundError(
            f"Configuration file not found: {config_path}\nRun 'mirrorsync config init' to create one."
        )

    with open(config_path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        data = {}

    return WorkerConfig.model_validate(data)


def save_config(config: WorkerConfig, config_path: Optional[Path] = None) -> Path:
    """
    Save configuration to YAML file.

    Args:
        config: Configuration object to save.
        config_path: Optional path to config file. Uses default if not provided.

    Returns:
        Path: Path where config was saved.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    # mode='json' serializes Enums as their string values
    data = config.model_dump(exclude_none=True, by_alias=True, mode="json")

    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False, allow_unicode=True)

    return config_path


def ensure_config_exists(config_path: Optional[Path] = None) -> tuple[Path, bool]:
    """
    Ensure configuration file exists, creating default if needed.

    Returns:
        Tuple of (config_path, was_created).
    """
    if config_path is None:
        config_path = get_config_path()

    if config_path.exists():
        return config_path, False

    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(generate_default_config(), encoding="utf-8")
    return config_path, True


def validate_config_file(config_path: Optional[Path] = None) -> tuple[bool, list[str]]:
    """
    Validate a configuration file without building any jobs.

    Args:
        config_path: Path to config file to validate.

    Returns:
        Tuple of (is_valid, error_messages).
    """
    if config_path is None:
        config_path = get_config_path()

    errors: list[str] = []

    if not config_path.exists():
        return False, [f"Configuration file not found: {config_path}"]

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        return False, [f"Invalid YAML syntax: {e}"]

    if data is None:
        return False, ["Configuration file is empty"]

    try:
        config = WorkerConfig.model_validate(data)
    except ValidationError as e:
        for error in e.errors():
            loc = " -> ".join(str(l) for l in error["loc"])
            errors.append(f"{loc}: {error['msg']}")
        return False, errors

    if not config.mirrors:
        errors.append("No mirrors defined")

    # Building the job configs catches provider-specific problems
    # such as an rsync upstream without trailing slash
    from mirrorsync.provider.factory import build_job_config

    for mirror in config.mirrors:
        try:
            build_job_config(mirror, config.global_)
        except (ValidationError, ConfigError) as e:
            errors.append(f"mirrors -> {mirror.name}: {_first_error(e)}")

    return len(errors) == 0, errors


def find_mirror(config: WorkerConfig, name: str) -> MirrorConfig:
    """
    Look up a mirror by name.

    Raises:
        ConfigError: If no mirror has this name.
    """
    mirror = config.get_mirror(name)
    if mirror is None:
        raise ConfigError(f"Mirror '{name}' not found in configuration")
    return mirror


def _first_error(exc: Exception) -> str:
    if isinstance(exc, ValidationError):
        error = exc.errors()[0]
        return error["msg"]
    return str(exc)
