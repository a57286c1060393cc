# mirrorsync Configuration Schema
# Pydantic models for job configs and the YAML worker file

import os
import re
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mirrorsync.config.defaults import DEFAULT_INTERVAL, DEFAULT_MAX_RETRY, DEFAULT_RSYNC_CMD


class ProviderType(str, Enum):
    """Kind of sync job."""

    RSYNC = "rsync"
    COMMAND = "command"


def _default_retry(v: int | None) -> int:
    if not v:
        return DEFAULT_MAX_RETRY
    if v < 0:
        raise ValueError("retry must not be negative")
    return v


class RsyncConfig(BaseModel):
    """Sync parameters of a single rsync mirror."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Unique job identifier")
    rsync_cmd: str = Field(default=DEFAULT_RSYNC_CMD, description="Path to the rsync binary")
    upstream_url: str = Field(description="Upstream rsync URL, must end with /")
    username: str = Field(default="", description="Upstream user, passed as USER")
    password: str = Field(default="", description="Upstream password, passed as RSYNC_PASSWORD")
    exclude_file: str = Field(default="", description="File passed to --exclude-from")
    extra_options: tuple[str, ...] = Field(default=(), description="Appended after all built-in options")
    working_dir: str = Field(default="", description="Local mirror directory")
    log_dir: str = Field(default="", description="Directory holding the job's logs")
    log_file: str = Field(default=os.devnull, description="Log file rsync output is written to")
    use_ipv6: bool = Field(default=False, description="Force IPv6 (-6)")
    use_ipv4: bool = Field(default=False, description="Force IPv4 (-4)")
    interval: int = Field(default=DEFAULT_INTERVAL, gt=0, description="Sync interval in minutes")
    retry: int | None = Field(default=0, validate_default=True, description="Retry count")

    @field_validator("upstream_url")
    @classmethod
    def check_upstream_url(cls, v: str) -> str:
        """Rsync upstreams must denote a directory."""
        if not v.endswith("/"):
            raise ValueError("rsync upstream URL should end with /")
        return v

    @field_validator("rsync_cmd")
    @classmethod
    def default_rsync_cmd(cls, v: str) -> str:
        return v or DEFAULT_RSYNC_CMD

    @field_validator("retry")
    @classmethod
    def default_retry(cls, v: int | None) -> int:
        return _default_retry(v)

    @property
    def ip_family(self) -> str:
        """Network family preference: "ipv6", "ipv4" or "auto"."""
        if self.use_ipv6:
            return "ipv6"
        if self.use_ipv4:
            return "ipv4"
        return "auto"


class CmdConfig(BaseModel):
    """Sync parameters of a mirror synced by an external script."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Unique job identifier")
    upstream_url: str = Field(description="Upstream location handed to the script")
    command: str = Field(description="Command line to execute")
    env: dict[str, str] = Field(default_factory=dict, description="Extra environment variables")
    size_pattern: str | None = Field(default=None, description="Regex whose first group is the data size")
    working_dir: str = Field(default="")
    log_dir: str = Field(default="")
    log_file: str = Field(default=os.devnull)
    interval: int = Field(default=DEFAULT_INTERVAL, gt=0)
    retry: int | None = Field(default=0, validate_default=True)

    @field_validator("command")
    @classmethod
    def check_command(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("command must not be empty")
        return v

    @field_validator("size_pattern")
    @classmethod
    def check_size_pattern(cls, v: str | None) -> str | None:
        if v is None:
            return v
        try:
            re.compile(v)
        except re.error as e:
            raise ValueError(f"invalid size_pattern: {e}") from e
        return v

    @field_validator("retry")
    @classmethod
    def default_retry(cls, v: int | None) -> int:
        return _default_retry(v)


class GlobalConfig(BaseModel):
    """Settings shared by every mirror of a worker."""

    mirror_dir: str = Field(description="Parent directory of all mirror working dirs")
    log_dir: str = Field(description="Log directory template, {name} is the mirror name")
    interval: int = Field(default=DEFAULT_INTERVAL, gt=0, description="Default sync interval in minutes")
    retry: int = Field(default=DEFAULT_MAX_RETRY, ge=0, description="Default retry count")

    @field_validator("mirror_dir", "log_dir")
    @classmethod
    def expand_paths(cls, v: str) -> str:
        """Expand ~ in paths."""
        return str(Path(v).expanduser())


class MirrorConfig(BaseModel):
    """One mirror entry of the worker file."""

    name: str = Field(description="Unique mirror name")
    provider: ProviderType = Field(default=ProviderType.RSYNC, description="Job kind")
    upstream: str = Field(description="Upstream URL")
    # rsync
    rsync_cmd: str = Field(default="", description="rsync binary, defaults to rsync")
    username: str = Field(default="")
    password: str = Field(default="")
    exclude_file: str = Field(default="")
    rsync_options: list[str] = Field(default_factory=list, description="Extra rsync arguments")
    use_ipv6: bool = Field(default=False)
    use_ipv4: bool = Field(default=False)
    # command
    command: str | None = Field(default=None, description="Command line for the command provider")
    env: dict[str, str] = Field(default_factory=dict)
    size_pattern: str | None = Field(default=None)
    # overrides of global settings
    mirror_dir: str | None = Field(default=None, description="Overrides global mirror_dir")
    log_dir: str | None = Field(default=None, description="Overrides global log_dir")
    interval: int | None = Field(default=None, gt=0)
    retry: int | None = Field(default=None, ge=0)

    @field_validator("mirror_dir", "log_dir", "exclude_file")
    @classmethod
    def expand_optional_paths(cls, v: str | None) -> str | None:
        """Expand ~ in optional paths."""
        if not v:
            return v
        return str(Path(v).expanduser())


class WorkerConfig(BaseModel):
    """Root configuration model for a mirrorsync worker."""

    global_: GlobalConfig = Field(alias="global", description="Worker-wide settings")
    mirrors: list[MirrorConfig] = Field(default_factory=list, description="Mirror definitions")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("mirrors")
    @classmethod
    def check_unique_names(cls, v: list[MirrorConfig]) -> list[MirrorConfig]:
        seen: set[str] = set()
        for mirror in v:
            if mirror.name in seen:
                raise ValueError(f"duplicate mirror name: {mirror.name}")
            seen.add(mirror.name)
        return v

    def get_mirror(self, name: str) -> MirrorConfig | None:
        """Get a mirror by name."""
        for mirror in self.mirrors:
            if mirror.name == name:
                return mirror
        return None
