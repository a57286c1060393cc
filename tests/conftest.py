# mirrorsync Test Fixtures
# Pytest fixtures for mirrorsync tests

import stat
import tempfile
import threading
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any, Optional

import pytest
import yaml

from mirrorsync.config.schema import RsyncConfig


class FakeJob:
    """Stand-in for CmdJob that never spawns a process."""

    def __init__(
        self,
        command: list[str],
        working_dir: str,
        env: dict[str, str],
        *,
        output: bytes = b"",
        start_error: Optional[Exception] = None,
        wait_error: Optional[Exception] = None,
        waiting: Optional[threading.Event] = None,
        release: Optional[threading.Event] = None,
    ):
        self.command = command
        self.working_dir = working_dir
        self.env = env
        self.output = output
        self.start_error = start_error
        self.wait_error = wait_error
        self.waiting = waiting
        self.release = release
        self.log_file = None
        self.started = False
        self.waited = False

    def set_log_file(self, log_file) -> None:
        self.log_file = log_file

    def start(self) -> None:
        if self.start_error is not None:
            raise self.start_error
        self.started = True
        if self.log_file is not None:
            self.log_file.write(self.output)
            self.log_file.flush()

    def wait(self) -> None:
        if self.waiting is not None:
            self.waiting.set()
        if self.release is not None:
            self.release.wait(timeout=10)
        self.waited = True
        if self.wait_error is not None:
            raise self.wait_error


class FakeLauncher:
    """Launcher factory recording every FakeJob it creates."""

    def __init__(self, **job_kwargs: Any):
        self.job_kwargs = job_kwargs
        self.jobs: list[FakeJob] = []

    def __call__(self, command: list[str], working_dir: str, env: dict[str, str]) -> FakeJob:
        job = FakeJob(command, working_dir, env, **self.job_kwargs)
        self.jobs.append(job)
        return job


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_home(temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create a temporary home directory."""
    home = temp_dir / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("MIRRORSYNC_CONFIG", raising=False)
    return home


@pytest.fixture
def make_rsync_config(temp_dir: Path) -> Callable[..., RsyncConfig]:
    """Factory for rsync configs rooted in the temp directory."""

    def _make(**overrides: Any) -> RsyncConfig:
        values: dict[str, Any] = {
            "name": "debian",
            "upstream_url": "rsync://host/mod/",
            "working_dir": str(temp_dir / "mirror" / "debian"),
            "log_dir": str(temp_dir / "log" / "debian"),
            "log_file": str(temp_dir / "log" / "debian" / "latest.log"),
        }
        values.update(overrides)
        return RsyncConfig(**values)

    return _make


@pytest.fixture
def fake_launcher() -> FakeLauncher:
    """Launcher writing a typical rsync --stats summary."""
    return FakeLauncher(output=b"sent 1.2K bytes\nTotal file size: 1.33T bytes\n")


@pytest.fixture
def fake_rsync(temp_dir: Path) -> Path:
    """Executable shell script mimicking rsync output."""
    script = temp_dir / "bin" / "rsync"
    script.parent.mkdir()
    script.write_text(
        """#!/bin/sh
echo "args: $@"
echo "user: $USER"
echo "password: $RSYNC_PASSWORD"
echo "Number of files: 3"
echo "Total file size: 2.50G bytes"
""",
        encoding="utf-8",
    )
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return script


@pytest.fixture
def sample_config(temp_dir: Path) -> dict:
    """Create sample worker configuration dict."""
    return {
        "global": {
            "mirror_dir": str(temp_dir / "mirror"),
            "log_dir": str(temp_dir / "log" / "{name}"),
            "interval": 60,
            "retry": 3,
        },
        "mirrors": [
            {
                "name": "debian",
                "provider": "rsync",
                "upstream": "rsync://host/debian/",
                "use_ipv6": True,
                "rsync_options": ["--bwlimit=1000"],
            },
            {
                "name": "pypi",
                "provider": "command",
                "upstream": "https://pypi.org/",
                "command": "/usr/local/bin/sync-pypi --verbose",
                "size_pattern": "Total size: (\\S+)",
                "interval": 30,
                "retry": 0,
            },
        ],
    }


@pytest.fixture
def config_file(temp_home: Path, sample_config: dict) -> Path:
    """Create a configuration file."""
    config_dir = temp_home / ".config" / "mirrorsync"
    config_dir.mkdir(parents=True)
    config_path = config_dir / "config.yaml"

    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump(sample_config, f, default_flow_style=False)

    return config_path


@pytest.fixture
def make_launcher() -> type[FakeLauncher]:
    """Launcher factory class, configured per test."""
    return FakeLauncher
