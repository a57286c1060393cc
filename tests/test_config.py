# mirrorsync Config Tests
# Tests for configuration schema, loading and validation

import os
from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from mirrorsync.config.defaults import DEFAULT_CONFIG, DEFAULT_MAX_RETRY, generate_default_config
from mirrorsync.config.loader import (
    ConfigError,
    ensure_config_exists,
    find_mirror,
    get_config_path,
    load_config,
    save_config,
    validate_config_file,
)
from mirrorsync.config.schema import CmdConfig, ProviderType, RsyncConfig, WorkerConfig


class TestRsyncConfig:
    """Tests for RsyncConfig schema."""

    def test_minimal_config(self):
        config = RsyncConfig(name="debian", upstream_url="rsync://host/mod/")
        assert config.rsync_cmd == "rsync"
        assert config.retry == DEFAULT_MAX_RETRY
        assert config.extra_options == ()
        assert config.log_file == os.devnull
        assert config.ip_family == "auto"

    @pytest.mark.parametrize("url", ["rsync://host/mod", "rsync://host/mod/file.iso", ""])
    def test_upstream_without_trailing_slash(self, url: str):
        with pytest.raises(ValidationError, match="should end with /"):
            RsyncConfig(name="debian", upstream_url=url)

    def test_empty_rsync_cmd_defaults(self):
        config = RsyncConfig(name="debian", upstream_url="rsync://host/mod/", rsync_cmd="")
        assert config.rsync_cmd == "rsync"

    def test_custom_rsync_cmd(self):
        config = RsyncConfig(name="debian", upstream_url="rsync://host/mod/", rsync_cmd="/opt/bin/rsync")
        assert config.rsync_cmd == "/opt/bin/rsync"

    @pytest.mark.parametrize("retry", [0, None])
    def test_unset_retry_defaults(self, retry):
        config = RsyncConfig(name="debian", upstream_url="rsync://host/mod/", retry=retry)
        assert config.retry == DEFAULT_MAX_RETRY

    def test_explicit_retry(self):
        config = RsyncConfig(name="debian", upstream_url="rsync://host/mod/", retry=5)
        assert config.retry == 5

    def test_negative_retry_rejected(self):
        with pytest.raises(ValidationError):
            RsyncConfig(name="debian", upstream_url="rsync://host/mod/", retry=-1)

    def test_extra_options_keep_order(self):
        config = RsyncConfig(name="debian", upstream_url="rsync://host/mod/", extra_options=["--b", "--a"])
        assert config.extra_options == ("--b", "--a")

    def test_frozen(self):
        config = RsyncConfig(name="debian", upstream_url="rsync://host/mod/")
        with pytest.raises(ValidationError):
            config.upstream_url = "rsync://other/mod/"

    def test_ip_family(self):
        both = RsyncConfig(name="d", upstream_url="rsync://h/m/", use_ipv6=True, use_ipv4=True)
        v4 = RsyncConfig(name="d", upstream_url="rsync://h/m/", use_ipv4=True)
        assert both.ip_family == "ipv6"
        assert v4.ip_family == "ipv4"


class TestCmdConfig:
    """Tests for CmdConfig schema."""

    def test_defaults(self):
        config = CmdConfig(name="pypi", upstream_url="https://pypi.org/", command="sync.sh")
        assert config.env == {}
        assert config.size_pattern is None
        assert config.retry == DEFAULT_MAX_RETRY

    def test_upstream_without_trailing_slash_allowed(self):
        config = CmdConfig(name="pypi", upstream_url="https://pypi.org", command="sync.sh")
        assert config.upstream_url == "https://pypi.org"

    def test_empty_command_rejected(self):
        with pytest.raises(ValidationError):
            CmdConfig(name="pypi", upstream_url="https://pypi.org/", command="  ")

    def test_invalid_size_pattern_rejected(self):
        with pytest.raises(ValidationError, match="invalid size_pattern"):
            CmdConfig(name="pypi", upstream_url="https://pypi.org/", command="sync.sh", size_pattern="(")

    def test_size_pattern_kept(self):
        config = CmdConfig(
            name="pypi", upstream_url="https://pypi.org/", command="sync.sh", size_pattern=r"Total size: (\S+)"
        )
        assert config.size_pattern == r"Total size: (\S+)"


class TestWorkerConfig:
    """Tests for WorkerConfig schema."""

    def test_full_config(self, sample_config: dict):
        config = WorkerConfig.model_validate(sample_config)

        assert config.global_.interval == 60
        assert len(config.mirrors) == 2
        assert config.mirrors[0].provider == ProviderType.RSYNC
        assert config.mirrors[1].provider == ProviderType.COMMAND

    def test_provider_defaults_to_rsync(self, sample_config: dict):
        del sample_config["mirrors"][0]["provider"]
        config = WorkerConfig.model_validate(sample_config)
        assert config.mirrors[0].provider == ProviderType.RSYNC

    def test_duplicate_names_rejected(self, sample_config: dict):
        sample_config["mirrors"][1]["name"] = "debian"
        with pytest.raises(ValidationError, match="duplicate mirror name"):
            WorkerConfig.model_validate(sample_config)

    def test_get_mirror(self, sample_config: dict):
        config = WorkerConfig.model_validate(sample_config)
        assert config.get_mirror("pypi").upstream == "https://pypi.org/"
        assert config.get_mirror("missing") is None

    def test_find_mirror_missing(self, sample_config: dict):
        config = WorkerConfig.model_validate(sample_config)
        with pytest.raises(ConfigError, match="not found"):
            find_mirror(config, "missing")

    def test_home_expansion(self, sample_config: dict, temp_home: Path):
        sample_config["global"]["mirror_dir"] = "~/mirror"
        config = WorkerConfig.model_validate(sample_config)
        assert config.global_.mirror_dir == str(temp_home / "mirror")


class TestConfigLoader:
    """Tests for config loading and saving."""

    def test_get_config_path_default(self, temp_home: Path):
        assert get_config_path() == temp_home / ".config" / "mirrorsync" / "config.yaml"

    def test_get_config_path_env(self, temp_home: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("MIRRORSYNC_CONFIG", str(temp_home / "other.yaml"))
        assert get_config_path() == temp_home / "other.yaml"

    def test_load_config(self, config_file: Path):
        config = load_config(config_file)
        assert config.get_mirror("debian") is not None

    def test_load_default_path(self, config_file: Path):
        config = load_config()
        assert len(config.mirrors) == 2

    def test_load_missing(self, temp_dir: Path):
        with pytest.raises(FileNotFoundError, match="config init"):
            load_config(temp_dir / "nope.yaml")

    def test_save_and_reload(self, sample_config: dict, temp_dir: Path):
        config = WorkerConfig.model_validate(sample_config)
        path = save_config(config, temp_dir / "out" / "config.yaml")

        data = yaml.safe_load(path.read_text(encoding="utf-8"))
        assert "global" in data
        assert data["mirrors"][1]["provider"] == "command"

        reloaded = load_config(path)
        assert reloaded.get_mirror("debian").rsync_options == ["--bwlimit=1000"]

    def test_ensure_config_exists(self, temp_home: Path):
        path, created = ensure_config_exists()
        assert created
        assert path.exists()

        path, created = ensure_config_exists()
        assert not created


class TestValidateConfigFile:
    """Tests for validate_config_file."""

    def test_valid(self, config_file: Path):
        is_valid, errors = validate_config_file(config_file)
        assert is_valid
        assert errors == []

    def test_missing_file(self, temp_dir: Path):
        is_valid, errors = validate_config_file(temp_dir / "nope.yaml")
        assert not is_valid
        assert "not found" in errors[0]

    def test_empty_file(self, temp_dir: Path):
        path = temp_dir / "empty.yaml"
        path.write_text("", encoding="utf-8")
        is_valid, errors = validate_config_file(path)
        assert not is_valid
        assert errors == ["Configuration file is empty"]

    def test_invalid_yaml(self, temp_dir: Path):
        path = temp_dir / "bad.yaml"
        path.write_text("global: [unclosed", encoding="utf-8")
        is_valid, errors = validate_config_file(path)
        assert not is_valid
        assert "Invalid YAML" in errors[0]

    def test_schema_error(self, temp_dir: Path):
        path = temp_dir / "bad.yaml"
        path.write_text(yaml.dump({"mirrors": []}), encoding="utf-8")
        is_valid, errors = validate_config_file(path)
        assert not is_valid
        assert any(e.startswith("global") for e in errors)

    def test_rsync_upstream_without_slash(self, temp_dir: Path, sample_config: dict):
        sample_config["mirrors"][0]["upstream"] = "rsync://host/debian"
        path = temp_dir / "bad.yaml"
        path.write_text(yaml.dump(sample_config), encoding="utf-8")

        is_valid, errors = validate_config_file(path)
        assert not is_valid
        assert errors[0].startswith("mirrors -> debian")
        assert "should end with /" in errors[0]

    def test_command_provider_without_command(self, temp_dir: Path, sample_config: dict):
        del sample_config["mirrors"][1]["command"]
        path = temp_dir / "bad.yaml"
        path.write_text(yaml.dump(sample_config), encoding="utf-8")

        is_valid, errors = validate_config_file(path)
        assert not is_valid
        assert "has no command" in errors[0]

    def test_invalid_size_pattern(self, temp_dir: Path, sample_config: dict):
        sample_config["mirrors"][1]["size_pattern"] = "("
        path = temp_dir / "bad.yaml"
        path.write_text(yaml.dump(sample_config), encoding="utf-8")

        is_valid, errors = validate_config_file(path)
        assert not is_valid
        assert errors[0].startswith("mirrors -> pypi")
        assert "invalid size_pattern" in errors[0]

    def test_unknown_log_dir_placeholder(self, temp_dir: Path, sample_config: dict):
        sample_config["global"]["log_dir"] = str(temp_dir / "log" / "{year}" / "{name}")
        path = temp_dir / "bad.yaml"
        path.write_text(yaml.dump(sample_config), encoding="utf-8")

        is_valid, errors = validate_config_file(path)
        assert not is_valid
        assert len(errors) == 2
        assert "invalid log_dir template" in errors[0]

    def test_no_mirrors(self, temp_dir: Path, sample_config: dict):
        sample_config["mirrors"] = []
        path = temp_dir / "empty_mirrors.yaml"
        path.write_text(yaml.dump(sample_config), encoding="utf-8")

        is_valid, errors = validate_config_file(path)
        assert not is_valid
        assert "No mirrors defined" in errors


class TestDefaults:
    """Tests for default configuration."""

    def test_default_config_is_valid(self):
        config = WorkerConfig.model_validate(DEFAULT_CONFIG)
        assert config.mirrors[0].name == "debian"

    def test_generated_yaml_matches_defaults(self):
        content = generate_default_config()
        assert content.startswith("# mirrorsync")
        assert yaml.safe_load(content) == DEFAULT_CONFIG
