"""Tests for configuration loading and validation."""

import pytest

from rof.config import DEFAULT_CONFIG, RofConfig, load_config, load_config_from_dict
from rof.config.loader import resolve_config
from rof.exceptions import ConfigFileNotFoundError, ConfigValidationError


class TestLoadConfigFromDict:
    def test_defaults(self):
        config = load_config_from_dict({})
        assert config.snapshot_dir == ".rof_snapshots"
        assert config.suffix == "bak"
        assert config.tag_format == "%Y%m%d%H%M%S"
        assert config.shell == "/bin/sh"
        assert config.manifest is True
        assert config.log_level == "INFO"

    def test_defaults_match_model(self):
        assert load_config_from_dict({}) == RofConfig(**DEFAULT_CONFIG)

    def test_override(self):
        config = load_config_from_dict({"shell": "/bin/bash", "manifest": False})
        assert config.shell == "/bin/bash"
        assert config.manifest is False

    def test_log_level_is_normalized(self):
        config = load_config_from_dict({"log_level": "warning"})
        assert config.log_level == "WARNING"
        assert config.log_level_number == 30

    @pytest.mark.parametrize(
        "data",
        [
            {"snapshot_dir": "nested/dir"},
            {"snapshot_dir": ".."},
            {"snapshot_dir": ""},
            {"suffix": "tar.bak"},
            {"suffix": "ba~k"},
            {"suffix": "b k"},
            {"tag_format": "%Y.%m.%d"},
            {"shell": "  "},
            {"log_level": "LOUD"},
            {"unknown_key": True},
        ],
    )
    def test_invalid_values_rejected(self, data):
        with pytest.raises(ConfigValidationError):
            load_config_from_dict(data)


class TestLoadConfig:
    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigFileNotFoundError):
            load_config(str(tmp_path / "nope.yaml"))

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("shell: [unclosed\n")
        with pytest.raises(ConfigValidationError):
            load_config(str(path))

    def test_non_mapping_yaml(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigValidationError):
            load_config(str(path))

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(str(path)) == load_config_from_dict({})

    def test_values_from_file(self, tmp_path):
        path = tmp_path / "rof.yaml"
        path.write_text("snapshot_dir: .snaps\nlog_level: debug\n")
        config = load_config(str(path))
        assert config.snapshot_dir == ".snaps"
        assert config.log_level == "DEBUG"


class TestResolveConfig:
    def test_defaults_without_files(self, workdir):
        assert resolve_config() == load_config_from_dict({})

    def test_local_file(self, workdir, tmp_path):
        (tmp_path / "work" / ".rof.yaml").write_text("suffix: orig\n")
        assert resolve_config().suffix == "orig"

    def test_env_var_wins(self, workdir, tmp_path, monkeypatch):
        (tmp_path / "work" / ".rof.yaml").write_text("suffix: orig\n")
        env_file = tmp_path / "env.yaml"
        env_file.write_text("suffix: keep\n")
        monkeypatch.setenv("ROF_CONFIG", str(env_file))
        assert resolve_config().suffix == "keep"

    def test_env_var_missing_file(self, workdir, tmp_path, monkeypatch):
        monkeypatch.setenv("ROF_CONFIG", str(tmp_path / "missing.yaml"))
        with pytest.raises(ConfigFileNotFoundError):
            resolve_config()
