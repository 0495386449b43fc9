"""Tests for YAML configuration loading."""

import pytest
import yaml
from pydantic import ValidationError

from algoviz.config import CONFIG_ENV_VAR, Config, load_config


def write_yaml(path, data):
    path.write_text(yaml.safe_dump(data))
    return path


class TestDefaults:
    def test_defaults(self):
        config = Config()
        assert config.seed is None
        assert config.sorting.default_size == 20
        assert config.searching.size == 20
        assert config.graph.default_nodes == 7
        assert config.playback.default_delay_ms is None
        assert config.server.port == 5000

    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_config(tmp_path / "absent.yaml") == Config()

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path) == Config()


class TestLoading:
    def test_explicit_path(self, tmp_path):
        path = write_yaml(tmp_path / "algoviz.yaml", {
            "seed": 7,
            "sorting": {"default_size": 30, "default_algorithm": "merge"},
            "server": {"port": 8080},
        })
        config = load_config(path)
        assert config.seed == 7
        assert config.sorting.default_size == 30
        assert config.sorting.default_algorithm == "merge"
        assert config.sorting.max_size == 100
        assert config.server.port == 8080

    def test_env_var(self, tmp_path, monkeypatch):
        path = write_yaml(tmp_path / "custom.yaml", {"graph": {"default_nodes": 10}})
        monkeypatch.setenv(CONFIG_ENV_VAR, str(path))
        assert load_config().graph.default_nodes == 10

    def test_working_directory_file(self, tmp_path, monkeypatch):
        write_yaml(tmp_path / "algoviz.yaml", {"playback": {"default_delay_ms": 250}})
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        monkeypatch.chdir(tmp_path)
        assert load_config().playback.default_delay_ms == 250


class TestValidation:
    @pytest.mark.parametrize(
        "data",
        [
            {"sorting": {"default_size": 500}},
            {"sorting": {"min_value": 10, "max_value": 1}},
            {"graph": {"default_nodes": 2}},
            {"graph": {"min_weight": -1}},
            {"graph": {"extra_link_probability": 1.5}},
            {"searching": {"size": 0}},
            {"playback": {"poll_interval": 0}},
        ],
    )
    def test_rejects_inconsistent_values(self, tmp_path, data):
        with pytest.raises(ValidationError):
            load_config(write_yaml(tmp_path / "bad.yaml", data))
