"""Tests for config loading, argument parsing and the CLI entry point."""

from unittest.mock import patch

import pytest

from rundeck_options.args import parse_args
from rundeck_options.cli import main
from rundeck_options.config import ConfigError, load_config
from rundeck_options.constants import ExitCodes
from rundeck_options.service.server import ServiceConfig

VALID = """
server:
  port: 9001
search:
  url: http://es:9200
storage:
  repositories:
    releases:
      format: maven2
      path: /srv/releases
"""


class TestLoadConfig:
    """YAML config file handling."""

    def test_no_path(self):
        assert load_config(None) == {}

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config(str(tmp_path / "absent.yaml"))

    def test_valid(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(VALID)
        data = load_config(str(path))
        assert data["server"]["port"] == 9001
        assert data["storage"]["repositories"]["releases"]["path"] == "/srv/releases"

    def test_empty_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert load_config(str(path)) == {}

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError):
            load_config(str(path))

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("server: [unclosed\n")
        with pytest.raises(ConfigError):
            load_config(str(path))

    def test_repository_without_path(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("storage:\n  repositories:\n    releases:\n      format: maven2\n")
        with pytest.raises(ConfigError):
            load_config(str(path))


class TestArgs:
    """Argument parsing and overrides."""

    def test_defaults(self):
        args = parse_args([])
        assert args.CONFIG is None
        assert args.PORT is None
        assert args.LOG_LEVEL == "INFO"

    def test_cli_overrides_file(self):
        args = parse_args(["--port", "7000", "--search-url", "http://other:9200", "--snapshots-repository", "nightly"])

        config = ServiceConfig.from_args(args, {"server": {"port": 9001, "host": "0.0.0.0"}})

        assert config.port == 7000
        assert config.host == "0.0.0.0"
        assert config.search_url == "http://other:9200"
        assert config.snapshots_repository == "nightly"


class TestMain:
    """CLI entry point."""

    def test_bad_config_exits(self, tmp_path):
        assert main(["-c", str(tmp_path / "absent.yaml")]) == ExitCodes.CONFIG_ERROR.value

    def test_runs_server(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(VALID)

        with patch("rundeck_options.service.server.run_server_sync") as run:
            assert main(["-c", str(path), "--host", "127.0.0.2"]) == ExitCodes.SUCCESS.value

        config = run.call_args[0][0]
        assert config.host == "127.0.0.2"
        assert config.port == 9001
        assert "releases" in config.repositories


class TestMalformedConfig:
    """Values of the wrong shape are config errors, not crashes."""

    @pytest.mark.parametrize("body", [
        "server:\n  port: abc\n",
        "search:\n  timeout: soon\n",
        "search: nope\n",
        "server: [1, 2]\n",
        "storage: nope\n",
    ])
    def test_load_config_rejects(self, tmp_path, body):
        path = tmp_path / "config.yaml"
        path.write_text(body)
        with pytest.raises(ConfigError):
            load_config(str(path))

    @pytest.mark.parametrize("body", ["server:\n  port: abc\n", "search: nope\n"])
    def test_main_exits_with_config_error(self, tmp_path, body):
        path = tmp_path / "config.yaml"
        path.write_text(body)

        with patch("rundeck_options.service.server.run_server_sync") as run:
            assert main(["-c", str(path)]) == ExitCodes.CONFIG_ERROR.value
        run.assert_not_called()

    def test_numeric_string_port_accepted(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("server:\n  port: '9002'\n")
        assert ServiceConfig.from_mapping(load_config(str(path))).port == 9002
