"""Tests for demo_config.py - demo client configuration."""

import json
import os
import sys
from pathlib import Path
from typing import Any, Dict
from unittest.mock import patch

import pytest

from demo_config import (
    MAIN_SCRIPT,
    SCENARIOS,
    ConfigError,
    default_config,
    interpolate_env_vars,
    load_config,
    validate_schema,
    validate_server,
)


class TestDefaultConfig:
    def test_one_server_per_scenario(self):
        config = default_config()

        assert [s["name"] for s in config["servers"]] == list(SCENARIOS)

    def test_runs_main_with_current_interpreter(self):
        tools = default_config()["servers"][0]

        assert tools["command"] == sys.executable
        assert tools["args"] == [str(MAIN_SCRIPT), "tools"]

    def test_load_without_path(self):
        assert load_config(None) == default_config()


class TestLoadConfig:
    """Tests for load_config function."""

    def test_overrides_keep_scenario_order(
        self, sample_demo_config: Dict[str, Any], tmp_path: Path
    ):
        config_file = tmp_path / "servers.json"
        config_file.write_text(json.dumps(sample_demo_config))

        config = load_config(str(config_file))

        names = [s["name"] for s in config["servers"]]
        assert names == ["tools", "resources", "prompts"]
        assert config["servers"][0]["command"] == "python3"
        assert config["servers"][1]["command"] == sys.executable
        assert config["servers"][2]["args"] == ["main.py", "prompts", "--debug"]

    def test_load_config_file_not_found(self):
        with pytest.raises(ConfigError) as exc_info:
            load_config("/nonexistent/path/servers.json")

        assert "Config file not found" in str(exc_info.value)

    def test_load_config_invalid_json(self, tmp_path: Path):
        config_file = tmp_path / "invalid.json"
        config_file.write_text("{invalid json}")

        with pytest.raises(ConfigError) as exc_info:
            load_config(str(config_file))

        assert "Invalid JSON" in str(exc_info.value)

    def test_load_config_with_env_vars(self, tmp_path: Path):
        config_file = tmp_path / "servers.json"
        config_file.write_text(
            json.dumps(
                {
                    "servers": [
                        {
                            "name": "resources",
                            "command": "${DEMO_PYTHON}",
                            "args": ["${DEMO_MAIN}", "resources"],
                        }
                    ]
                }
            )
        )

        with patch.dict(os.environ, {"DEMO_PYTHON": "python3.12", "DEMO_MAIN": "main.py"}):
            config = load_config(str(config_file))

        resources = config["servers"][1]
        assert resources["command"] == "python3.12"
        assert resources["args"] == ["main.py", "resources"]


class TestValidateSchema:
    def test_valid(self, sample_demo_config: Dict[str, Any]):
        validate_schema(sample_demo_config)

    def test_not_dict(self):
        with pytest.raises(ConfigError) as exc_info:
            validate_schema(["not", "a", "dict"])

        assert "must be a JSON object" in str(exc_info.value)

    def test_missing_servers(self):
        with pytest.raises(ConfigError) as exc_info:
            validate_schema({})

        assert "missing required 'servers' field" in str(exc_info.value)

    def test_duplicate_names(self):
        server = {"name": "tools", "command": "python3"}

        with pytest.raises(ConfigError) as exc_info:
            validate_schema({"servers": [server, dict(server)]})

        assert "Duplicate server name 'tools'" in str(exc_info.value)


class TestValidateServer:
    def test_valid(self):
        validate_server({"name": "prompts", "command": "node", "args": ["3-prompts.js"]}, 0)

    def test_not_dict(self):
        with pytest.raises(ConfigError) as exc_info:
            validate_server("not a dict", 0)

        assert "must be an object" in str(exc_info.value)

    def test_missing_command(self):
        with pytest.raises(ConfigError) as exc_info:
            validate_server({"name": "tools"}, 2)

        assert "Server 2 missing required field 'command'" in str(exc_info.value)

    def test_unknown_scenario(self):
        with pytest.raises(ConfigError) as exc_info:
            validate_server({"name": "sampling", "command": "python3"}, 0)

        assert "must be one of" in str(exc_info.value)

    def test_args_must_be_list(self):
        with pytest.raises(ConfigError):
            validate_server({"name": "tools", "command": "python3", "args": "main.py"}, 0)

    def test_env_must_be_object(self):
        with pytest.raises(ConfigError):
            validate_server({"name": "tools", "command": "python3", "env": ["A=1"]}, 0)


class TestInterpolateEnvVars:
    def test_missing_variable_becomes_empty(self):
        with patch.dict(os.environ, {}, clear=True):
            result = interpolate_env_vars({"command": "${NOPE}/python"})

        assert result == {"command": "/python"}

    def test_nested_values(self):
        with patch.dict(os.environ, {"TOKEN": "abc"}):
            result = interpolate_env_vars({"env": {"KEY": "${TOKEN}"}, "args": ["${TOKEN}", 1]})

        assert result == {"env": {"KEY": "abc"}, "args": ["abc", 1]}

    def test_source_config_left_untouched(self):
        config = {"args": ["${TOKEN}"], "timeout": 5, "debug": None}

        with patch.dict(os.environ, {"TOKEN": "abc"}):
            result = interpolate_env_vars(config)

        assert result == {"args": ["abc"], "timeout": 5, "debug": None}
        assert config["args"] == ["${TOKEN}"]

    def test_bare_dollar_is_literal(self):
        with patch.dict(os.environ, {"HOME": "/root"}):
            assert interpolate_env_vars("$HOME and ${HOME}") == "$HOME and /root"
