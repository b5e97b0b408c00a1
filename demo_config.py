"""Configuration loading and validation for the demo client.

The demo client spawns one server per scenario. By default each server is
``main.py <capability>`` run with the current interpreter; a JSON file can
override the command for any scenario, for example to point the client at
another implementation of the same servers.
"""

import json
import os
import re
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from logging_config import get_logger

logger = get_logger(__name__)

SCENARIOS = ("tools", "resources", "prompts")

MAIN_SCRIPT = Path(__file__).resolve().with_name("main.py")

# ${NAME} in any config string, expanded from the environment at load time
ENV_REFERENCE = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")


class ConfigError(Exception):
    """Error loading or validating configuration."""

    pass


def default_server(name: str) -> Dict[str, Any]:
    """Config entry that runs a demo server with the current interpreter."""
    return {"name": name, "command": sys.executable, "args": [str(MAIN_SCRIPT), name]}


def default_config() -> Dict[str, Any]:
    return {"servers": [default_server(name) for name in SCENARIOS]}


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load and validate configuration from a JSON file.

    Scenarios the file does not mention keep their default server.

    Args:
        path: Path to the config file, or None for the defaults

    Returns:
        Validated configuration dictionary with one server per scenario,
        in scenario order

    Raises:
        ConfigError: If config is invalid or file cannot be read
    """
    if path is None:
        return default_config()

    config_path = Path(path)

    if not config_path.exists():
        raise ConfigError(f"Config file not found: {path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}")
    except Exception as e:
        raise ConfigError(f"Failed to read {path}: {e}")

    validate_schema(config)
    config = interpolate_env_vars(config)

    overrides = {server["name"]: server for server in config["servers"]}
    servers: List[Dict[str, Any]] = [
        overrides.get(name, default_server(name)) for name in SCENARIOS
    ]

    logger.info(f"Loaded config from {path} with {len(overrides)} server overrides")
    return {"servers": servers}


def validate_schema(config: Dict[str, Any]) -> None:
    """Validate configuration schema.

    Args:
        config: Configuration dictionary to validate

    Raises:
        ConfigError: If schema validation fails
    """
    if not isinstance(config, dict):
        raise ConfigError("Config must be a JSON object")

    if "servers" not in config:
        raise ConfigError("Config missing required 'servers' field")

    if not isinstance(config["servers"], list):
        raise ConfigError("'servers' must be an array")

    seen: set = set()
    for i, server in enumerate(config["servers"]):
        validate_server(server, i)
        if server["name"] in seen:
            raise ConfigError(f"Duplicate server name '{server['name']}'")
        seen.add(server["name"])


def validate_server(server: Dict[str, Any], index: int) -> None:
    """Validate a single server configuration.

    Args:
        server: Server configuration dict
        index: Server index for error messages

    Raises:
        ConfigError: If server config is invalid
    """
    if not isinstance(server, dict):
        raise ConfigError(f"Server {index} must be an object")

    required_fields = ["name", "command"]
    for field in required_fields:
        if field not in server:
            raise ConfigError(f"Server {index} missing required field '{field}'")

    if server["name"] not in SCENARIOS:
        raise ConfigError(
            f"Server {index} 'name' must be one of: {', '.join(SCENARIOS)}"
        )

    if not isinstance(server["command"], str) or not server["command"]:
        raise ConfigError(f"Server {index} 'command' must be a non-empty string")

    if "args" in server and not isinstance(server["args"], list):
        raise ConfigError(f"Server {index} 'args' must be an array")

    if "env" in server and not isinstance(server["env"], dict):
        raise ConfigError(f"Server {index} 'env' must be an object")

    if "cwd" in server and not isinstance(server["cwd"], str):
        raise ConfigError(f"Server {index} 'cwd' must be a string")


def _env_value(match: "re.Match[str]") -> str:
    name = match.group(1)
    if name not in os.environ:
        logger.warning(f"Config references unset variable ${{{name}}}, substituting ''")
    return os.environ.get(name, "")


def interpolate_env_vars(value: Any) -> Any:
    """Expand ``${NAME}`` references in every string of a parsed config.

    Dicts and lists are copied with their strings expanded, other values
    pass through unchanged. Unset variables expand to an empty string.
    """
    if isinstance(value, str):
        return ENV_REFERENCE.sub(_env_value, value)
    if isinstance(value, dict):
        return {key: interpolate_env_vars(item) for key, item in value.items()}
    if isinstance(value, list):
        return [interpolate_env_vars(item) for item in value]
    return value
