"""
Configuration loading utilities.

Supports environment variable interpolation; loaded policies are merged over
the built-in "utc" and "moscow" policies.
"""

import os
import re
from pathlib import Path
from typing import Any

import yaml

from zonestamp.config.settings import ZonestampConfig, builtin_policies


def _interpolate_env_vars(value: str) -> str:
    """
    Interpolate environment variables in string values.

    Supports ${VAR} and ${VAR:default} syntax.
    """
    pattern = r"\$\{([^}:]+)(?::([^}]*))?\}"

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        default = match.group(2)
        return os.environ.get(var_name, default if default is not None else "")

    return re.sub(pattern, replacer, value)


def _process_config_values(obj: Any) -> Any:
    """Recursively process config values for env var interpolation."""
    if isinstance(obj, str):
        return _interpolate_env_vars(obj)
    if isinstance(obj, dict):
        return {k: _process_config_values(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_process_config_values(item) for item in obj]
    return obj


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries, with override taking precedence."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML file and process environment variables."""
    with path.open(encoding="utf-8") as f:
        data = yaml.safe_load(f)
    return _process_config_values(data) if data else {}


def load_config(config_path: Path) -> ZonestampConfig:
    """
    Load zonestamp configuration from a YAML file.

    Example:
        default_policy: berlin
        policies:
          berlin:
            input_zone: Europe/Berlin
            output_zone: "${OUTPUT_ZONE:UTC}"
        logging:
          level: DEBUG

    Args:
        config_path: Path to the configuration file.

    Returns:
        Fully validated ZonestampConfig instance.
    """
    if not config_path.exists():
        msg = f"Config file not found: {config_path}"
        raise FileNotFoundError(msg)

    builtin = {
        name: policy.model_dump() for name, policy in builtin_policies().items()
    }
    merged = _deep_merge({"policies": builtin}, load_yaml(config_path))

    if not isinstance(merged.get("policies"), dict):
        msg = "Config 'policies' must be a mapping of name to policy"
        raise ValueError(msg)

    return ZonestampConfig.model_validate(merged)
