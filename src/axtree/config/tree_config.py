"""
Tree processing configuration.

Values are resolved in order, later sources winning:
1. dataclass defaults
2. YAML file (explicit path, else AXTREE_CONFIG, else config/axtree.yaml)
3. environment variables, with a .env file loaded through python-dotenv
"""

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from dotenv import load_dotenv

DEFAULT_CONFIG_FILE = Path("config") / "axtree.yaml"

ENV_VARIABLES = {
    "max_elements": "AXTREE_MAX_ELEMENTS",
    "include_zero_size": "AXTREE_INCLUDE_ZERO_SIZE",
    "pretty": "AXTREE_PRETTY",
    "include_ids": "AXTREE_INCLUDE_IDS",
}


@dataclass
class TreeConfig:
    """
    Tunables for flattening and encoding.
    """

    max_elements: int = 300
    """Ceiling on emitted elements before flattening fails"""

    include_zero_size: bool = False
    """Emit elements whose width and height are both zero"""

    pretty: bool = False
    """Indent JSON output and sort keys"""

    include_ids: bool = False
    """Emit stable ids in lightweight JSON"""


def _coerce_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in ("true", "yes", "1", "on"):
        return True
    if text in ("false", "no", "0", "off"):
        return False
    raise ValueError(f"Invalid boolean for '{key}': {value!r}")


def _coerce_int(key: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"Invalid integer for '{key}': {value!r}")
    try:
        number = int(str(value).strip())
    except ValueError as e:
        raise ValueError(f"Invalid integer for '{key}': {value!r}") from e
    if number <= 0:
        raise ValueError(f"'{key}' must be positive, got {number}")
    return number


def _apply(config: TreeConfig, values: Dict[str, Any]) -> None:
    known = {f.name for f in fields(TreeConfig)}
    for key, value in values.items():
        if key not in known:
            raise ValueError(f"Unknown configuration key '{key}'")
        if key == "max_elements":
            setattr(config, key, _coerce_int(key, value))
        else:
            setattr(config, key, _coerce_bool(key, value))


def _read_yaml(path: Path) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Configuration file {path} must contain a mapping")
    return data


def load_config(config_path: Optional[Union[str, Path]] = None) -> TreeConfig:
    """
    Build a TreeConfig from defaults, YAML and the environment.

    Args:
        config_path: Explicit YAML file; must exist when given

    Returns:
        Resolved configuration

    Raises:
        ValueError: If a key or value is invalid
        FileNotFoundError: If an explicit config file does not exist
    """
    load_dotenv()
    config = TreeConfig()

    path: Optional[Path] = None
    if config_path is not None:
        path = Path(config_path)
    elif os.getenv("AXTREE_CONFIG"):
        path = Path(os.environ["AXTREE_CONFIG"])
    elif DEFAULT_CONFIG_FILE.exists():
        path = DEFAULT_CONFIG_FILE

    if path is not None:
        _apply(config, _read_yaml(path))

    env_values = {}
    for key, variable in ENV_VARIABLES.items():
        value = os.getenv(variable)
        if value is not None and value.strip():
            env_values[key] = value
    _apply(config, env_values)

    return config


_default_config: Optional[TreeConfig] = None


def get_tree_config() -> TreeConfig:
    """
    Get the process-wide configuration, loading it on first use.
    """
    global _default_config
    if _default_config is None:
        _default_config = load_config()
    return _default_config
