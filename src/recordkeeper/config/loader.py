from copy import deepcopy
from pathlib import Path
from typing import Any, Dict

import yaml

DEFAULT_CONFIG_PATH = Path("recordkeeper.config.yaml")

DEFAULT_CONFIG: Dict[str, Any] = {
    "storage": {
        "sqlite_path": "recordkeeper.db",
    },
    "table": {
        "page_size": 10,
        "page_size_options": [5, 10, 20, 50],
    },
    "export": {
        "out_dir": "exports",
    },
    "report": {
        "title": "Records Management Report",
        "subtitle": "Records Management System",
        "footer": "This document was generated automatically by the records management system.",
    },
    "seed": {
        "fixture_json": "tests/fixtures/people.json",
    },
}


def _merge_defaults(config: Dict[str, Any]) -> Dict[str, Any]:
    """Overlay user sections onto the built-in defaults, one level deep."""
    merged = deepcopy(DEFAULT_CONFIG)
    for section, values in config.items():
        if isinstance(values, dict) and isinstance(merged.get(section), dict):
            merged[section].update(values)
        else:
            merged[section] = values
    return merged


def validate_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Validate a merged config dictionary.
    
    Raises:
        ValueError: If a section has the wrong type or the page size settings
            are inconsistent
    """
    for section in DEFAULT_CONFIG:
        if not isinstance(config.get(section), dict):
            raise ValueError(f"Config '{section}' must be a dictionary")

    table = config["table"]
    options = table.get("page_size_options")
    if not isinstance(options, list) or not options:
        raise ValueError("Config 'table.page_size_options' must be a non-empty list")
    for option in options:
        if not isinstance(option, int) or option < 1:
            raise ValueError(f"Page size options must be positive integers, got {option!r}")
    if table.get("page_size") not in options:
        raise ValueError(
            f"Config 'table.page_size' ({table.get('page_size')!r}) must be one of {options}"
        )

    if not config["storage"].get("sqlite_path"):
        raise ValueError("Config 'storage.sqlite_path' is required")
    return config


def load_config(path: Path | None = None) -> Dict[str, Any]:
    """
    Load configuration from YAML, merged over the defaults.
    
    Args:
        path: Optional config path. Defaults to recordkeeper.config.yaml
        
    Returns:
        Validated configuration dictionary
        
    Raises:
        FileNotFoundError: If the config file doesn't exist
        ValueError: If the config structure is invalid
    """
    cfg_path = path or DEFAULT_CONFIG_PATH
    if not cfg_path.exists():
        raise FileNotFoundError(f"Config file not found: {cfg_path}")
    with cfg_path.open("r", encoding="utf-8") as f:
        config = yaml.safe_load(f) or {}

    if not isinstance(config, dict):
        raise ValueError("Config must be a dictionary")
    return validate_config(_merge_defaults(config))


def load_config_or_defaults(path: Path | None = None) -> Dict[str, Any]:
    """Like load_config, but fall back to the built-in defaults when the file is missing."""
    cfg_path = path or DEFAULT_CONFIG_PATH
    if not cfg_path.exists():
        return deepcopy(DEFAULT_CONFIG)
    return load_config(cfg_path)


def dump_default_config() -> str:
    """Default configuration as YAML text, used by `recordkeeper init`."""
    return yaml.safe_dump(DEFAULT_CONFIG, sort_keys=False)
