"""
Configuration loading.

Settings live in a YAML file (config/settings.yaml by default). Keys that
the file leaves out fall back to DEFAULT_CONFIG.
"""

from __future__ import annotations

import pathlib
from typing import Any

import yaml

DEFAULT_CONFIG_PATH = pathlib.Path("config/settings.yaml")

DEFAULT_CONFIG: dict[str, Any] = {
    "seed": None,
    "cell_size": 30,
    "fps": 60,
    "show_ghost": True,
    "log_level": "INFO",
    "simulate_steps": 5000,
    "simulate_frame_ms": 16,
}


def load_config(config_path: str | pathlib.Path = DEFAULT_CONFIG_PATH) -> dict[str, Any]:
    """Load configuration from a YAML file.

    Args:
        config_path: Path to the YAML config file.

    Returns:
        Dict of configuration key-value pairs, defaults filled in.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ValueError: If the file does not contain a mapping.
    """
    config_path = pathlib.Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    with open(config_path, "r") as f:
        loaded = yaml.safe_load(f)

    # An empty file loads as None
    if loaded is None:
        loaded = {}
    if not isinstance(loaded, dict):
        raise ValueError(f"Config file must contain a mapping: {config_path}")

    config = dict(DEFAULT_CONFIG)
    config.update(loaded)
    return config
