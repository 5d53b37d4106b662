"""Configuration for propdash.

Settings live in ``~/.config/propdash/config.toml`` and are merged over
the defaults below. A missing or unreadable file yields the defaults.
"""

import copy
import logging
from pathlib import Path
from typing import Optional

import toml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: dict = {
    "storage": {
        "db_path": "~/.config/propdash/propdash.db",
        "journal_key": "journal_trades_v1",
        "events_key": "prop_events_v1",
    },
    "journal": {
        "instruments": ["XAUUSD", "EURUSD"],
        "sessions": ["Asia", "London", "NY", "London/NY overlap"],
        "default_risk_percent": 0.5,
        "default_planned_rr": 2.0,
    },
    "display": {
        "currency": "USD",
    },
}


def get_config_dir() -> Path:
    """Get the propdash config directory."""
    return Path.home() / ".config" / "propdash"


def get_config_path() -> Path:
    return get_config_dir() / "config.toml"


def _merge(base: dict, override: dict) -> dict:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(path: Optional[Path] = None) -> dict:
    """Load configuration merged over the defaults.

    Args:
        path: Config file path. Defaults to ~/.config/propdash/config.toml.

    Returns:
        Configuration dictionary.
    """
    config_path = Path(path) if path else get_config_path()

    if not config_path.exists():
        return copy.deepcopy(DEFAULT_CONFIG)

    try:
        return _merge(DEFAULT_CONFIG, toml.load(config_path))
    except (toml.TomlDecodeError, OSError) as e:
        logger.warning("Ignoring unreadable config %s: %s", config_path, e)
        return copy.deepcopy(DEFAULT_CONFIG)


def write_template_config(path: Optional[Path] = None) -> Path:
    """Write the default configuration as a template file.

    Returns:
        Path of the written file.
    """
    config_path = Path(path) if path else get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w") as f:
        toml.dump(DEFAULT_CONFIG, f)

    return config_path


def get_db_path(config: dict) -> Path:
    """Resolve the storage database path from the config."""
    return Path(config["storage"]["db_path"]).expanduser()
