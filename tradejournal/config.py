"""Configuration loading for TradeJournal.

Settings live in ~/.config/tradejournal/config.toml (or under the
directory named by TRADEJOURNAL_HOME). Missing keys fall back to
DEFAULT_CONFIG.
"""

import copy
import os
from pathlib import Path

import toml

from tradejournal.errors import ConfigError

DEFAULT_CONFIG = {
    "journal": {
        "owner_id": "default",
        "currency": "$",
    },
    "risk": {
        "daily_loss_limit": -300.0,
        "account_drawdown_limit": -500.0,
    },
    "targets": {
        "pnl_target": 1000.0,
        "trades_target": 20,
        "win_rate_target": 60.0,
    },
    "calculator": {
        "account_balance": 10000.0,
        "risk_percent": 1.0,
        "reward_ratio": 2.0,
        "trades_per_day": 3,
    },
    "logging": {
        "level": "WARNING",
    },
}


def get_config_dir() -> Path:
    """Get the configuration directory."""
    home = os.environ.get("TRADEJOURNAL_HOME")
    if home:
        return Path(home)
    return Path.home() / ".config" / "tradejournal"


def get_config_path() -> Path:
    return get_config_dir() / "config.toml"


def get_db_path() -> Path:
    return get_config_dir() / "tradejournal.db"


def _merge(base: dict, overrides: dict) -> dict:
    merged = copy.deepcopy(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config() -> dict:
    """Load configuration merged over the defaults.

    Returns:
        Config dict. Defaults only if no config file exists.

    Raises:
        ConfigError: If the config file is not valid TOML.
    """
    config_path = get_config_path()

    if not config_path.exists():
        return copy.deepcopy(DEFAULT_CONFIG)

    try:
        user_config = toml.load(config_path)
    except toml.TomlDecodeError as e:
        raise ConfigError(f"Invalid config file {config_path}: {e}") from e

    return _merge(DEFAULT_CONFIG, user_config)


def create_template_config() -> Path:
    """Write the default configuration file if none exists.

    Returns:
        Path of the config file.
    """
    config_path = get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    if not config_path.exists():
        with open(config_path, "w") as f:
            toml.dump(DEFAULT_CONFIG, f)

    return config_path
