"""Tests for configuration loading."""

import pytest

from tradejournal.config import (
    DEFAULT_CONFIG,
    create_template_config,
    get_config_path,
    get_db_path,
    load_config,
)
from tradejournal.errors import ConfigError


@pytest.fixture
def config_home(tmp_path, monkeypatch):
    monkeypatch.setenv("TRADEJOURNAL_HOME", str(tmp_path))
    return tmp_path


def test_paths_follow_home(config_home):
    assert get_config_path() == config_home / "config.toml"
    assert get_db_path() == config_home / "tradejournal.db"


def test_defaults_without_file(config_home):
    config = load_config()

    assert config == DEFAULT_CONFIG
    config["risk"]["daily_loss_limit"] = 0
    assert DEFAULT_CONFIG["risk"]["daily_loss_limit"] == -300.0


def test_template_round_trip(config_home):
    path = create_template_config()

    assert path.exists()
    assert load_config() == DEFAULT_CONFIG


def test_template_keeps_existing_file(config_home):
    path = get_config_path()
    path.write_text('[journal]\nowner_id = "alice"\n')

    create_template_config()

    assert load_config()["journal"]["owner_id"] == "alice"


def test_partial_file_merges_over_defaults(config_home):
    get_config_path().write_text("[risk]\ndaily_loss_limit = -150.0\n")

    config = load_config()

    assert config["risk"]["daily_loss_limit"] == -150.0
    assert config["risk"]["account_drawdown_limit"] == -500.0
    assert config["targets"] == DEFAULT_CONFIG["targets"]


def test_invalid_toml(config_home):
    get_config_path().write_text("[risk\ndaily_loss_limit = ")

    with pytest.raises(ConfigError):
        load_config()
