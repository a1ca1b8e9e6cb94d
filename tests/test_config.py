"""
Tests for configuration loading and validation.
"""

import os

import pytest
import yaml

from fruit_catcher.catcher_core.config_loader import load_config
from fruit_catcher.catcher_core.item_catalog import ItemCatalog, ItemEffect


DEFAULT_CONFIG_PATH = os.path.join(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__))),
    "fruit_catcher",
    "game_config.yaml"
)


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def raw_config():
    with open(DEFAULT_CONFIG_PATH, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def write_config(tmp_path, raw):
    path = tmp_path / "game_config.yaml"
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(raw, f, allow_unicode=True)
    return str(path)


class TestDefaultConfig:
    """Test the shipped configuration."""

    def test_initial_values(self, config):
        assert config.lives.start == 3
        assert config.level.start == 1
        assert config.spawn.initial_interval == 60
        assert config.multiplier.factor == 2
        assert config.multiplier.duration == 600
        assert config.field.catch_window_min == 85
        assert config.field.catch_window_max == 95
        assert config.field.off_screen_position == 100

    def test_catalog_order_and_values(self, config):
        catalog = ItemCatalog(config)

        assert [k.name for k in catalog] == [
            "APPLE", "BANANA", "PINEAPPLE", "HEART", "MONEY", "BOMB"
        ]
        assert [k.score for k in catalog] == [100, 200, 300, 0, 0, 0]
        assert catalog.get_by_name("heart").effect is ItemEffect.HEAL
        assert catalog.get_by_name("MONEY").effect is ItemEffect.MULTIPLIER
        assert catalog.get_by_name("BOMB").effect is ItemEffect.DAMAGE
        assert [k.name for k in catalog.fruits] == ["APPLE", "BANANA", "PINEAPPLE"]

    def test_weights_sum_to_one(self, config):
        assert sum(item.weight for item in config.items) == pytest.approx(1.0)

    def test_spawn_interval_schedule(self, config):
        """interval = max(20, 60 - level * 5)."""
        assert config.spawn.interval_for_level(2) == 50
        assert config.spawn.interval_for_level(5) == 35
        assert config.spawn.interval_for_level(8) == 20
        assert config.spawn.interval_for_level(30) == 20

    def test_speed_increases_with_level(self, config):
        assert config.speed.speed_for_level(1) == pytest.approx(1.2)
        assert config.speed.speed_for_level(5) == pytest.approx(2.0)
        assert config.speed.speed_for_level(6) > config.speed.speed_for_level(5)


class TestValidation:
    """Test that broken configs are rejected at load time."""

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "nope.yaml"))

    def test_custom_path_loads(self, tmp_path, raw_config):
        raw_config["lives"]["start"] = 5
        config = load_config(write_config(tmp_path, raw_config))
        assert config.lives.start == 5

    def test_weights_must_sum_to_one(self, tmp_path, raw_config):
        raw_config["items"][0]["weight"] = 0.9
        with pytest.raises(ValueError, match="sum to 1.0"):
            load_config(write_config(tmp_path, raw_config))

    def test_unknown_effect(self, tmp_path, raw_config):
        raw_config["items"][3]["effect"] = "teleport"
        with pytest.raises(ValueError, match="unknown effect"):
            load_config(write_config(tmp_path, raw_config))

    def test_duplicate_names(self, tmp_path, raw_config):
        raw_config["items"][1]["name"] = "APPLE"
        with pytest.raises(ValueError, match="unique"):
            load_config(write_config(tmp_path, raw_config))

    def test_lanes_are_fixed(self, tmp_path, raw_config):
        raw_config["lanes"] = ["LEFT", "RIGHT"]
        with pytest.raises(ValueError, match="lanes"):
            load_config(write_config(tmp_path, raw_config))

    def test_catch_window_inside_field(self, tmp_path, raw_config):
        raw_config["field"]["catch_window_max"] = 120
        with pytest.raises(ValueError, match="Field positions"):
            load_config(write_config(tmp_path, raw_config))
