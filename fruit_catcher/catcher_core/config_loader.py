"""
Configuration Loader
====================

Loads and validates game_config.yaml, providing typed access to all parameters.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple, Optional

import yaml


LANE_NAMES: Tuple[str, ...] = ("LEFT", "CENTER", "RIGHT")
EFFECT_NAMES: Tuple[str, ...] = ("score", "heal", "multiplier", "damage")

# Tolerance when checking that spawn weights sum to 1.0
WEIGHT_SUM_TOLERANCE = 1e-6


@dataclass(frozen=True)
class FieldConfig:
    """Vertical layout of the playing field, in percent of travel."""
    spawn_position: float
    catch_window_min: float      # Exclusive lower bound of the catch band
    catch_window_max: float      # Exclusive upper bound of the catch band
    off_screen_position: float   # Items strictly beyond this are removed


@dataclass(frozen=True)
class SpeedConfig:
    """Per-frame fall speed parameters."""
    base: float
    per_level: float

    def speed_for_level(self, level: int) -> float:
        return self.base + level * self.per_level


@dataclass(frozen=True)
class SpawnConfig:
    """Spawn interval schedule (frames between spawns)."""
    initial_interval: int
    min_interval: int
    interval_step: int

    def interval_for_level(self, level: int) -> int:
        """Spawn interval after reaching ``level``, floored at min_interval."""
        return max(self.min_interval, self.initial_interval - level * self.interval_step)


@dataclass(frozen=True)
class LevelConfig:
    """Level progression."""
    start: int
    score_per_level: int


@dataclass(frozen=True)
class LivesConfig:
    """Starting lives and life penalties."""
    start: int
    misses_per_life: int
    bomb_damage: int


@dataclass(frozen=True)
class MultiplierConfig:
    """Timed score multiplier granted by a multiplier pickup."""
    factor: int
    duration: int  # Frames


@dataclass(frozen=True)
class ItemConfig:
    """Configuration for a single item kind."""
    name: str
    symbol: str
    score: int
    weight: float
    effect: str


@dataclass(frozen=True)
class CapsConfig:
    """Episode limits (used by the Gymnasium wrapper, not the engine)."""
    max_frames: int


@dataclass(frozen=True)
class EnvConfig:
    """Gymnasium wrapper parameters."""
    frames_per_step: int
    max_items: int


@dataclass(frozen=True)
class GameConfig:
    """
    Complete game configuration loaded from YAML.

    All values are immutable so a running engine can never alter its own rules.
    """
    lanes: Tuple[str, ...]
    field: FieldConfig
    speed: SpeedConfig
    spawn: SpawnConfig
    level: LevelConfig
    lives: LivesConfig
    multiplier: MultiplierConfig
    items: Tuple[ItemConfig, ...]
    caps: CapsConfig
    env: EnvConfig

    @property
    def num_item_kinds(self) -> int:
        """Number of item kinds in the catalog."""
        return len(self.items)


def _parse_item(item_data: dict) -> ItemConfig:
    """Parse a single catalog entry from YAML."""
    return ItemConfig(
        name=str(item_data["name"]).upper(),
        symbol=str(item_data.get("symbol", "")),
        score=int(item_data.get("score", 0)),
        weight=float(item_data["weight"]),
        effect=str(item_data.get("effect", "score")).lower()
    )


def _validate_config(config: GameConfig) -> None:
    """Validate configuration consistency."""
    if tuple(config.lanes) != LANE_NAMES:
        raise ValueError(f"lanes must be exactly {list(LANE_NAMES)}, got {list(config.lanes)}")

    if not config.items:
        raise ValueError("Item catalog must not be empty")

    names = [item.name for item in config.items]
    if len(set(names)) != len(names):
        raise ValueError(f"Item names must be unique, got {names}")

    for item in config.items:
        if item.effect not in EFFECT_NAMES:
            raise ValueError(
                f"Item {item.name} has unknown effect '{item.effect}', "
                f"expected one of {list(EFFECT_NAMES)}"
            )
        if item.weight < 0:
            raise ValueError(f"Item {item.name} has negative weight {item.weight}")
        if item.score < 0:
            raise ValueError(f"Item {item.name} has negative score {item.score}")

    total_weight = sum(item.weight for item in config.items)
    if abs(total_weight - 1.0) > WEIGHT_SUM_TOLERANCE:
        raise ValueError(f"Item weights must sum to 1.0, got {total_weight}")

    field = config.field
    if not (field.spawn_position < field.catch_window_min
            < field.catch_window_max <= field.off_screen_position):
        raise ValueError(
            "Field positions must satisfy spawn < catch_window_min < "
            f"catch_window_max <= off_screen_position, got {field}"
        )

    if config.speed.base <= 0 or config.speed.per_level < 0:
        raise ValueError("Fall speed must be positive and non-decreasing with level")

    if config.spawn.min_interval <= 0 or config.spawn.initial_interval < config.spawn.min_interval:
        raise ValueError(
            f"Spawn interval must satisfy 0 < min_interval <= initial_interval, got {config.spawn}"
        )

    if config.lives.start <= 0 or config.lives.misses_per_life <= 0:
        raise ValueError("lives.start and lives.misses_per_life must be positive")

    if config.multiplier.duration <= 0 or config.multiplier.factor < 1:
        raise ValueError("multiplier.duration must be positive and factor at least 1")

    if config.env.frames_per_step <= 0 or config.env.max_items <= 0:
        raise ValueError("env.frames_per_step and env.max_items must be positive")


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """
    Load and validate game configuration from YAML.

    Args:
        config_path: Path to game_config.yaml. If None, uses default location.

    Returns:
        Validated GameConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config validation fails.
    """
    if config_path is None:
        config_path = os.path.join(
            os.path.dirname(os.path.dirname(__file__)),
            "game_config.yaml"
        )

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)

    field_data = raw["field"]
    field = FieldConfig(
        spawn_position=float(field_data.get("spawn_position", 0.0)),
        catch_window_min=float(field_data["catch_window_min"]),
        catch_window_max=float(field_data["catch_window_max"]),
        off_screen_position=float(field_data["off_screen_position"])
    )

    speed_data = raw["speed"]
    speed = SpeedConfig(
        base=float(speed_data["base"]),
        per_level=float(speed_data["per_level"])
    )

    spawn_data = raw["spawn"]
    spawn = SpawnConfig(
        initial_interval=int(spawn_data["initial_interval"]),
        min_interval=int(spawn_data["min_interval"]),
        interval_step=int(spawn_data["interval_step"])
    )

    level_data = raw["level"]
    level = LevelConfig(
        start=int(level_data.get("start", 1)),
        score_per_level=int(level_data["score_per_level"])
    )

    lives_data = raw["lives"]
    lives = LivesConfig(
        start=int(lives_data["start"]),
        misses_per_life=int(lives_data["misses_per_life"]),
        bomb_damage=int(lives_data["bomb_damage"])
    )

    multiplier_data = raw["multiplier"]
    multiplier = MultiplierConfig(
        factor=int(multiplier_data["factor"]),
        duration=int(multiplier_data["duration"])
    )

    items = tuple(_parse_item(item) for item in raw["items"])

    caps_data = raw.get("caps", {})
    caps = CapsConfig(
        max_frames=int(caps_data.get("max_frames", 20000))
    )

    env_data = raw.get("env", {})
    env = EnvConfig(
        frames_per_step=int(env_data.get("frames_per_step", 4)),
        max_items=int(env_data.get("max_items", 32))
    )

    config = GameConfig(
        lanes=tuple(str(lane).upper() for lane in raw.get("lanes", LANE_NAMES)),
        field=field,
        speed=speed,
        spawn=spawn,
        level=level,
        lives=lives,
        multiplier=multiplier,
        items=items,
        caps=caps,
        env=env
    )

    _validate_config(config)
    return config


# Module-level singleton for convenience
_cached_config: Optional[GameConfig] = None


def get_config() -> GameConfig:
    """Get the cached game configuration, loading if necessary."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config(config_path: Optional[str] = None) -> GameConfig:
    """Reload the configuration (useful for testing)."""
    global _cached_config
    _cached_config = load_config(config_path)
    return _cached_config
