"""
Scoring System
==============

Fruit scoring, the timed multiplier, and level progression.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from fruit_catcher.catcher_core.config_loader import GameConfig
from fruit_catcher.catcher_core.game_state import GameState
from fruit_catcher.catcher_core.item_catalog import ItemKind

logger = logging.getLogger(__name__)


@dataclass
class ScoreEvent:
    """Record of a scoring event."""
    points: int
    kind_name: str
    multiplier: int
    level_up: bool = False

    def __repr__(self) -> str:
        if self.level_up:
            return f"ScoreEvent({self.kind_name}={self.points}, x{self.multiplier}, level_up)"
        return f"ScoreEvent({self.kind_name}={self.points}, x{self.multiplier})"


def tick_multiplier(state: GameState) -> None:
    """Count the multiplier down one frame, dropping back to 1 when it runs out."""
    if state.multiplier_remaining > 0:
        state.multiplier_remaining -= 1
        if state.multiplier_remaining <= 0:
            state.multiplier = 1


def activate_multiplier(state: GameState, config: GameConfig) -> None:
    """Start the multiplier at full duration. Does not stack with a running one."""
    state.multiplier = config.multiplier.factor
    state.multiplier_remaining = config.multiplier.duration


def level_threshold(level: int, config: GameConfig) -> int:
    """Score needed to leave ``level``."""
    return level * config.level.score_per_level


def apply_fruit(state: GameState, kind: ItemKind, config: GameConfig) -> ScoreEvent:
    """
    Score a caught fruit and check for a level up.

    The threshold is checked once per catch, so a single catch never gains
    more than one level.
    """
    points = kind.score * state.multiplier
    state.score += points

    event = ScoreEvent(points=points, kind_name=kind.name, multiplier=state.multiplier)

    if state.score >= level_threshold(state.level, config):
        state.level += 1
        state.spawn_interval = config.spawn.interval_for_level(state.level)
        event.level_up = True
        logger.info(
            "Level up: level=%d score=%d spawn_interval=%d",
            state.level, state.score, state.spawn_interval
        )

    return event
