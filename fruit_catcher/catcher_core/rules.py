"""
Game Rules
==========

Catch-window geometry, collision effects, and the lives rules.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from fruit_catcher.catcher_core.config_loader import FieldConfig, GameConfig
from fruit_catcher.catcher_core.game_state import FallingItem, GameState
from fruit_catcher.catcher_core.item_catalog import ItemEffect
from fruit_catcher.catcher_core.scoring import ScoreEvent, activate_multiplier, apply_fruit


@dataclass
class CollisionOutcome:
    """Result of catching one item."""
    effect: ItemEffect
    game_over: bool = False
    score_event: Optional[ScoreEvent] = None
    lives_delta: int = 0


def in_catch_window(position: float, field: FieldConfig) -> bool:
    """True if an item at ``position`` is level with the basket (bounds exclusive)."""
    return field.catch_window_min < position < field.catch_window_max


def is_off_screen(position: float, field: FieldConfig) -> bool:
    return position > field.off_screen_position


def resolve_collision(
    state: GameState,
    item: FallingItem,
    config: GameConfig
) -> CollisionOutcome:
    """
    Apply the effect of catching ``item``.

    Lives never go below zero; a bomb that empties them requests game over.
    """
    effect = item.kind.effect

    if effect is ItemEffect.DAMAGE:
        lives_before = state.lives
        state.lives -= config.lives.bomb_damage
        game_over = state.lives <= 0
        if game_over:
            state.lives = 0
        return CollisionOutcome(
            effect=effect,
            game_over=game_over,
            lives_delta=state.lives - lives_before
        )

    if effect is ItemEffect.HEAL:
        state.lives += 1
        return CollisionOutcome(effect=effect, lives_delta=1)

    if effect is ItemEffect.MULTIPLIER:
        activate_multiplier(state, config)
        return CollisionOutcome(effect=effect)

    return CollisionOutcome(effect=effect, score_event=apply_fruit(state, item.kind, config))


def register_miss(state: GameState, item: FallingItem, config: GameConfig) -> bool:
    """
    Account for an item that left the field uncaught.

    Only fruit count as misses. Every ``misses_per_life`` misses cost one life
    and reset the counter.

    Returns:
        True if this miss took the last life.
    """
    if not item.kind.is_fruit:
        return False

    state.missed_count += 1
    if state.missed_count >= config.lives.misses_per_life:
        state.missed_count = 0
        state.lives -= 1
        if state.lives <= 0:
            state.lives = 0
            return True
    return False
