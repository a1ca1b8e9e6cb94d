"""
Game State
==========

The engine's mutable state, owned by a single CoreGame instance.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import List

from fruit_catcher.catcher_core.config_loader import GameConfig
from fruit_catcher.catcher_core.item_catalog import ItemKind, Lane


class GamePhase(Enum):
    """Lifecycle phase. GAME_OVER is transient: teardown moves it to INACTIVE."""
    INACTIVE = "inactive"
    ACTIVE = "active"
    GAME_OVER = "game_over"


@dataclass
class FallingItem:
    """A single item on the field."""
    id: int
    kind: ItemKind
    lane: Lane
    position: float  # 0 = spawn, off_screen_position = gone

    def __repr__(self) -> str:
        return f"FallingItem(#{self.id} {self.kind.name} {self.lane.name} @ {self.position:.1f})"


@dataclass
class GameState:
    """Complete simulation state for one game."""
    score: int
    level: int
    lives: int
    player_lane: Lane
    spawn_interval: int
    phase: GamePhase = GamePhase.INACTIVE
    items: List[FallingItem] = field(default_factory=list)
    missed_count: int = 0
    multiplier: int = 1
    multiplier_remaining: int = 0
    spawn_timer: int = 0
    frame: int = 0

    # Per-kind tallies (kind name -> count) for reporting
    caught: Counter = field(default_factory=Counter)
    dropped: Counter = field(default_factory=Counter)
    lives_lost: int = 0

    @classmethod
    def fresh(cls, config: GameConfig, player_lane: Lane = Lane.CENTER) -> "GameState":
        """Initial values for a new game (still INACTIVE until started)."""
        return cls(
            score=0,
            level=config.level.start,
            lives=config.lives.start,
            player_lane=player_lane,
            spawn_interval=config.spawn.initial_interval
        )

    @property
    def is_active(self) -> bool:
        return self.phase is GamePhase.ACTIVE
