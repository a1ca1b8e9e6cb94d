"""
State Snapshot
==============

Immutable views of the game state, delivered to observers after every frame
and packed into fixed-size numpy arrays for Gymnasium observations.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Tuple
import numpy as np

from fruit_catcher.catcher_core.game_state import FallingItem, GameState
from fruit_catcher.catcher_core.item_catalog import ItemCatalog, Lane


@dataclass(frozen=True)
class ItemView:
    """Read-only copy of a FallingItem for hosts."""
    id: int
    kind: str
    lane: Lane
    position: float
    symbol: str
    score_value: int

    @classmethod
    def from_item(cls, item: FallingItem) -> "ItemView":
        return cls(
            id=item.id,
            kind=item.kind.name,
            lane=item.lane,
            position=item.position,
            symbol=item.kind.symbol,
            score_value=item.kind.score
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "kind": self.kind,
            "lane": self.lane.value,
            "position": self.position,
            "symbol": self.symbol,
            "scoreValue": self.score_value,
        }


@dataclass(frozen=True)
class GameSnapshot:
    """
    Complete game state at the end of a frame.

    Item order matches the engine's active collection (spawn order).
    """
    score: int
    level: int
    lives: int
    items: Tuple[ItemView, ...]
    player_lane: Lane
    multiplier: int
    multiplier_remaining: int

    # Extra state for tools and agents
    frame: int = 0
    active: bool = False
    missed_count: int = 0
    spawn_interval: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Host-facing dict using the notification key names."""
        return {
            "score": self.score,
            "level": self.level,
            "lives": self.lives,
            "items": [item.to_dict() for item in self.items],
            "playerLane": self.player_lane.value,
            "multiplier": self.multiplier,
            "multiplierRemaining": self.multiplier_remaining,
        }

    def to_obs_dict(self, max_items: int, catalog: ItemCatalog) -> Dict[str, np.ndarray]:
        """
        Convert to Gymnasium observation dictionary.

        Item arrays are padded to ``max_items``. Past that limit the oldest
        items are kept and the rest are left out of the observation.
        """
        item_kind = np.full(max_items, -1, dtype=np.int16)
        item_lane = np.full(max_items, -1, dtype=np.int8)
        item_position = np.zeros(max_items, dtype=np.float32)
        item_mask = np.zeros(max_items, dtype=bool)

        for i, item in enumerate(self.items[:max_items]):
            kind = catalog.get_by_name(item.kind)
            item_kind[i] = catalog.index_of(kind) if kind is not None else -1
            item_lane[i] = item.lane.index
            item_position[i] = item.position
            item_mask[i] = True

        return {
            "player_lane": np.array(self.player_lane.index, dtype=np.int32),
            "score": np.array(self.score, dtype=np.int64),
            "level": np.array(self.level, dtype=np.int32),
            "lives": np.array(self.lives, dtype=np.int32),
            "multiplier": np.array(self.multiplier, dtype=np.int32),
            "multiplier_remaining": np.array(self.multiplier_remaining, dtype=np.int32),
            "missed_count": np.array(self.missed_count, dtype=np.int32),
            "items_count": np.array(min(len(self.items), max_items), dtype=np.int32),
            "item_kind": item_kind,
            "item_lane": item_lane,
            "item_position": item_position,
            "item_mask": item_mask,
        }


class SnapshotBuilder:
    """Builds snapshots from the live GameState."""

    def build(self, state: GameState) -> GameSnapshot:
        """Copy the current state into a frozen snapshot."""
        return GameSnapshot(
            score=state.score,
            level=state.level,
            lives=state.lives,
            items=tuple(ItemView.from_item(item) for item in state.items),
            player_lane=state.player_lane,
            multiplier=state.multiplier,
            multiplier_remaining=state.multiplier_remaining,
            frame=state.frame,
            active=state.is_active,
            missed_count=state.missed_count,
            spawn_interval=state.spawn_interval
        )
