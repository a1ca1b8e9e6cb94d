"""
Item Catalog
============

Typed access to lanes and the falling item kinds loaded from config.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

from fruit_catcher.catcher_core.config_loader import (
    GameConfig,
    ItemConfig,
    get_config
)


class Lane(Enum):
    """One of the three horizontal slots shared by the player and items."""
    LEFT = "LEFT"
    CENTER = "CENTER"
    RIGHT = "RIGHT"

    @property
    def index(self) -> int:
        return _LANE_ORDER.index(self)

    @classmethod
    def from_index(cls, index: int) -> "Lane":
        return _LANE_ORDER[index]

    @classmethod
    def parse(cls, value: Union["Lane", str, None]) -> Optional["Lane"]:
        """
        Interpret an external lane value.

        Accepts Lane members and their names. Anything else returns None so
        callers can drop it without raising.
        """
        if isinstance(value, Lane):
            return value
        if isinstance(value, str):
            try:
                return cls[value]
            except KeyError:
                return None
        return None


_LANE_ORDER: Tuple[Lane, ...] = (Lane.LEFT, Lane.CENTER, Lane.RIGHT)


class ItemEffect(Enum):
    """What catching an item does."""
    SCORE = "score"            # Fruit: adds score
    HEAL = "heal"              # Restores one life
    MULTIPLIER = "multiplier"  # Starts the timed score multiplier
    DAMAGE = "damage"          # Costs lives


@dataclass(frozen=True)
class ItemKind:
    """
    Runtime representation of an item kind.

    Wraps ItemConfig with its effect resolved to an ItemEffect.
    """
    config: ItemConfig

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def symbol(self) -> str:
        return self.config.symbol

    @property
    def score(self) -> int:
        return self.config.score

    @property
    def weight(self) -> float:
        return self.config.weight

    @property
    def effect(self) -> ItemEffect:
        return ItemEffect(self.config.effect)

    @property
    def is_fruit(self) -> bool:
        """True for scoring fruit; only fruit count as misses."""
        return self.effect is ItemEffect.SCORE

    def __repr__(self) -> str:
        return f"ItemKind({self.name})"


class ItemCatalog:
    """
    Ordered collection of item kinds.

    Order is significant: weighted sampling accumulates weights in this order.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize catalog from game config.

        Args:
            config: GameConfig instance. If None, loads from default location.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._kinds: Tuple[ItemKind, ...] = tuple(
            ItemKind(item_config) for item_config in config.items
        )

    def __len__(self) -> int:
        return len(self._kinds)

    def __getitem__(self, index: int) -> ItemKind:
        """Get item kind by catalog index."""
        if 0 <= index < len(self._kinds):
            return self._kinds[index]
        raise IndexError(f"Item index {index} out of range [0, {len(self._kinds)})")

    def __iter__(self):
        return iter(self._kinds)

    @property
    def fruits(self) -> Tuple[ItemKind, ...]:
        """Kinds that score when caught."""
        return tuple(kind for kind in self._kinds if kind.is_fruit)

    @property
    def weights(self) -> Tuple[float, ...]:
        return tuple(kind.weight for kind in self._kinds)

    def index_of(self, kind: ItemKind) -> int:
        return self._kinds.index(kind)

    def get_by_name(self, name: str) -> Optional[ItemKind]:
        """Get item kind by name (case-insensitive)."""
        name_upper = name.upper()
        for kind in self._kinds:
            if kind.name == name_upper:
                return kind
        return None


# Module-level singleton
_cached_catalog: Optional[ItemCatalog] = None


def get_catalog(config: Optional[GameConfig] = None) -> ItemCatalog:
    """
    Get the item catalog singleton.

    Args:
        config: Optional config to use. If None, uses cached or default config.

    Returns:
        ItemCatalog instance.
    """
    global _cached_catalog
    if _cached_catalog is None or config is not None:
        _cached_catalog = ItemCatalog(config)
    return _cached_catalog
