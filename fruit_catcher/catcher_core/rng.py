"""
RNG - Item Spawner
==================

Chooses the lane and kind of each new falling item.

Lanes are uniform; kinds are drawn by cumulative weight in catalog order.
Seeding makes a whole game reproducible.
"""

from __future__ import annotations

import itertools
import logging
import random
from typing import Optional

from fruit_catcher.catcher_core.config_loader import GameConfig, get_config
from fruit_catcher.catcher_core.game_state import FallingItem
from fruit_catcher.catcher_core.item_catalog import ItemCatalog, ItemKind, Lane, get_catalog

logger = logging.getLogger(__name__)


class ItemSpawner:
    """
    Produces new FallingItems with unique, monotonically increasing ids.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        catalog: Optional[ItemCatalog] = None
    ):
        """
        Initialize spawner.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for reproducibility. Random if None.
            catalog: Item catalog. Built from config if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._catalog = catalog if catalog is not None else get_catalog(config)
        self._rng = random.Random(seed)
        self._ids = itertools.count(1)
        self._spawn_position = config.field.spawn_position

    @property
    def catalog(self) -> ItemCatalog:
        return self._catalog

    def choose_lane(self) -> Lane:
        """Pick a lane uniformly at random."""
        return Lane.from_index(self._rng.randrange(3))

    def choose_kind(self, draw: Optional[float] = None) -> ItemKind:
        """
        Pick an item kind by weighted sampling.

        Args:
            draw: Uniform value in [0, 1). Drawn from the RNG if None.

        Returns:
            The first kind whose cumulative weight reaches the draw, or the
            first catalog entry if rounding leaves none selected.
        """
        if draw is None:
            draw = self._rng.random()
        cumulative = 0.0
        for kind in self._catalog:
            cumulative += kind.weight
            if draw <= cumulative:
                return kind
        return self._catalog[0]

    def next_id(self) -> int:
        return next(self._ids)

    def make_item(self, kind: ItemKind, lane: Lane) -> FallingItem:
        """Build an item of a given kind at the spawn position."""
        return FallingItem(
            id=self.next_id(),
            kind=kind,
            lane=lane,
            position=self._spawn_position
        )

    def spawn(self) -> FallingItem:
        """Create a new random item at the top of a random lane."""
        lane = self.choose_lane()
        kind = self.choose_kind()
        item = self.make_item(kind, lane)
        logger.debug("Spawned %r", item)
        return item

    def reset(self, seed: Optional[int] = None) -> None:
        """
        Reset the spawner.

        Args:
            seed: New random seed. Keeps the current RNG stream if None.
        """
        if seed is not None:
            self._rng = random.Random(seed)
        self._ids = itertools.count(1)
