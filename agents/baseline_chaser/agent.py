"""
Baseline Chaser Agent - Catches what is about to land, dodges bombs.

This serves as:
1. A working example of how to read observations and return actions
2. A baseline benchmark for agents to compare against
3. A verification that the environment API works correctly

Strategy:
- Look only at items that have not yet passed the catch window
- Value each lane by the items arriving soonest in it (closer = heavier)
- Treat a bomb that will arrive soon as a large penalty for its lane
- Stay put on ties so the basket doesn't jitter between lanes
"""

import numpy as np
from typing import Any, Dict, Optional

from fruit_catcher.catcher_core.config_loader import GameConfig, load_config
from fruit_catcher.catcher_core.item_catalog import ItemCatalog, ItemEffect


# Value of non-scoring pickups, in score points
HEART_VALUE = 400.0
MULTIPLIER_VALUE = 250.0
BOMB_PENALTY = -5000.0

# Items further than this from the catch window are ignored
LOOKAHEAD = 60.0


class CatcherAgent:
    """
    Heuristic lane chooser.
    """

    def __init__(self, config: Optional[GameConfig] = None, debug: bool = False):
        """
        Initialize the agent.

        Args:
            config: Game config (for the catalog and field). Default if None.
            debug: If True, print decisions to stdout.
        """
        self.debug = debug
        self._config = config if config is not None else load_config()
        self._catalog = ItemCatalog(self._config)
        self._window_min = self._config.field.catch_window_min
        self._window_max = self._config.field.catch_window_max
        self._values = np.array([self._kind_value(kind) for kind in self._catalog], dtype=np.float64)

    @staticmethod
    def _kind_value(kind) -> float:
        effect = kind.effect
        if effect is ItemEffect.DAMAGE:
            return BOMB_PENALTY
        if effect is ItemEffect.HEAL:
            return HEART_VALUE
        if effect is ItemEffect.MULTIPLIER:
            return MULTIPLIER_VALUE
        return float(kind.score)

    def reset(self, seed: Optional[int] = None) -> None:
        """Reset agent state for a new episode (stateless)."""

    def act(self, observation: Dict[str, Any]) -> int:
        """
        Choose a lane.

        Args:
            observation: Dict of numpy arrays from the environment.

        Returns:
            Lane index: 0 = LEFT, 1 = CENTER, 2 = RIGHT.
        """
        current_lane = int(observation["player_lane"])
        mask = observation["item_mask"].astype(bool)
        kinds = observation["item_kind"][mask].astype(np.int64)
        lanes = observation["item_lane"][mask].astype(np.int64)
        positions = observation["item_position"][mask].astype(np.float64)

        # Only items that can still be caught and are close enough to matter
        distance = self._window_max - positions
        relevant = (distance > 0) & (distance <= LOOKAHEAD + (self._window_max - self._window_min))

        lane_values = np.zeros(3, dtype=np.float64)
        for kind, lane, dist in zip(kinds[relevant], lanes[relevant], distance[relevant]):
            urgency = 1.0 / (1.0 + max(0.0, dist - (self._window_max - self._window_min)))
            lane_values[lane] += self._values[kind] * urgency

        best = float(lane_values.max())
        if lane_values[current_lane] >= best:
            action = current_lane
        else:
            action = int(np.argmax(lane_values))

        if self.debug:
            print(f"[Chaser Agent] lane={current_lane} values={np.round(lane_values, 1)} "
                  f"-> {action}")

        return action

