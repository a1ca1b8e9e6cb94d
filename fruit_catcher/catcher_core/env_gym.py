"""
Gymnasium Environment Wrapper
=============================

Provides a standard Gymnasium interface to the catcher game.
Reward is always 0.0 - agents compute their own from info.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple, Union
import numpy as np

import gymnasium as gym
from gymnasium import spaces

from fruit_catcher.catcher_core.config_loader import GameConfig, load_config
from fruit_catcher.catcher_core.game import CoreGame
from fruit_catcher.catcher_core.item_catalog import Lane
from fruit_catcher.catcher_core.state_snapshot import GameSnapshot

logger = logging.getLogger(__name__)

# Rows used by the text renderer
ANSI_ROWS = 20


class LaneCatcherEnv(gym.Env):
    """
    Lane catcher game as a Gymnasium environment.

    Action Space:
        Discrete(3): 0 = LEFT, 1 = CENTER, 2 = RIGHT.
        The lane is applied, then ``frames_per_step`` frames are simulated.

    Observation Space:
        Dict with scalar game state and padded per-item arrays.

    Reward:
        Always 0.0. Agents compute their own reward from the info dict.

    Info:
        Contains score, delta_score, lives, level, frame, etc.
    """

    metadata = {
        "render_modes": ["ansi"],
        "render_fps": 60,
    }

    def __init__(
        self,
        config_path: Optional[str] = None,
        render_mode: Optional[str] = None,
        frames_per_step: Optional[int] = None,
        config: Optional[GameConfig] = None,
    ):
        """
        Initialize environment.

        Args:
            config_path: Path to game_config.yaml. Uses default if None.
            render_mode: "ansi" for a text frame, None for headless.
            frames_per_step: Override frames simulated per step.
            config: Preloaded config; takes precedence over config_path.
        """
        super().__init__()

        self._config = config if config is not None else load_config(config_path)

        if render_mode is not None and render_mode not in self.metadata["render_modes"]:
            raise ValueError(f"Unsupported render_mode: {render_mode}")
        self.render_mode = render_mode

        self._frames_per_step = frames_per_step or self._config.env.frames_per_step
        self._max_items = self._config.env.max_items
        self._max_frames = self._config.caps.max_frames

        self._game = CoreGame(config=self._config)

        self.action_space = spaces.Discrete(3)
        self.observation_space = self._build_observation_space()

    def _build_observation_space(self) -> spaces.Dict:
        """Build the observation space definition."""
        max_items = self._max_items
        num_kinds = self._config.num_item_kinds
        int32_max = np.iinfo(np.int32).max

        return spaces.Dict({
            "player_lane": spaces.Box(low=0, high=2, shape=(), dtype=np.int32),
            "score": spaces.Box(low=0, high=np.iinfo(np.int64).max, shape=(), dtype=np.int64),
            "level": spaces.Box(low=1, high=int32_max, shape=(), dtype=np.int32),
            "lives": spaces.Box(low=0, high=int32_max, shape=(), dtype=np.int32),
            "multiplier": spaces.Box(low=1, high=self._config.multiplier.factor, shape=(), dtype=np.int32),
            "multiplier_remaining": spaces.Box(
                low=0, high=self._config.multiplier.duration, shape=(), dtype=np.int32
            ),
            "missed_count": spaces.Box(
                low=0, high=self._config.lives.misses_per_life, shape=(), dtype=np.int32
            ),
            "items_count": spaces.Box(low=0, high=max_items, shape=(), dtype=np.int32),
            "item_kind": spaces.Box(low=-1, high=num_kinds - 1, shape=(max_items,), dtype=np.int16),
            "item_lane": spaces.Box(low=-1, high=2, shape=(max_items,), dtype=np.int8),
            "item_position": spaces.Box(
                low=0.0, high=np.inf, shape=(max_items,), dtype=np.float32
            ),
            "item_mask": spaces.MultiBinary(max_items),
        })

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None
    ) -> Tuple[Dict[str, np.ndarray], Dict[str, Any]]:
        """
        Reset the environment.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            (observation, info) tuple.
        """
        super().reset(seed=seed)

        self._game.stop()
        snapshot = self._game.start(seed=seed)

        obs = self._snapshot_to_obs(snapshot)
        info = self._game.get_info()
        info["delta_score"] = 0

        return obs, info

    def step(
        self,
        action: Union[int, np.ndarray]
    ) -> Tuple[Dict[str, np.ndarray], float, bool, bool, Dict[str, Any]]:
        """
        Execute one step.

        Args:
            action: Lane index in {0, 1, 2}.

        Returns:
            (observation, reward, terminated, truncated, info) tuple.
            Reward is always 0.0.
        """
        if isinstance(action, np.ndarray):
            action = int(action.item())
        action = int(action)
        if not 0 <= action <= 2:
            raise ValueError(f"Action must be 0, 1 or 2, got {action}")

        score_before = self._game.score
        self._game.on_lane_selected(Lane.from_index(action))

        frames_run = 0
        for _ in range(self._frames_per_step):
            if not self._game.is_active or self._game.frame >= self._max_frames:
                break
            self._game.update()
            frames_run += 1

        snapshot = self._game.snapshot()
        obs = self._snapshot_to_obs(snapshot)

        terminated = self._game.is_over
        truncated = not terminated and self._game.frame >= self._max_frames

        info = self._game.get_info()
        info["delta_score"] = self._game.score - score_before
        info["frames_run"] = frames_run

        if terminated:
            logger.debug("Episode terminated: score=%d level=%d", info["score"], info["level"])

        return obs, 0.0, terminated, truncated, info

    def _snapshot_to_obs(self, snapshot: GameSnapshot) -> Dict[str, np.ndarray]:
        return snapshot.to_obs_dict(self._max_items, self._game.catalog)

    def render(self) -> Optional[str]:
        """
        Render the current game state.

        Returns:
            Text frame if render_mode is "ansi", None otherwise.
        """
        if self.render_mode != "ansi":
            return None
        return render_text(self._game.snapshot(), self._config.field.off_screen_position)

    def close(self) -> None:
        self._game.stop()

    @property
    def game(self) -> CoreGame:
        """Access to underlying game (for debugging/tools)."""
        return self._game

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config


def render_text(snapshot: GameSnapshot, field_height: float, rows: int = ANSI_ROWS) -> str:
    """Draw the three lanes as a small text grid with the basket on the last row."""
    grid: List[List[str]] = [[" . "] * 3 for _ in range(rows)]
    for item in snapshot.items:
        row = min(rows - 2, int(item.position / field_height * (rows - 1)))
        grid[row][item.lane.index] = f" {item.kind[0]} "
    grid[rows - 1][snapshot.player_lane.index] = "\\_/"

    lines = ["|" + "".join(row) + "|" for row in grid]
    lines.append(
        f"score={snapshot.score} level={snapshot.level} lives={snapshot.lives} "
        f"x{snapshot.multiplier}"
    )
    return "\n".join(lines)
