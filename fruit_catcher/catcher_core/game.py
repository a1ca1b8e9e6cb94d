"""
Core Game
=========

Main game orchestrator combining spawning, movement, collisions, scoring and
the lives state machine.

The engine never schedules itself. A host calls ``update()`` once per rendered
frame (see FrameLoop for a ready-made scheduler) and feeds lane decisions to
``on_lane_selected()``. Both must be called from the same thread.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple, Union

from fruit_catcher.catcher_core.config_loader import GameConfig, get_config
from fruit_catcher.catcher_core.game_state import FallingItem, GamePhase, GameState
from fruit_catcher.catcher_core.hooks import (
    CallbackObserver,
    GameObserver,
    GameOverCallback,
    UpdateCallback
)
from fruit_catcher.catcher_core.item_catalog import ItemCatalog, ItemKind, Lane, get_catalog
from fruit_catcher.catcher_core.rng import ItemSpawner
from fruit_catcher.catcher_core.rules import (
    in_catch_window,
    is_off_screen,
    register_miss,
    resolve_collision
)
from fruit_catcher.catcher_core.scoring import tick_multiplier
from fruit_catcher.catcher_core.state_snapshot import GameSnapshot, SnapshotBuilder

logger = logging.getLogger(__name__)


class CoreGame:
    """
    Main game simulation class.

    Lifecycle::

        INACTIVE --start()--> ACTIVE --lives reach 0--> GAME_OVER --> INACTIVE
        ACTIVE --stop()--> INACTIVE   (no game-over notification)

    One update = one frame: multiplier decay, spawning, then movement and
    per-item resolution, then a snapshot to every observer.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        on_update: Optional[UpdateCallback] = None,
        on_game_over: Optional[GameOverCallback] = None
    ):
        """
        Initialize game.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for reproducible spawning.
            on_update: Optional callable receiving a GameSnapshot every frame.
            on_game_over: Optional callable receiving (score, level) once per game.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._seed = seed

        self._catalog = get_catalog(config)
        self._spawner = ItemSpawner(config, seed, catalog=self._catalog)
        self._snapshot_builder = SnapshotBuilder()
        self._observers: List[GameObserver] = []

        if on_update is not None or on_game_over is not None:
            self.add_observer(CallbackObserver(on_update, on_game_over))

        self._state = GameState.fresh(config)
        self._ended_by_game_over: bool = False

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def catalog(self) -> ItemCatalog:
        return self._catalog

    @property
    def state(self) -> GameState:
        """Live mutable state (for tools and tests; hosts should use snapshots)."""
        return self._state

    @property
    def phase(self) -> GamePhase:
        return self._state.phase

    @property
    def is_active(self) -> bool:
        return self._state.is_active

    @property
    def is_over(self) -> bool:
        """True if the last game ended by running out of lives."""
        return self._ended_by_game_over

    @property
    def score(self) -> int:
        return self._state.score

    @property
    def level(self) -> int:
        return self._state.level

    @property
    def lives(self) -> int:
        return self._state.lives

    @property
    def player_lane(self) -> Lane:
        return self._state.player_lane

    @property
    def items(self) -> Tuple[FallingItem, ...]:
        return tuple(self._state.items)

    @property
    def multiplier(self) -> int:
        return self._state.multiplier

    @property
    def multiplier_remaining(self) -> int:
        return self._state.multiplier_remaining

    @property
    def frame(self) -> int:
        return self._state.frame

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def add_observer(self, observer: GameObserver) -> None:
        if observer not in self._observers:
            self._observers.append(observer)

    def remove_observer(self, observer: GameObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def _notify_update(self, snapshot: GameSnapshot) -> None:
        for observer in list(self._observers):
            observer.on_update(snapshot)

    def _notify_game_over(self, score: int, level: int) -> None:
        for observer in list(self._observers):
            observer.on_game_over(score, level)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self, seed: Optional[int] = None) -> GameSnapshot:
        """
        Start a new game from fresh state.

        Starting while a game is running discards it without a game-over
        notification. The player keeps its current lane.

        Args:
            seed: New random seed. Reuses the previous seed if None.

        Returns:
            Initial snapshot (also delivered to observers).
        """
        if seed is not None:
            self._seed = seed
        self._spawner.reset(self._seed)

        self._state = GameState.fresh(self._config, player_lane=self._state.player_lane)
        self._state.phase = GamePhase.ACTIVE
        self._ended_by_game_over = False
        logger.info("Game started (seed=%s)", self._seed)

        snapshot = self.snapshot()
        self._notify_update(snapshot)
        return snapshot

    def stop(self) -> None:
        """Deactivate the game. Safe to call repeatedly or before any start."""
        if self._state.phase is GamePhase.INACTIVE:
            return
        self._state.phase = GamePhase.INACTIVE
        logger.info(
            "Game stopped: score=%d level=%d frame=%d",
            self._state.score, self._state.level, self._state.frame
        )

    def game_over(self) -> None:
        """
        Terminal transition: notify observers with the final score and level,
        then tear down as stop() does. Fires at most once per game.
        """
        if self._state.phase is not GamePhase.ACTIVE:
            return
        self._state.phase = GamePhase.GAME_OVER
        self._ended_by_game_over = True
        logger.info("Game over: score=%d level=%d", self._state.score, self._state.level)
        self._notify_game_over(self._state.score, self._state.level)
        self.stop()

    # ------------------------------------------------------------------
    # Frame update
    # ------------------------------------------------------------------

    def update(self) -> Optional[GameSnapshot]:
        """
        Simulate one frame.

        Returns:
            The snapshot sent to observers, or None if the game is inactive.
        """
        if not self._state.is_active:
            return None

        state = self._state
        state.frame += 1

        tick_multiplier(state)

        state.spawn_timer += 1
        if state.spawn_timer >= state.spawn_interval:
            state.items.append(self._spawner.spawn())
            state.spawn_timer = 0

        if self._advance_items():
            self.game_over()

        snapshot = self.snapshot()
        self._notify_update(snapshot)
        return snapshot

    def _advance_items(self) -> bool:
        """
        Move every item and resolve catches and misses.

        Items are processed newest first. Retained items keep their order.
        When lives run out the pass stops at once: the triggering item is
        removed and the items not yet reached stay where they were.

        Returns:
            True if lives ran out during this pass.
        """
        state = self._state
        field = self._config.field
        speed = self._config.speed.speed_for_level(state.level)

        items = state.items
        retained: List[FallingItem] = []
        lives_ran_out = False

        index = len(items)
        while index > 0:
            index -= 1
            item = items[index]
            item.position += speed
            lives_before = state.lives

            if in_catch_window(item.position, field) and item.lane is state.player_lane:
                outcome = resolve_collision(state, item, self._config)
                state.caught[item.kind.name] += 1
                state.lives_lost += max(0, lives_before - state.lives)
                logger.debug("Caught %r -> %s", item, outcome.effect.name)
                if outcome.game_over:
                    # Stops on a bomb as on a miss: lives never go below 0
                    # and nothing after this item can fire game-over again.
                    lives_ran_out = True
                    break
                continue

            if is_off_screen(item.position, field):
                state.dropped[item.kind.name] += 1
                ran_out = register_miss(state, item, self._config)
                state.lives_lost += max(0, lives_before - state.lives)
                if ran_out:
                    lives_ran_out = True
                    break
                continue

            retained.append(item)

        retained.reverse()
        state.items = items[:index] + retained
        return lives_ran_out

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def on_lane_selected(self, lane: Union[Lane, str, None]) -> bool:
        """
        Move the player to ``lane``.

        Ignored while inactive. Values that are not one of the three lanes are
        dropped and the player keeps its lane.

        Returns:
            True if the lane was applied.
        """
        if not self._state.is_active:
            return False

        parsed = Lane.parse(lane)
        if parsed is None:
            logger.debug("Dropped invalid lane input: %r", lane)
            return False

        self._state.player_lane = parsed
        return True

    # ------------------------------------------------------------------
    # Helpers for hosts, tools and tests
    # ------------------------------------------------------------------

    def force_spawn(
        self,
        kind: Union[ItemKind, str],
        lane: Union[Lane, str, None] = None,
        position: Optional[float] = None
    ) -> FallingItem:
        """
        Add an item of a chosen kind, bypassing the spawn timer and RNG.

        Args:
            kind: Item kind or its catalog name.
            lane: Lane or lane name to drop into. Defaults to the player's lane.
            position: Starting position. Defaults to the spawn position.

        Returns:
            The new item.
        """
        if isinstance(kind, str):
            resolved = self._catalog.get_by_name(kind)
            if resolved is None:
                raise ValueError(f"Unknown item kind: {kind}")
            kind = resolved

        if lane is None:
            lane = self._state.player_lane
        else:
            parsed = Lane.parse(lane)
            if parsed is None:
                raise ValueError(f"Unknown lane: {lane!r}")
            lane = parsed

        item = self._spawner.make_item(kind, lane)
        if position is not None:
            item.position = position
        self._state.items.append(item)
        return item

    def snapshot(self) -> GameSnapshot:
        """Build current game state snapshot."""
        return self._snapshot_builder.build(self._state)

    def get_info(self) -> Dict[str, Any]:
        """Get additional info dict for Gymnasium."""
        return {
            "score": self._state.score,
            "level": self._state.level,
            "lives": self._state.lives,
            "frame": self._state.frame,
            "items_count": len(self._state.items),
            "missed_count": self._state.missed_count,
            "multiplier": self._state.multiplier,
            "multiplier_remaining": self._state.multiplier_remaining,
            "spawn_interval": self._state.spawn_interval,
            "phase": self._state.phase.value,
            "game_over": self._ended_by_game_over,
            "lives_lost": self._state.lives_lost,
            "caught": dict(self._state.caught),
            "dropped": dict(self._state.dropped),
        }
