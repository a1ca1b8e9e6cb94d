"""
Observer Hooks
==============

Outbound notifications from the engine to its host.

Hosts either subclass GameObserver or wrap plain callables with
CallbackObserver. Every hook defaults to a no-op, so a host only implements
what it needs.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Optional

if TYPE_CHECKING:
    from fruit_catcher.catcher_core.state_snapshot import GameSnapshot


UpdateCallback = Callable[["GameSnapshot"], None]
GameOverCallback = Callable[[int, int], None]

logger = logging.getLogger(__name__)


def _callable_or_none(name: str, hook: Any) -> Optional[Callable]:
    """Non-callable hooks are treated as absent."""
    if hook is None or callable(hook):
        return hook
    logger.warning("Ignoring non-callable %s hook: %r", name, hook)
    return None


class GameObserver:
    """Base observer. Override the hooks you care about."""

    def on_update(self, snapshot: "GameSnapshot") -> None:
        """Called at the end of every frame update and once on start."""

    def on_game_over(self, score: int, level: int) -> None:
        """Called exactly once per game, before the engine tears down."""


class CallbackObserver(GameObserver):
    """Adapts optional plain callables to the observer interface."""

    def __init__(
        self,
        on_update: Optional[UpdateCallback] = None,
        on_game_over: Optional[GameOverCallback] = None
    ):
        self._on_update = _callable_or_none("on_update", on_update)
        self._on_game_over = _callable_or_none("on_game_over", on_game_over)

    def on_update(self, snapshot: "GameSnapshot") -> None:
        if self._on_update is not None:
            self._on_update(snapshot)

    def on_game_over(self, score: int, level: int) -> None:
        if self._on_game_over is not None:
            self._on_game_over(score, level)
