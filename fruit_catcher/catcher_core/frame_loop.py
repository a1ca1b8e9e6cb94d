"""
Frame Loop
==========

A minimal host-side scheduler that drives CoreGame one frame at a time.

Headless by default (frames run back to back). With ``realtime=True`` it
sleeps between frames to hold the target frame rate, which is what an
interactive host wants.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from fruit_catcher.catcher_core.game import CoreGame

logger = logging.getLogger(__name__)


class FrameLoop:
    """
    Calls ``game.update()`` once per frame while the game is active.

    Stopping the game (or ``game_over``) ends the loop after the frame in
    progress; a frame is never interrupted.
    """

    def __init__(
        self,
        game: CoreGame,
        fps: float = 60.0,
        realtime: bool = False,
        clock: Callable[[], float] = time.perf_counter,
        sleep: Callable[[float], None] = time.sleep
    ):
        """
        Args:
            game: Engine to drive.
            fps: Target frame rate (only used when realtime).
            realtime: Sleep between frames to hold ``fps``.
            clock: Monotonic time source.
            sleep: Sleep function.
        """
        if fps <= 0:
            raise ValueError(f"fps must be positive, got {fps}")
        self._game = game
        self._frame_time = 1.0 / fps
        self._realtime = realtime
        self._clock = clock
        self._sleep = sleep
        self._before_frame: Optional[Callable[[CoreGame], None]] = None

    @property
    def game(self) -> CoreGame:
        return self._game

    def set_before_frame(self, callback: Optional[Callable[[CoreGame], None]]) -> None:
        """Register a callable run before each frame (e.g. polling input)."""
        self._before_frame = callback

    def run(self, max_frames: Optional[int] = None, seed: Optional[int] = None) -> int:
        """
        Start the game if needed and run frames until it stops.

        Args:
            max_frames: Stop scheduling after this many frames (the game is
                left running). Unlimited if None.
            seed: Seed passed to ``start()`` when the game is not active.

        Returns:
            Number of frames run.
        """
        if not self._game.is_active:
            self._game.start(seed=seed)

        frames = 0
        next_deadline = self._clock() + self._frame_time

        while self._game.is_active:
            if max_frames is not None and frames >= max_frames:
                break

            if self._before_frame is not None:
                self._before_frame(self._game)
                # Input handling may have stopped the game
                if not self._game.is_active:
                    break

            self._game.update()
            frames += 1

            if self._realtime:
                remaining = next_deadline - self._clock()
                if remaining > 0:
                    self._sleep(remaining)
                next_deadline = max(next_deadline + self._frame_time, self._clock())

        logger.debug("Frame loop finished after %d frames", frames)
        return frames
