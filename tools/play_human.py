"""
Human Play Mode
================

Play the catcher game with the keyboard in a pygame window.

Controls:
    - Left/Right arrows: Move one lane
    - A / S / D: Jump to LEFT / CENTER / RIGHT
    - R: Restart game
    - ESC: Quit

Usage:
    python -m tools.play_human [--seed SEED] [--width WIDTH] [--height HEIGHT]
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Dict, Optional, Tuple

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

from fruit_catcher.catcher_core.config_loader import load_config, GameConfig
from fruit_catcher.catcher_core.game import CoreGame
from fruit_catcher.catcher_core.hooks import GameObserver
from fruit_catcher.catcher_core.item_catalog import Lane
from fruit_catcher.catcher_core.state_snapshot import GameSnapshot


# Item colors by kind name; unknown kinds fall back to grey
ITEM_COLORS: Dict[str, Tuple[int, int, int]] = {
    "APPLE": (220, 50, 50),
    "BANANA": (245, 215, 60),
    "PINEAPPLE": (230, 160, 40),
    "HEART": (240, 90, 150),
    "MONEY": (70, 170, 80),
    "BOMB": (40, 40, 40),
}
DEFAULT_ITEM_COLOR = (150, 150, 150)


class CatcherRenderer:
    """
    Draws lanes, items and the HUD from snapshots.
    """

    def __init__(self, config: GameConfig, window_width: int, window_height: int):
        self._config = config
        self._window_width = window_width
        self._window_height = window_height

        self._bg = (250, 244, 232)
        self._lane_fill = (255, 252, 245)
        self._lane_border = (210, 190, 160)
        self._catch_band = (255, 230, 200)
        self._basket = (150, 100, 50)
        self._text_dark = (80, 60, 40)

        pygame.font.init()
        self._font_large = pygame.font.Font(None, 48)
        self._font_medium = pygame.font.Font(None, 28)
        self._font_small = pygame.font.Font(None, 20)

        self._calculate_layout()

    def _calculate_layout(self) -> None:
        """Calculate layout for game elements."""
        self._top_ui_height = 60
        self._margin = 20
        self._field_top = self._top_ui_height
        self._field_height = self._window_height - self._top_ui_height - self._margin
        self._lane_width = (self._window_width - 2 * self._margin) // 3
        self._item_radius = max(8, self._lane_width // 6)

    def _lane_center_x(self, lane: Lane) -> int:
        return self._margin + lane.index * self._lane_width + self._lane_width // 2

    def _position_to_y(self, position: float) -> int:
        scale = self._field_height / self._config.field.off_screen_position
        return int(self._field_top + position * scale)

    def render(
        self,
        screen: "pygame.Surface",
        snapshot: GameSnapshot,
        game_over: bool = False,
        final_score: int = 0
    ) -> None:
        """Render the complete game scene."""
        screen.fill(self._bg)
        self._draw_field(screen)
        self._draw_items(screen, snapshot)
        self._draw_basket(screen, snapshot.player_lane)
        self._draw_hud(screen, snapshot)
        if game_over:
            self._draw_game_over(screen, final_score)

    def _draw_field(self, screen: "pygame.Surface") -> None:
        field = self._config.field
        band_top = self._position_to_y(field.catch_window_min)
        band_bottom = self._position_to_y(field.catch_window_max)
        for lane in Lane:
            rect = pygame.Rect(
                self._margin + lane.index * self._lane_width,
                self._field_top,
                self._lane_width,
                self._field_height
            )
            pygame.draw.rect(screen, self._lane_fill, rect)
            pygame.draw.rect(screen, self._lane_border, rect, 2)
            band = pygame.Rect(rect.x + 2, band_top, rect.width - 4, band_bottom - band_top)
            pygame.draw.rect(screen, self._catch_band, band)

    def _draw_items(self, screen: "pygame.Surface", snapshot: GameSnapshot) -> None:
        for item in snapshot.items:
            center = (self._lane_center_x(item.lane), self._position_to_y(item.position))
            color = ITEM_COLORS.get(item.kind, DEFAULT_ITEM_COLOR)
            pygame.draw.circle(screen, color, center, self._item_radius)
            label = self._font_small.render(item.kind[0], True, (255, 255, 255))
            screen.blit(label, label.get_rect(center=center))

    def _draw_basket(self, screen: "pygame.Surface", lane: Lane) -> None:
        field = self._config.field
        y = self._position_to_y((field.catch_window_min + field.catch_window_max) / 2)
        width = int(self._lane_width * 0.6)
        rect = pygame.Rect(0, 0, width, self._item_radius)
        rect.center = (self._lane_center_x(lane), y + self._item_radius)
        pygame.draw.rect(screen, self._basket, rect, border_radius=6)

    def _draw_hud(self, screen: "pygame.Surface", snapshot: GameSnapshot) -> None:
        hud = (f"Score {snapshot.score}   Level {snapshot.level}   "
               f"Lives {snapshot.lives}")
        text = self._font_medium.render(hud, True, self._text_dark)
        screen.blit(text, (self._margin, 18))
        if snapshot.multiplier > 1:
            seconds = snapshot.multiplier_remaining / 60.0
            bonus = self._font_medium.render(
                f"x{snapshot.multiplier} {seconds:.1f}s", True, (70, 170, 80)
            )
            screen.blit(bonus, (self._window_width - self._margin - bonus.get_width(), 18))

    def _draw_game_over(self, screen: "pygame.Surface", final_score: int) -> None:
        overlay = pygame.Surface((self._window_width, self._window_height), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 140))
        screen.blit(overlay, (0, 0))
        title = self._font_large.render("GAME OVER", True, (255, 255, 255))
        score = self._font_medium.render(f"Score: {final_score}   (R to restart)", True, (255, 255, 255))
        cx, cy = self._window_width // 2, self._window_height // 2
        screen.blit(title, title.get_rect(center=(cx, cy - 24)))
        screen.blit(score, score.get_rect(center=(cx, cy + 20)))


class HumanPlayer(GameObserver):
    """
    Interactive host: polls the keyboard, steps the engine once per frame and
    draws the snapshot the engine sends back.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        window_width: int = 420,
        window_height: int = 640,
        target_fps: int = 60
    ):
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame is required for human play mode")

        self._config = config if config is not None else load_config()
        self._seed = seed
        self._target_fps = target_fps

        pygame.init()
        self._screen = pygame.display.set_mode((window_width, window_height))
        pygame.display.set_caption("Fruit Catcher")
        self._clock = pygame.time.Clock()
        self._renderer = CatcherRenderer(self._config, window_width, window_height)

        self._game = CoreGame(config=self._config, seed=seed)
        self._game.add_observer(self)

        self._running = True
        self._game_over = False
        self._final_score = 0
        self._last_snapshot: GameSnapshot = self._game.snapshot()

    def on_update(self, snapshot: GameSnapshot) -> None:
        self._last_snapshot = snapshot

    def on_game_over(self, score: int, level: int) -> None:
        self._game_over = True
        self._final_score = score
        print(f"\nGAME OVER - Score: {score}  Level: {level}")

    def run(self) -> int:
        """Run the game loop. Returns final score."""
        print("=== Fruit Catcher ===")
        print("Arrows or A/S/D to switch lanes")
        print("R to restart, ESC to quit")
        print()

        self._game.start()

        while self._running:
            self._handle_events()
            self._game.update()
            self._render()
            self._clock.tick(self._target_fps)

        self._game.stop()
        pygame.quit()
        return self._game.score

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self._running = False
                elif event.key == pygame.K_r:
                    self._restart()
                elif event.key == pygame.K_LEFT:
                    self._shift_lane(-1)
                elif event.key == pygame.K_RIGHT:
                    self._shift_lane(1)
                elif event.key == pygame.K_a:
                    self._game.on_lane_selected(Lane.LEFT)
                elif event.key == pygame.K_s:
                    self._game.on_lane_selected(Lane.CENTER)
                elif event.key == pygame.K_d:
                    self._game.on_lane_selected(Lane.RIGHT)

    def _shift_lane(self, step: int) -> None:
        index = min(2, max(0, self._game.player_lane.index + step))
        self._game.on_lane_selected(Lane.from_index(index))

    def _restart(self) -> None:
        """Restart the game."""
        self._game.start(seed=self._seed)
        self._game_over = False
        print("\n=== Game Restarted ===\n")

    def _render(self) -> None:
        self._renderer.render(
            self._screen,
            self._last_snapshot,
            game_over=self._game_over,
            final_score=self._final_score
        )
        pygame.display.flip()


def main():
    parser = argparse.ArgumentParser(description="Play Fruit Catcher interactively")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--width", type=int, default=420, help="Window width (default: 420)")
    parser.add_argument("--height", type=int, default=640, help="Window height (default: 640)")
    parser.add_argument("--fps", type=int, default=60, help="Target FPS")
    parser.add_argument("--verbose", action="store_true", help="Log engine events")

    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)

    try:
        config = load_config()
        player = HumanPlayer(
            config=config,
            seed=args.seed,
            window_width=args.width,
            window_height=args.height,
            target_fps=args.fps
        )
        score = player.run()
        print(f"\nFinal Score: {score}")
        return 0
    except ImportError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
