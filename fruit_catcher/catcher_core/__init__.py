"""
Catcher Core - The game simulation engine.

Main exports:
- CoreGame: Frame-stepped game simulation
- FrameLoop: Host-side scheduler driving CoreGame
- GameObserver / CallbackObserver: Snapshot and game-over notifications
- LaneCatcherEnv: Gymnasium environment for agents
- GameConfig: Configuration loaded from game_config.yaml
"""

from fruit_catcher.catcher_core.config_loader import GameConfig, load_config
from fruit_catcher.catcher_core.item_catalog import ItemCatalog, ItemEffect, ItemKind, Lane
from fruit_catcher.catcher_core.game_state import FallingItem, GamePhase, GameState
from fruit_catcher.catcher_core.hooks import CallbackObserver, GameObserver
from fruit_catcher.catcher_core.state_snapshot import GameSnapshot, ItemView
from fruit_catcher.catcher_core.game import CoreGame
from fruit_catcher.catcher_core.frame_loop import FrameLoop
from fruit_catcher.catcher_core.env_gym import LaneCatcherEnv

__all__ = [
    "GameConfig",
    "load_config",
    "ItemCatalog",
    "ItemEffect",
    "ItemKind",
    "Lane",
    "FallingItem",
    "GamePhase",
    "GameState",
    "CallbackObserver",
    "GameObserver",
    "GameSnapshot",
    "ItemView",
    "CoreGame",
    "FrameLoop",
    "LaneCatcherEnv",
]
