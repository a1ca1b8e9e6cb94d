"""
Fruit Catcher Package
=====================

Headless game engine for a three-lane fruit catching arcade game:

- Item spawning and weighted item selection
- Lane-based catch detection
- Scoring, the timed multiplier and level progression
- Lives and the game-over state machine

All tunable parameters are in game_config.yaml.
"""
