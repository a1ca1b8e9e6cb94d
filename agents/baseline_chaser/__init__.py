"""
Baseline Chaser Agent Package

A simple heuristic agent that moves toward the most valuable item about to
reach the basket and steers clear of bombs. Serves as a benchmark and example.
"""

from .agent import CatcherAgent

__all__ = ["CatcherAgent"]
