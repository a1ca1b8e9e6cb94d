"""
Evaluation Package
==================

Seed bank plus the harness that plays agents through it and reports results.
"""

from fruit_catcher.evaluation.run_eval import (
    EndReason,
    EvalReport,
    GameReport,
    evaluate_agent,
    load_agent,
    load_seed_bank,
    play_seed
)

__all__ = [
    "EndReason",
    "EvalReport",
    "GameReport",
    "evaluate_agent",
    "load_agent",
    "load_seed_bank",
    "play_seed",
]
