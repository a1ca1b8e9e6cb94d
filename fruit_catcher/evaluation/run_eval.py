"""
Agent Evaluation
================

Plays an agent through LaneCatcherEnv once per seed and reports how each game
went: score and level reached, lives lost, what landed in the basket, which
fruit fell past it, and whether the game ended on lives or on a frame limit.

Example:
    python -m fruit_catcher.evaluation.run_eval --agent agents/baseline_chaser --max-frames 5000
"""

from __future__ import annotations

import argparse
import importlib.util
import json
import logging
import sys
import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional
import numpy as np

from fruit_catcher.catcher_core.env_gym import LaneCatcherEnv
from fruit_catcher.catcher_core.item_catalog import ItemCatalog

logger = logging.getLogger(__name__)

AgentFn = Callable[[Dict[str, np.ndarray]], int]

SEED_BANK_PATH = Path(__file__).with_name("seed_bank.json")


class EndReason(Enum):
    """Why a game stopped."""
    GAME_OVER = "game_over"      # Lives ran out
    FRAME_CAP = "frame_cap"      # Env truncated at caps.max_frames
    FRAME_LIMIT = "frame_limit"  # Caller's max_frames reached first


@dataclass
class GameReport:
    """Outcome of one seeded game."""
    seed: int
    score: int
    level: int
    frames: int
    lives_lost: int
    end_reason: EndReason
    seconds: float
    caught: Dict[str, int] = field(default_factory=dict)
    dropped: Dict[str, int] = field(default_factory=dict)
    actions: Optional[List[int]] = None

    def fruit_missed(self, catalog: ItemCatalog) -> int:
        """Fruit that fell past the basket (hearts, money and bombs don't count)."""
        return sum(self.dropped.get(kind.name, 0) for kind in catalog.fruits)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "seed": self.seed,
            "score": self.score,
            "level": self.level,
            "frames": self.frames,
            "lives_lost": self.lives_lost,
            "end_reason": self.end_reason.value,
            "seconds": round(self.seconds, 4),
            "caught": dict(self.caught),
            "dropped": dict(self.dropped),
        }
        if self.actions is not None:
            data["actions"] = list(self.actions)
        return data


@dataclass
class EvalReport:
    """All games played by one agent."""
    games: List[GameReport]

    @property
    def scores(self) -> np.ndarray:
        return np.array([game.score for game in self.games], dtype=np.int64)

    @property
    def game_over_rate(self) -> float:
        if not self.games:
            return 0.0
        return sum(g.end_reason is EndReason.GAME_OVER for g in self.games) / len(self.games)

    def score_stats(self) -> Dict[str, float]:
        scores = self.scores
        if scores.size == 0:
            return {"mean": 0.0, "std": 0.0, "median": 0.0, "min": 0.0, "max": 0.0}
        return {
            "mean": float(scores.mean()),
            "std": float(scores.std()),
            "median": float(np.median(scores)),
            "min": float(scores.min()),
            "max": float(scores.max()),
        }

    def totals(self, which: str) -> Dict[str, int]:
        """Sum the per-kind ``caught`` or ``dropped`` tallies over all games."""
        summed: Dict[str, int] = {}
        for game in self.games:
            for name, count in getattr(game, which).items():
                summed[name] = summed.get(name, 0) + count
        return summed

    def to_dict(self, agent_name: str) -> Dict[str, Any]:
        return {
            "agent": agent_name,
            "created": time.strftime("%Y-%m-%dT%H:%M:%S"),
            "scores": self.score_stats(),
            "game_over_rate": self.game_over_rate,
            "caught": self.totals("caught"),
            "dropped": self.totals("dropped"),
            "games": [game.to_dict() for game in self.games],
        }


def load_seed_bank(path: Optional[str] = None) -> List[int]:
    """Read the ``seeds`` list from a seed bank JSON (the bundled one by default)."""
    bank = Path(path) if path is not None else SEED_BANK_PATH
    with open(bank, "r", encoding="utf-8") as f:
        return [int(seed) for seed in json.load(f)["seeds"]]


def load_agent(agent_path: str) -> AgentFn:
    """
    Import an agent from a directory holding ``agent.py`` or from the file itself.

    A module-level ``CatcherAgent`` class wins over a bare ``act`` function;
    the class is instantiated without arguments and its bound ``act`` returned.

    Raises:
        FileNotFoundError: No agent file at the path.
        ImportError: The file could not be imported.
        AttributeError: The module has neither entry point.
    """
    path = Path(agent_path)
    agent_file = path / "agent.py" if path.is_dir() else path
    if not agent_file.is_file():
        raise FileNotFoundError(f"No agent file at {agent_file}")

    module_name = f"_catcher_agent_{agent_file.parent.name}"
    module_spec = importlib.util.spec_from_file_location(module_name, agent_file)
    if module_spec is None or module_spec.loader is None:
        raise ImportError(f"Cannot import {agent_file}")

    module = importlib.util.module_from_spec(module_spec)
    sys.modules[module_name] = module
    module_spec.loader.exec_module(module)

    agent_cls = getattr(module, "CatcherAgent", None)
    if agent_cls is not None:
        act = getattr(agent_cls(), "act", None)
        if not callable(act):
            raise AttributeError(f"{agent_file}: CatcherAgent has no act() method")
        return act

    act = getattr(module, "act", None)
    if callable(act):
        return act
    raise AttributeError(f"{agent_file}: define a CatcherAgent class or an act() function")


def play_seed(
    agent_fn: AgentFn,
    seed: int,
    max_frames: Optional[int] = None,
    record_actions: bool = False
) -> GameReport:
    """
    Play one game to its end.

    Args:
        agent_fn: Maps an observation to a lane index.
        seed: Spawn seed for the game.
        max_frames: Stop once this many frames have run (env cap if None).
        record_actions: Keep every chosen lane in the report.
    """
    env = LaneCatcherEnv()
    obs, info = env.reset(seed=seed)
    actions: Optional[List[int]] = [] if record_actions else None

    started = time.perf_counter()
    terminated = truncated = False
    try:
        while not (terminated or truncated):
            if max_frames is not None and info["frame"] >= max_frames:
                break
            action = int(agent_fn(obs))
            if actions is not None:
                actions.append(action)
            obs, _, terminated, truncated, info = env.step(action)
    finally:
        env.close()
    seconds = time.perf_counter() - started

    if info["game_over"]:
        reason = EndReason.GAME_OVER
    elif truncated:
        reason = EndReason.FRAME_CAP
    else:
        reason = EndReason.FRAME_LIMIT

    report = GameReport(
        seed=seed,
        score=info["score"],
        level=info["level"],
        frames=info["frame"],
        lives_lost=info["lives_lost"],
        end_reason=reason,
        seconds=seconds,
        caught=info["caught"],
        dropped=info["dropped"],
        actions=actions
    )
    logger.info(
        "seed=%d score=%d level=%d frames=%d end=%s",
        seed, report.score, report.level, report.frames, reason.value
    )
    return report


def evaluate_agent(
    agent_fn: AgentFn,
    seeds: Optional[Iterable[int]] = None,
    max_frames: Optional[int] = None,
    record_actions: bool = False
) -> EvalReport:
    """Play one game per seed (the bundled seed bank by default)."""
    if seeds is None:
        seeds = load_seed_bank()
    return EvalReport([
        play_seed(agent_fn, seed, max_frames=max_frames, record_actions=record_actions)
        for seed in seeds
    ])


def format_report(report: EvalReport, catalog: Optional[ItemCatalog] = None) -> str:
    """Plain-text table: one row per game, then score stats and per-kind totals."""
    catalog = catalog if catalog is not None else ItemCatalog()
    lines = [f"{'seed':>6} {'score':>8} {'level':>5} {'frames':>7} {'lost':>4} "
             f"{'missed':>6}  end"]
    for game in report.games:
        lines.append(
            f"{game.seed:>6} {game.score:>8} {game.level:>5} {game.frames:>7} "
            f"{game.lives_lost:>4} {game.fruit_missed(catalog):>6}  {game.end_reason.value}"
        )

    stats = report.score_stats()
    lines.append("")
    lines.append(
        f"score mean {stats['mean']:.1f} (std {stats['std']:.1f}), median {stats['median']:.1f}, "
        f"range {stats['min']:.0f}..{stats['max']:.0f}"
    )
    lines.append(f"games ended on lives: {report.game_over_rate:.0%}")

    caught = report.totals("caught")
    dropped = report.totals("dropped")
    for kind in catalog:
        lines.append(
            f"  {kind.symbol} {kind.name:<10} caught {caught.get(kind.name, 0):>5}  "
            f"fell {dropped.get(kind.name, 0):>5}"
        )
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Score a lane catcher agent over a seed bank")
    parser.add_argument("--agent", required=True,
                        help="Agent directory (with agent.py) or agent file")
    parser.add_argument("--seeds", default=None,
                        help="Seed bank JSON (bundled bank if omitted)")
    parser.add_argument("--max-frames", type=int, default=None,
                        help="Frame limit per game (env cap if omitted)")
    parser.add_argument("--output", default=None,
                        help="Write the full report as JSON here")
    parser.add_argument("--record", action="store_true",
                        help="Include every action in the JSON report")
    parser.add_argument("--log-level", default="WARNING",
                        help="DEBUG, INFO or WARNING")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(name)s %(levelname)s %(message)s"
    )

    try:
        agent_fn = load_agent(args.agent)
    except (FileNotFoundError, ImportError, AttributeError) as e:
        print(f"Could not load agent: {e}")
        return 1

    seeds = load_seed_bank(args.seeds) if args.seeds else None
    report = evaluate_agent(
        agent_fn, seeds=seeds, max_frames=args.max_frames, record_actions=args.record
    )
    print(format_report(report))

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            json.dump(report.to_dict(Path(args.agent).name), f, indent=2, ensure_ascii=False)
        print(f"Report written to {args.output}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
