"""
Performance Benchmark
=====================

Measures engine frame throughput and environment step throughput.

Usage:
    python -m tools.benchmark_speed [--frames F] [--steps S]
"""

from __future__ import annotations

import argparse
import sys
import time
import numpy as np

from fruit_catcher.catcher_core.config_loader import load_config
from fruit_catcher.catcher_core.env_gym import LaneCatcherEnv
from fruit_catcher.catcher_core.game import CoreGame
from fruit_catcher.catcher_core.item_catalog import Lane


def benchmark_core_game(
    num_frames: int = 100000,
    seed: int = 42
) -> dict:
    """
    Benchmark raw CoreGame frame updates without Gym overhead.

    The lane is switched at random every 10 frames; games that end are
    restarted so every frame is a live one.

    Args:
        num_frames: Number of frames to run.
        seed: Random seed.

    Returns:
        Dict with timing results.
    """
    config = load_config()
    game = CoreGame(config=config, seed=seed)
    rng = np.random.default_rng(seed)
    lanes = rng.integers(0, 3, size=num_frames // 10 + 1)

    game.start(seed=seed)
    restarts = 0
    start = time.perf_counter()

    for frame in range(num_frames):
        if frame % 10 == 0:
            game.on_lane_selected(Lane.from_index(int(lanes[frame // 10])))
        game.update()
        if not game.is_active:
            game.start()
            restarts += 1

    elapsed = time.perf_counter() - start
    game.stop()

    return {
        "mode": "core_game",
        "num_steps": num_frames,
        "restarts": restarts,
        "elapsed_seconds": elapsed,
        "steps_per_second": num_frames / elapsed,
        "ms_per_step": (elapsed * 1000) / num_frames
    }


def benchmark_single_env(
    num_steps: int = 10000,
    seed: int = 42
) -> dict:
    """
    Benchmark LaneCatcherEnv steps (observation packing included).

    Args:
        num_steps: Number of steps to run.
        seed: Random seed.

    Returns:
        Dict with timing results.
    """
    env = LaneCatcherEnv()
    rng = np.random.default_rng(seed)

    obs, _ = env.reset(seed=seed)
    start = time.perf_counter()

    for _ in range(num_steps):
        obs, _, terminated, truncated, _ = env.step(int(rng.integers(0, 3)))
        if terminated or truncated:
            obs, _ = env.reset()

    elapsed = time.perf_counter() - start
    env.close()

    return {
        "mode": "single_env",
        "num_steps": num_steps,
        "elapsed_seconds": elapsed,
        "steps_per_second": num_steps / elapsed,
        "ms_per_step": (elapsed * 1000) / num_steps
    }


def run_all_benchmarks(frames: int = 100000, steps: int = 10000) -> list:
    """Run both benchmarks and print a summary table."""
    results = []

    print("=" * 60)
    print("FRUIT CATCHER PERFORMANCE BENCHMARK")
    print("=" * 60)
    print()

    print("Benchmarking CoreGame (raw frames)...")
    result = benchmark_core_game(num_frames=frames)
    results.append(result)
    print(f"  Frames/sec: {result['steps_per_second']:.1f}")
    print(f"  Restarts:   {result['restarts']}")
    print()

    print("Benchmarking LaneCatcherEnv (single)...")
    result = benchmark_single_env(num_steps=steps)
    results.append(result)
    print(f"  Steps/sec: {result['steps_per_second']:.1f}")
    print(f"  ms/step:   {result['ms_per_step']:.3f}")
    print()

    print("=" * 60)
    print(f"{'Mode':<20} {'Steps/s':>12} {'ms/step':>10}")
    print("-" * 44)
    for r in results:
        print(f"{r['mode']:<20} {r['steps_per_second']:>12.1f} {r['ms_per_step']:>10.4f}")

    return results


def main():
    parser = argparse.ArgumentParser(description="Benchmark Fruit Catcher performance")
    parser.add_argument("--frames", type=int, default=100000, help="Engine frames to run")
    parser.add_argument("--steps", type=int, default=10000, help="Env steps to run")
    parser.add_argument("--quick", action="store_true", help="Quick benchmark (fewer steps)")

    args = parser.parse_args()

    if args.quick:
        run_all_benchmarks(frames=10000, steps=1000)
    else:
        run_all_benchmarks(frames=args.frames, steps=args.steps)

    return 0


if __name__ == "__main__":
    sys.exit(main())
