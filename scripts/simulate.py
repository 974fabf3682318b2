#!/usr/bin/env python3
"""
Invaders - Headless Round Simulation

Run rounds without a display, driven by a scripted pilot that wanders
left and right and fires whenever it can. Useful for checking balance
changes in the config.

Usage:
    python scripts/simulate.py                      # 10 rounds
    python scripts/simulate.py --rounds 100 --seed 7
    python scripts/simulate.py --rounds 50 --json   # Machine-readable output
"""
import sys
import json
import random
import argparse
import statistics
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from invaders.games.registry import GameRegistry
from invaders.utils.config_loader import load_game_config
from invaders.utils.high_scores import MemoryHighScoreStore
from invaders.utils.logging_setup import setup_logging

GAME_ID = "space_invaders"
FRAME_TIME = 1.0 / 60.0


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Invaders - Simulate rounds headlessly",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/simulate.py
  python scripts/simulate.py --rounds 100 --seed 7
  python scripts/simulate.py --rounds 50 --json
"""
    )

    parser.add_argument(
        "--rounds",
        type=int,
        default=10,
        help="Number of rounds to simulate (default: 10)"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for invader fire and the pilot (default: unseeded)"
    )
    parser.add_argument(
        "--max-seconds",
        type=float,
        default=600.0,
        help="Give up on a round after this much simulated time (default: 600)"
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output results in JSON format"
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Minimal output"
    )

    return parser.parse_args()


def run_round(game, pilot: random.Random, max_seconds: float) -> dict:
    """Play one round with the scripted pilot."""
    game.reset()
    now = 0.0
    done = False
    velocity = 0.0

    while not done and now < max_seconds:
        # Change heading about twice a second
        if pilot.random() < 2 * FRAME_TIME:
            velocity = pilot.uniform(-1.0, 1.0)
        game.set_velocity(velocity)
        game.queue_fire()

        _, done, _ = game.step(now)
        now += FRAME_TIME

    return {
        "score": game.get_score(),
        "outcome": game.outcome.value,
        "seconds": round(now, 2),
    }


def summarize(rounds: list) -> dict:
    """Outcome counts and score statistics over finished and cut-off rounds."""
    scores = [r["score"] for r in rounds]
    return {
        "game": GAME_ID,
        "rounds": len(rounds),
        "won": sum(1 for r in rounds if r["outcome"] == "won"),
        "lost": sum(1 for r in rounds if r["outcome"] == "lost"),
        "unfinished": sum(1 for r in rounds if r["outcome"] == "in_progress"),
        "scores": {
            "mean": statistics.mean(scores) if scores else 0,
            "median": statistics.median(scores) if scores else 0,
            "min": min(scores) if scores else 0,
            "max": max(scores) if scores else 0,
        },
    }


def main():
    """Main entry point."""
    args = parse_args()

    config = load_game_config(GAME_ID)
    setup_logging(config.logging)

    store = MemoryHighScoreStore()
    game = GameRegistry.create_game(
        GAME_ID,
        config=config.game,
        rng=random.Random(args.seed),
        score_store=store,
    )
    pilot = random.Random(args.seed)

    if not args.quiet and not args.json:
        print("=" * 60)
        print("Invaders - Headless Simulation")
        print("=" * 60)
        print(f"Rounds: {args.rounds}")
        print("=" * 60)

    rounds = []
    for index in range(args.rounds):
        result = run_round(game, pilot, args.max_seconds)
        rounds.append(result)
        if not args.quiet and not args.json:
            print(f"[Round {index + 1}] {result['outcome']:>11} "
                  f"score {result['score']:5d} after {result['seconds']:.1f}s")

    results = summarize(rounds)
    results["best"] = store.get_best()
    results["config"] = config.game.to_dict()

    if args.json:
        print(json.dumps(results, indent=2))
    else:
        print("\n" + "=" * 60)
        print("Simulation Results")
        print("=" * 60)
        print(f"Won / Lost:   {results['won']} / {results['lost']}")
        if results['unfinished']:
            print(f"Unfinished:   {results['unfinished']} (hit --max-seconds)")
        print(f"Mean Score:   {results['scores']['mean']:.2f}")
        print(f"Median Score: {results['scores']['median']:.2f}")
        print(f"Best Score:   {results['best']}")
        print("=" * 60)


if __name__ == "__main__":
    main()
