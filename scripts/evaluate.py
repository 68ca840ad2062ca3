#!/usr/bin/env python3
"""
Bobble - Headless Policy Evaluation Script

Play a number of Bubble Shooter levels with a simple aiming policy and
report score statistics. Useful as a smoke test and a baseline.

Usage:
    python scripts/evaluate.py                          # 20 levels, random aim
    python scripts/evaluate.py --policy center --episodes 50
    python scripts/evaluate.py --seed 7 --json          # Machine-readable output
"""
import sys
import json
import random
import argparse
import statistics
from pathlib import Path
from typing import Callable, Dict, Any

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from bobble.utils.config_loader import load_game_config
from bobble.games.registry import GameRegistry

GAME_ID = "bubble_shooter"


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Bobble - Evaluate a simple aiming policy",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/evaluate.py
  python scripts/evaluate.py --policy center --episodes 50
  python scripts/evaluate.py --seed 7 --json
"""
    )

    parser.add_argument(
        "--policy",
        choices=["random", "center"],
        default="random",
        help="Aiming policy (default: random)"
    )
    parser.add_argument(
        "--episodes",
        type=int,
        default=20,
        help="Number of levels to play (default: 20)"
    )
    parser.add_argument(
        "--max-shots",
        type=int,
        default=300,
        help="Give up on a level after this many actions (default: 300)"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for levels and the policy"
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


def make_policy(name: str, action_size: int, rng: random.Random) -> Callable[[], int]:
    """Build a policy; the last action (swap) is never chosen."""
    aim_actions = action_size - 1
    if name == "center":
        return lambda: aim_actions // 2
    return lambda: rng.randrange(aim_actions)


def evaluate_policy(policy_name: str, episodes: int, max_shots: int,
                    seed=None, quiet: bool = False) -> Dict[str, Any]:
    """Play ``episodes`` levels and collect per-level results."""
    config = load_game_config(GAME_ID)
    game_config = GameRegistry.build_config(GAME_ID, config.game)

    env = GameRegistry.create_env(GAME_ID, config=game_config, seed=seed)
    policy = make_policy(policy_name, env.action_size, random.Random(seed))

    scores = []
    rewards = []
    wins = 0
    max_difficulty = 1

    for ep in range(episodes):
        env.reset()
        done = False
        total_reward = 0.0
        info: Dict[str, Any] = {}

        for _ in range(max_shots):
            _, reward, done, info = env.step(policy())
            total_reward += reward
            if done:
                break

        if info.get("phase") == "WIN":
            wins += 1
        scores.append(info.get("score", 0))
        rewards.append(total_reward)
        max_difficulty = max(max_difficulty, info.get("difficulty", 1))

        if not quiet and (ep + 1) % 5 == 0:
            print(f"Episode {ep + 1}/{episodes}: Score {info.get('score', 0)} "
                  f"({info.get('phase', '?')})")

    env.close()

    return {
        "game": GAME_ID,
        "policy": policy_name,
        "episodes": episodes,
        "wins": wins,
        "max_difficulty": max_difficulty,
        "scores": {
            "mean": statistics.mean(scores),
            "median": statistics.median(scores),
            "stdev": statistics.stdev(scores) if len(scores) > 1 else 0,
            "min": min(scores),
            "max": max(scores),
        },
        "mean_reward": statistics.mean(rewards),
    }


def main():
    """Main entry point."""
    args = parse_args()

    if args.episodes < 1:
        print("Error: --episodes must be at least 1")
        sys.exit(1)

    if not args.quiet and not args.json:
        print("=" * 60)
        print("Bobble - Bubble Shooter Policy Evaluation")
        print("=" * 60)
        print(f"Policy: {args.policy}")
        print(f"Episodes: {args.episodes}")
        print("=" * 60)

    results = evaluate_policy(
        args.policy, args.episodes, args.max_shots,
        seed=args.seed, quiet=args.quiet or args.json
    )

    if args.json:
        results["success"] = True
        print(json.dumps(results, indent=2))
    else:
        print("\n" + "=" * 60)
        print("Evaluation Results")
        print("=" * 60)
        print(f"Levels won:   {results['wins']}/{results['episodes']}")
        print(f"Max level:    {results['max_difficulty']}")
        print(f"Mean Score:   {results['scores']['mean']:.2f}")
        print(f"Median Score: {results['scores']['median']:.2f}")
        print(f"Std Dev:      {results['scores']['stdev']:.2f}")
        print(f"Min Score:    {results['scores']['min']}")
        print(f"Max Score:    {results['scores']['max']}")
        print(f"Mean Reward:  {results['mean_reward']:.2f}")
        print("=" * 60)


if __name__ == "__main__":
    main()
