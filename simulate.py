import argparse
import random
import sys
import time

import numpy as np
from loguru import logger

from ludo_match import Match, Rejected, config


def seed_environ(seed_value: int = None):
    random.seed(seed_value)
    np.random.seed(seed_value)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Simulate all-robot Ludo matches")
    parser.add_argument("--games", type=int, default=10, help="Matches to play")
    parser.add_argument(
        "--players", type=int, default=4, choices=(2, 3, 4), help="Robots per match"
    )
    parser.add_argument("--team-mode", action="store_true", help="Play 2v2 teams")
    parser.add_argument("--seed", type=int, default=42, help="Dice seed")
    parser.add_argument(
        "--max-actions",
        type=int,
        default=5000,
        help="Safety cap on robot actions per match",
    )
    parser.add_argument("--log-level", type=str, default="INFO")
    return parser.parse_args()


def play_match(
    num_players: int, team_mode: bool, rng: random.Random, max_actions: int
) -> tuple[Match, int]:
    match = Match(team_mode=team_mode, rng=rng)
    for _ in range(num_players):
        match.add_robot_player()
    match.start()

    actions = 0
    while not match.over and actions < max_actions:
        result = match.play_robot_turn()
        if isinstance(result, Rejected):
            logger.error(f"Robot turn rejected: {result.reason.value}")
            break
        actions += 1
    return match, actions


def main() -> None:
    args = parse_args()
    logger.remove()
    logger.add(sys.stderr, level=args.log_level.upper())

    seed_environ(args.seed)
    rng = random.Random(args.seed)

    print("--- Ludo Match Simulation ---")
    print(
        f"Games: {args.games}, players: {args.players}, team mode: {args.team_mode}, "
        f"finish grants bonus: {config.FINISH_GRANTS_BONUS}"
    )

    start_time = time.time()
    action_counts: list[int] = []
    wins: dict[str, int] = {}
    unfinished = 0

    for game_idx in range(args.games):
        match, actions = play_match(args.players, args.team_mode, rng, args.max_actions)
        action_counts.append(actions)
        if not match.over:
            unfinished += 1
            print(f"Game {game_idx + 1}: no result after {actions} actions")
            continue
        if match.winning_team is not None:
            label = match.winning_team.name
        else:
            label = match.winner.color.label
        wins[label] = wins.get(label, 0) + 1
        print(f"Game {game_idx + 1}: {label} won after {actions} actions")

    counts = np.asarray(action_counts, dtype=np.int64)
    print("\n--- SIMULATION COMPLETE ---")
    print(f"Simulation Time: {time.time() - start_time:.2f} seconds")
    if counts.size:
        print(f"Actions per game: mean {counts.mean():.1f}, min {counts.min()}, max {counts.max()}")
    for label, count in sorted(wins.items(), key=lambda kv: -kv[1]):
        print(f"  {label}: {count} wins")
    if unfinished:
        print(f"  unfinished: {unfinished}")


if __name__ == "__main__":
    main()
