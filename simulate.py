import argparse
import os
import time

import numpy as np
from loguru import logger

from ludo_rules import Color, Simulator, config
from ludo_rules.simulator import first_chooser, random_chooser
from ludo_rules.types import default_players


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Play seeded Ludo games with the rules engine and report standings"
    )
    parser.add_argument("--games", type=int, default=10, help="Number of games to play")
    parser.add_argument("--seed", type=int, default=42, help="Seed of the first game")
    parser.add_argument(
        "--num-players",
        type=int,
        default=int(os.getenv("NUM_PLAYERS", 4)),
        help="Number of players in each game",
    )
    parser.add_argument(
        "--chooser",
        choices=["random", "first"],
        default="random",
        help="How tokens are picked among the legal ones",
    )
    parser.add_argument(
        "--max-turns",
        type=int,
        default=config.MAX_TURNS,
        help="Safety cap on rolls per game",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    players = default_players(args.num_players)
    chooser = random_chooser if args.chooser == "random" else first_chooser

    # rows: games, cols: color id -> finishing place (0 = absent)
    places = np.zeros((args.games, config.MAX_PLAYERS), dtype=np.int64)
    lengths = np.zeros(args.games, dtype=np.int64)

    start_time = time.time()
    for g in range(args.games):
        sim = Simulator(seed=args.seed + g, players=players, chooser=chooser)
        final = sim.run(args.max_turns)
        lengths[g] = sum(1 for a in sim.actions if a[0] == "roll")
        for place, color in enumerate(final.standings(), start=1):
            places[g, int(color)] = place
        logger.info(
            f"Game {g}: {' > '.join(c.name for c in final.standings())} "
            f"after {lengths[g]} rolls"
        )

    elapsed = time.time() - start_time
    logger.info(
        f"{args.games} games in {elapsed:.2f}s; rolls per game "
        f"mean={lengths.mean():.1f} std={lengths.std():.1f}"
    )
    for color in players:
        col = places[:, int(color)]
        wins = int(np.sum(col == 1))
        avg_place = float(col[col > 0].mean()) if np.any(col > 0) else float("nan")
        logger.info(f"{Color(color).name:>6}: wins={wins} avg_place={avg_place:.2f}")


if __name__ == "__main__":
    main()
