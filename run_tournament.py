"""
Script for running tournaments between the Othello AI tiers.
"""
import os
import argparse
import random
import numpy as np
from datetime import datetime

from othello.config import Config, get_default_config
from othello.arena import Arena, ArenaPlayer, ELORatingSystem
from othello.ai import Difficulty, create_selector, calculate_difficulty
from othello.game import Board
from othello.logger import setup_logger


def set_seeds(seed: int):
    """Set random seeds for reproducibility."""
    random.seed(seed)
    np.random.seed(seed)


def main():
    parser = argparse.ArgumentParser(description='Run a tournament between the Othello AI tiers')
    parser.add_argument('--config', type=str, default='configs/default_config.json',
                        help='Path to config file')
    parser.add_argument('--rounds', type=int, default=None,
                        help='Number of rounds to play (overrides the config)')
    parser.add_argument('--time-budget', type=float, default=None,
                        help='Per-depth time budget of the Hard tier in seconds')
    parser.add_argument('--output-dir', type=str, default=None,
                        help='Directory to save tournament results')
    parser.add_argument('--verbose', action='store_true',
                        help='Show progress and the leaderboard after every round')
    args = parser.parse_args()

    if os.path.exists(args.config):
        print(f"Loading configuration from {args.config}")
        config = Config.load(args.config)
    else:
        print(f"Config file {args.config} not found, using default configuration")
        config = get_default_config()

    if args.rounds is not None:
        config.arena.rounds = args.rounds
    if args.time_budget is not None:
        config.search.time_budget = args.time_budget
    if args.output_dir is not None:
        config.arena.output_dir = args.output_dir
    if args.verbose:
        config.logging.verbose = True

    set_seeds(config.seed)
    os.makedirs(config.arena.output_dir, exist_ok=True)
    logger = setup_logger(config)

    elo_file = os.path.join(config.arena.output_dir, config.arena.elo_file)
    if os.path.exists(elo_file):
        print(f"Loading ELO ratings from {elo_file}")
        elo = ELORatingSystem.load_ratings(elo_file)
    else:
        print("Starting new ELO rating system")
        elo = ELORatingSystem(k=config.arena.k_factor, initial_rating=config.arena.initial_rating)

    arena = Arena(elo_system=elo)
    for difficulty in Difficulty:
        selector = create_selector(difficulty,
                                   max_depth=config.search.max_depth,
                                   time_budget=config.search.time_budget,
                                   rng=random.Random(config.seed))
        arena.add_player(ArenaPlayer(difficulty.value.lower(), selector))

    # Throughput of the search from the opening position
    difficulty_metric = calculate_difficulty(Board(), depth=config.search.max_depth)
    logger.log_metrics({'nodes_per_second': difficulty_metric}, step=0, prefix='search/')

    print(f"\nStarting tournament with {config.arena.rounds} rounds...")
    results = arena.run_tournament(rounds=config.arena.rounds, verbose=config.logging.verbose)

    for step, entry in enumerate(results['leaderboard']):
        logger.log_metrics({'rating': entry['rating']}, step=step,
                           prefix=f"arena/{entry['player_id']}/")

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    results_file = os.path.join(config.arena.output_dir, f'tournament_{timestamp}.json')
    results.update({
        'timestamp': timestamp,
        'participants': list(arena.players.keys()),
        'nodes_per_second': difficulty_metric
    })
    arena.save_results(results, results_file, elo_file=elo_file)
    logger.close()

    print(f"\nTournament completed! Results saved to {results_file}")
    print("\nFinal Leaderboard:")
    arena.print_leaderboard()


if __name__ == '__main__':
    main()
