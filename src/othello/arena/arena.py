"""
Arena for running tournaments between AI tiers with ELO rating.

Used to calibrate the difficulty tiers against each other.
"""
import json
import time
import logging
from datetime import datetime
from typing import Dict, List, Optional

from tqdm import tqdm

from ..ai.selectors import MoveSelector
from ..game.board import Board, Cell

logger = logging.getLogger(__name__)


class ELORatingSystem:
    """ELO rating system for tracking tier strength."""

    def __init__(self, k: float = 32, initial_rating: float = 1500.0):
        """
        Initialize the ELO rating system.

        Args:
            k: K-factor, controls how much ratings change after each game
            initial_rating: Initial rating for new players
        """
        self.k = k
        self.initial_rating = initial_rating
        self.ratings: Dict[str, float] = {}
        self.games_played: Dict[str, int] = {}
        self.history: List[Dict] = []

    def add_player(self, player_id: str, rating: Optional[float] = None):
        if player_id not in self.ratings:
            self.ratings[player_id] = rating if rating is not None else self.initial_rating
            self.games_played[player_id] = 0

    def get_rating(self, player_id: str) -> float:
        return self.ratings.get(player_id, self.initial_rating)

    @staticmethod
    def get_expected_score(rating_a: float, rating_b: float) -> float:
        """Calculate the expected score of player A against player B."""
        return 1.0 / (1.0 + 10.0 ** ((rating_b - rating_a) / 400.0))

    def update_ratings(self, player_a: str, player_b: str, score_a: float) -> Dict:
        """
        Update ratings after a game.

        Args:
            player_a: ID of player A
            player_b: ID of player B
            score_a: Score for player A (1.0 for win, 0.5 for draw, 0.0 for loss)

        Returns:
            The recorded game entry
        """
        self.add_player(player_a)
        self.add_player(player_b)

        rating_a = self.ratings[player_a]
        rating_b = self.ratings[player_b]
        expected_a = self.get_expected_score(rating_a, rating_b)

        new_rating_a = rating_a + self.k * (score_a - expected_a)
        new_rating_b = rating_b + self.k * ((1.0 - score_a) - (1.0 - expected_a))

        self.ratings[player_a] = new_rating_a
        self.ratings[player_b] = new_rating_b
        self.games_played[player_a] += 1
        self.games_played[player_b] += 1

        game_record = {
            'timestamp': time.time(),
            'player_a': player_a,
            'player_b': player_b,
            'score_a': score_a,
            'rating_a_before': rating_a,
            'rating_b_before': rating_b,
            'rating_a_after': new_rating_a,
            'rating_b_after': new_rating_b
        }
        self.history.append(game_record)
        return game_record

    def get_leaderboard(self) -> List[Dict]:
        """Get the current leaderboard sorted by rating."""
        leaderboard = [
            {'player_id': player_id, 'rating': rating, 'games_played': self.games_played[player_id]}
            for player_id, rating in self.ratings.items()
        ]
        leaderboard.sort(key=lambda x: x['rating'], reverse=True)
        return leaderboard

    def save_ratings(self, filepath: str):
        """Save the current ratings to a JSON file."""
        data = {
            'k': self.k,
            'initial_rating': self.initial_rating,
            'ratings': self.ratings,
            'games_played': self.games_played,
            'history': self.history,
            'last_updated': datetime.now().isoformat()
        }
        with open(filepath, 'w') as f:
            json.dump(data, f, indent=2)

    @classmethod
    def load_ratings(cls, filepath: str) -> 'ELORatingSystem':
        """Load ratings from a JSON file."""
        with open(filepath, 'r') as f:
            data = json.load(f)

        elo = cls(k=data['k'], initial_rating=data['initial_rating'])
        elo.ratings = {k: float(v) for k, v in data['ratings'].items()}
        elo.games_played = {k: int(v) for k, v in data['games_played'].items()}
        elo.history = data.get('history', [])
        return elo


class ArenaPlayer:
    """A named move selector taking part in the arena."""

    def __init__(self, player_id: str, selector: MoveSelector):
        self.player_id = player_id
        self.selector = selector

    def get_move(self, board: Board):
        return self.selector.select_move(board)


class Arena:
    """Arena for running round-robin tournaments between selectors."""

    def __init__(self, elo_system: Optional[ELORatingSystem] = None):
        self.elo = elo_system if elo_system is not None else ELORatingSystem()
        self.players: Dict[str, ArenaPlayer] = {}

    def add_player(self, player: ArenaPlayer):
        self.players[player.player_id] = player
        self.elo.add_player(player.player_id)

    def play_game(self, dark_id: str, light_id: str, verbose: bool = False) -> float:
        """
        Play a single game between two players.

        A player without legal moves passes. The game ends after two
        consecutive passes or when the board is full.

        Args:
            dark_id: ID of the player moving first
            light_id: ID of the second player
            verbose: Whether to print each move

        Returns:
            1.0 if dark wins, 0.5 for a draw, 0.0 if light wins
        """
        if dark_id not in self.players or light_id not in self.players:
            raise ValueError(f"One or both players not found: {dark_id}, {light_id}")

        players = {Cell.DARK: self.players[dark_id], Cell.LIGHT: self.players[light_id]}
        board = Board()
        passes = 0

        while passes < 2 and not board.is_board_full():
            current = players[board.current_player]
            move = current.get_move(board)

            if move is None:
                passes += 1
                if verbose:
                    print(f"{current.player_id} passes")
            else:
                passes = 0
                board = board.apply_move(move.row, move.col, board.current_player)
                if verbose:
                    print(f"{current.player_id} plays at ({move.row}, {move.col})")
                    print(board)
            board = board.switch_turn()

        dark_count, light_count = board.get_score()
        logger.debug("%s vs %s finished %d-%d", dark_id, light_id, dark_count, light_count)

        if dark_count > light_count:
            return 1.0
        if light_count > dark_count:
            return 0.0
        return 0.5

    def run_tournament(self, rounds: int = 10, verbose: bool = False) -> Dict:
        """
        Run a round-robin tournament between all players.

        Args:
            rounds: Number of rounds (each pair meets once per round)
            verbose: Whether to print game results

        Returns:
            Dictionary with tournament results
        """
        player_ids = list(self.players.keys())
        if len(player_ids) < 2:
            raise ValueError("Need at least 2 players for a tournament")

        pairs = [(player_ids[i], player_ids[j])
                 for i in range(len(player_ids)) for j in range(i + 1, len(player_ids))]

        results = {
            'games_played': 0,
            'matchups': {
                f"{a}_vs_{b}": {'player1': a, 'player2': b, 'games_played': 0,
                                'wins1': 0, 'wins2': 0, 'draws': 0}
                for a, b in pairs
            },
            'start_time': time.time(),
            'rounds': []
        }

        with tqdm(total=rounds * len(pairs), desc="Tournament", disable=not verbose) as progress:
            for round_num in range(rounds):
                round_results = {'round': round_num + 1, 'games': []}

                for a, b in pairs:
                    # Alternate who moves first
                    dark, light = (a, b) if round_num % 2 == 0 else (b, a)
                    result = self.play_game(dark, light)
                    record = self.elo.update_ratings(dark, light, result)

                    matchup = results['matchups'][f"{a}_vs_{b}"]
                    matchup['games_played'] += 1
                    score_a = result if dark == a else 1.0 - result
                    if score_a == 1.0:
                        matchup['wins1'] += 1
                    elif score_a == 0.0:
                        matchup['wins2'] += 1
                    else:
                        matchup['draws'] += 1

                    results['games_played'] += 1
                    round_results['games'].append({
                        'dark': dark,
                        'light': light,
                        'result': result,
                        'elo_dark_after': record['rating_a_after'],
                        'elo_light_after': record['rating_b_after']
                    })
                    progress.update(1)

                results['rounds'].append(round_results)
                if verbose:
                    print(f"\n--- After Round {round_num + 1} ---")
                    self.print_leaderboard()

        results['end_time'] = time.time()
        results['duration'] = results['end_time'] - results['start_time']
        results['leaderboard'] = self.elo.get_leaderboard()
        return results

    def print_leaderboard(self):
        """Print the current leaderboard."""
        leaderboard = self.elo.get_leaderboard()
        print("\nCurrent Leaderboard:")
        print("Rank  Player ID               Rating  Games Played")
        print("----  ---------------------  -------  ------------")

        for i, player in enumerate(leaderboard, 1):
            print(f"{i:4d}  {player['player_id']:22s}  {player['rating']:7.1f}  {player['games_played']:12d}")

    def save_results(self, results: Dict, filepath: str, elo_file: Optional[str] = None):
        """
        Save tournament results and the ELO table.

        Args:
            results: Dictionary returned by run_tournament
            filepath: Path of the results JSON file
            elo_file: Where to write the ratings (default: next to the results)
        """
        if elo_file is None:
            elo_file = filepath.rsplit('.', 1)[0] + '_elo.json'
        self.elo.save_ratings(elo_file)
        with open(filepath, 'w') as f:
            json.dump(results, f, indent=2)
