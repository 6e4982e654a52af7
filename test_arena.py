"""
Test script for the tier calibration arena.
"""
import json
import os
import random
import tempfile

from othello.arena import Arena, ArenaPlayer, ELORatingSystem
from othello.ai.selectors import RandomSelector, HeuristicSelector


def test_elo_update():
    elo = ELORatingSystem(k=32, initial_rating=1500.0)
    record = elo.update_ratings("a", "b", 1.0)

    assert elo.get_rating("a") == 1516.0
    assert elo.get_rating("b") == 1484.0
    assert record['rating_a_before'] == 1500.0
    assert elo.games_played == {"a": 1, "b": 1}

    elo.update_ratings("a", "b", 0.5)
    assert elo.get_rating("a") < 1516.0, "A draw against a weaker player costs rating"
    assert [p['player_id'] for p in elo.get_leaderboard()] == ["a", "b"]


def test_elo_save_and_load():
    elo = ELORatingSystem(k=16)
    elo.update_ratings("easy", "medium", 0.0)

    with tempfile.TemporaryDirectory() as tmp_dir:
        path = os.path.join(tmp_dir, "elo.json")
        elo.save_ratings(path)
        loaded = ELORatingSystem.load_ratings(path)

    assert loaded.k == 16
    assert loaded.ratings == elo.ratings
    assert loaded.games_played == elo.games_played
    assert len(loaded.history) == 1


def test_play_game_heuristic_mirror():
    """Two deterministic players always produce the same result."""
    arena = Arena()
    arena.add_player(ArenaPlayer("medium_a", HeuristicSelector()))
    arena.add_player(ArenaPlayer("medium_b", HeuristicSelector()))

    first = arena.play_game("medium_a", "medium_b")
    second = arena.play_game("medium_a", "medium_b")
    assert first in (0.0, 0.5, 1.0)
    assert first == second


def test_play_game_unknown_player():
    arena = Arena()
    arena.add_player(ArenaPlayer("easy", RandomSelector(random.Random(0))))
    try:
        arena.play_game("easy", "missing")
    except ValueError:
        pass
    else:
        raise AssertionError("Unknown players should be rejected")


def test_run_tournament():
    arena = Arena(ELORatingSystem(k=32))
    arena.add_player(ArenaPlayer("easy", RandomSelector(random.Random(1))))
    arena.add_player(ArenaPlayer("medium", HeuristicSelector()))

    results = arena.run_tournament(rounds=2)

    assert results['games_played'] == 2
    matchup = results['matchups']['easy_vs_medium']
    assert matchup['wins1'] + matchup['wins2'] + matchup['draws'] == 2
    assert [g['dark'] for r in results['rounds'] for g in r['games']] == ["easy", "medium"]
    assert sum(p['games_played'] for p in results['leaderboard']) == 4
    assert abs(sum(arena.elo.ratings.values()) - 3000.0) < 1e-6, "ELO is zero-sum"


def test_save_results():
    arena = Arena(ELORatingSystem(k=32))
    arena.add_player(ArenaPlayer("easy", RandomSelector(random.Random(2))))
    arena.add_player(ArenaPlayer("medium", HeuristicSelector()))
    results = arena.run_tournament(rounds=1)

    with tempfile.TemporaryDirectory() as tmp_dir:
        results_file = os.path.join(tmp_dir, "tournament.json")
        elo_file = os.path.join(tmp_dir, "ratings.json")
        arena.save_results(results, results_file, elo_file=elo_file)

        with open(results_file) as f:
            saved = json.load(f)
        ratings = ELORatingSystem.load_ratings(elo_file)

        arena.save_results(results, results_file)
        assert os.path.exists(os.path.join(tmp_dir, "tournament_elo.json"))

    assert saved['games_played'] == 1
    assert [p['player_id'] for p in saved['leaderboard']] == \
        [p['player_id'] for p in results['leaderboard']]
    assert ratings.ratings == arena.elo.ratings


def test_run_tournament_needs_two_players():
    arena = Arena()
    arena.add_player(ArenaPlayer("medium", HeuristicSelector()))
    try:
        arena.run_tournament(rounds=1)
    except ValueError:
        pass
    else:
        raise AssertionError("A tournament needs two players")


if __name__ == "__main__":
    test_elo_update()
    test_elo_save_and_load()
    test_play_game_heuristic_mirror()
    test_play_game_unknown_player()
    test_run_tournament()
    test_save_results()
    test_run_tournament_needs_two_players()
    print("Arena tests completed successfully!")
