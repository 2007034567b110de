from dataclasses import replace

from shuttleleague.models import Team
from shuttleleague.tournament.standings import (
    StandingsCalculator,
    calculate_standings,
    get_head_to_head_stats,
)

from helpers import make_round, won_match


def _teams(*names):
    return [Team(id=team_id, name=name) for team_id, name in names]


def _round(round_id, team1_id, team2_id, results, completed=True):
    """``results`` is a list of True/False (team1 wins) or (team1_wins, scores)."""
    matches = []
    for n, result in enumerate(results, start=1):
        if isinstance(result, tuple):
            matches.append(won_match(f"{round_id}-m{n}", *result))
        else:
            matches.append(won_match(f"{round_id}-m{n}", result))
    return make_round(matches, round_id, team1_id, team2_id, completed=completed)


def test_three_two_round():
    teams = _teams(("t1", "One"), ("t2", "Two"))
    rounds = [_round("r1", "t1", "t2", [True, True, True, False, False])]

    first, second = calculate_standings(teams, rounds)
    assert first.team_id == "t1"
    assert (first.wins, first.losses, first.total_points) == (3, 2, 3)
    assert (second.wins, second.losses, second.total_points) == (2, 3, 2)
    assert first.rounds_played == second.rounds_played == 1


def test_game_differential_breaks_equal_points():
    teams = _teams(("t1", "Aces"), ("t2", "Birdies"))
    rounds = [
        _round(
            "r1",
            "t1",
            "t2",
            [
                (True, [(21, 10), (19, 21), (21, 10)]),
                (False, [(10, 21), (10, 21)]),
            ],
        )
    ]
    table = calculate_standings(teams, rounds)
    assert [row.total_points for row in table] == [1, 1]
    # Birdies: 3 games won, 2 lost
    assert [row.team_name for row in table] == ["Birdies", "Aces"]


def test_point_differential_breaks_equal_games():
    teams = _teams(("t1", "Aces"), ("t2", "Birdies"))
    rounds = [
        _round(
            "r1",
            "t1",
            "t2",
            [
                (True, [(21, 5), (21, 5)]),
                (False, [(19, 21), (19, 21)]),
            ],
        )
    ]
    calculator = StandingsCalculator(teams, rounds)
    assert calculator.game_differential("t1") == 0
    assert calculator.point_differential("t1") == 28
    assert [row.team_name for row in calculator.standings()] == ["Aces", "Birdies"]


def test_full_tie_is_alphabetical():
    teams = _teams(("t1", "Zephyrs"), ("t2", "Albatross"), ("t3", "Mallards"))
    assert [row.team_name for row in calculate_standings(teams, [])] == [
        "Albatross",
        "Mallards",
        "Zephyrs",
    ]


def test_head_to_head_among_tied_teams():
    close_win = [(21, 19), (21, 19)]
    close_loss = [(19, 21), (19, 21)]
    teams = _teams(
        ("a", "Zebras"), ("b", "Albatross"), ("c", "Cranes"), ("d", "Dodos")
    )
    rounds = [
        _round("r1", "a", "b", [(True, close_win)]),
        _round("r2", "a", "c", [(False, close_loss)]),
        _round("r3", "b", "d", [(True, close_win)]),
    ]
    table = calculate_standings(teams, rounds)
    # Zebras and Albatross tie on points, games and points; Zebras won the meeting
    assert [row.team_name for row in table] == [
        "Cranes",
        "Zebras",
        "Albatross",
        "Dodos",
    ]


def test_only_completed_rounds_and_matches_count():
    teams = _teams(("t1", "One"), ("t2", "Two"))
    unfinished = won_match("r1-m2", True)
    unfinished = replace(unfinished, completed_at=None)
    counted = _round("r1", "t1", "t2", [True])
    counted = replace(counted, matches=[*counted.matches, unfinished])
    open_round = _round("r2", "t1", "t2", [True, True], completed=False)

    table = calculate_standings(teams, [counted, open_round])
    table = {row.team_id: row for row in table}
    assert table["t1"].wins == 1
    assert table["t2"].losses == 1
    assert table["t1"].rounds_played == 1


def test_round_without_counted_matches_is_not_played():
    teams = _teams(("t1", "One"), ("t2", "Two"))
    empty = make_round([], "r1", "t1", "t2", completed=True)
    table = calculate_standings(teams, [empty])
    assert all(row.rounds_played == 0 for row in table)


def test_rounds_with_unknown_teams_are_skipped():
    teams = _teams(("t1", "One"))
    table = calculate_standings(teams, [_round("r1", "t1", "ghost", [True])])
    assert table[0].wins == 0


def test_head_to_head_stats():
    teams = _teams(("t1", "One"), ("t2", "Two"), ("t3", "Three"), ("t4", "Four"))
    rounds = [
        _round("r1", "t1", "t2", [True, False, True]),
        _round("r2", "t3", "t1", [True]),
    ]
    stats = get_head_to_head_stats(teams, rounds)

    assert set(stats) == {"t1", "t2", "t3", "t4"}
    assert stats["t4"] == []
    # Ordered by opponent name: Three before Two
    assert [s.opponent_id for s in stats["t1"]] == ["t3", "t2"]

    against_two = stats["t1"][1]
    assert (against_two.matches_won, against_two.matches_lost) == (2, 1)
    assert (against_two.games_won, against_two.games_lost) == (4, 2)
    assert against_two.points_for == 21 * 4 + 15 + 17
    assert against_two.match_diff == 1


def test_calculation_leaves_inputs_untouched():
    teams = _teams(("t1", "One"), ("t2", "Two"))
    rounds = [_round("r1", "t1", "t2", [True, False, True])]
    before = [r.to_dict() for r in rounds]
    assert calculate_standings(teams, rounds) == calculate_standings(teams, rounds)
    assert [r.to_dict() for r in rounds] == before
