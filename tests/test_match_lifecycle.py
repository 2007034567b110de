from dataclasses import replace
from datetime import datetime, timezone

import pytest

from shuttleleague.constants import TEAM1, TEAM2
from shuttleleague.controllers.match_lifecycle import (
    ERR_ACTIVE_CONFLICT,
    ERR_NO_WINNER,
    ERR_NOT_STAFFED,
    calculate_match_winner,
    can_complete_round,
    can_start_match,
    complete_match,
    complete_round,
    record_game_score,
    start_match,
    stop_match,
)
from shuttleleague.exceptions import (
    InvalidGameScoreException,
    MatchNotFoundException,
    MatchStateException,
    RoundStateException,
)
from shuttleleague.models import Game, MatchState

NOW = datetime(2025, 3, 1, 10, 0, tzinfo=timezone.utc)


def _started(round_data, rosters, players, match_id="m1"):
    return start_match(round_data, match_id, *rosters, players, now=NOW)


def _played(round_data, rosters, players, match_id="m1"):
    round_data = _started(round_data, rosters, players, match_id)
    round_data = record_game_score(round_data, match_id, 0, 21, 18)
    round_data = record_game_score(round_data, match_id, 1, 21, 19)
    return complete_match(round_data, match_id, now=NOW)


def test_calculate_match_winner():
    assert calculate_match_winner([]) is None
    assert calculate_match_winner([Game(21, 10, TEAM1)]) is None
    assert calculate_match_winner([Game(21, 10, TEAM1), Game(21, 5, TEAM1)]) == TEAM1
    assert (
        calculate_match_winner(
            [Game(21, 10, TEAM1), Game(10, 21, TEAM2), Game(20, 22, TEAM2)]
        )
        == TEAM2
    )


def test_start_match(full_round, rosters, players):
    started = _started(full_round, rosters, players)
    match = started.require_match("m1")
    assert match.state is MatchState.IN_PLAY
    assert match.started_at == NOW
    # Input snapshot is untouched
    assert full_round.require_match("m1").state is MatchState.BUILDING


def test_start_requires_full_sides(full_round, rosters, players):
    match = full_round.require_match("m1")
    short = full_round.with_match(replace(match, team2_players=["B1"]))
    result = can_start_match(short, "m1", *rosters, players)
    assert result.error_message == ERR_NOT_STAFFED


def test_start_requires_valid_assignments(full_round, rosters, players):
    # A2 and B2 only play m1 and m4
    missing = replace(
        full_round,
        matches=[m for m in full_round.matches if m.id not in ("m1", "m4")],
    )
    result = can_start_match(missing, "m2", *rosters, players)
    assert result.error_message == (
        "Alpha 2 must play at least 1 match\nBravo 2 must play at least 1 match"
    )
    with pytest.raises(MatchStateException):
        start_match(missing, "m2", *rosters, players)


def test_start_blocked_by_active_match(full_round, rosters, players):
    started = _started(full_round, rosters, players, "m1")
    # m3 shares A1 and B1 with m1
    result = can_start_match(started, "m3", *rosters, players)
    assert result.error_message == ERR_ACTIVE_CONFLICT
    # m2 has no player in common
    assert can_start_match(started, "m2", *rosters, players)


def test_cannot_start_twice(full_round, rosters, players):
    started = _started(full_round, rosters, players)
    assert not can_start_match(started, "m1", *rosters, players)


def test_record_scores_and_winner(full_round, rosters, players):
    round_data = _started(full_round, rosters, players)
    round_data = record_game_score(round_data, "m1", 0, 21, 18)
    assert round_data.require_match("m1").winner is None
    round_data = record_game_score(round_data, "m1", 1, 15, 21)
    round_data = record_game_score(round_data, "m1", 2, 30, 29)

    match = round_data.require_match("m1")
    assert [g.winner for g in match.games] == [TEAM1, TEAM2, TEAM1]
    assert match.winner == TEAM1


def test_record_pads_missing_games(full_round, rosters, players):
    round_data = _started(full_round, rosters, players)
    round_data = record_game_score(round_data, "m1", 1, 21, 3)
    games = round_data.require_match("m1").games
    assert games == [Game(), Game(21, 3, TEAM1)]


def test_record_treats_missing_scores_as_zero(full_round, rosters, players):
    round_data = _started(full_round, rosters, players)
    round_data = record_game_score(round_data, "m1", 0, None, 21)
    assert round_data.require_match("m1").games[0] == Game(0, 21, TEAM2)


def test_record_rejects_illegal_scores(full_round, rosters, players):
    round_data = _started(full_round, rosters, players)
    with pytest.raises(InvalidGameScoreException, match="must win by 2"):
        record_game_score(round_data, "m1", 0, 21, 20)
    with pytest.raises(MatchStateException):
        record_game_score(round_data, "m1", 3, 21, 0)


def test_record_requires_match_in_play(full_round):
    with pytest.raises(MatchStateException):
        record_game_score(full_round, "m1", 0, 21, 0)
    with pytest.raises(MatchNotFoundException):
        record_game_score(full_round, "nope", 0, 21, 0)


def test_complete_match(full_round, rosters, players):
    round_data = _played(full_round, rosters, players)
    match = round_data.require_match("m1")
    assert match.state is MatchState.COMPLETED
    assert match.is_completed


def test_complete_needs_winner(full_round, rosters, players):
    round_data = _started(full_round, rosters, players)
    with pytest.raises(MatchStateException, match=ERR_NO_WINNER):
        complete_match(round_data, "m1")


def test_stop_match_rolls_back(full_round, rosters, players):
    round_data = _started(full_round, rosters, players)
    round_data = record_game_score(round_data, "m1", 0, 21, 5)
    stopped = stop_match(round_data, "m1").require_match("m1")
    assert stopped.state is MatchState.BUILDING
    assert stopped.games == []
    assert stopped.winner is None


def test_completed_match_cannot_be_stopped(full_round, rosters, players):
    round_data = _played(full_round, rosters, players)
    with pytest.raises(MatchStateException):
        stop_match(round_data, "m1")


def test_complete_round(full_round, rosters, players):
    in_play = _started(full_round, rosters, players)
    assert not can_complete_round(in_play, *rosters, players)
    with pytest.raises(RoundStateException):
        complete_round(in_play, *rosters, players)

    done = complete_round(_played(full_round, rosters, players), *rosters, players)
    assert done.completed
    assert not can_complete_round(done, *rosters, players)
    assert not can_start_match(done, "m2", *rosters, players)
