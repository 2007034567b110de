from shuttleleague.constants import MENS_DOUBLES, MIXED_DOUBLES, TEAM1, TEAM2
from shuttleleague.validation.round_rules import (
    ERR_MATCH_CAP,
    ERR_MATCH_NOT_FOUND,
    ERR_MIXED_CAP,
    ERR_NOT_ON_ROSTER,
    ERR_PAIR_USED,
    count_player_matches,
    duplicate_pairs,
    validate_player_addition_to_match,
    validate_round_player_assignments,
)

from helpers import make_match, make_round

# ========== Full-round check ==========


def test_full_lineup_is_valid(full_round, rosters, players):
    result = validate_round_player_assignments(full_round, *rosters, players)
    assert result.is_valid
    assert result.errors == []
    assert result.error_message is None


def test_four_players_one_match_each_is_valid():
    round_data = make_round(
        [make_match("m1", MENS_DOUBLES, ["A1", "A2"], ["B1", "B2"])]
    )
    result = validate_round_player_assignments(round_data, ["A1", "A2"], ["B1", "B2"])
    assert result
    assert result.errors == []


def test_unfielded_player_reported_once(players):
    round_data = make_round(
        [make_match("m1", MENS_DOUBLES, ["A1", "A2"], ["B1", "B2"])]
    )
    result = validate_round_player_assignments(
        round_data, ["A1", "A2", "A3"], ["B1", "B2"], players
    )
    assert not result
    assert result.errors == ["Alpha 3 must play at least 1 match"]


def test_names_fall_back_to_ids():
    round_data = make_round([])
    result = validate_round_player_assignments(round_data, ["A1"], [])
    assert result.errors == ["A1 must play at least 1 match"]


def test_duplicate_pair_in_either_order_and_side(players):
    round_data = make_round(
        [
            make_match("m1", MENS_DOUBLES, ["A1", "A2"], ["B1", "B2"]),
            make_match("m2", MENS_DOUBLES, ["A3", "A4"], ["B2", "B1"]),
        ]
    )
    result = validate_round_player_assignments(
        round_data, ["A1", "A2", "A3", "A4"], ["B1", "B2"], players
    )
    assert not result
    assert result.errors == [
        "The pair of players (Bravo 1, Bravo 2) is used in more than one match"
    ]
    assert duplicate_pairs(round_data) == [(("B1", "B2"), ["m1", "m2"])]


def test_every_violation_is_collected(players):
    round_data = make_round(
        [
            make_match("m1", MENS_DOUBLES, ["A1", "A2"], ["B1", "B2"]),
            make_match("m2", MENS_DOUBLES, ["A1", "A3"], ["B1", "B3"]),
            make_match("m3", MENS_DOUBLES, ["A1", "A4"], ["B1", "B2"]),
            make_match("m4", MIXED_DOUBLES, ["A2", "A5"], ["B4", "B5"]),
            make_match("m5", MIXED_DOUBLES, ["A4", "A5"], ["B3", "B6"]),
        ]
    )
    result = validate_round_player_assignments(
        round_data,
        ["A1", "A2", "A3", "A4", "A5", "A6"],
        ["B1", "B2", "B3", "B4", "B5", "B6"],
        players,
    )
    assert result.errors == [
        "Alpha 6 must play at least 1 match",
        "Alpha 1 is playing in 3 matches (maximum is 2)",
        "Bravo 1 is playing in 3 matches (maximum is 2)",
        "Alpha 5 is playing in 2 Mixed Doubles matches (maximum is 1)",
        "The pair of players (Bravo 1, Bravo 2) is used in more than one match",
    ]
    assert result.error_message == "\n".join(result.errors)


def test_roster_duplicates_collapse():
    round_data = make_round([])
    result = validate_round_player_assignments(round_data, ["A1", "A1"], ["A1"])
    assert result.errors == ["A1 must play at least 1 match"]


def test_full_check_does_not_mutate(full_round, rosters, players):
    before = full_round.to_dict()
    first = validate_round_player_assignments(full_round, *rosters, players)
    second = validate_round_player_assignments(full_round, *rosters, players)
    assert first == second
    assert full_round.to_dict() == before


# ========== Incremental check ==========


def test_count_player_matches(full_round):
    assert count_player_matches(full_round, "A1") == 2
    assert count_player_matches(full_round, "A5", MIXED_DOUBLES) == 1
    assert count_player_matches(full_round, "nobody") == 0


def test_addition_to_unknown_match():
    result = validate_player_addition_to_match(make_round([]), "nope", TEAM1, "A1")
    assert result.error_message == ERR_MATCH_NOT_FOUND


def test_addition_respects_match_cap():
    round_data = make_round(
        [
            make_match("m1", MENS_DOUBLES, ["A1", "A2"]),
            make_match("m2", MENS_DOUBLES, ["A1", "A3"]),
            make_match("m3", MENS_DOUBLES),
        ]
    )
    result = validate_player_addition_to_match(round_data, "m3", TEAM1, "A1")
    assert result.error_message == ERR_MATCH_CAP
    assert result.error_message == (
        "Player is already playing in 2 matches (maximum is 2)"
    )


def test_addition_respects_mixed_cap():
    round_data = make_round(
        [
            make_match("m1", MIXED_DOUBLES, ["A1", "A5"]),
            make_match("m2", MIXED_DOUBLES),
            make_match("m3", MENS_DOUBLES),
        ]
    )
    result = validate_player_addition_to_match(round_data, "m2", TEAM1, "A1")
    assert result.error_message == ERR_MIXED_CAP
    assert validate_player_addition_to_match(round_data, "m3", TEAM1, "A1")


def test_addition_rejects_reused_pair():
    round_data = make_round(
        [
            make_match("m1", MENS_DOUBLES, ["A2", "A1"]),
            make_match("m2", MENS_DOUBLES, ["A1"]),
        ]
    )
    result = validate_player_addition_to_match(round_data, "m2", TEAM1, "A2")
    assert result.error_message == ERR_PAIR_USED
    assert validate_player_addition_to_match(round_data, "m2", TEAM1, "A3")


def test_addition_checks_side_roster():
    round_data = make_round([make_match("m1", MENS_DOUBLES)])
    result = validate_player_addition_to_match(
        round_data, "m1", TEAM2, "A1", ["A1"], ["B1"]
    )
    assert result.error_message == ERR_NOT_ON_ROSTER
    assert validate_player_addition_to_match(
        round_data, "m1", TEAM1, "A1", ["A1"], ["B1"]
    )


def test_readding_same_player_is_a_no_op():
    round_data = make_round(
        [
            make_match("m1", MENS_DOUBLES, ["A1", "A2"]),
            make_match("m2", MENS_DOUBLES, ["A1", "A3"]),
        ]
    )
    assert validate_player_addition_to_match(round_data, "m2", TEAM1, "A1")
