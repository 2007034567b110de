"""Builders shared by the test modules."""

from datetime import datetime, timedelta, timezone

from shuttleleague.constants import (
    FEMALE,
    MALE,
    MENS_DOUBLES,
    MIXED_DOUBLES,
    WOMENS_DOUBLES,
)
from shuttleleague.controllers.match_lifecycle import calculate_match_winner
from shuttleleague.models import Game, Match, Player, PlayerLevel, Round, Team
from shuttleleague.validation.game_score import validate_game_score

START = datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc)


def make_team(team_id, name, prefix, level=PlayerLevel.TRUC_CO):
    """Team of four men (``<prefix>1``-``<prefix>4``) and two women (5, 6)."""
    players = [
        Player(
            id=f"{prefix}{n}",
            name=f"{name} {n}",
            gender=MALE if n <= 4 else FEMALE,
            level=level,
        )
        for n in range(1, 7)
    ]
    return Team(id=team_id, name=name, players=players)


def make_match(match_id, match_type, team1=(), team2=(), scores=(), state="building"):
    """Build a match; ``scores`` are (team1, team2) game scores."""
    games = []
    for score1, score2 in scores:
        games.append(Game(score1, score2, validate_game_score(score1, score2).winner))
    started_at = completed_at = None
    if state in ("in_play", "completed"):
        started_at = START
    if state == "completed":
        completed_at = START + timedelta(minutes=40)
    return Match(
        id=match_id,
        type=match_type,
        team1_players=list(team1),
        team2_players=list(team2),
        games=games,
        winner=calculate_match_winner(games),
        started_at=started_at,
        completed_at=completed_at,
    )


def full_lineup(p1="A", p2="B"):
    """The six template matches with a lineup that passes every round rule.

    Splits into ``(m1, m2, m6)`` and ``(m3, m4, m5)``.
    """

    def side(prefix, *numbers):
        return [f"{prefix}{n}" for n in numbers]

    slots = [
        ("m1", MENS_DOUBLES, (1, 2)),
        ("m2", MENS_DOUBLES, (3, 4)),
        ("m3", MENS_DOUBLES, (1, 3)),
        ("m4", MIXED_DOUBLES, (2, 5)),
        ("m5", MIXED_DOUBLES, (4, 6)),
        ("m6", WOMENS_DOUBLES, (5, 6)),
    ]
    return [
        make_match(match_id, match_type, side(p1, *nums), side(p2, *nums))
        for match_id, match_type, nums in slots
    ]


def make_round(matches, round_id="r1", team1_id="A", team2_id="B", completed=False):
    return Round(
        id=round_id,
        name=f"Round {round_id}",
        team1_id=team1_id,
        team2_id=team2_id,
        matches=list(matches),
        completed=completed,
    )


def won_match(match_id, team1_wins, scores=None):
    """A completed Men's Doubles match won by the given side."""
    if scores is None:
        scores = [(21, 15), (21, 17)] if team1_wins else [(15, 21), (17, 21)]
    return make_match(
        match_id,
        MENS_DOUBLES,
        ["x1", "x2"],
        ["y1", "y2"],
        scores=scores,
        state="completed",
    )
