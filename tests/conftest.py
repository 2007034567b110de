import pytest

from helpers import full_lineup, make_round, make_team


@pytest.fixture
def team_a():
    return make_team("A", "Alpha", "A")


@pytest.fixture
def team_b():
    return make_team("B", "Bravo", "B")


@pytest.fixture
def players(team_a, team_b):
    return {p.id: p for p in [*team_a.players, *team_b.players]}


@pytest.fixture
def rosters(team_a, team_b):
    return team_a.player_ids, team_b.player_ids


@pytest.fixture
def full_round():
    return make_round(full_lineup())
