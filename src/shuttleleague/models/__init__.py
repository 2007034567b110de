from shuttleleague.models.league import League, load_league, save_league
from shuttleleague.models.match import Game, Match, MatchState
from shuttleleague.models.player import (
    Player,
    PlayerLevel,
    Team,
    calculate_team_strength,
)
from shuttleleague.models.round import Round, SubRounds
from shuttleleague.models.standing import HeadToHeadStat, TeamStanding

__all__ = [
    "Game",
    "HeadToHeadStat",
    "League",
    "Match",
    "MatchState",
    "Player",
    "PlayerLevel",
    "Round",
    "SubRounds",
    "Team",
    "TeamStanding",
    "calculate_team_strength",
    "load_league",
    "save_league",
]
