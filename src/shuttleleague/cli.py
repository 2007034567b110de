"""Command-line interface for Shuttle League.

Reads a JSON league snapshot and runs the rules engine over it: the league
table, round assignment checks, sub-round arrangement and game score
checks. Can also generate a random, fully played league.
"""

# Shuttle League
# Copyright (C) 2025  Shuttle League developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import argparse
import logging
import sys
from typing import List, Optional, Sequence

from shuttleleague import __version__
from shuttleleague.exceptions import FileLoadException, ShuttleLeagueException
from shuttleleague.models.league import League, load_league, save_league
from shuttleleague.models.round import Round
from shuttleleague.testing.rlg import RandomLeagueGenerator, RLGConfig
from shuttleleague.tournament.standings import StandingsCalculator
from shuttleleague.tournament.sub_rounds import arrange_sub_rounds, group_matches
from shuttleleague.utils import set_log_level, setup_logger
from shuttleleague.validation.game_score import validate_game_score
from shuttleleague.validation.round_rules import validate_round_player_assignments

logger = setup_logger(__name__)

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_LOAD_ERROR = 2


def _describe_match(league: League, round_data: Round, match_id: str) -> str:
    names = league.player_map()
    match = round_data.require_match(match_id)

    def side(player_ids: List[str]) -> str:
        return " & ".join(names[p].name if p in names else p for p in player_ids)

    return (
        f"{match.type}: {side(match.team1_players)} vs {side(match.team2_players)}"
    )


# ========== Commands ==========


def run_standings(args: argparse.Namespace) -> int:
    """Print the league table, optionally with head-to-head records."""
    league = load_league(args.file)
    calculator = StandingsCalculator(league.teams, league.rounds)
    table = calculator.standings()

    print(
        f"{'#':>3}  {'Team':<24} {'Rnd':>3} {'W':>3} {'L':>3} {'Pts':>4} "
        f"{'GD':>4} {'PD':>5}"
    )
    print("-" * 56)
    for rank, row in enumerate(table, start=1):
        print(
            f"{rank:>3}  {row.team_name:<24} {row.rounds_played:>3} {row.wins:>3} "
            f"{row.losses:>3} {row.total_points:>4} "
            f"{calculator.game_differential(row.team_id):>+4} "
            f"{calculator.point_differential(row.team_id):>+5}"
        )

    if args.head_to_head:
        names = {t.id: t.name for t in league.teams}
        stats = calculator.head_to_head()
        for row in table:
            print(f"\n{row.team_name}")
            if not stats.get(row.team_id):
                print("  (no completed matches)")
                continue
            for stat in stats[row.team_id]:
                print(
                    f"  vs {names.get(stat.opponent_id, stat.opponent_id):<24} "
                    f"M {stat.matches_won}-{stat.matches_lost}  "
                    f"G {stat.games_won}-{stat.games_lost}  "
                    f"P {stat.points_for}-{stat.points_against}"
                )
    return EXIT_OK


def run_validate_round(args: argparse.Namespace) -> int:
    """Print every assignment error of one round."""
    league = load_league(args.file)
    round_data = league.get_round(args.round_id)
    team1_ids, team2_ids = league.round_rosters(round_data)

    result = validate_round_player_assignments(
        round_data, team1_ids, team2_ids, league.round_players(round_data)
    )
    if result:
        print(f"{round_data.name}: all player assignments are valid")
        return EXIT_OK

    print(f"{round_data.name}: {len(result.errors)} problem(s)")
    for error in result.errors:
        print(f"  - {error}")
    return EXIT_INVALID


def run_arrange(args: argparse.Namespace) -> int:
    """Print the sub-round split of one round."""
    league = load_league(args.file)
    round_data = league.get_round(args.round_id)

    split = arrange_sub_rounds(round_data)
    if split is None:
        print("No valid sub-round arrangement")
        return EXIT_INVALID

    for number, group in enumerate(split.groups, start=1):
        print(f"Sub-round {number}:")
        for match in group_matches(round_data, group):
            print(f"  {match.id}  {_describe_match(league, round_data, match.id)}")
    return EXIT_OK


def run_check_score(args: argparse.Namespace) -> int:
    """Print the verdict for one game score."""
    result = validate_game_score(args.score1, args.score2)
    if not result:
        print(f"Invalid: {result.error_message}")
        return EXIT_INVALID
    if result.is_decided:
        print(f"Valid: {result.winner} wins")
    else:
        print("Valid: game in progress")
    return EXIT_OK


def run_generate(args: argparse.Namespace) -> int:
    """Generate a random league and write or print it."""
    config = RLGConfig(
        num_teams=args.teams,
        num_rounds=args.rounds,
        completed_rounds=args.completed,
        seed=args.seed,
    )
    generator = RandomLeagueGenerator(config)
    league = generator.generate_league()

    if args.output:
        save_league(league, args.output)
        print(
            f"Wrote {len(league.teams)} teams and {len(league.rounds)} rounds "
            f"to {args.output}"
        )
    else:
        print(generator.export_json_format(league))
    return EXIT_OK


# ========== Parser ==========


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI.

    Returns:
        Configured argument parser
    """
    parser = argparse.ArgumentParser(
        prog="shuttle-league",
        description="Rules engine for a team badminton league",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # League table with head-to-head records
  shuttle-league standings league.json --head-to-head

  # Check a round's lineup and its sub-round split
  shuttle-league validate-round league.json round-01
  shuttle-league arrange league.json round-01

  # Is 22-20 a finished game?
  shuttle-league check-score 22 20

  # Six teams, half the season played
  shuttle-league generate --teams 6 --completed 7 --seed 1 --output league.json
        """,
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    standings = subparsers.add_parser("standings", help="Print the league table")
    standings.add_argument("file", help="League snapshot (JSON)")
    standings.add_argument(
        "--head-to-head",
        action="store_true",
        help="Also print each team's record against every opponent",
    )
    standings.set_defaults(func=run_standings)

    validate = subparsers.add_parser(
        "validate-round", help="Check the player assignments of a round"
    )
    validate.add_argument("file", help="League snapshot (JSON)")
    validate.add_argument("round_id", help="Id of the round to check")
    validate.set_defaults(func=run_validate_round)

    arrange = subparsers.add_parser(
        "arrange", help="Split a round's six matches into two sub-rounds"
    )
    arrange.add_argument("file", help="League snapshot (JSON)")
    arrange.add_argument("round_id", help="Id of the round to arrange")
    arrange.set_defaults(func=run_arrange)

    check = subparsers.add_parser("check-score", help="Validate one game score")
    check.add_argument("score1", type=int, help="Points of team1")
    check.add_argument("score2", type=int, help="Points of team2")
    check.set_defaults(func=run_check_score)

    generate = subparsers.add_parser("generate", help="Generate a random league")
    generate.add_argument(
        "--teams", type=int, default=4, help="Number of teams (default: 4)"
    )
    generate.add_argument(
        "--rounds",
        type=int,
        default=None,
        help="Number of rounds (default: one full round robin)",
    )
    generate.add_argument(
        "--completed",
        type=int,
        default=None,
        help="Number of rounds to play and complete (default: all)",
    )
    generate.add_argument("--seed", type=int, help="Random seed for reproducibility")
    generate.add_argument("--output", help="Write the snapshot here instead of stdout")
    generate.set_defaults(func=run_generate)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for CLI.

    Returns:
        Exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    # Configure logging
    if args.debug:
        set_log_level(logging.DEBUG)
    elif args.verbose:
        set_log_level(logging.INFO)

    try:
        return args.func(args)
    except FileLoadException as e:
        logger.debug("Load failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_LOAD_ERROR
    except ShuttleLeagueException as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_INVALID


if __name__ == "__main__":
    sys.exit(main())
