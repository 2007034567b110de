"""Exceptions for use in Shuttle League"""

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


# ========== Base Application Exception ==========


class ShuttleLeagueException(Exception):
    """Base exception for all Shuttle League errors.

    Validators never raise; these are raised by the state transition helpers
    and the record converters so callers can catch every application error
    with a single except clause.
    """

    pass


# ========== Match Exceptions ==========


class MatchException(ShuttleLeagueException):
    """Base exception for match-related errors."""

    pass


class MatchNotFoundException(MatchException):
    """Raised when a requested match does not exist in the round."""

    pass


class MatchStateException(MatchException):
    """Raised when a match is in the wrong state for the requested transition."""

    pass


class InvalidGameScoreException(MatchException):
    """Raised when a game score breaks the scoring law."""

    pass


# ========== Round Exceptions ==========


class RoundException(ShuttleLeagueException):
    """Base exception for round-related errors."""

    pass


class RoundNotFoundException(RoundException):
    """Raised when a requested round does not exist."""

    pass


class RoundStateException(RoundException):
    """Raised when a round is in an invalid state for the requested operation."""

    pass


class InvalidAssignmentException(RoundException):
    """Raised when a player or match cannot be added to a round."""

    pass


# ========== Player / Team Exceptions ==========


class PlayerException(ShuttleLeagueException):
    """Base exception for player-related errors."""

    pass


class PlayerNotFoundException(PlayerException):
    """Raised when a requested player cannot be found."""

    pass


class TeamException(ShuttleLeagueException):
    """Base exception for team-related errors."""

    pass


class TeamNotFoundException(TeamException):
    """Raised when a requested team cannot be found."""

    pass


# ========== Data Exceptions ==========


class DataException(ShuttleLeagueException):
    """Base exception for record and file errors."""

    pass


class InvalidRecordException(DataException):
    """Raised when a stored record is missing fields or holds bad values."""

    pass


class FileLoadException(DataException):
    """Raised when a league snapshot cannot be loaded."""

    pass


class FileSaveException(DataException):
    """Raised when a league snapshot cannot be saved."""

    pass
