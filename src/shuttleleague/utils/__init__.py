"""Shared helpers for Shuttle League: logging setup and id generation."""

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

import logging
import os
import uuid
from typing import Optional, Union

from shuttleleague.constants import LOG_LEVEL_ENV_VAR

ROOT_LOGGER_NAME = "shuttleleague"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_LOG_LEVEL = logging.WARNING


def _configure_root_logger() -> logging.Logger:
    """Install the package stream handler once and apply the env log level."""
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        root.setLevel(_level_from_env())
        root.propagate = False
    return root


def _level_from_env() -> int:
    value = os.environ.get(LOG_LEVEL_ENV_VAR)
    if not value:
        return DEFAULT_LOG_LEVEL
    level = logging.getLevelName(value.strip().upper())
    if isinstance(level, int):
        return level
    return DEFAULT_LOG_LEVEL


def setup_logger(name: str) -> logging.Logger:
    """Return a logger for a Shuttle League module.

    Args:
        name: Usually ``__name__`` of the calling module

    Returns:
        A child of the package root logger
    """
    _configure_root_logger()
    return logging.getLogger(name)


def set_log_level(level: Union[int, str]) -> None:
    """Change the level of every Shuttle League logger.

    Args:
        level: A ``logging`` level number or name (e.g. ``"DEBUG"``)
    """
    root = _configure_root_logger()
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    root.setLevel(level)


def generate_id(prefix: Optional[str] = None) -> str:
    """Generate a unique id, optionally prefixed (e.g. ``match-3f2a...``)."""
    token = uuid.uuid4().hex
    if prefix:
        return f"{prefix.lower()}-{token}"
    return token
