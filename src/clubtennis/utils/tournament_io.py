"""Loading and saving tournament files."""

# Club Tennis
# Copyright (C) 2025  Club Tennis developers
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

import json
from pathlib import Path
from typing import Union

from clubtennis.constants import SAVE_FILE_EXTENSION
from clubtennis.exceptions import (
    ClubTennisException,
    FileLoadException,
    FileSaveException,
)
from clubtennis.models.tournament import Tournament
from clubtennis.utils import setup_logger

logger = setup_logger(__name__)


def tournament_file_path(path: Union[str, Path]) -> Path:
    """Path of a tournament file, with the .json extension added if missing."""
    path = Path(path)
    if not path.suffix:
        path = path.with_suffix(SAVE_FILE_EXTENSION)
    return path


def load_tournament(path: Union[str, Path]) -> Tournament:
    """Read a tournament file.

    Args:
        path: JSON file written by save_tournament; the .json extension
            may be left out

    Returns:
        The tournament

    Raises:
        FileLoadException: If the file is missing, unreadable or malformed
    """
    path = tournament_file_path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise FileLoadException(f"Could not load tournament from {path}: {e}") from e

    try:
        return Tournament.from_dict(data)
    except (ClubTennisException, KeyError, TypeError, ValueError) as e:
        raise FileLoadException(f"Invalid tournament file {path}: {e}") from e


def save_tournament(tournament: Tournament, path: Union[str, Path]) -> Path:
    """Write a tournament file, adding the .json extension if missing.

    Returns:
        The path written

    Raises:
        FileSaveException: If the file cannot be written
    """
    path = tournament_file_path(path)
    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(tournament.to_dict(), f, indent=4, ensure_ascii=False)
    except OSError as e:
        raise FileSaveException(f"Could not save tournament to {path}: {e}") from e
    logger.info(f"Tournament saved to {path}")
    return path
