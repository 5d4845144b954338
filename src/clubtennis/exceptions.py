"""Exceptions for use in Club Tennis"""

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

from typing import List, Optional


# ========== Base Application Exception ==========


class ClubTennisException(Exception):
    """Base exception for all Club Tennis errors.

    All custom exceptions in the application should inherit from this class.
    This enables catching all application-specific errors with a single except clause.
    """

    pass


# ========== Result Exceptions ==========


class ResultException(ClubTennisException):
    """Base exception for result recording errors."""

    pass


class InvalidResultException(ResultException):
    """Raised when a score fails validation or no winner can be derived.

    The individual violations are kept on ``errors`` so they can be shown
    to the person entering the score.
    """

    def __init__(self, errors: List[str], message: Optional[str] = None):
        self.errors = list(errors)
        super().__init__(message or "; ".join(self.errors))


class RepeatPairingException(ResultException):
    """Raised when two players already have a result in the same group and phase."""

    pass


class InvalidPairingException(ResultException):
    """Raised when two players are not a legal pairing for the selected round."""

    pass


class ResultNotFoundException(ResultException):
    """Raised when a requested match result cannot be found."""

    pass


# ========== Tournament Exceptions ==========


class TournamentException(ClubTennisException):
    """Base exception for tournament-related errors."""

    pass


class TournamentStateException(TournamentException):
    """Raised when tournament is in an invalid state for the requested operation."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(ClubTennisException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException):
    """Raised when configuration data is invalid."""

    pass


# ========== File/Resource Exceptions ==========


class ResourceException(ClubTennisException):
    """Base exception for resource-related errors."""

    pass


class FileLoadException(ResourceException):
    """Raised when a file cannot be loaded."""

    pass


class FileSaveException(ResourceException):
    """Raised when a file cannot be saved."""

    pass
