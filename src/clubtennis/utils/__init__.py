"""Shared helpers for Club Tennis."""

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

import logging
import os
from datetime import datetime, timezone
from typing import Optional

from clubtennis.constants import LOG_FORMAT, LOG_LEVEL_ENV_VAR

_PACKAGE_LOGGER = "clubtennis"


def setup_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """Return a module logger, configuring the package logger on first use.

    Args:
        name: Logger name, normally ``__name__`` of the calling module
        level: Optional level name overriding ``CLUBTENNIS_LOG_LEVEL``

    Returns:
        The configured logger
    """
    root = logging.getLogger(_PACKAGE_LOGGER)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        root.setLevel(os.environ.get(LOG_LEVEL_ENV_VAR, "WARNING").upper())
    if level:
        root.setLevel(level.upper())
    return logging.getLogger(name)


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


__all__ = ["setup_logger", "utc_now"]
