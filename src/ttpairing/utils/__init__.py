"""Shared utilities for TT Pairing."""

# TT Pairing
# Copyright (C) 2025  TT Pairing developers
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

from ttpairing.constants import DEFAULT_LOG_LEVEL, LOG_FORMAT, LOG_LEVEL_ENV_VAR

_ROOT_LOGGER_NAME = "ttpairing"


def _configure_root_logger() -> logging.Logger:
    """Attach the package handler once and apply the configured level."""
    root = logging.getLogger(_ROOT_LOGGER_NAME)
    if not any(getattr(h, "_ttpairing", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._ttpairing = True
        root.addHandler(handler)

    level_name = os.environ.get(LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL).upper()
    level = logging.getLevelName(level_name)
    root.setLevel(level if isinstance(level, int) else logging.INFO)
    return root


def setup_logger(name: str) -> logging.Logger:
    """Return a module logger that propagates to the package logger.

    Args:
        name: Usually ``__name__`` of the calling module

    Returns:
        A configured :class:`logging.Logger`
    """
    _configure_root_logger()
    return logging.getLogger(name)


__all__ = ["setup_logger"]
