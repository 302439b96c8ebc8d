"""Saving and loading tournaments as JSON files."""

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

import json
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Union

from ttpairing.constants import SAVE_FILE_EXTENSION
from ttpairing.exceptions import FileLoadException, FileSaveException, TTPairingException
from ttpairing.models.tournament import Tournament, TournamentState
from ttpairing.utils import setup_logger

logger = setup_logger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


def _with_extension(path: PathLike) -> Path:
    path = Path(path)
    if path.suffix != SAVE_FILE_EXTENSION:
        path = path.with_name(path.name + SAVE_FILE_EXTENSION)
    return path


def save_tournament(tournament: Tournament, path: PathLike) -> Path:
    """Write ``tournament`` to ``path``.

    The data goes to a temporary file next to the target first, which then
    replaces the target, so an interrupted save never leaves a torn file.

    Returns:
        The path written, with the ``.json`` extension added if missing

    Raises:
        FileSaveException: If the snapshot cannot be built or written
    """
    target = _with_extension(path)
    try:
        state = tournament.to_state()
        state.saved_at = datetime.now(timezone.utc)
        data = state.to_dict()
        target.parent.mkdir(parents=True, exist_ok=True)
        fd, temp_name = tempfile.mkstemp(
            dir=target.parent, prefix=f".{target.stem}-", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=4)
            os.replace(temp_name, target)
        except BaseException:
            Path(temp_name).unlink(missing_ok=True)
            raise
    except (OSError, TypeError, ValueError, TTPairingException) as exc:
        logger.exception("Error saving tournament:")
        raise FileSaveException(f"Could not save tournament to {target}: {exc}") from exc

    tournament.saved_at = state.saved_at
    logger.info(f"Tournament saved to {target}")
    return target


def load_tournament(path: PathLike) -> Tournament:
    """Read a tournament written by :func:`save_tournament`.

    Raises:
        FileLoadException: If the file is missing, unreadable or malformed
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        tournament = Tournament.from_state(TournamentState.from_dict(data))
    except (
        OSError,
        ValueError,
        KeyError,
        IndexError,
        TypeError,
        TTPairingException,
    ) as exc:
        logger.exception("Error loading tournament:")
        raise FileLoadException(f"Could not load tournament from {path}: {exc}") from exc

    logger.info(f"Tournament loaded from {path}")
    return tournament


__all__ = ["load_tournament", "save_tournament"]
