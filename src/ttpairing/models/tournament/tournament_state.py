"""Serializable snapshot of a running tournament."""

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

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from dateutil.parser import isoparse

from ttpairing.constants import SAVE_FORMAT_VERSION
from ttpairing.exceptions import TournamentStateException
from ttpairing.models.pairing import Pairing
from ttpairing.models.participant import Participant
from ttpairing.models.tournament.tournament_config import TournamentConfig


@dataclass
class TournamentState:
    """Everything needed to resume a tournament.

    Pairings reference participants by their position in ``participants``.
    The current round is stored as positions in ``full_history`` so that the
    restored current-round pairings are the very objects in the history.
    """

    config: TournamentConfig
    participants: List[Participant] = field(default_factory=list)
    full_history: List[Pairing] = field(default_factory=list)
    current_round: List[Pairing] = field(default_factory=list)
    round_number: int = 0
    finished: bool = False
    saved_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        index_of = {p: i for i, p in enumerate(self.participants)}
        history_index = {id(p): i for i, p in enumerate(self.full_history)}
        try:
            current = [history_index[id(p)] for p in self.current_round]
        except KeyError as exc:
            raise TournamentStateException(
                "Current round contains a pairing missing from the history"
            ) from exc

        saved_at = self.saved_at or datetime.now(timezone.utc)
        return {
            "version": SAVE_FORMAT_VERSION,
            "saved_at": saved_at.isoformat(),
            "config": self.config.to_dict(),
            "round_number": self.round_number,
            "finished": self.finished,
            "participants": [p.to_dict() for p in self.participants],
            "full_history": [p.to_dict(index_of) for p in self.full_history],
            "current_round": current,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentState":
        """Rebuild a snapshot.

        Raises:
            TournamentStateException: If the save format version is unknown
        """
        version = data.get("version")
        if version != SAVE_FORMAT_VERSION:
            raise TournamentStateException(f"Unsupported save format version: {version!r}")

        participants = [Participant.from_dict(p) for p in data["participants"]]
        history = [Pairing.from_dict(p, participants) for p in data["full_history"]]
        current = [history[i] for i in data.get("current_round", [])]
        saved_at = data.get("saved_at")
        return cls(
            config=TournamentConfig.from_dict(data["config"]),
            participants=participants,
            full_history=history,
            current_round=current,
            round_number=int(data.get("round_number", 0)),
            finished=bool(data.get("finished", False)),
            saved_at=isoparse(saved_at) if saved_at else None,
        )
