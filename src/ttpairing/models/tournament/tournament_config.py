"""Tournament configuration settings."""

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

from dataclasses import dataclass
from typing import Any, Dict

from ttpairing.constants import (
    DEFAULT_SEARCH_BUDGET,
    DEFAULT_TABLE_COUNT,
    DEFAULT_TOURNAMENT_NAME,
)
from ttpairing.exceptions import InvalidConfigurationException
from ttpairing.models.enums import TournamentMode


@dataclass
class TournamentConfig:
    """Tournament configuration settings.

    Attributes
    ----------
    name : str
        Tournament name.
    table_count : int
        Number of tables, reused cyclically within a round.
    mode : TournamentMode
        Scheduling discipline, Swiss or round robin.
    search_budget : int
        Node limit for each backtracking search of the pairing engine.
    tournament_over : bool
        Indicates whether the tournament is complete.
    """

    name: str = DEFAULT_TOURNAMENT_NAME
    table_count: int = DEFAULT_TABLE_COUNT
    mode: TournamentMode = TournamentMode.SWISS
    search_budget: int = DEFAULT_SEARCH_BUDGET
    # Is the tournament complete?
    tournament_over: bool = False

    def validate(self) -> None:
        """Raise InvalidConfigurationException on the first bad setting."""
        if not isinstance(self.name, str) or not self.name.strip():
            raise InvalidConfigurationException("Tournament name is required")
        if not isinstance(self.table_count, int) or self.table_count < 1:
            raise InvalidConfigurationException(
                f"Table count must be a positive whole number: {self.table_count!r}"
            )
        if not isinstance(self.search_budget, int) or self.search_budget < 1:
            raise InvalidConfigurationException(
                f"Search budget must be a positive whole number: {self.search_budget!r}"
            )
        if not isinstance(self.mode, TournamentMode):
            raise InvalidConfigurationException(f"Unknown mode: {self.mode!r}")

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "name": self.name,
            "table_count": self.table_count,
            "mode": self.mode.value,
            "search_budget": self.search_budget,
            "tournament_over": self.tournament_over,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentConfig":
        """Deserialize configuration from dictionary.

        Raises:
            InvalidConfigurationException: If a value is missing or invalid
        """
        try:
            mode = TournamentMode.from_value(data.get("mode", TournamentMode.SWISS))
        except ValueError as exc:
            raise InvalidConfigurationException(str(exc)) from exc
        config = cls(
            name=data.get("name", DEFAULT_TOURNAMENT_NAME),
            table_count=data.get("table_count", DEFAULT_TABLE_COUNT),
            mode=mode,
            search_budget=data.get("search_budget", DEFAULT_SEARCH_BUDGET),
            tournament_over=bool(data.get("tournament_over", False)),
        )
        config.validate()
        return config
