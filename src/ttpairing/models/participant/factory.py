"""Factory helpers for building validated participants."""

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

from typing import Any, Dict, List, Optional, Union

from ttpairing.exceptions import InvalidParticipantDataException
from ttpairing.models.participant.participant import Participant
from ttpairing.utils import setup_logger
from ttpairing.utils.validation import validate_name, validate_rating

logger = setup_logger(__name__)


class ParticipantFactory:
    """Factory for creating Participant instances.

    Encapsulates input validation so that every participant entering a
    tournament has a non-empty name and club and a sane rating.

    Example:
        >>> factory = ParticipantFactory()
        >>> participant = factory.create_participant("Timo", "Boll", "Borussia", 2600)
    """

    def __init__(self, strict: bool = True):
        """Initialize the ParticipantFactory.

        Args:
            strict: Whether batch creation raises on the first invalid entry
                instead of skipping it
        """
        self.strict = strict

    def create_participant(
        self,
        first_name: str,
        last_name: str,
        club: str,
        rating: Optional[Union[int, str]] = None,
    ) -> Participant:
        """Create a participant after validating every field.

        Raises:
            InvalidParticipantDataException: If any field is invalid
        """
        errors = self._validate_data(first_name, last_name, club, rating)
        if errors:
            raise InvalidParticipantDataException(
                f"Invalid participant data: {'; '.join(errors)}"
            )

        return Participant(
            first_name=str(first_name).strip(),
            last_name=str(last_name).strip(),
            club=str(club).strip(),
            rating=int(validate_rating(rating).sanitized_value or "0"),
        )

    def create_from_dict(self, data: Dict[str, Any]) -> Participant:
        """Create a participant from dictionary data.

        Raises:
            InvalidParticipantDataException: If required fields are missing
        """
        return self.create_participant(
            first_name=data.get("first_name", ""),
            last_name=data.get("last_name", ""),
            club=data.get("club", ""),
            rating=data.get("rating"),
        )

    def create_batch(self, participant_data: List[Dict[str, Any]]) -> List[Participant]:
        """Create several participants, rejecting duplicate identities.

        In non-strict mode invalid or duplicate entries are logged and skipped.
        """
        participants: List[Participant] = []
        seen = set()
        for data in participant_data:
            try:
                participant = self.create_from_dict(data)
                if participant in seen:
                    raise InvalidParticipantDataException(
                        f"Duplicate participant: {participant}"
                    )
            except InvalidParticipantDataException as e:
                if self.strict:
                    raise
                logger.warning(f"Skipping invalid participant data: {e}")
                continue
            seen.add(participant)
            participants.append(participant)

        return participants

    def _validate_data(
        self,
        first_name: Optional[str],
        last_name: Optional[str],
        club: Optional[str],
        rating: Optional[Union[int, str]],
    ) -> List[str]:
        """Validate participant data and return list of errors."""
        errors = []

        for value, label in (
            (first_name, "First name"),
            (last_name, "Last name"),
            (club, "Club"),
        ):
            result = validate_name(value, field_name=label)
            if not result:
                errors.append(result.error_message or f"Invalid {label.lower()}")

        rating_result = validate_rating(rating)
        if not rating_result:
            errors.append(rating_result.error_message or "Invalid rating")

        return errors


# Global factory instance for convenience
default_factory = ParticipantFactory(strict=True)


def create_participant(**kwargs) -> Participant:
    """Convenience function to create a participant using the default factory.

    Example:
        >>> participant = create_participant(
        ...     first_name="Timo", last_name="Boll", club="Borussia", rating=2600
        ... )
    """
    return default_factory.create_participant(**kwargs)
