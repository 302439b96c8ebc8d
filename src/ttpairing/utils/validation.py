"""Validation utilities for TT Pairing.

This module provides reusable validation functions with consistent error handling.
"""

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

import re
from typing import Optional, Union

from ttpairing.constants import MAX_RATING, MIN_RATING
from ttpairing.exceptions import (
    InvalidResultException,
    NameValidationException,
    RatingValidationException,
)

_SCORE_PATTERN = re.compile(r"^\s*(\d+)\s*$")


class ValidationResult:
    """Result of a validation operation.

    Attributes:
        is_valid: Whether the validation passed
        error_message: Human-readable error message if invalid
        sanitized_value: Cleaned/normalized value if valid
    """

    def __init__(
        self,
        is_valid: bool,
        error_message: Optional[str] = None,
        sanitized_value: Optional[str] = None,
    ):
        self.is_valid = is_valid
        self.error_message = error_message
        self.sanitized_value = sanitized_value

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.is_valid

    def __repr__(self) -> str:
        if self.is_valid:
            return f"ValidationResult(VALID, {self.sanitized_value!r})"
        return f"ValidationResult(INVALID, {self.error_message!r})"


# ========== Name Validation ==========


def validate_name(
    name: Optional[str], field_name: str = "Name", required: bool = True
) -> ValidationResult:
    """Validate a participant name or club.

    Args:
        name: Text to validate
        field_name: Label used in the error message
        required: Whether an empty value is an error

    Returns:
        ValidationResult with the stripped value
    """
    if name is None or not str(name).strip():
        if required:
            return ValidationResult(
                is_valid=False,
                error_message=f"{field_name} is required",
            )
        return ValidationResult(is_valid=True, sanitized_value=None)

    name = str(name).strip()
    if len(name) > 100:
        return ValidationResult(
            is_valid=False,
            error_message=f"{field_name} is too long (max 100 characters)",
        )

    return ValidationResult(is_valid=True, sanitized_value=name)


def validate_name_strict(name: str, field_name: str = "Name") -> str:
    """Validate a name and return it stripped or raise exception.

    Raises:
        NameValidationException: If the name is invalid
    """
    result = validate_name(name, field_name=field_name, required=True)
    if not result.is_valid:
        raise NameValidationException(result.error_message)
    return result.sanitized_value or ""


# ========== Rating Validation ==========


def validate_rating(
    rating: Optional[Union[int, str]],
    min_rating: int = MIN_RATING,
    max_rating: int = MAX_RATING,
) -> ValidationResult:
    """Validate a TTR rating.

    An empty rating is valid and means "unrated" (0).

    Args:
        rating: Rating value to validate
        min_rating: Minimum allowed rating
        max_rating: Maximum allowed rating

    Returns:
        ValidationResult with validation status
    """
    if rating is None or (isinstance(rating, str) and not rating.strip()):
        return ValidationResult(is_valid=True, sanitized_value="0")

    try:
        rating_int = int(rating)
    except (ValueError, TypeError):
        return ValidationResult(
            is_valid=False,
            error_message=f"Rating must be a whole number: {rating}",
        )

    if rating_int < min_rating or rating_int > max_rating:
        return ValidationResult(
            is_valid=False,
            error_message=f"Rating must be between {min_rating} and {max_rating}: {rating_int}",
        )

    return ValidationResult(is_valid=True, sanitized_value=str(rating_int))


def validate_rating_strict(
    rating: Optional[Union[int, str]],
    min_rating: int = MIN_RATING,
    max_rating: int = MAX_RATING,
) -> int:
    """Validate rating and return integer or raise exception.

    Raises:
        RatingValidationException: If rating is invalid
    """
    result = validate_rating(rating, min_rating, max_rating)
    if not result.is_valid:
        raise RatingValidationException(result.error_message)
    return int(result.sanitized_value or "0")


# ========== Numeric Validation ==========


def validate_positive_integer(
    value: Union[int, str], field_name: str = "Value"
) -> ValidationResult:
    """Validate that a value is an integer of at least one."""
    try:
        int_value = int(value)
    except (ValueError, TypeError):
        return ValidationResult(
            is_valid=False,
            error_message=f"{field_name} must be a whole number: {value}",
        )

    if int_value < 1:
        return ValidationResult(
            is_valid=False,
            error_message=f"{field_name} must be positive: {int_value}",
        )

    return ValidationResult(is_valid=True, sanitized_value=str(int_value))


# ========== Score Validation ==========


def validate_game_score(value: Union[int, str, None]) -> ValidationResult:
    """Validate one side of a game score.

    Empty input is valid and stays empty (game not played). Anything else
    must be a non-negative whole number.
    """
    if value is None:
        return ValidationResult(is_valid=True, sanitized_value="")

    text = str(value)
    if not text.strip():
        return ValidationResult(is_valid=True, sanitized_value="")

    match = _SCORE_PATTERN.match(text)
    if not match:
        return ValidationResult(
            is_valid=False,
            error_message=f"Game score must be a non-negative whole number: {value!r}",
        )

    return ValidationResult(is_valid=True, sanitized_value=str(int(match.group(1))))


def validate_game_score_strict(value: Union[int, str, None]) -> str:
    """Validate one side of a game score or raise exception.

    Raises:
        InvalidResultException: If the score is not a non-negative number
    """
    result = validate_game_score(value)
    if not result.is_valid:
        raise InvalidResultException(result.error_message)
    return result.sanitized_value or ""
