"""Exceptions for use in TT Pairing"""

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


# ========== Base Application Exception ==========


class TTPairingException(Exception):
    """Base exception for all TT Pairing errors.

    All custom exceptions in the package inherit from this class, so callers
    can catch every package-specific error with a single except clause.
    """

    pass


# ========== Pairing Exceptions ==========


class PairingException(TTPairingException):
    """Base exception for pairing-related errors."""

    pass


class InvalidPairingException(PairingException):
    """Raised when a pairing configuration is invalid."""

    pass


class RepeatPairingException(PairingException):
    """Raised when attempting to pair participants who have already played."""

    pass


class NoPairingAvailableException(PairingException):
    """Raised when no valid pairing can be generated."""

    pass


class SearchBudgetExceeded(PairingException):
    """Raised when a backtracking search visits more nodes than allowed."""

    def __init__(self, budget: int):
        super().__init__(f"Pairing search exceeded its budget of {budget} steps")
        self.budget = budget


# ========== Tournament Exceptions ==========


class TournamentException(TTPairingException):
    """Base exception for tournament-related errors."""

    pass


class TournamentStateException(TournamentException):
    """Raised when tournament is in an invalid state for the requested operation."""

    pass


class RoundNotFoundException(TournamentException):
    """Raised when a requested round does not exist."""

    pass


class DuplicateParticipantException(TournamentException):
    """Raised when attempting to add a participant that already exists."""

    pass


# ========== Participant Exceptions ==========


class ParticipantException(TTPairingException):
    """Base exception for participant-related errors."""

    pass


class ParticipantNotFoundException(ParticipantException):
    """Raised when a requested participant cannot be found."""

    pass


class InvalidParticipantDataException(ParticipantException):
    """Raised when participant data is invalid or incomplete."""

    pass


# ========== Result Exceptions ==========


class ResultException(TTPairingException):
    """Base exception for result recording errors."""

    pass


class InvalidResultException(ResultException):
    """Raised when a result is invalid (e.g., negative game score)."""

    pass


# ========== Validation Exceptions ==========


class ValidationException(TTPairingException):
    """Base exception for validation errors."""

    pass


class RatingValidationException(ValidationException):
    """Raised when a rating value is invalid."""

    pass


class NameValidationException(ValidationException):
    """Raised when a name or club value is invalid."""

    pass


# ========== File/Resource Exceptions ==========


class ResourceException(TTPairingException):
    """Base exception for resource-related errors."""

    pass


class FileLoadException(ResourceException):
    """Raised when a file cannot be loaded."""

    pass


class FileSaveException(ResourceException):
    """Raised when a file cannot be saved."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(TTPairingException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException):
    """Raised when configuration data is invalid."""

    pass
