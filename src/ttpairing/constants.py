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

# --- Constants ---
SAVE_FILE_EXTENSION = ".json"
SAVE_FORMAT_VERSION = 1

# Match points
WIN_POINTS = 1
LOSS_POINTS = 0

# Bye (walkover) credit
BYE_POINTS = 1
BYE_SETS_AWARDED = 3
BYE_BALLS_AWARDED = 33
BYE_LABEL = "Freilos"

# Per-match game slots (best of five)
MAX_GAMES = 5
RESULT_SEPARATOR = ":"
EMPTY_RESULT = ""

# Table assignment
UNASSIGNED_TABLE = -1
DEFAULT_TABLE_COUNT = 4

# Search limits for the pairing backtracking
DEFAULT_SEARCH_BUDGET = 200_000

# Tournament setup
MIN_PARTICIPANTS = 2
MIN_RATING = 0
MAX_RATING = 3500
DEFAULT_TOURNAMENT_NAME = "Untitled Tournament"

# Logging
LOG_LEVEL_ENV_VAR = "TTPAIRING_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Tiebreak keys
TB_POINTS = "points"
TB_BUCHHOLZ = "buchholz"
TB_FEIN_BUCHHOLZ = "fein_buchholz"
TB_SET_DIFFERENCE = "set_difference"
TB_BALL_DIFFERENCE = "ball_difference"
TB_RATING = "rating"

# Default display names for tiebreaks
TIEBREAK_NAMES = {
    TB_POINTS: "Points",
    TB_BUCHHOLZ: "Buchholz",
    TB_FEIN_BUCHHOLZ: "Fein-Buchholz",
    TB_SET_DIFFERENCE: "Set Difference",
    TB_BALL_DIFFERENCE: "Ball Difference",
    TB_RATING: "TTR",
}

# Ranking chains, most significant first
SWISS_RANKING_ORDER = [
    TB_POINTS,
    TB_BUCHHOLZ,
    TB_FEIN_BUCHHOLZ,
    TB_SET_DIFFERENCE,
    TB_BALL_DIFFERENCE,
    TB_RATING,
]

ROUND_ROBIN_RANKING_ORDER = [
    TB_POINTS,
    TB_SET_DIFFERENCE,
    TB_BALL_DIFFERENCE,
    TB_RATING,
]
