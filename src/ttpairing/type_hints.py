"""Type hints used in TT Pairing."""

from typing import List, Optional, Tuple, Union

# Raw score entry as typed at the table: a pair of strings, possibly empty
GameScore = Tuple[str, str]
# Anything a caller may hand in for one game
GameScoreInput = Tuple[Union[int, str], Union[int, str]]

MaybeParticipant = Optional["Participant"]
# Tuple of seat indices
MatchPairing = Tuple[int, int]
# All pairings for one round, by index
RoundSchedule = Tuple[MatchPairing, ...]
# Matches plus the bye recipient of a round
Pairings = Tuple[List[Tuple["Participant", "Participant"]], Optional["Participant"]]

#  LocalWords:  MatchPairing RoundSchedule
