import pytest

from ttpairing.exceptions import (
    NoPairingAvailableException,
    PairingException,
    ParticipantNotFoundException,
)
from ttpairing.pairing.round_robin import RoundRobin, circle_schedule


def test_circle_schedule_for_four_seats():
    assert circle_schedule(4) == (
        ((0, 1), (2, 3)),
        ((0, 2), (3, 1)),
        ((0, 3), (1, 2)),
    )


def test_circle_schedule_needs_even_seats():
    with pytest.raises(PairingException):
        circle_schedule(5)


@pytest.mark.parametrize("count", [2, 4, 6, 8, 10])
def test_even_field_meets_everyone_once(make_participants, count):
    rr = RoundRobin(make_participants(count))
    assert rr.number_of_rounds == count - 1

    seen = set()
    for matches, bye in rr.round_pairings:
        assert bye is None
        assert len(matches) == count // 2
        for first, second in matches:
            seen.add(frozenset((first, second)))
    assert len(seen) == count * (count - 1) // 2


@pytest.mark.parametrize("count", [3, 5, 7, 9])
def test_odd_field_gives_everyone_one_bye(make_participants, count):
    participants = make_participants(count)
    rr = RoundRobin(participants)
    assert rr.number_of_rounds == count

    byes = []
    seen = set()
    for matches, bye in rr.round_pairings:
        assert bye is not None
        byes.append(bye)
        assert len(matches) == (count - 1) // 2
        seen.update(frozenset(m) for m in matches)
    assert set(byes) == set(participants)
    assert len(seen) == count * (count - 1) // 2


def test_seats_sorted_by_rating(make_participants):
    participants = list(reversed(make_participants(4)))
    rr = RoundRobin(participants)
    assert [p.rating for p in rr.participants] == [1100, 1200, 1300, 1400]

    matches, _ = rr.get_round_pairings(1)
    assert [(a.rating, b.rating) for a, b in matches] == [(1100, 1200), (1300, 1400)]


def test_round_number_out_of_range(make_participants):
    rr = RoundRobin(make_participants(4))
    with pytest.raises(NoPairingAvailableException):
        rr.get_round_pairings(0)
    with pytest.raises(NoPairingAvailableException):
        rr.get_round_pairings(4)


def test_participant_schedule(make_participants):
    participants = make_participants(3)
    rr = RoundRobin(participants)
    schedule = rr.get_participant_schedule(participants[0])

    assert [round_number for round_number, _ in schedule] == [1, 2, 3]
    opponents = [opponent for _, opponent in schedule]
    assert opponents.count(None) == 1
    assert set(o for o in opponents if o) == set(participants[1:])


def test_schedule_of_unknown_participant(make_participants):
    participants = make_participants(5)
    rr = RoundRobin(participants[:4])
    with pytest.raises(ParticipantNotFoundException):
        rr.get_participant_schedule(participants[4])


def test_too_few_participants(make_participants):
    with pytest.raises(PairingException):
        RoundRobin(make_participants(1))
