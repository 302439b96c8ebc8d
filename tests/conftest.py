import pytest

from ttpairing.models.participant import Participant


def build_participants(count, base_rating=1000, step=100):
    """Participants First1..FirstN, ratings rising with the number."""
    return [
        Participant(f"First{i}", f"Last{i}", f"Club{i}", base_rating + i * step)
        for i in range(1, count + 1)
    ]


@pytest.fixture
def make_participants():
    return build_participants


@pytest.fixture
def four_players():
    return build_participants(4)


@pytest.fixture
def five_players():
    return build_participants(5)
