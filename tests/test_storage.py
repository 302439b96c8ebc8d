import json

import pytest

from ttpairing.exceptions import FileLoadException, FileSaveException
from ttpairing.models.enums import TournamentMode
from ttpairing.models.tournament import Tournament, TournamentState
from ttpairing.storage import load_tournament, save_tournament


@pytest.fixture
def tournament(five_players):
    tournament = Tournament("Club Open", five_players, table_count=2)
    tournament.start()
    for pairing in tournament.current_round:
        if not pairing.is_bye:
            tournament.record_result(pairing, [(11, 9), (8, 11), (11, 5), (11, 2)])
    tournament.advance_round()
    tournament.record_result(tournament.current_round[0], [(11, 1), (11, 2), (11, 3)])
    return tournament


def test_save_and_load(tmp_path, tournament):
    path = save_tournament(tournament, tmp_path / "club_open.json")
    loaded = load_tournament(path)
    tournament.get_standings()

    assert loaded.name == "Club Open"
    assert loaded.mode is TournamentMode.SWISS
    assert loaded.current_round_number == 2
    assert loaded.participants == tournament.participants
    assert [p.key for p in loaded.history] == [p.key for p in tournament.history]
    assert [p.overall_result for p in loaded.history] == [
        p.overall_result for p in tournament.history
    ]
    assert loaded.history[0].game_scores == tournament.history[0].game_scores
    # current round pairings are the same objects as in the history
    assert all(any(p is h for h in loaded.history) for p in loaded.current_round)
    assert [p.points for p in loaded.participants] == [
        p.points for p in tournament.participants
    ]


def test_save_adds_extension(tmp_path, tournament):
    path = save_tournament(tournament, tmp_path / "club_open")
    assert path.name == "club_open.json"
    assert json.loads(path.read_text(encoding="utf-8"))["config"]["name"] == "Club Open"
    assert [p.name for p in tmp_path.iterdir()] == ["club_open.json"]


def test_save_failure_is_wrapped(tmp_path, tournament):
    blocker = tmp_path / "not_a_directory"
    blocker.write_text("x", encoding="utf-8")
    with pytest.raises(FileSaveException):
        save_tournament(tournament, blocker / "club_open.json")


def test_load_missing_file(tmp_path):
    with pytest.raises(FileLoadException):
        load_tournament(tmp_path / "missing.json")


@pytest.mark.parametrize(
    "content",
    ["{not json", json.dumps({"version": 99}), json.dumps({"version": 1})],
)
def test_load_bad_content(tmp_path, content):
    path = tmp_path / "broken.json"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(FileLoadException):
        load_tournament(path)


def test_snapshot_timestamp_is_parsed(tournament):
    data = tournament.to_state().to_dict()
    state = TournamentState.from_dict(data)
    assert state.saved_at is not None
    assert state.saved_at.isoformat() == data["saved_at"]


def test_save_and_load_record_timestamp(tmp_path, tournament):
    assert tournament.saved_at is None

    path = save_tournament(tournament, tmp_path / "club_open")
    loaded = load_tournament(path)

    assert tournament.saved_at is not None
    assert loaded.saved_at == tournament.saved_at
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["saved_at"] == tournament.saved_at.isoformat()
