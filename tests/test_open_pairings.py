import pytest

from ttpairing.exceptions import SearchBudgetExceeded
from ttpairing.models.pairing import Pairing
from ttpairing.pairing import (
    SearchBudget,
    calculate_pairing_difference,
    force_pairing,
    generate_all_pairings,
    players_with_bye,
    select_unique_participant_matches,
)


def test_all_pairings_even_field(four_players):
    pairings = generate_all_pairings(four_players)
    assert len(pairings) == 6
    assert not any(p.is_bye for p in pairings)
    assert len({p.key for p in pairings}) == 6


def test_all_pairings_odd_field_adds_one_bye_each(five_players):
    pairings = generate_all_pairings(five_players)
    assert len(pairings) == 10 + 5
    assert {p.first for p in pairings if p.is_bye} == set(five_players)


def test_difference_removes_played_pairs_and_used_byes(five_players):
    p1, p2, p3, _, _ = five_players
    played = [Pairing(p2, p1), Pairing(p3)]

    remaining = calculate_pairing_difference(
        generate_all_pairings(five_players), played, players_with_bye(played)
    )

    keys = {p.key for p in remaining}
    assert frozenset((p1, p2)) not in keys
    assert frozenset((p3, None)) not in keys
    assert len(remaining) == 15 - 2


def test_selection_covers_everyone_once(five_players):
    budget = SearchBudget()
    selected = select_unique_participant_matches(
        generate_all_pairings(five_players), five_players, budget
    )

    covered = [p for pairing in selected for p in pairing.participants]
    assert sorted(covered, key=id) == sorted(five_players, key=id)
    assert sum(1 for p in selected if p.is_bye) == 1


def test_selection_takes_candidates_in_order(four_players):
    p1, p2, p3, p4 = four_players
    candidates = [Pairing(p1, p4), Pairing(p1, p2), Pairing(p2, p3), Pairing(p3, p4)]
    selected = select_unique_participant_matches(candidates, four_players, SearchBudget())
    assert selected == [candidates[0], candidates[2]]


def test_selection_without_covering(four_players):
    p1, p2, p3, p4 = four_players
    candidates = [Pairing(p1, p2), Pairing(p1, p3), Pairing(p2, p3)]
    assert (
        select_unique_participant_matches(candidates, four_players, SearchBudget())
        is None
    )


def test_force_pairing_respects_history(four_players):
    p1, p2, p3, p4 = four_players
    history = [Pairing(p1, p2), Pairing(p3, p4), Pairing(p1, p3), Pairing(p2, p4)]

    forced = force_pairing(four_players, history, SearchBudget())
    assert {p.key for p in forced} == {frozenset((p1, p4)), frozenset((p2, p3))}

    history += forced
    assert force_pairing(four_players, history, SearchBudget()) is None


def test_force_pairing_budget(make_participants):
    with pytest.raises(SearchBudgetExceeded):
        force_pairing(make_participants(6), [], SearchBudget(1))
