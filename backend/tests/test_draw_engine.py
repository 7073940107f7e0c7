"""
Tests for the tournament group draw.
"""

import random
from collections import Counter

import pytest
from sqlmodel import Session, select

from matchday.errors import InsufficientEntrants, NotOrganizer, TournamentAlreadyStarted, TournamentNotFound
from matchday.models.tournament import TOURNAMENT_ACTIVE, Tournament
from matchday.models.tournament_entry import TournamentEntry
from matchday.services.draw_engine import assign_group_labels, fisher_yates_shuffle, start_tournament
from matchday.services.tournament_service import TournamentConfig, create_tournament, register_team

LABELS = ["A", "B", "C", "D"]


def _tournament_with_teams(session: Session, make_team, n: int, organizer_id: int = 500) -> Tournament:
    tournament = create_tournament(session, organizer_id, "Spring Cup", TournamentConfig(max_teams=16))
    for i in range(n):
        team = make_team(f"Team {i}", captain_id=100 + i)
        register_team(session, tournament.id, team.id)
    return tournament


# ============================================================================
# Pure shuffle / label assignment
# ============================================================================


def test_shuffle_is_a_permutation():
    items = list(range(20))
    shuffled = fisher_yates_shuffle(list(items), random.Random(7))
    assert sorted(shuffled) == items


def test_assignment_is_reproducible_for_a_seed():
    first = assign_group_labels(range(12), LABELS, random.Random(42))
    second = assign_group_labels(range(12), LABELS, random.Random(42))
    assert first == second


@pytest.mark.parametrize("n", [4, 5, 7, 12, 13, 16])
def test_group_sizes_differ_by_at_most_one(n):
    assignments = assign_group_labels(range(n), LABELS, random.Random(n))
    sizes = Counter(label for _, label in assignments)
    assert sum(sizes.values()) == n
    assert max(sizes.values()) - min(sizes.values()) <= 1


def test_every_team_lands_in_every_group_uniformly():
    """Over many draws each (team, label) pair is hit about 1/4 of the time."""
    rng = random.Random(2026)
    runs = 10_000
    hits = Counter()
    for _ in range(runs):
        for team, label in assign_group_labels(range(12), LABELS, rng):
            hits[(team, label)] += 1

    expected = runs / len(LABELS)
    for team in range(12):
        for label in LABELS:
            assert abs(hits[(team, label)] - expected) <= 250, (team, label, hits[(team, label)])


def test_assign_requires_labels():
    with pytest.raises(ValueError):
        assign_group_labels([1, 2, 3], [], random.Random(1))


# ============================================================================
# start_tournament
# ============================================================================


def test_start_assigns_every_entrant_and_activates(session: Session, make_team):
    tournament = _tournament_with_teams(session, make_team, 10)

    draw = start_tournament(session, tournament.id, organizer_id=500, rng=random.Random(3))

    session.expire_all()
    stored = session.get(Tournament, tournament.id)
    assert stored.status == TOURNAMENT_ACTIVE
    assert stored.started_at is not None

    entries = session.exec(select(TournamentEntry).where(TournamentEntry.tournament_id == tournament.id)).all()
    assert all(e.group_name in LABELS for e in entries)
    assert sorted(draw.group_sizes.values()) == [2, 2, 3, 3]
    assert sorted(team_id for ids in draw.groups.values() for team_id in ids) == sorted(e.team_id for e in entries)


def test_start_needs_four_entrants(session: Session, make_team):
    tournament = _tournament_with_teams(session, make_team, 3)

    with pytest.raises(InsufficientEntrants):
        start_tournament(session, tournament.id, organizer_id=500)

    session.expire_all()
    assert session.get(Tournament, tournament.id).status == "OPEN"


def test_start_runs_only_once(session: Session, make_team):
    tournament = _tournament_with_teams(session, make_team, 8)
    start_tournament(session, tournament.id, rng=random.Random(1))
    groups_before = {
        e.team_id: e.group_name
        for e in session.exec(select(TournamentEntry).where(TournamentEntry.tournament_id == tournament.id)).all()
    }

    with pytest.raises(TournamentAlreadyStarted):
        start_tournament(session, tournament.id, rng=random.Random(2))

    session.expire_all()
    groups_after = {
        e.team_id: e.group_name
        for e in session.exec(select(TournamentEntry).where(TournamentEntry.tournament_id == tournament.id)).all()
    }
    assert groups_after == groups_before


def test_only_organizer_may_start(session: Session, make_team):
    tournament = _tournament_with_teams(session, make_team, 4)

    with pytest.raises(NotOrganizer):
        start_tournament(session, tournament.id, organizer_id=1)


def test_start_unknown_tournament(session: Session):
    with pytest.raises(TournamentNotFound):
        start_tournament(session, 999)
