import random

import pytest
from sqlmodel import Session, select

from matchday.errors import TournamentNotFound
from matchday.models.tournament_entry import TournamentEntry
from matchday.services.draw_engine import start_tournament
from matchday.services.standings import group_standings, rank
from matchday.services.tournament_service import TournamentConfig, create_tournament, register_team


def _entry(team_id, points, goal_diff, goals_for=0):
    return TournamentEntry(tournament_id=1, team_id=team_id, points=points, goal_diff=goal_diff, goals_for=goals_for)


def test_rank_points_then_goal_difference():
    entries = [_entry(1, 6, 2), _entry(2, 6, 5), _entry(3, 9, -1)]

    ranked = rank(entries)

    assert [(e.points, e.goal_diff) for e in ranked] == [(9, -1), (6, 5), (6, 2)]


def test_rank_goals_for_then_team_id():
    entries = [_entry(4, 3, 1, 2), _entry(2, 3, 1, 5), _entry(3, 3, 1, 2)]

    assert [e.team_id for e in rank(entries)] == [2, 3, 4]


def test_rank_does_not_mutate_input():
    entries = [_entry(1, 0, 0), _entry(2, 3, 0)]
    rank(entries)
    assert [e.team_id for e in entries] == [1, 2]


def test_rank_empty():
    assert rank([]) == []


def test_group_standings_groups_and_ranks(session: Session, make_team):
    tournament = create_tournament(session, 500, "Spring Cup", TournamentConfig())
    teams = [make_team(f"Team {i}", captain_id=100 + i) for i in range(8)]
    for team in teams:
        register_team(session, tournament.id, team.id)
    start_tournament(session, tournament.id, rng=random.Random(9))

    entries = session.exec(select(TournamentEntry).where(TournamentEntry.tournament_id == tournament.id)).all()
    for i, entry in enumerate(entries):
        entry.points = i
        session.add(entry)
    session.commit()

    standings = group_standings(session, tournament.id)

    assert list(standings) == ["A", "B", "C", "D"]
    for label, group in standings.items():
        assert len(group) == 2
        assert all(e.group_name == label for e in group)
        assert group[0].points >= group[1].points


def test_group_standings_before_draw_is_empty(session: Session, make_team):
    tournament = create_tournament(session, 500, "Spring Cup", TournamentConfig())
    register_team(session, tournament.id, make_team("Lions", captain_id=1).id)

    assert group_standings(session, tournament.id) == {}


def test_group_standings_unknown_tournament(session: Session):
    with pytest.raises(TournamentNotFound):
        group_standings(session, 404)
