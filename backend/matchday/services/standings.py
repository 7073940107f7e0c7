"""
Group standings.

Ranking key: points DESC, goal difference DESC, goals for DESC, team id ASC.
Points and goal figures are maintained by match-confirmation processing; this
module only orders them.
"""

from typing import Dict, Iterable, List

from sqlmodel import Session, select

from matchday.errors import TournamentNotFound
from matchday.models.tournament import Tournament
from matchday.models.tournament_entry import TournamentEntry


def standings_key(entry: TournamentEntry):
    return (-entry.points, -entry.goal_diff, -entry.goals_for, entry.team_id)


def rank(entries: Iterable[TournamentEntry]) -> List[TournamentEntry]:
    """Return entries in standings order (input is not mutated)."""
    return sorted(entries, key=standings_key)


def group_standings(session: Session, tournament_id: int) -> Dict[str, List[TournamentEntry]]:
    """Ranked entries per group label, labels in alphabetical order. Undrawn entries are omitted."""
    if not session.get(Tournament, tournament_id):
        raise TournamentNotFound(tournament_id)

    entries = session.exec(
        select(TournamentEntry).where(
            TournamentEntry.tournament_id == tournament_id,
            TournamentEntry.group_name.is_not(None),  # type: ignore
        )
    ).all()

    groups: Dict[str, List[TournamentEntry]] = {}
    for entry in entries:
        groups.setdefault(entry.group_name, []).append(entry)
    return {label: rank(groups[label]) for label in sorted(groups)}
