"""
Tournament creation, listing and team registration.

The draw itself lives in draw_engine; ranking in standings.
"""

import logging
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, ValidationError
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, func, select

from matchday.errors import (
    AlreadyRegistered,
    InvalidTournamentConfig,
    RegistrationClosed,
    TeamNotFound,
    TournamentFull,
    TournamentNotFound,
)
from matchday.models.team import Team
from matchday.models.tournament import TOURNAMENT_OPEN, Tournament
from matchday.models.tournament_entry import TournamentEntry
from matchday.utils.sql import scalar_int

logger = logging.getLogger(__name__)

SCOPE_MY = "MY"
SCOPE_ALL = "ALL"


class TournamentConfig(BaseModel):
    bracket_type: Literal["GROUPS", "LEAGUE", "KNOCKOUT"] = "GROUPS"
    max_teams: Literal[8, 16, 32] = 16
    entry_fee: int = Field(default=0, ge=0)


def parse_tournament_config(raw: dict) -> TournamentConfig:
    try:
        return TournamentConfig.model_validate(raw or {})
    except ValidationError as e:
        raise InvalidTournamentConfig(f"Invalid tournament config: {e.errors()[0]['msg']}") from e


def get_tournament(session: Session, tournament_id: int) -> Tournament:
    tournament = session.get(Tournament, tournament_id)
    if not tournament:
        raise TournamentNotFound(tournament_id)
    return tournament


def create_tournament(session: Session, organizer_id: int, name: str, tournament_config: TournamentConfig) -> Tournament:
    tournament = Tournament(
        organizer_id=organizer_id,
        name=name.strip(),
        status=TOURNAMENT_OPEN,
        config=tournament_config.model_dump(),
    )
    session.add(tournament)
    session.commit()
    session.refresh(tournament)
    logger.info(f"Tournament {tournament.id} '{tournament.name}' created by user {organizer_id}")
    return tournament


def list_tournaments(session: Session, scope: str = SCOPE_ALL, user_id: int = None) -> List[Tournament]:
    """MY: tournaments organized by `user_id`. ALL: every tournament. Newest first."""
    query = select(Tournament)
    if scope == SCOPE_MY:
        if user_id is None:
            raise ValueError("user_id is required for scope MY")
        query = query.where(Tournament.organizer_id == user_id)
    return list(session.exec(query.order_by(Tournament.created_at.desc(), Tournament.id.desc())).all())


def count_entries(session: Session, tournament_id: int) -> int:
    result = session.exec(
        select(func.count(TournamentEntry.id)).where(TournamentEntry.tournament_id == tournament_id)
    ).one()
    return scalar_int(result)


def get_entry(session: Session, tournament_id: int, team_id: int) -> Optional[TournamentEntry]:
    return session.exec(
        select(TournamentEntry).where(
            TournamentEntry.tournament_id == tournament_id,
            TournamentEntry.team_id == team_id,
        )
    ).first()


def register_team(session: Session, tournament_id: int, team_id: int) -> TournamentEntry:
    """
    Enter a team into an OPEN tournament.

    Raises:
        TournamentNotFound, TeamNotFound,
        RegistrationClosed: the draw has already happened
        AlreadyRegistered: team already entered
        TournamentFull: config.max_teams reached
    """
    tournament = get_tournament(session, tournament_id)
    if tournament.status != TOURNAMENT_OPEN:
        raise RegistrationClosed(f"Tournament {tournament_id} is no longer accepting teams")
    if not session.get(Team, team_id):
        raise TeamNotFound(team_id)

    if get_entry(session, tournament_id, team_id):
        raise AlreadyRegistered(f"Team {team_id} is already registered in tournament {tournament_id}")

    max_teams = parse_tournament_config(tournament.config).max_teams
    if count_entries(session, tournament_id) >= max_teams:
        raise TournamentFull(f"Tournament {tournament_id} is full ({max_teams} teams)")

    entry = TournamentEntry(tournament_id=tournament_id, team_id=team_id)
    session.add(entry)
    try:
        session.flush()
    except IntegrityError:
        session.rollback()
        raise AlreadyRegistered(f"Team {team_id} is already registered in tournament {tournament_id}")

    # Re-count with our row in place; a concurrent registration may have taken the last slot
    if count_entries(session, tournament_id) > max_teams:
        session.rollback()
        raise TournamentFull(f"Tournament {tournament_id} is full ({max_teams} teams)")

    session.commit()
    session.refresh(entry)
    logger.info(f"Team {team_id} registered in tournament {tournament_id}")
    return entry
