from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, ConfigDict, field_validator
from sqlmodel import Session

from matchday.database import get_session
from matchday.errors import MatchdayError
from matchday.services.draw_engine import start_tournament
from matchday.services.standings import group_standings
from matchday.services.tournament_service import (
    SCOPE_ALL,
    TournamentConfig,
    create_tournament,
    get_tournament,
    list_tournaments,
    register_team,
)
from matchday.utils.retry import with_store_retry

router = APIRouter()


class TournamentCreate(BaseModel):
    organizer_id: int
    name: str
    config: TournamentConfig = TournamentConfig()

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if not v or not v.strip():
            raise ValueError("name is required")
        return v.strip()


class TournamentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    organizer_id: int
    name: str
    status: str
    config: Dict[str, Any]
    created_at: datetime
    started_at: Optional[datetime] = None


class EntryCreate(BaseModel):
    team_id: int


class EntryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    tournament_id: int
    team_id: int
    group_name: Optional[str] = None
    points: int
    goal_diff: int
    goals_for: int
    played: int


class StartRequest(BaseModel):
    organizer_id: int


class DrawResponse(BaseModel):
    tournament_id: int
    groups: Dict[str, List[int]]
    group_sizes: Dict[str, int]


@router.post("/tournaments", response_model=TournamentResponse, status_code=201)
def create(body: TournamentCreate, session: Session = Depends(get_session)):
    """Create an OPEN tournament"""
    return create_tournament(session, body.organizer_id, body.name, body.config)


@router.get("/tournaments", response_model=List[TournamentResponse])
def list_all(
    scope: Literal["MY", "ALL"] = Query(SCOPE_ALL),
    user_id: Optional[int] = Query(None),
    session: Session = Depends(get_session),
):
    """List tournaments (scope=MY requires user_id)"""
    try:
        return with_store_retry(lambda: list_tournaments(session, scope, user_id), session=session)
    except ValueError as e:
        raise MatchdayError(str(e), "INVALID_QUERY").to_http_exception()
    except MatchdayError as e:
        raise e.to_http_exception()


@router.get("/tournaments/{tournament_id}", response_model=TournamentResponse)
def get_one(tournament_id: int, session: Session = Depends(get_session)):
    try:
        return get_tournament(session, tournament_id)
    except MatchdayError as e:
        raise e.to_http_exception()


@router.post("/tournaments/{tournament_id}/entries", response_model=EntryResponse, status_code=201)
def register(tournament_id: int, body: EntryCreate, session: Session = Depends(get_session)):
    try:
        return register_team(session, tournament_id, body.team_id)
    except MatchdayError as e:
        raise e.to_http_exception()


@router.post("/tournaments/{tournament_id}/start", response_model=DrawResponse)
def start(tournament_id: int, body: StartRequest, session: Session = Depends(get_session)):
    """Run the group draw and activate the tournament. Runs once; a repeat call is 409."""
    try:
        draw = start_tournament(session, tournament_id, organizer_id=body.organizer_id)
    except MatchdayError as e:
        raise e.to_http_exception()
    return DrawResponse(tournament_id=draw.tournament_id, groups=draw.groups, group_sizes=draw.group_sizes)


@router.get("/tournaments/{tournament_id}/standings", response_model=Dict[str, List[EntryResponse]])
def standings(tournament_id: int, session: Session = Depends(get_session)):
    """Ranked entries per group"""
    try:
        return with_store_retry(lambda: group_standings(session, tournament_id), session=session)
    except MatchdayError as e:
        raise e.to_http_exception()
