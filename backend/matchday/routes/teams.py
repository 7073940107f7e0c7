"""
Team Management API Routes
Team formation, membership and roster.
"""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, ConfigDict, field_validator
from sqlmodel import Session

from matchday.database import get_session
from matchday.errors import MatchdayError
from matchday.services.team_service import create_team, get_roster, get_team, is_name_taken, join_team, leave_team

router = APIRouter()


# ============================================================================
# Request/Response Models
# ============================================================================


class TeamCreateRequest(BaseModel):
    captain_id: int
    name: str
    zone_id: int

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        v = (v or "").strip()
        if not 3 <= len(v) <= 30:
            raise ValueError("name must be 3-30 characters")
        return v


class TeamResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    zone_id: int
    captain_id: int
    status: str
    total_matches: int
    created_at: datetime


class JoinRequest(BaseModel):
    user_id: int
    jersey_number: Optional[int] = None


class MemberResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    team_id: int
    user_id: int
    role: str
    jersey_number: Optional[int] = None
    joined_at: datetime


# ============================================================================
# Endpoints
# ============================================================================


@router.post("/teams", response_model=TeamResponse, status_code=201)
def create(body: TeamCreateRequest, session: Session = Depends(get_session)):
    try:
        return create_team(session, body.captain_id, body.name, body.zone_id)
    except MatchdayError as e:
        raise e.to_http_exception()


@router.get("/teams/name-check")
def name_check(name: str = Query(...), zone_id: int = Query(...), session: Session = Depends(get_session)):
    return {"name": name, "zone_id": zone_id, "taken": is_name_taken(session, name, zone_id)}


@router.get("/teams/{team_id}", response_model=TeamResponse)
def get_one(team_id: int, session: Session = Depends(get_session)):
    try:
        return get_team(session, team_id)
    except MatchdayError as e:
        raise e.to_http_exception()


@router.get("/teams/{team_id}/roster", response_model=List[MemberResponse])
def roster(team_id: int, session: Session = Depends(get_session)):
    try:
        return get_roster(session, team_id)
    except MatchdayError as e:
        raise e.to_http_exception()


@router.post("/teams/{team_id}/members", response_model=MemberResponse, status_code=201)
def join(team_id: int, body: JoinRequest, session: Session = Depends(get_session)):
    try:
        return join_team(session, body.user_id, team_id, body.jersey_number)
    except MatchdayError as e:
        raise e.to_http_exception()


@router.delete("/teams/{team_id}/members/{user_id}", status_code=204)
def leave(team_id: int, user_id: int, session: Session = Depends(get_session)):
    try:
        leave_team(session, user_id, team_id)
    except MatchdayError as e:
        raise e.to_http_exception()
