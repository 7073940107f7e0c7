"""
Match Lifecycle API Routes

Submit a result (constraint gate + transactional write), then the opposing
captain confirms or rejects it.
"""

import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, ConfigDict, Field
from sqlmodel import Session

from matchday.database import get_session
from matchday.errors import MatchdayError, MatchNotFound
from matchday.models.match import Match
from matchday.services.consensus_resolver import (
    confirm_match,
    get_verifications,
    list_pending_verifications,
    list_recent_confirmed,
    reject_match,
)
from matchday.services.constraint_validator import validate_match_constraints
from matchday.services.match_writer import MatchSubmission, resolve_submitting_team, submit_match_result
from matchday.utils.retry import with_store_retry

logger = logging.getLogger(__name__)

router = APIRouter()


# ============================================================================
# Request/Response Models
# ============================================================================


class MatchSubmitRequest(BaseModel):
    creator_id: int
    team_a_id: int
    team_b_id: int
    score_a: int = Field(ge=0)
    score_b: int = Field(ge=0)
    lineup: List[int] = Field(default_factory=list)
    scorers: Optional[List[int]] = None
    venue_id: Optional[int] = None
    season_id: Optional[int] = None


class MatchSubmitResponse(BaseModel):
    match_id: int
    status: str
    lineup_written: int
    events_written: int
    warnings: List[str]


class VerifyRequest(BaseModel):
    verifier_id: int


class MatchResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    season_id: Optional[int] = None
    team_a_id: int
    team_b_id: int
    venue_id: Optional[int] = None
    score_a: int
    score_b: int
    creator_id: int
    status: str
    played_at: datetime
    created_at: datetime
    resolved_at: Optional[datetime] = None


class VerificationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    verifier_id: int
    action: str
    created_at: datetime


class MatchDetailResponse(MatchResponse):
    verifications: List[VerificationResponse] = []


# ============================================================================
# Endpoints
# ============================================================================


@router.post("/matches", response_model=MatchSubmitResponse, status_code=201)
def submit_match(payload: MatchSubmitRequest, session: Session = Depends(get_session)):
    """
    Record a match result for the team captained by the creator.

    Rejected with 403 when the creator captains neither team, and with 422 when
    the submitting team fails the weekly cap or cooldown rule; nothing is written.
    """
    try:
        submitting = resolve_submitting_team(session, payload.creator_id, payload.team_a_id, payload.team_b_id)
    except MatchdayError as e:
        raise e.to_http_exception()

    check = validate_match_constraints(session, submitting.id)
    if not check.ok:
        raise check.failures[0].to_http_exception()

    try:
        result = submit_match_result(session, MatchSubmission(**payload.model_dump()))
    except MatchdayError as e:
        raise e.to_http_exception()

    return MatchSubmitResponse(
        match_id=result.match_id,
        status=result.status,
        lineup_written=result.lineup_written,
        events_written=result.events_written,
        warnings=result.warnings,
    )


@router.get("/matches/pending", response_model=List[MatchResponse])
def get_pending_verifications(user_id: int = Query(...), session: Session = Depends(get_session)):
    """Matches waiting for this captain to confirm or reject."""
    try:
        return with_store_retry(lambda: list_pending_verifications(session, user_id), session=session)
    except MatchdayError as e:
        raise e.to_http_exception()


@router.get("/matches/recent", response_model=List[MatchResponse])
def get_recent_matches(limit: int = Query(20, ge=1, le=100), session: Session = Depends(get_session)):
    """Latest confirmed matches, newest first."""
    try:
        return with_store_retry(lambda: list_recent_confirmed(session, limit), session=session)
    except MatchdayError as e:
        raise e.to_http_exception()


@router.get("/matches/{match_id}", response_model=MatchDetailResponse)
def get_match(match_id: int, session: Session = Depends(get_session)):
    match = session.get(Match, match_id)
    if not match:
        raise MatchNotFound(match_id).to_http_exception()
    response = MatchDetailResponse.model_validate(match)
    response.verifications = [VerificationResponse.model_validate(v) for v in get_verifications(session, match_id)]
    return response


@router.post("/matches/{match_id}/confirm", response_model=MatchResponse)
def confirm(match_id: int, payload: VerifyRequest, session: Session = Depends(get_session)):
    try:
        return confirm_match(session, match_id, payload.verifier_id)
    except MatchdayError as e:
        raise e.to_http_exception()


@router.post("/matches/{match_id}/reject", response_model=MatchResponse)
def reject(match_id: int, payload: VerifyRequest, session: Session = Depends(get_session)):
    try:
        return reject_match(session, match_id, payload.verifier_id)
    except MatchdayError as e:
        raise e.to_http_exception()


@router.get("/teams/{team_id}/constraints")
def get_team_constraints(team_id: int, session: Session = Depends(get_session)):
    """Dry-run of the submission gate for a team."""
    check = validate_match_constraints(session, team_id)
    if check.ok:
        return {"team_id": team_id, "ok": True, "weekly_count": check.weekly_count, "failures": []}
    logger.info(f"Team {team_id} blocked from new matches: {check.failure_codes}")
    return {
        "team_id": team_id,
        "ok": False,
        "weekly_count": check.weekly_count,
        "failures": [{"code": f.code, "message": f.message} for f in check.failures],
    }

