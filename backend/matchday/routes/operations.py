"""
Operations Room API Routes

Post WANTED_JOKER / WANTED_REF / I_AM_AVAILABLE ads, list a zone's open ads,
and accept one (first responder wins).
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict
from sqlmodel import Session

from matchday.database import get_session
from matchday.errors import MatchdayError
from matchday.services.request_broker import RequestDetail, accept_request, list_open_requests, post_request
from matchday.utils.retry import with_store_retry

router = APIRouter()


class PostRequestBody(BaseModel):
    requester_id: int
    zone_id: int
    detail: RequestDetail


class AcceptRequestBody(BaseModel):
    responder_id: int


class OperationsRequestResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    requester_id: int
    zone_id: int
    type: str
    match_time: Optional[datetime] = None
    venue_name: Optional[str] = None
    details: Dict[str, Any]
    status: str
    responder_id: Optional[int] = None
    created_at: datetime
    locked_at: Optional[datetime] = None


@router.post("/operations/requests", response_model=OperationsRequestResponse, status_code=201)
def create_request(body: PostRequestBody, session: Session = Depends(get_session)):
    try:
        return post_request(session, body.requester_id, body.zone_id, body.detail)
    except MatchdayError as e:
        raise e.to_http_exception()


@router.get("/zones/{zone_id}/operations", response_model=List[OperationsRequestResponse])
def get_open_requests(zone_id: int, session: Session = Depends(get_session)):
    """Open requests in a zone, newest first."""
    try:
        return with_store_retry(lambda: list_open_requests(session, zone_id), session=session)
    except MatchdayError as e:
        raise e.to_http_exception()


@router.post("/operations/requests/{request_id}/accept", response_model=OperationsRequestResponse)
def accept(request_id: int, body: AcceptRequestBody, session: Session = Depends(get_session)):
    """
    Lock a request for the responder.

    409 ALREADY_LOCKED means someone else got there first; refresh the feed.
    """
    try:
        return accept_request(session, request_id, body.responder_id)
    except MatchdayError as e:
        raise e.to_http_exception()
