"""
Operations Room: ad-hoc resource requests within a zone.

Captains post WANTED_JOKER / WANTED_REF ads when short a player or referee;
players post I_AM_AVAILABLE ads. Any other user may accept an OPEN ad.

Acceptance is first-responder-wins. The lock is a conditional UPDATE that
re-asserts status = OPEN at write time, so at most one responder is ever
recorded per request even when the pre-check read was stale. A caller that
loses the race gets AlreadyLocked, never a silent success.
"""

import logging
from datetime import datetime
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter, ValidationError, field_validator
from sqlalchemy import update
from sqlmodel import Session, select

from matchday.errors import AlreadyLocked, DuplicateAvailability, InvalidRequestDetail, RequestNotFound, SelfAccept
from matchday.models.operations_request import REQUEST_LOCKED, REQUEST_OPEN, OperationsRequest, RequestType
from matchday.services.notification_service import REQUEST_ACCEPTED, dispatch_quietly
from matchday.utils.clock import utcnow
from matchday.utils.sql import affected_rows

logger = logging.getLogger(__name__)

POSITIONS = ("FWD", "MID", "DEF", "GK", "ANY")


# ============================================================================
# Request detail variants (validated at the boundary)
# ============================================================================


def _check_position(value: str) -> str:
    value = (value or "ANY").strip().upper()
    if value not in POSITIONS:
        raise ValueError(f"position must be one of {', '.join(POSITIONS)}")
    return value


class WantedJokerDetail(BaseModel):
    type: Literal["WANTED_JOKER"] = "WANTED_JOKER"
    match_time: datetime
    venue_name: str
    teams: str = "Unknown Match"
    position: str = "ANY"
    note: str = ""

    @field_validator("position")
    @classmethod
    def normalize_position(cls, v):
        return _check_position(v)


class WantedRefDetail(BaseModel):
    type: Literal["WANTED_REF"] = "WANTED_REF"
    match_time: datetime
    venue_name: str
    teams: str = "Unknown Match"
    note: str = ""


class AvailabilityDetail(BaseModel):
    type: Literal["I_AM_AVAILABLE"] = "I_AM_AVAILABLE"
    position: str = "ANY"
    note: str = ""

    @field_validator("position")
    @classmethod
    def normalize_position(cls, v):
        return _check_position(v)


RequestDetail = Annotated[
    Union[WantedJokerDetail, WantedRefDetail, AvailabilityDetail],
    Field(discriminator="type"),
]

_detail_adapter = TypeAdapter(RequestDetail)


def parse_request_detail(request_type: str, detail: Dict[str, Any]) -> Union[WantedJokerDetail, WantedRefDetail, AvailabilityDetail]:
    """Validate a loose detail payload against the variant for `request_type`."""
    try:
        return _detail_adapter.validate_python({**(detail or {}), "type": request_type})
    except ValidationError as e:
        raise InvalidRequestDetail(f"Invalid {request_type} request: {e.errors()[0]['msg']}") from e


# ============================================================================
# Post / list
# ============================================================================


def has_open_availability(session: Session, user_id: int) -> bool:
    existing = session.exec(
        select(OperationsRequest.id).where(
            OperationsRequest.requester_id == user_id,
            OperationsRequest.type == RequestType.I_AM_AVAILABLE.value,
            OperationsRequest.status == REQUEST_OPEN,
        )
    ).first()
    return existing is not None


def post_request(
    session: Session,
    user_id: int,
    zone_id: int,
    detail: Union[WantedJokerDetail, WantedRefDetail, AvailabilityDetail],
) -> OperationsRequest:
    """
    Publish an OPEN request in a zone.

    Raises:
        DuplicateAvailability: user already has an OPEN I_AM_AVAILABLE ad
    """
    if detail.type == RequestType.I_AM_AVAILABLE.value and has_open_availability(session, user_id):
        raise DuplicateAvailability(f"User {user_id} already has an active availability ad")

    payload: Dict[str, Any] = {"note": detail.note}
    if isinstance(detail, (WantedJokerDetail, AvailabilityDetail)):
        payload["position"] = detail.position
    if isinstance(detail, (WantedJokerDetail, WantedRefDetail)):
        payload["teams"] = detail.teams

    request = OperationsRequest(
        requester_id=user_id,
        zone_id=zone_id,
        type=detail.type,
        match_time=getattr(detail, "match_time", None),
        venue_name=getattr(detail, "venue_name", None),
        details=payload,
        status=REQUEST_OPEN,
    )
    session.add(request)
    session.commit()
    session.refresh(request)
    logger.info(f"Request {request.id} ({request.type}) posted by user {user_id} in zone {zone_id}")
    return request


def list_open_requests(session: Session, zone_id: int) -> List[OperationsRequest]:
    """OPEN requests for a zone, newest first. Always re-queried."""
    return list(
        session.exec(
            select(OperationsRequest)
            .where(OperationsRequest.zone_id == zone_id, OperationsRequest.status == REQUEST_OPEN)
            .order_by(OperationsRequest.created_at.desc(), OperationsRequest.id.desc())
        ).all()
    )


# ============================================================================
# Accept (compare-and-swap)
# ============================================================================


def _fetch_request(session: Session, request_id: int) -> Optional[OperationsRequest]:
    return session.get(OperationsRequest, request_id, populate_existing=True)


def accept_request(
    session: Session,
    request_id: int,
    responder_id: int,
    now: Optional[datetime] = None,
) -> OperationsRequest:
    """
    Lock an OPEN request for `responder_id`.

    Raises:
        RequestNotFound: no such request
        SelfAccept: responder posted the request
        AlreadyLocked: request is not OPEN, or another responder won the race
    """
    request = _fetch_request(session, request_id)
    if request is None:
        raise RequestNotFound(request_id)
    if request.requester_id == responder_id:
        raise SelfAccept(f"User {responder_id} cannot accept their own request")
    if request.status != REQUEST_OPEN:
        raise AlreadyLocked(request_id)

    requester_id = request.requester_id
    request_type = request.type
    result = session.exec(
        update(OperationsRequest)
        .where(OperationsRequest.id == request_id, OperationsRequest.status == REQUEST_OPEN)
        .values(status=REQUEST_LOCKED, responder_id=responder_id, locked_at=now or utcnow())
        .execution_options(synchronize_session=False)
    )
    if affected_rows(result) == 0:
        session.rollback()
        logger.warning(f"Request {request_id}: user {responder_id} lost the accept race")
        raise AlreadyLocked(request_id)
    session.commit()

    logger.info(f"Request {request_id} locked by user {responder_id}")
    dispatch_quietly(
        session,
        requester_id,
        REQUEST_ACCEPTED,
        "Your request was accepted",
        f"User {responder_id} answered your {request_type} request",
    )

    return _fetch_request(session, request_id)
