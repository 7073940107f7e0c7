"""
Match Consensus: the opposing captain confirms or rejects a reported result.

State machine per match:
    PENDING_VERIFICATION → CONFIRMED | REJECTED   (both terminal)

The transition is a conditional UPDATE guarded by status = PENDING_VERIFICATION,
so two racing decisions cannot both land; the loser gets MatchAlreadyResolved.
The verification audit row is appended in the same transaction as the
transition. Confirming also bumps both teams' match counters.
"""

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import or_, update
from sqlmodel import Session, select

from matchday.errors import MatchAlreadyResolved, MatchNotFound, NotAuthorizedVerifier
from matchday.models.match import Match, MatchStatus
from matchday.models.match_verification import ACTION_CONFIRM, ACTION_REJECT, MatchVerification
from matchday.models.team import Team
from matchday.services.notification_service import MATCH_CONFIRMED, MATCH_REJECTED, dispatch_quietly
from matchday.utils.clock import utcnow
from matchday.utils.sql import affected_rows

logger = logging.getLogger(__name__)

_TARGET_STATUS = {
    ACTION_CONFIRM: MatchStatus.CONFIRMED.value,
    ACTION_REJECT: MatchStatus.REJECTED.value,
}


def _require_verifier(session: Session, match: Match, verifier_id: int) -> None:
    """Verifier must captain one of the two teams and must not be the reporter."""
    if verifier_id == match.creator_id:
        raise NotAuthorizedVerifier(f"User {verifier_id} reported match {match.id} and cannot verify it")
    captains = {
        team.captain_id
        for team in (session.get(Team, match.team_a_id), session.get(Team, match.team_b_id))
        if team is not None
    }
    if verifier_id not in captains:
        raise NotAuthorizedVerifier(f"User {verifier_id} is not a captain in match {match.id}")


def _bump_team_counters(session: Session, match: Match) -> None:
    session.exec(
        update(Team)
        .where(Team.id.in_([match.team_a_id, match.team_b_id]))  # type: ignore
        .values(total_matches=Team.total_matches + 1)
    )


def resolve_match(
    session: Session,
    match_id: int,
    verifier_id: int,
    action: str,
    now: Optional[datetime] = None,
) -> Match:
    """
    Apply a CONFIRM/REJECT decision to a pending match.

    Raises:
        MatchNotFound: no such match
        NotAuthorizedVerifier: verifier is not the opposing captain
        MatchAlreadyResolved: match is no longer PENDING_VERIFICATION
                              (including losing a race to another decision)
    """
    if action not in _TARGET_STATUS:
        raise ValueError(f"Unknown verification action: {action}")
    target = _TARGET_STATUS[action]
    now = now or utcnow()

    match = session.get(Match, match_id)
    if not match:
        raise MatchNotFound(match_id)
    if match.status != MatchStatus.PENDING_VERIFICATION.value:
        raise MatchAlreadyResolved(match_id, match.status)
    _require_verifier(session, match, verifier_id)

    result = session.exec(
        update(Match)
        .where(Match.id == match_id, Match.status == MatchStatus.PENDING_VERIFICATION.value)
        .values(status=target, resolved_at=now)
    )
    if affected_rows(result) == 0:
        session.rollback()
        session.refresh(match)
        logger.warning(f"Match {match_id} resolved concurrently; {action} by user {verifier_id} discarded")
        raise MatchAlreadyResolved(match_id, match.status)

    session.add(MatchVerification(match_id=match_id, verifier_id=verifier_id, action=action, created_at=now))
    if target == MatchStatus.CONFIRMED.value:
        _bump_team_counters(session, match)
    session.commit()
    session.refresh(match)

    logger.info(f"Match {match_id} {target} by user {verifier_id}")

    dispatch_quietly(
        session,
        match.creator_id,
        MATCH_CONFIRMED if target == MatchStatus.CONFIRMED.value else MATCH_REJECTED,
        "Match result " + target.lower(),
        f"Your reported result {match.score_a}-{match.score_b} was {target.lower()}",
    )
    return match


def confirm_match(session: Session, match_id: int, verifier_id: int) -> Match:
    return resolve_match(session, match_id, verifier_id, ACTION_CONFIRM)


def reject_match(session: Session, match_id: int, verifier_id: int) -> Match:
    return resolve_match(session, match_id, verifier_id, ACTION_REJECT)


def get_verifications(session: Session, match_id: int) -> List[MatchVerification]:
    return list(
        session.exec(
            select(MatchVerification)
            .where(MatchVerification.match_id == match_id)
            .order_by(MatchVerification.created_at, MatchVerification.id)
        ).all()
    )


def list_pending_verifications(session: Session, user_id: int) -> List[Match]:
    """Pending matches awaiting this captain's decision (matches they reported are excluded)."""
    team_ids = session.exec(select(Team.id).where(Team.captain_id == user_id)).all()
    if not team_ids:
        return []
    return list(
        session.exec(
            select(Match)
            .where(
                Match.status == MatchStatus.PENDING_VERIFICATION.value,
                Match.creator_id != user_id,
                or_(Match.team_a_id.in_(team_ids), Match.team_b_id.in_(team_ids)),  # type: ignore
            )
            .order_by(Match.played_at.desc(), Match.id.desc())
        ).all()
    )


def list_recent_confirmed(session: Session, limit: int = 20) -> List[Match]:
    return list(
        session.exec(
            select(Match)
            .where(Match.status == MatchStatus.CONFIRMED.value)
            .order_by(Match.played_at.desc(), Match.id.desc())
            .limit(limit)
        ).all()
    )
