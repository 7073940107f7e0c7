"""
Match Constraint Validation

Gate evaluated before a team may record a new match. Read-only.

Rules (evaluated independently, both must pass):
1. Weekly cap: fewer than WEEKLY_MATCH_CAP matches created in the trailing 7 days
   (team on either side, window start inclusive).
2. Cooldown: no match played by the team within the trailing cooldown window.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import List, Optional

from sqlalchemy import or_
from sqlmodel import Session, func, select

from matchday import config
from matchday.errors import CooldownActive, ValidationFailure, WeeklyCapExceeded
from matchday.models.match import Match
from matchday.utils.clock import utcnow
from matchday.utils.sql import scalar_int

logger = logging.getLogger(__name__)

WEEKLY_WINDOW = timedelta(days=7)


@dataclass
class ConstraintCheck:
    """Outcome of validate_match_constraints()."""

    team_id: int
    weekly_count: int = 0
    last_played_at: Optional[datetime] = None
    failures: List[ValidationFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def failure_codes(self) -> List[str]:
        return [f.code for f in self.failures]

    def raise_for_failures(self) -> None:
        if self.failures:
            raise self.failures[0]


def _involves_team(team_id: int):
    return or_(Match.team_a_id == team_id, Match.team_b_id == team_id)


def count_recent_matches(session: Session, team_id: int, since: datetime) -> int:
    """Count matches (either side) created at or after `since`."""
    result = session.exec(
        select(func.count(Match.id)).where(_involves_team(team_id), Match.created_at >= since)
    ).one()
    return scalar_int(result)


def latest_played_since(session: Session, team_id: int, since: datetime) -> Optional[datetime]:
    """played_at of the team's most recent match at or after `since`, if any."""
    match = session.exec(
        select(Match)
        .where(_involves_team(team_id), Match.played_at >= since)
        .order_by(Match.played_at.desc())
        .limit(1)
    ).first()
    return match.played_at if match else None


def validate_match_constraints(session: Session, team_id: int, now: Optional[datetime] = None) -> ConstraintCheck:
    """
    Evaluate the weekly cap and cooldown rules for a team.

    Args:
        session: Database session
        team_id: Team that wants to record a match
        now: Evaluation time (defaults to current UTC time)

    Returns:
        ConstraintCheck; `ok` is True when the team may play.
    """
    now = now or utcnow()
    check = ConstraintCheck(team_id=team_id)

    check.weekly_count = count_recent_matches(session, team_id, now - WEEKLY_WINDOW)
    logger.debug(f"Team {team_id}: {check.weekly_count} matches in trailing 7 days")
    if check.weekly_count >= config.WEEKLY_MATCH_CAP:
        check.failures.append(
            WeeklyCapExceeded(
                f"Team {team_id} reached the weekly limit of {config.WEEKLY_MATCH_CAP} matches"
            )
        )

    cooldown = timedelta(minutes=config.MATCH_COOLDOWN_MINUTES)
    check.last_played_at = latest_played_since(session, team_id, now - cooldown)
    if check.last_played_at is not None:
        check.failures.append(
            CooldownActive(
                f"Team {team_id} played at {check.last_played_at.isoformat()}; "
                f"{config.MATCH_COOLDOWN_MINUTES} minutes must pass between matches"
            )
        )

    return check
