"""
Match Result Submission

Records a reported match as one header row plus lineup and goal rows.

Write discipline:
- Header, lineup and events share one outer transaction, so a crash before
  commit leaves no partial match behind.
- Lineup and events each run inside a SAVEPOINT. If one of those inserts fails
  only its savepoint is rolled back; the failure is logged and reported as a
  warning and the header still commits as PENDING_VERIFICATION.
- A failure writing the header fails the whole submission.

The submitter must captain one of the two teams; that team is the
submitting side. Constraint validation (weekly cap / cooldown) of the
submitting side is the caller's job and must run before submit_match_result().
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from matchday import config
from matchday.errors import NotACaptain, TeamNotFound, ValidationFailure
from matchday.models.match import Match, MatchStatus
from matchday.models.match_event import EVENT_GOAL, MatchEvent
from matchday.models.match_lineup import MatchLineup
from matchday.models.team import Team
from matchday.models.team_member import TeamMember
from matchday.services.notification_service import MATCH_VERIFY, dispatch_quietly
from matchday.utils.clock import utcnow

logger = logging.getLogger(__name__)

WARNING_LINEUP_BELOW_MINIMUM = "LINEUP_BELOW_MINIMUM"
WARNING_LINEUP_WRITE_FAILED = "LINEUP_WRITE_FAILED"
WARNING_EVENTS_WRITE_FAILED = "EVENTS_WRITE_FAILED"


class InvalidMatchSubmission(ValidationFailure):
    code = "INVALID_MATCH_SUBMISSION"


@dataclass
class MatchSubmission:
    creator_id: int
    team_a_id: int
    team_b_id: int
    score_a: int
    score_b: int
    lineup: Sequence[int]
    scorers: Optional[Sequence[int]] = None
    venue_id: Optional[int] = None
    season_id: Optional[int] = None


@dataclass
class SubmissionResult:
    match_id: int
    status: str
    lineup_written: int = 0
    events_written: int = 0
    warnings: List[str] = field(default_factory=list)


def _load_team(session: Session, team_id: int) -> Team:
    team = session.get(Team, team_id)
    if not team:
        raise TeamNotFound(team_id)
    return team


def _validate_submission(submission: MatchSubmission) -> None:
    if submission.team_a_id == submission.team_b_id:
        raise InvalidMatchSubmission("A team cannot play against itself")
    if submission.score_a < 0 or submission.score_b < 0:
        raise InvalidMatchSubmission("Scores cannot be negative")


def resolve_submitting_team(session: Session, creator_id: int, team_a_id: int, team_b_id: int) -> Team:
    """The team in this match captained by `creator_id`."""
    for team_id in (team_a_id, team_b_id):
        team = _load_team(session, team_id)
        if team.captain_id == creator_id:
            return team
    raise NotACaptain(f"User {creator_id} captains neither team {team_a_id} nor team {team_b_id}")


def _roster_teams(session: Session, player_ids: Sequence[int], team_ids: Sequence[int]) -> Dict[int, int]:
    """player_id → team_id for players rostered on one of `team_ids`."""
    if not player_ids:
        return {}
    members = session.exec(
        select(TeamMember).where(
            TeamMember.user_id.in_(list(player_ids)),  # type: ignore
            TeamMember.team_id.in_(list(team_ids)),  # type: ignore
        )
    ).all()
    return {m.user_id: m.team_id for m in members}


def build_lineup_rows(
    match: Match, lineup: Sequence[int], roster: Dict[int, int], guest_team_id: int
) -> List[MatchLineup]:
    # Players on neither roster (guests, jokers) count for the submitting side
    return [
        MatchLineup(
            match_id=match.id,
            team_id=roster.get(player_id, guest_team_id),
            player_id=player_id,
            is_starter=True,
            xp_earned=0,
        )
        for player_id in lineup
    ]


def build_event_rows(match: Match, scorers: Sequence[int]) -> List[MatchEvent]:
    return [MatchEvent(match_id=match.id, player_id=player_id, event_type=EVENT_GOAL) for player_id in scorers]


def _write_in_savepoint(session: Session, build_rows, label: str) -> Optional[int]:
    """Insert rows inside a savepoint. Returns row count, or None if the insert failed."""
    try:
        with session.begin_nested():
            rows = build_rows()
            session.add_all(rows)
            session.flush()
        return len(rows)
    except SQLAlchemyError as e:
        logger.warning(f"{label} insert failed; match header kept: {e}")
        return None


def submit_match_result(
    session: Session,
    submission: MatchSubmission,
    now: Optional[datetime] = None,
) -> SubmissionResult:
    """
    Record a reported match.

    Creates the Match (status PENDING_VERIFICATION, played_at = now), one
    starter lineup row per distinct lineup player, and one GOAL event per
    scorer entry. Notifies the opposing captain after commit.

    Returns:
        SubmissionResult with the new match id and any soft warnings.

    Raises:
        TeamNotFound: either team does not exist
        NotACaptain: the creator captains neither team
        InvalidMatchSubmission: same team on both sides / negative score
        SQLAlchemyError: the header insert failed (nothing is written)
    """
    _validate_submission(submission)
    team_a = _load_team(session, submission.team_a_id)
    team_b = _load_team(session, submission.team_b_id)
    submitting = resolve_submitting_team(session, submission.creator_id, team_a.id, team_b.id)
    opponent = team_b if submitting.id == team_a.id else team_a
    now = now or utcnow()

    lineup = list(dict.fromkeys(submission.lineup))
    scorers = list(submission.scorers or [])
    warnings: List[str] = []
    if len(lineup) < config.MIN_LINEUP_SIZE:
        logger.warning(
            f"Lineup for team {team_a.id} vs {team_b.id} has {len(lineup)} players "
            f"(minimum {config.MIN_LINEUP_SIZE}); submitting anyway"
        )
        warnings.append(WARNING_LINEUP_BELOW_MINIMUM)

    roster = _roster_teams(session, lineup, [team_a.id, team_b.id])

    match = Match(
        season_id=submission.season_id,
        team_a_id=team_a.id,
        team_b_id=team_b.id,
        venue_id=submission.venue_id,
        score_a=submission.score_a,
        score_b=submission.score_b,
        creator_id=submission.creator_id,
        status=MatchStatus.PENDING_VERIFICATION.value,
        played_at=now,
        created_at=now,
    )
    try:
        session.add(match)
        session.flush()
    except SQLAlchemyError:
        session.rollback()
        raise

    lineup_written = 0
    if lineup:
        written = _write_in_savepoint(
            session, lambda: build_lineup_rows(match, lineup, roster, submitting.id), "Lineup"
        )
        if written is None:
            warnings.append(WARNING_LINEUP_WRITE_FAILED)
        else:
            lineup_written = written

    events_written = 0
    if scorers:
        written = _write_in_savepoint(session, lambda: build_event_rows(match, scorers), "Match event")
        if written is None:
            warnings.append(WARNING_EVENTS_WRITE_FAILED)
        else:
            events_written = written

    try:
        session.commit()
    except SQLAlchemyError:
        session.rollback()
        raise
    session.refresh(match)

    logger.info(
        f"Match {match.id} submitted by user {submission.creator_id}: "
        f"team {team_a.id} {match.score_a}-{match.score_b} team {team_b.id} "
        f"({lineup_written} lineup, {events_written} goals)"
    )

    dispatch_quietly(
        session,
        opponent.captain_id,
        MATCH_VERIFY,
        "Confirm match result",
        f"{team_a.name} ({match.score_a}) - ({match.score_b}) {team_b.name}",
    )

    return SubmissionResult(
        match_id=match.id,
        status=match.status,
        lineup_written=lineup_written,
        events_written=events_written,
        warnings=warnings,
    )
