"""
Team formation and roster management.

- Team names are unique within a zone
- A user belongs to at most one team
- A team starts as DRAFT and becomes ACTIVE once TEAM_ACTIVATION_SIZE members
  have joined (conditional update, only from DRAFT)
- Rosters are capped at TEAM_MAX_MEMBERS
- The captain cannot leave the team
"""

import logging
from typing import List, Optional

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, func, select

from matchday import config
from matchday.errors import AlreadyOnTeam, CaptainCannotLeave, DuplicateTeamName, NotAMember, TeamNotFound, TeamRosterFull
from matchday.models.team import TEAM_ACTIVE, TEAM_DRAFT, Team
from matchday.models.team_member import ROLE_CAPTAIN, ROLE_PLAYER, TeamMember
from matchday.utils.sql import affected_rows, scalar_int

logger = logging.getLogger(__name__)

CAPTAIN_JERSEY_NUMBER = 10


def get_team(session: Session, team_id: int) -> Team:
    team = session.get(Team, team_id)
    if not team:
        raise TeamNotFound(team_id)
    return team


def is_name_taken(session: Session, name: str, zone_id: int) -> bool:
    existing = session.exec(select(Team.id).where(Team.name == name.strip(), Team.zone_id == zone_id)).first()
    return existing is not None


def get_membership(session: Session, user_id: int) -> Optional[TeamMember]:
    return session.exec(select(TeamMember).where(TeamMember.user_id == user_id)).first()


def count_members(session: Session, team_id: int) -> int:
    return scalar_int(session.exec(select(func.count(TeamMember.id)).where(TeamMember.team_id == team_id)).one())


def create_team(session: Session, captain_id: int, name: str, zone_id: int) -> Team:
    """
    Create a DRAFT team with its captain as first member (one transaction).

    Raises:
        DuplicateTeamName: name already used in the zone
        AlreadyOnTeam: captain already plays for a team
    """
    name = name.strip()
    if is_name_taken(session, name, zone_id):
        raise DuplicateTeamName(f"Team name '{name}' is already taken in zone {zone_id}")
    if get_membership(session, captain_id):
        raise AlreadyOnTeam(f"User {captain_id} already belongs to a team")

    team = Team(name=name, zone_id=zone_id, captain_id=captain_id, status=TEAM_DRAFT, total_matches=0)
    session.add(team)
    session.flush()
    session.add(
        TeamMember(team_id=team.id, user_id=captain_id, role=ROLE_CAPTAIN, jersey_number=CAPTAIN_JERSEY_NUMBER)
    )
    try:
        session.commit()
    except IntegrityError:
        session.rollback()
        raise AlreadyOnTeam(f"User {captain_id} already belongs to a team")
    session.refresh(team)
    logger.info(f"Team {team.id} '{team.name}' created in zone {zone_id} by user {captain_id}")
    return team


def join_team(session: Session, user_id: int, team_id: int, jersey_number: Optional[int] = None) -> TeamMember:
    """
    Add a player to a team, activating the team when it reaches the threshold.

    Raises:
        TeamNotFound, AlreadyOnTeam, TeamRosterFull
    """
    team = get_team(session, team_id)
    if get_membership(session, user_id):
        raise AlreadyOnTeam(f"User {user_id} already belongs to a team")

    member_count = count_members(session, team.id)
    if member_count >= config.TEAM_MAX_MEMBERS:
        raise TeamRosterFull(f"Team {team.id} already has {config.TEAM_MAX_MEMBERS} players")

    member = TeamMember(team_id=team.id, user_id=user_id, role=ROLE_PLAYER, jersey_number=jersey_number)
    session.add(member)
    try:
        session.flush()
    except IntegrityError:
        session.rollback()
        raise AlreadyOnTeam(f"User {user_id} already belongs to a team")

    # Re-count with our row in place; a concurrent join may have taken the last slot
    member_count = count_members(session, team.id)
    if member_count > config.TEAM_MAX_MEMBERS:
        session.rollback()
        raise TeamRosterFull(f"Team {team.id} already has {config.TEAM_MAX_MEMBERS} players")

    if member_count >= config.TEAM_ACTIVATION_SIZE:
        result = session.exec(
            update(Team).where(Team.id == team.id, Team.status == TEAM_DRAFT).values(status=TEAM_ACTIVE)
        )
        if affected_rows(result):
            logger.info(f"Team {team.id} reached {member_count} members and is now ACTIVE")

    session.commit()
    session.refresh(member)
    return member


def leave_team(session: Session, user_id: int, team_id: int) -> None:
    """
    Raises:
        NotAMember: user is not on this team
        CaptainCannotLeave: captains must hand over or disband first
    """
    member = session.exec(
        select(TeamMember).where(TeamMember.team_id == team_id, TeamMember.user_id == user_id)
    ).first()
    if not member:
        raise NotAMember(f"User {user_id} is not a member of team {team_id}")
    if member.role == ROLE_CAPTAIN:
        raise CaptainCannotLeave("The captain cannot leave; appoint a new captain or disband the team")

    session.delete(member)
    session.commit()
    logger.info(f"User {user_id} left team {team_id}")


def get_roster(session: Session, team_id: int) -> List[TeamMember]:
    get_team(session, team_id)
    return list(
        session.exec(
            select(TeamMember).where(TeamMember.team_id == team_id).order_by(TeamMember.joined_at, TeamMember.id)
        ).all()
    )
