"""
Tournament Group Draw

Randomly partitions a tournament's registered entrants into groups and flips
the tournament from OPEN to ACTIVE.

Algorithm:
1. Load entrants (need at least MIN_DRAW_ENTRANTS)
2. Fisher–Yates shuffle: for i from last index down to 1, swap with a
   uniformly chosen index in [0, i]
3. Entrant at shuffled position i gets label[i mod len(labels)]
   → group sizes differ by at most 1
4. Flip status OPEN→ACTIVE with a conditional UPDATE (status = OPEN) and
   persist every group assignment in the same transaction

A draw runs exactly once per tournament: a second start() fails with
TournamentAlreadyStarted and leaves the existing groups untouched.
"""

import logging
import random
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, MutableSequence, Optional, Sequence, TypeVar

from sqlalchemy import update
from sqlmodel import Session, select

from matchday import config
from matchday.errors import InsufficientEntrants, NotOrganizer, TournamentAlreadyStarted, TournamentNotFound
from matchday.models.tournament import TOURNAMENT_ACTIVE, TOURNAMENT_OPEN, Tournament
from matchday.models.tournament_entry import TournamentEntry
from matchday.utils.clock import utcnow
from matchday.utils.sql import affected_rows

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class DrawResult:
    tournament_id: int
    groups: Dict[str, List[int]] = field(default_factory=dict)  # label → team ids in draw order

    @property
    def group_sizes(self) -> Dict[str, int]:
        return {label: len(team_ids) for label, team_ids in self.groups.items()}


def fisher_yates_shuffle(items: MutableSequence[T], rng: random.Random) -> MutableSequence[T]:
    """In-place uniform shuffle."""
    for i in range(len(items) - 1, 0, -1):
        j = rng.randint(0, i)
        items[i], items[j] = items[j], items[i]
    return items


def assign_group_labels(items: Sequence[T], labels: Sequence[str], rng: random.Random) -> List[tuple]:
    """
    Shuffle `items` and deal them round-robin onto `labels`.

    Returns:
        List of (item, label) pairs in shuffled order.
    """
    if not labels:
        raise ValueError("At least one group label is required")
    shuffled = fisher_yates_shuffle(list(items), rng)
    return [(item, labels[i % len(labels)]) for i, item in enumerate(shuffled)]


def start_tournament(
    session: Session,
    tournament_id: int,
    organizer_id: Optional[int] = None,
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None,
) -> DrawResult:
    """
    Run the group draw and activate the tournament.

    Args:
        session: Database session
        tournament_id: Tournament to draw
        organizer_id: Acting user; when given it must be the organizer
        rng: Random source (injectable for reproducible draws)
        now: Activation time

    Raises:
        TournamentNotFound, NotOrganizer,
        TournamentAlreadyStarted: status is not OPEN (checked again at write time),
        InsufficientEntrants: fewer than MIN_DRAW_ENTRANTS registered
    """
    rng = rng or random.SystemRandom()
    labels = config.DRAW_GROUP_LABELS

    tournament = session.get(Tournament, tournament_id, populate_existing=True)
    if not tournament:
        raise TournamentNotFound(tournament_id)
    if organizer_id is not None and tournament.organizer_id != organizer_id:
        raise NotOrganizer(f"User {organizer_id} does not organize tournament {tournament_id}")
    if tournament.status != TOURNAMENT_OPEN:
        raise TournamentAlreadyStarted(tournament_id)

    entries = session.exec(
        select(TournamentEntry).where(TournamentEntry.tournament_id == tournament_id).order_by(TournamentEntry.id)
    ).all()
    if len(entries) < config.MIN_DRAW_ENTRANTS:
        raise InsufficientEntrants(
            f"Tournament {tournament_id} has {len(entries)} entrants; "
            f"at least {config.MIN_DRAW_ENTRANTS} are needed for the draw"
        )

    assignments = assign_group_labels(entries, labels, rng)

    result = session.exec(
        update(Tournament)
        .where(Tournament.id == tournament_id, Tournament.status == TOURNAMENT_OPEN)
        .values(status=TOURNAMENT_ACTIVE, started_at=now or utcnow())
        .execution_options(synchronize_session=False)
    )
    if affected_rows(result) == 0:
        session.rollback()
        logger.warning(f"Tournament {tournament_id} was started concurrently; draw discarded")
        raise TournamentAlreadyStarted(tournament_id)

    draw = DrawResult(tournament_id=tournament_id, groups={label: [] for label in labels})
    for entry, label in assignments:
        entry.group_name = label
        session.add(entry)
        draw.groups[label].append(entry.team_id)
    session.commit()

    logger.info(f"Tournament {tournament_id} drawn into groups {draw.group_sizes}")
    return draw
