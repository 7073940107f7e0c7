"""Initial matchday schema

Revision ID: 001_initial
Revises:
Create Date: 2026-10-18 00:00:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa
from sqlalchemy import inspect

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    bind = op.get_bind()
    tables = inspect(bind).get_table_names()

    if "team" not in tables:
        op.create_table(
            "team",
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("name", sa.String(), nullable=False),
            sa.Column("zone_id", sa.Integer(), nullable=False),
            sa.Column("captain_id", sa.Integer(), nullable=False),
            sa.Column("status", sa.String(), nullable=False),
            sa.Column("total_matches", sa.Integer(), nullable=False),
            sa.Column("created_at", sa.DateTime(), nullable=False),
            sa.PrimaryKeyConstraint("id"),
            sa.UniqueConstraint("zone_id", "name", name="uq_zone_team_name"),
        )
        op.create_index(op.f("ix_team_zone_id"), "team", ["zone_id"], unique=False)
        op.create_index(op.f("ix_team_captain_id"), "team", ["captain_id"], unique=False)

    if "team_member" not in tables:
        op.create_table(
            "team_member",
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("team_id", sa.Integer(), nullable=False),
            sa.Column("user_id", sa.Integer(), nullable=False),
            sa.Column("role", sa.String(), nullable=False),
            sa.Column("jersey_number", sa.Integer(), nullable=True),
            sa.Column("joined_at", sa.DateTime(), nullable=False),
            sa.ForeignKeyConstraint(["team_id"], ["team.id"]),
            sa.PrimaryKeyConstraint("id"),
            sa.UniqueConstraint("user_id", name="uq_team_member_user"),
        )
        op.create_index(op.f("ix_team_member_team_id"), "team_member", ["team_id"], unique=False)

    if "match" not in tables:
        op.create_table(
            "match",
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("season_id", sa.Integer(), nullable=True),
            sa.Column("team_a_id", sa.Integer(), nullable=False),
            sa.Column("team_b_id", sa.Integer(), nullable=False),
            sa.Column("venue_id", sa.Integer(), nullable=True),
            sa.Column("score_a", sa.Integer(), nullable=False),
            sa.Column("score_b", sa.Integer(), nullable=False),
            sa.Column("creator_id", sa.Integer(), nullable=False),
            sa.Column("status", sa.String(), nullable=False),
            sa.Column("played_at", sa.DateTime(), nullable=False),
            sa.Column("created_at", sa.DateTime(), nullable=False),
            sa.Column("resolved_at", sa.DateTime(), nullable=True),
            sa.ForeignKeyConstraint(["team_a_id"], ["team.id"]),
            sa.ForeignKeyConstraint(["team_b_id"], ["team.id"]),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index(op.f("ix_match_team_a_id"), "match", ["team_a_id"], unique=False)
        op.create_index(op.f("ix_match_team_b_id"), "match", ["team_b_id"], unique=False)
        op.create_index(op.f("ix_match_status"), "match", ["status"], unique=False)
        op.create_index(op.f("ix_match_played_at"), "match", ["played_at"], unique=False)
        op.create_index(op.f("ix_match_created_at"), "match", ["created_at"], unique=False)

    if "match_lineup" not in tables:
        op.create_table(
            "match_lineup",
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("match_id", sa.Integer(), nullable=False),
            sa.Column("team_id", sa.Integer(), nullable=False),
            sa.Column("player_id", sa.Integer(), nullable=False),
            sa.Column("is_starter", sa.Boolean(), nullable=False),
            sa.Column("xp_earned", sa.Integer(), nullable=False),
            sa.ForeignKeyConstraint(["match_id"], ["match.id"]),
            sa.ForeignKeyConstraint(["team_id"], ["team.id"]),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index(op.f("ix_match_lineup_match_id"), "match_lineup", ["match_id"], unique=False)

    if "match_event" not in tables:
        op.create_table(
            "match_event",
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("match_id", sa.Integer(), nullable=False),
            sa.Column("player_id", sa.Integer(), nullable=False),
            sa.Column("event_type", sa.String(), nullable=False),
            sa.Column("minute", sa.Integer(), nullable=True),
            sa.ForeignKeyConstraint(["match_id"], ["match.id"]),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index(op.f("ix_match_event_match_id"), "match_event", ["match_id"], unique=False)

    if "match_verification" not in tables:
        op.create_table(
            "match_verification",
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("match_id", sa.Integer(), nullable=False),
            sa.Column("verifier_id", sa.Integer(), nullable=False),
            sa.Column("action", sa.String(), nullable=False),
            sa.Column("created_at", sa.DateTime(), nullable=False),
            sa.ForeignKeyConstraint(["match_id"], ["match.id"]),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index(op.f("ix_match_verification_match_id"), "match_verification", ["match_id"], unique=False)

    if "operations_request" not in tables:
        op.create_table(
            "operations_request",
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("requester_id", sa.Integer(), nullable=False),
            sa.Column("zone_id", sa.Integer(), nullable=False),
            sa.Column("type", sa.String(), nullable=False),
            sa.Column("match_time", sa.DateTime(), nullable=True),
            sa.Column("venue_name", sa.String(), nullable=True),
            sa.Column("details", sa.JSON(), nullable=False),
            sa.Column("status", sa.String(), nullable=False),
            sa.Column("responder_id", sa.Integer(), nullable=True),
            sa.Column("created_at", sa.DateTime(), nullable=False),
            sa.Column("locked_at", sa.DateTime(), nullable=True),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index(op.f("ix_operations_request_requester_id"), "operations_request", ["requester_id"], unique=False)
        op.create_index(op.f("ix_operations_request_zone_id"), "operations_request", ["zone_id"], unique=False)
        op.create_index(op.f("ix_operations_request_status"), "operations_request", ["status"], unique=False)
        op.create_index(op.f("ix_operations_request_created_at"), "operations_request", ["created_at"], unique=False)

    if "tournament" not in tables:
        op.create_table(
            "tournament",
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("organizer_id", sa.Integer(), nullable=False),
            sa.Column("name", sa.String(), nullable=False),
            sa.Column("status", sa.String(), nullable=False),
            sa.Column("config", sa.JSON(), nullable=False),
            sa.Column("created_at", sa.DateTime(), nullable=False),
            sa.Column("started_at", sa.DateTime(), nullable=True),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index(op.f("ix_tournament_organizer_id"), "tournament", ["organizer_id"], unique=False)

    if "tournament_entry" not in tables:
        op.create_table(
            "tournament_entry",
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("tournament_id", sa.Integer(), nullable=False),
            sa.Column("team_id", sa.Integer(), nullable=False),
            sa.Column("group_name", sa.String(), nullable=True),
            sa.Column("points", sa.Integer(), nullable=False),
            sa.Column("goal_diff", sa.Integer(), nullable=False),
            sa.Column("goals_for", sa.Integer(), nullable=False),
            sa.Column("played", sa.Integer(), nullable=False),
            sa.ForeignKeyConstraint(["tournament_id"], ["tournament.id"]),
            sa.ForeignKeyConstraint(["team_id"], ["team.id"]),
            sa.PrimaryKeyConstraint("id"),
            sa.UniqueConstraint("tournament_id", "team_id", name="uq_tournament_entry_team"),
        )
        op.create_index(op.f("ix_tournament_entry_tournament_id"), "tournament_entry", ["tournament_id"], unique=False)

    if "notification" not in tables:
        op.create_table(
            "notification",
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("user_id", sa.Integer(), nullable=False),
            sa.Column("notification_type", sa.String(), nullable=False),
            sa.Column("title", sa.String(), nullable=False),
            sa.Column("message", sa.String(), nullable=False),
            sa.Column("is_read", sa.Boolean(), nullable=False),
            sa.Column("created_at", sa.DateTime(), nullable=False),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index(op.f("ix_notification_user_id"), "notification", ["user_id"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_notification_user_id"), table_name="notification")
    op.drop_table("notification")

    op.drop_index(op.f("ix_tournament_entry_tournament_id"), table_name="tournament_entry")
    op.drop_table("tournament_entry")
    op.drop_index(op.f("ix_tournament_organizer_id"), table_name="tournament")
    op.drop_table("tournament")

    op.drop_index(op.f("ix_operations_request_created_at"), table_name="operations_request")
    op.drop_index(op.f("ix_operations_request_status"), table_name="operations_request")
    op.drop_index(op.f("ix_operations_request_zone_id"), table_name="operations_request")
    op.drop_index(op.f("ix_operations_request_requester_id"), table_name="operations_request")
    op.drop_table("operations_request")

    op.drop_index(op.f("ix_match_verification_match_id"), table_name="match_verification")
    op.drop_table("match_verification")
    op.drop_index(op.f("ix_match_event_match_id"), table_name="match_event")
    op.drop_table("match_event")
    op.drop_index(op.f("ix_match_lineup_match_id"), table_name="match_lineup")
    op.drop_table("match_lineup")

    op.drop_index(op.f("ix_match_created_at"), table_name="match")
    op.drop_index(op.f("ix_match_played_at"), table_name="match")
    op.drop_index(op.f("ix_match_status"), table_name="match")
    op.drop_index(op.f("ix_match_team_b_id"), table_name="match")
    op.drop_index(op.f("ix_match_team_a_id"), table_name="match")
    op.drop_table("match")

    op.drop_index(op.f("ix_team_member_team_id"), table_name="team_member")
    op.drop_table("team_member")
    op.drop_index(op.f("ix_team_captain_id"), table_name="team")
    op.drop_index(op.f("ix_team_zone_id"), table_name="team")
    op.drop_table("team")
