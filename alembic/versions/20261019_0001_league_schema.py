"""league schema

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19 00:00:00.000000
"""
from __future__ import annotations

import sqlalchemy as sa
import sqlmodel

from alembic import op

# revision identifiers, used by Alembic.
revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None

_HOLES = range(1, 19)


def upgrade() -> None:
    op.create_table(
        "user",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("username", sqlmodel.AutoString(length=32), nullable=False),
        sa.Column("email", sqlmodel.AutoString(length=255), nullable=True),
        sa.Column("name", sqlmodel.AutoString(length=120), nullable=False),
        sa.Column("password_hash", sqlmodel.AutoString(length=255), nullable=True),
        sa.Column("strokes_given", sa.Integer(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("is_admin", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username", name="uq_users_username"),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )
    op.create_index("ix_user_username", "user", ["username"])
    op.create_index("ix_user_email", "user", ["email"])
    op.create_index("ix_user_is_active", "user", ["is_active"])
    op.create_index("ix_user_is_admin", "user", ["is_admin"])

    op.create_table(
        "season",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("name", sqlmodel.AutoString(length=120), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("year", name="uq_season_year"),
    )
    op.create_index("ix_season_year", "season", ["year"])
    op.create_index("ix_season_is_active", "season", ["is_active"])

    op.create_table(
        "teetimetemplate",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("season_id", sa.Uuid(), nullable=False),
        sa.Column("day_of_week", sa.Integer(), nullable=False),
        sa.Column("time_slots", sa.JSON(), nullable=True),
        sa.Column("max_slots_per_time", sa.Integer(), nullable=False),
        sa.Column("booking_opens_days_before", sa.Integer(), nullable=False),
        sa.Column("booking_opens_time", sqlmodel.AutoString(length=5), nullable=False),
        sa.Column("booking_closes_days_before", sa.Integer(), nullable=False),
        sa.Column("booking_closes_time", sqlmodel.AutoString(length=5), nullable=False),
        sa.Column("timezone", sqlmodel.AutoString(length=64), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["season_id"], ["season.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("season_id", "day_of_week", name="uq_teetimetemplate_season_day"),
    )
    op.create_index("ix_teetimetemplate_season_id", "teetimetemplate", ["season_id"])

    op.create_table(
        "teetime",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("season_id", sa.Uuid(), nullable=False),
        sa.Column("template_id", sa.Uuid(), nullable=True),
        sa.Column(
            "origin",
            sa.Enum("TEMPLATE", "MANUAL", name="teetimeorigin"),
            nullable=False,
        ),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("time", sa.Time(), nullable=False),
        sa.Column("max_slots", sa.Integer(), nullable=False),
        sa.Column("booking_opens_at", sa.DateTime(), nullable=False),
        sa.Column("booking_closes_at", sa.DateTime(), nullable=False),
        sa.Column("is_available", sa.Boolean(), nullable=False),
        sa.Column("lock_version", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["season_id"], ["season.id"]),
        sa.ForeignKeyConstraint(["template_id"], ["teetimetemplate.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("date", "time", name="uq_teetime_date_time"),
    )
    op.create_index("ix_teetime_season_id", "teetime", ["season_id"])
    op.create_index("ix_teetime_template_id", "teetime", ["template_id"])
    op.create_index("ix_teetime_date", "teetime", ["date"])

    op.create_table(
        "reservation",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("tee_time_id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("slots", sa.Integer(), nullable=False),
        sa.Column("player_names", sa.JSON(), nullable=True),
        sa.Column("play_for_money", sa.JSON(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["tee_time_id"], ["teetime.id"]),
        sa.ForeignKeyConstraint(["user_id"], ["user.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_reservation_tee_time_id", "reservation", ["tee_time_id"])
    op.create_index("ix_reservation_user_id", "reservation", ["user_id"])
    op.create_index("ix_reservation_created_at", "reservation", ["created_at"])

    op.create_table(
        "round",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("season_id", sa.Uuid(), nullable=False),
        sa.Column("submitted_by", sa.Uuid(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["season_id"], ["season.id"]),
        sa.ForeignKeyConstraint(["submitted_by"], ["user.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_round_date", "round", ["date"])
    op.create_index("ix_round_season_id", "round", ["season_id"])
    op.create_index("ix_round_submitted_by", "round", ["submitted_by"])

    op.create_table(
        "score",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("round_id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        *[sa.Column(f"hole_{number}", sa.Integer(), nullable=True) for number in _HOLES],
        *[sa.Column(f"net_hole_{number}", sa.Integer(), nullable=True) for number in _HOLES],
        sa.Column("total_score", sa.Integer(), nullable=False),
        sa.Column("net_total_score", sa.Integer(), nullable=False),
        sa.Column("strokes_given", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["round_id"], ["round.id"]),
        sa.ForeignKeyConstraint(["user_id"], ["user.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("round_id", "user_id", name="uq_score_round_user"),
    )
    op.create_index("ix_score_round_id", "score", ["round_id"])
    op.create_index("ix_score_user_id", "score", ["user_id"])
    op.create_index("ix_score_total_score", "score", ["total_score"])
    op.create_index("ix_score_net_total_score", "score", ["net_total_score"])


def downgrade() -> None:
    for table in ("score", "round", "reservation", "teetime", "teetimetemplate", "season", "user"):
        op.drop_table(table)
    sa.Enum(name="teetimeorigin").drop(op.get_bind(), checkfirst=True)
