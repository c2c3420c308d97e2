"""initial review sharing schema

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-18 00:00:00

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None

session_status = sa.Enum(
    "PENDING", "SCHEDULED", "ONGOING", "COMPLETED", "CANCELLED", "REJECTED",
    name="sessionstatus",
)
payment_status = sa.Enum("PENDING", "SUCCESS", "FAILED", "REFUNDED", name="paymentstatus")
schedule_status = sa.Enum("LOCKED", "UPCOMING", "COMPLETED", name="schedulestatus")
document_type = sa.Enum("RESUME", "COVER_LETTER", name="documenttype")
review_status = sa.Enum("PENDING", "VERIFIED", "REJECTED", name="reviewstatus")


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("role", sa.String(20), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=True),
        sa.Column("created_at", sa.TIMESTAMP(), server_default=sa.func.now()),
        sa.Column("updated_at", sa.TIMESTAMP()),
    )
    op.create_index("ix_users_id", "users", ["id"])
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "sessions",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("student_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("mentor_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("skill_name", sa.String(100), nullable=False),
        sa.Column("status", session_status, nullable=False),
        sa.Column("created_at", sa.TIMESTAMP(), server_default=sa.func.now()),
        sa.Column("updated_at", sa.TIMESTAMP()),
    )
    op.create_index("ix_sessions_id", "sessions", ["id"])
    op.create_index("ix_sessions_student_id", "sessions", ["student_id"])
    op.create_index("ix_sessions_mentor_id", "sessions", ["mentor_id"])

    op.create_table(
        "payments",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "session_id", sa.Integer(),
            sa.ForeignKey("sessions.id", ondelete="CASCADE"),
            nullable=False, unique=True,
        ),
        sa.Column("amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("status", payment_status, nullable=False),
        sa.Column("created_at", sa.TIMESTAMP(), server_default=sa.func.now()),
        sa.Column("updated_at", sa.TIMESTAMP()),
    )
    op.create_index("ix_payments_id", "payments", ["id"])

    op.create_table(
        "session_schedule",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "session_id", sa.Integer(),
            sa.ForeignKey("sessions.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(200)),
        sa.Column("scheduled_date", sa.TIMESTAMP()),
        sa.Column("status", schedule_status, nullable=False),
    )
    op.create_index("ix_session_schedule_id", "session_schedule", ["id"])
    op.create_index("ix_session_schedule_session_id", "session_schedule", ["session_id"])

    op.create_table(
        "review_requests",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("document_id", sa.Integer(), nullable=False),
        sa.Column("document_type", document_type, nullable=False),
        sa.Column(
            "student_id", sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column(
            "mentor_id", sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("status", review_status, nullable=False),
        sa.Column("rating", sa.Integer()),
        sa.Column("feedback", sa.Text()),
        sa.Column("created_at", sa.TIMESTAMP(), server_default=sa.func.now()),
        sa.Column("reviewed_at", sa.TIMESTAMP()),
        sa.Column("updated_at", sa.TIMESTAMP(), server_default=sa.func.now()),
        sa.UniqueConstraint(
            "document_id", "document_type", "student_id",
            name="uq_review_request_document",
        ),
        sa.CheckConstraint(
            "rating IS NULL OR (rating >= 1 AND rating <= 5)",
            name="check_review_rating_range",
        ),
    )
    op.create_index("ix_review_requests_id", "review_requests", ["id"])
    op.create_index("ix_review_requests_document_id", "review_requests", ["document_id"])
    op.create_index("ix_review_requests_student_id", "review_requests", ["student_id"])
    op.create_index("ix_review_requests_mentor_id", "review_requests", ["mentor_id"])

    op.create_table(
        "notifications",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "recipient_id", sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column(
            "actor_id", sa.Integer(),
            sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True,
        ),
        sa.Column(
            "review_request_id", sa.Integer(),
            sa.ForeignKey("review_requests.id", ondelete="SET NULL"), nullable=True,
        ),
        sa.Column("event_type", sa.String(50), nullable=False),
        sa.Column("message", sa.String(500), nullable=False),
        sa.Column("is_read", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.TIMESTAMP(), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_notifications_id", "notifications", ["id"])
    op.create_index("ix_notifications_recipient_id", "notifications", ["recipient_id"])
    op.create_index("ix_notifications_actor_id", "notifications", ["actor_id"])
    op.create_index("ix_notifications_review_request_id", "notifications", ["review_request_id"])
    op.create_index("ix_notifications_event_type", "notifications", ["event_type"])


def downgrade() -> None:
    op.drop_table("notifications")
    op.drop_table("review_requests")
    op.drop_table("session_schedule")
    op.drop_table("payments")
    op.drop_table("sessions")
    op.drop_table("users")
    bind = op.get_bind()
    for enum_type in (review_status, document_type, schedule_status, payment_status, session_status):
        enum_type.drop(bind, checkfirst=True)
