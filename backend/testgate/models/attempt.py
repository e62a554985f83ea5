import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import (
    JSON,
    CheckConstraint,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    Uuid,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from testgate.db.base_class import Base
from testgate.models.constants import ATTEMPT_STATUS_VALUES, OPEN_ATTEMPT_STATUS_VALUES, sql_in
from testgate.models.mixins import TimestampMixin, UUIDPrimaryKeyMixin


class TestAttempt(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = 'test_attempts'
    __test__ = False
    __table_args__ = (
        # Two concurrent starts compute the same attempt_number; only one insert wins.
        UniqueConstraint('test_id', 'membership_id', 'attempt_number', name='uq_test_attempt_member_number'),
        CheckConstraint(sql_in('status', ATTEMPT_STATUS_VALUES), name='test_attempt_status_values'),
        # At most one resumable attempt per member and test.
        Index(
            'uq_test_attempts_one_open',
            'test_id',
            'membership_id',
            unique=True,
            postgresql_where=text(sql_in('status', OPEN_ATTEMPT_STATUS_VALUES)),
            sqlite_where=text(sql_in('status', OPEN_ATTEMPT_STATUS_VALUES)),
        ),
    )

    test_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey('tests.id', ondelete='CASCADE'), nullable=False)
    membership_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey('memberships.id', ondelete='CASCADE'), nullable=False
    )
    attempt_number: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default='IN_PROGRESS')
    started_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    submitted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    grade_earned: Mapped[float | None] = mapped_column(Float, nullable=True)

    answers: Mapped[list['AttemptAnswer']] = relationship(back_populates='attempt', cascade='all, delete-orphan')


class AttemptAnswer(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = 'attempt_answers'
    __table_args__ = (UniqueConstraint('attempt_id', 'question_id', name='uq_attempt_answers_attempt_question'),)

    attempt_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey('test_attempts.id', ondelete='CASCADE'), nullable=False
    )
    question_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey('questions.id', ondelete='CASCADE'), nullable=False
    )
    answer_text: Mapped[str | None] = mapped_column(Text, nullable=True)
    selected_option_ids: Mapped[list[Any]] = mapped_column(JSON, nullable=False, default=list)
    numeric_answer: Mapped[float | None] = mapped_column(Float, nullable=True)
    points_awarded: Mapped[float | None] = mapped_column(Float, nullable=True)
    graded_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    grader_note: Mapped[str | None] = mapped_column(Text, nullable=True)

    attempt: Mapped['TestAttempt'] = relationship(back_populates='answers')
    question: Mapped['Question'] = relationship()


Index('ix_test_attempts_test_id', TestAttempt.test_id)
Index('ix_test_attempts_membership_id', TestAttempt.membership_id)
