import uuid
from datetime import datetime

from sqlalchemy import (
    Boolean,
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
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from testgate.db.base_class import Base
from testgate.models.constants import (
    ASSIGNMENT_SCOPE_VALUES,
    QUESTION_TYPE_VALUES,
    SCORE_RELEASE_MODE_VALUES,
    TEST_STATUS_VALUES,
    sql_in,
)
from testgate.models.mixins import TimestampMixin, UUIDPrimaryKeyMixin


class Test(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = 'tests'
    __test__ = False
    __table_args__ = (
        CheckConstraint(sql_in('status', TEST_STATUS_VALUES), name='test_status_values'),
        CheckConstraint(
            sql_in('score_release_mode', SCORE_RELEASE_MODE_VALUES), name='test_score_release_mode_values'
        ),
        CheckConstraint('max_attempts is null or max_attempts >= 1', name='test_max_attempts_positive'),
    )

    club_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey('clubs.id', ondelete='CASCADE'), nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    instructions: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default='DRAFT', index=True)
    duration_minutes: Mapped[int | None] = mapped_column(Integer, nullable=True)
    start_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    end_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    allow_late_until: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    max_attempts: Mapped[int | None] = mapped_column(Integer, nullable=True)
    score_release_mode: Mapped[str] = mapped_column(String(30), nullable=False, default='FULL_TEST')
    release_scores_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    test_password_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)

    assignments: Mapped[list['TestAssignment']] = relationship(
        back_populates='test', cascade='all, delete-orphan'
    )
    questions: Mapped[list['Question']] = relationship(
        back_populates='test', cascade='all, delete-orphan', order_by='Question.order_index'
    )


class TestAssignment(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = 'test_assignments'
    __test__ = False
    __table_args__ = (
        CheckConstraint(sql_in('assigned_scope', ASSIGNMENT_SCOPE_VALUES), name='test_assignment_scope_values'),
    )

    test_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey('tests.id', ondelete='CASCADE'), nullable=False)
    assigned_scope: Mapped[str] = mapped_column(String(20), nullable=False)
    team_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey('teams.id', ondelete='CASCADE'), nullable=True
    )
    target_membership_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey('memberships.id', ondelete='CASCADE'), nullable=True
    )
    event_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey('events.id', ondelete='CASCADE'), nullable=True
    )

    test: Mapped['Test'] = relationship(back_populates='assignments')


class Question(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = 'questions'
    __table_args__ = (
        UniqueConstraint('test_id', 'order_index', name='uq_questions_test_order'),
        CheckConstraint(sql_in('question_type', QUESTION_TYPE_VALUES), name='question_type_values'),
    )

    test_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey('tests.id', ondelete='CASCADE'), nullable=False)
    order_index: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    question_type: Mapped[str] = mapped_column(String(20), nullable=False)
    prompt_md: Mapped[str] = mapped_column(Text, nullable=False)
    points: Mapped[float] = mapped_column(Float, nullable=False, default=1)
    explanation: Mapped[str | None] = mapped_column(Text, nullable=True)

    test: Mapped['Test'] = relationship(back_populates='questions')
    options: Mapped[list['QuestionOption']] = relationship(
        back_populates='question', cascade='all, delete-orphan', order_by='QuestionOption.order_index'
    )


class QuestionOption(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = 'question_options'
    __table_args__ = (
        UniqueConstraint('question_id', 'order_index', name='uq_question_options_question_order'),
    )

    question_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey('questions.id', ondelete='CASCADE'), nullable=False
    )
    label: Mapped[str] = mapped_column(Text, nullable=False)
    is_correct: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    order_index: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    question: Mapped['Question'] = relationship(back_populates='options')


Index('ix_tests_club_id', Test.club_id)
Index('ix_test_assignments_test_id', TestAssignment.test_id)
Index('ix_questions_test_id', Question.test_id)
