from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field

from testgate.schemas.common import BaseSchema


class AttemptUsageOut(BaseSchema):
    attempts_used: int
    max_attempts: int | None
    has_reached_limit: bool


class TestSummaryOut(BaseSchema):
    id: UUID
    club_id: UUID
    name: str
    description: str | None
    instructions: str | None = None
    status: str
    duration_minutes: int | None
    start_at: datetime | None
    end_at: datetime | None
    allow_late_until: datetime | None
    max_attempts: int | None
    score_release_mode: str
    release_scores_at: datetime | None
    created_at: datetime
    updated_at: datetime


class ClubTestListResponse(BaseModel):
    items: list[TestSummaryOut]
    # Keyed by test id; empty for administrators.
    user_attempts: dict[UUID, AttemptUsageOut] = Field(default_factory=dict)


class AttemptSummaryOut(BaseSchema):
    id: UUID
    attempt_number: int
    status: str
    started_at: datetime | None
    submitted_at: datetime | None
    grade_earned: float | None = None


class TestDetailResponse(BaseModel):
    test: TestSummaryOut
    questions: list[dict[str, Any]]
    is_admin: bool
    user_attempts: list[AttemptSummaryOut] | None = None
    completed_attempts: int | None = None
    usage: AttemptUsageOut | None = None


class AttemptStartRequest(BaseModel):
    test_password: str | None = None


class AttemptStartResponse(BaseModel):
    attempt: AttemptSummaryOut
    resumed: bool


class TestReleaseOut(BaseModel):
    id: UUID
    score_release_mode: str
    release_scores_at: datetime | None
    scores_released: bool
    disclosure_level: str


class MyAttemptsResponse(BaseModel):
    attempts: list[dict[str, Any]]
    test: TestReleaseOut


class TestAttemptListResponse(BaseModel):
    attempts: list[dict[str, Any]]


class AttemptDetailResponse(BaseModel):
    attempt: dict[str, Any]
    disclosure_level: str
