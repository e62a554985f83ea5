from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID


RecordId = UUID | str
Timestamp = datetime | str | None

TEST_STATUS_VALUES = ['DRAFT', 'PUBLISHED', 'CLOSED']
ASSIGNMENT_SCOPE_VALUES = ['CLUB', 'TEAM', 'PERSONAL']
SCORE_RELEASE_MODE_VALUES = ['NONE', 'SCORE_ONLY', 'SCORE_WITH_WRONG', 'FULL_TEST']
ATTEMPT_STATUS_VALUES = ['NOT_STARTED', 'IN_PROGRESS', 'SUBMITTED', 'GRADED']

# Attempts in these states occupy a slot; anything else can still be resumed.
COMPLETED_ATTEMPT_STATUSES = frozenset({'SUBMITTED', 'GRADED'})
OPEN_ATTEMPT_STATUSES = frozenset({'NOT_STARTED', 'IN_PROGRESS'})

# Least to most permissive.
DISCLOSURE_LEVELS = ('NONE', 'SCORE_ONLY', 'SCORE_WITH_WRONG', 'FULL')


@dataclass(frozen=True)
class MemberRecord:
    """A membership in one club, with roster events scoped to that club."""

    id: RecordId
    club_id: RecordId
    team_id: RecordId | None = None
    roster_event_ids: frozenset[RecordId] = field(default_factory=frozenset)


@dataclass(frozen=True)
class TestRecord:
    __test__ = False

    id: RecordId
    club_id: RecordId
    status: str = 'DRAFT'
    max_attempts: int | None = None
    score_release_mode: str = 'NONE'
    release_scores_at: Timestamp = None
    start_at: Timestamp = None
    end_at: Timestamp = None
    allow_late_until: Timestamp = None


@dataclass(frozen=True)
class AssignmentRule:
    scope: str
    team_id: RecordId | None = None
    target_membership_id: RecordId | None = None
    event_id: RecordId | None = None


@dataclass(frozen=True)
class AttemptRecord:
    id: RecordId
    membership_id: RecordId
    test_id: RecordId
    status: str
