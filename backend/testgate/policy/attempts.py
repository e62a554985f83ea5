from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from testgate.policy.types import COMPLETED_ATTEMPT_STATUSES, AttemptRecord, MemberRecord, RecordId, TestRecord


@dataclass(frozen=True)
class AttemptUsage:
    attempts_used: int
    max_attempts: int | None
    has_reached_limit: bool


def _limit_reached(attempts_used: int, max_attempts: int | None) -> bool:
    return max_attempts is not None and attempts_used >= max_attempts


def count_completed_attempts(member: MemberRecord, test: TestRecord, attempts: Iterable[AttemptRecord]) -> int:
    # In-flight attempts never take a slot: the member resumes them instead.
    return sum(
        1
        for attempt in attempts
        if attempt.membership_id == member.id
        and attempt.test_id == test.id
        and attempt.status in COMPLETED_ATTEMPT_STATUSES
    )


def usage(member: MemberRecord, test: TestRecord, attempts: Iterable[AttemptRecord]) -> AttemptUsage:
    attempts_used = count_completed_attempts(member, test, attempts)
    return AttemptUsage(
        attempts_used=attempts_used,
        max_attempts=test.max_attempts,
        has_reached_limit=_limit_reached(attempts_used, test.max_attempts),
    )


def usage_by_test(
    member: MemberRecord,
    tests: Sequence[TestRecord],
    attempts: Iterable[AttemptRecord],
) -> dict[RecordId, AttemptUsage]:
    test_ids = {test.id for test in tests}
    counts = Counter(
        attempt.test_id
        for attempt in attempts
        if attempt.membership_id == member.id
        and attempt.test_id in test_ids
        and attempt.status in COMPLETED_ATTEMPT_STATUSES
    )
    return {
        test.id: AttemptUsage(
            attempts_used=counts.get(test.id, 0),
            max_attempts=test.max_attempts,
            has_reached_limit=_limit_reached(counts.get(test.id, 0), test.max_attempts),
        )
        for test in tests
    }
