from testgate.policy.assignment import can_access, rule_matches, visible_tests
from testgate.policy.attempts import AttemptUsage, count_completed_attempts, usage, usage_by_test
from testgate.policy.availability import Availability, check_availability
from testgate.policy.disclosure import disclosure_level, disclosure_rank, scores_released
from testgate.policy.redaction import redact_attempt, redact_test_content
from testgate.policy.types import AssignmentRule, AttemptRecord, MemberRecord, TestRecord

__all__ = [
    'AssignmentRule',
    'AttemptRecord',
    'AttemptUsage',
    'Availability',
    'MemberRecord',
    'TestRecord',
    'can_access',
    'check_availability',
    'count_completed_attempts',
    'disclosure_level',
    'disclosure_rank',
    'redact_attempt',
    'redact_test_content',
    'rule_matches',
    'scores_released',
    'usage',
    'usage_by_test',
    'visible_tests',
]
