from testgate.policy.types import (
    ASSIGNMENT_SCOPE_VALUES,
    ATTEMPT_STATUS_VALUES,
    SCORE_RELEASE_MODE_VALUES,
    TEST_STATUS_VALUES,
)

MEMBERSHIP_ROLE_VALUES = ['ADMIN', 'MEMBER']
OPEN_ATTEMPT_STATUS_VALUES = ['NOT_STARTED', 'IN_PROGRESS']
QUESTION_TYPE_VALUES = ['MCQ_SINGLE', 'MCQ_MULTI', 'SHORT_TEXT', 'LONG_TEXT', 'NUMERIC']


def sql_in(column: str, values: list[str]) -> str:
    quoted = ', '.join(f"'{value}'" for value in values)
    return f'{column} in ({quoted})'


__all__ = [
    'ASSIGNMENT_SCOPE_VALUES',
    'ATTEMPT_STATUS_VALUES',
    'MEMBERSHIP_ROLE_VALUES',
    'OPEN_ATTEMPT_STATUS_VALUES',
    'QUESTION_TYPE_VALUES',
    'SCORE_RELEASE_MODE_VALUES',
    'TEST_STATUS_VALUES',
    'sql_in',
]
