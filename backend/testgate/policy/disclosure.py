from __future__ import annotations

import logging
from datetime import datetime

from testgate.policy.clock import coerce_utc
from testgate.policy.types import DISCLOSURE_LEVELS, TEST_STATUS_VALUES, TestRecord


logger = logging.getLogger(__name__)

_MODE_LEVELS = {
    'SCORE_ONLY': 'SCORE_ONLY',
    'SCORE_WITH_WRONG': 'SCORE_WITH_WRONG',
    'FULL_TEST': 'FULL',
}


def disclosure_rank(level: str) -> int:
    """Position of a level in the permissiveness order; unknown levels rank as NONE."""
    try:
        return DISCLOSURE_LEVELS.index(level)
    except ValueError:
        return 0


def scores_released(test: TestRecord, *, now: datetime | str, require_closed: bool = False) -> bool:
    """
    Release gate. With no release time set, grading is released as soon as the
    test leaves DRAFT, or only once it is CLOSED when ``require_closed`` is set.
    Malformed timestamps or statuses keep scores embargoed.
    """
    if test.status not in TEST_STATUS_VALUES:
        logger.warning('Test %s has unknown status %r; withholding scores', test.id, test.status)
        return False
    if test.status == 'DRAFT':
        return False

    current = coerce_utc(now)
    if current is None:
        logger.warning('Unreadable evaluation time %r for test %s; withholding scores', now, test.id)
        return False

    if test.release_scores_at is None:
        if require_closed:
            return test.status == 'CLOSED'
        return True

    release_at = coerce_utc(test.release_scores_at)
    if release_at is None:
        logger.warning(
            'Test %s has malformed release_scores_at %r; withholding scores', test.id, test.release_scores_at
        )
        return False
    return current >= release_at


def disclosure_level(
    test: TestRecord,
    *,
    requester_is_admin: bool,
    now: datetime | str,
    require_closed: bool = False,
) -> str:
    if requester_is_admin:
        return 'FULL'

    mode = test.score_release_mode
    if mode == 'NONE':
        return 'NONE'

    level = _MODE_LEVELS.get(mode)
    if level is None:
        logger.warning('Test %s has unknown score release mode %r; withholding scores', test.id, mode)
        return 'NONE'

    if not scores_released(test, now=now, require_closed=require_closed):
        return 'NONE'
    return level
