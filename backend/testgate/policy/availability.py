from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from testgate.policy.clock import coerce_utc
from testgate.policy.types import TestRecord


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Availability:
    available: bool
    reason: str | None = None


def check_availability(test: TestRecord, *, now: datetime | str) -> Availability:
    """Whether a new attempt may be started right now, with a reason when not."""
    if test.status != 'PUBLISHED':
        return Availability(False, 'Test is not published')

    current = coerce_utc(now)
    if current is None:
        logger.warning('Unreadable evaluation time %r for test %s', now, test.id)
        return Availability(False, 'Test schedule is invalid')

    bounds = {}
    for name in ('start_at', 'end_at', 'allow_late_until'):
        raw = getattr(test, name)
        if raw is None:
            continue
        parsed = coerce_utc(raw)
        if parsed is None:
            logger.warning('Test %s has malformed %s %r', test.id, name, raw)
            return Availability(False, 'Test schedule is invalid')
        bounds[name] = parsed

    start_at = bounds.get('start_at')
    if start_at is not None and current < start_at:
        return Availability(False, 'Test has not started yet')

    closes_at = bounds.get('allow_late_until') or bounds.get('end_at')
    if closes_at is not None and current > closes_at:
        return Availability(False, 'Test has ended')

    return Availability(True)
