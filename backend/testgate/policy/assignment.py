from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence

from testgate.policy.types import AssignmentRule, MemberRecord, RecordId, TestRecord


logger = logging.getLogger(__name__)


def rule_matches(member: MemberRecord, rule: AssignmentRule) -> bool:
    """
    A rule grants access through its scope condition or, independently, through
    its event condition. The event branch applies whatever the scope tag says.
    """
    if rule.scope == 'CLUB':
        return True
    if (
        rule.scope == 'TEAM'
        and rule.team_id is not None
        and member.team_id is not None
        and rule.team_id == member.team_id
    ):
        return True
    if rule.scope == 'PERSONAL' and rule.target_membership_id == member.id:
        return True
    if rule.event_id is not None and rule.event_id in member.roster_event_ids:
        return True
    return False


def can_access(
    member: MemberRecord,
    test: TestRecord,
    assignments: Iterable[AssignmentRule],
    *,
    is_admin: bool = False,
) -> bool:
    if is_admin:
        return True
    if test.status != 'PUBLISHED':
        logger.debug('Test %s denied to member %s: status %s', test.id, member.id, test.status)
        return False
    if member.club_id != test.club_id:
        logger.debug('Test %s denied to member %s: different club', test.id, member.id)
        return False

    rules = list(assignments)
    if not rules:
        logger.debug('Test %s denied to member %s: no assignments', test.id, member.id)
        return False

    if any(rule_matches(member, rule) for rule in rules):
        return True
    logger.debug('Test %s denied to member %s: no matching assignment', test.id, member.id)
    return False


def visible_tests(
    member: MemberRecord,
    tests: Sequence[TestRecord],
    assignments_by_test: Mapping[RecordId, Sequence[AssignmentRule]],
    *,
    is_admin: bool = False,
) -> list[TestRecord]:
    """Filter a club's tests down to the ones this member may see, keeping order."""
    return [
        test
        for test in tests
        if can_access(member, test, assignments_by_test.get(test.id, ()), is_admin=is_admin)
    ]
