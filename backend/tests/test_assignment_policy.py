from testgate.policy import AssignmentRule, MemberRecord, TestRecord, can_access, rule_matches, visible_tests


CLUB = 'club-1'


def _member(**fields) -> MemberRecord:
    values = {'id': 'm-1', 'club_id': CLUB}
    values.update(fields)
    return MemberRecord(**values)


def _test(**fields) -> TestRecord:
    values = {'id': 't-1', 'club_id': CLUB, 'status': 'PUBLISHED'}
    values.update(fields)
    return TestRecord(**values)


def test_empty_assignment_set_denies_member() -> None:
    assert can_access(_member(), _test(), []) is False
    assert can_access(_member(team_id='A', roster_event_ids=frozenset({'E1'})), _test(), []) is False


def test_admin_bypasses_status_and_assignments() -> None:
    assert can_access(_member(), _test(status='DRAFT'), [], is_admin=True) is True
    assert can_access(_member(), _test(status='CLOSED'), [], is_admin=True) is True


def test_unpublished_test_denied_even_with_club_rule() -> None:
    rules = [AssignmentRule(scope='CLUB')]
    assert can_access(_member(), _test(status='DRAFT'), rules) is False
    assert can_access(_member(), _test(status='CLOSED'), rules) is False


def test_club_rule_grants_every_member() -> None:
    assert can_access(_member(), _test(), [AssignmentRule(scope='CLUB')]) is True


def test_member_of_another_club_is_denied() -> None:
    assert can_access(_member(club_id='club-2'), _test(), [AssignmentRule(scope='CLUB')]) is False


def test_team_rule_grants_regardless_of_other_rules() -> None:
    member = _member(team_id='A')
    team_rule = AssignmentRule(scope='TEAM', team_id='A')
    noise = [
        AssignmentRule(scope='TEAM', team_id='B'),
        AssignmentRule(scope='PERSONAL', target_membership_id='someone-else'),
        AssignmentRule(scope='TEAM', event_id='E9'),
    ]

    assert can_access(member, _test(), [team_rule]) is True
    assert can_access(member, _test(), [*noise, team_rule]) is True
    assert can_access(member, _test(), [team_rule, *noise]) is True


def test_team_rule_needs_both_team_ids() -> None:
    assert rule_matches(_member(team_id=None), AssignmentRule(scope='TEAM', team_id=None)) is False
    assert rule_matches(_member(team_id='A'), AssignmentRule(scope='TEAM', team_id=None)) is False
    assert rule_matches(_member(team_id=None), AssignmentRule(scope='TEAM', team_id='A')) is False


def test_other_team_without_event_is_denied() -> None:
    member = _member(team_id='B', roster_event_ids=frozenset({'E7'}))
    assert can_access(member, _test(), [AssignmentRule(scope='TEAM', team_id='A')]) is False


def test_personal_rule_matches_target_membership_only() -> None:
    rule = AssignmentRule(scope='PERSONAL', target_membership_id='m-1')
    assert can_access(_member(), _test(), [rule]) is True
    assert can_access(_member(id='m-2'), _test(), [rule]) is False


def test_event_branch_grants_independently_of_scope() -> None:
    member = _member(id='m-5', roster_event_ids=frozenset({'E1'}))
    rule = AssignmentRule(scope='PERSONAL', target_membership_id=None, event_id='E1')

    assert can_access(member, _test(), [rule]) is True
    assert can_access(_member(id='m-6'), _test(), [rule]) is False


def test_visible_tests_keeps_order_and_filters() -> None:
    member = _member(team_id='A')
    tests = [_test(id='t-3'), _test(id='t-2'), _test(id='t-1'), _test(id='t-0', status='DRAFT')]
    rules = {
        't-3': [AssignmentRule(scope='CLUB')],
        't-2': [AssignmentRule(scope='TEAM', team_id='B')],
        't-1': [AssignmentRule(scope='TEAM', team_id='A')],
        't-0': [AssignmentRule(scope='CLUB')],
    }

    assert [test.id for test in visible_tests(member, tests, rules)] == ['t-3', 't-1']
    assert [test.id for test in visible_tests(member, tests, rules, is_admin=True)] == ['t-3', 't-2', 't-1', 't-0']
    assert visible_tests(member, [_test(id='t-9')], {}) == []
