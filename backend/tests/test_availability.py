from datetime import UTC, datetime, timedelta

from testgate.policy import TestRecord, check_availability


NOW = datetime(2024, 6, 1, 12, 0, tzinfo=UTC)


def _test(**fields) -> TestRecord:
    values = {'id': 't-1', 'club_id': 'club-1', 'status': 'PUBLISHED'}
    values.update(fields)
    return TestRecord(**values)


def test_open_window_is_available() -> None:
    result = check_availability(_test(start_at=NOW - timedelta(hours=1), end_at=NOW + timedelta(hours=1)), now=NOW)

    assert result.available is True
    assert result.reason is None


def test_unscheduled_published_test_is_available() -> None:
    assert check_availability(_test(), now=NOW).available is True


def test_unpublished_tests_are_not_available() -> None:
    for status in ('DRAFT', 'CLOSED'):
        result = check_availability(_test(status=status), now=NOW)
        assert result.available is False
        assert result.reason == 'Test is not published'


def test_before_start_is_not_available() -> None:
    result = check_availability(_test(start_at=NOW + timedelta(minutes=1)), now=NOW)

    assert result.available is False
    assert result.reason == 'Test has not started yet'


def test_after_end_is_not_available() -> None:
    result = check_availability(_test(end_at=NOW - timedelta(minutes=1)), now=NOW)

    assert result.available is False
    assert result.reason == 'Test has ended'


def test_late_window_extends_end() -> None:
    test = _test(end_at=NOW - timedelta(minutes=10), allow_late_until=NOW + timedelta(minutes=10))

    assert check_availability(test, now=NOW).available is True
    assert check_availability(test, now=NOW + timedelta(minutes=11)).reason == 'Test has ended'


def test_malformed_schedule_fails_closed() -> None:
    assert check_availability(_test(start_at='soon'), now=NOW).reason == 'Test schedule is invalid'
    assert check_availability(_test(), now='now').reason == 'Test schedule is invalid'
