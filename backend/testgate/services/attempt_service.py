from __future__ import annotations

import logging
from datetime import datetime
from typing import Any
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from testgate.core.config import settings
from testgate.core.security import verify_test_password
from testgate.models.attempt import TestAttempt
from testgate.models.test import Test
from testgate.policy import check_availability, redact_attempt, scores_released, usage
from testgate.policy.types import COMPLETED_ATTEMPT_STATUSES, OPEN_ATTEMPT_STATUSES
from testgate.services import attempt_view, club_service, test_service
from testgate.services.club_service import Requester


logger = logging.getLogger(__name__)


def _questions_by_id(test: Test) -> dict[UUID, Any]:
    return {question.id: question for question in test.questions}


def _next_attempt_number(attempts: list[TestAttempt]) -> int:
    # Same rows the limit check read.
    return max((item.attempt_number for item in attempts), default=0) + 1


def _check_test_password(test: Test, requester: Requester, test_password: str | None) -> None:
    if requester.is_admin or not test.test_password_hash:
        return
    if not test_password:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={'code': 'NEED_TEST_PASSWORD', 'message': 'Test password required'},
        )
    if not verify_test_password(test_password, test.test_password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={'code': 'NEED_TEST_PASSWORD', 'message': 'Invalid test password'},
        )


def start_attempt(
    db: Session,
    *,
    test_id: UUID,
    user_id: UUID,
    test_password: str | None,
    now: datetime,
) -> tuple[TestAttempt, bool]:
    """
    Resume the member's open attempt or create a new one.

    Returns the attempt and whether it was resumed. The limit check here is only
    a read. Two starts that read the same attempts pick the same attempt_number,
    and the unique (test, member, attempt_number) constraint lets only one insert;
    the one-open-attempt index covers admins, who skip the limit.
    """
    test = test_service.get_test(db, test_id)
    requester = club_service.resolve_requester(db, user_id=user_id, club_id=test.club_id)
    test_service.authorize_test(requester, test)
    _check_test_password(test, requester, test_password)

    record = test_service.to_test_record(test)
    window = check_availability(record, now=now)
    if not window.available:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=window.reason)

    attempts = list(
        db.scalars(
            select(TestAttempt)
            .where(TestAttempt.test_id == test.id, TestAttempt.membership_id == requester.membership.id)
            .order_by(TestAttempt.created_at.desc(), TestAttempt.attempt_number.desc())
        ).all()
    )

    open_attempt = next((item for item in attempts if item.status in OPEN_ATTEMPT_STATUSES), None)
    if open_attempt:
        return open_attempt, True

    if not requester.is_admin:
        attempt_usage = usage(requester.member, record, [attempt_view.to_attempt_record(item) for item in attempts])
        if attempt_usage.has_reached_limit:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail='Maximum attempts reached')

    attempt = TestAttempt(
        test_id=test.id,
        membership_id=requester.membership.id,
        attempt_number=_next_attempt_number(attempts),
        status='IN_PROGRESS',
        started_at=now,
    )
    db.add(attempt)
    try:
        db.flush()
    except IntegrityError as exc:
        db.rollback()
        logger.warning('Concurrent attempt start for test %s by membership %s', test.id, requester.membership.id)
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail='Attempt already started, retry') from exc

    logger.info(
        'Started attempt %s (#%s) on test %s for membership %s',
        attempt.id,
        attempt.attempt_number,
        test.id,
        requester.membership.id,
    )
    return attempt, False


def list_my_attempts(db: Session, *, test_id: UUID, user_id: UUID, now: datetime) -> dict[str, Any]:
    test = test_service.get_test(db, test_id)
    requester = club_service.resolve_requester(db, user_id=user_id, club_id=test.club_id)

    attempts = db.scalars(
        select(TestAttempt)
        .where(
            TestAttempt.test_id == test.id,
            TestAttempt.membership_id == requester.membership.id,
            TestAttempt.status.in_(sorted(COMPLETED_ATTEMPT_STATUSES)),
        )
        .options(selectinload(TestAttempt.answers))
        .order_by(TestAttempt.submitted_at.desc().nulls_last(), TestAttempt.created_at.desc())
    ).all()

    level = test_service.release_level(test, requester, now=now)
    questions_by_id = _questions_by_id(test)
    views = [redact_attempt(attempt_view.build_attempt_view(item, questions_by_id), level) for item in attempts]

    return {
        'attempts': views,
        'test': {
            'id': test.id,
            'score_release_mode': test.score_release_mode,
            'release_scores_at': test.release_scores_at,
            'scores_released': scores_released(
                test_service.to_test_record(test),
                now=now,
                require_closed=settings.SCORE_RELEASE_REQUIRES_CLOSED,
            ),
            'disclosure_level': level,
        },
    }


def list_test_attempts(db: Session, *, test_id: UUID, user_id: UUID) -> list[dict[str, Any]]:
    test = test_service.get_test(db, test_id)
    requester = club_service.resolve_requester(db, user_id=user_id, club_id=test.club_id)
    if not requester.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail='Only admins can view test attempts')

    attempts = db.scalars(
        select(TestAttempt)
        .where(TestAttempt.test_id == test.id)
        .options(selectinload(TestAttempt.answers))
        .order_by(TestAttempt.submitted_at.desc().nulls_last(), TestAttempt.created_at.desc())
    ).all()
    questions_by_id = _questions_by_id(test)
    return [attempt_view.build_attempt_view(item, questions_by_id) for item in attempts]


def get_attempt(db: Session, *, attempt_id: UUID, user_id: UUID, now: datetime) -> tuple[dict[str, Any], str]:
    attempt = db.scalar(
        select(TestAttempt).where(TestAttempt.id == attempt_id).options(selectinload(TestAttempt.answers))
    )
    if not attempt:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Attempt not found')

    test = test_service.get_test(db, attempt.test_id)
    requester = club_service.resolve_requester(db, user_id=user_id, club_id=test.club_id)
    if not requester.is_admin and attempt.membership_id != requester.membership.id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail='Not allowed to view this attempt')

    level = test_service.release_level(test, requester, now=now)
    view = attempt_view.build_attempt_view(attempt, _questions_by_id(test))
    return redact_attempt(view, level), level
