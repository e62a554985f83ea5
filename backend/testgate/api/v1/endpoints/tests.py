from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from testgate.api.deps import get_current_user_id, get_now
from testgate.db.session import get_db
from testgate.schemas.test import (
    AttemptStartRequest,
    AttemptStartResponse,
    AttemptSummaryOut,
    AttemptUsageOut,
    MyAttemptsResponse,
    TestAttemptListResponse,
    TestDetailResponse,
    TestSummaryOut,
)
from testgate.services import attempt_service, club_service, test_service


router = APIRouter(prefix='/tests', tags=['tests'])


@router.get('/{test_id}', response_model=TestDetailResponse)
def get_test(
    test_id: UUID,
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user_id),
    now: datetime = Depends(get_now),
) -> TestDetailResponse:
    test = test_service.get_test(db, test_id)
    requester = club_service.resolve_requester(db, user_id=user_id, club_id=test.club_id)
    detail = test_service.get_test_detail(db, test=test, requester=requester, now=now)

    usage = detail.get('usage')
    return TestDetailResponse(
        test=TestSummaryOut.model_validate(detail['test']),
        questions=detail['questions'],
        is_admin=detail['is_admin'],
        user_attempts=(
            [AttemptSummaryOut.model_validate(item) for item in detail['user_attempts']]
            if 'user_attempts' in detail
            else None
        ),
        completed_attempts=detail.get('completed_attempts'),
        usage=AttemptUsageOut.model_validate(usage) if usage is not None else None,
    )


@router.post('/{test_id}/attempts/start', response_model=AttemptStartResponse)
def start_attempt(
    test_id: UUID,
    response: Response,
    payload: AttemptStartRequest | None = None,
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user_id),
    now: datetime = Depends(get_now),
) -> AttemptStartResponse:
    attempt, resumed = attempt_service.start_attempt(
        db,
        test_id=test_id,
        user_id=user_id,
        test_password=payload.test_password if payload else None,
        now=now,
    )
    db.commit()
    response.status_code = status.HTTP_200_OK if resumed else status.HTTP_201_CREATED
    return AttemptStartResponse(attempt=AttemptSummaryOut.model_validate(attempt), resumed=resumed)


@router.get('/{test_id}/my-attempts', response_model=MyAttemptsResponse)
def list_my_attempts(
    test_id: UUID,
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user_id),
    now: datetime = Depends(get_now),
) -> MyAttemptsResponse:
    return MyAttemptsResponse.model_validate(
        attempt_service.list_my_attempts(db, test_id=test_id, user_id=user_id, now=now)
    )


@router.get('/{test_id}/attempts', response_model=TestAttemptListResponse)
def list_test_attempts(
    test_id: UUID,
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user_id),
) -> TestAttemptListResponse:
    attempts = attempt_service.list_test_attempts(db, test_id=test_id, user_id=user_id)
    return TestAttemptListResponse(attempts=attempts)
