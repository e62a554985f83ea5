from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from testgate.api.deps import get_current_user_id
from testgate.db.session import get_db
from testgate.schemas.test import AttemptUsageOut, ClubTestListResponse, TestSummaryOut
from testgate.services import club_service, test_service


router = APIRouter(prefix='/clubs', tags=['clubs'])


@router.get('/{club_id}/tests', response_model=ClubTestListResponse)
def list_club_tests(
    club_id: UUID,
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user_id),
) -> ClubTestListResponse:
    requester = club_service.resolve_requester(db, user_id=user_id, club_id=club_id)
    tests, usage_map = test_service.list_club_tests(db, requester=requester, club_id=club_id)
    return ClubTestListResponse(
        items=[TestSummaryOut.model_validate(test) for test in tests],
        user_attempts={test_id: AttemptUsageOut.model_validate(item) for test_id, item in usage_map.items()},
    )
