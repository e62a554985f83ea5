from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from testgate.api.deps import get_current_user_id, get_now
from testgate.db.session import get_db
from testgate.schemas.test import AttemptDetailResponse
from testgate.services import attempt_service


router = APIRouter(prefix='/attempts', tags=['attempts'])


@router.get('/{attempt_id}', response_model=AttemptDetailResponse)
def get_attempt(
    attempt_id: UUID,
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user_id),
    now: datetime = Depends(get_now),
) -> AttemptDetailResponse:
    view, level = attempt_service.get_attempt(db, attempt_id=attempt_id, user_id=user_id, now=now)
    return AttemptDetailResponse(attempt=view, disclosure_level=level)
