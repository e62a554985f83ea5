from testgate.schemas.test import (
    AttemptDetailResponse,
    AttemptStartRequest,
    AttemptStartResponse,
    AttemptSummaryOut,
    AttemptUsageOut,
    ClubTestListResponse,
    MyAttemptsResponse,
    TestAttemptListResponse,
    TestDetailResponse,
    TestReleaseOut,
    TestSummaryOut,
)

__all__ = [
    'AttemptDetailResponse',
    'AttemptStartRequest',
    'AttemptStartResponse',
    'AttemptSummaryOut',
    'AttemptUsageOut',
    'ClubTestListResponse',
    'MyAttemptsResponse',
    'TestAttemptListResponse',
    'TestDetailResponse',
    'TestReleaseOut',
    'TestSummaryOut',
]
