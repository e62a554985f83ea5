from testgate.services import attempt_service, attempt_view, club_service, test_service

__all__ = [
    'attempt_service',
    'attempt_view',
    'club_service',
    'test_service',
]
