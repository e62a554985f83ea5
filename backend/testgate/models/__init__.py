from testgate.models.attempt import AttemptAnswer, TestAttempt
from testgate.models.club import Club, Event, Membership, RosterAssignment, Team
from testgate.models.test import Question, QuestionOption, Test, TestAssignment

__all__ = [
    'AttemptAnswer',
    'Club',
    'Event',
    'Membership',
    'Question',
    'QuestionOption',
    'RosterAssignment',
    'Team',
    'Test',
    'TestAssignment',
    'TestAttempt',
]
