#!/usr/bin/env python3
import argparse
import sys
import uuid
from datetime import UTC, datetime, timedelta
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / 'backend'))

from testgate.core.security import create_access_token, hash_test_password  # noqa: E402
from testgate.db.base import Base  # noqa: E402
from testgate.db.session import SessionLocal, engine  # noqa: E402
from testgate.models import (  # noqa: E402
    Club,
    Event,
    Membership,
    Question,
    QuestionOption,
    RosterAssignment,
    Team,
    Test,
    TestAssignment,
)


def _question(order_index: int, prompt: str, options: list[tuple[str, bool]]) -> Question:
    return Question(
        order_index=order_index,
        question_type='MCQ_SINGLE',
        prompt_md=prompt,
        points=1,
        explanation=f'Worked solution for question {order_index + 1}.',
        options=[
            QuestionOption(label=label, is_correct=is_correct, order_index=index)
            for index, (label, is_correct) in enumerate(options)
        ],
    )


def main() -> int:
    parser = argparse.ArgumentParser(description='Create a demo club with members, teams and tests.')
    parser.add_argument('--event-slug', default='regionals-demo')
    args = parser.parse_args()

    Base.metadata.create_all(bind=engine)
    now = datetime.now(UTC)

    db = SessionLocal()
    try:
        club = Club(name='Demo Science Club')
        db.add(club)
        db.flush()

        team = Team(club_id=club.id, name='Varsity A')
        event = Event(name='Regionals (demo)', slug=args.event_slug)
        db.add_all([team, event])
        db.flush()

        users = {'admin': uuid.uuid4(), 'captain': uuid.uuid4(), 'rookie': uuid.uuid4()}
        admin = Membership(user_id=users['admin'], club_id=club.id, role='ADMIN')
        captain = Membership(user_id=users['captain'], club_id=club.id, team_id=team.id, role='MEMBER')
        rookie = Membership(user_id=users['rookie'], club_id=club.id, role='MEMBER')
        db.add_all([admin, captain, rookie])
        db.flush()
        db.add(RosterAssignment(membership_id=captain.id, team_id=team.id, event_id=event.id))

        club_wide = Test(
            club_id=club.id,
            name='Club placement quiz',
            status='PUBLISHED',
            max_attempts=2,
            score_release_mode='SCORE_WITH_WRONG',
            questions=[_question(0, 'What is 2 + 2?', [('3', False), ('4', True)])],
            assignments=[TestAssignment(assigned_scope='CLUB')],
        )
        team_only = Test(
            club_id=club.id,
            name='Varsity practice',
            status='PUBLISHED',
            score_release_mode='SCORE_ONLY',
            release_scores_at=now + timedelta(days=7),
            end_at=now + timedelta(days=3),
            test_password_hash=hash_test_password('varsity'),
            questions=[_question(0, 'Which gas do plants absorb?', [('O2', False), ('CO2', True)])],
            assignments=[
                TestAssignment(assigned_scope='TEAM', team_id=team.id),
                TestAssignment(assigned_scope='TEAM', event_id=event.id),
            ],
        )
        personal = Test(
            club_id=club.id,
            name='Make-up test',
            status='PUBLISHED',
            max_attempts=1,
            score_release_mode='FULL_TEST',
            questions=[_question(0, 'Name the closest star.', [('Sirius', False), ('The Sun', True)])],
            assignments=[TestAssignment(assigned_scope='PERSONAL', target_membership_id=rookie.id)],
        )
        db.add_all([club_wide, team_only, personal])
        db.commit()

        print(f'Club: {club.id}')
        for label, user_id in users.items():
            token = create_access_token(str(user_id), expires_delta=timedelta(days=1))
            print(f'{label:<8} user={user_id} token={token}')
    finally:
        db.close()

    return 0


if __name__ == '__main__':
    raise SystemExit(main())
