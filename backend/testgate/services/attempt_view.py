from __future__ import annotations

from typing import Any
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from testgate.models.attempt import AttemptAnswer, TestAttempt
from testgate.models.test import Question
from testgate.policy import AttemptRecord


def to_attempt_record(attempt: TestAttempt) -> AttemptRecord:
    return AttemptRecord(
        id=attempt.id,
        membership_id=attempt.membership_id,
        test_id=attempt.test_id,
        status=attempt.status,
    )


def load_member_attempts(db: Session, *, membership_id: UUID, test_ids: list[UUID]) -> list[AttemptRecord]:
    if not test_ids:
        return []
    rows = db.scalars(
        select(TestAttempt).where(TestAttempt.membership_id == membership_id, TestAttempt.test_id.in_(test_ids))
    ).all()
    return [to_attempt_record(row) for row in rows]


def question_payload(question: Question) -> dict[str, Any]:
    return {
        'id': question.id,
        'order_index': question.order_index,
        'question_type': question.question_type,
        'prompt_md': question.prompt_md,
        'points': question.points,
        'explanation': question.explanation,
        'options': [
            {
                'id': option.id,
                'label': option.label,
                'is_correct': option.is_correct,
                'order_index': option.order_index,
            }
            for option in sorted(question.options, key=lambda item: item.order_index)
        ],
    }


def _answer_payload(answer: AttemptAnswer, question: Question | None) -> dict[str, Any]:
    payload: dict[str, Any] = {
        'id': answer.id,
        'question_id': answer.question_id,
        'answer_text': answer.answer_text,
        'selected_option_ids': list(answer.selected_option_ids or []),
        'numeric_answer': answer.numeric_answer,
        'points_awarded': answer.points_awarded,
        'graded_at': answer.graded_at,
        'grader_note': answer.grader_note,
        'question': None,
    }
    if question is not None:
        payload['question'] = question_payload(question)
    return payload


def build_attempt_view(attempt: TestAttempt, questions_by_id: dict[UUID, Question]) -> dict[str, Any]:
    """
    Fully-populated attempt view, answers in ascending question order.

    This is the admin shape; callers serving participants must pass it through
    ``redact_attempt`` with the level from ``disclosure_level``.
    """

    def _order(answer: AttemptAnswer) -> int:
        question = questions_by_id.get(answer.question_id)
        return question.order_index if question is not None else 1_000_000

    answers = sorted(attempt.answers, key=_order)
    return {
        'id': attempt.id,
        'test_id': attempt.test_id,
        'membership_id': attempt.membership_id,
        'attempt_number': attempt.attempt_number,
        'status': attempt.status,
        'started_at': attempt.started_at,
        'submitted_at': attempt.submitted_at,
        'grade_earned': attempt.grade_earned,
        'answers': [_answer_payload(answer, questions_by_id.get(answer.question_id)) for answer in answers],
    }
