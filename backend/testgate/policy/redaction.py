from __future__ import annotations

import copy
from collections.abc import Iterable
from typing import Any

from testgate.policy.disclosure import disclosure_rank


SCORE_ONLY_RANK = disclosure_rank('SCORE_ONLY')
SCORE_WITH_WRONG_RANK = disclosure_rank('SCORE_WITH_WRONG')
FULL_RANK = disclosure_rank('FULL')

# Per-answer grading signal hidden below FULL; points_awarded is handled separately.
ANSWER_GRADING_FIELDS = ('grader_note', 'graded_at', 'is_correct')


def _strip_answer_key(question: dict[str, Any]) -> None:
    question.pop('explanation', None)
    for option in question.get('options') or []:
        if isinstance(option, dict):
            option.pop('is_correct', None)


def redact_attempt(view: dict[str, Any], level: str) -> dict[str, Any]:
    """
    Shape a fully-populated attempt view for the given disclosure level.

    Returns a new dict; ``view`` is left untouched. Levels this module does not
    know are handled like NONE.
    """
    redacted = copy.deepcopy(view)
    rank = disclosure_rank(level)
    if rank >= FULL_RANK:
        return redacted

    if rank < SCORE_ONLY_RANK:
        redacted.pop('grade_earned', None)

    for answer in redacted.get('answers') or []:
        if not isinstance(answer, dict):
            continue
        for field in ANSWER_GRADING_FIELDS:
            answer.pop(field, None)
        if rank < SCORE_WITH_WRONG_RANK:
            answer.pop('points_awarded', None)
        question = answer.get('question')
        if isinstance(question, dict):
            _strip_answer_key(question)

    return redacted


def redact_test_content(questions: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    """Question payloads as a participant may see them before or while taking a test."""
    redacted = []
    for question in questions:
        item = copy.deepcopy(question)
        _strip_answer_key(item)
        redacted.append(item)
    return redacted
