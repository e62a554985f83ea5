import copy

import pytest

from testgate.policy import redact_attempt, redact_test_content


LEVELS = ['NONE', 'SCORE_ONLY', 'SCORE_WITH_WRONG', 'FULL']


def _view() -> dict:
    return {
        'id': 'attempt-1',
        'status': 'GRADED',
        'grade_earned': 85,
        'answers': [
            {
                'id': 'answer-1',
                'question_id': 'q-1',
                'selected_option_ids': ['o-2'],
                'points_awarded': 5,
                'grader_note': 'Nice work',
                'graded_at': '2024-06-01T12:00:00+00:00',
                'is_correct': True,
                'question': {
                    'id': 'q-1',
                    'prompt_md': 'Pick the even number',
                    'explanation': 'Two is even.',
                    'options': [
                        {'id': 'o-1', 'label': '1', 'is_correct': False},
                        {'id': 'o-2', 'label': '2', 'is_correct': True},
                    ],
                },
            },
            {
                'id': 'answer-2',
                'question_id': 'q-2',
                'answer_text': 'photosynthesis',
                'points_awarded': 0,
                'grader_note': None,
                'graded_at': None,
                'question': {'id': 'q-2', 'prompt_md': 'Name the process', 'explanation': 'Plants...', 'options': []},
            },
        ],
    }


def _answer_key_leaks(view: dict) -> list[str]:
    leaks = []
    for answer in view.get('answers', []):
        for field in ('grader_note', 'graded_at', 'is_correct'):
            if field in answer:
                leaks.append(f"{answer['id']}.{field}")
        question = answer.get('question') or {}
        if 'explanation' in question:
            leaks.append(f"{answer['id']}.explanation")
        for option in question.get('options', []):
            if 'is_correct' in option:
                leaks.append(f"{answer['id']}.{option['id']}.is_correct")
    return leaks


def test_score_only_keeps_grade_and_hides_answer_detail() -> None:
    result = redact_attempt(_view(), 'SCORE_ONLY')

    assert result['grade_earned'] == 85
    first = result['answers'][0]
    assert 'points_awarded' not in first
    assert 'explanation' not in first['question']
    assert all('is_correct' not in option for option in first['question']['options'])
    assert first['selected_option_ids'] == ['o-2']
    assert _answer_key_leaks(result) == []


def test_none_hides_everything_but_responses() -> None:
    result = redact_attempt(_view(), 'NONE')

    assert 'grade_earned' not in result
    assert all('points_awarded' not in answer for answer in result['answers'])
    assert _answer_key_leaks(result) == []
    assert result['answers'][1]['answer_text'] == 'photosynthesis'
    assert result['answers'][0]['question']['prompt_md'] == 'Pick the even number'


def test_score_with_wrong_keeps_points_but_not_answer_key() -> None:
    result = redact_attempt(_view(), 'SCORE_WITH_WRONG')

    assert result['grade_earned'] == 85
    assert [answer['points_awarded'] for answer in result['answers']] == [5, 0]
    assert _answer_key_leaks(result) == []


def test_full_returns_equal_copy() -> None:
    view = _view()
    result = redact_attempt(view, 'FULL')

    assert result == view
    assert result is not view
    assert result['answers'][0]['question'] is not view['answers'][0]['question']


@pytest.mark.parametrize('level', ['FULL_TEST', 'full', '', None])
def test_unknown_level_is_treated_as_none(level: str | None) -> None:
    assert redact_attempt(_view(), level) == redact_attempt(_view(), 'NONE')


@pytest.mark.parametrize('level', LEVELS)
def test_redaction_is_idempotent(level: str) -> None:
    once = redact_attempt(_view(), level)
    assert redact_attempt(once, level) == once


@pytest.mark.parametrize('level', LEVELS)
def test_redaction_does_not_mutate_input(level: str) -> None:
    view = _view()
    snapshot = copy.deepcopy(view)

    redact_attempt(view, level)

    assert view == snapshot


def test_view_without_answers_or_questions_is_handled() -> None:
    assert redact_attempt({'id': 'a', 'grade_earned': 10}, 'NONE') == {'id': 'a'}
    assert redact_attempt({'id': 'a', 'answers': [{'id': 'x', 'question': None}]}, 'SCORE_ONLY') == {
        'id': 'a',
        'answers': [{'id': 'x', 'question': None}],
    }


def test_test_content_is_stripped_of_answer_key() -> None:
    questions = [copy.deepcopy(answer['question']) for answer in _view()['answers']]
    snapshot = copy.deepcopy(questions)

    result = redact_test_content(questions)

    assert questions == snapshot
    assert [item['prompt_md'] for item in result] == ['Pick the even number', 'Name the process']
    assert all('explanation' not in item for item in result)
    assert all('is_correct' not in option for item in result for option in item['options'])
    assert [option['label'] for option in result[0]['options']] == ['1', '2']
