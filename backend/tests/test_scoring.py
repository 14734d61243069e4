import itertools

import pytest

from predictiongame.services.games import EXPECTED_CONFIDENCE
from predictiongame.services.games.domain import Answer, Question
from predictiongame.services.games.scoring import is_correct, score_answers


def _answer(q_low, q_high, a_low, a_high):
    question = Question(id='q', text='How many?', bound_low=q_low, bound_high=q_high)
    return Answer(question=question, lower_bound=a_low, upper_bound=a_high)


def test_contained_range_is_correct():
    assert _answer(10, 20, 12, 15).correct is True


def test_range_covering_true_range_is_correct():
    assert _answer(10, 20, 0, 100).correct is True


@pytest.mark.parametrize('a_low,a_high', [(0, 12), (15, 30)])
def test_partial_overlap_is_correct(a_low, a_high):
    assert _answer(10, 20, a_low, a_high).correct is True


def test_touching_lower_edge_is_correct():
    assert _answer(10, 20, 0, 10).correct is True


def test_touching_upper_edge_is_correct():
    assert _answer(10, 20, 20, 30).correct is True


@pytest.mark.parametrize('a_low,a_high', [(0, 9.999), (20.001, 25), (-5, -1)])
def test_disjoint_range_is_wrong(a_low, a_high):
    assert _answer(10, 20, a_low, a_high).correct is False


def test_point_question_and_point_answer():
    assert _answer(7, 7, 7, 7).correct is True
    assert _answer(7, 7, 8, 8).correct is False


def test_inverted_submission_is_evaluated_as_given():
    # No branch matches: 50 > 0 and 50 > 5, so the answer is wrong
    assert _answer(0, 5, 50, 10).correct is False
    # 50 >= 0 and 10 <= 100 satisfies the containment branch
    assert _answer(0, 100, 50, 10).correct is True


def test_overlap_equivalence_for_well_formed_ranges():
    points = [-3, 0, 1, 2.5, 4, 7]
    for q_low, q_high in itertools.combinations_with_replacement(points, 2):
        for a_low, a_high in itertools.combinations_with_replacement(points, 2):
            overlaps = max(q_low, a_low) <= min(q_high, a_high)
            assert _answer(q_low, q_high, a_low, a_high).correct is overlaps, (q_low, q_high, a_low, a_high)


def test_is_correct_matches_property():
    answer = _answer(1, 2, 0, 3)
    assert is_correct(answer) == answer.correct


def test_score_answers_counts_hits():
    answers = [_answer(10, 20, 12, 15), _answer(10, 20, 30, 40), _answer(0, 1, 1, 2), _answer(0, 1, 5, 6)]
    card = score_answers(answers)
    assert card.correct == 2
    assert card.total == 4
    assert card.hit_rate == 0.5
    assert card.expected_confidence == EXPECTED_CONFIDENCE
    assert card.calibration_gap == 0.0


def test_score_answers_empty_round():
    card = score_answers([])
    assert card.total == 0
    assert card.hit_rate == 0.0
    assert card.to_dict()['calibration_gap'] == -EXPECTED_CONFIDENCE
