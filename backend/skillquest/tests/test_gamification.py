"""Unit tests for the pure XP, streak and grading rules."""

import pathlib
import sys
from datetime import date

import pytest

sys.path.append(str(pathlib.Path(__file__).resolve().parents[2]))

from skillquest.gamification import (
    ACHIEVEMENT_TYPES,
    achievement_text,
    compute_level,
    grade_answers,
    max_quiz_score,
    merge_learning_profile,
    next_daily_streak,
    prompt_match_score,
    prompt_xp,
)

QUESTIONS = [
    {"id": "q1", "correct_answer": 2, "points": 10},
    {"id": "q2", "correct_answer": "True", "points": 10},
    {"id": "q3", "correct_answer": "prompt", "points": 5},
]


@pytest.mark.parametrize(
    "total, level",
    [(0, 1), (999, 1), (1000, 2), (1999, 2), (2450, 3), (10000, 11)],
)
def test_level_is_thousand_xp_steps(total, level):
    assert compute_level(total) == level


def test_grading_awards_points_for_exact_matches():
    graded = grade_answers(
        QUESTIONS,
        [
            {"question_id": "q1", "user_answer": 2},
            {"question_id": "q2", "user_answer": "True"},
            {"question_id": "q3", "user_answer": "Prompt"},
        ],
    )
    assert [g["is_correct"] for g in graded] == [True, True, False]
    assert [g["points"] for g in graded] == [10, 10, 0]


def test_grading_does_not_coerce_types():
    graded = grade_answers(
        QUESTIONS,
        [
            {"question_id": "q1", "user_answer": "2"},
            {"question_id": "q2", "user_answer": True},
        ],
    )
    assert not graded[0]["is_correct"]
    assert not graded[1]["is_correct"]


def test_unknown_question_scores_zero():
    graded = grade_answers(QUESTIONS, [{"question_id": "zzz", "user_answer": 2}])
    assert graded == [
        {"question_id": "zzz", "user_answer": 2, "is_correct": False, "points": 0}
    ]


def test_grading_is_deterministic():
    answers = [
        {"question_id": "q1", "user_answer": 2},
        {"question_id": "q3", "user_answer": "nope"},
    ]
    assert grade_answers(QUESTIONS, answers) == grade_answers(QUESTIONS, answers)


def test_unanswered_questions_are_absent():
    graded = grade_answers(QUESTIONS, [{"question_id": "q2", "user_answer": "True"}])
    assert [g["question_id"] for g in graded] == ["q2"]
    assert max_quiz_score(QUESTIONS) == 25


def test_daily_streak_rules():
    today = date(2024, 5, 10)
    assert next_daily_streak(4, "2024-05-10", today) == 4
    assert next_daily_streak(4, "2024-05-09", today) == 5
    assert next_daily_streak(4, "2024-05-01", today) == 1
    assert next_daily_streak(0, None, today) == 1


def test_every_achievement_type_has_text():
    for kind in ACHIEVEMENT_TYPES:
        title, description = achievement_text(kind, level=2, streak=3)
        assert title and description
    assert achievement_text("level_up", level=4)[0] == "Level 4 Reached!"
    with pytest.raises(ValueError):
        achievement_text("bogus")


@pytest.mark.parametrize(
    "rating, xp",
    [(None, 85), (3, 85), (4, 102), (5, 102)],
)
def test_prompt_xp_bonus_for_high_rating(rating, xp):
    assert prompt_xp(85, rating) == xp


def test_profile_merge_keeps_skill_levels_unless_given():
    merged = merge_learning_profile(None, {"current_focus": "creative"})
    assert merged["current_focus"] == "creative"
    assert merged["skill_levels"]["analysis"] == 1

    levels = {"prompting": 5, "creativity": 5, "analysis": 5, "technical": 5}
    merged = merge_learning_profile(merged, {"skill_levels": levels})
    merged = merge_learning_profile(merged, {"skill_levels": None})
    assert merged["skill_levels"] == levels
    assert merged["current_focus"] == "creative"


def test_prompt_match_score():
    prompt = {"tags": ["systems"], "category": "technical", "difficulty": "intermediate"}
    profile = {
        "preferred_topics": ["systems"],
        "current_focus": "technical",
        "skill_levels": {"prompting": 5, "creativity": 5, "analysis": 5, "technical": 5},
    }
    assert prompt_match_score(prompt, profile) == 7
    assert prompt_match_score(prompt, {"skill_levels": profile["skill_levels"]}) == 2
    assert prompt_match_score(dict(prompt, difficulty="advanced"), {}) == 0
