"""XP, level, streak and achievement rules.

Everything in this module is a pure function of its arguments so the
rules can be audited and tested without a database.  The CRUD layer
loads records, calls into here and persists the outcome.
"""

from datetime import date, timedelta

XP_PER_LEVEL = 1000

ACHIEVEMENT_FIRST_LESSON = "first_lesson"
ACHIEVEMENT_STREAK_3 = "streak_3"
ACHIEVEMENT_STREAK_7 = "streak_7"
ACHIEVEMENT_STREAK_30 = "streak_30"
ACHIEVEMENT_MODULE_COMPLETE = "module_complete"
ACHIEVEMENT_PERFECT_QUIZ = "perfect_quiz"
ACHIEVEMENT_LEVEL_UP = "level_up"

ACHIEVEMENT_TYPES = [
    ACHIEVEMENT_FIRST_LESSON,
    ACHIEVEMENT_STREAK_3,
    ACHIEVEMENT_STREAK_7,
    ACHIEVEMENT_STREAK_30,
    ACHIEVEMENT_MODULE_COMPLETE,
    ACHIEVEMENT_PERFECT_QUIZ,
    ACHIEVEMENT_LEVEL_UP,
]

STREAK_MILESTONES = {
    3: ACHIEVEMENT_STREAK_3,
    7: ACHIEVEMENT_STREAK_7,
    30: ACHIEVEMENT_STREAK_30,
}


def compute_level(total_score: int) -> int:
    """Return the 1-indexed level for ``total_score`` (flat 1000 XP steps)."""
    return int(total_score // XP_PER_LEVEL) + 1


def achievement_text(kind: str, **meta) -> tuple[str, str]:
    """Return ``(title, description)`` for an achievement of ``kind``."""
    if kind == ACHIEVEMENT_FIRST_LESSON:
        return (
            "First Lesson Complete!",
            "You've completed your first lesson. Keep it up!",
        )
    if kind in STREAK_MILESTONES.values():
        days = meta.get("streak")
        return (
            f"{days} Day Streak!",
            f"You've maintained a {days} day learning streak!",
        )
    if kind == ACHIEVEMENT_MODULE_COMPLETE:
        return (
            "Module Complete!",
            "You've finished every lesson in this module and passed its quiz.",
        )
    if kind == ACHIEVEMENT_PERFECT_QUIZ:
        return ("Perfect Quiz!", "You answered every question correctly.")
    if kind == ACHIEVEMENT_LEVEL_UP:
        level = meta.get("level")
        return (
            f"Level {level} Reached!",
            f"Congratulations on reaching level {level}!",
        )
    raise ValueError(f"Unknown achievement type: {kind}")


def next_daily_streak(
    current_streak: int, last_active_date: str | None, today: date
) -> int:
    """Streak after activity on ``today``.

    Same day keeps the streak, the following day extends it and any gap
    restarts it at 1.
    """
    if last_active_date == today.isoformat():
        return current_streak
    if last_active_date == (today - timedelta(days=1)).isoformat():
        return current_streak + 1
    return 1


def grade_answers(questions: list[dict], answers: list[dict]) -> list[dict]:
    """Grade submitted answers against quiz questions.

    Each answer is matched to a question by id.  Unknown ids score zero.
    Comparison is strict equality, so ``"2"`` never matches ``2``.
    """
    by_id = {q["id"]: q for q in questions}
    graded = []
    for ans in answers:
        question = by_id.get(ans["question_id"])
        user_answer = ans["user_answer"]
        if question is None:
            is_correct = False
            points = 0
        else:
            is_correct = _same_answer(user_answer, question["correct_answer"])
            points = question["points"] if is_correct else 0
        graded.append(
            {
                "question_id": ans["question_id"],
                "user_answer": user_answer,
                "is_correct": is_correct,
                "points": points,
            }
        )
    return graded


def _same_answer(user_answer, correct_answer) -> bool:
    # bool is an int subclass; keep True from matching 1
    if isinstance(user_answer, bool) or isinstance(correct_answer, bool):
        return type(user_answer) is type(correct_answer) and user_answer == correct_answer
    if isinstance(user_answer, str) != isinstance(correct_answer, str):
        return False
    return user_answer == correct_answer


def max_quiz_score(questions: list[dict]) -> float:
    return sum(q["points"] for q in questions)


# --- practice prompts -------------------------------------------------------

HIGH_SELF_RATING = 4
SELF_RATING_BONUS = 1.2
RECOMMENDATION_LIMIT = 10


def default_learning_profile() -> dict:
    return {
        "preferred_topics": [],
        "skill_levels": {"prompting": 1, "creativity": 1, "analysis": 1, "technical": 1},
        "completed_prompts": [],
        "favorite_prompts": [],
        "learning_goals": [],
    }


def merge_learning_profile(current: dict | None, changes: dict) -> dict:
    """Overlay ``changes`` on the stored profile (or the default one).

    Only keys present in ``changes`` are replaced; ``skill_levels`` is
    swapped as a whole rather than merged per skill.
    """
    profile = dict(current or default_learning_profile())
    profile.update(changes)
    if changes.get("skill_levels") is None:
        profile["skill_levels"] = (current or default_learning_profile())["skill_levels"]
    return profile


def prompt_xp(xp_reward: int, self_rating: float | None = None) -> int:
    """XP for a completed prompt; a rating of 4 or more earns 20% extra."""
    if self_rating is not None and self_rating >= HIGH_SELF_RATING:
        return int(xp_reward * SELF_RATING_BONUS)
    return xp_reward


def prompt_match_score(prompt: dict, profile: dict) -> int:
    """Rank a prompt against a learner profile; higher is a better fit.

    +3 for a preferred topic in the tags or category, +2 when the
    difficulty fits the average skill level and +2 for the current focus.
    """
    score = 0
    topics = profile.get("preferred_topics") or []
    if any(t in prompt["tags"] or t in prompt["category"] for t in topics):
        score += 3

    skills = profile.get("skill_levels") or default_learning_profile()["skill_levels"]
    avg_skill = sum(skills.values()) / 4
    if avg_skill <= 3 and prompt["difficulty"] == "beginner":
        score += 2
    elif 3 < avg_skill <= 7 and prompt["difficulty"] == "intermediate":
        score += 2
    elif avg_skill > 7 and prompt["difficulty"] == "advanced":
        score += 2

    focus = profile.get("current_focus")
    if focus and prompt["category"] == focus:
        score += 2
    return score
