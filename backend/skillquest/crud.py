"""Asynchronous CRUD helpers for the application's data models.

Each function in this module encapsulates a specific database operation
using SQLModel and SQLAlchemy.  Centralizing the logic keeps route
handlers light and makes behavior easier to test.  Helpers return
``None`` when a record is missing; translating that into an HTTP error
is left to the routes.
"""

import logging
import random
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select
from sqlalchemy import func
from datetime import date
from skillquest.models import (
    User,
    Module,
    Lesson,
    Progress,
    Quiz,
    QuizAttempt,
    Achievement,
    LearningPrompt,
    PromptAttempt,
    utcnow,
)
from skillquest.gamification import (
    ACHIEVEMENT_FIRST_LESSON,
    ACHIEVEMENT_LEVEL_UP,
    ACHIEVEMENT_MODULE_COMPLETE,
    ACHIEVEMENT_PERFECT_QUIZ,
    RECOMMENDATION_LIMIT,
    STREAK_MILESTONES,
    achievement_text,
    compute_level,
    default_learning_profile,
    grade_answers,
    max_quiz_score,
    merge_learning_profile,
    next_daily_streak,
    prompt_match_score,
    prompt_xp,
)

logger = logging.getLogger(__name__)

LEADERBOARD_SIZE = 10


# --- users -----------------------------------------------------------------


async def create_user(db: AsyncSession, user: User) -> User:
    """Persist a new user with the level matching its starting score."""

    user.level = compute_level(user.total_score)
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    """Return a user by email or ``None`` if not found."""
    result = await db.execute(select(User).where(User.email == email))
    return result.scalars().first()


async def get_user(db: AsyncSession, user_id: int) -> User | None:
    """Load a user by primary key."""
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def get_leaderboard(
    db: AsyncSession, limit: int = LEADERBOARD_SIZE
) -> list[User]:
    """Return the top users ordered by total score, highest first."""

    result = await db.execute(
        select(User).order_by(User.total_score.desc(), User.id).limit(limit)
    )
    return result.scalars().all()


async def save_user(db: AsyncSession, user: User) -> User:
    """Persist changes to an existing user."""

    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


def _add_achievement(
    db: AsyncSession, user_id: int, kind: str, meta: dict | None = None
) -> Achievement:
    """Stage an achievement row; the caller commits."""
    title, description = achievement_text(kind, **(meta or {}))
    achievement = Achievement(
        user_id=user_id,
        type=kind,
        title=title,
        description=description,
        meta=meta,
    )
    db.add(achievement)
    logger.info("Awarding %s to user %s", kind, user_id)
    return achievement


def _apply_xp(user: User, xp: int) -> int:
    """Add ``xp`` to ``user`` keeping the level in step.  Returns old level."""
    old_level = user.level
    user.total_score = user.total_score + xp
    user.level = compute_level(user.total_score)
    return old_level


async def update_user_progress(
    db: AsyncSession,
    user: User,
    xp_gained: int,
    streak_update: bool = False,
    today: date | None = None,
) -> User:
    """Apply an XP delta and optionally bump the streak by one.

    No gap detection happens here: the streak only ever grows.
    """

    _apply_xp(user, xp_gained)
    if streak_update:
        today = today or date.today()
        user.current_streak = user.current_streak + 1
        user.longest_streak = max(user.longest_streak, user.current_streak)
        user.last_active_date = today.isoformat()
    return await save_user(db, user)


async def update_user_score(
    db: AsyncSession, user: User, score_to_add: int
) -> tuple[int, int]:
    """Add XP and emit a ``level_up`` achievement when the level rises."""

    old_level = _apply_xp(user, score_to_add)
    db.add(user)
    if user.level > old_level:
        logger.info("User %s reached level %s", user.id, user.level)
        _add_achievement(db, user.id, ACHIEVEMENT_LEVEL_UP, {"level": user.level})
    await db.commit()
    await db.refresh(user)
    return user.level, user.total_score


def _apply_daily_streak(db: AsyncSession, user: User, today: date) -> None:
    if user.last_active_date == today.isoformat():
        return
    streak = next_daily_streak(user.current_streak, user.last_active_date, today)
    user.current_streak = streak
    user.longest_streak = max(user.longest_streak, streak)
    user.last_active_date = today.isoformat()
    db.add(user)
    kind = STREAK_MILESTONES.get(streak)
    if kind:
        _add_achievement(db, user.id, kind, {"streak": streak})


async def record_daily_activity(
    db: AsyncSession, user: User, today: date | None = None
) -> int:
    """Update the user's day streak, resetting it after a missed day."""

    _apply_daily_streak(db, user, today or date.today())
    await db.commit()
    await db.refresh(user)
    return user.current_streak


async def get_user_achievements(
    db: AsyncSession, user_id: int
) -> list[Achievement]:
    result = await db.execute(
        select(Achievement)
        .where(Achievement.user_id == user_id)
        .order_by(Achievement.earned_at, Achievement.id)
    )
    return result.scalars().all()


async def create_sample_users(db: AsyncSession) -> tuple[str, int]:
    """Insert the demo users unless they already exist."""

    from skillquest.curriculum_content import SAMPLE_USERS, SAMPLE_USER_EMAIL

    existing = await get_user_by_email(db, SAMPLE_USER_EMAIL)
    if existing:
        return "Sample users already exist", existing.id

    today = date.today().isoformat()
    main_user = None
    for data in SAMPLE_USERS:
        user = User(**data, last_active_date=today)
        user.level = compute_level(user.total_score)
        db.add(user)
        if data["email"] == SAMPLE_USER_EMAIL:
            main_user = user
    await db.commit()
    await db.refresh(main_user)
    logger.info("Created %d sample users", len(SAMPLE_USERS))
    return "Sample users created successfully", main_user.id


async def get_sample_user(db: AsyncSession) -> User:
    """Return the main demo user, seeding the demo users when missing."""

    from skillquest.curriculum_content import SAMPLE_USER_EMAIL

    user = await get_user_by_email(db, SAMPLE_USER_EMAIL)
    if user:
        return user
    _, user_id = await create_sample_users(db)
    return await get_user(db, user_id)


# --- modules and lessons ---------------------------------------------------


async def create_module(db: AsyncSession, module: Module) -> Module:
    db.add(module)
    await db.commit()
    await db.refresh(module)
    return module


async def get_all_modules(db: AsyncSession) -> list[Module]:
    result = await db.execute(select(Module).order_by(Module.order, Module.id))
    return result.scalars().all()


async def get_module(db: AsyncSession, module_id: int) -> Module | None:
    result = await db.execute(select(Module).where(Module.id == module_id))
    return result.scalar_one_or_none()


async def create_lesson(db: AsyncSession, lesson: Lesson) -> Lesson:
    db.add(lesson)
    await db.commit()
    await db.refresh(lesson)
    return lesson


async def get_lesson(db: AsyncSession, lesson_id: int) -> Lesson | None:
    result = await db.execute(select(Lesson).where(Lesson.id == lesson_id))
    return result.scalar_one_or_none()


async def get_lessons_by_module(db: AsyncSession, module_id: int) -> list[Lesson]:
    """Return a module's lessons in reading order."""
    result = await db.execute(
        select(Lesson)
        .where(Lesson.module_id == module_id)
        .order_by(Lesson.order, Lesson.id)
    )
    return result.scalars().all()


async def get_next_lesson(
    db: AsyncSession,
    user_id: int | None,
    current_module_id: int,
    current_lesson_order: int,
) -> Lesson | None:
    """Return the lesson after ``current_lesson_order`` in reading order.

    Falls through to the first lesson of the next module once the current
    module is exhausted.  ``user_id`` does not influence the result.
    """

    result = await db.execute(
        select(Lesson)
        .where(
            Lesson.module_id == current_module_id,
            Lesson.order > current_lesson_order,
        )
        .order_by(Lesson.order, Lesson.id)
    )
    next_lesson = result.scalars().first()
    if next_lesson:
        return next_lesson

    current_module = await get_module(db, current_module_id)
    if not current_module:
        return None

    result = await db.execute(
        select(Module)
        .where(Module.order > current_module.order)
        .order_by(Module.order, Module.id)
    )
    next_module = result.scalars().first()
    if not next_module:
        return None

    lessons = await get_lessons_by_module(db, next_module.id)
    return lessons[0] if lessons else None


async def is_lesson_unlocked(db: AsyncSession, user: User, lesson: Lesson) -> bool:
    """A lesson opens once the previous lesson of its module is completed."""

    if lesson.order == 1:
        return True
    result = await db.execute(
        select(Lesson).where(
            Lesson.module_id == lesson.module_id,
            Lesson.order == lesson.order - 1,
        )
    )
    previous = result.scalars().first()
    if not previous:
        return False
    progress = await get_lesson_progress(db, user.id, previous.id)
    return bool(progress and progress.completed)


# --- progress --------------------------------------------------------------


async def get_lesson_progress(
    db: AsyncSession, user_id: int, lesson_id: int
) -> Progress | None:
    result = await db.execute(
        select(Progress).where(
            Progress.user_id == user_id, Progress.lesson_id == lesson_id
        )
    )
    return result.scalars().first()


async def get_user_progress(db: AsyncSession, user_id: int) -> list[Progress]:
    result = await db.execute(
        select(Progress).where(Progress.user_id == user_id).order_by(Progress.id)
    )
    return result.scalars().all()


async def count_completed_lessons(db: AsyncSession, user_id: int) -> int:
    result = await db.execute(
        select(func.count())
        .select_from(Progress)
        .where(Progress.user_id == user_id, Progress.completed == True)  # noqa: E712
    )
    return result.scalar()


def _stage_progress(
    db: AsyncSession,
    existing: Progress | None,
    user_id: int,
    lesson_id: int,
    completed: bool,
    score: float,
) -> Progress:
    now = utcnow()
    if existing:
        existing.completed = completed
        existing.score = max(existing.score, score)
        existing.completed_at = now if completed else None
        existing.attempts = existing.attempts + 1
        progress = existing
    else:
        progress = Progress(
            user_id=user_id,
            lesson_id=lesson_id,
            completed=completed,
            score=score,
            completed_at=now if completed else None,
            attempts=1,
        )
    db.add(progress)
    return progress


async def create_progress(
    db: AsyncSession,
    user_id: int,
    lesson_id: int,
    completed: bool,
    score: float,
) -> Progress:
    """Upsert the progress row for ``(user_id, lesson_id)``.

    The best score is kept, ``completed`` takes the latest value and each
    call counts as one attempt.
    """

    existing = await get_lesson_progress(db, user_id, lesson_id)
    progress = _stage_progress(db, existing, user_id, lesson_id, completed, score)
    await db.commit()
    await db.refresh(progress)
    return progress


async def complete_lesson(
    db: AsyncSession,
    user: User,
    lesson: Lesson,
    score: float,
    today: date | None = None,
) -> int:
    """Mark ``lesson`` completed for ``user`` and hand out the lesson XP.

    Returns the XP earned.
    """

    existing = await get_lesson_progress(db, user.id, lesson.id)
    _stage_progress(db, existing, user.id, lesson.id, True, score)
    if existing is None:
        await db.flush()
        if await count_completed_lessons(db, user.id) == 1:
            _add_achievement(db, user.id, ACHIEVEMENT_FIRST_LESSON)

    old_level = _apply_xp(user, lesson.xp_reward)
    db.add(user)
    if user.level > old_level:
        _add_achievement(db, user.id, ACHIEVEMENT_LEVEL_UP, {"level": user.level})
    _apply_daily_streak(db, user, today or date.today())
    await db.commit()
    await db.refresh(user)
    return lesson.xp_reward


# --- quizzes ---------------------------------------------------------------


async def create_quiz(db: AsyncSession, quiz: Quiz) -> Quiz:
    db.add(quiz)
    await db.commit()
    await db.refresh(quiz)
    return quiz


async def get_quiz(db: AsyncSession, quiz_id: int) -> Quiz | None:
    result = await db.execute(select(Quiz).where(Quiz.id == quiz_id))
    return result.scalar_one_or_none()


async def get_quiz_by_module(db: AsyncSession, module_id: int) -> Quiz | None:
    result = await db.execute(
        select(Quiz).where(Quiz.module_id == module_id).order_by(Quiz.id)
    )
    return result.scalars().first()


async def get_user_quiz_attempts(
    db: AsyncSession, user_id: int, quiz_id: int
) -> list[QuizAttempt]:
    result = await db.execute(
        select(QuizAttempt)
        .where(QuizAttempt.user_id == user_id, QuizAttempt.quiz_id == quiz_id)
        .order_by(QuizAttempt.completed_at, QuizAttempt.id)
    )
    return result.scalars().all()


async def is_module_complete(db: AsyncSession, user_id: int, module_id: int) -> bool:
    """True when every lesson of the module has a completed progress row."""

    lessons = await get_lessons_by_module(db, module_id)
    progress = await get_user_progress(db, user_id)
    completed_ids = {p.lesson_id for p in progress if p.completed}
    done = [lesson for lesson in lessons if lesson.id in completed_ids]
    return len(done) == len(lessons)


async def submit_quiz(
    db: AsyncSession, user: User, quiz: Quiz, answers: list[dict]
) -> dict:
    """Grade a submission, store the attempt and award XP and achievements."""

    graded = grade_answers(quiz.questions, answers)
    total_score = sum(a["points"] for a in graded)
    max_score = max_quiz_score(quiz.questions)
    passed = total_score >= quiz.passing_score

    db.add(
        QuizAttempt(
            user_id=user.id,
            quiz_id=quiz.id,
            answers=graded,
            total_score=total_score,
            passed=passed,
        )
    )

    if passed:
        _apply_xp(user, quiz.xp_reward)
        db.add(user)
        if total_score == max_score:
            _add_achievement(
                db, user.id, ACHIEVEMENT_PERFECT_QUIZ, {"module_id": quiz.module_id}
            )
        if await is_module_complete(db, user.id, quiz.module_id):
            _add_achievement(
                db, user.id, ACHIEVEMENT_MODULE_COMPLETE, {"module_id": quiz.module_id}
            )

    await db.commit()
    logger.info(
        "User %s scored %s/%s on quiz %s (%s)",
        user.id,
        total_score,
        max_score,
        quiz.id,
        "passed" if passed else "failed",
    )
    return {
        "passed": passed,
        "total_score": total_score,
        "max_score": max_score,
        "graded_answers": graded,
        "xp_earned": quiz.xp_reward if passed else 0,
    }


# --- practice prompts ------------------------------------------------------


async def create_learning_prompt(
    db: AsyncSession, prompt: LearningPrompt
) -> LearningPrompt:
    db.add(prompt)
    await db.commit()
    await db.refresh(prompt)
    return prompt


async def get_learning_prompt(
    db: AsyncSession, prompt_id: int
) -> LearningPrompt | None:
    result = await db.execute(
        select(LearningPrompt).where(LearningPrompt.id == prompt_id)
    )
    return result.scalar_one_or_none()


async def get_active_prompts(
    db: AsyncSession,
    category: str | None = None,
    difficulty: str | None = None,
) -> list[LearningPrompt]:
    """Active prompts, optionally narrowed by category and difficulty."""
    query = select(LearningPrompt).where(LearningPrompt.is_active == True)  # noqa: E712
    if category:
        query = query.where(LearningPrompt.category == category)
    if difficulty:
        query = query.where(LearningPrompt.difficulty == difficulty)
    result = await db.execute(query.order_by(LearningPrompt.id))
    return result.scalars().all()


async def get_prompts_by_category(
    db: AsyncSession, category: str
) -> list[LearningPrompt]:
    return await get_active_prompts(db, category=category)


async def get_prompts_by_difficulty(
    db: AsyncSession, difficulty: str
) -> list[LearningPrompt]:
    return await get_active_prompts(db, difficulty=difficulty)


async def get_random_prompt(
    db: AsyncSession,
    category: str | None = None,
    difficulty: str | None = None,
    exclude: list[int] | None = None,
) -> LearningPrompt | None:
    """Pick one matching active prompt at random, skipping ``exclude`` ids."""

    prompts = await get_active_prompts(db, category, difficulty)
    if exclude:
        prompts = [p for p in prompts if p.id not in exclude]
    if not prompts:
        return None
    return random.choice(prompts)


async def get_user_learning_profile(db: AsyncSession, user_id: int) -> dict | None:
    user = await get_user(db, user_id)
    return user.learning_profile if user else None


async def update_user_learning_profile(
    db: AsyncSession, user: User, changes: dict
) -> dict:
    """Merge ``changes`` into the learner's profile and store it."""

    # assign a fresh dict so the JSON column is flagged as modified
    user.learning_profile = merge_learning_profile(user.learning_profile, changes)
    await save_user(db, user)
    return user.learning_profile


async def start_prompt_attempt(
    db: AsyncSession,
    user_id: int,
    prompt_id: int,
    user_input: str,
    session_id: str | None = None,
) -> PromptAttempt:
    attempt = PromptAttempt(
        user_id=user_id,
        prompt_id=prompt_id,
        attempt={"user_input": user_input, "user_output": "", "time_spent": 0},
        meta={"session_id": session_id, "device_type": "web", "reference_used": False},
    )
    db.add(attempt)
    await db.commit()
    await db.refresh(attempt)
    return attempt


async def get_prompt_attempt(
    db: AsyncSession, attempt_id: int
) -> PromptAttempt | None:
    result = await db.execute(select(PromptAttempt).where(PromptAttempt.id == attempt_id))
    return result.scalar_one_or_none()


async def complete_prompt_attempt(
    db: AsyncSession,
    attempt: PromptAttempt,
    prompt: LearningPrompt,
    user_output: str,
    time_spent: float,
    self_rating: float | None = None,
    feedback: dict | None = None,
) -> int:
    """Close an attempt, credit the learner and record the prompt as done.

    Returns the XP earned.  Feedback is only kept alongside a self rating.
    """

    xp = prompt_xp(prompt.xp_reward, self_rating)
    details = dict(attempt.attempt)
    details["user_output"] = user_output
    details["time_spent"] = time_spent
    if self_rating:
        details["feedback"] = {"self_rating": self_rating, **(feedback or {})}
    else:
        details.pop("feedback", None)
    attempt.attempt = details
    attempt.completed = True
    attempt.xp_earned = xp
    attempt.completed_at = utcnow()
    db.add(attempt)

    user = await get_user(db, attempt.user_id)
    if user:
        profile = dict(user.learning_profile or default_learning_profile())
        completed = list(profile.get("completed_prompts") or [])
        if prompt.id not in completed:
            completed.append(prompt.id)
        profile["completed_prompts"] = completed
        user.learning_profile = profile
        _apply_xp(user, xp)
        db.add(user)

    await db.commit()
    logger.info("User %s completed prompt %s for %s XP", attempt.user_id, prompt.id, xp)
    return xp


async def get_user_prompt_attempts(
    db: AsyncSession, user_id: int, limit: int | None = None
) -> list[PromptAttempt]:
    """Most recent attempts first."""
    query = (
        select(PromptAttempt)
        .where(PromptAttempt.user_id == user_id)
        .order_by(PromptAttempt.id.desc())
    )
    if limit:
        query = query.limit(limit)
    result = await db.execute(query)
    return result.scalars().all()


async def get_personalized_prompts(
    db: AsyncSession, user_id: int
) -> list[LearningPrompt]:
    """Up to ten unfinished prompts ranked against the learner's profile.

    Learners without a profile get the first five beginner prompts.
    """

    user = await get_user(db, user_id)
    if not user or not user.learning_profile:
        prompts = await get_active_prompts(db, difficulty="beginner")
        return prompts[:5]

    profile = user.learning_profile
    done = set(profile.get("completed_prompts") or [])
    prompts = [p for p in await get_active_prompts(db) if p.id not in done]
    ranked = sorted(
        prompts,
        key=lambda p: prompt_match_score(
            {"tags": p.tags, "category": p.category, "difficulty": p.difficulty},
            profile,
        ),
        reverse=True,
    )
    return ranked[:RECOMMENDATION_LIMIT]


async def create_sample_prompts(db: AsyncSession) -> tuple[str, list[int]]:
    """Insert the built-in practice prompts when none exist yet."""

    from skillquest.curriculum_content import SAMPLE_PROMPTS

    result = await db.execute(select(func.count()).select_from(LearningPrompt))
    if result.scalar():
        return "Sample prompts already exist", []

    prompts = [LearningPrompt(**data) for data in SAMPLE_PROMPTS]
    for prompt in prompts:
        db.add(prompt)
    await db.commit()
    logger.info("Created %d sample prompts", len(prompts))
    return "Sample prompts created successfully", [p.id for p in prompts]

# --- seeding ---------------------------------------------------------------


async def ensure_sample_content(db: AsyncSession) -> None:
    """Seed the database with the built-in curriculum when it is empty."""

    from skillquest.curriculum_content import SAMPLE_MODULES

    result = await db.execute(select(func.count()).select_from(Module))
    if result.scalar():
        return

    for data in SAMPLE_MODULES:
        module = Module(
            title=data["title"],
            description=data["description"],
            order=data["order"],
            is_active=True,
        )
        db.add(module)
        await db.flush()
        for lesson in data["lessons"]:
            db.add(Lesson(module_id=module.id, **lesson))
        quiz = data.get("quiz")
        if quiz:
            db.add(Quiz(module_id=module.id, **quiz))
    await db.commit()
    logger.info("Seeded %d sample modules", len(SAMPLE_MODULES))
