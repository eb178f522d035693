"""Database models used by SkillQuest.

The models are defined with SQLModel (built on SQLAlchemy and Pydantic)
and represent learners, the curriculum (modules, lessons and quizzes) and
everything a learner accumulates while working through it.  Nested
document shapes such as lesson content or quiz questions are stored in
JSON columns.
"""

from typing import Optional, List
from datetime import datetime, timezone
from sqlmodel import SQLModel, Field
from sqlalchemy import Column, DateTime, JSON

DIFFICULTIES = ("beginner", "intermediate", "advanced")
QUESTION_TYPES = ("multiple_choice", "true_false", "text_input")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _timestamp_column(nullable: bool = False) -> Column:
    return Column(DateTime(timezone=True), nullable=nullable)


class User(SQLModel, table=True):
    """Learner profile with the XP, level and streak counters."""
    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(unique=True, index=True)
    name: str
    total_score: int = 0
    level: int = 1  # always total_score // 1000 + 1
    current_streak: int = 0
    longest_streak: int = 0
    last_active_date: Optional[str] = None  # ISO date, server-local
    # preferences, skill levels and completed prompt ids; see gamification.default_learning_profile
    learning_profile: Optional[dict] = Field(default=None, sa_column=Column(JSON))
    created_at: datetime = Field(default_factory=utcnow, sa_column=_timestamp_column())


class Module(SQLModel, table=True):
    """Ordered grouping of lessons, usually closed by a quiz."""
    id: Optional[int] = Field(default=None, primary_key=True)
    title: str
    description: str
    order: int = Field(index=True)
    is_active: bool = True


class Lesson(SQLModel, table=True):
    """Single reading unit inside a module."""
    id: Optional[int] = Field(default=None, primary_key=True)
    title: str
    module_id: int = Field(foreign_key="module.id", index=True)
    order: int
    # {"introduction": str, "sections": [...], "key_takeaways": [...]}
    content: dict = Field(sa_column=Column(JSON), default_factory=dict)
    xp_reward: int = 0
    difficulty: str = "beginner"


class Progress(SQLModel, table=True):
    """Completion record for one (user, lesson) pair."""
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True)
    lesson_id: int = Field(foreign_key="lesson.id", index=True)
    completed: bool = False
    score: float = 0
    completed_at: Optional[datetime] = Field(
        default=None, sa_column=_timestamp_column(nullable=True)
    )
    attempts: int = 1


class Quiz(SQLModel, table=True):
    """End-of-module quiz; questions are kept as a JSON list."""
    id: Optional[int] = Field(default=None, primary_key=True)
    module_id: int = Field(foreign_key="module.id", index=True)
    title: str
    questions: List[dict] = Field(sa_column=Column(JSON), default_factory=list)
    passing_score: float
    xp_reward: int = 0


class QuizAttempt(SQLModel, table=True):
    """One graded quiz submission.  Never updated after insert."""
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True)
    quiz_id: int = Field(foreign_key="quiz.id", index=True)
    answers: List[dict] = Field(sa_column=Column(JSON), default_factory=list)
    total_score: float = 0
    passed: bool = False
    completed_at: datetime = Field(default_factory=utcnow, sa_column=_timestamp_column())


class Achievement(SQLModel, table=True):
    """Award record.  Duplicates for the same milestone are possible."""
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True)
    type: str  # see ACHIEVEMENT_TYPES in gamification
    title: str
    description: str
    earned_at: datetime = Field(default_factory=utcnow, sa_column=_timestamp_column())
    # "metadata" is reserved on declarative classes
    meta: Optional[dict] = Field(default=None, sa_column=Column(JSON))


class LearningPrompt(SQLModel, table=True):
    """Free-form practice exercise outside the module curriculum."""
    id: Optional[int] = Field(default=None, primary_key=True)
    title: str
    category: str = Field(index=True)
    difficulty: str = Field(default="beginner", index=True)
    tags: List[str] = Field(sa_column=Column(JSON), default_factory=list)
    # {"instruction", "context", "examples": [...], "tips": [...], "variations"}
    prompt: dict = Field(sa_column=Column(JSON), default_factory=dict)
    learning_objectives: List[str] = Field(sa_column=Column(JSON), default_factory=list)
    estimated_time: int = 0  # minutes
    xp_reward: int = 0
    is_active: bool = True
    created_at: datetime = Field(default_factory=utcnow, sa_column=_timestamp_column())


class PromptAttempt(SQLModel, table=True):
    """A learner's go at a prompt; started empty and completed later."""
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True)
    prompt_id: int = Field(foreign_key="learningprompt.id", index=True)
    # {"user_input", "user_output", "time_spent", "feedback"?}
    attempt: dict = Field(sa_column=Column(JSON), default_factory=dict)
    completed: bool = False
    xp_earned: int = 0
    completed_at: datetime = Field(default_factory=utcnow, sa_column=_timestamp_column())
    meta: Optional[dict] = Field(default=None, sa_column=Column(JSON))
