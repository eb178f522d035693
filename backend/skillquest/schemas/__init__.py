"""Convenience imports for all schema classes used by the API."""

from .user import (
    UserCreate,
    UserCreated,
    UserRead,
    UserProgressUpdate,
    ScoreUpdate,
    ScoreUpdateResult,
    StreakResult,
    SampleUsersResult,
    LeaderboardEntry,
)
from .achievement import AchievementRead, AchievementMetadata
from .curriculum import (
    ModuleCreate,
    ModuleRead,
    LessonContent,
    LessonSection,
    LessonCreate,
    LessonRead,
    LessonComplete,
    LessonCompleteResult,
    LessonUnlocked,
)
from .progress import ProgressCreate, ProgressCreated, ProgressRead, ProgressSummary
from .quiz import (
    QuizQuestion,
    QuizCreate,
    QuizRead,
    SubmittedAnswer,
    QuizSubmission,
    GradedAnswer,
    QuizResult,
    QuizAttemptRead,
)
from .learning import (
    PromptExample,
    PromptBody,
    LearningPromptCreate,
    LearningPromptRead,
    SamplePromptsResult,
    SkillLevels,
    LearningProfile,
    LearningProfileUpdate,
    PromptAttemptStart,
    PromptAttemptStarted,
    AttemptFeedback,
    PromptAttemptComplete,
    PromptAttemptResult,
    PromptAttemptRead,
)

__all__ = [
    "UserCreate",
    "UserCreated",
    "UserRead",
    "UserProgressUpdate",
    "ScoreUpdate",
    "ScoreUpdateResult",
    "StreakResult",
    "SampleUsersResult",
    "LeaderboardEntry",
    "AchievementRead",
    "AchievementMetadata",
    "ModuleCreate",
    "ModuleRead",
    "LessonContent",
    "LessonSection",
    "LessonCreate",
    "LessonRead",
    "LessonComplete",
    "LessonCompleteResult",
    "LessonUnlocked",
    "ProgressCreate",
    "ProgressCreated",
    "ProgressRead",
    "ProgressSummary",
    "QuizQuestion",
    "QuizCreate",
    "QuizRead",
    "SubmittedAnswer",
    "QuizSubmission",
    "GradedAnswer",
    "QuizResult",
    "QuizAttemptRead",
    "PromptExample",
    "PromptBody",
    "LearningPromptCreate",
    "LearningPromptRead",
    "SamplePromptsResult",
    "SkillLevels",
    "LearningProfile",
    "LearningProfileUpdate",
    "PromptAttemptStart",
    "PromptAttemptStarted",
    "AttemptFeedback",
    "PromptAttemptComplete",
    "PromptAttemptResult",
    "PromptAttemptRead",
]
