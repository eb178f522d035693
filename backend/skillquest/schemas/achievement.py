from typing import Literal, Optional
from datetime import datetime
from pydantic import BaseModel

AchievementType = Literal[
    "first_lesson",
    "streak_3",
    "streak_7",
    "streak_30",
    "module_complete",
    "perfect_quiz",
    "level_up",
]


class AchievementMetadata(BaseModel):
    module_id: Optional[int] = None
    level: Optional[int] = None
    streak: Optional[int] = None


class AchievementRead(BaseModel):
    id: int
    user_id: int
    type: AchievementType
    title: str
    description: str
    earned_at: datetime
    metadata: Optional[AchievementMetadata] = None

    @classmethod
    def from_model(cls, achievement) -> "AchievementRead":
        return cls(
            id=achievement.id,
            user_id=achievement.user_id,
            type=achievement.type,
            title=achievement.title,
            description=achievement.description,
            earned_at=achievement.earned_at,
            metadata=achievement.meta,
        )
