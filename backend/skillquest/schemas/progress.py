from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel

from .achievement import AchievementRead
from .user import UserRead


class ProgressCreate(BaseModel):
    user_id: int
    lesson_id: int
    completed: bool
    score: float


class ProgressCreated(BaseModel):
    id: int


class ProgressRead(BaseModel):
    id: int
    user_id: int
    lesson_id: int
    completed: bool
    score: float
    completed_at: Optional[datetime] = None
    attempts: int

    model_config = {"from_attributes": True}


class ProgressSummary(BaseModel):
    user: UserRead
    completed_lessons: List[ProgressRead]
    total_progress: List[ProgressRead]
    achievements: List[AchievementRead]
