# skillquest/schemas/user.py

from datetime import datetime
from pydantic import BaseModel, EmailStr


class UserCreate(BaseModel):
    email: EmailStr
    name: str


class UserCreated(BaseModel):
    id: int


class UserRead(BaseModel):
    id: int
    email: str
    name: str
    total_score: int
    level: int
    current_streak: int
    longest_streak: int
    last_active_date: str | None = None
    created_at: datetime

    model_config = {"from_attributes": True}


class UserProgressUpdate(BaseModel):
    xp_gained: int
    streak_update: bool = False


class ScoreUpdate(BaseModel):
    score_to_add: int


class ScoreUpdateResult(BaseModel):
    new_level: int
    new_total_score: int


class StreakResult(BaseModel):
    current_streak: int


class SampleUsersResult(BaseModel):
    message: str
    sample_user_id: int


class LeaderboardEntry(BaseModel):
    """Public leaderboard row; no contact details."""

    rank: int
    name: str
    total_score: int
    level: int
    current_streak: int
