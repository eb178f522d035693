"""Learner records, leaderboard and XP / streak updates."""

import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from skillquest.schemas import (
    UserCreate,
    UserCreated,
    UserRead,
    UserProgressUpdate,
    ScoreUpdate,
    ScoreUpdateResult,
    StreakResult,
    SampleUsersResult,
    LeaderboardEntry,
    AchievementRead,
)
from skillquest.models import User
from skillquest.database import get_session
from skillquest.crud import (
    create_user,
    get_user,
    get_user_by_email,
    get_leaderboard,
    update_user_progress,
    update_user_score,
    record_daily_activity,
    get_user_achievements,
    create_sample_users,
    get_sample_user,
)
from skillquest.auth import get_current_user

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/users", tags=["users"])


async def _get_user_or_404(db: AsyncSession, user_id: int) -> User:
    user = await get_user(db, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.post("/", response_model=UserCreated)
async def create_user_route(
    user_in: UserCreate, db: AsyncSession = Depends(get_session)
):
    """Create a learner, or return the id of the one using this e-mail."""
    existing = await get_user_by_email(db, user_in.email)
    if existing:
        return UserCreated(id=existing.id)
    user = await create_user(db, User(email=user_in.email, name=user_in.name))
    logger.info("User %s created", user.email)
    return UserCreated(id=user.id)


@router.get("/by-email", response_model=UserRead | None)
async def read_user_by_email(email: str, db: AsyncSession = Depends(get_session)):
    return await get_user_by_email(db, email)


@router.get("/me", response_model=UserRead)
async def read_current_user(current_user: User = Depends(get_current_user)):
    """Return details for the authenticated learner."""
    return current_user


@router.get("/leaderboard", response_model=list[LeaderboardEntry])
async def leaderboard(db: AsyncSession = Depends(get_session)):
    """Top ten learners by total score, ranked from 1."""
    users = await get_leaderboard(db)
    return [
        LeaderboardEntry(
            rank=rank,
            name=user.name,
            total_score=user.total_score,
            level=user.level,
            current_streak=user.current_streak,
        )
        for rank, user in enumerate(users, start=1)
    ]


@router.post("/samples", response_model=SampleUsersResult)
async def create_sample_users_route(db: AsyncSession = Depends(get_session)):
    """Development helper seeding demo learners."""
    message, user_id = await create_sample_users(db)
    return SampleUsersResult(message=message, sample_user_id=user_id)


@router.get("/sample", response_model=UserRead)
async def read_sample_user(db: AsyncSession = Depends(get_session)):
    return await get_sample_user(db)


@router.get("/{user_id}", response_model=UserRead | None)
async def read_user(user_id: int, db: AsyncSession = Depends(get_session)):
    return await get_user(db, user_id)


@router.post("/{user_id}/progress", response_model=UserRead)
async def update_progress(
    user_id: int,
    data: UserProgressUpdate,
    db: AsyncSession = Depends(get_session),
):
    """Apply an XP delta and, when asked, count one more streak day."""
    user = await _get_user_or_404(db, user_id)
    return await update_user_progress(
        db, user, data.xp_gained, streak_update=data.streak_update
    )


@router.post("/{user_id}/score", response_model=ScoreUpdateResult)
async def update_score(
    user_id: int,
    data: ScoreUpdate,
    db: AsyncSession = Depends(get_session),
):
    user = await _get_user_or_404(db, user_id)
    new_level, new_total = await update_user_score(db, user, data.score_to_add)
    return ScoreUpdateResult(new_level=new_level, new_total_score=new_total)


@router.post("/{user_id}/streak", response_model=StreakResult)
async def update_streak(user_id: int, db: AsyncSession = Depends(get_session)):
    user = await _get_user_or_404(db, user_id)
    streak = await record_daily_activity(db, user)
    return StreakResult(current_streak=streak)


@router.get("/{user_id}/achievements", response_model=list[AchievementRead])
async def list_achievements(user_id: int, db: AsyncSession = Depends(get_session)):
    achievements = await get_user_achievements(db, user_id)
    return [AchievementRead.from_model(a) for a in achievements]
