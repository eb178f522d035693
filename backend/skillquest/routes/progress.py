"""Routes for per-lesson progress records."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from skillquest.database import get_session
from skillquest.schemas import (
    ProgressCreate,
    ProgressCreated,
    ProgressRead,
    ProgressSummary,
    AchievementRead,
    UserRead,
)
from skillquest.crud import (
    create_progress,
    get_user_progress,
    get_lesson_progress,
    get_user_achievements,
    get_user_by_email,
)
from skillquest.auth import get_optional_email

router = APIRouter(prefix="/progress", tags=["progress"])


@router.post("/", response_model=ProgressCreated)
async def create_progress_route(
    data: ProgressCreate, db: AsyncSession = Depends(get_session)
):
    """Record an attempt; repeated calls update the same row."""
    progress = await create_progress(
        db, data.user_id, data.lesson_id, data.completed, data.score
    )
    return ProgressCreated(id=progress.id)


@router.get("/me", response_model=ProgressSummary | None)
async def my_progress(
    email: str | None = Depends(get_optional_email),
    db: AsyncSession = Depends(get_session),
):
    if email is None:
        return None
    user = await get_user_by_email(db, email)
    if not user:
        return None
    progress = await get_user_progress(db, user.id)
    achievements = await get_user_achievements(db, user.id)
    rows = [ProgressRead.model_validate(p) for p in progress]
    return ProgressSummary(
        user=UserRead.model_validate(user),
        completed_lessons=[p for p in rows if p.completed],
        total_progress=rows,
        achievements=[AchievementRead.from_model(a) for a in achievements],
    )


@router.get("/users/{user_id}", response_model=list[ProgressRead])
async def user_progress(user_id: int, db: AsyncSession = Depends(get_session)):
    return await get_user_progress(db, user_id)


@router.get(
    "/users/{user_id}/lessons/{lesson_id}", response_model=ProgressRead | None
)
async def lesson_progress(
    user_id: int, lesson_id: int, db: AsyncSession = Depends(get_session)
):
    return await get_lesson_progress(db, user_id, lesson_id)
