"""Routes for lessons, reading order and lesson completion."""

import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from skillquest.database import get_session
from skillquest.models import Lesson, User
from skillquest.schemas import (
    LessonCreate,
    LessonRead,
    LessonComplete,
    LessonCompleteResult,
    LessonUnlocked,
)
from skillquest.crud import (
    create_lesson,
    get_lesson,
    get_lessons_by_module,
    get_next_lesson,
    complete_lesson,
    is_lesson_unlocked,
    get_user_by_email,
)
from skillquest.auth import get_current_user, get_optional_email

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/lessons", tags=["lessons"])


@router.post("/", response_model=LessonRead)
async def create_lesson_route(
    data: LessonCreate, db: AsyncSession = Depends(get_session)
):
    lesson = Lesson(
        title=data.title,
        module_id=data.module_id,
        order=data.order,
        content=data.content.model_dump(),
        xp_reward=data.xp_reward,
        difficulty=data.difficulty,
    )
    return await create_lesson(db, lesson)


@router.get("/by-module/{module_id}", response_model=list[LessonRead])
async def list_lessons(module_id: int, db: AsyncSession = Depends(get_session)):
    """Lessons of a module in ascending order."""
    return await get_lessons_by_module(db, module_id)


@router.get("/next", response_model=LessonRead | None)
async def next_lesson(
    current_module_id: int,
    current_lesson_order: int,
    user_id: int | None = None,
    db: AsyncSession = Depends(get_session),
):
    """Lesson following the given position, crossing into the next module."""
    return await get_next_lesson(db, user_id, current_module_id, current_lesson_order)


@router.get("/{lesson_id}", response_model=LessonRead | None)
async def read_lesson(lesson_id: int, db: AsyncSession = Depends(get_session)):
    return await get_lesson(db, lesson_id)


@router.post("/{lesson_id}/complete", response_model=LessonCompleteResult)
async def complete_lesson_route(
    lesson_id: int,
    data: LessonComplete,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
):
    lesson = await get_lesson(db, lesson_id)
    if not lesson:
        raise HTTPException(status_code=404, detail="Lesson not found")
    xp = await complete_lesson(db, user, lesson, data.score)
    logger.info("User %s completed lesson %s", user.id, lesson.id)
    return LessonCompleteResult(success=True, xp_earned=xp)


@router.get("/{lesson_id}/unlocked", response_model=LessonUnlocked)
async def lesson_unlocked(
    lesson_id: int,
    email: str | None = Depends(get_optional_email),
    db: AsyncSession = Depends(get_session),
):
    if email is None:
        return LessonUnlocked(unlocked=False)
    user = await get_user_by_email(db, email)
    lesson = await get_lesson(db, lesson_id)
    if not user or not lesson:
        return LessonUnlocked(unlocked=False)
    return LessonUnlocked(unlocked=await is_lesson_unlocked(db, user, lesson))
