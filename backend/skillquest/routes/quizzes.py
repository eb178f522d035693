"""Routes for module quizzes and graded submissions."""

import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from skillquest.database import get_session
from skillquest.models import Quiz
from skillquest.schemas import (
    QuizCreate,
    QuizRead,
    QuizSubmission,
    QuizResult,
    QuizAttemptRead,
)
from skillquest.crud import (
    create_quiz,
    get_quiz,
    get_quiz_by_module,
    get_user_by_email,
    get_user_quiz_attempts,
    submit_quiz,
)
from skillquest.auth import get_current_email, get_optional_email

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/quizzes", tags=["quizzes"])


@router.post("/", response_model=QuizRead)
async def create_quiz_route(data: QuizCreate, db: AsyncSession = Depends(get_session)):
    quiz = Quiz(
        module_id=data.module_id,
        title=data.title,
        questions=[q.model_dump() for q in data.questions],
        passing_score=data.passing_score,
        xp_reward=data.xp_reward,
    )
    return await create_quiz(db, quiz)


@router.get("/by-module/{module_id}", response_model=QuizRead | None)
async def quiz_for_module(module_id: int, db: AsyncSession = Depends(get_session)):
    return await get_quiz_by_module(db, module_id)


@router.post("/{quiz_id}/submit", response_model=QuizResult)
async def submit_quiz_route(
    quiz_id: int,
    submission: QuizSubmission,
    email: str = Depends(get_current_email),
    db: AsyncSession = Depends(get_session),
):
    """Grade the caller's answers and apply any rewards."""
    quiz = await get_quiz(db, quiz_id)
    if not quiz:
        raise HTTPException(status_code=404, detail="Quiz not found")
    user = await get_user_by_email(db, email)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    answers = [a.model_dump() for a in submission.answers]
    return await submit_quiz(db, user, quiz, answers)


@router.get("/{quiz_id}/attempts", response_model=list[QuizAttemptRead])
async def my_attempts(
    quiz_id: int,
    email: str | None = Depends(get_optional_email),
    db: AsyncSession = Depends(get_session),
):
    """The caller's attempts at this quiz; empty for anonymous callers."""
    if email is None:
        return []
    user = await get_user_by_email(db, email)
    if not user:
        return []
    return await get_user_quiz_attempts(db, user.id, quiz_id)
