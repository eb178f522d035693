"""Practice prompts, learner profiles and prompt attempts."""

import logging
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession
from skillquest.database import get_session
from skillquest.models import LearningPrompt
from skillquest.schemas import (
    LearningPromptCreate,
    LearningPromptRead,
    SamplePromptsResult,
    LearningProfile,
    LearningProfileUpdate,
    PromptAttemptStart,
    PromptAttemptStarted,
    PromptAttemptComplete,
    PromptAttemptResult,
    PromptAttemptRead,
)
from skillquest.schemas.curriculum import Difficulty
from skillquest.crud import (
    create_learning_prompt,
    get_learning_prompt,
    get_prompts_by_category,
    get_prompts_by_difficulty,
    get_random_prompt,
    create_sample_prompts,
    get_user,
    get_user_learning_profile,
    update_user_learning_profile,
    start_prompt_attempt,
    get_prompt_attempt,
    complete_prompt_attempt,
    get_user_prompt_attempts,
    get_personalized_prompts,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/learning", tags=["learning"])


@router.post("/prompts", response_model=LearningPromptRead)
async def create_prompt_route(
    data: LearningPromptCreate, db: AsyncSession = Depends(get_session)
):
    body = data.model_dump(include={"instruction", "context", "examples", "tips", "variations"})
    prompt = LearningPrompt(
        title=data.title,
        category=data.category,
        difficulty=data.difficulty,
        tags=data.tags,
        prompt=body,
        learning_objectives=data.learning_objectives,
        estimated_time=data.estimated_time,
        xp_reward=data.xp_reward,
        is_active=True,
    )
    return await create_learning_prompt(db, prompt)


@router.get("/prompts/by-category/{category}", response_model=list[LearningPromptRead])
async def prompts_by_category(category: str, db: AsyncSession = Depends(get_session)):
    return await get_prompts_by_category(db, category)


@router.get(
    "/prompts/by-difficulty/{difficulty}", response_model=list[LearningPromptRead]
)
async def prompts_by_difficulty(
    difficulty: Difficulty, db: AsyncSession = Depends(get_session)
):
    return await get_prompts_by_difficulty(db, difficulty)


@router.get("/prompts/random", response_model=LearningPromptRead | None)
async def random_prompt(
    category: str | None = None,
    difficulty: Difficulty | None = None,
    exclude: list[int] = Query(default=[]),
    db: AsyncSession = Depends(get_session),
):
    """One active prompt matching the filters, or ``null``."""
    return await get_random_prompt(db, category, difficulty, exclude)


@router.post("/prompts/samples", response_model=SamplePromptsResult)
async def create_sample_prompts_route(db: AsyncSession = Depends(get_session)):
    message, prompt_ids = await create_sample_prompts(db)
    return SamplePromptsResult(message=message, prompt_ids=prompt_ids)


@router.get("/users/{user_id}/profile", response_model=LearningProfile | None)
async def read_learning_profile(user_id: int, db: AsyncSession = Depends(get_session)):
    return await get_user_learning_profile(db, user_id)


@router.post("/users/{user_id}/profile", response_model=LearningProfile)
async def update_learning_profile(
    user_id: int,
    data: LearningProfileUpdate,
    db: AsyncSession = Depends(get_session),
):
    user = await get_user(db, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return await update_user_learning_profile(db, user, data.model_dump(exclude_unset=True))


@router.get(
    "/users/{user_id}/recommendations", response_model=list[LearningPromptRead]
)
async def recommendations(user_id: int, db: AsyncSession = Depends(get_session)):
    """Unfinished prompts ranked for this learner."""
    return await get_personalized_prompts(db, user_id)


@router.get("/users/{user_id}/attempts", response_model=list[PromptAttemptRead])
async def user_attempts(
    user_id: int,
    limit: int | None = None,
    db: AsyncSession = Depends(get_session),
):
    return await get_user_prompt_attempts(db, user_id, limit)


@router.post("/attempts", response_model=PromptAttemptStarted)
async def start_attempt(
    data: PromptAttemptStart, db: AsyncSession = Depends(get_session)
):
    if not await get_user(db, data.user_id):
        raise HTTPException(status_code=404, detail="User not found")
    if not await get_learning_prompt(db, data.prompt_id):
        raise HTTPException(status_code=404, detail="Prompt not found")
    attempt = await start_prompt_attempt(
        db, data.user_id, data.prompt_id, data.user_input, data.session_id
    )
    return PromptAttemptStarted(id=attempt.id)


@router.post("/attempts/{attempt_id}/complete", response_model=PromptAttemptResult)
async def complete_attempt(
    attempt_id: int,
    data: PromptAttemptComplete,
    db: AsyncSession = Depends(get_session),
):
    """Finish an attempt; a self rating of 4 or more earns bonus XP."""
    attempt = await get_prompt_attempt(db, attempt_id)
    if not attempt:
        raise HTTPException(status_code=404, detail="Attempt not found")
    prompt = await get_learning_prompt(db, attempt.prompt_id)
    if not prompt:
        raise HTTPException(status_code=404, detail="Prompt not found")
    feedback = data.feedback.model_dump(exclude_none=True) if data.feedback else None
    xp = await complete_prompt_attempt(
        db,
        attempt,
        prompt,
        data.user_output,
        data.time_spent,
        data.self_rating,
        feedback,
    )
    return PromptAttemptResult(xp_earned=xp)
