"""Request and response models for modules and lessons."""

from typing import List, Literal, Optional
from pydantic import BaseModel, Field

Difficulty = Literal["beginner", "intermediate", "advanced"]


class ModuleCreate(BaseModel):
    title: str
    description: str
    order: int


class ModuleRead(ModuleCreate):
    id: int
    is_active: bool

    model_config = {"from_attributes": True}


class LessonSection(BaseModel):
    title: str
    content: str
    examples: Optional[List[str]] = None


class LessonContent(BaseModel):
    introduction: str
    sections: List[LessonSection] = Field(default_factory=list)
    key_takeaways: List[str] = Field(default_factory=list)


class LessonCreate(BaseModel):
    title: str
    module_id: int
    order: int
    content: LessonContent
    xp_reward: int
    difficulty: Difficulty


class LessonRead(LessonCreate):
    id: int

    model_config = {"from_attributes": True}


class LessonComplete(BaseModel):
    score: float


class LessonCompleteResult(BaseModel):
    success: bool
    xp_earned: int


class LessonUnlocked(BaseModel):
    unlocked: bool
