"""Practice prompts, learner profiles and prompt attempts."""

from typing import List, Literal, Optional
from datetime import datetime
from pydantic import BaseModel, Field

from .curriculum import Difficulty

LearningStyle = Literal["visual", "auditory", "kinesthetic", "reading"]


class PromptExample(BaseModel):
    input: str
    output: str
    explanation: Optional[str] = None


class PromptBody(BaseModel):
    instruction: str
    context: Optional[str] = None
    examples: List[PromptExample] = Field(default_factory=list)
    tips: List[str] = Field(default_factory=list)
    variations: Optional[List[str]] = None


class LearningPromptCreate(BaseModel):
    title: str
    category: str
    difficulty: Difficulty
    tags: List[str] = Field(default_factory=list)
    instruction: str
    context: Optional[str] = None
    examples: List[PromptExample] = Field(default_factory=list)
    tips: List[str] = Field(default_factory=list)
    variations: Optional[List[str]] = None
    learning_objectives: List[str] = Field(default_factory=list)
    estimated_time: int
    xp_reward: int


class LearningPromptRead(BaseModel):
    id: int
    title: str
    category: str
    difficulty: Difficulty
    tags: List[str]
    prompt: PromptBody
    learning_objectives: List[str]
    estimated_time: int
    xp_reward: int
    is_active: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class SamplePromptsResult(BaseModel):
    message: str
    prompt_ids: List[int]


class SkillLevels(BaseModel):
    prompting: float
    creativity: float
    analysis: float
    technical: float


class LearningProfile(BaseModel):
    preferred_topics: List[str] = Field(default_factory=list)
    learning_style: Optional[LearningStyle] = None
    current_focus: Optional[str] = None
    skill_levels: SkillLevels
    completed_prompts: List[int] = Field(default_factory=list)
    favorite_prompts: List[int] = Field(default_factory=list)
    learning_goals: List[str] = Field(default_factory=list)


class LearningProfileUpdate(BaseModel):
    """Only the fields that are sent replace the stored ones."""

    preferred_topics: Optional[List[str]] = None
    learning_style: Optional[LearningStyle] = None
    current_focus: Optional[str] = None
    skill_levels: Optional[SkillLevels] = None
    learning_goals: Optional[List[str]] = None


class PromptAttemptStart(BaseModel):
    user_id: int
    prompt_id: int
    user_input: str
    session_id: Optional[str] = None


class PromptAttemptStarted(BaseModel):
    id: int


class AttemptFeedback(BaseModel):
    what_worked: Optional[str] = None
    what_didnt_work: Optional[str] = None
    improvements: Optional[str] = None


class PromptAttemptComplete(BaseModel):
    user_output: str
    time_spent: float
    self_rating: Optional[float] = Field(default=None, ge=1, le=5)
    feedback: Optional[AttemptFeedback] = None


class PromptAttemptResult(BaseModel):
    xp_earned: int


class PromptAttemptRead(BaseModel):
    id: int
    user_id: int
    prompt_id: int
    attempt: dict
    completed: bool
    xp_earned: int
    completed_at: datetime

    model_config = {"from_attributes": True}
