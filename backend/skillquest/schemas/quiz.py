"""Quiz definitions, submissions and grading results."""

from typing import List, Literal, Optional, Union
from datetime import datetime
from pydantic import BaseModel, Field, StrictFloat, StrictInt, StrictStr

QuestionType = Literal["multiple_choice", "true_false", "text_input"]

# Answers are compared strictly, so "1" and 1 are different answers.  Strict
# types keep JSON booleans from being coerced into numbers.
Answer = Union[StrictStr, StrictInt, StrictFloat]


class QuizQuestion(BaseModel):
    id: str
    question: str
    type: QuestionType
    options: Optional[List[str]] = None
    correct_answer: Answer
    explanation: str
    points: float


class QuizCreate(BaseModel):
    module_id: int
    title: str
    questions: List[QuizQuestion]
    passing_score: float
    xp_reward: int


class QuizRead(QuizCreate):
    id: int

    model_config = {"from_attributes": True}


class SubmittedAnswer(BaseModel):
    question_id: str
    user_answer: Answer


class QuizSubmission(BaseModel):
    answers: List[SubmittedAnswer] = Field(default_factory=list)


class GradedAnswer(SubmittedAnswer):
    is_correct: bool
    points: float


class QuizResult(BaseModel):
    passed: bool
    total_score: float
    max_score: float
    graded_answers: List[GradedAnswer]
    xp_earned: int


class QuizAttemptRead(BaseModel):
    id: int
    user_id: int
    quiz_id: int
    answers: List[GradedAnswer]
    total_score: float
    passed: bool
    completed_at: datetime

    model_config = {"from_attributes": True}
