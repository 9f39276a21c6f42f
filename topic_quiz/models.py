from pydantic import BaseModel, ConfigDict, Field
from typing import Any, List, Optional

OPTION_COUNT = 4

class QuizItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    question: str = Field(min_length=1)
    options: List[str] = Field(min_length=OPTION_COUNT, max_length=OPTION_COUNT)
    answer: int = Field(ge=0, le=OPTION_COUNT - 1)
    chosen_answer: Optional[int] = Field(default=None, ge=0, le=OPTION_COUNT - 1, alias="chosenAnswer")

    @property
    def is_answered(self) -> bool:
        return self.chosen_answer is not None

    @property
    def is_correct(self) -> bool:
        return self.chosen_answer == self.answer

class GenerateQuestionsRequest(BaseModel):
    topic: Any = None
    count: Any = None

class GenerateQuestionsResponse(BaseModel):
    quizzes: List[QuizItem]

class GenerateFeedbackRequest(BaseModel):
    topic: Any = None
    quizzes: List[QuizItem] = []

class GenerateFeedbackResponse(BaseModel):
    feedback: str

class ErrorResponse(BaseModel):
    error: str

class HealthResponse(BaseModel):
    status: str
    model: str
