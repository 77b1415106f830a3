from typing import Literal

from pydantic import BaseModel, Field, model_validator
from pydantic.alias_generators import to_camel


class TaskRequest(BaseModel):
    model_config = {"alias_generator": to_camel, "populate_by_name": True}

    @model_validator(mode="before")
    @classmethod
    def _null_means_default(cls, data):
        # JSON null on an optional field falls back to that field's default
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class AskRequest(TaskRequest):
    question: str | None = None


class SummarizeRequest(TaskRequest):
    text: str | None = None
    length: Literal["short", "medium", "long"] = "medium"


class ExplainRequest(TaskRequest):
    concept: str | None = None
    context: str = ""


class QuizRequest(TaskRequest):
    topic: str | None = None
    difficulty: str = "beginner"
    question_count: int = Field(10, ge=1, le=50)


class NotesQuizRequest(TaskRequest):
    notes: str | None = None
    difficulty: str = "beginner"
    question_count: int = Field(10, ge=1, le=50)


class FlashcardsRequest(TaskRequest):
    topic: str | None = None
    card_count: int = Field(10, ge=1, le=50)


class KeyPointsRequest(TaskRequest):
    text: str | None = None


class StudyPlanRequest(TaskRequest):
    subjects: list[str] = []
    minutes_per_day: int = Field(60, ge=5, le=600)
    days: int = Field(7, ge=1, le=30)
    goal: str = "Improve understanding"


# Shapes expected back from the model for structured tasks; extra keys are kept


class StructuredOut(BaseModel):
    model_config = {"extra": "allow"}


class QuizQuestion(StructuredOut):
    question: str
    options: list[str] = Field(min_length=4, max_length=4)
    correct: int = Field(ge=0, le=3)
    explanation: str = ""


class QuizOut(StructuredOut):
    quiz: list[QuizQuestion]


class Flashcard(StructuredOut):
    front: str
    back: str
    hint: str | None = None


class FlashcardsOut(StructuredOut):
    flashcards: list[Flashcard]


class GlossaryEntry(StructuredOut):
    term: str
    definition: str


class KeyPointsOut(StructuredOut):
    key_points: list[str]
    glossary: list[GlossaryEntry] = []
    practice_questions: list[str] = []


class StudySession(StructuredOut):
    subject: str
    minutes: int
    activity: str


class StudyDay(StructuredOut):
    model_config = {"extra": "allow", "populate_by_name": True}

    day: int
    total_minutes: int = Field(alias="totalMinutes")
    sessions: list[StudySession]
    tips: list[str] = []


class StudyPlanOut(StructuredOut):
    plan: list[StudyDay]
    motivation: str = ""
