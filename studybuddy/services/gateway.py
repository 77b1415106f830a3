import logging

from studybuddy.clients.gemini import CompletionClient
from studybuddy.config import Settings
from studybuddy.schemas.tasks import (
    AskRequest,
    ExplainRequest,
    FlashcardsOut,
    FlashcardsRequest,
    KeyPointsOut,
    KeyPointsRequest,
    NotesQuizRequest,
    QuizOut,
    QuizRequest,
    StudyPlanOut,
    StudyPlanRequest,
    SummarizeRequest,
)
from studybuddy.services import prompts
from studybuddy.services.errors import TaskError, invalid_input, service_unavailable
from studybuddy.services.parsing import parse_structured

logger = logging.getLogger(__name__)


def _require(value: str | None, message: str) -> str:
    """Return the trimmed value, rejecting missing or blank input."""
    if value is None or not value.strip():
        raise invalid_input(message)
    return value.strip()


class TaskGateway:
    """Validates task requests, builds prompts and shapes the upstream answer.

    Validation always happens before the completion client is touched, so a
    rejected request costs no upstream call.
    """

    def __init__(self, settings: Settings, client: CompletionClient | None):
        self.settings = settings
        self.client = client

    async def _complete(self, prompt: str) -> str:
        if self.client is None:
            raise service_unavailable()
        result = await self.client.complete(prompt)
        if not result.ok:
            logger.error("%s: %s", result.error.error, result.cause)
            raise TaskError(result.error) from result.cause
        return result.text or ""

    async def ask(self, req: AskRequest) -> dict:
        question = _require(req.question, "Question is required")
        prompt = prompts.ASK_PROMPT.format(audience=self.settings.AUDIENCE, question=question)
        return {"answer": await self._complete(prompt)}

    async def summarize(self, req: SummarizeRequest) -> dict:
        text = _require(req.text, "Text is required")
        prompt = prompts.SUMMARIZE_PROMPT.format(
            length_instruction=prompts.SUMMARY_LENGTHS[req.length],
            audience=self.settings.AUDIENCE,
            text=text,
        )
        return {"summary": await self._complete(prompt)}

    async def explain(self, req: ExplainRequest) -> dict:
        concept = _require(req.concept, "Concept is required")
        context = req.context.strip()
        prompt = prompts.EXPLAIN_PROMPT.format(
            concept=concept,
            audience=self.settings.AUDIENCE,
            context_line=f"Context: {context} " if context else "",
        )
        return {"explanation": await self._complete(prompt)}

    async def generate_quiz(self, req: QuizRequest) -> dict:
        topic = _require(req.topic, "Topic is required")
        prompt = prompts.QUIZ_PROMPT.format(
            difficulty=req.difficulty,
            topic=topic,
            question_count=req.question_count,
            audience=self.settings.AUDIENCE,
        )
        return parse_structured(await self._complete(prompt), QuizOut, "quiz")

    async def notes_to_quiz(self, req: NotesQuizRequest) -> dict:
        notes = _require(req.notes, "Notes are required")
        prompt = prompts.NOTES_QUIZ_PROMPT.format(
            difficulty=req.difficulty,
            question_count=req.question_count,
            audience=self.settings.AUDIENCE,
            notes=notes,
        )
        return parse_structured(await self._complete(prompt), QuizOut, "quiz")

    async def generate_flashcards(self, req: FlashcardsRequest) -> dict:
        topic = _require(req.topic, "Topic is required")
        prompt = prompts.FLASHCARDS_PROMPT.format(
            card_count=req.card_count,
            topic=topic,
            audience=self.settings.AUDIENCE,
        )
        return parse_structured(await self._complete(prompt), FlashcardsOut, "flashcards")

    async def extract_key_points(self, req: KeyPointsRequest) -> dict:
        text = _require(req.text, "Text is required")
        prompt = prompts.KEY_POINTS_PROMPT.format(audience=self.settings.AUDIENCE, text=text)
        return parse_structured(await self._complete(prompt), KeyPointsOut, "key_points")

    async def study_plan(self, req: StudyPlanRequest) -> dict:
        subjects = [s.strip() for s in req.subjects if s and s.strip()]
        if not subjects:
            raise invalid_input("At least one subject is required")
        prompt = prompts.STUDY_PLAN_PROMPT.format(
            days=req.days,
            audience=self.settings.AUDIENCE,
            minutes_per_day=req.minutes_per_day,
            subjects=", ".join(subjects),
            goal=req.goal.strip() or "Improve understanding",
        )
        return parse_structured(await self._complete(prompt), StudyPlanOut, "plan")
