from fastapi import APIRouter, Depends

from studybuddy.deps import get_gateway, require_api_key
from studybuddy.schemas.tasks import (
    AskRequest,
    ExplainRequest,
    FlashcardsRequest,
    KeyPointsRequest,
    NotesQuizRequest,
    QuizRequest,
    StudyPlanRequest,
    SummarizeRequest,
)
from studybuddy.services.gateway import TaskGateway

router = APIRouter(dependencies=[Depends(require_api_key)])


@router.post("/ask", summary="Ask AI questions")
async def ask(body: AskRequest, gateway: TaskGateway = Depends(get_gateway)):
    return await gateway.ask(body)


@router.post("/generate-quiz", summary="Generate quizzes")
async def generate_quiz(body: QuizRequest, gateway: TaskGateway = Depends(get_gateway)):
    return await gateway.generate_quiz(body)


@router.post("/summarize", summary="Summarize text")
async def summarize(body: SummarizeRequest, gateway: TaskGateway = Depends(get_gateway)):
    return await gateway.summarize(body)


@router.post("/generate-flashcards", summary="Create flashcards")
async def generate_flashcards(body: FlashcardsRequest, gateway: TaskGateway = Depends(get_gateway)):
    return await gateway.generate_flashcards(body)


@router.post("/explain", summary="Explain concepts")
async def explain(body: ExplainRequest, gateway: TaskGateway = Depends(get_gateway)):
    return await gateway.explain(body)


@router.post("/study-plan", summary="Generate a multi-day plan")
async def study_plan(body: StudyPlanRequest, gateway: TaskGateway = Depends(get_gateway)):
    return await gateway.study_plan(body)


@router.post("/notes-to-quiz", summary="Quiz from pasted notes")
async def notes_to_quiz(body: NotesQuizRequest, gateway: TaskGateway = Depends(get_gateway)):
    return await gateway.notes_to_quiz(body)


@router.post("/extract-key-points", summary="Key takeaways, glossary, practice")
async def extract_key_points(body: KeyPointsRequest, gateway: TaskGateway = Depends(get_gateway)):
    return await gateway.extract_key_points(body)
