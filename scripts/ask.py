#!/usr/bin/env python3
"""Run one study task against the configured model. Usage: python -m scripts.ask <task> <text>"""
import argparse
import asyncio
import json
import sys
from pathlib import Path

# Ensure project root on path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from pydantic import ValidationError

from studybuddy.clients.gemini import CompletionClient
from studybuddy.config import get_settings
from studybuddy.schemas import tasks as schemas
from studybuddy.services.errors import TaskError
from studybuddy.services.gateway import TaskGateway

# task name -> (gateway method, request model, primary field)
TASKS = {
    "ask": ("ask", schemas.AskRequest, "question"),
    "summarize": ("summarize", schemas.SummarizeRequest, "text"),
    "explain": ("explain", schemas.ExplainRequest, "concept"),
    "quiz": ("generate_quiz", schemas.QuizRequest, "topic"),
    "notes-to-quiz": ("notes_to_quiz", schemas.NotesQuizRequest, "notes"),
    "flashcards": ("generate_flashcards", schemas.FlashcardsRequest, "topic"),
    "key-points": ("extract_key_points", schemas.KeyPointsRequest, "text"),
    "study-plan": ("study_plan", schemas.StudyPlanRequest, "subjects"),
}


def main():
    parser = argparse.ArgumentParser(description="Run a study task")
    parser.add_argument("task", choices=sorted(TASKS))
    parser.add_argument("text", help="Primary input; comma-separated subjects for study-plan")
    parser.add_argument(
        "--option",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Extra request field, e.g. --option length=short (JSON values accepted)",
    )
    args = parser.parse_args()

    method, model, field = TASKS[args.task]
    body = {field: args.text.split(",") if field == "subjects" else args.text}
    for option in args.option:
        key, _, value = option.partition("=")
        try:
            body[key] = json.loads(value)
        except json.JSONDecodeError:
            body[key] = value

    try:
        request = model.model_validate(body)
    except ValidationError as e:
        parser.error(str(e))

    settings = get_settings()
    gateway = TaskGateway(settings, CompletionClient.from_settings(settings))
    try:
        result = asyncio.run(getattr(gateway, method)(request))
    except TaskError as e:
        print(json.dumps(e.classified.to_payload(), indent=2), file=sys.stderr)
        sys.exit(1)
    print(json.dumps(result, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
