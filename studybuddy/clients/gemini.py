import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable

from openai import AsyncOpenAI

from studybuddy.config import Settings
from studybuddy.services.errors import ClassifiedError, ErrorKind, classify_error

logger = logging.getLogger(__name__)

Generate = Callable[[str], Awaitable[str]]
Sleep = Callable[[float], Awaitable[None]]


def get_gemini_client(settings: Settings) -> AsyncOpenAI | None:
    if not settings.has_api_key:
        logger.warning("GEMINI_API_KEY not set, AI features disabled")
        return None
    # Gemini speaks the OpenAI chat API; SDK retries are off so CompletionClient owns the policy
    return AsyncOpenAI(
        api_key=settings.GEMINI_API_KEY,
        base_url=settings.GEMINI_BASE_URL,
        timeout=settings.UPSTREAM_TIMEOUT_SECONDS,
        max_retries=0,
    )


def gemini_generator(client: AsyncOpenAI, model: str) -> Generate:
    """Wrap an AsyncOpenAI client as a prompt -> text coroutine function."""

    async def generate(prompt: str) -> str:
        response = await client.chat.completions.create(
            model=model,
            messages=[{"role": "user", "content": prompt}],
        )
        return response.choices[0].message.content or ""

    return generate


@dataclass(frozen=True)
class Completion:
    text: str | None = None
    error: ClassifiedError | None = None
    cause: Exception | None = None
    attempts: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None


class CompletionClient:
    """Calls the upstream model, retrying rate-limited attempts with exponential backoff."""

    def __init__(
        self,
        generate: Generate,
        max_retries: int = 3,
        base_delay: float = 1.0,
        sleep: Sleep = asyncio.sleep,
    ):
        self._generate = generate
        self.max_retries = max_retries
        self.base_delay = base_delay
        self._sleep = sleep

    @classmethod
    def from_settings(cls, settings: Settings) -> "CompletionClient | None":
        client = get_gemini_client(settings)
        if not client:
            return None
        return cls(
            gemini_generator(client, settings.GEMINI_MODEL),
            max_retries=settings.MAX_RETRIES,
            base_delay=settings.RETRY_BASE_SECONDS,
        )

    async def complete(self, prompt: str, max_retries: int | None = None) -> Completion:
        attempts_allowed = self.max_retries if max_retries is None else max_retries
        if attempts_allowed < 1:
            raise ValueError("max_retries must be at least 1")

        for attempt in range(attempts_allowed):
            try:
                text = await self._generate(prompt)
            except Exception as exc:
                classified = classify_error(exc)
                if classified.kind is ErrorKind.RATE_LIMITED and attempt < attempts_allowed - 1:
                    wait = self.base_delay * 2**attempt
                    logger.info(
                        "Rate limited, waiting %.1fs before retry %d/%d",
                        wait, attempt + 1, attempts_allowed,
                    )
                    await self._sleep(wait)
                    continue
                return Completion(error=classified, cause=exc, attempts=attempt + 1)
            return Completion(text=text, attempts=attempt + 1)
