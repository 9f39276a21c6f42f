import logging
from typing import Any, List, Optional

import httpx
from pydantic import ValidationError

from .config import settings
from .models import GenerateFeedbackResponse, GenerateQuestionsResponse, QuizItem

logger = logging.getLogger("topic_quiz")


class QuizApiError(Exception):
    """A call to the quiz backend failed; status_code is 0 for transport errors."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class QuizApiClient:
    """Async client for the question and feedback endpoints."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = (base_url or settings.api_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.api_timeout
        self.transport = transport

    async def _post(self, path: str, payload: dict) -> Any:
        url = f"{self.base_url}{path}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                r = await client.post(url, json=payload)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning({"event": "api_unreachable", "url": url, "error": str(exc)})
            raise QuizApiError(0, f"Could not reach quiz server: {exc}") from exc

        if r.status_code >= 400:
            try:
                body = r.json()
            except ValueError:
                body = None
            message = body.get("error") if isinstance(body, dict) else None
            message = message or r.text
            logger.warning({"event": "api_error", "url": url, "status_code": r.status_code, "message": message})
            raise QuizApiError(r.status_code, message or f"Request failed: {r.status_code}")
        try:
            return r.json()
        except ValueError as exc:
            raise QuizApiError(r.status_code, "Quiz server returned invalid JSON") from exc

    async def fetch_questions(self, topic: str, count: Optional[int] = None) -> List[QuizItem]:
        payload: dict = {"topic": topic}
        if count is not None:
            payload["count"] = count
        data = await self._post("/api/generate-questions", payload)
        try:
            return GenerateQuestionsResponse.model_validate(data).quizzes
        except ValidationError as exc:
            raise QuizApiError(200, "Quiz server returned malformed questions") from exc

    async def fetch_feedback(self, topic: str, items: List[QuizItem]) -> str:
        payload = {
            "topic": topic,
            "quizzes": [q.model_dump(by_alias=True) for q in items],
        }
        data = await self._post("/api/generate-feedback", payload)
        try:
            return GenerateFeedbackResponse.model_validate(data).feedback
        except ValidationError as exc:
            raise QuizApiError(200, "Quiz server returned malformed feedback") from exc
