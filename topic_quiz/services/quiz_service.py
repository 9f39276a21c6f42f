import logging
import math
from typing import Any, List
from ..config import settings
from ..errors import ParseError, ProviderError, UpstreamError, ValidationError
from ..models import QuizItem
from .gemini_client import ModelClient
from .prompt_builder import PromptBuilder
from .response_parser import parse_quiz_items

logger = logging.getLogger("topic_quiz")

def clean_topic(value: Any) -> str:
    topic = value.strip() if isinstance(value, str) else ""
    if not topic:
        raise ValidationError("Missing topic")
    return topic

def coerce_count(value: Any, default: int | None = None) -> int:
    """Read a requested question count, falling back to the default for anything unusable."""
    fallback = default if default is not None else settings.default_question_count
    if isinstance(value, bool) or value is None:
        return fallback
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return fallback
    if isinstance(value, float) and not math.isfinite(value):
        return fallback
    if not isinstance(value, (int, float)):
        return fallback
    count = int(value)
    return count if count >= 1 else fallback

class QuizService:
    def __init__(self, client: ModelClient, prompt_builder: PromptBuilder | None = None) -> None:
        self.client = client
        self.prompt_builder = prompt_builder or PromptBuilder()

    def _call_model(self, prompt: str) -> str:
        try:
            raw_text = self.client.generate(prompt)
        except ProviderError as exc:
            raise UpstreamError(exc.message) from exc
        if not raw_text or not raw_text.strip():
            raise UpstreamError("No content from model")
        return raw_text

    def generate_questions(self, topic: Any, count: Any = None) -> List[QuizItem]:
        topic = clean_topic(topic)
        count = coerce_count(count)
        prompt = self.prompt_builder.build_questions(topic=topic, count=count)
        raw_text = self._call_model(prompt)
        try:
            items = parse_quiz_items(raw_text, expected_count=count)
        except ParseError:
            logger.warning({"event": "questions_unparseable", "topic": topic, "preview": raw_text[:200]})
            raise
        if not items:
            logger.warning({"event": "questions_empty", "topic": topic})
            raise ParseError("Model returned no questions")
        logger.debug({"event": "questions_generated", "topic": topic, "requested": count, "count": len(items)})
        return items

    def generate_feedback(self, topic: Any, items: List[QuizItem]) -> str:
        topic = clean_topic(topic)
        if not items:
            raise ValidationError("Missing quizzes")
        prompt = self.prompt_builder.build_feedback(topic=topic, items=items)
        feedback = self._call_model(prompt).strip()
        logger.debug({"event": "feedback_generated", "topic": topic, "items": len(items), "chars": len(feedback)})
        return feedback
