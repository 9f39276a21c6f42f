import os
import json
import logging
from typing import Dict, Any, Protocol
from datetime import datetime, timezone
from time import perf_counter
import google.generativeai as genai
from ..config import settings
from ..errors import ProviderError

logger = logging.getLogger("topic_quiz")

class ModelClient(Protocol):
    def generate(self, prompt: str) -> str: ...

class GeminiModelClient:
    """Single-attempt text generation against the Gemini API."""

    def __init__(self, api_key: str | None = None, model_name: str | None = None, transcript_dir: str | None = None) -> None:
        self.api_key = api_key if api_key is not None else settings.gemini_api_key
        if self.api_key:
            genai.configure(api_key=self.api_key)
        self.model_name = model_name or settings.gemini_model
        self.transcript_dir = transcript_dir if transcript_dir is not None else settings.transcript_dir
        self.generation_config = {
            "temperature": settings.gemini_temperature,
        }

    def _append_transcript(self, record: Dict[str, Any]) -> None:
        if not self.transcript_dir:
            return
        try:
            os.makedirs(self.transcript_dir, exist_ok=True)
            enriched = dict(record)
            enriched.setdefault("ts", datetime.now(timezone.utc).isoformat())
            with open(os.path.join(self.transcript_dir, "transcript.jsonl"), "a", encoding="utf-8") as f:
                f.write(json.dumps(enriched, ensure_ascii=False) + "\n")
        except OSError:
            logger.exception("transcript_write_failed")

    def _extract_text(self, response: Any) -> str:
        try:
            text = response.text or ""
        except ValueError:
            # .text raises when the candidate carries no text parts
            text = ""
        if not text and getattr(response, "candidates", None):
            try:
                parts = response.candidates[0].content.parts
                text = "".join(getattr(p, "text", "") for p in parts)
            except (AttributeError, IndexError):
                text = ""
        return text.strip()

    def generate(self, prompt: str) -> str:
        if not self.api_key:
            logger.warning({"event": "gemini_no_api_key"})
            raise ProviderError("GEMINI_API_KEY is not configured")
        logger.debug({"event": "gemini_request", "model": self.model_name, "prompt_chars": len(prompt)})
        try:
            model = genai.GenerativeModel(self.model_name, generation_config=self.generation_config)
            t0 = perf_counter()
            response = model.generate_content([{"role": "user", "parts": [prompt]}])
            latency_ms = int((perf_counter() - t0) * 1000)
        except Exception as exc:
            logger.exception("gemini_call_failed")
            raise ProviderError(f"Gemini request failed: {exc}") from exc
        raw_text = self._extract_text(response)
        logger.debug({"event": "gemini_response", "preview": raw_text[:200], "latency_ms": latency_ms})
        self._append_transcript({"event": "generate", "model": self.model_name, "latency_ms": latency_ms, "prompt": prompt, "response": raw_text})
        if not raw_text:
            raise ProviderError("No content from Gemini")
        return raw_text
