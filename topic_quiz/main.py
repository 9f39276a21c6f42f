"""Quiz HTTP API.

Run with:
	python -m topic_quiz.main
	uvicorn topic_quiz.main:app --reload
"""

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from fastapi.middleware.cors import CORSMiddleware
import logging
from time import perf_counter
from .config import settings
from .errors import QuizError
from .models import (
	ErrorResponse,
	GenerateFeedbackRequest,
	GenerateFeedbackResponse,
	GenerateQuestionsRequest,
	GenerateQuestionsResponse,
	HealthResponse,
)
from .services.gemini_client import GeminiModelClient
from .services.quiz_service import QuizService

logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s %(message)s")
logger = logging.getLogger("topic_quiz")

app = FastAPI(default_response_class=ORJSONResponse)

app.add_middleware(
	CORSMiddleware,
	allow_origins=settings.cors_allow_origins,
	allow_credentials=True,
	allow_methods=["*"],
	allow_headers=["*"],
)

quiz_service = QuizService(GeminiModelClient())

def get_quiz_service() -> QuizService:
	return quiz_service

ERROR_RESPONSES = {
	400: {"model": ErrorResponse},
	500: {"model": ErrorResponse},
	502: {"model": ErrorResponse},
}

@app.on_event("startup")
def on_startup() -> None:
	logger.info({
		"event": "api_startup",
		"model": settings.gemini_model,
		"default_question_count": settings.default_question_count,
		"api_key_configured": bool(settings.gemini_api_key),
	})

@app.middleware("http")
async def timing_middleware(request: Request, call_next):
	start = perf_counter()
	response = await call_next(request)
	duration_ms = int((perf_counter() - start) * 1000)
	logger.debug({
		"event": "request_timing",
		"method": request.method,
		"path": request.url.path,
		"status_code": response.status_code,
		"duration_ms": duration_ms,
	})
	return response

@app.exception_handler(QuizError)
async def quiz_error_handler(request: Request, exc: QuizError):
	logger.warning({"event": "request_failed", "path": request.url.path, "error": type(exc).__name__, "message": exc.message})
	return ORJSONResponse({"error": exc.message}, status_code=exc.status_code)

@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
	errors = exc.errors()
	if errors:
		first = errors[0]
		where = ".".join(str(part) for part in first.get("loc", ()))
		message = f"Invalid request: {where}: {first.get('msg', 'invalid value')}"
	else:
		message = "Invalid request"
	logger.warning({"event": "request_invalid", "path": request.url.path, "message": message})
	return ORJSONResponse({"error": message}, status_code=400)

@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
	logger.exception("unexpected_error")
	return ORJSONResponse({"error": str(exc) or "unknown error"}, status_code=500)

@app.get("/api/health", response_model=HealthResponse)
def health():
	return HealthResponse(status="ok", model=settings.gemini_model)

@app.post("/api/generate-questions", response_model=GenerateQuestionsResponse, responses=ERROR_RESPONSES)
def generate_questions(payload: GenerateQuestionsRequest, service: QuizService = Depends(get_quiz_service)):
	quizzes = service.generate_questions(payload.topic, payload.count)
	return GenerateQuestionsResponse(quizzes=quizzes)

@app.post("/api/generate-feedback", response_model=GenerateFeedbackResponse, responses=ERROR_RESPONSES)
def generate_feedback(payload: GenerateFeedbackRequest, service: QuizService = Depends(get_quiz_service)):
	feedback = service.generate_feedback(payload.topic, payload.quizzes)
	return GenerateFeedbackResponse(feedback=feedback)

if __name__ == "__main__":
	import uvicorn

	uvicorn.run(app, host=settings.host, port=settings.port)
