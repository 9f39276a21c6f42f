import os
from pydantic import BaseModel
from dotenv import load_dotenv

load_dotenv()

class Settings(BaseModel):
    gemini_api_key: str | None = os.getenv("GEMINI_API_KEY")
    gemini_model: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
    gemini_temperature: float = float(os.getenv("GEMINI_TEMPERATURE", "0.2"))
    default_question_count: int = int(os.getenv("DEFAULT_QUESTION_COUNT", "5"))
    transcript_dir: str | None = os.getenv("TRANSCRIPT_DIR") or None
    log_level: str = os.getenv("LOG_LEVEL", "DEBUG").upper()
    cors_allow_origins: list[str] = [o.strip() for o in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",") if o.strip()]
    host: str = os.getenv("HOST", "127.0.0.1")
    port: int = int(os.getenv("PORT", "8000"))
    api_url: str = os.getenv("QUIZ_API_URL", "http://127.0.0.1:8000")
    api_timeout: float = float(os.getenv("QUIZ_API_TIMEOUT", "60"))

settings = Settings()
