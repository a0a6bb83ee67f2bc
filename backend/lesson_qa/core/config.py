# lesson_qa/core/config.py
import os
from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).parent.parent.parent

class Settings(BaseSettings):
    app_name: str = "LessonQA"
    env: str = "local"
    DATABASE_URL: str = "sqlite:///./lesson_qa.db"
    DB_AUTO_CREATE: bool = True

    # =========================
    # LLM (AI review)
    # =========================
    LLM_PROVIDER: str = "gemini"
    GEMINI_API_KEY: str | None = None
    GEMINI_MODEL: str = "gemini-3-flash-preview"

    # Runtime controls
    LLM_TIMEOUT_SECONDS: int = 60
    LLM_MAX_OUTPUT_TOKENS: int = 8192
    LLM_TEMPERATURE: float = 0.1
    LLM_RETRY_DELAY_SECONDS: float = 0.5  # pause before the single retry

    # Observability
    LLM_LOG_PROMPTS: bool = False  # keep False by default (lesson content stays out of logs)

    # Upload
    MAX_UPLOAD_BYTES: int = 25 * 1024 * 1024
    CORS_ALLOW_ORIGINS: str | None = None

    # =========================
    # Normalizer heuristics (tune empirically)
    # =========================
    NORMALIZER_POSITIONAL_SPLIT: float = 0.65
    NORMALIZER_DENSITY_RATIO: float = 1.3
    NORMALIZER_FONT_RATIO: float = 0.85

    model_config = SettingsConfigDict(
        env_file=os.path.join(PROJECT_ROOT, ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

settings = Settings()
