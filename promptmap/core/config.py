from pydantic_settings import BaseSettings
from pydantic import field_validator
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables / .env file."""

    # ── Text Generation Providers ─────────────────────────────────────────────
    AI_PROVIDER: str = "hybrid"

    @field_validator("AI_PROVIDER")
    @classmethod
    def validate_ai_provider(cls, v: str) -> str:
        allowed = {"hybrid", "groq", "gemini"}
        if v.lower() not in allowed:
            raise ValueError(f"AI_PROVIDER must be one of {allowed}, got '{v}'")
        return v.lower()

    # Groq (Llama 3 - High Speed)
    GROQ_API_KEY: Optional[str] = None
    GROQ_MODEL: str = "llama-3.3-70b-versatile"

    # Google (Gemini)
    GOOGLE_API_KEY: Optional[str] = None
    GEMINI_MODEL: str = "gemini-1.5-flash"

    AI_TEMPERATURE: float = 0.7
    AI_MAX_TOKENS: int = 1000

    # ── Mind Map Generation ───────────────────────────────────────────────────
    GENERATION_MODE: str = "local"

    @field_validator("GENERATION_MODE")
    @classmethod
    def validate_generation_mode(cls, v: str) -> str:
        allowed = {"local", "assisted"}
        if v.lower() not in allowed:
            raise ValueError(f"GENERATION_MODE must be one of {allowed}, got '{v}'")
        return v.lower()

    MIN_NODE_DISTANCE: float = 50.0

    # ── Limits ────────────────────────────────────────────────────────────────
    MAX_PROMPT_LENGTH: int = 5000
    AI_TIMEOUT_SECONDS: int = 120  # whole-pipeline timeout per request

    # ── Core ──────────────────────────────────────────────────────────────────
    CORS_ORIGINS: List[str] = [
        "http://localhost:5173",
        "http://localhost:5174",
        "http://localhost:3000",
    ]

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


settings = Settings()
