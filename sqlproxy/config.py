from pydantic import BaseModel
from dotenv import load_dotenv
import os

# Load environment variables from .env file
load_dotenv()


def _models_from_env() -> tuple[str, ...]:
    raw = os.getenv("GEMINI_MODELS", "gemini-1.5-flash,gemini-1.5-flash-8b")
    return tuple(m.strip() for m in raw.split(",") if m.strip())


class Settings(BaseModel):
    # Generation service (Gemini); models are tried in order, the next one
    # only when the previous one reports a quota error
    gemini_key: str = os.getenv("GEMINI_KEY", "")
    gemini_base_url: str = os.getenv("GEMINI_BASE_URL", "https://generativelanguage.googleapis.com")
    gemini_models: tuple[str, ...] = _models_from_env()

    # Execution service (Supabase Edge Function)
    execution_url: str = os.getenv("SUPABASE_FN", "")
    execution_key: str = os.getenv("SUPABASE_ANON_KEY", "")

    # Query safety / cost control
    max_prompt_chars: int = int(os.getenv("MAX_PROMPT_CHARS", "160"))
    default_limit: int = int(os.getenv("DEFAULT_LIMIT", "200"))
    reference_date: str = os.getenv("REFERENCE_DATE", "2025‑08‑03")

    # Runtime
    http_timeout: float = float(os.getenv("HTTP_TIMEOUT", "60"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    host: str = os.getenv("HOST", "127.0.0.1")
    port: int = int(os.getenv("PORT", "8000"))

    model_config = {"frozen": True}


# Create a global settings object
settings = Settings()
