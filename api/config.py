from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Generative backend
    ollama_base_url: str = "http://localhost:11434"
    ollama_model: str = "qwen:latest"
    temperature: float = 0.7
    llm_timeout_seconds: float = 300.0

    # Chunking / pacing
    token_limit: int = 150_000
    max_chunk_tokens: int = 99_000
    model_context_tokens: int = 200_000
    prompt_reserve_tokens: int = 5_000
    max_requests_per_minute: int = 15
    max_retries: int = 5
    initial_backoff_seconds: float = 1.0
    chunk_delay_seconds: float = 0.0
    max_modules: int = 75
    verify_json: bool = False
    fact_check: bool = False

    # Flat-file storage
    data_dir: Path = Path("users")
    generated_dir: Path = Path("generated_courses")
    diagnostics_dir: Path = Path("error_logs")

    # Logging
    log_dir: Path = Path("logs")
    log_level: str = "INFO"
    log_to_console: bool = False


@lru_cache
def get_settings() -> Settings:
    return Settings()
