"""Configuration settings for the math practice agents."""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "mathpractice"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

    # OpenAI-compatible LLM (Ollama /v1, LM Studio, cloud providers, etc.)
    LLM_BASE_URL: str = "http://127.0.0.1:11434/v1"
    LLM_API_KEY: str = Field(default="", description="API key for OpenAI-compatible LLM backend")
    LLM_FAST_MODEL: str = "llama3.1:latest"
    LLM_HIGH_CAPACITY_MODEL: str = "qwen3:14b"
    LLM_TEMPERATURE: float = 0.7
    LLM_MAX_TOKENS: int = 1024

    # Grading
    GRADING_TEMPERATURE: float = 0.3
    GRADING_TIMEOUT_SECONDS: float = 120.0

    # Question generation
    GENERATION_TIMEOUT_SECONDS: float = 60.0

    # Embeddings
    EMBEDDINGS_BASE_URL: str = "http://127.0.0.1:11434/v1"
    EMBEDDINGS_API_KEY: str = Field(default="", description="API key for OpenAI-compatible embeddings backend")
    EMBEDDINGS_MODEL: str = "nomic-embed-text"
    EMBEDDINGS_DIMENSIONS: int = 768

    # Vector Database - ChromaDB
    QUESTION_VECTOR_DB_PATH: str = "./data/vector_db/questions"
    QUESTION_COLLECTION_NAME: str = "math_questions"
    VECTOR_SEARCH_TOP_K: int = 5
    VECTOR_SEARCH_TIMEOUT_SECONDS: float = 5.0

    # Context enhancement
    ENHANCEMENT_SEED: Optional[int] = None

    # LangSmith tracing
    LANGSMITH_TRACING: bool = False
    LANGSMITH_API_KEY: str = Field(default="", description="LangSmith API key")
    LANGSMITH_ENDPOINT: str = "https://api.smith.langchain.com"
    LANGSMITH_PROJECT: str = "mathpractice"


def get_settings() -> Settings:
    """Get settings instance."""
    return Settings()
