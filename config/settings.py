"""Application configuration management."""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """DiveTutor application settings loaded from environment variables."""

    # Provider credentials (empty means "not configured")
    openai_api_key: str = ""
    anthropic_api_key: str = ""
    google_api_key: str = ""

    # LLM
    divetutor_llm_provider: str = "openai"
    divetutor_llm_model: str = "gpt-4o"
    divetutor_llm_temperature: float = 0.7
    divetutor_llm_max_tokens: int = 2000
    divetutor_llm_timeout: float = 60.0

    # Embedding
    divetutor_embedding_provider: str = "sentence-transformers"
    divetutor_embedding_model: str = "all-MiniLM-L6-v2"
    divetutor_embedding_timeout: float = 30.0

    # Chunking (characters)
    divetutor_chunk_size: int = 1000
    divetutor_chunk_overlap: int = 200

    # Retrieval
    divetutor_retrieval_top_k: int = 3
    divetutor_build_index_on_startup: bool = True

    # Server
    divetutor_host: str = "127.0.0.1"
    divetutor_port: int = 8000
    divetutor_log_level: str = "INFO"

    @property
    def llm_api_key(self) -> str:
        """Return the API key for the configured LLM provider."""
        return {
            "openai": self.openai_api_key,
            "anthropic": self.anthropic_api_key,
            "google": self.google_api_key,
        }.get(self.divetutor_llm_provider.lower(), "")

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
