"""Build the configured embedding provider."""

from config.settings import Settings, get_settings
from divetutor.embedding.provider import EmbeddingProvider
from divetutor.errors import ConfigurationError


def get_embedding_provider(settings: Settings | None = None) -> EmbeddingProvider:
    """Create the embedding provider named by DIVETUTOR_EMBEDDING_PROVIDER.

    Supported: 'sentence-transformers' (local, default) and 'openai'.
    """
    settings = settings or get_settings()
    provider = settings.divetutor_embedding_provider.lower()

    if provider in ("sentence-transformers", "sentence_transformers", "local"):
        from divetutor.embedding.sentence_transformer import SentenceTransformerEmbeddingProvider

        return SentenceTransformerEmbeddingProvider(settings.divetutor_embedding_model)
    elif provider == "openai":
        from divetutor.embedding.openai_provider import OpenAIEmbeddingProvider

        if not settings.openai_api_key:
            raise ConfigurationError("OPENAI_API_KEY is required for OpenAI embeddings")
        model_name = settings.divetutor_embedding_model
        if not model_name.startswith("text-embedding"):
            model_name = "text-embedding-3-small"
        return OpenAIEmbeddingProvider(
            model_name=model_name,
            api_key=settings.openai_api_key,
        )
    else:
        raise ConfigurationError(
            f"Unsupported embedding provider: {provider}. "
            "Supported: 'sentence-transformers', 'openai'"
        )
