"""LLM provider configuration using LangChain abstractions."""

from langchain_core.language_models.chat_models import BaseChatModel

from config.settings import Settings, get_settings
from divetutor.errors import ConfigurationError, LLMNotConfiguredError


def get_llm(settings: Settings | None = None) -> BaseChatModel:
    """Create and return the configured chat model.

    Uses LangChain's BaseChatModel abstraction for provider-agnostic access.
    Default: OpenAI gpt-4o via langchain-openai.

    Raises:
        LLMNotConfiguredError: If the provider's API key is not set.
        ConfigurationError: If the provider is not supported.
    """
    settings = settings or get_settings()
    provider = settings.divetutor_llm_provider.lower()

    if provider not in ("openai", "anthropic", "google"):
        raise ConfigurationError(
            f"Unsupported LLM provider: {provider}. "
            "Supported: 'openai', 'anthropic', 'google'"
        )
    if not settings.llm_api_key:
        raise LLMNotConfiguredError(f"No API key configured for LLM provider '{provider}'")

    if provider == "openai":
        from langchain_openai import ChatOpenAI

        return ChatOpenAI(
            model=settings.divetutor_llm_model,
            temperature=settings.divetutor_llm_temperature,
            max_tokens=settings.divetutor_llm_max_tokens,
            timeout=settings.divetutor_llm_timeout,
            api_key=settings.openai_api_key,
        )
    elif provider == "anthropic":
        from langchain_anthropic import ChatAnthropic

        return ChatAnthropic(
            model=settings.divetutor_llm_model,
            temperature=settings.divetutor_llm_temperature,
            max_tokens=settings.divetutor_llm_max_tokens,
            timeout=settings.divetutor_llm_timeout,
            api_key=settings.anthropic_api_key,
        )
    else:
        from langchain_google_genai import ChatGoogleGenerativeAI

        return ChatGoogleGenerativeAI(
            model=settings.divetutor_llm_model,
            temperature=settings.divetutor_llm_temperature,
            max_output_tokens=settings.divetutor_llm_max_tokens,
            google_api_key=settings.google_api_key,
        )
