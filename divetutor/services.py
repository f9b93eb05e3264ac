"""Construct the tutor service objects once per process."""

import logging
from dataclasses import dataclass

from langchain_core.language_models.chat_models import BaseChatModel

from config.settings import Settings, get_settings
from divetutor.agent.dispatcher import TutorDispatcher
from divetutor.content.passages import get_passages
from divetutor.embedding.provider import EmbeddingProvider
from divetutor.errors import LLMNotConfiguredError
from divetutor.tutors.fallback import FallbackResponder
from divetutor.tutors.registry import PersonaRegistry
from divetutor.vectorstore.memory_store import SimilarityIndex

logger = logging.getLogger(__name__)

_UNSET = object()


@dataclass
class TutorServices:
    """Shared, explicitly wired collaborators handed to request handlers."""

    settings: Settings
    registry: PersonaRegistry
    index: SimilarityIndex
    dispatcher: TutorDispatcher

    async def build_index(self) -> None:
        """(Re)build the similarity index from the fixed passages.

        Raises:
            IndexBuildError: If the embedding backend fails.
        """
        await self.index.build(get_passages())


def create_services(
    settings: Settings | None = None,
    embedding_provider: EmbeddingProvider | None = None,
    llm: BaseChatModel | None = _UNSET,
    responder: FallbackResponder | None = None,
) -> TutorServices:
    """Wire the registry, index and dispatcher.

    The embedding provider and chat model default to the configured ones.
    A chat model without credentials is left unset so that every chat uses
    the offline responder.
    """
    settings = settings or get_settings()

    if embedding_provider is None:
        from divetutor.embedding.factory import get_embedding_provider

        embedding_provider = get_embedding_provider(settings)

    if llm is _UNSET:
        from divetutor.llm.config import get_llm

        try:
            llm = get_llm(settings)
        except LLMNotConfiguredError as e:
            logger.warning("%s; tutors will answer from the offline fallback", e)
            llm = None

    registry = PersonaRegistry()
    index = SimilarityIndex(
        embedding_provider,
        chunk_size=settings.divetutor_chunk_size,
        chunk_overlap=settings.divetutor_chunk_overlap,
        timeout=settings.divetutor_embedding_timeout,
    )
    dispatcher = TutorDispatcher(
        registry=registry,
        index=index,
        llm=llm,
        responder=responder,
        top_k=settings.divetutor_retrieval_top_k,
        llm_timeout=settings.divetutor_llm_timeout,
    )
    return TutorServices(settings=settings, registry=registry, index=index, dispatcher=dispatcher)
