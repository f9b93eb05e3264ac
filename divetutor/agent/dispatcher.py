"""Tutor dispatcher: the entry point for chats, learning paths and assessments."""

import logging

from langchain_core.language_models.chat_models import BaseChatModel

from divetutor.agent.curriculum import parse_assessment, parse_learning_path
from divetutor.agent.graph import build_graph
from divetutor.agent.nodes import build_messages
from divetutor.errors import DiveTutorError, GenerationUnavailableError
from divetutor.llm.client import complete
from divetutor.llm.prompts import assessment_instructions, learning_path_instructions
from divetutor.models.chat import ChatResult
from divetutor.models.curriculum import LEVELS, AssessmentQuestion, LearningPath
from divetutor.models.passage import Chunk
from divetutor.models.persona import Persona
from divetutor.tutors.fallback import FallbackResponder
from divetutor.tutors.registry import PersonaRegistry
from divetutor.vectorstore.memory_store import SimilarityIndex

logger = logging.getLogger(__name__)


class TutorDispatcher:
    """Resolves a tutor, retrieves context, and answers through the model or the fallback.

    Only an unknown discipline fails a chat. Retrieval problems mean no
    context, and generative failures switch to the offline responder.
    Learning paths and assessments have no offline form and raise
    GenerationUnavailableError instead.
    """

    def __init__(
        self,
        registry: PersonaRegistry,
        index: SimilarityIndex | None = None,
        llm: BaseChatModel | None = None,
        responder: FallbackResponder | None = None,
        top_k: int = 3,
        llm_timeout: float = 60.0,
    ):
        self._registry = registry
        self._index = index
        self._llm = llm
        self._llm_timeout = llm_timeout
        self._graph = build_graph(
            index=index,
            llm=llm,
            responder=responder or FallbackResponder(),
            top_k=top_k,
            llm_timeout=llm_timeout,
        )

    @property
    def registry(self) -> PersonaRegistry:
        return self._registry

    @property
    def index(self) -> SimilarityIndex | None:
        return self._index

    @property
    def llm_configured(self) -> bool:
        return self._llm is not None

    async def chat(
        self,
        discipline_key: str,
        user_message: str,
        session_id: str | None = None,
    ) -> ChatResult:
        """Answer a user message as the tutor for discipline_key.

        Raises:
            TutorNotFoundError: If no tutor matches discipline_key.
        """
        persona = self._registry.resolve(discipline_key)

        initial_state = {
            "discipline_key": discipline_key,
            "message": user_message,
            "persona": persona,
            "matched_chunks": [],
            "retrieval_error": None,
            "response_text": None,
            "generation_error": None,
            "used_fallback": False,
        }
        result = await self._graph.ainvoke(initial_state)

        logger.info(
            "Chat answered by %s (session=%s, fallback=%s, chunks=%d)",
            persona.id,
            session_id,
            result["used_fallback"],
            len(result["matched_chunks"]),
        )
        return ChatResult(
            response_text=result["response_text"],
            persona=persona,
            matched_chunks=list(result["matched_chunks"]),
            used_fallback=result["used_fallback"],
            session_id=session_id,
            fallback_reason=result["generation_error"] if result["used_fallback"] else None,
        )

    async def _reference_chunks(self, fetch) -> list[Chunk]:
        """Run a retrieval against the index, returning [] if it is unavailable."""
        if self._index is None or not self._index.is_built():
            return []
        try:
            return await fetch(self._index)
        except DiveTutorError as e:
            logger.warning("Retrieval skipped: %s", e)
            return []

    async def _generate(
        self,
        persona: Persona,
        request: str,
        chunks: list[Chunk],
        instructions: str,
    ) -> str:
        messages = build_messages(persona, request, chunks, instructions=instructions)
        completion = await complete(self._llm, messages, timeout=self._llm_timeout)
        if not completion.ok:
            raise GenerationUnavailableError(completion.error)
        return completion.text

    async def generate_learning_path(
        self,
        discipline_key: str,
        level: str,
        goals: list[str],
    ) -> LearningPath:
        """Ask the discipline tutor for a learning path toward the given goals.

        Reference content is the discipline's representative training content.

        Raises:
            TutorNotFoundError: If no tutor matches discipline_key.
            ValueError: If level is not beginner, intermediate or advanced,
                or no goals are given.
            GenerationUnavailableError: If the model is unavailable or its
                output holds no learning path.
        """
        persona = self._registry.resolve(discipline_key)
        if level not in LEVELS:
            raise ValueError(f"level must be one of {', '.join(LEVELS)}")
        goals = [g.strip() for g in goals if g and g.strip()]
        if not goals:
            raise ValueError("at least one goal is required")

        chunks = await self._reference_chunks(
            lambda index: index.content_for_discipline(persona.discipline)
        )
        text = await self._generate(
            persona,
            f"Create a learning path for {level} level {persona.discipline} professional "
            f"with goals: {', '.join(goals)}",
            chunks,
            learning_path_instructions(persona.discipline, level, goals),
        )
        path = parse_learning_path(text)
        if path.is_empty():
            raise GenerationUnavailableError("model output contained no learning path")

        logger.info("Learning path generated by %s (%s, %d goals)", persona.id, level, len(goals))
        return path

    async def generate_assessment(
        self,
        discipline_key: str,
        difficulty: str,
        topic: str,
        count: int = 5,
    ) -> list[AssessmentQuestion]:
        """Ask the discipline tutor for multiple-choice questions on a topic.

        Returns at most count questions, each tagged with the requested
        difficulty.

        Raises:
            TutorNotFoundError: If no tutor matches discipline_key.
            ValueError: If difficulty is unknown, topic is blank or count < 1.
            GenerationUnavailableError: If the model is unavailable or its
                output holds no questions.
        """
        persona = self._registry.resolve(discipline_key)
        if difficulty not in LEVELS:
            raise ValueError(f"difficulty must be one of {', '.join(LEVELS)}")
        if not topic or not topic.strip():
            raise ValueError("topic must not be empty")
        if count < 1:
            raise ValueError("count must be >= 1")

        chunks = await self._reference_chunks(
            lambda index: index.query(f"{topic} {persona.discipline}", persona.discipline, 5)
        )
        text = await self._generate(
            persona,
            f"Generate {count} {difficulty} level questions about {topic} in {persona.discipline}",
            chunks,
            assessment_instructions(persona.discipline, difficulty, topic, count),
        )
        questions = parse_assessment(text, difficulty, count)
        if not questions:
            raise GenerationUnavailableError("model output contained no assessment questions")

        logger.info(
            "Generated %d %s questions on %r for %s", len(questions), difficulty, topic, persona.id
        )
        return questions
