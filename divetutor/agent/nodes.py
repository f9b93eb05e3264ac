"""Tutor workflow nodes: retrieval, prompt assembly, generation, fallback."""

import logging

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage

from divetutor.agent.state import TutorState
from divetutor.errors import DiveTutorError
from divetutor.llm.client import complete
from divetutor.llm.prompts import (
    CLOSING_REMINDER,
    CONTENT_GUIDELINES,
    CONTEXT_HEADER,
    brand_neutral_system_prompt,
)
from divetutor.models.passage import Chunk
from divetutor.models.persona import Persona
from divetutor.tutors.fallback import FallbackResponder
from divetutor.vectorstore.memory_store import SimilarityIndex

logger = logging.getLogger(__name__)


async def retrieve_context(
    state: TutorState,
    index: SimilarityIndex | None,
    top_k: int = 3,
) -> dict:
    """Fetch reference chunks for the tutor's discipline.

    Retrieval is best-effort: a missing index or a failed embedding call
    leaves the chat without context instead of failing it.
    """
    if index is None or not index.is_built():
        return {"matched_chunks": [], "retrieval_error": "similarity index not built"}

    persona = state["persona"]
    try:
        chunks = await index.query(state["message"], persona.discipline, top_k)
    except DiveTutorError as e:
        logger.warning("Retrieval skipped for %s: %s", persona.id, e)
        return {"matched_chunks": [], "retrieval_error": str(e)}

    logger.info("Retrieved %d chunks for %s", len(chunks), persona.id)
    return {"matched_chunks": chunks, "retrieval_error": None}


def build_messages(
    persona: Persona,
    message: str,
    chunks: list[Chunk],
    instructions: str | None = None,
) -> list[BaseMessage]:
    """Assemble the system and user messages for one tutor turn.

    System prompt order: brand-neutral instruction, persona fragment, content
    guidelines, retrieved reference content when there is any, then task
    instructions for structured generations.
    """
    sections = [
        brand_neutral_system_prompt(persona.discipline),
        persona.system_prompt_fragment,
        CONTENT_GUIDELINES,
    ]
    if chunks:
        context = "\n\n".join(c.text for c in chunks)
        sections.append(f"{CONTEXT_HEADER}\n{context}")
    if instructions:
        sections.append(instructions)
    sections.append(CLOSING_REMINDER)

    return [
        SystemMessage(content="\n\n".join(sections)),
        HumanMessage(content=message),
    ]


async def generate_response(
    state: TutorState,
    llm: BaseChatModel | None,
    timeout: float = 60.0,
) -> dict:
    """Call the generative backend with the assembled prompt."""
    messages = build_messages(state["persona"], state["message"], state.get("matched_chunks", []))
    completion = await complete(llm, messages, timeout=timeout)
    if not completion.ok:
        return {"response_text": None, "generation_error": completion.error}
    return {"response_text": completion.text, "generation_error": None, "used_fallback": False}


def fallback_response(state: TutorState, responder: FallbackResponder) -> dict:
    """Answer from the local rule table when generation failed."""
    persona = state["persona"]
    logger.warning(
        "Using offline fallback for %s: %s", persona.id, state.get("generation_error")
    )
    text = responder.respond(persona, state["message"], state.get("discipline_key"))
    return {"response_text": text, "used_fallback": True}
