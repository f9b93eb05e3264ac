"""Tutor workflow state definition for the LangGraph workflow."""

from typing import TypedDict

from divetutor.models.passage import Chunk
from divetutor.models.persona import Persona


class TutorState(TypedDict):
    """State object passed through the tutor workflow."""
    discipline_key: str
    message: str
    persona: Persona
    matched_chunks: list[Chunk]
    retrieval_error: str | None
    response_text: str | None
    generation_error: str | None  # set when the generative step failed
    used_fallback: bool
