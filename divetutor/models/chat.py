"""Chat result data model."""

from dataclasses import dataclass, field

from divetutor.models.passage import Chunk
from divetutor.models.persona import Persona


@dataclass
class ChatResult:
    """The outcome of one tutor chat request."""

    response_text: str
    persona: Persona
    matched_chunks: list[Chunk] = field(default_factory=list)
    used_fallback: bool = False
    session_id: str | None = None
    fallback_reason: str | None = None

    def __post_init__(self):
        if not self.response_text:
            raise ValueError("response_text must not be empty")
