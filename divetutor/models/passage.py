"""Passage and Chunk data models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PassageMetadata:
    """Descriptive metadata shared by a passage and all of its chunks."""

    discipline: str
    category: str = ""
    difficulty: str = ""
    certification_ref: str = ""
    standards_refs: tuple[str, ...] = ()

    def __post_init__(self):
        if not self.discipline:
            raise ValueError("discipline must not be empty")
        if not isinstance(self.standards_refs, tuple):
            object.__setattr__(self, "standards_refs", tuple(self.standards_refs))

    def to_dict(self) -> dict:
        return {
            "discipline": self.discipline,
            "category": self.category,
            "difficulty": self.difficulty,
            "certification": self.certification_ref,
            "industryStandards": list(self.standards_refs),
        }


@dataclass(frozen=True)
class Passage:
    """A fixed unit of professional diving content."""

    id: str
    title: str
    text: str
    metadata: PassageMetadata

    def __post_init__(self):
        if not self.id:
            raise ValueError("id must not be empty")
        if not self.text or not self.text.strip():
            raise ValueError("text must not be empty")

    @property
    def discipline(self) -> str:
        return self.metadata.discipline


@dataclass(frozen=True)
class Chunk:
    """A bounded slice of a passage, the unit of retrieval."""

    text: str
    chunk_index: int
    passage_id: str
    passage_title: str
    metadata: PassageMetadata

    def __post_init__(self):
        if not self.text:
            raise ValueError("text must not be empty")
        if self.chunk_index < 0:
            raise ValueError("chunk_index must be >= 0")

    @property
    def discipline(self) -> str:
        return self.metadata.discipline
