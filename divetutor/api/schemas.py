"""Request and response models for the tutor HTTP API."""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field

from divetutor.models.chat import ChatResult
from divetutor.models.curriculum import AssessmentQuestion, LearningPath, Level
from divetutor.models.passage import Chunk
from divetutor.models.persona import Persona

EXCERPT_LENGTH = 200


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class ChatRequest(CamelModel):
    discipline: str = Field(min_length=1)
    message: str = Field(min_length=1)
    session_id: str | None = Field(default=None, alias="sessionId")


class TutorOut(BaseModel):
    id: str
    name: str
    discipline: str
    specialty: str
    avatar: str
    background: str
    traits: list[str]

    @classmethod
    def from_persona(cls, persona: Persona) -> "TutorOut":
        return cls(**persona.to_dict())


class ContentOut(BaseModel):
    content: str
    metadata: dict
    score: float | None = None

    @classmethod
    def from_chunk(
        cls, chunk: Chunk, score: float | None = None, excerpt: bool = False
    ) -> "ContentOut":
        text = chunk.text
        if excerpt and len(text) > EXCERPT_LENGTH:
            text = text[:EXCERPT_LENGTH] + "..."
        metadata = {"passageId": chunk.passage_id, "title": chunk.passage_title}
        metadata.update(chunk.metadata.to_dict())
        return cls(content=text, metadata=metadata, score=score)


class ChatResponse(CamelModel):
    response: str
    tutor: TutorOut
    matched_content: list[ContentOut] = Field(default_factory=list, alias="matchedContent")
    used_fallback: bool = Field(alias="usedFallback")
    session_id: str | None = Field(default=None, alias="sessionId")
    timestamp: datetime = Field(default_factory=_utcnow)

    @classmethod
    def from_result(cls, result: ChatResult) -> "ChatResponse":
        return cls(
            response=result.response_text,
            tutor=TutorOut.from_persona(result.persona),
            matched_content=[ContentOut.from_chunk(c, excerpt=True) for c in result.matched_chunks],
            used_fallback=result.used_fallback,
            session_id=result.session_id,
        )


class StatusResponse(CamelModel):
    index_built: bool = Field(alias="indexBuilt")
    tutor_count: int = Field(alias="tutorCount")
    chunk_count: int = Field(alias="chunkCount")
    disciplines: list[str]
    llm_provider: str = Field(alias="llmProvider")
    llm_model: str = Field(alias="llmModel")
    llm_configured: bool = Field(alias="llmConfigured")
    timestamp: datetime = Field(default_factory=_utcnow)


class SearchResponse(BaseModel):
    query: str
    discipline: str | None = None
    results: list[ContentOut]


class IndexRebuildResponse(CamelModel):
    index_built: bool = Field(alias="indexBuilt")
    chunk_count: int = Field(alias="chunkCount")
    timestamp: datetime = Field(default_factory=_utcnow)


class LearningPathRequest(CamelModel):
    discipline: str = Field(min_length=1)
    user_level: Level = Field(alias="userLevel")
    goals: list[str] = Field(min_length=1)


class LearningPathOut(CamelModel):
    recommendations: list[str]
    next_steps: list[str] = Field(alias="nextSteps")
    resources: list[str]

    @classmethod
    def from_path(cls, path: LearningPath) -> "LearningPathOut":
        return cls(**path.to_dict())


class LearningPathResponse(CamelModel):
    learning_path: LearningPathOut = Field(alias="learningPath")
    tutor: TutorOut
    timestamp: datetime = Field(default_factory=_utcnow)


class AssessmentRequest(CamelModel):
    discipline: str = Field(min_length=1)
    difficulty: Level
    topic: str = Field(min_length=1)
    count: int = Field(default=5, ge=1, le=20)


class QuestionOut(CamelModel):
    question: str
    options: list[str]
    correct_answer: str = Field(alias="correctAnswer")
    explanation: str
    difficulty: str

    @classmethod
    def from_question(cls, question: AssessmentQuestion) -> "QuestionOut":
        return cls(**question.to_dict())


class AssessmentResponse(CamelModel):
    questions: list[QuestionOut]
    tutor: TutorOut
    timestamp: datetime = Field(default_factory=_utcnow)
