"""FastAPI application exposing the tutor dispatcher and registry."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Query, Request

from divetutor.api.schemas import (
    AssessmentRequest,
    AssessmentResponse,
    ChatRequest,
    ChatResponse,
    ContentOut,
    IndexRebuildResponse,
    LearningPathOut,
    LearningPathRequest,
    LearningPathResponse,
    QuestionOut,
    SearchResponse,
    StatusResponse,
    TutorOut,
)
from divetutor.errors import (
    EmbeddingBackendError,
    GenerationUnavailableError,
    IndexBuildError,
    IndexNotInitializedError,
    TutorNotFoundError,
)
from divetutor.services import TutorServices, create_services

logger = logging.getLogger(__name__)

router = APIRouter(tags=["tutors"])


def get_services(request: Request) -> TutorServices:
    return request.app.state.services


@router.post("/chat", response_model=ChatResponse)
async def chat(
    request: ChatRequest,
    services: TutorServices = Depends(get_services),
) -> ChatResponse:
    """Chat with the tutor for a discipline.

    Raises:
        HTTPException(404): Unknown discipline
    """
    try:
        result = await services.dispatcher.chat(
            request.discipline, request.message, request.session_id
        )
    except TutorNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return ChatResponse.from_result(result)


@router.post("/learning-path", response_model=LearningPathResponse)
async def learning_path(
    request: LearningPathRequest,
    services: TutorServices = Depends(get_services),
) -> LearningPathResponse:
    """Generate a learning path with the discipline tutor.

    Raises:
        HTTPException(404): Unknown discipline
        HTTPException(422): No usable goals
        HTTPException(503): Model unavailable or output unusable
    """
    try:
        persona = services.registry.resolve(request.discipline)
        path = await services.dispatcher.generate_learning_path(
            request.discipline, request.user_level, request.goals
        )
    except TutorNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except GenerationUnavailableError as e:
        raise HTTPException(status_code=503, detail=f"Learning path unavailable: {e}")
    return LearningPathResponse(
        learning_path=LearningPathOut.from_path(path),
        tutor=TutorOut.from_persona(persona),
    )


@router.post("/assessment", response_model=AssessmentResponse)
async def assessment(
    request: AssessmentRequest,
    services: TutorServices = Depends(get_services),
) -> AssessmentResponse:
    """Generate multiple-choice assessment questions with the discipline tutor.

    Raises:
        HTTPException(404): Unknown discipline
        HTTPException(422): Blank topic
        HTTPException(503): Model unavailable or output unusable
    """
    try:
        persona = services.registry.resolve(request.discipline)
        questions = await services.dispatcher.generate_assessment(
            request.discipline, request.difficulty, request.topic, request.count
        )
    except TutorNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except GenerationUnavailableError as e:
        raise HTTPException(status_code=503, detail=f"Assessment unavailable: {e}")
    return AssessmentResponse(
        questions=[QuestionOut.from_question(q) for q in questions],
        tutor=TutorOut.from_persona(persona),
    )


@router.get("/tutors", response_model=list[TutorOut])
async def list_tutors(services: TutorServices = Depends(get_services)) -> list[TutorOut]:
    return [TutorOut.from_persona(p) for p in services.registry.list_all()]


@router.get("/status", response_model=StatusResponse)
async def status(services: TutorServices = Depends(get_services)) -> StatusResponse:
    settings = services.settings
    return StatusResponse(
        index_built=services.index.is_built(),
        tutor_count=len(services.registry),
        chunk_count=services.index.chunk_count,
        disciplines=services.registry.disciplines,
        llm_provider=settings.divetutor_llm_provider,
        llm_model=settings.divetutor_llm_model,
        llm_configured=services.dispatcher.llm_configured,
    )


@router.get("/search", response_model=SearchResponse)
async def search(
    query: str = Query(min_length=1),
    discipline: str | None = None,
    limit: int = Query(default=5, ge=1, le=20),
    services: TutorServices = Depends(get_services),
) -> SearchResponse:
    """Search the professional content index directly."""
    try:
        scored = await services.index.query_with_scores(query, discipline, limit)
    except IndexNotInitializedError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except EmbeddingBackendError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return SearchResponse(
        query=query,
        discipline=discipline,
        results=[ContentOut.from_chunk(c, score=round(s, 4)) for c, s in scored],
    )


@router.get("/content/{discipline}", response_model=list[ContentOut])
async def content_by_discipline(
    discipline: str,
    services: TutorServices = Depends(get_services),
) -> list[ContentOut]:
    """Return the indexed content for a discipline label or tutor key."""
    try:
        label = services.registry.resolve(discipline).discipline
    except TutorNotFoundError:
        label = discipline
    try:
        chunks = await services.index.content_for_discipline(label)
    except IndexNotInitializedError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except EmbeddingBackendError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return [ContentOut.from_chunk(c) for c in chunks]


@router.post("/index/rebuild", response_model=IndexRebuildResponse)
async def rebuild_index(services: TutorServices = Depends(get_services)) -> IndexRebuildResponse:
    """Rebuild the similarity index. Rebuilds are serialized by the index."""
    try:
        await services.build_index()
    except IndexBuildError as e:
        raise HTTPException(status_code=503, detail=f"Index build failed: {e}")
    return IndexRebuildResponse(index_built=True, chunk_count=services.index.chunk_count)


def create_app(services: TutorServices | None = None) -> FastAPI:
    """Create the FastAPI app.

    Services are created at startup unless injected. When configured, the
    index is built at startup; a failed build is logged and chats run
    without retrieved context.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if getattr(app.state, "services", None) is None:
            app.state.services = create_services()
        svc: TutorServices = app.state.services
        if svc.settings.divetutor_build_index_on_startup and not svc.index.is_built():
            try:
                await svc.build_index()
            except IndexBuildError as e:
                logger.error("Starting without similarity index: %s", e)
        yield

    app = FastAPI(
        title="DiveTutor",
        description="Retrieval-augmented commercial diving tutors with offline fallback.",
        lifespan=lifespan,
    )
    app.state.services = services
    app.include_router(router)

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "healthy"}

    return app
