"""In-memory similarity index over chunked professional passages.

The index holds one immutable snapshot (chunks plus L2-normalized embedding
matrix). A build prepares a complete new snapshot before swapping it in, so
readers only ever see the previous index or the new one.
"""

import asyncio
import logging
from dataclasses import dataclass

import numpy as np

from divetutor.embedding.provider import EmbeddingProvider
from divetutor.errors import EmbeddingBackendError, IndexBuildError, IndexNotInitializedError
from divetutor.ingestion.chunker import chunk_passages
from divetutor.models.passage import Chunk, Passage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Snapshot:
    chunks: tuple[Chunk, ...]
    vectors: np.ndarray


def _normalize(matrix: np.ndarray) -> np.ndarray:
    norms = np.linalg.norm(matrix, axis=1, keepdims=True)
    norms[norms == 0] = 1.0
    return matrix / norms


class SimilarityIndex:
    """Cosine-similarity index over passage chunks, filterable by discipline."""

    def __init__(
        self,
        embedding_provider: EmbeddingProvider,
        chunk_size: int = 1000,
        chunk_overlap: int = 200,
        timeout: float = 30.0,
    ):
        if chunk_size <= 0 or not 0 <= chunk_overlap < chunk_size:
            raise ValueError("chunk_size must be > 0 and 0 <= chunk_overlap < chunk_size")
        self._provider = embedding_provider
        self._chunk_size = chunk_size
        self._chunk_overlap = chunk_overlap
        self._timeout = timeout
        self._snapshot: _Snapshot | None = None
        self._build_lock = asyncio.Lock()

    def is_built(self) -> bool:
        return self._snapshot is not None

    @property
    def chunks(self) -> tuple[Chunk, ...]:
        """Chunks of the current snapshot (empty when not built)."""
        return self._snapshot.chunks if self._snapshot else ()

    @property
    def chunk_count(self) -> int:
        return len(self.chunks)

    async def _embed(self, texts: list[str], query: bool = False) -> np.ndarray:
        """Embed texts off the event loop, bounded by the configured timeout."""
        embed_fn = self._provider.embed_query if query else self._provider.embed
        try:
            vectors = await asyncio.wait_for(
                asyncio.to_thread(embed_fn, texts), timeout=self._timeout
            )
        except asyncio.TimeoutError as e:
            raise EmbeddingBackendError(
                f"Embedding backend timed out after {self._timeout}s"
            ) from e
        except Exception as e:
            raise EmbeddingBackendError(f"Embedding backend failed: {e}") from e

        try:
            matrix = np.asarray(vectors, dtype=np.float32)
        except (TypeError, ValueError) as e:
            raise EmbeddingBackendError(f"Embedding backend returned malformed vectors: {e}") from e
        if matrix.ndim != 2 or matrix.shape[0] != len(texts):
            raise EmbeddingBackendError(
                f"Embedding backend returned shape {matrix.shape} for {len(texts)} texts"
            )
        return _normalize(matrix)

    async def build(self, passages: list[Passage]) -> None:
        """Chunk and embed passages, then replace the current snapshot.

        Raises:
            IndexBuildError: If embedding fails. The previous snapshot, if
                any, stays in place.
        """
        async with self._build_lock:
            chunks = chunk_passages(list(passages), self._chunk_size, self._chunk_overlap)
            if chunks:
                try:
                    vectors = await self._embed([c.text for c in chunks])
                except EmbeddingBackendError as e:
                    logger.error("Similarity index build failed: %s", e)
                    raise IndexBuildError(str(e)) from e
            else:
                vectors = np.zeros((0, 0), dtype=np.float32)

            self._snapshot = _Snapshot(chunks=tuple(chunks), vectors=vectors)
            logger.info(
                "Similarity index built: %d chunks from %d passages", len(chunks), len(passages)
            )

    async def query_with_scores(
        self,
        text: str,
        discipline: str | None = None,
        k: int = 5,
    ) -> list[tuple[Chunk, float]]:
        """Return up to k (chunk, cosine score) pairs, best first.

        The discipline filter is applied before ranking, so a filtered query
        returns up to k chunks of that discipline whenever they exist.

        Raises:
            IndexNotInitializedError: If build() has not completed yet.
            EmbeddingBackendError: If the query cannot be embedded.
        """
        snapshot = self._snapshot
        if snapshot is None:
            raise IndexNotInitializedError()
        if k <= 0 or not snapshot.chunks:
            return []

        if discipline is None:
            candidates = np.arange(len(snapshot.chunks))
        else:
            candidates = np.array(
                [i for i, c in enumerate(snapshot.chunks) if c.metadata.discipline == discipline],
                dtype=np.int64,
            )
        if candidates.size == 0:
            return []

        query_vector = (await self._embed([text], query=True))[0]
        if query_vector.shape[0] != snapshot.vectors.shape[1]:
            raise EmbeddingBackendError(
                f"Query embedding dimension {query_vector.shape[0]} does not match "
                f"index dimension {snapshot.vectors.shape[1]}"
            )

        scores = snapshot.vectors[candidates] @ query_vector
        order = np.argsort(-scores, kind="stable")[:k]
        return [(snapshot.chunks[candidates[i]], float(scores[i])) for i in order]

    async def query(
        self,
        text: str,
        discipline: str | None = None,
        k: int = 5,
    ) -> list[Chunk]:
        """Return up to k chunks most similar to text, best first."""
        return [chunk for chunk, _ in await self.query_with_scores(text, discipline, k)]

    async def content_for_discipline(self, discipline: str, k: int = 10) -> list[Chunk]:
        """Return the chunks most representative of a discipline's training content."""
        return await self.query(f"{discipline} training professional diving", discipline, k)
