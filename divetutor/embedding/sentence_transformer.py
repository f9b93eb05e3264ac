"""Local sentence-transformers embeddings, the default backend."""

import logging
import os
from contextlib import contextmanager

from sentence_transformers import SentenceTransformer

from divetutor.embedding.provider import EmbeddingProvider

logger = logging.getLogger(__name__)


@contextmanager
def _quiet_transformers():
    previous = os.environ.get("TRANSFORMERS_VERBOSITY")
    os.environ["TRANSFORMERS_VERBOSITY"] = "error"
    try:
        yield
    finally:
        if previous is None:
            os.environ.pop("TRANSFORMERS_VERBOSITY", None)
        else:
            os.environ["TRANSFORMERS_VERBOSITY"] = previous


class SentenceTransformerEmbeddingProvider(EmbeddingProvider):
    """Embeds with a cached local model, downloading it on first use."""

    def __init__(self, model_name: str = "all-MiniLM-L6-v2"):
        with _quiet_transformers():
            try:
                model = SentenceTransformer(model_name, local_files_only=True)
            except OSError:
                logger.info("Embedding model %s not cached, downloading", model_name)
                model = SentenceTransformer(model_name)
        self._model = model
        self._model_name = model_name
        self._dimension = model.get_sentence_embedding_dimension()

    @property
    def model_name(self) -> str:
        return self._model_name

    @property
    def dimension(self) -> int:
        return self._dimension

    def embed(self, texts: list[str]) -> list[list[float]]:
        if not texts:
            raise ValueError("texts must not be empty")
        return self._model.encode(texts, show_progress_bar=False).tolist()
