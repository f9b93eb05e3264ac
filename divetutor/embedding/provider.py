"""Embedding backend interface used by the similarity index."""

from abc import ABC, abstractmethod


class EmbeddingProvider(ABC):
    """Turns passage chunks and tutor questions into fixed-size vectors.

    Calls are synchronous; SimilarityIndex runs them off the event loop.
    """

    @abstractmethod
    def embed(self, texts: list[str]) -> list[list[float]]:
        """Embed a non-empty batch of chunk texts, one vector per text.

        Raises:
            ValueError: If texts is empty.
        """
        ...

    def embed_query(self, texts: list[str]) -> list[list[float]]:
        """Embed questions. Same as embed() unless a backend treats queries specially."""
        return self.embed(texts)

    @property
    @abstractmethod
    def dimension(self) -> int:
        ...
