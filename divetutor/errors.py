"""Error taxonomy for the tutor service."""


class DiveTutorError(Exception):
    """Base class for all tutor service errors."""


class ConfigurationError(DiveTutorError):
    """Raised for invalid or missing configuration."""


class LLMNotConfiguredError(ConfigurationError):
    """Raised when the generative backend has no credentials."""


class TutorNotFoundError(DiveTutorError, KeyError):
    """Raised when no tutor persona matches a discipline key."""

    def __init__(self, discipline: str):
        super().__init__(discipline)
        self.discipline = discipline

    def __str__(self) -> str:
        return f"Tutor not found for discipline: {self.discipline}"


class IndexNotInitializedError(DiveTutorError):
    """Raised when the similarity index is queried before it has been built."""

    def __str__(self) -> str:
        return "Similarity index not initialized. Call build() first."


class EmbeddingBackendError(DiveTutorError):
    """Raised when the embedding backend fails or times out."""


class IndexBuildError(DiveTutorError):
    """Raised when an index build fails. The previous index is left intact."""


class GenerationUnavailableError(DiveTutorError):
    """Raised when a learning path or assessment has no usable model output."""
