"""OpenAI embedding provider using LangChain's OpenAIEmbeddings."""

from langchain_openai import OpenAIEmbeddings

from divetutor.embedding.provider import EmbeddingProvider

# Output dimensions of the OpenAI embedding models
_MODEL_DIMENSIONS = {
    "text-embedding-3-small": 1536,
    "text-embedding-3-large": 3072,
    "text-embedding-ada-002": 1536,
}


class OpenAIEmbeddingProvider(EmbeddingProvider):
    """Remote embedding provider backed by the OpenAI embeddings API."""

    def __init__(self, model_name: str = "text-embedding-3-small", api_key: str = ""):
        self._model_name = model_name
        self._client = OpenAIEmbeddings(model=model_name, api_key=api_key)

    @property
    def model_name(self) -> str:
        return self._model_name

    def embed(self, texts: list[str]) -> list[list[float]]:
        if not texts:
            raise ValueError("texts must not be empty")
        return self._client.embed_documents(texts)

    def embed_query(self, texts: list[str]) -> list[list[float]]:
        if not texts:
            raise ValueError("texts must not be empty")
        return [self._client.embed_query(text) for text in texts]

    @property
    def dimension(self) -> int:
        return _MODEL_DIMENSIONS.get(self._model_name, 1536)
