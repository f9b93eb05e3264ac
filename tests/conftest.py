"""Shared fixtures: deterministic embedding backends and wired services."""

import re
import time
import zlib

import pytest

from config.settings import Settings
from divetutor.embedding.provider import EmbeddingProvider
from divetutor.services import create_services


class HashingEmbeddingProvider(EmbeddingProvider):
    """Bag-of-words vectors hashed into a fixed number of buckets.

    Texts sharing words get similar vectors, which is enough to exercise
    ranking without loading a model.
    """

    def __init__(self, dim: int = 256):
        self._dim = dim
        self.calls = 0
        self.fail = False
        self.delay = 0.0

    def _vector(self, text: str) -> list[float]:
        vec = [0.0] * self._dim
        for token in re.findall(r"[a-z0-9]+", text.lower()):
            vec[zlib.crc32(token.encode("utf-8")) % self._dim] += 1.0
        return vec

    def embed(self, texts: list[str]) -> list[list[float]]:
        if not texts:
            raise ValueError("texts must not be empty")
        self.calls += 1
        if self.delay:
            time.sleep(self.delay)
        if self.fail:
            raise ConnectionError("embedding backend unreachable")
        return [self._vector(t) for t in texts]

    @property
    def dimension(self) -> int:
        return self._dim


@pytest.fixture
def embedding_provider():
    return HashingEmbeddingProvider()


@pytest.fixture
def test_settings():
    return Settings(
        openai_api_key="",
        anthropic_api_key="",
        google_api_key="",
        divetutor_llm_provider="openai",
        divetutor_llm_model="gpt-4o",
        divetutor_chunk_size=1000,
        divetutor_chunk_overlap=200,
        divetutor_retrieval_top_k=3,
        divetutor_embedding_timeout=5.0,
        divetutor_llm_timeout=5.0,
        divetutor_build_index_on_startup=False,
    )


@pytest.fixture
def make_services(test_settings, embedding_provider):
    """Factory wiring services around the hashing provider and a given model."""

    def _make(llm=None, provider=None):
        return create_services(
            settings=test_settings,
            embedding_provider=provider or embedding_provider,
            llm=llm,
        )

    return _make
