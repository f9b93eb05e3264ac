"""Unit tests for embedding provider selection."""

import os
from unittest.mock import MagicMock, patch

import numpy as np
import pytest

from config.settings import Settings
from divetutor.embedding.factory import get_embedding_provider
from divetutor.errors import ConfigurationError


class TestGetEmbeddingProvider:
    def test_unknown_provider(self):
        with pytest.raises(ConfigurationError, match="Unsupported embedding provider"):
            get_embedding_provider(Settings(divetutor_embedding_provider="word2vec"))

    def test_openai_requires_key(self):
        settings = Settings(divetutor_embedding_provider="openai", openai_api_key="")
        with pytest.raises(ConfigurationError, match="OPENAI_API_KEY"):
            get_embedding_provider(settings)

    def test_openai_falls_back_to_openai_model_name(self):
        settings = Settings(
            divetutor_embedding_provider="openai",
            divetutor_embedding_model="all-MiniLM-L6-v2",
            openai_api_key="sk-test",
        )
        provider = get_embedding_provider(settings)
        assert provider.model_name == "text-embedding-3-small"
        assert provider.dimension == 1536

    @patch("divetutor.embedding.sentence_transformer.SentenceTransformer")
    def test_local_provider(self, mock_st):
        model = MagicMock()
        model.get_sentence_embedding_dimension.return_value = 384
        model.encode.return_value = np.zeros((2, 384))
        mock_st.return_value = model

        provider = get_embedding_provider(Settings(divetutor_embedding_provider="local"))
        assert provider.dimension == 384
        assert len(provider.embed(["a", "b"])) == 2
        mock_st.assert_called_once_with("all-MiniLM-L6-v2", local_files_only=True)

    @patch("divetutor.embedding.sentence_transformer.SentenceTransformer")
    def test_local_provider_downloads_when_not_cached(self, mock_st):
        model = MagicMock()
        model.get_sentence_embedding_dimension.return_value = 384
        mock_st.side_effect = [OSError("not cached"), model]

        provider = get_embedding_provider(
            Settings(divetutor_embedding_provider="sentence-transformers")
        )
        assert provider.dimension == 384
        assert mock_st.call_count == 2

    @patch("divetutor.embedding.sentence_transformer.SentenceTransformer")
    def test_empty_batch_rejected(self, mock_st):
        mock_st.return_value.get_sentence_embedding_dimension.return_value = 384
        provider = get_embedding_provider(Settings(divetutor_embedding_provider="local"))
        with pytest.raises(ValueError):
            provider.embed([])

    @patch("divetutor.embedding.sentence_transformer.SentenceTransformer")
    def test_loader_restores_transformers_verbosity(self, mock_st, monkeypatch):
        monkeypatch.setenv("TRANSFORMERS_VERBOSITY", "info")
        seen = []

        def _load(*args, **kwargs):
            seen.append(os.environ.get("TRANSFORMERS_VERBOSITY"))
            model = MagicMock()
            model.get_sentence_embedding_dimension.return_value = 384
            return model

        mock_st.side_effect = _load
        get_embedding_provider(Settings(divetutor_embedding_provider="local"))
        assert seen == ["error"]
        assert os.environ["TRANSFORMERS_VERBOSITY"] == "info"
