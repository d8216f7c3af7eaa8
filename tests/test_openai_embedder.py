# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-15
# Description: test_openai_embedder.py
# -----------------------------------------------------------------------------
import os

import numpy as np
import pytest
from openai import OpenAIError

from conftest import FakeEmbeddingsAPI
from config.Config import Config
from embedding.EmbeddingProvider import EmbeddingProvider
from embedding.OpenAIEmbedder import OpenAIEmbedder
from errors.RecommendationErrors import DimensionMismatch, ProviderError
from vectorstore.CategoryAnchor import CategoryAnchor
from vectorstore.CategoryVectorStore import CategoryVectorStore
from vectorstore.InMemoryAnchorSource import InMemoryAnchorSource


class FakeClient:
    def __init__(self, embeddings: FakeEmbeddingsAPI):
        self.embeddings = embeddings


def _embedder(cfg, api: FakeEmbeddingsAPI, dimension: int = 4) -> OpenAIEmbedder:
    return OpenAIEmbedder(cfg, dimension=dimension, client=FakeClient(api))


def test_embed_requests_model_and_returns_float32(cfg):
    api = FakeEmbeddingsAPI(embedding=[0.1, 0.2, 0.3, 0.4])
    embedder = _embedder(cfg, api)

    vec = embedder.embed("hello")

    assert api.calls == [{"model": "text-embedding-3-small", "input": "hello", "encoding_format": "float"}]
    assert vec.dtype == np.float32
    assert vec.shape == (4,)
    assert not vec.flags.writeable
    assert isinstance(embedder, EmbeddingProvider)


def test_sdk_error_becomes_provider_error_without_retry(cfg):
    api = FakeEmbeddingsAPI(error=OpenAIError("401 invalid api key"))
    embedder = _embedder(cfg, api)

    with pytest.raises(ProviderError) as exc_info:
        embedder.embed("hello")

    assert len(api.calls) == 1
    assert isinstance(exc_info.value.__cause__, OpenAIError)


def test_unexpected_dimensions_is_dimension_mismatch(cfg):
    embedder = _embedder(cfg, FakeEmbeddingsAPI(embedding=[1.0, 2.0]), dimension=1536)
    with pytest.raises(DimensionMismatch) as exc_info:
        embedder.embed("hello")

    assert exc_info.value.expected == 1536
    assert exc_info.value.actual == 2


def test_model_drift_surfaces_from_find_nearest_as_dimension_mismatch(cfg):
    source = InMemoryAnchorSource([
        CategoryAnchor(anchor_id=1, label="Еда", embedding=[1.0, 0.0, 0.0, 0.0]),
        CategoryAnchor(anchor_id=2, label="Транспорт", embedding=[0.0, 1.0, 0.0, 0.0]),
    ])
    # configured for 4 like the anchors, but the model now returns 8 values
    embedder = _embedder(cfg, FakeEmbeddingsAPI(embedding=[0.1] * 8), dimension=4)
    store = CategoryVectorStore(source, embedder)

    with pytest.raises(DimensionMismatch) as exc_info:
        store.find_nearest("обед в evos")

    assert not isinstance(exc_info.value, ProviderError)
    assert exc_info.value.actual == 8


def test_empty_response_rejected(cfg):
    embedder = _embedder(cfg, FakeEmbeddingsAPI(embedding=[]))
    with pytest.raises(ProviderError):
        embedder.embed("hello")


def test_healthcheck_reports_instead_of_raising(cfg):
    assert _embedder(cfg, FakeEmbeddingsAPI(embedding=[0.0, 0.0, 0.0, 1.0])).healthcheck() is True
    assert _embedder(cfg, FakeEmbeddingsAPI(error=OpenAIError("down"))).healthcheck() is False
    assert _embedder(cfg, FakeEmbeddingsAPI(embedding=[1.0, 2.0])).healthcheck() is False


def _missing_openai_env_vars() -> list[str]:
    return [name for name in Config.OPENAI_ENV_VARS if not os.getenv(name)]


@pytest.mark.integration
def test_real_embedding_roundtrip():
    missing = _missing_openai_env_vars()
    if missing:
        pytest.skip(f"Missing env vars for OpenAI: {', '.join(missing)}")

    embedder = OpenAIEmbedder(Config.from_env())
    vec = embedder.embed("обед в evos")

    assert vec.shape == (embedder.dimension,)
    assert float(np.linalg.norm(vec)) > 0
