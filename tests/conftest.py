# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-12
# Description: conftest.py
# -----------------------------------------------------------------------------

import sys
from pathlib import Path
from types import SimpleNamespace
from typing import Dict, List, Optional

import numpy as np
import pytest

# add project root to sys.path
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from config.Config import Config  # noqa: E402
from errors.RecommendationErrors import ProviderError  # noqa: E402
from vectorstore.CategoryAnchor import CategoryAnchor  # noqa: E402
from vectorstore.InMemoryAnchorSource import InMemoryAnchorSource  # noqa: E402


class FakeEmbedder:
    """Deterministic embedder: returns the vector registered for a text."""

    def __init__(self, vectors: Optional[Dict[str, List[float]]] = None, dimension: int = 2,
                 error: Optional[Exception] = None):
        self.vectors = dict(vectors or {})
        self.dimension = dimension
        self.error = error
        self.calls: List[str] = []

    def embed(self, text: str) -> np.ndarray:
        self.calls.append(text)
        if self.error is not None:
            raise self.error
        if text not in self.vectors:
            raise ProviderError(f"no fake vector for {text!r}")
        return np.asarray(self.vectors[text], dtype=np.float32)

    def healthcheck(self) -> bool:
        return self.error is None


class FakeEmbeddingsAPI:
    def __init__(self, embedding=None, error: Optional[Exception] = None):
        self.embedding = embedding
        self.error = error
        self.calls: List[dict] = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(data=[SimpleNamespace(embedding=self.embedding)])


class FakeModerationsAPI:
    def __init__(self, results=None, error: Optional[Exception] = None):
        self.results = results
        self.error = error
        self.calls: List[dict] = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(results=self.results)


@pytest.fixture
def cfg(tmp_path) -> Config:
    return Config(
        openai_api_key="test-key",
        openai_base_url="https://api.openai.com/v1",
        openai_embed_model="text-embedding-3-small",
        chroma_path=str(tmp_path / "chroma"),
        chroma_collection="category_vectors_test",
        corrections_path=str(tmp_path / "learning-data.jsonl"),
    )


@pytest.fixture
def food_travel_source() -> InMemoryAnchorSource:
    return InMemoryAnchorSource([
        CategoryAnchor(anchor_id=1, label="Food", embedding=[1.0, 0.0]),
        CategoryAnchor(anchor_id=2, label="Travel", embedding=[0.0, 1.0]),
    ])


@pytest.fixture
def fake_embedder() -> FakeEmbedder:
    return FakeEmbedder({
        "lunch at evos": [1.0, 0.0],
        "taxi yandex go": [0.0, 1.0],
        "halfway": [0.7071, 0.7071],
        "zero": [0.0, 0.0],
        "three dims": [1.0, 0.0, 0.0],
    })
