# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-04
# Description: CategoryVectorStore
# -----------------------------------------------------------------------------
import math
from dataclasses import dataclass
from typing import Any, Optional

import numpy as np

from embedding.EmbeddingProvider import EmbeddingProvider
from errors.RecommendationErrors import DimensionMismatch, NoComparableAnchor
from utility.logging_utils import get_class_logger
from vectorstore.AnchorCache import AnchorCache, AnchorSnapshot
from vectorstore.AnchorSource import AnchorSource
from vectorstore.CategoryAnchor import CategoryAnchor


def cosine_similarity(a, b) -> float:
    """
    dot(a, b) / (|a| * |b|) in float64.

    Returns -inf when either vector has zero magnitude (or is not finite),
    and raises DimensionMismatch when the lengths differ.
    """
    a = np.asarray(a, dtype=np.float64).reshape(-1)
    b = np.asarray(b, dtype=np.float64).reshape(-1)
    if a.shape[0] != b.shape[0]:
        raise DimensionMismatch(a.shape[0], b.shape[0])

    norm_a = float(np.linalg.norm(a))
    norm_b = float(np.linalg.norm(b))
    if norm_a == 0.0 or norm_b == 0.0:
        return -math.inf

    score = float(np.dot(a, b) / (norm_a * norm_b))
    if math.isnan(score):
        return -math.inf
    # clip float noise so self-similarity never exceeds 1
    return max(-1.0, min(1.0, score))


@dataclass(frozen=True)
class NearestCategory:
    label: str
    score: float
    anchor_id: Any = None


class CategoryVectorStore:
    """
    Nearest-anchor lookup for free-text transaction descriptions.

    find_nearest() reads the whole anchor set (through the cache when one is
    injected), embeds the query once, and scans every anchor. Ties go to the
    anchor with the lowest identifier, because AnchorSnapshot orders anchors
    by identifier and only a strictly greater score replaces the best match.
    """

    def __init__(
            self,
            source: AnchorSource,
            embedder: EmbeddingProvider,
            *,
            cache: Optional[AnchorCache] = None,
            logger: Any = None,
    ) -> None:
        self.source = source
        self.embedder = embedder
        self.cache = cache
        self.logger = logger or get_class_logger(self.__class__)

    def _snapshot(self) -> AnchorSnapshot:
        if self.cache is not None:
            return self.cache.snapshot()
        return AnchorSnapshot.from_anchors(self.source.load_anchors(), logger=self.logger)

    def find_nearest(self, text: str) -> NearestCategory:
        # 1) anchors first: StoreUnavailable / EmptyStore / DimensionMismatch surface here
        snapshot = self._snapshot()

        expected_dim = getattr(self.embedder, "dimension", None)
        if expected_dim is not None and expected_dim != snapshot.dimension:
            self.logger.error(
                "Anchor dimension %d does not match embedding model dimension %d; "
                "anchors were built with a different model",
                snapshot.dimension,
                expected_dim,
            )
            raise DimensionMismatch(expected_dim, snapshot.dimension)

        # 2) embed query; ProviderError propagates unchanged
        query = np.asarray(self.embedder.embed(text), dtype=np.float64).reshape(-1)
        if query.shape[0] != snapshot.dimension:
            self.logger.error(
                "Query embedding has dimension %d but anchors have %d",
                query.shape[0],
                snapshot.dimension,
            )
            raise DimensionMismatch(snapshot.dimension, query.shape[0])

        # 3) full scan
        best: Optional[CategoryAnchor] = None
        best_score = -math.inf
        for anchor in snapshot.anchors:
            score = cosine_similarity(query, anchor.embedding)
            if score > best_score:
                best = anchor
                best_score = score

        if best is None:
            self.logger.warning(
                "No comparable anchor for query (len=%d): every similarity was undefined",
                len(text or ""),
            )
            raise NoComparableAnchor("Query or anchors have zero magnitude; no similarity defined")

        self.logger.debug(
            "Nearest anchor for query (len=%d): label=%r score=%.4f anchor_id=%r (scanned %d)",
            len(text or ""),
            best.label,
            best_score,
            best.anchor_id,
            len(snapshot.anchors),
        )
        return NearestCategory(label=best.label, score=best_score, anchor_id=best.anchor_id)

    def add_anchors(self, anchors) -> int:
        """Administrative writer: upsert anchors and drop any cached snapshot."""
        written = self.source.add_anchors(anchors)
        if self.cache is not None:
            self.cache.invalidate()
        return written
