# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-02
# Description: RecommendationErrors
# -----------------------------------------------------------------------------


class RecommendationError(Exception):
    """Base class for every error raised by the recommender and learning store."""


class ProviderError(RecommendationError):
    """
    The embedding service was unreachable, rejected the key, rate-limited us,
    timed out, or returned something we cannot use.
    Never retried internally.
    """


class StoreUnavailable(RecommendationError):
    """The anchor set could not be read from its backing store."""


class EmptyStore(RecommendationError):
    """The anchor store is reachable but holds no anchors (not yet seeded)."""


class DimensionMismatch(RecommendationError):
    """Two embeddings that must be compared have different lengths."""

    def __init__(self, expected: int, actual: int, anchor_id=None):
        self.expected = expected
        self.actual = actual
        self.anchor_id = anchor_id
        where = f" (anchor_id={anchor_id!r})" if anchor_id is not None else ""
        super().__init__(
            f"Embedding dimension mismatch{where}: expected {expected}, got {actual}"
        )


class NoComparableAnchor(RecommendationError):
    """Every similarity was undefined, e.g. the query embedding had zero magnitude."""


class StorageError(RecommendationError):
    """The correction log could not be written or read back."""
