# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-08
# Description: CategoryRecommendationService
# -----------------------------------------------------------------------------
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from errors.RecommendationErrors import (
    DimensionMismatch,
    EmptyStore,
    NoComparableAnchor,
    ProviderError,
    RecommendationError,
    StoreUnavailable,
)
from learning.CorrectionRecord import CorrectedFields, CorrectionRecord, OriginalGuess
from learning.CorrectionStore import CorrectionStore
from settings import DEFAULT_CATEGORY, MIN_CATEGORY_SCORE
from utility.logging_utils import get_class_logger
from vectorstore.CategoryVectorStore import CategoryVectorStore

DEFAULT_CORRECTION_WEIGHT = 0.8


@dataclass(frozen=True)
class CategorySuggestion:
    category: str
    score: Optional[float]
    matched: bool  # True when the nearest anchor cleared the threshold
    nearest_label: Optional[str] = None
    reason: Optional[str] = None  # why we fell back to the default


@dataclass
class CategoryRecommendationService:
    """
    Caller-side policy around CategoryVectorStore and the learning log.

    suggest() never fails the transaction flow: recommender errors become
    the default category with a reason. record_user_correction() is
    best-effort and never raises.
    """
    vector_store: CategoryVectorStore
    corrections: CorrectionStore
    min_score: float = MIN_CATEGORY_SCORE
    default_category: str = DEFAULT_CATEGORY
    logger: Any = None

    def __post_init__(self) -> None:
        self.logger = self.logger or get_class_logger(self.__class__)

    def suggest(self, text: str) -> CategorySuggestion:
        try:
            nearest = self.vector_store.find_nearest(text)
        except DimensionMismatch as e:
            self.logger.error("Recommender misconfigured, anchors and model disagree: %s", e)
            return self._fallback("dimension_mismatch")
        except EmptyStore:
            self.logger.warning("No category anchors configured; using default category")
            return self._fallback("empty_store")
        except StoreUnavailable as e:
            self.logger.warning("Anchor store unavailable: %s", e)
            return self._fallback("store_unavailable")
        except ProviderError as e:
            self.logger.warning("Embedding provider failed: %s", e)
            return self._fallback("provider_error")
        except NoComparableAnchor:
            return self._fallback("no_comparable_anchor")

        if nearest.score < self.min_score:
            self.logger.info(
                "Nearest label %r below threshold (%.3f < %.3f); using default",
                nearest.label,
                nearest.score,
                self.min_score,
            )
            return CategorySuggestion(
                category=self.default_category,
                score=nearest.score,
                matched=False,
                nearest_label=nearest.label,
                reason="below_threshold",
            )

        return CategorySuggestion(
            category=nearest.label,
            score=nearest.score,
            matched=True,
            nearest_label=nearest.label,
        )

    def _fallback(self, reason: str) -> CategorySuggestion:
        return CategorySuggestion(category=self.default_category, score=None, matched=False, reason=reason)

    def record_user_correction(
            self,
            *,
            original_text: str,
            original_guess: Union[OriginalGuess, Dict[str, Any]],
            updated: Dict[str, Any],
            user_id: str,
    ) -> Optional[CorrectionRecord]:
        """
        Record what the user changed relative to the guess.
        Returns the stored record, or None when nothing changed or the write failed.
        """
        if not isinstance(original_guess, OriginalGuess):
            original_guess = OriginalGuess.from_dict(original_guess)

        changed = CorrectedFields(
            amount=self._changed(updated.get("amount"), original_guess.amount),
            category=self._changed(updated.get("category"), original_guess.category),
            merchant=self._changed(updated.get("merchant"), original_guess.merchant),
            type=self._changed(updated.get("type"), original_guess.type),
        )
        if changed.is_empty():
            self.logger.debug("No corrected fields; nothing to learn")
            return None

        # zero or missing confidence falls back to the default weight
        weight = original_guess.confidence or DEFAULT_CORRECTION_WEIGHT

        try:
            record = self.corrections.record_correction(
                original_text, original_guess, changed, user_id, weight
            )
        except (RecommendationError, ValueError) as e:
            self.logger.error("Failed to record learning data: %s", e)
            return None

        self.logger.info(
            "Learning recorded for transaction update: corrections=%s user=%s",
            list(changed.to_dict().keys()),
            (user_id or "")[:8],
        )
        return record

    @staticmethod
    def _changed(new: Any, old: Any) -> Any:
        if new is None or new == old:
            return None
        return new
