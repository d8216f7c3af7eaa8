# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-07
# Description: AnchorPromotionJob
# -----------------------------------------------------------------------------
import hashlib
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from embedding.EmbeddingProvider import EmbeddingProvider
from errors.RecommendationErrors import ProviderError
from learning.CorrectionRecord import CorrectionFilter
from learning.CorrectionStore import CorrectionStore
from settings import PROMOTION_MIN_WEIGHT
from utility.logging_utils import get_class_logger
from vectorstore.CategoryAnchor import CategoryAnchor
from vectorstore.CategoryVectorStore import CategoryVectorStore


def learned_anchor_id(category: str, text: str) -> str:
    digest = hashlib.sha1(f"{category}\x00{text}".encode("utf-8")).hexdigest()[:12]
    return f"learned-{digest}"


@dataclass
class PromotionReport:
    categories_promoted: List[str] = field(default_factory=list)
    anchors_written: int = 0
    texts_skipped: int = 0
    embed_failures: int = 0


class AnchorPromotionJob:
    """
    Batch job that turns repeated category corrections into new anchors.

    Corrections are grouped by corrected category; a category is promoted
    once the summed weight of its corrections reaches min_weight. Each
    distinct (normalised) text of a promoted category is embedded and
    written as an anchor with a stable id, so re-running the job only
    embeds texts it has not written before. Runs outside the query path.
    """

    def __init__(
            self,
            corrections: CorrectionStore,
            vector_store: CategoryVectorStore,
            embedder: EmbeddingProvider,
            *,
            min_weight: float = PROMOTION_MIN_WEIGHT,
            logger: Any = None,
    ) -> None:
        self.corrections = corrections
        self.vector_store = vector_store
        self.embedder = embedder
        self.min_weight = min_weight
        self.logger = logger or get_class_logger(self.__class__)

    def run(self, filter: Optional[CorrectionFilter] = None) -> PromotionReport:
        report = PromotionReport()

        weights: Dict[str, float] = defaultdict(float)
        texts: Dict[str, List[str]] = defaultdict(list)
        for rec in self.corrections.list_corrections(filter):
            category = rec.corrected_fields.category
            if not category or category == rec.original_guess.category:
                continue
            text = " ".join(rec.original_text.lower().split())
            if not text:
                continue
            weights[category] += rec.weight
            if text not in texts[category]:
                texts[category].append(text)

        existing_ids = {a.anchor_id for a in self.vector_store.source.load_anchors()}

        new_anchors: List[CategoryAnchor] = []
        for category in sorted(weights):
            if weights[category] < self.min_weight:
                self.logger.debug(
                    "Category %r not promoted: weight %.2f < %.2f",
                    category,
                    weights[category],
                    self.min_weight,
                )
                continue

            report.categories_promoted.append(category)
            for text in texts[category]:
                anchor_id = learned_anchor_id(category, text)
                if anchor_id in existing_ids:
                    report.texts_skipped += 1
                    continue
                try:
                    vec = self.embedder.embed(text)
                except ProviderError as e:
                    self.logger.warning("Could not embed %r for category %r: %s", text[:50], category, e)
                    report.embed_failures += 1
                    continue
                new_anchors.append(CategoryAnchor(anchor_id=anchor_id, label=category, embedding=vec))

        if new_anchors:
            report.anchors_written = self.vector_store.add_anchors(new_anchors)

        self.logger.info(
            "Anchor promotion finished: promoted=%s written=%d skipped=%d embed_failures=%d",
            report.categories_promoted,
            report.anchors_written,
            report.texts_skipped,
            report.embed_failures,
        )
        return report
