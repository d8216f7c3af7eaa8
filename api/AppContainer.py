# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-20
# Description: AppContainer.py
# -----------------------------------------------------------------------------
from config.Config import Config

from embedding.OpenAIEmbedder import OpenAIEmbedder
from health.SmokeTestRunner import SmokeTestRunner
from learning.AnchorPromotionJob import AnchorPromotionJob
from learning.JsonlCorrectionStore import JsonlCorrectionStore
from learning.SeedPatterns import create_seed_patterns
from moderation.OpenAIModeration import OpenAIModeration
from services.CategoryRecommendationService import CategoryRecommendationService
from services.HealthService import HealthService
from settings import SEED_ON_STARTUP
from utility.logging_utils import get_logger
from vectorstore.AnchorCache import AnchorCache
from vectorstore.CategoryVectorStore import CategoryVectorStore
from vectorstore.ChromaAnchorSource import ChromaAnchorSource

logger = get_logger(__name__)


class AppContainer:
    """
    Owns heavy object instantiation and application wiring.
    A single instance is provided via FastAPI dependencies.
    """

    def __init__(self, cfg: Config | None = None) -> None:
        # Configuration
        self.cfg = cfg or Config.from_env()
        logger.info("Building AppContainer: %s", self.cfg.summary())

        # Core infrastructure
        self.embedder = OpenAIEmbedder(cfg=self.cfg)
        self.anchor_source = ChromaAnchorSource(cfg=self.cfg)
        self.anchor_cache = AnchorCache(self.anchor_source)
        self.vector_store = CategoryVectorStore(
            self.anchor_source,
            self.embedder,
            cache=self.anchor_cache,
        )

        # Learning log
        self.correction_store = JsonlCorrectionStore(self.cfg.corrections_path)
        if SEED_ON_STARTUP:
            create_seed_patterns(self.correction_store)

        self.recommendation_service = CategoryRecommendationService(
            vector_store=self.vector_store,
            corrections=self.correction_store,
        )

        self.promotion_job = AnchorPromotionJob(
            corrections=self.correction_store,
            vector_store=self.vector_store,
            embedder=self.embedder,
        )

        self.moderation = OpenAIModeration(cfg=self.cfg)

        # Smoke tests / health
        self.test_runner = SmokeTestRunner(
            embedder=self.embedder,
            anchor_source=self.anchor_source,
            corrections=self.correction_store,
        )
        self.health_service = HealthService(test_runner=self.test_runner)
