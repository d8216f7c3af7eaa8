# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-07
# Description: dependencies.py
# -----------------------------------------------------------------------------
from functools import lru_cache

from api.AppContainer import AppContainer
from learning.AnchorPromotionJob import AnchorPromotionJob
from learning.CorrectionStore import CorrectionStore
from moderation.OpenAIModeration import OpenAIModeration
from services.CategoryRecommendationService import CategoryRecommendationService
from services.HealthService import HealthService
from vectorstore.AnchorCache import AnchorCache


@lru_cache
def get_app_container() -> AppContainer:
    # built on first request so importing the app does not need credentials
    return AppContainer()

def get_health_service() -> HealthService:
    return get_app_container().health_service

def get_recommendation_service() -> CategoryRecommendationService:
    return get_app_container().recommendation_service

def get_anchor_cache() -> AnchorCache:
    return get_app_container().anchor_cache

def get_correction_store() -> CorrectionStore:
    return get_app_container().correction_store

def get_promotion_job() -> AnchorPromotionJob:
    return get_app_container().promotion_job

def get_moderation() -> OpenAIModeration:
    return get_app_container().moderation
