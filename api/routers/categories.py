# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-09
# Description: categories router
# -----------------------------------------------------------------------------
import logging
from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_anchor_cache, get_promotion_job, get_recommendation_service
from api.schemas.categories import PromotionResponse, RefreshResponse, SuggestRequest, SuggestResponse
from errors.RecommendationErrors import DimensionMismatch, EmptyStore, RecommendationError, StoreUnavailable
from learning.AnchorPromotionJob import AnchorPromotionJob
from services.CategoryRecommendationService import CategoryRecommendationService
from vectorstore.AnchorCache import AnchorCache

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/categories", tags=["categories"])


@router.post("/suggest", response_model=SuggestResponse)
def post_suggest(
    req: SuggestRequest,
    svc: CategoryRecommendationService = Depends(get_recommendation_service),
) -> SuggestResponse:
    text = (req.text or "").strip()
    if not text:
        raise HTTPException(status_code=400, detail="text must not be empty")

    suggestion = svc.suggest(text)
    logger.info(
        "POST /categories/suggest -> %s (score=%s, matched=%s)",
        suggestion.category,
        suggestion.score,
        suggestion.matched,
    )
    return SuggestResponse(text=text, **asdict(suggestion))


@router.post("/refresh", response_model=RefreshResponse)
def post_refresh(cache: AnchorCache = Depends(get_anchor_cache)) -> RefreshResponse:
    try:
        snap = cache.refresh()
    except EmptyStore as e:
        raise HTTPException(status_code=409, detail=str(e))
    except StoreUnavailable as e:
        logger.error("Anchor refresh failed: %s", e)
        raise HTTPException(status_code=503, detail=str(e))
    except DimensionMismatch as e:
        logger.error("Anchor refresh found inconsistent anchors: %s", e)
        raise HTTPException(status_code=500, detail=str(e))

    return RefreshResponse(anchors=len(snap.anchors), dimension=snap.dimension)


@router.post("/promote", response_model=PromotionResponse)
def post_promote(job: AnchorPromotionJob = Depends(get_promotion_job)) -> PromotionResponse:
    try:
        report = job.run()
    except RecommendationError as e:
        logger.exception("Anchor promotion failed: %s", e)
        raise HTTPException(status_code=503, detail=f"promotion failed: {e}")

    return PromotionResponse(**asdict(report))
