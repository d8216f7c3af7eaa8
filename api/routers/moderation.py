# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-09
# Description: moderation router
# -----------------------------------------------------------------------------
import logging

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_moderation
from api.schemas.moderation import ModerationRequest, ModerationResponse
from errors.RecommendationErrors import ProviderError
from moderation.OpenAIModeration import OpenAIModeration

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/moderation", tags=["moderation"])


@router.post("", response_model=ModerationResponse)
def post_moderation(
    req: ModerationRequest,
    svc: OpenAIModeration = Depends(get_moderation),
) -> ModerationResponse:
    try:
        result = svc.check(req.text)
    except ProviderError as e:
        logger.warning("POST /moderation failed: %s", e)
        raise HTTPException(status_code=502, detail=str(e))

    return ModerationResponse(outcome=result.outcome, categories=result.categories)
