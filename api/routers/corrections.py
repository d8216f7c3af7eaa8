# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-09
# Description: corrections router
# -----------------------------------------------------------------------------
import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from api.dependencies import get_correction_store
from api.schemas.corrections import CorrectionListResponse, CorrectionOut, CorrectionRequest
from errors.RecommendationErrors import StorageError
from learning.CorrectionRecord import CorrectionFilter, CorrectionRecord
from learning.CorrectionStore import CorrectionStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/corrections", tags=["corrections"])


def _to_out(rec: CorrectionRecord) -> CorrectionOut:
    d = rec.to_dict()
    d["timestamp"] = rec.timestamp
    return CorrectionOut(**d)


@router.post("", response_model=CorrectionOut, status_code=201)
def post_correction(
    req: CorrectionRequest,
    store: CorrectionStore = Depends(get_correction_store),
) -> CorrectionOut:
    try:
        rec = store.record_correction(
            req.text,
            req.original_guess.model_dump(),
            req.corrected_fields.model_dump(exclude_none=True),
            req.source,
            req.weight,
        )
    except StorageError as e:
        logger.error("POST /corrections failed: %s", e)
        raise HTTPException(status_code=503, detail=f"correction not stored: {e}")

    return _to_out(rec)


@router.get("", response_model=CorrectionListResponse)
def get_corrections(
    source: Optional[str] = Query(None),
    category: Optional[str] = Query(None, description="Corrected category"),
    since: Optional[datetime] = Query(None),
    until: Optional[datetime] = Query(None),
    limit: int = Query(100, ge=1, le=1000),
    store: CorrectionStore = Depends(get_correction_store),
) -> CorrectionListResponse:
    flt = CorrectionFilter(source=source, category=category, since=since, until=until)

    out: List[CorrectionOut] = []
    try:
        for rec in store.list_corrections(flt):
            out.append(_to_out(rec))
            if len(out) >= limit:
                break
    except StorageError as e:
        logger.error("GET /corrections failed: %s", e)
        raise HTTPException(status_code=503, detail=f"corrections unavailable: {e}")

    return CorrectionListResponse(count=len(out), corrections=out)
