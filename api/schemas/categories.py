# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-09
# Description: categories.py
# -----------------------------------------------------------------------------
from typing import List, Optional

from pydantic import BaseModel, Field

class SuggestRequest(BaseModel):
    text: str = Field(..., min_length=1)

class SuggestResponse(BaseModel):
    text: str
    category: str
    score: Optional[float] = None
    matched: bool
    nearest_label: Optional[str] = None
    reason: Optional[str] = None

class RefreshResponse(BaseModel):
    anchors: int
    dimension: int

class PromotionResponse(BaseModel):
    categories_promoted: List[str] = Field(default_factory=list)
    anchors_written: int = 0
    texts_skipped: int = 0
    embed_failures: int = 0
