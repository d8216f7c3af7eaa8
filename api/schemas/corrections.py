# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-09
# Description: corrections.py
# -----------------------------------------------------------------------------
from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, Field

TransactionType = Literal["income", "expense"]


class OriginalGuessModel(BaseModel):
    amount: Optional[Union[int, float]] = None
    category: Optional[str] = None
    type: Optional[TransactionType] = None
    confidence: Optional[float] = None
    merchant: Optional[str] = None


class CorrectedFieldsModel(BaseModel):
    amount: Optional[Union[int, float]] = None
    category: Optional[str] = None
    merchant: Optional[str] = None
    type: Optional[TransactionType] = None


class CorrectionRequest(BaseModel):
    text: str = Field(..., min_length=1)
    original_guess: OriginalGuessModel
    corrected_fields: CorrectedFieldsModel
    source: str = Field(..., min_length=1)
    # out-of-range weights are clamped by the store, not rejected here
    weight: float = 1.0


class OriginalGuessOut(BaseModel):
    # stored records are not re-validated against TransactionType
    amount: Optional[Union[int, float]] = None
    category: Optional[str] = None
    type: Optional[str] = None
    confidence: Optional[float] = None
    merchant: Optional[str] = None


class CorrectedFieldsOut(BaseModel):
    amount: Optional[Union[int, float]] = None
    category: Optional[str] = None
    merchant: Optional[str] = None
    type: Optional[str] = None


class CorrectionOut(BaseModel):
    original_text: str
    original_guess: OriginalGuessOut
    corrected_fields: CorrectedFieldsOut
    source: str
    weight: float
    timestamp: datetime


class CorrectionListResponse(BaseModel):
    count: int
    corrections: List[CorrectionOut] = Field(default_factory=list)
