# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-09
# Description: moderation.py
# -----------------------------------------------------------------------------
from typing import List

from pydantic import BaseModel, Field

from moderation.OpenAIModeration import ModerationOutcome

class ModerationRequest(BaseModel):
    text: str = Field(..., min_length=1)

class ModerationResponse(BaseModel):
    outcome: ModerationOutcome
    categories: List[str] = Field(default_factory=list)
