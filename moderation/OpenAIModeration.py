# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-08
# Description: OpenAIModeration
# -----------------------------------------------------------------------------
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional

from openai import OpenAI, OpenAIError

from config.Config import Config
from errors.RecommendationErrors import ProviderError
from utility.logging_utils import get_class_logger


class ModerationOutcome(str, Enum):
    ALLOWED = "allowed"
    BLOCKED = "blocked"
    UNKNOWN = "unknown"  # response did not say; caller decides


@dataclass(frozen=True)
class ModerationResult:
    outcome: ModerationOutcome
    categories: List[str] = field(default_factory=list)

    @property
    def is_blocked(self) -> bool:
        return self.outcome is ModerationOutcome.BLOCKED


class OpenAIModeration:
    """
    Free-text moderation via the OpenAI moderations endpoint.

    Only an explicit boolean `flagged` maps to ALLOWED/BLOCKED; a missing
    result or field is UNKNOWN. Transport and API failures raise ProviderError.
    """

    def __init__(self, cfg: Config, *, client: Optional[Any] = None, logger=None) -> None:
        self.cfg = cfg
        self.logger = logger or get_class_logger(self.__class__)
        self.client = client or OpenAI(
            api_key=cfg.openai_api_key,
            base_url=cfg.openai_base_url,
        )

    def check(self, text: str) -> ModerationResult:
        try:
            resp = self.client.moderations.create(input=text)
        except OpenAIError as e:
            self.logger.warning("Moderation request failed: %s", e)
            raise ProviderError(f"Moderation request failed: {e}") from e

        results = getattr(resp, "results", None) or []
        first = results[0] if results else None
        flagged = getattr(first, "flagged", None)

        if flagged is True:
            categories = self._flagged_categories(getattr(first, "categories", None))
            self.logger.info("Moderation BLOCKED text (len=%d) categories=%s", len(text or ""), categories)
            return ModerationResult(ModerationOutcome.BLOCKED, categories)
        if flagged is False:
            return ModerationResult(ModerationOutcome.ALLOWED)

        self.logger.warning("Moderation response had no 'flagged' verdict; returning UNKNOWN")
        return ModerationResult(ModerationOutcome.UNKNOWN)

    @staticmethod
    def _flagged_categories(categories: Any) -> List[str]:
        if categories is None:
            return []
        if hasattr(categories, "model_dump"):
            categories = categories.model_dump()
        if isinstance(categories, dict):
            return sorted(k for k, v in categories.items() if v is True)
        return []
