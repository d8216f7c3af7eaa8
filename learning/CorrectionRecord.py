# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-05
# Description: CorrectionRecord
# -----------------------------------------------------------------------------
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union

Number = Union[int, float]


@dataclass(frozen=True)
class OriginalGuess:
    """What the recommender / parser suggested before the user stepped in."""
    amount: Optional[Number] = None
    category: Optional[str] = None
    type: Optional[str] = None  # "income" | "expense"
    confidence: Optional[float] = None
    merchant: Optional[str] = None

    @classmethod
    def from_dict(cls, d: Optional[Dict[str, Any]]) -> "OriginalGuess":
        d = d or {}
        return cls(
            amount=d.get("amount"),
            category=d.get("category"),
            type=d.get("type"),
            confidence=d.get("confidence"),
            merchant=d.get("merchant"),
        )


@dataclass(frozen=True)
class CorrectedFields:
    """Only the fields the user actually changed are set."""
    amount: Optional[Number] = None
    category: Optional[str] = None
    merchant: Optional[str] = None
    type: Optional[str] = None

    @classmethod
    def from_dict(cls, d: Optional[Dict[str, Any]]) -> "CorrectedFields":
        d = d or {}
        return cls(
            amount=d.get("amount"),
            category=d.get("category"),
            merchant=d.get("merchant"),
            type=d.get("type"),
        )

    def is_empty(self) -> bool:
        return all(v is None for v in asdict(self).values())

    def to_dict(self) -> Dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v is not None}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class CorrectionRecord:
    """One append-only entry of the correction learning log."""
    original_text: str
    original_guess: OriginalGuess
    corrected_fields: CorrectedFields
    source: str
    weight: float
    timestamp: datetime = field(default_factory=_utcnow)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "original_text": self.original_text,
            "original_guess": asdict(self.original_guess),
            "corrected_fields": self.corrected_fields.to_dict(),
            "source": self.source,
            "weight": self.weight,
            "timestamp": self.timestamp.isoformat(),
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "CorrectionRecord":
        ts = datetime.fromisoformat(d["timestamp"])
        if ts.tzinfo is None:
            ts = ts.replace(tzinfo=timezone.utc)
        return cls(
            original_text=d["original_text"],
            original_guess=OriginalGuess.from_dict(d.get("original_guess")),
            corrected_fields=CorrectedFields.from_dict(d.get("corrected_fields")),
            source=d["source"],
            weight=float(d["weight"]),
            timestamp=ts,
        )


@dataclass(frozen=True)
class CorrectionFilter:
    """Optional read filter for list_corrections(); unset fields match everything."""
    source: Optional[str] = None
    category: Optional[str] = None  # corrected category
    since: Optional[datetime] = None  # inclusive
    until: Optional[datetime] = None  # exclusive

    def matches(self, rec: CorrectionRecord) -> bool:
        if self.source is not None and rec.source != self.source:
            return False
        if self.category is not None and rec.corrected_fields.category != self.category:
            return False
        if self.since is not None and rec.timestamp < _aware(self.since):
            return False
        if self.until is not None and rec.timestamp >= _aware(self.until):
            return False
        return True


def _aware(ts: datetime) -> datetime:
    return ts if ts.tzinfo is not None else ts.replace(tzinfo=timezone.utc)
