# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-02
# Description: CategoryAnchor
# -----------------------------------------------------------------------------
import json
from dataclasses import dataclass
from typing import Any, Union

import numpy as np

AnchorId = Union[int, str]


def to_vector(value: Any) -> np.ndarray:
    """
    Coerce a stored embedding into a read-only float32 vector.
    Accepts lists, numpy arrays, or a JSON array string (pgvector / Supabase style).
    """
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    if isinstance(value, str):
        value = json.loads(value)
    vec = np.array(value, dtype=np.float32).reshape(-1)
    vec.setflags(write=False)
    return vec


@dataclass(frozen=True, eq=False)
class CategoryAnchor:
    """One reference point for a category: label + exemplar embedding."""
    anchor_id: AnchorId
    label: str
    embedding: np.ndarray

    def __post_init__(self) -> None:
        if not self.label:
            raise ValueError(f"Anchor {self.anchor_id!r} has an empty label")
        object.__setattr__(self, "embedding", to_vector(self.embedding))

    @property
    def dimension(self) -> int:
        return int(self.embedding.shape[0])

    def sort_key(self) -> tuple:
        # ints first (numeric order), then everything else as strings
        if isinstance(self.anchor_id, int) and not isinstance(self.anchor_id, bool):
            return (0, self.anchor_id, "")
        return (1, 0, str(self.anchor_id))

    @classmethod
    def from_row(cls, row: dict) -> "CategoryAnchor":
        """Build an anchor from a storage row {id|anchor_id, label, embedding}."""
        anchor_id = row.get("anchor_id", row.get("id"))
        if anchor_id is None:
            raise ValueError(f"Anchor row has no identifier: keys={list(row.keys())}")
        return cls(anchor_id=anchor_id, label=row.get("label") or "", embedding=row.get("embedding"))
