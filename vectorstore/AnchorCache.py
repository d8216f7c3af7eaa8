# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-04
# Description: AnchorCache
# -----------------------------------------------------------------------------
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple

from errors.RecommendationErrors import DimensionMismatch, EmptyStore
from settings import ANCHOR_CACHE_TTL
from utility.logging_utils import get_class_logger
from vectorstore.AnchorSource import AnchorSource
from vectorstore.CategoryAnchor import CategoryAnchor


@dataclass(frozen=True)
class AnchorSnapshot:
    """
    Immutable, validated view of the anchor set.

    Anchors are ordered by identifier (ints first, then strings) so the
    nearest-neighbour scan is deterministic whatever order storage returns.
    """
    anchors: Tuple[CategoryAnchor, ...]
    dimension: int
    loaded_at: float

    @classmethod
    def from_anchors(cls, anchors, *, loaded_at: Optional[float] = None, logger: Any = None) -> "AnchorSnapshot":
        ordered = tuple(sorted(anchors, key=lambda a: a.sort_key()))
        if not ordered:
            raise EmptyStore("No category anchors configured")

        dimension = ordered[0].dimension
        for a in ordered:
            if a.dimension != dimension:
                if logger is not None:
                    logger.error(
                        "Anchor set is inconsistent: anchor %r has dimension %d, expected %d",
                        a.anchor_id,
                        a.dimension,
                        dimension,
                    )
                raise DimensionMismatch(dimension, a.dimension, anchor_id=a.anchor_id)

        return cls(
            anchors=ordered,
            dimension=dimension,
            loaded_at=loaded_at if loaded_at is not None else time.time(),
        )


class AnchorCache:
    """
    Holds the current AnchorSnapshot for a source.

    refresh() loads a new snapshot and swaps it in; invalidate() drops it so
    the next snapshot() call reloads. With ttl_seconds > 0 a snapshot older
    than the ttl is reloaded on access. The lock only guards the reference
    swap, never the storage read.
    """

    def __init__(
            self,
            source: AnchorSource,
            *,
            ttl_seconds: float = ANCHOR_CACHE_TTL,
            clock: Callable[[], float] = time.monotonic,
            logger: Any = None,
    ) -> None:
        self.source = source
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self.logger = logger or get_class_logger(self.__class__)

        self._lock = threading.Lock()
        self._snapshot: Optional[AnchorSnapshot] = None
        self._loaded_clock: float = 0.0

    def snapshot(self) -> AnchorSnapshot:
        with self._lock:
            snap = self._snapshot
            loaded = self._loaded_clock

        if snap is not None and not self._is_stale(loaded):
            return snap
        return self.refresh()

    def refresh(self) -> AnchorSnapshot:
        anchors = self.source.load_anchors()
        snap = AnchorSnapshot.from_anchors(anchors, logger=self.logger)

        with self._lock:
            self._snapshot = snap
            self._loaded_clock = self.clock()

        self.logger.info("Anchor cache refreshed: %d anchors, dimension=%d", len(snap.anchors), snap.dimension)
        return snap

    def invalidate(self) -> None:
        with self._lock:
            self._snapshot = None
        self.logger.info("Anchor cache invalidated")

    @property
    def is_loaded(self) -> bool:
        return self._snapshot is not None

    def _is_stale(self, loaded_clock: float) -> bool:
        if self.ttl_seconds <= 0:
            return False
        return (self.clock() - loaded_clock) >= self.ttl_seconds
