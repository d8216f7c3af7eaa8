# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-03
# Description: InMemoryAnchorSource
# -----------------------------------------------------------------------------
import threading
from typing import Any, Iterable, List, Optional, Sequence

from vectorstore.CategoryAnchor import CategoryAnchor
from utility.logging_utils import get_class_logger


class InMemoryAnchorSource:
    """
    Process-local anchor source for tests and local development.
    Writers replace the whole list so readers always get a consistent copy.
    """

    def __init__(self, anchors: Optional[Iterable[CategoryAnchor]] = None, logger: Any = None) -> None:
        self.logger = logger or get_class_logger(self.__class__)
        self._lock = threading.Lock()
        self._anchors: List[CategoryAnchor] = list(anchors or [])

    def test_connection(self) -> bool:
        return True

    def load_anchors(self) -> List[CategoryAnchor]:
        with self._lock:
            return list(self._anchors)

    def add_anchors(self, anchors: Sequence[CategoryAnchor]) -> int:
        with self._lock:
            by_id = {a.anchor_id: a for a in self._anchors}
            for a in anchors:
                by_id[a.anchor_id] = a
            self._anchors = list(by_id.values())
        self.logger.info("Upserted %d anchors (total=%d)", len(anchors), len(self._anchors))
        return len(anchors)

    def count(self) -> int:
        return len(self._anchors)
