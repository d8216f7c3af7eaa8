# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-15
# Description: AnchorSource
# -----------------------------------------------------------------------------

from typing import List, Protocol, Sequence, runtime_checkable

from vectorstore.CategoryAnchor import CategoryAnchor


@runtime_checkable
class AnchorSource(Protocol):
    def test_connection(self) -> bool:
        ...

    def load_anchors(self) -> List[CategoryAnchor]:
        """Full scan of every anchor. Raises StoreUnavailable on storage errors."""
        ...

    def add_anchors(self, anchors: Sequence[CategoryAnchor]) -> int:
        ...

    def count(self) -> int:
        ...
