# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-02
# Description: EmbeddingProvider
# -----------------------------------------------------------------------------

from typing import Protocol, runtime_checkable

import numpy as np


@runtime_checkable
class EmbeddingProvider(Protocol):
    dimension: int

    def embed(self, text: str) -> np.ndarray:
        ...
