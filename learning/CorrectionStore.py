# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-05
# Description: CorrectionStore
# -----------------------------------------------------------------------------

from typing import Any, Dict, Iterator, Optional, Protocol, Union, runtime_checkable

from learning.CorrectionRecord import CorrectedFields, CorrectionFilter, CorrectionRecord, OriginalGuess


@runtime_checkable
class CorrectionStore(Protocol):
    def record_correction(
            self,
            text: str,
            original_guess: Union[OriginalGuess, Dict[str, Any]],
            corrected_fields: Union[CorrectedFields, Dict[str, Any]],
            source: str,
            weight: float,
    ) -> CorrectionRecord:
        ...

    def list_corrections(self, filter: Optional[CorrectionFilter] = None) -> Iterator[CorrectionRecord]:
        ...
