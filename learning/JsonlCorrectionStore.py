# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-05
# Description: JsonlCorrectionStore
# -----------------------------------------------------------------------------
import json
import math
import os
import threading
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Union

from errors.RecommendationErrors import StorageError
from learning.CorrectionRecord import CorrectedFields, CorrectionFilter, CorrectionRecord, OriginalGuess
from utility.logging_utils import get_class_logger

# one lock per log file, shared by every store instance in the process
_FILE_LOCKS: Dict[str, threading.Lock] = {}
_FILE_LOCKS_GUARD = threading.Lock()


def _lock_for(path: Path) -> threading.Lock:
    key = str(path.resolve())
    with _FILE_LOCKS_GUARD:
        lock = _FILE_LOCKS.get(key)
        if lock is None:
            lock = _FILE_LOCKS[key] = threading.Lock()
        return lock


def clamp_weight(weight: float) -> float:
    w = float(weight)
    if math.isnan(w):
        return 0.0
    return max(0.0, min(1.0, w))


class JsonlCorrectionStore:
    """
    Append-only correction log stored as JSON Lines.

    Each record is one line written with a single write() call, flushed and
    fsync'ed before record_correction() returns. Existing lines are never
    rewritten. list_corrections() re-opens the file on every call and yields
    records lazily, so it can be restarted and does not load the whole log.
    """

    def __init__(self, path: Union[str, Path], logger: Any = None) -> None:
        self.path = Path(path)
        self.logger = logger or get_class_logger(self.__class__)
        self._lock = _lock_for(self.path)

    def record_correction(
            self,
            text: str,
            original_guess: Union[OriginalGuess, Dict[str, Any]],
            corrected_fields: Union[CorrectedFields, Dict[str, Any]],
            source: str,
            weight: float,
    ) -> CorrectionRecord:
        if not source:
            raise ValueError("source must not be empty")

        if not isinstance(original_guess, OriginalGuess):
            original_guess = OriginalGuess.from_dict(original_guess)
        if not isinstance(corrected_fields, CorrectedFields):
            corrected_fields = CorrectedFields.from_dict(corrected_fields)

        clamped = clamp_weight(weight)
        if clamped != weight:
            self.logger.warning(
                "Correction weight %r out of range [0, 1]; clamped to %s (source=%s)",
                weight,
                clamped,
                source,
            )

        record = CorrectionRecord(
            original_text=text,
            original_guess=original_guess,
            corrected_fields=corrected_fields,
            source=source,
            weight=clamped,
        )

        try:
            # encode before opening: a lone surrogate must fail without touching the file
            line = (json.dumps(record.to_dict(), ensure_ascii=False) + "\n").encode("utf-8")
        except UnicodeError as e:
            self.logger.error("Correction is not valid UTF-8 text (source=%s): %s", source, e)
            raise StorageError(f"Correction text cannot be encoded as UTF-8: {e}") from e

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self._lock:
                with self.path.open("ab") as f:
                    f.write(line)
                    f.flush()
                    os.fsync(f.fileno())
        except OSError as e:
            self.logger.error("Failed to append correction to %s: %s", self.path, e)
            raise StorageError(f"Failed to append correction to {self.path}: {e}") from e

        self.logger.info(
            "Correction recorded: text=%r fields=%s source=%s weight=%.2f",
            text[:50],
            list(corrected_fields.to_dict().keys()),
            source[:8],
            clamped,
        )
        return record

    def list_corrections(self, filter: Optional[CorrectionFilter] = None) -> Iterator[CorrectionRecord]:
        if not self.path.exists():
            return

        try:
            with self.path.open("r", encoding="utf-8") as f:
                for lineno, line in enumerate(f, start=1):
                    line = line.strip()
                    if not line:
                        continue
                    try:
                        rec = CorrectionRecord.from_dict(json.loads(line))
                    except (ValueError, KeyError, TypeError) as e:
                        raise StorageError(f"Corrupt correction record at {self.path}:{lineno}: {e}") from e
                    if filter is None or filter.matches(rec):
                        yield rec
        except OSError as e:
            self.logger.error("Failed to read corrections from %s: %s", self.path, e)
            raise StorageError(f"Failed to read corrections from {self.path}: {e}") from e
