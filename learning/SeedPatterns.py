# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-06
# Description: SeedPatterns
# -----------------------------------------------------------------------------
from typing import Any, Dict, List, Tuple

from errors.RecommendationErrors import StorageError
from learning.CorrectionRecord import CorrectionFilter
from learning.CorrectionStore import CorrectionStore
from utility.logging_utils import get_logger

SEED_SOURCE = "system-seed"

logger = get_logger(__name__)

# (text, original guess, corrected fields, weight) for common Uzbek merchants
SEED_CORRECTIONS: List[Tuple[str, Dict[str, Any], Dict[str, Any], float]] = [
    (
        "потратил деньги в evos",
        {"amount": 0, "category": "Другое", "type": "expense", "confidence": 0.3},
        {"amount": 35000, "category": "Еда", "merchant": "Evos"},
        0.3,
    ),
    (
        "заправился на АЗС",
        {"amount": 0, "category": "Другое", "type": "expense", "confidence": 0.4},
        {"category": "Транспорт", "merchant": "АЗС"},
        0.4,
    ),
    (
        "такси yandex go",
        {"amount": 0, "category": "Другое", "type": "expense", "confidence": 0.4},
        {"category": "Транспорт", "merchant": "Yandex Go"},
        0.4,
    ),
    (
        "купил в maxway",
        {"amount": 0, "category": "Другое", "type": "expense", "confidence": 0.3},
        {"category": "Еда", "merchant": "MaxWay"},
        0.3,
    ),
]


def create_seed_patterns(store: CorrectionStore, *, skip_if_seeded: bool = True) -> int:
    """
    Bootstrap the learning log with a few system corrections.

    With skip_if_seeded, nothing is written when any system-seed record
    already exists. Returns the number of records written. Failures are
    logged, not raised: seeding is best-effort like every learning write.
    """
    written = 0
    try:
        if skip_if_seeded:
            if next(iter(store.list_corrections(CorrectionFilter(source=SEED_SOURCE))), None) is not None:
                logger.info("Seed patterns already present; skipping")
                return 0

        for text, guess, fields, weight in SEED_CORRECTIONS:
            store.record_correction(text, guess, fields, SEED_SOURCE, weight)
            written += 1
    except StorageError as e:
        logger.error("Failed to create seed patterns: %s", e)
        return written

    logger.info("Seed patterns created successfully (%d records)", written)
    return written
