# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-07
# Description: SmokeTestRunner
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from typing import Callable, Dict, Optional

from learning.CorrectionStore import CorrectionStore
from utility.logging_utils import get_class_logger
from vectorstore.AnchorSource import AnchorSource


class SmokeTestRunner:
    """
    Runs the recommender's smoke tests and reports a consolidated result.

    Tests included:
      - embedding_health   (one real embedding call)
      - anchor_store       (anchor source reachable)
      - anchors_present    (at least one anchor seeded)
      - corrections_log    (learning log readable)
    """

    def __init__(
            self,
            *,
            embedder,
            anchor_source: AnchorSource,
            corrections: CorrectionStore,
            logger: Optional[logging.Logger] = None,
    ):
        self.embedder = embedder
        self.anchor_source = anchor_source
        self.corrections = corrections
        self.logger = logger or get_class_logger(self.__class__)

        self.logger.info("Initialising SmokeTestRunner")

    # -------------------------------------------------------------------------
    def run_all(self, run_embedding: bool = True) -> Dict[str, bool]:
        """
        Run all configured smoke tests.

        :param run_embedding: If False, skips the (billable) embedding call.
        :return: Dict mapping test names to True/False.
        """
        self.logger.info("Starting smoke test suite (run_embedding=%s)", run_embedding)

        checks: Dict[str, Callable[[], bool]] = {
            "anchor_store": self.anchor_source.test_connection,
            "anchors_present": lambda: self.anchor_source.count() > 0,
            "corrections_log": self._corrections_readable,
        }
        if run_embedding:
            checks["embedding_health"] = self.embedder.healthcheck

        results: Dict[str, bool] = {}
        for name, check in checks.items():
            try:
                ok = bool(check())
            except Exception as e:
                self.logger.exception("%s raised an exception: %s", name, e)
                ok = False
            results[name] = ok
            self._log_result(name, ok)

        self._log_summary(results)
        return results

    def _corrections_readable(self) -> bool:
        next(iter(self.corrections.list_corrections()), None)
        return True

    # -------------------------------------------------------------------------
    def _log_result(self, name: str, ok: bool) -> None:
        if ok:
            self.logger.info("%s: PASS", name)
        else:
            self.logger.error("%s: FAIL", name)

    def _log_summary(self, results: Dict[str, bool]) -> None:
        total = len(results)
        passed = sum(1 for v in results.values() if v)
        failed = total - passed

        self.logger.info("Smoke test summary: %d total, %d passed, %d failed", total, passed, failed)
