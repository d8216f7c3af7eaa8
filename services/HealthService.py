# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-20
# Description: HealthService.py
# -----------------------------------------------------------------------------
from dataclasses import dataclass

from health.SmokeTestRunner import SmokeTestRunner
from api.schemas.health import DeepHealthResponse, SmokeTestSummary


@dataclass
class HealthService:
    """
    Wraps SmokeTestRunner and returns DeepHealthResponse for the API layer.
    """

    test_runner: SmokeTestRunner

    def deep_health(self, run_embedding: bool = True) -> DeepHealthResponse:

        results = self.test_runner.run_all(run_embedding=run_embedding)

        total = len(results)
        passed = sum(1 for ok in results.values() if ok)
        failed = total - passed

        overall_status = "ok" if failed == 0 else "error"

        summary = SmokeTestSummary(
            total=total,
            passed=passed,
            failed=failed,
        )

        return DeepHealthResponse(
            status=overall_status,
            results=results,
            summary=summary,
        )
