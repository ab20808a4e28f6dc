"""
Heater self-test.

Steps:
1. BASELINE  - read temperature and humidity
2. HEATER_ON - read user register, set heater bit, write it back
3. SETTLING  - wait for the heater to warm the chip
4. RECHECK   - read temperature and humidity again
5. judge     - temperature must rise and humidity fall past the thresholds
6. CLEANUP   - read user register, clear heater bit, write it back

Any error before the verdict stops the test and is returned at once. The
chip should be at a stable temperature before starting.
"""

import logging
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional, TYPE_CHECKING

from .constants import SELFTEST_SETTLE_MS, ErrorKind, SelfTestStep
from .result import Result
from .sensors import SelfTestReport

if TYPE_CHECKING:
    from .client import SHT21Client

logger = logging.getLogger(__name__)


@dataclass
class SelfTestConfig:
    """Self-test thresholds and timing."""
    temp_threshold: float = 0.3     # Minimum temperature rise, degrees C
    hum_threshold: float = 0.5      # Minimum humidity drop, %RH
    settle_ms: int = SELFTEST_SETTLE_MS
    restore_heater_on_abort: bool = False

    @classmethod
    def from_dict(cls, params: Optional[Dict[str, Any]] = None) -> 'SelfTestConfig':
        """
        Build from a parameter dictionary.

        Missing keys take their defaults; unknown keys are ignored.
        """
        params = params or {}
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in params.items() if k in known})


class SelfTest:
    """Runs the heater self-test against one client."""

    def __init__(self, client: 'SHT21Client', config: Optional[SelfTestConfig] = None):
        """
        Initialize self-test.

        Args:
            client: Client for the sensor under test
            config: Thresholds and timing (defaults if None)
        """
        self.client = client
        self.config = config or SelfTestConfig()
        self._heater_requested = False

    def run(self) -> Result[SelfTestReport]:
        """
        Execute the self-test.

        Returns:
            Result with the report. The error is SELFTEST_FAILED when the
            readings did not move enough, or the first bus/checksum error.
            The report is attached in every case.
        """
        report = SelfTestReport()
        self._heater_requested = False
        cfg = self.config

        # Step 1: baseline
        temp = self.client.read_temperature()
        if not temp.ok:
            return self._abort(report, SelfTestStep.BASELINE, temp.error)
        report.temp_at_start = temp.value

        hum = self.client.read_humidity()
        if not hum.ok:
            return self._abort(report, SelfTestStep.BASELINE, hum.error)
        report.hum_at_start = hum.value
        logger.info(f"Self-test baseline: {report.temp_at_start:.2f} C, "
                    f"{report.hum_at_start:.2f} %RH")

        # Step 2: heater on
        register = self.client.read_user_register()
        if not register.ok:
            return self._abort(report, SelfTestStep.HEATER_ON, register.error)

        self._heater_requested = True
        written = self.client.write_user_register(register.value.with_heater(True))
        if not written.ok:
            return self._abort(report, SelfTestStep.HEATER_ON, written.error)

        # Step 3: settle
        logger.debug(f"Heating for {cfg.settle_ms} ms")
        self.client.transport.delay(cfg.settle_ms)

        # Step 4: recheck
        temp = self.client.read_temperature()
        if not temp.ok:
            return self._abort(report, SelfTestStep.RECHECK, temp.error)
        report.temp_after_test = temp.value

        hum = self.client.read_humidity()
        if not hum.ok:
            return self._abort(report, SelfTestStep.RECHECK, hum.error)
        report.hum_after_test = hum.value

        # Step 5: verdict
        if report.temp_delta > cfg.temp_threshold and report.hum_delta > cfg.hum_threshold:
            report.verdict = ErrorKind.NONE
        else:
            report.verdict = ErrorKind.SELFTEST_FAILED
        logger.info(f"Self-test verdict: {report} "
                    f"(thresholds {cfg.temp_threshold} C, {cfg.hum_threshold} %RH)")

        # Step 6: heater off, whatever the verdict
        register = self.client.read_user_register()
        if not register.ok:
            return self._stop(report, SelfTestStep.CLEANUP, register.error)
        written = self.client.write_user_register(register.value.with_heater(False))
        if not written.ok:
            return self._stop(report, SelfTestStep.CLEANUP, written.error)
        self._heater_requested = False

        if report.verdict != ErrorKind.NONE:
            return Result.failure(report.verdict, report)
        return Result.success(report)

    def _stop(self, report: SelfTestReport, step: SelfTestStep,
              error: ErrorKind) -> Result[SelfTestReport]:
        report.stopped_at = step
        logger.warning(f"Self-test stopped at {step.name}: {ErrorKind.name_of(error)}")
        return Result.failure(error, report)

    def _abort(self, report: SelfTestReport, step: SelfTestStep,
               error: ErrorKind) -> Result[SelfTestReport]:
        result = self._stop(report, step, error)
        if self._heater_requested and self.config.restore_heater_on_abort:
            restored = self.client.set_heater(False)
            if restored.ok:
                self._heater_requested = False
            else:
                logger.warning(f"Heater may still be on: "
                               f"{ErrorKind.name_of(restored.error)}")
        return result
