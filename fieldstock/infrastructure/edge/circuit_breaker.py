"""Circuit breaker guarding remote edge function calls."""

import time
from dataclasses import dataclass

from fieldstock.config import get_logger
from fieldstock.core.exceptions import CircuitBreakerOpenError

logger = get_logger(__name__)


@dataclass
class CircuitBreakerState:
    """Consecutive-failure circuit breaker."""

    failures: int = 0
    last_failure_time: float = 0.0
    is_open: bool = False
    cooldown_seconds: int = 60
    failure_threshold: int = 3

    def record_failure(self) -> None:
        """Record a failure and potentially open the circuit."""
        self.failures += 1
        self.last_failure_time = time.time()

        if self.failures >= self.failure_threshold and not self.is_open:
            self.is_open = True
            logger.warning(
                "edge_circuit_opened",
                failures=self.failures,
                cooldown=self.cooldown_seconds,
            )

    def record_success(self) -> None:
        """Record a success and reset the circuit."""
        if self.is_open:
            logger.info("edge_circuit_closed")
        self.failures = 0
        self.is_open = False

    def check(self, function: str) -> None:
        """
        Raise CircuitBreakerOpenError while the cooldown is running.

        Once the cooldown has elapsed a single trial call is let through.
        """
        if not self.is_open:
            return

        elapsed = time.time() - self.last_failure_time
        if elapsed < self.cooldown_seconds:
            raise CircuitBreakerOpenError(function, int(self.cooldown_seconds - elapsed))

        logger.info("edge_circuit_half_open", function=function)
