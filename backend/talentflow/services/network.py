"""
Network Simulator.

Adds artificial latency to every API call and, on write paths, injects
random failures so client code has loading states and retries to exercise.
Has no effect on stored data.
"""

import asyncio
import logging
import random
from typing import Optional

from talentflow.core.config import Settings, settings

logger = logging.getLogger("network")


class SimulatedNetworkError(Exception):
    """Raised in place of a write when the simulator decides the call fails."""

    def __init__(self, message: str = "Simulated network error"):
        super().__init__(message)


class NetworkSimulator:
    """
    Configurable latency and fault injection.

    ``write()`` waits a uniform random delay between ``min_delay_ms`` and
    ``max_delay_ms`` and then fails with probability ``failure_probability``.
    ``pause(ms)`` is a fixed delay that never fails, used by read paths.
    """

    def __init__(
        self,
        min_delay_ms: int = 200,
        max_delay_ms: int = 1200,
        failure_probability: float = 0.07,
        enabled: bool = True,
        rng: Optional[random.Random] = None,
    ):
        if min_delay_ms < 0 or max_delay_ms < min_delay_ms:
            raise ValueError("Delay range must satisfy 0 <= min_delay_ms <= max_delay_ms")
        if not 0.0 <= failure_probability <= 1.0:
            raise ValueError("failure_probability must be between 0 and 1")

        self.min_delay_ms = min_delay_ms
        self.max_delay_ms = max_delay_ms
        self.failure_probability = failure_probability
        self.enabled = enabled
        self.rng = rng or random.Random()

    @classmethod
    def from_settings(cls, config: Settings = settings) -> "NetworkSimulator":
        return cls(
            min_delay_ms=config.WRITE_DELAY_MIN_MS,
            max_delay_ms=config.WRITE_DELAY_MAX_MS,
            failure_probability=config.WRITE_FAILURE_PROBABILITY,
            enabled=config.SIMULATE_NETWORK,
        )

    async def write(self) -> None:
        """Latency plus possible failure for one write call."""
        if not self.enabled:
            return

        delay_ms = self.rng.uniform(self.min_delay_ms, self.max_delay_ms)
        should_fail = self.rng.random() < self.failure_probability

        await asyncio.sleep(delay_ms / 1000)

        if should_fail:
            logger.warning(f"Injecting simulated network error after {delay_ms:.0f}ms")
            raise SimulatedNetworkError()

    async def pause(self, delay_ms: int) -> None:
        """Fixed latency with no failure injection."""
        if not self.enabled or delay_ms <= 0:
            return
        await asyncio.sleep(delay_ms / 1000)


network = NetworkSimulator.from_settings()


def get_network() -> NetworkSimulator:
    """Dependency returning the process-wide simulator."""
    return network
