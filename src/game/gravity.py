"""
Gravity timing: elapsed-time clock and the line-based difficulty ramp.

The automatic drop interval shrinks as lines are cleared:

    interval_ms = max(floor_ms, base_ms - step_ms * lines_cleared)

With the defaults (1000 ms, 5 ms per line) the raw formula reaches zero at
200 lines, so a strictly positive floor is always applied.
"""

from __future__ import annotations

import dataclasses
import time
from typing import Any, Callable

DEFAULT_BASE_MS = 1000
DEFAULT_STEP_MS = 5
DEFAULT_FLOOR_MS = 5


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class Clock:
    """Elapsed-milliseconds reader with restart.

    Attributes:
        time_source: Callable returning a monotonic timestamp in milliseconds.
    """

    def __init__(self, time_source: Callable[[], float] = monotonic_ms) -> None:
        self.time_source = time_source
        self._started_at = time_source()

    def restart(self) -> None:
        self._started_at = self.time_source()

    def elapsed_ms(self) -> float:
        return self.time_source() - self._started_at


@dataclasses.dataclass(frozen=True)
class GravitySettings:
    """Parameters of the drop-interval ramp."""
    base_ms: int = DEFAULT_BASE_MS
    step_ms: int = DEFAULT_STEP_MS
    floor_ms: int = DEFAULT_FLOOR_MS

    def __post_init__(self) -> None:
        if self.floor_ms <= 0:
            raise ValueError(f"gravity floor_ms must be positive, got {self.floor_ms}")
        if self.step_ms < 0:
            raise ValueError(f"gravity step_ms must not be negative, got {self.step_ms}")

    @classmethod
    def from_config(cls, config: dict[str, Any] | None) -> GravitySettings:
        """Build settings from the `gravity` section of the YAML config.

        Args:
            config: Dict with optional base_ms, step_ms and floor_ms keys.

        Returns:
            GravitySettings with defaults filled in for missing keys.

        Raises:
            ValueError: If floor_ms is not positive or step_ms is negative.
        """
        config = config or {}
        return cls(
            base_ms=int(config.get("base_ms", DEFAULT_BASE_MS)),
            step_ms=int(config.get("step_ms", DEFAULT_STEP_MS)),
            floor_ms=int(config.get("floor_ms", DEFAULT_FLOOR_MS)),
        )

    def interval_ms(self, lines_cleared: int) -> int:
        return max(self.floor_ms, self.base_ms - self.step_ms * lines_cleared)
