"""Two-stage exponential moving average filter with a settle window."""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

ADC_MAX = 4095.0
MIN_ALPHA = 0.0001
MAX_ALPHA = 1.0
MIN_THRESHOLD = 0.0001
THRESHOLD_GAP = 0.0001
MAX_FILTER_TIME = 0xFFFF
_TICK_MASK = 0xFFFFFFFF

Clock = Callable[[], int]


def _monotonic_ms() -> int:
    return time.monotonic_ns() // 1_000_000


def _clamp_alpha(alpha: float) -> float:
    return min(max(alpha, MIN_ALPHA), MAX_ALPHA)


def _checked_filter_time(time_ms: int) -> int:
    time_ms = int(time_ms)
    if not 0 <= time_ms <= MAX_FILTER_TIME:
        raise ValueError(f"filter time must be within 0..{MAX_FILTER_TIME} ms, got {time_ms}")
    return time_ms


@dataclass(frozen=True)
class FilterConfig:
    """Tuning parameters for an :class:`EMAFilter`."""

    alpha_p: float
    alpha_s: float
    thresh_s: float
    thresh_b: float
    filter_time: int


class FilterState(Enum):
    """Whether the filter output is held or following a movement."""

    STABLE = 0
    TRANSITION = 1


class EMAFilter:
    """Primary EMA, a hysteresis state machine, then a secondary EMA.

    Raw readings are 12-bit ADC values, normalised to the range 0..1.
    The clock returns milliseconds.
    """

    def __init__(self, alpha_p: float, alpha_s: float, clock: Optional[Clock] = None) -> None:
        self._clock: Clock = clock if clock is not None else _monotonic_ms
        self._alpha_p = _clamp_alpha(alpha_p)
        self._alpha_s = _clamp_alpha(alpha_s)
        self._thresh_s = 0.0030
        self._thresh_b = 0.0050
        self._filter_window = 50
        self._smoothed = 0.0
        self._secondary = 0.0
        self._stored = 0.0
        self._last_change = 0
        self._state = FilterState.STABLE
        self._first = True

    @classmethod
    def from_config(cls, config: FilterConfig, clock: Optional[Clock] = None) -> "EMAFilter":
        """Build a filter with every parameter taken from ``config``."""
        instance = cls(config.alpha_p, config.alpha_s, clock)
        instance.reconfigure(config)
        return instance

    def update(self, raw: int) -> None:
        """Feed one raw ADC reading through the filter."""
        value = raw / ADC_MAX

        if self._first:
            self._smoothed = self._secondary = self._stored = value
            self._first = False
            return

        self._smoothed += self._alpha_p * (value - self._smoothed)

        now = self._clock()
        if self._state is FilterState.STABLE:
            if abs(self._smoothed - self._stored) > self._thresh_b:
                self._state = FilterState.TRANSITION
                self._last_change = now
                self._stored = self._smoothed
        elif ((now - self._last_change) & _TICK_MASK) > self._filter_window:
            still_moving = abs(self._smoothed - self._stored) > self._thresh_s
            self._state = FilterState.TRANSITION if still_moving else FilterState.STABLE
            self._stored = self._smoothed

        self._secondary += self._alpha_s * (self._stored - self._secondary)

    def reconfigure(self, config: FilterConfig) -> None:
        """Replace every tuning parameter with those in ``config``."""
        self.configure(
            config.alpha_p,
            config.alpha_s,
            config.thresh_s,
            config.thresh_b,
            config.filter_time,
        )

    def configure(
        self,
        alpha_p: float,
        alpha_s: float,
        thresh_s: float,
        thresh_b: float,
        filter_time: int,
    ) -> None:
        """Replace every tuning parameter."""
        window = _checked_filter_time(filter_time)
        self.set_alphas(alpha_p, alpha_s)
        self.set_thresholds(thresh_s, thresh_b)
        self._filter_window = window

    def set_alphas(self, primary: float, secondary: float) -> None:
        """Set both smoothing factors, clamped to 0.0001..1."""
        self._alpha_p = _clamp_alpha(primary)
        self._alpha_s = _clamp_alpha(secondary)

    def set_thresholds(self, small: float, big: float) -> None:
        """Set the settle and movement thresholds; the big one always exceeds the small one."""
        self._thresh_s = max(small, MIN_THRESHOLD)
        self._thresh_b = max(big, self._thresh_s + THRESHOLD_GAP)

    def set_filter_time(self, time_ms: int) -> None:
        """Set how long a transition lasts before the state is re-evaluated."""
        self._filter_window = _checked_filter_time(time_ms)

    @property
    def smoothed(self) -> float:
        """Output of the primary EMA."""
        return self._smoothed

    @property
    def processed(self) -> float:
        """Output of the secondary EMA."""
        return self._secondary

    @property
    def state(self) -> FilterState:
        """Current state of the hysteresis machine."""
        return self._state