"""Potentiometer reader that combines an ADC source with an EMA filter."""

from __future__ import annotations

import math
from enum import Enum
from typing import Callable, Optional

from stablepot.ema_filter import ADC_MAX, Clock, EMAFilter, FilterConfig

MAX_ROUNDING = 6
DEFAULT_ROUNDING = 6

Reader = Callable[[], int]


class Algorithm(Enum):
    """Filter presets a pot can start from."""

    STABLEPOT1 = 0
    STABLEPOT2 = 1
    STABLEPOT3 = 2
    STABLEPOT4 = 3
    EMA1 = 4
    EMA2 = 5


PRESETS: dict[Algorithm, FilterConfig] = {
    Algorithm.STABLEPOT1: FilterConfig(0.25, 0.7, 0.0018, 0.0006, 122),
    Algorithm.STABLEPOT2: FilterConfig(0.25, 0.7, 0.0008, 0.0004, 122),
    Algorithm.EMA1: FilterConfig(0.25, 0.7, 0.0030, 0.0050, 50),
}


def _round_half_away(value: float) -> float:
    return math.copysign(math.floor(abs(value) + 0.5), value)


def _clamp_rounding(strength: int) -> int:
    return min(max(int(strength), 0), MAX_ROUNDING)


class StablePot:
    """A filtered potentiometer; ``reader`` returns one 12-bit ADC sample per call."""

    def __init__(
        self,
        reader: Reader,
        algorithm: Algorithm,
        clock: Optional[Clock] = None,
    ) -> None:
        self._reader = reader
        self._algorithm = algorithm
        preset = PRESETS.get(algorithm)
        if preset is None:
            self._filter = EMAFilter(0.25, 0.7, clock)
        else:
            self._filter = EMAFilter.from_config(preset, clock)
        self._last_raw = 0.0
        self._rounding_factor = 1.0
        self.set_rounding(DEFAULT_ROUNDING)

    def update(self) -> None:
        """Take one reading and pass it through the filter."""
        raw = self._reader()
        self._last_raw = raw / ADC_MAX
        self._filter.update(raw)

    @property
    def raw_value(self) -> float:
        """Last reading, normalised to 0..1."""
        return self._last_raw

    @property
    def smoothed_value(self) -> float:
        """Output of the primary EMA."""
        return self._filter.smoothed

    @property
    def processed_value(self) -> float:
        """Filtered output rounded to the configured number of decimals."""
        value = self._filter.processed
        return _round_half_away(value * self._rounding_factor) / self._rounding_factor

    @property
    def processed_adc(self) -> int:
        """Processed value scaled back to the 0..4095 ADC range."""
        return int(self.processed_value * ADC_MAX)

    def configure(
        self,
        alpha_p: float,
        alpha_s: float,
        thresh_s: float,
        thresh_b: float,
        filter_time: int,
        rounding: int,
    ) -> None:
        """Set every filter parameter and the rounding strength."""
        self._filter.configure(alpha_p, alpha_s, thresh_s, thresh_b, filter_time)
        self.set_rounding(rounding)

    def set_alphas(self, primary: float, secondary: float) -> None:
        """Set both smoothing factors of the filter."""
        self._filter.set_alphas(primary, secondary)

    def set_thresholds(self, small: float, big: float) -> None:
        """Set the settle and movement thresholds of the filter."""
        self._filter.set_thresholds(small, big)

    def set_filter_time(self, time_ms: int) -> None:
        """Set the filter's transition window in milliseconds."""
        self._filter.set_filter_time(time_ms)

    def set_rounding(self, strength: int) -> None:
        """Set the number of decimals kept, clamped to 0..6."""
        self._rounding_factor = 10.0 ** _clamp_rounding(strength)