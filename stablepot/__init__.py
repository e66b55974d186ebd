"""Two-stage EMA smoothing for potentiometer ADC readings: the filter and a pot wrapper."""

__version__ = "0.1.0"
__all__ = ["ema_filter", "pot"]