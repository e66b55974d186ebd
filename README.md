# stablepot

This package smooths noisy potentiometer readings. Each 12-bit ADC sample
(0–4095) is normalised to the range 0..1 and passes through two stages:

1. A primary exponential moving average removes fast jitter.
2. A small state machine (`FilterState.STABLE` / `FilterState.TRANSITION`)
   holds the value steady until the knob has clearly moved. When the smoothed
   value moves further than the *big* threshold from the held value, a
   transition starts. Once a transition has lasted longer than the filter
   window, the state machine checks again: if movement since the last check
   is still above the *small* threshold the transition continues, and if not
   the value is held again. A secondary moving average then eases the output
   towards the held value.

The processed value can be rounded to between 0 and 6 decimal places, or
read back on the 0–4095 ADC scale.

## Installation

```
pip install stablepot
```

## Using a potentiometer

`StablePot` takes three arguments:

- `reader`: a callable that returns the current raw ADC reading.
- `algorithm`: an `Algorithm` preset.
- `clock`: optional. A callable that returns milliseconds. It defaults to
  a monotonic millisecond clock.

```python
from stablepot.pot import Algorithm, StablePot

def read_adc() -> int:
    ...  # return a value in 0..4095 from your hardware or simulation

knob = StablePot(read_adc, Algorithm.STABLEPOT1)

while True:
    knob.update()
    print(f"{knob.raw_value:.4f}\t{knob.smoothed_value:.4f}\t{knob.processed_value:.4f}")
```

`raw_value`, `smoothed_value`, `processed_value` and `processed_adc` are
read-only properties.

The presets (also available as `stablepot.pot.PRESETS`) are:

| Algorithm    | alpha_p | alpha_s | thresh_s | thresh_b | filter_time (ms) |
|--------------|---------|---------|----------|----------|------------------|
| `STABLEPOT1` | 0.25    | 0.7     | 0.0018   | 0.0006   | 122              |
| `STABLEPOT2` | 0.25    | 0.7     | 0.0008   | 0.0004   | 122              |
| `EMA1`       | 0.25    | 0.7     | 0.0030   | 0.0050   | 50               |

`STABLEPOT3`, `STABLEPOT4` and `EMA2` start with these settings, which you
are expected to tune yourself:

- alphas of 0.25 and 0.7
- a small threshold of 0.0030
- a big threshold of 0.0050
- a 50 ms window

Thresholds are clamped when they are set. The small threshold is at least
0.0001, and the big threshold is at least the small one plus 0.0001. For
example, the `STABLEPOT1` preset's big threshold ends up as 0.0019.

## Tuning

```python
knob.configure(0.15, 0.4, 0.0009, 0.0016, 111, 6)  # alphas, thresholds, window, rounding
knob.set_alphas(0.2, 0.8)
knob.set_thresholds(0.001, 0.003)
knob.set_filter_time(80)
knob.set_rounding(3)

value = knob.processed_value   # float in 0..1, rounded half away from zero
adc = knob.processed_adc       # int in 0..4095, truncated
```

Limits and checks:

- Alphas are clamped to the range 0.0001 to 1.0.
- Rounding strength is clamped to the range 0 to 6.
- The filter time must be in the range 0 to 65535 ms. Outside that range,
  `set_filter_time` and `configure` raise `ValueError`, and `configure`
  changes nothing.

## Using the filter directly

```python
from stablepot.ema_filter import EMAFilter, FilterConfig

config = FilterConfig(alpha_p=0.25, alpha_s=0.7, thresh_s=0.003, thresh_b=0.005, filter_time=50)
flt = EMAFilter.from_config(config)
flt.update(2048)
print(flt.smoothed, flt.processed, flt.state)
```

`EMAFilter(alpha_p, alpha_s, clock=None)` builds a filter with the default
thresholds (0.0030 and 0.0050) and a 50 ms window.

The first reading sets every stage directly to that reading.

Other methods:

- `reconfigure(config)` replaces every parameter from a `FilterConfig`.
- `configure(...)` does the same from individual values.

## What it does not do

The package does no hardware I/O. It does not read an ADC pin, configure
ADC resolution or attenuation, or print to a serial console. You supply the
`reader` callable. There is no command-line program.