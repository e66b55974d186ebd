import itertools

import pytest

from stablepot.pot import Algorithm, StablePot

SEQUENCE = [100, 110, 900, 905, 1800, 1790, 1795, 1795, 2600, 2601, 4000, 3990]


class FakeClock:
    def __init__(self) -> None:
        self.now = 0

    def __call__(self) -> int:
        return self.now


class FakeReader:
    def __init__(self, values) -> None:
        self._values = iter(values)
        self.calls = 0

    def __call__(self) -> int:
        self.calls += 1
        return next(self._values)


def run(pot, clock, count):
    outputs = []
    for tick in range(count):
        clock.now = tick * 30
        pot.update()
        outputs.append((pot.raw_value, pot.smoothed_value, pot.processed_value))
    return outputs


def make_pot(values, algorithm, clock):
    return StablePot(FakeReader(values), algorithm, clock)


def test_raw_value_is_normalised():
    clock = FakeClock()
    pot = make_pot([4095], Algorithm.EMA1, clock)
    pot.update()
    assert pot.raw_value == 1.0
    assert pot.processed_value == 1.0
    assert pot.processed_adc == 4095


def test_zero_reading():
    clock = FakeClock()
    pot = make_pot([0], Algorithm.STABLEPOT1, clock)
    pot.update()
    assert pot.raw_value == 0.0
    assert pot.processed_adc == 0


def test_update_reads_once_per_call():
    clock = FakeClock()
    reader = FakeReader(itertools.repeat(2000))
    pot = StablePot(reader, Algorithm.STABLEPOT2, clock)
    for _ in range(5):
        pot.update()
    assert reader.calls == 5


@pytest.mark.parametrize("raw, expected", [(2048, 1.0), (2047, 0.0)])
def test_rounding_zero_gives_whole_numbers(raw, expected):
    clock = FakeClock()
    pot = make_pot([raw], Algorithm.EMA1, clock)
    pot.set_rounding(0)
    pot.update()
    assert pot.processed_value == expected


def test_rounding_three_decimals():
    clock = FakeClock()
    pot = make_pot(SEQUENCE, Algorithm.EMA2, clock)
    pot.set_rounding(3)
    for value in (v[2] for v in run(pot, clock, len(SEQUENCE))):
        scaled = value * 1000
        assert abs(scaled - round(scaled)) < 1e-9


def test_rounding_clamped_to_six():
    clock_a, clock_b = FakeClock(), FakeClock()
    a = make_pot(SEQUENCE, Algorithm.STABLEPOT1, clock_a)
    b = make_pot(SEQUENCE, Algorithm.STABLEPOT1, clock_b)
    a.set_rounding(6)
    b.set_rounding(10)
    assert run(a, clock_a, len(SEQUENCE)) == run(b, clock_b, len(SEQUENCE))


def test_stablepot1_preset_matches_explicit_configuration():
    clock_a, clock_b = FakeClock(), FakeClock()
    preset = make_pot(SEQUENCE, Algorithm.STABLEPOT1, clock_a)
    custom = make_pot(SEQUENCE, Algorithm.STABLEPOT3, clock_b)
    custom.configure(0.25, 0.7, 0.0018, 0.0006, 122, 6)
    assert run(preset, clock_a, len(SEQUENCE)) == run(custom, clock_b, len(SEQUENCE))


def test_stablepot2_preset_matches_explicit_configuration():
    clock_a, clock_b = FakeClock(), FakeClock()
    preset = make_pot(SEQUENCE, Algorithm.STABLEPOT2, clock_a)
    custom = make_pot(SEQUENCE, Algorithm.STABLEPOT4, clock_b)
    custom.configure(0.25, 0.7, 0.0008, 0.0004, 122, 6)
    assert run(preset, clock_a, len(SEQUENCE)) == run(custom, clock_b, len(SEQUENCE))


def test_ema2_default_matches_ema1_preset():
    clock_a, clock_b = FakeClock(), FakeClock()
    ema1 = make_pot(SEQUENCE, Algorithm.EMA1, clock_a)
    ema2 = make_pot(SEQUENCE, Algorithm.EMA2, clock_b)
    assert run(ema1, clock_a, len(SEQUENCE)) == run(ema2, clock_b, len(SEQUENCE))


def test_processed_values_stay_in_range():
    clock = FakeClock()
    pot = make_pot(SEQUENCE, Algorithm.STABLEPOT4, clock)
    pot.configure(0.2, 0.5, 0.0004, 0.0029, 122, 6)
    for _, smoothed, processed in run(pot, clock, len(SEQUENCE)):
        assert 0.0 <= smoothed <= 1.0
        assert 0.0 <= processed <= 1.0
    assert 0 <= pot.processed_adc <= 4095


def test_set_alphas_one_follows_input_exactly():
    clock = FakeClock()
    pot = make_pot([0, 3000], Algorithm.EMA2, clock)
    pot.set_alphas(1.0, 1.0)
    pot.update()
    pot.update()
    assert pot.smoothed_value == pytest.approx(3000 / 4095)
    assert pot.processed_adc in (2999, 3000)


def test_set_thresholds_lets_small_steps_through():
    clock = FakeClock()
    pot = make_pot([0, 1], Algorithm.EMA2, clock)
    pot.set_alphas(1.0, 1.0)
    pot.set_thresholds(0.0, 0.0)
    pot.update()
    pot.update()
    assert pot.processed_value == pytest.approx(1 / 4095, abs=1e-6)


def test_set_filter_time_rejects_out_of_range():
    clock = FakeClock()
    pot = make_pot([0], Algorithm.EMA1, clock)
    with pytest.raises(ValueError):
        pot.set_filter_time(-5)


def test_configure_rejects_bad_filter_time():
    clock = FakeClock()
    pot = make_pot([0], Algorithm.EMA1, clock)
    with pytest.raises(ValueError):
        pot.configure(0.2, 0.5, 0.001, 0.002, 100000, 6)