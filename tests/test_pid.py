from __future__ import annotations

import numpy as np
import pytest

from heater_control.config import ControllerConfig
from heater_control.control import (
    INITIAL_LAST_ADC,
    INITIAL_TARGET_ADC,
    MAX_RESULT,
    PID32,
    InvalidConfiguration,
    make_controller,
    trunc_div,
)


def _p_only() -> PID32:
    return PID32(p_gain=1, i_gain=0, d_gain=0, integral_limit=1000, output_divisor=1)


@pytest.mark.parametrize("gains", [(0, 0, 0, 0), (1, 2, 3, 100), (-5, 7, -1, 0)])
def test_zero_divisor_rejected(gains):
    with pytest.raises(InvalidConfiguration):
        PID32(*gains, output_divisor=0)


def test_invalid_configuration_is_value_error():
    with pytest.raises(ValueError, match="output_divisor"):
        PID32(1, 1, 1, 10, 0)


def test_initial_state():
    ctrl = PID32(3, 2, 1, 50, 7)
    assert ctrl.target == INITIAL_TARGET_ADC == 830
    assert ctrl.integral_state == 0
    assert ctrl.last_reading == INITIAL_LAST_ADC == 1024
    assert ctrl.gains.p_gain == 3 and ctrl.gains.i_gain == 2 and ctrl.gains.d_gain == 1
    assert ctrl.integral_limit == 50
    assert ctrl.output_divisor == 7
    assert ctrl.last_terms is None


def test_zero_error_gives_zero_output():
    assert _p_only().next_value(830) == 0


def test_large_error_saturates_high():
    ctrl = _p_only()
    assert ctrl.next_value(0) == MAX_RESULT
    assert ctrl.last_terms.raw_sum == 830
    assert ctrl.last_terms.result == 830


def test_integral_windup_guard():
    ctrl = PID32(p_gain=0, i_gain=1, d_gain=0, integral_limit=5, output_divisor=1)
    outputs = [ctrl.next_value(825) for _ in range(3)]
    assert outputs == [5, 5, 5]
    assert ctrl.integral_state == 5


def test_integral_clamps_negative_side():
    ctrl = PID32(p_gain=0, i_gain=1, d_gain=0, integral_limit=5, output_divisor=1)
    assert ctrl.next_value(900) == 0
    assert ctrl.integral_state == -5
    assert ctrl.last_terms.i_term == -5


def test_clamped_integral_persists_between_calls():
    ctrl = PID32(p_gain=0, i_gain=1, d_gain=0, integral_limit=10, output_divisor=1)
    ctrl.next_value(0)  # error 830, clamped to 10
    ctrl.next_value(835)  # error -5 applied to the clamped value
    assert ctrl.integral_state == 5


def test_zero_integral_limit_disables_integral():
    ctrl = PID32(p_gain=0, i_gain=100, d_gain=0, integral_limit=0, output_divisor=1)
    for reading in (0, 500, 1023):
        assert ctrl.next_value(reading) == 0
        assert ctrl.integral_state == 0


def test_set_target_changes_error():
    ctrl = _p_only()
    ctrl.set_target(500)
    assert ctrl.next_value(500) == 0
    assert ctrl.last_terms.error == 0
    assert ctrl.next_value(400) == 100


def test_set_target_repeated_same_as_once():
    once = PID32(2, 1, 3, 100, 2)
    many = PID32(2, 1, 3, 100, 2)
    once.set_target(600)
    for _ in range(4):
        many.set_target(600)
    readings = [100, 300, 550, 610, 590, 600]
    assert [once.next_value(r) for r in readings] == [many.next_value(r) for r in readings]
    assert once.snapshot() == many.snapshot()


def test_set_target_leaves_other_state():
    ctrl = PID32(1, 1, 1, 100, 1)
    ctrl.next_value(700)
    before = ctrl.snapshot()
    ctrl.set_target(10)
    after = ctrl.snapshot()
    assert after.target == 10
    assert after.integral_state == before.integral_state
    assert after.last_reading == before.last_reading


def test_first_derivative_uses_sentinel():
    ctrl = PID32(p_gain=0, i_gain=0, d_gain=1, integral_limit=0, output_divisor=1)
    assert ctrl.next_value(1000) == 24
    assert ctrl.last_reading == 1000
    assert ctrl.next_value(1000) == 0
    assert ctrl.next_value(990) == 10


def test_negative_sum_truncates_toward_zero():
    ctrl = PID32(p_gain=1, i_gain=0, d_gain=0, integral_limit=0, output_divisor=2)
    ctrl.set_target(0)
    assert ctrl.next_value(7) == 0
    assert ctrl.last_terms.raw_sum == -7
    assert ctrl.last_terms.result == -3


def test_positive_sum_truncates_toward_zero():
    ctrl = PID32(p_gain=1, i_gain=0, d_gain=0, integral_limit=0, output_divisor=4)
    ctrl.set_target(7)
    assert ctrl.next_value(0) == 1


def test_negative_divisor():
    ctrl = PID32(p_gain=1, i_gain=0, d_gain=0, integral_limit=0, output_divisor=-1)
    assert ctrl.next_value(900) == 70
    ctrl2 = PID32(p_gain=1, i_gain=0, d_gain=0, integral_limit=0, output_divisor=-1)
    assert ctrl2.next_value(800) == 0


@pytest.mark.parametrize(
    "num, den, expected",
    [(7, 2, 3), (-7, 2, -3), (7, -2, -3), (-7, -2, 3), (0, 5, 0), (-1, 3, 0), (6, 3, 2), (-6, 3, -2)],
)
def test_trunc_div(num, den, expected):
    assert trunc_div(num, den) == expected


def test_huge_gains_do_not_wrap():
    ctrl = PID32(p_gain=10**12, i_gain=10**12, d_gain=10**12, integral_limit=10**6, output_divisor=1)
    assert ctrl.next_value(0) == MAX_RESULT
    assert ctrl.last_terms.p_term == 830 * 10**12
    ctrl.set_target(0)
    assert ctrl.next_value(1023) == 0


def test_output_and_integral_bounds_hold():
    rng = np.random.default_rng(7)
    for _ in range(50):
        p, i, d = (int(v) for v in rng.integers(-50, 50, size=3))
        limit = int(rng.integers(0, 2000))
        divisor = int(rng.choice([-9, -3, -1, 1, 2, 5, 16]))
        ctrl = PID32(p, i, d, limit, divisor)
        for step in range(100):
            if step % 37 == 0:
                ctrl.set_target(int(rng.integers(0, 1024)))
            out = ctrl.next_value(int(rng.integers(0, 1024)))
            assert 0 <= out <= MAX_RESULT
            assert abs(ctrl.integral_state) <= limit


def test_deterministic_history():
    readings = [int(v) for v in np.random.default_rng(3).integers(0, 1024, size=200)]
    a = PID32(5, 2, 9, 300, 3)
    b = PID32(5, 2, 9, 300, 3)
    assert [a.next_value(r) for r in readings] == [b.next_value(r) for r in readings]


def test_call_order_matters():
    a = PID32(0, 0, 1, 0, 1)
    b = PID32(0, 0, 1, 0, 1)
    assert [a.next_value(r) for r in (900, 800)] != [b.next_value(r) for r in (800, 900)]


def test_make_controller_applies_config():
    cfg = ControllerConfig(p_gain=1, i_gain=0, d_gain=0, integral_limit=1000, output_divisor=1, initial_target=700)
    ctrl = make_controller(cfg)
    assert isinstance(ctrl, PID32)
    assert ctrl.target == 700
    assert ctrl.next_value(700) == 0


def test_make_controller_zero_divisor():
    with pytest.raises(InvalidConfiguration):
        make_controller(ControllerConfig(output_divisor=0))


def test_make_controller_unknown_kind():
    with pytest.raises(ValueError, match="Unknown controller kind"):
        make_controller(ControllerConfig(kind="bang_bang"))
