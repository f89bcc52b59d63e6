"""Integer-only PID controller for a heating element."""
from __future__ import annotations

from dataclasses import dataclass

from heater_control.control.base import ControllerAlgorithm

MAX_RESULT = 255
INITIAL_TARGET_ADC = 830
# One past the largest 10-bit reading; biases the first derivative term.
INITIAL_LAST_ADC = 1024


class InvalidConfiguration(ValueError):
    """Raised when a controller cannot be built from the given parameters."""


@dataclass
class PIDGains:
    p_gain: int
    i_gain: int
    d_gain: int


@dataclass
class ControllerState:
    target: int
    integral_state: int
    last_reading: int


@dataclass
class PIDTerms:
    error: int
    p_term: int
    i_term: int
    d_term: int
    raw_sum: int
    result: int
    output: int


def trunc_div(numerator: int, denominator: int) -> int:
    """Integer division rounding toward zero (``//`` floors)."""
    quotient = abs(numerator) // abs(denominator)
    if (numerator < 0) != (denominator < 0):
        return -quotient
    return quotient


class PID32(ControllerAlgorithm):
    """Discrete PID on 10-bit ADC readings, producing a drive in [0, MAX_RESULT].

    All arithmetic is on Python ints, so intermediate products never overflow;
    the only saturation is the final output clamp. The caller owns timing and
    must call ``next_value`` once per sampling interval, in sample order.
    """

    def __init__(
        self,
        p_gain: int,
        i_gain: int,
        d_gain: int,
        integral_limit: int,
        output_divisor: int,
    ) -> None:
        if output_divisor == 0:
            raise InvalidConfiguration("output_divisor cannot be 0")
        self._gains = PIDGains(int(p_gain), int(i_gain), int(d_gain))
        self._integral_limit = int(integral_limit)
        self._output_divisor = int(output_divisor)
        self.target = INITIAL_TARGET_ADC
        self.integral_state = 0
        self.last_reading = INITIAL_LAST_ADC
        self.last_terms: PIDTerms | None = None

    @property
    def gains(self) -> PIDGains:
        return PIDGains(self._gains.p_gain, self._gains.i_gain, self._gains.d_gain)

    @property
    def integral_limit(self) -> int:
        return self._integral_limit

    @property
    def output_divisor(self) -> int:
        return self._output_divisor

    def next_value(self, current_reading: int) -> int:
        error = self.target - current_reading
        p_term = self._gains.p_gain * error

        # Windup guard acts on the stored accumulator, not just this step's term.
        self.integral_state += error
        if self.integral_state > self._integral_limit:
            self.integral_state = self._integral_limit
        elif self.integral_state < -self._integral_limit:
            self.integral_state = -self._integral_limit
        i_term = self._gains.i_gain * self.integral_state

        d_term = self._gains.d_gain * (self.last_reading - current_reading)
        self.last_reading = current_reading

        raw_sum = p_term + i_term + d_term
        result = trunc_div(raw_sum, self._output_divisor)
        output = max(min(result, MAX_RESULT), 0)
        self.last_terms = PIDTerms(
            error=error,
            p_term=p_term,
            i_term=i_term,
            d_term=d_term,
            raw_sum=raw_sum,
            result=result,
            output=output,
        )
        return output

    def set_target(self, new_target: int) -> None:
        self.target = new_target

    def snapshot(self) -> ControllerState:
        return ControllerState(
            target=self.target,
            integral_state=self.integral_state,
            last_reading=self.last_reading,
        )
