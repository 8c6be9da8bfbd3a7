"""The Pisco Code blinking state machine."""

from __future__ import annotations

from typing import Callable, Optional

from .constants import (
    BETWEEN_BLINK,
    BETWEEN_CODES,
    BETWEEN_DIGITS,
    BLINK_DIGIT_ZERO,
    INITIAL_DIMMED_PWM,
    MAX_DIGITS,
    NEGATIVE_LONG_BLINK,
    PWM_MAX,
    SHORT_BLINK,
    LedCommand,
    Phase,
)
from .digits import split_digits

__all__ = [
    "PiscoCodeError",
    "SequenceRunningError",
    "LedFunctionError",
    "PiscoCode",
]

LedFunction = Callable[[int], bool]

_BYTE = 0xFF


class PiscoCodeError(Exception):
    """A code could not be shown."""


class SequenceRunningError(PiscoCodeError):
    """A code was rejected because another one is still being shown."""


class LedFunctionError(PiscoCodeError):
    """The LED switching callback does not behave as required."""


class PiscoCode:
    """Blinks numeric codes on a single LED, driven by a periodic loop call.

    The public attributes ``pwm``, ``dim_pwm``, ``repeat`` and ``min_digits``
    are read each time :meth:`show_code` starts a new sequence.
    """

    def __init__(self) -> None:
        self.pwm = PWM_MAX
        self.dim_pwm = INITIAL_DIMMED_PWM
        self.repeat = 0
        self.min_digits = 0

        self._pwm_sequence = self.pwm
        self._dimmed_pwm = self.dim_pwm
        self._sequence_times = self.repeat
        self._pwm_counter = 0

        self._digits: tuple[int, ...] = (0,) * MAX_DIGITS
        self._blinks: list[int] = [0] * MAX_DIGITS
        self._current_digit = 0
        self._least_significant_digit = 0
        self._negative = False

        self._phase = Phase.PAUSED
        self._start_time = 0
        self._duration = 0

        self._led: Optional[LedFunction] = None

        self._handlers = {
            Phase.START_SEQUENCE: self._start_sequence,
            Phase.NEGATIVE_SIGN_ON: self._negative_sign_on,
            Phase.NEGATIVE_SIGN_OFF: self._negative_sign_off,
            Phase.READ_NEXT_DIGIT: self._read_next_digit,
            Phase.SEQUENCING_ON: self._sequencing_on,
            Phase.SEQUENCING_OFF: self._sequencing_off,
            Phase.END_SEQUENCE: self._end_sequence,
            Phase.FINAL_PAUSE: self._final_pause,
            Phase.REPEAT_SEQUENCE: self._repeat_sequence,
        }

    @property
    def phase(self) -> Phase:
        """The current phase of the state machine."""
        return self._phase

    def setup(self, led_on_off: LedFunction) -> None:
        """Install and verify the LED callback, then switch the LED off.

        Raises LedFunctionError when the callback does not answer
        ``LedCommand.FUNC_OK`` with True or accepts an unknown command.
        """
        self._phase = Phase.PAUSED
        self._pwm_counter = 0
        self._led = led_on_off
        if not self._led_function_ok():
            raise LedFunctionError("LED callback failed its self-check")
        self._switch_led(False)

    def is_sequencing(self) -> bool:
        """Tell whether a code is currently being shown."""
        return self._phase is not Phase.PAUSED

    def show_code(self, code: int, base: int) -> None:
        """Start blinking ``code`` in ``base``.

        Raises SequenceRunningError while another code is being shown and
        PiscoCodeError when the PWM level is zero.
        """
        self._sequence_times = (self.repeat + 1) & _BYTE
        self._pwm_sequence = self.pwm & _BYTE
        self._dimmed_pwm = self.dim_pwm & _BYTE

        if self._phase is not Phase.PAUSED:
            raise SequenceRunningError("another code is being shown")
        if self._pwm_sequence == 0:
            raise PiscoCodeError("PWM level must be greater than zero")

        sequence = split_digits(code, base, self.min_digits & _BYTE)
        self._pwm_sequence = min(self._pwm_sequence, PWM_MAX)
        self._negative = sequence.negative
        self._digits = sequence.digits
        self._blinks = list(sequence.digits)
        self._current_digit = sequence.first
        self._least_significant_digit = sequence.first
        self._phase = Phase.START_SEQUENCE
        self._start_time = 0
        self._duration = BETWEEN_DIGITS

    def loop(self, loop_counter: int) -> None:
        """Advance the state machine; ``loop_counter`` ticks every 64 ms."""
        loop_counter &= _BYTE
        if self._pwm_counter == 0 and self._phase is Phase.PAUSED:
            self._switch_led(False)

        if self._phase is not Phase.PAUSED:
            if (
                self._pwm_counter == 0
                and self._duration != BLINK_DIGIT_ZERO
                and self._phase not in (Phase.REPEAT_SEQUENCE, Phase.FINAL_PAUSE)
            ):
                self._switch_or_pause(True)
            handler = self._handlers.get(self._phase)
            if handler is not None:
                handler(loop_counter)

        self._pwm_counter = 0 if self._pwm_counter > PWM_MAX else self._pwm_counter + 1

    # State handlers -------------------------------------------------------

    def _start_sequence(self, loop_counter: int) -> None:
        if self._start_time == 0:
            self._start_time = loop_counter
        self._dim_off()
        if self._phase_finished(loop_counter):
            if self._negative:
                self._phase = Phase.NEGATIVE_SIGN_ON
                self._duration = NEGATIVE_LONG_BLINK
            else:
                self._phase = Phase.READ_NEXT_DIGIT
            self._start_time = loop_counter

    def _negative_sign_on(self, loop_counter: int) -> None:
        self._bright_off()
        if self._phase_finished(loop_counter):
            self._enter(Phase.NEGATIVE_SIGN_OFF, NEGATIVE_LONG_BLINK, loop_counter)

    def _negative_sign_off(self, loop_counter: int) -> None:
        self._dim_off()
        if self._phase_finished(loop_counter):
            self._enter(Phase.READ_NEXT_DIGIT, BETWEEN_DIGITS, loop_counter)

    def _read_next_digit(self, loop_counter: int) -> None:
        if self._current_digit >= MAX_DIGITS:
            self._sequence_times = (self._sequence_times - 1) & _BYTE
            self._enter(Phase.END_SEQUENCE, BETWEEN_DIGITS, loop_counter)
            return
        duration = SHORT_BLINK
        if self._blinks[self._current_digit] == 0:
            duration = BLINK_DIGIT_ZERO
        self._enter(Phase.SEQUENCING_ON, duration, loop_counter)

    def _sequencing_on(self, loop_counter: int) -> None:
        self._bright_off()
        if self._phase_finished(loop_counter):
            self._switch_led(False)
            self._blinks[self._current_digit] -= 1
            duration = BETWEEN_BLINK if self._blinks[self._current_digit] > 0 else BETWEEN_DIGITS
            self._enter(Phase.SEQUENCING_OFF, duration, loop_counter)

    def _sequencing_off(self, loop_counter: int) -> None:
        self._dim_off()
        if self._phase_finished(loop_counter):
            if self._blinks[self._current_digit] > 0:
                self._enter(Phase.SEQUENCING_ON, SHORT_BLINK, loop_counter)
            else:
                if self._current_digit < MAX_DIGITS:
                    self._current_digit += 1
                self._phase = Phase.READ_NEXT_DIGIT
                self._start_time = loop_counter

    def _end_sequence(self, loop_counter: int) -> None:
        self._dim_off()
        if self._phase_finished(loop_counter):
            if self._sequence_times == 0:
                self._enter(Phase.FINAL_PAUSE, BETWEEN_DIGITS, loop_counter)
            else:
                self._enter(Phase.REPEAT_SEQUENCE, BETWEEN_CODES, loop_counter)

    def _final_pause(self, loop_counter: int) -> None:
        if self._phase_finished(loop_counter):
            self._phase = Phase.PAUSED
            self._start_time = loop_counter

    def _repeat_sequence(self, loop_counter: int) -> None:
        if self._phase_finished(loop_counter):
            self._blinks = list(self._digits)
            self._current_digit = self._least_significant_digit
            self._enter(Phase.START_SEQUENCE, BETWEEN_DIGITS, loop_counter)

    # Helpers ----------------------------------------------------------------

    def _enter(self, phase: Phase, duration: int, loop_counter: int) -> None:
        self._phase = phase
        self._duration = duration
        self._start_time = loop_counter

    def _phase_finished(self, loop_counter: int) -> bool:
        elapsed = (loop_counter - self._start_time) & _BYTE
        return elapsed > self._duration and self._pwm_counter == self._pwm_sequence

    def _dim_off(self) -> None:
        if self._pwm_counter == self._dimmed_pwm:
            self._switch_or_pause(False)

    def _bright_off(self) -> None:
        if self._pwm_counter == self._pwm_sequence:
            self._switch_or_pause(False)

    def _switch_or_pause(self, turn_on: bool) -> None:
        if not self._switch_led(turn_on):
            self._phase = Phase.PAUSED

    def _switch_led(self, turn_on: bool) -> bool:
        if self._led is None:
            return False
        return bool(self._led(LedCommand.ON if turn_on else LedCommand.OFF))

    def _led_function_ok(self) -> bool:
        led = self._led
        if led is None or not led(LedCommand.FUNC_OK):
            return False
        valid = {int(command) for command in LedCommand}
        rejected = [not led(command) for command in range(255) if command not in valid]
        return all(rejected)