"""Commands, numeric bases, sequencing phases and timing constants."""

from __future__ import annotations

from enum import IntEnum

__all__ = [
    "LedCommand",
    "Base",
    "Phase",
    "ticks",
    "MS_PER_LOOP_COUNTER",
    "MAX_DIGITS",
    "INITIAL_DIMMED_PWM",
    "PWM_MAX",
    "NEGATIVE_LONG_BLINK",
    "SHORT_BLINK",
    "BLINK_DIGIT_ZERO",
    "BETWEEN_BLINK",
    "BETWEEN_DIGITS",
    "BETWEEN_CODES",
]


class LedCommand(IntEnum):
    """Codes passed to the LED switching callback."""

    ON = 0
    OFF = 1
    FUNC_OK = 100


class Base(IntEnum):
    """Numeric bases a code can be shown in."""

    BINARY = 2
    OCTAL = 8
    DECIMAL = 10
    HEXADECIMAL = 16


class Phase(IntEnum):
    """States of the blinking state machine."""

    PAUSED = 10
    START_SEQUENCE = 20
    NEGATIVE_SIGN_ON = 30
    NEGATIVE_SIGN_OFF = 40
    READ_NEXT_DIGIT = 50
    SEQUENCING_ON = 60
    SEQUENCING_OFF = 70
    FINAL_PAUSE = 80
    REPEAT_SEQUENCE = 90
    END_SEQUENCE = 100


# The loop counter advances once every 64 milliseconds.
MS_PER_LOOP_COUNTER = 64


def ticks(milliseconds: int) -> int:
    """Return how many whole loop-counter ticks fit in ``milliseconds``."""
    if milliseconds < 0:
        raise ValueError("milliseconds must not be negative")
    return milliseconds // MS_PER_LOOP_COUNTER


# Maximum number of digits a sequence processes.
MAX_DIGITS = 10
# Default PWM level of the dimmed phase.
INITIAL_DIMMED_PWM = 0
# Highest PWM level; the scale starts at zero.
PWM_MAX = 15

# Phase durations, in loop-counter ticks.
NEGATIVE_LONG_BLINK = ticks(1800)
SHORT_BLINK = ticks(350)
BLINK_DIGIT_ZERO = ticks(440)
BETWEEN_BLINK = ticks(350)
BETWEEN_DIGITS = ticks(1700)
BETWEEN_CODES = ticks(1500)