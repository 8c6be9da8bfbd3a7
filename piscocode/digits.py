"""Splitting a code into the digits that are blinked out."""

from __future__ import annotations

from dataclasses import dataclass

from .constants import MAX_DIGITS

__all__ = ["DigitSequence", "split_digits"]


@dataclass(frozen=True)
class DigitSequence:
    """The digits of a code, most significant first, padded to MAX_DIGITS.

    ``first`` is the index of the first digit to show; ``negative`` tells
    whether a negative sign is blinked before the digits.
    """

    digits: tuple[int, ...]
    first: int
    negative: bool

    @property
    def shown(self) -> tuple[int, ...]:
        """The digits that are actually displayed."""
        return self.digits[self.first:]


def split_digits(code: int, base: int, min_digits: int = 0) -> DigitSequence:
    """Split ``code`` into MAX_DIGITS digits in ``base``.

    Digits beyond MAX_DIGITS are dropped. When ``min_digits`` lies strictly
    between zero and MAX_DIGITS, exactly that many trailing digits are shown.
    """
    if base < 2:
        raise ValueError(f"base must be at least 2, got {base}")
    if min_digits < 0:
        raise ValueError("min_digits must not be negative")

    negative = code < 0
    remaining = -code if negative else code

    reversed_digits = []
    for _ in range(MAX_DIGITS):
        remaining, digit = divmod(remaining, base)
        reversed_digits.append(digit)
    digits = tuple(reversed(reversed_digits))

    first = next(
        (index for index, digit in enumerate(digits) if digit > 0),
        MAX_DIGITS - 1,
    )
    if 0 < min_digits < MAX_DIGITS:
        first = MAX_DIGITS - min_digits

    return DigitSequence(digits=digits, first=first, negative=negative)