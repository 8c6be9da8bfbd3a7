# piscocode

Show a number on a single LED. The LED blinks once for each unit of a digit
and shows the digits one after another, most significant first. A zero digit
is shown as a short period with the LED off. A negative number starts with
one long blink.

The LED is never driven directly. You give a callback that switches it, and
you call `PiscoCode.loop` at a regular tick. The sequence advances one step
per call and never blocks.

## Installation

```
pip install piscocode
```

## The LED callback

The callback receives an integer command and returns `True` when it accepts
it. The commands are the members of `LedCommand` in `piscocode.constants`:

- `LedCommand.ON`: turn the LED on.
- `LedCommand.OFF`: turn the LED off.
- `LedCommand.FUNC_OK`: a probe. Return `True` and do nothing else.

For every other value from 0 to 254 the callback must return `False`.
`PiscoCode.setup` calls the callback with the probe and with all those other
values, and raises `LedFunctionError` if it does not answer as required.
Otherwise it keeps the callback and switches the LED off.

If the callback returns `False` for `ON` or `OFF` while a code is being
shown, the sequence stops.

## Usage

```python
from piscocode.code import PiscoCode, SequenceRunningError
from piscocode.constants import Base, LedCommand

def led(command):
    if command == LedCommand.ON:
        ...  # drive the pin high
        return True
    if command == LedCommand.OFF:
        ...  # drive the pin low
        return True
    return command == LedCommand.FUNC_OK

pisco = PiscoCode()
pisco.setup(led)

pisco.show_code(-1024, Base.DECIMAL)

counter = 0
while pisco.is_sequencing():
    pisco.loop(counter)          # call this once every 64 ms
    counter = (counter + 1) % 256
```

The counter passed to `loop` is an 8-bit value (it is taken modulo 256) that
advances once every 64 ms. Phase lengths are measured in these ticks;
`ticks` in `piscocode.constants` converts milliseconds to whole ticks.
`PiscoCode.phase` gives the current `Phase` of the sequence.

## Settings

These attributes of `PiscoCode` are read each time `show_code` starts a code:

- `pwm`: brightness of a blink, from 1 to 15 (`PWM_MAX`). Larger values are
  clipped to 15; zero makes `show_code` raise `PiscoCodeError`. Default 15.
- `dim_pwm`: brightness kept between blinks. Default 0, the LED off.
- `repeat`: how many more times the whole code is shown after the first.
  Default 0.
- `min_digits`: when between 1 and 9, exactly that many trailing digits are
  shown, leading zeros included. Default 0, showing from the first non-zero
  digit.

## Errors

All exceptions are in `piscocode.code`:

- `SequenceRunningError`: `show_code` was called while a code is still being
  shown.
- `PiscoCodeError`: the base class of both others; raised itself when `pwm`
  is zero.
- `LedFunctionError`: `setup` rejected the callback.

A base below 2 makes `show_code` raise `ValueError`.

## Bases and digits

`Base` in `piscocode.constants` names the usual bases: `BINARY`, `OCTAL`,
`DECIMAL` and `HEXADECIMAL`. Up to ten digits (`MAX_DIGITS`) are shown;
higher digits are dropped. `split_digits(code, base, min_digits)` in
`piscocode.digits` returns the `DigitSequence` for a code without driving an
LED: its `digits`, the index `first` of the first digit shown, `negative`,
and `shown`, the digits that are displayed.

## What it does not do

The package keeps no clock and touches no pins. It does not schedule the
64 ms tick or switch any hardware; your program calls `loop` and your
callback drives the LED.