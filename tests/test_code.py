import pytest

from piscocode.code import (
    LedFunctionError,
    PiscoCode,
    PiscoCodeError,
    SequenceRunningError,
)
from piscocode.constants import Base, LedCommand, Phase
from piscocode.digits import split_digits


class FakeLed:
    def __init__(self):
        self.calls = []
        self.state = False
        self.broken = False

    def __call__(self, command):
        self.calls.append(int(command))
        if self.broken:
            return False
        if command == LedCommand.ON:
            self.state = True
            return True
        if command == LedCommand.OFF:
            self.state = False
            return True
        return command == LedCommand.FUNC_OK


def make_code():
    led = FakeLed()
    code = PiscoCode()
    code.setup(led)
    return code, led


def run(code, led=None, limit=50000):
    phases = []
    states = []
    for tick in range(limit):
        code.loop(tick & 0xFF)
        phases.append(code.phase)
        if led is not None:
            states.append(led.state)
        if not code.is_sequencing():
            break
    return phases, states


def entries(phases, target):
    return sum(
        1
        for index, phase in enumerate(phases)
        if phase == target and (index == 0 or phases[index - 1] != target)
    )


def test_setup_checks_callback_and_turns_led_off():
    code, led = make_code()
    assert led.calls[0] == LedCommand.FUNC_OK
    assert led.calls[-1] == LedCommand.OFF
    assert code.is_sequencing() is False


def test_setup_rejects_callback_accepting_everything():
    code = PiscoCode()
    with pytest.raises(LedFunctionError):
        code.setup(lambda command: True)


def test_setup_rejects_callback_failing_self_check():
    code = PiscoCode()
    with pytest.raises(LedFunctionError):
        code.setup(lambda command: command in (LedCommand.ON, LedCommand.OFF))


def test_show_code_starts_sequence():
    code, _ = make_code()
    code.show_code(7, Base.DECIMAL)
    assert code.is_sequencing() is True
    assert code.phase == Phase.START_SEQUENCE


def test_show_code_while_running_is_rejected():
    code, _ = make_code()
    code.show_code(7, Base.DECIMAL)
    with pytest.raises(SequenceRunningError):
        code.show_code(8, Base.DECIMAL)


def test_show_code_with_zero_pwm_fails():
    code, _ = make_code()
    code.pwm = 0
    with pytest.raises(PiscoCodeError):
        code.show_code(7, Base.DECIMAL)
    assert code.is_sequencing() is False


def test_sequence_runs_to_completion_and_led_ends_off():
    code, led = make_code()
    code.show_code(3, Base.DECIMAL)
    phases, states = run(code, led)
    assert phases[-1] == Phase.PAUSED
    assert states[-1] is False
    assert Phase.FINAL_PAUSE in phases


@pytest.mark.parametrize("value", [3, 12, 105, 987])
def test_blink_count_matches_digits(value):
    code, led = make_code()
    code.show_code(value, Base.DECIMAL)
    phases, _ = run(code, led)
    shown = split_digits(value, Base.DECIMAL).shown
    assert entries(phases, Phase.READ_NEXT_DIGIT) == len(shown) + 1
    assert entries(phases, Phase.SEQUENCING_ON) == sum(max(d, 1) for d in shown)


def test_binary_digits_are_shown():
    code, led = make_code()
    code.show_code(5, Base.BINARY)
    phases, _ = run(code, led)
    shown = split_digits(5, Base.BINARY).shown
    assert entries(phases, Phase.READ_NEXT_DIGIT) == len(shown) + 1


def test_negative_code_shows_sign_once():
    code, led = make_code()
    code.show_code(-4, Base.DECIMAL)
    phases, _ = run(code, led)
    assert entries(phases, Phase.NEGATIVE_SIGN_ON) == 1
    assert entries(phases, Phase.NEGATIVE_SIGN_OFF) == 1
    assert entries(phases, Phase.SEQUENCING_ON) == 4


def test_positive_code_has_no_sign():
    code, led = make_code()
    code.show_code(4, Base.DECIMAL)
    phases, _ = run(code, led)
    assert Phase.NEGATIVE_SIGN_ON not in phases


def test_min_digits_pads_with_zeros():
    code, led = make_code()
    code.min_digits = 3
    code.show_code(5, Base.DECIMAL)
    phases, _ = run(code, led)
    assert entries(phases, Phase.READ_NEXT_DIGIT) == 3 + 1


def test_repeat_shows_code_again():
    single, led_single = make_code()
    single.show_code(2, Base.DECIMAL)
    once, _ = run(single, led_single)

    repeated, led_repeated = make_code()
    repeated.repeat = 1
    repeated.show_code(2, Base.DECIMAL)
    twice, _ = run(repeated, led_repeated)

    assert entries(twice, Phase.SEQUENCING_ON) == 2 * entries(once, Phase.SEQUENCING_ON)
    assert entries(twice, Phase.REPEAT_SEQUENCE) == 1
    assert Phase.REPEAT_SEQUENCE not in once


def test_led_only_lit_in_bright_phases_when_dim_is_zero():
    code, led = make_code()
    code.show_code(-21, Base.DECIMAL)
    phases, states = run(code, led)
    lit_phases = {phase for phase, lit in zip(phases, states) if lit}
    assert lit_phases <= {Phase.SEQUENCING_ON, Phase.NEGATIVE_SIGN_ON}
    assert Phase.SEQUENCING_ON in lit_phases


def test_failing_led_pauses_sequence():
    code, led = make_code()
    code.show_code(9, Base.DECIMAL)
    led.broken = True
    code.loop(0)
    assert code.phase == Phase.PAUSED
    assert code.is_sequencing() is False


def test_new_code_accepted_after_completion():
    code, led = make_code()
    code.show_code(1, Base.DECIMAL)
    run(code, led)
    code.show_code(2, Base.HEXADECIMAL)
    assert code.phase == Phase.START_SEQUENCE


def test_invalid_base_raises():
    code, _ = make_code()
    with pytest.raises(ValueError):
        code.show_code(5, 1)