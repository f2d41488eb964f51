"""Tests for the Accumulator token state machine.

Coverage:
- digit append and display derivation
- operator capture and silent ignores
- equals for each operator, division by zero
- clear-all and backspace
- history replay
"""

import pytest

from accumulator import (
    Accumulator,
    AccumulatorError,
    DivisionByZero,
    HistoryEntry,
    InvalidOperation,
    Operator,
    apply_operator,
)
from tests.conftest import feed


class TestIdentityState:
    def test_fresh_accumulator(self, acc):
        assert acc.display == "0"
        assert acc.current_number == ""
        assert acc.operation is None
        assert acc.previous_number is None
        assert acc.history == ()

    def test_getters_match_properties(self, acc):
        feed(acc, "4", "2")
        assert acc.get_display() == acc.display == "42"
        assert acc.get_history() == acc.history


class TestDigits:
    def test_digits_append(self, acc):
        feed(acc, "1", "2", ".", "5")
        assert acc.current_number == "12.5"
        assert acc.display == "12.5"

    def test_multiple_decimal_points_are_kept(self, acc):
        feed(acc, "1", ".", "2", ".", "3")
        assert acc.display == "1.2.3"

    def test_unknown_token_is_appended(self, acc):
        acc.submit("x")
        assert acc.current_number == "x"
        assert acc.display == "x"


class TestOperators:
    @pytest.mark.parametrize("token,op", [
        ("+", Operator.ADD),
        ("-", Operator.SUBTRACT),
        ("*", Operator.MULTIPLY),
        ("/", Operator.DIVIDE),
    ])
    def test_operator_captures_left_operand(self, acc, token, op):
        feed(acc, "1", "2", token)
        assert acc.operation is op
        assert acc.previous_number == 12.0
        assert acc.current_number == ""
        assert acc.display == "0"

    def test_operator_without_operand_is_ignored(self, acc):
        """Scenario E."""
        acc.submit("+")
        assert acc.display == "0"
        assert acc.operation is None
        assert acc.previous_number is None

    def test_operator_after_operator_is_ignored(self, acc):
        feed(acc, "3", "+", "*")
        assert acc.operation is Operator.ADD
        assert acc.previous_number == 3.0

    def test_operator_on_unparseable_number_is_ignored(self, acc):
        feed(acc, "1", ".", "2", ".", "3", "+")
        assert acc.operation is None
        assert acc.previous_number is None
        assert acc.display == "1.2.3"


class TestEquals:
    def test_addition_scenario(self, acc):
        """Scenario A."""
        feed(acc, "7", "+", "3", "=")
        assert acc.display == "10"
        assert acc.history == ("7 + 3 = 10",)
        assert acc.operation is None
        assert acc.previous_number is None

    @pytest.mark.parametrize("tokens,display,line", [
        (("7", "-", "1", "0"), "-3", "7 - 10 = -3"),
        (("2", ".", "5", "*", "2"), "5", "2.5 * 2 = 5"),
        (("1", "/", "4"), "0.25", "1 / 4 = 0.25"),
        (("1", "/", "3"), "0.3333333333333333", "1 / 3 = 0.3333333333333333"),
        ((".", "1", "+", ".", "2"), "0.30000000000000004", "0.1 + 0.2 = 0.30000000000000004"),
    ])
    def test_operators(self, acc, tokens, display, line):
        feed(acc, *tokens, "=")
        assert acc.display == display
        assert acc.history == (line,)

    def test_result_feeds_next_operation(self, acc):
        feed(acc, "2", "+", "2", "=", "*", "3", "=")
        assert acc.display == "12"
        assert acc.history == ("2 + 2 = 4", "4 * 3 = 12")

    def test_digits_append_to_result(self, acc):
        feed(acc, "2", "+", "2", "=", "1")
        assert acc.display == "41"

    def test_equals_without_pending_operation_is_ignored(self, acc):
        feed(acc, "5", "=")
        assert acc.display == "5"
        assert acc.history == ()

    def test_equals_without_right_operand_is_ignored(self, acc):
        feed(acc, "5", "+", "=")
        assert acc.display == "0"
        assert acc.operation is Operator.ADD
        assert acc.previous_number == 5.0
        assert acc.history == ()

    def test_equals_with_unparseable_right_operand_is_ignored(self, acc):
        feed(acc, "5", "+", "1", ".", ".", "=")
        assert acc.display == "1.."
        assert acc.operation is Operator.ADD
        assert acc.history == ()

    def test_history_entry_is_structured(self, acc):
        feed(acc, "6", "*", "7", "=")
        assert acc.entries == (HistoryEntry(6.0, Operator.MULTIPLY, 7.0, 42.0),)


class TestDivisionByZero:
    def test_division_by_zero_scenario(self, acc):
        """Scenario B."""
        feed(acc, "5", "/", "0")
        with pytest.raises(DivisionByZero):
            acc.submit("=")
        assert acc.display == "0"
        assert acc.history == ()

    def test_state_is_untouched(self, pending_division):
        acc = pending_division
        with pytest.raises(DivisionByZero) as exc_info:
            acc.submit("=")

        assert str(exc_info.value) == "Division by zero"
        assert acc.display == "0"
        assert acc.current_number == "0"
        assert acc.previous_number == 5.0
        assert acc.operation is Operator.DIVIDE
        assert acc.history == ()

    def test_operator_with_empty_operand_before_zero_divisor(self, acc):
        feed(acc, "5", "/", "-", "0")
        # "-" with nothing typed is ignored
        with pytest.raises(DivisionByZero):
            acc.submit("=")

    def test_can_recover_after_failure(self, pending_division):
        acc = pending_division
        with pytest.raises(AccumulatorError):
            acc.submit("=")
        feed(acc, "<", "2", "=")
        assert acc.display == "2.5"
        assert acc.history == ("5 / 2 = 2.5",)


class TestInvalidOperation:
    def test_unknown_operator_is_rejected(self):
        with pytest.raises(InvalidOperation) as exc_info:
            apply_operator("%", 1.0, 2.0)
        assert exc_info.value.op == "%"
        assert str(exc_info.value) == "Invalid operation"

    def test_is_an_accumulator_error(self):
        assert issubclass(InvalidOperation, AccumulatorError)
        assert issubclass(DivisionByZero, AccumulatorError)


class TestClearAndBackspace:
    def test_clear_all_keeps_history(self, acc):
        feed(acc, "7", "+", "3", "=", "9", "*", "ac")
        assert acc.display == "0"
        assert acc.current_number == ""
        assert acc.operation is None
        assert acc.previous_number is None
        assert acc.history == ("7 + 3 = 10",)

    def test_clear_all_is_idempotent(self, acc):
        feed(acc, "4", "-", "1", "ac")
        once = (acc.display, acc.current_number, acc.operation, acc.previous_number, acc.history)
        acc.submit("ac")
        twice = (acc.display, acc.current_number, acc.operation, acc.previous_number, acc.history)
        assert once == twice

    def test_backspace_to_empty(self, acc):
        """Scenario C."""
        feed(acc, "9", "<")
        assert acc.display == "0"
        assert acc.current_number == ""

    def test_backspace_removes_last_character(self, acc):
        feed(acc, "1", "2", "3", "<")
        assert acc.display == "12"

    def test_backspace_on_empty_is_noop(self, acc):
        feed(acc, "8", "+", "<")
        assert acc.display == "0"
        assert acc.operation is Operator.ADD
        assert acc.previous_number == 8.0


class TestReplay:
    def test_replay_rendered_entry(self, acc):
        """Scenario D."""
        feed(acc, "2", "+", "2", "=", "ac")
        assert acc.history == ("2 + 2 = 4",)
        acc.replay("2 + 2 = 4")
        assert acc.current_number == "4"
        assert acc.display == "4"

    def test_replay_structured_entry(self, acc):
        feed(acc, "1", "/", "8", "=", "ac")
        acc.replay(acc.entries[0])
        assert acc.display == "0.125"

    def test_replay_keeps_pending_operation(self, acc):
        feed(acc, "2", "+", "2", "=", "3", "*")
        acc.replay(acc.history[0])
        assert acc.operation is Operator.MULTIPLY
        assert acc.previous_number == 43.0
        acc.submit("=")
        assert acc.display == "172"
        assert len(acc.history) == 2

    def test_replay_trims_whitespace(self, acc):
        acc.replay("1 + 1 =    2   ")
        assert acc.display == "2"

    @pytest.mark.parametrize("text", ["garbage", "", "1 + 1 = "])
    def test_malformed_replay_degrades_to_zero(self, acc, text):
        acc.replay(text)
        assert acc.current_number == "0"
        assert acc.display == "0"

    def test_replay_does_not_touch_history(self, acc):
        feed(acc, "2", "+", "2", "=")
        acc.replay("9 * 9 = 81")
        assert acc.history == ("2 + 2 = 4",)
