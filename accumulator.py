"""
Accumulator - the single-register engine behind the calculator window.

Tokens are fed one at a time through submit(). Digits and anything unknown
are appended to the number being typed, "+ - * /" capture a pending operation,
"=" resolves it into the history, "ac" clears and "<" deletes one character.
"""

import math
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional, Union


class Operator(str, Enum):
    """Binary operators accepted by the accumulator"""
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"


OPERATOR_TOKENS = {op.value: op for op in Operator}
EQUALS = "="
CLEAR_ALL = "ac"
BACKSPACE = "<"
RESULT_SEPARATOR = "="


class AccumulatorError(Exception):
    """Base class for failures reported by submit()"""


class DivisionByZero(AccumulatorError):
    def __init__(self):
        super().__init__("Division by zero")


class InvalidOperation(AccumulatorError):
    def __init__(self, op=None):
        super().__init__("Invalid operation")
        self.op = op


def format_number(value: float) -> str:
    """Render a float the way the display shows it.

    Integral values drop the fractional part (4, not 4.0) and nothing is ever
    printed in exponent notation, so the text parses back to the same value.
    """
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if value.is_integer():
        return format(Decimal(value), "f")
    return format(Decimal(repr(value)), "f")


def parse_number(text: str) -> Optional[float]:
    """Parse typed text as a float, None if it is not a number"""
    if not text or "_" in text or any(ch.isspace() for ch in text):
        return None
    try:
        return float(text)
    except ValueError:
        return None


def result_text(rendered: str) -> str:
    """Pull the result out of a rendered history line, "0" if malformed"""
    if RESULT_SEPARATOR not in rendered:
        return "0"
    result = rendered.split(RESULT_SEPARATOR)[-1].strip()
    return result or "0"


@dataclass(frozen=True)
class HistoryEntry:
    """One completed computation"""
    left: float
    operator: Operator
    right: float
    result: float

    def __str__(self):
        return (
            f"{format_number(self.left)} {self.operator.value} "
            f"{format_number(self.right)} = {format_number(self.result)}"
        )


def apply_operator(op, left, right):
    if op is Operator.ADD:
        return left + right
    elif op is Operator.SUBTRACT:
        return left - right
    elif op is Operator.MULTIPLY:
        return left * right
    elif op is Operator.DIVIDE:
        if right == 0.0:
            raise DivisionByZero()
        return left / right
    raise InvalidOperation(op)


class Accumulator:
    """Calculator state machine: display, pending operation and history"""

    def __init__(self):
        self._display = "0"
        self._current_number = ""
        self._operation: Optional[Operator] = None
        self._previous_number: Optional[float] = None
        self._history: list[HistoryEntry] = []

    @property
    def display(self) -> str:
        return self._display

    @property
    def current_number(self) -> str:
        return self._current_number

    @property
    def operation(self) -> Optional[Operator]:
        return self._operation

    @property
    def previous_number(self) -> Optional[float]:
        return self._previous_number

    @property
    def entries(self) -> tuple:
        return tuple(self._history)

    @property
    def history(self) -> tuple:
        return tuple(str(entry) for entry in self._history)

    def get_display(self) -> str:
        return self.display

    def get_history(self) -> tuple:
        return self.history

    def submit(self, token: str) -> None:
        """Feed one input token.

        Raises DivisionByZero or InvalidOperation from "=" without touching
        any state. Every other irregular input is ignored.
        """
        if token in OPERATOR_TOKENS:
            self._operator_pressed(OPERATOR_TOKENS[token])
        elif token == EQUALS:
            self._equals_pressed()
        elif token == CLEAR_ALL:
            self.clear_all()
        elif token == BACKSPACE:
            self.backspace()
        else:
            self._current_number += token
            self._update_display()

    def _operator_pressed(self, op):
        if not self._current_number:
            return
        # "1.2.3" typed before an operator is dropped like any bad text
        left = parse_number(self._current_number)
        if left is None:
            return

        self._previous_number = left
        self._operation = op
        self._current_number = ""
        self._update_display()

    def _equals_pressed(self):
        if self._previous_number is None or self._operation is None:
            return
        right = parse_number(self._current_number)
        if right is None:
            return

        result = apply_operator(self._operation, self._previous_number, right)

        self._history.append(
            HistoryEntry(self._previous_number, self._operation, right, result)
        )
        self._current_number = format_number(result)
        self._previous_number = None
        self._operation = None
        self._update_display()

    def clear_all(self):
        """Reset everything but the history"""
        self._display = "0"
        self._current_number = ""
        self._operation = None
        self._previous_number = None

    def backspace(self):
        if self._current_number:
            self._current_number = self._current_number[:-1]
            self._update_display()

    def replay(self, entry: Union[HistoryEntry, str]) -> None:
        """Reuse a past result as the number being typed"""
        if isinstance(entry, HistoryEntry):
            self._current_number = format_number(entry.result)
        else:
            self._current_number = result_text(entry)
        self._update_display()

    def _update_display(self):
        self._display = self._current_number if self._current_number else "0"
