"""
Controller that owns the calculator's Accumulator.

Every button, shortcut and history "Use" action goes through send() or
replay(); nothing else holds a reference that can mutate the accumulator.
Listeners receive an immutable snapshot after each change.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Union

from accumulator import Accumulator, AccumulatorError, format_number

log = logging.getLogger("calculator")


@dataclass(frozen=True)
class CalculatorSnapshot:
    """What the window needs to render"""
    display: str
    history: tuple
    pending: str = ""


class CalculatorController:
    """Single mutation entry point for the presentation layer"""

    def __init__(self):
        self._accumulator = Accumulator()
        self._listeners: List[Callable[[CalculatorSnapshot], None]] = []
        self._error_listeners: List[Callable[[str], None]] = []
        self.last_error: Optional[str] = None

    def subscribe(self, callback):
        """Call `callback(snapshot)` after every state change"""
        self._listeners.append(callback)

    def subscribe_errors(self, callback):
        """Call `callback(message)` when a token is rejected"""
        self._error_listeners.append(callback)

    def snapshot(self) -> CalculatorSnapshot:
        acc = self._accumulator
        pending = ""
        if acc.operation is not None:
            pending = f"{format_number(acc.previous_number)} {acc.operation.value}"
        return CalculatorSnapshot(acc.get_display(), acc.get_history(), pending)

    def send(self, token: str) -> bool:
        """Submit a token; False if the accumulator rejected it"""
        log.debug("token [%s]", token)
        try:
            self._accumulator.submit(token)
        except AccumulatorError as e:
            log.warning("Rejected token [%s]: %s", token, e)
            self.last_error = str(e)
            for callback in self._error_listeners:
                callback(self.last_error)
            return False

        self.last_error = None
        self._notify()
        return True

    def replay(self, entry: Union[int, str]) -> None:
        """Reuse the result of a history entry, by index or rendered text"""
        if isinstance(entry, int):
            entries = self._accumulator.entries
            if not -len(entries) <= entry < len(entries):
                raise IndexError(f"No history entry {entry}")
            target = entries[entry]
        else:
            target = entry

        log.debug("replay [%s]", target)
        self._accumulator.replay(target)
        self._notify()

    def _notify(self):
        snap = self.snapshot()
        for callback in self._listeners:
            callback(snap)
