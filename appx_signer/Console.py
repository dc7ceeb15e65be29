"""
Console - operator-facing text I/O.

Wraps prompts, status lines and pauses so the retry loop can be driven
from tests with scripted input.
"""
import sys
from typing import Callable, Optional, TextIO

APP_TITLE = "Windows Store App Backup"
RULE_WIDTH = 80


class Console:
    """
    Reads operator input and writes status text.

    Args:
        input_func: Callable used to read one line (defaults to builtin input)
        out: Stream for prompts and status lines (defaults to sys.stdout)
        err: Stream for failure notices (defaults to sys.stderr)
    """

    def __init__(self,
                 input_func: Callable[[str], str] = input,
                 out: Optional[TextIO] = None,
                 err: Optional[TextIO] = None):
        self._input = input_func
        self._out = out
        self._err = err

    @property
    def out(self) -> TextIO:
        return self._out if self._out is not None else sys.stdout

    @property
    def err(self) -> TextIO:
        return self._err if self._err is not None else sys.stderr

    def banner(self) -> None:
        self.info(f"\t\t'{APP_TITLE}'")
        self.info("=" * RULE_WIDTH)

    def prompt(self, message: str) -> str:
        """Reads one line. EOFError and KeyboardInterrupt propagate to the caller."""
        return self._input(message)

    def info(self, message: str) -> None:
        print(message, file=self.out, flush=True)

    def error(self, message: str) -> None:
        print(message, file=self.err, flush=True)

    def pause(self, action: str = "retry") -> None:
        self._input(f"\nPress Enter to {action}...")
