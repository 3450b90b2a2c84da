"""
Operator input and the feedback audit log.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Optional, TextIO, Union

from rich.console import Console

from classroom_grader.exceptions import AuditLogError, ConfigurationError, InputError

logger = logging.getLogger(__name__)

FEEDBACK_PROMPT = "Enter any feedback for student:\n"
CONTINUE_PROMPT = "Press enter to continue"


class FeedbackCollector:
    """
    Reads feedback and pacing confirmations from the grader.

    Reads from the terminal by default. Passing ``stream`` reads lines
    from that file object instead.
    """

    def __init__(self, console: Optional[Console] = None, stream: Optional[TextIO] = None):
        self._console = console or Console()
        self._stream = stream

    def read_line(self, prompt: str = "") -> str:
        """
        Read one line, without its trailing line terminator.

        Raises:
            InputError: On end of input or a read failure
        """
        try:
            line = self._console.input(prompt, markup=False, stream=self._stream)
        except (EOFError, OSError) as e:
            raise InputError(f"Could not read input: {e or 'end of input'}") from e

        # readline() returns "" only at end of input
        if self._stream is not None and not line:
            raise InputError("Could not read input: end of input")

        return line.rstrip("\r\n")

    def prompt_for_feedback(self) -> str:
        """Ask for feedback. An empty string means no feedback."""
        return self.read_line(FEEDBACK_PROMPT)

    def wait_for_continue(self) -> None:
        """Block until the grader presses enter."""
        self.read_line(CONTINUE_PROMPT)


class AuditLog:
    """
    Append-only log of posted feedback, one line per event.

    Example:
        ```python
        with AuditLog.open("~/grading-logs", "assignment-2-") as audit:
            audit.record("Alice Smith", "alice", "Nice work")
        ```
    """

    TIMESTAMP_FORMAT = "%Y/%m/%d %H:%M:%S"

    def __init__(self, file: TextIO, path: Optional[Path] = None):
        self._file = file
        self.path = path

    @classmethod
    def open(cls, log_dir: Union[str, Path], prefix: str) -> "AuditLog":
        """
        Open ``<log_dir>/<prefix>.log`` for appending.

        Raises:
            ConfigurationError: If the file cannot be opened
        """
        path = Path(log_dir).expanduser() / f"{prefix}.log"
        try:
            file = path.open("a", encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(f"Could not open audit log {path}: {e}") from e
        logger.debug(f"Audit log: {path}")
        return cls(file, path)

    @staticmethod
    def format_entry(name: str, username: str, feedback: str, when: datetime) -> str:
        """Format one audit line (without newline)."""
        return (
            f"{when.strftime(AuditLog.TIMESTAMP_FORMAT)} "
            f"Name: {name}, Username: {username}, Feedback: {feedback}"
        )

    def record(self, name: str, username: str, feedback: str) -> None:
        """
        Append one feedback line and flush it.

        Raises:
            AuditLogError: If writing fails
        """
        line = self.format_entry(name, username, feedback, datetime.now())
        try:
            self._file.write(line + "\n")
            self._file.flush()
        except (OSError, ValueError) as e:
            raise AuditLogError(f"Could not write audit log entry: {e}") from e

    def close(self) -> None:
        self._file.close()

    def __enter__(self) -> "AuditLog":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()
