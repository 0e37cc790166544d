"""Clipboard sinks used by ``ChatSessionController.copy_message``."""

import base64
from abc import ABC, abstractmethod

from rich.console import Console


class ClipboardError(Exception):
    """The sink could not take the text."""


class ClipboardSink(ABC):
    """Destination for copied message text."""

    @abstractmethod
    def copy(self, text: str) -> None:
        """Place text on the clipboard.

        Raises:
            ClipboardError: If the text could not be copied
        """


class InMemoryClipboard(ClipboardSink):
    """Keeps copied text in a list; for tests and headless use."""

    def __init__(self) -> None:
        self.history: list[str] = []

    @property
    def last(self) -> str | None:
        return self.history[-1] if self.history else None

    def copy(self, text: str) -> None:
        self.history.append(text)


class TerminalClipboard(ClipboardSink):
    """Copies through the terminal using the OSC 52 escape sequence.

    Works over SSH and in most modern terminal emulators; terminals without
    OSC 52 support silently ignore the sequence.
    """

    def __init__(self, console: Console):
        self._console = console

    def copy(self, text: str) -> None:
        if not self._console.is_terminal:
            raise ClipboardError("Output is not a terminal")

        encoded = base64.b64encode(text.encode("utf-8")).decode("ascii")
        try:
            self._console.file.write(f"\x1b]52;c;{encoded}\a")
            self._console.file.flush()
        except OSError as e:
            raise ClipboardError(f"Could not write to terminal: {e}") from e
