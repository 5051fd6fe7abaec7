"""User-facing notices.

Every notice is blocking: the console notifier waits for the user to
acknowledge it before the form continues, the way a browser alert does.
"""

from abc import ABC, abstractmethod
from typing import Callable, Optional

from .ui.output import render_alert

NO_FILE_CHOSEN = "No file was chosen"
FILES_LIST_EMPTY = "Files list is empty"
INVALID_PDF = "Please select a valid pdf"
UPLOAD_FAILED = "Sorry! something went wrong."


class Notifier(ABC):
    """Abstract sink for user notices."""

    @abstractmethod
    def alert(self, message: str) -> None:
        """Show a notice and return once it has been acknowledged."""
        pass


class ConsoleNotifier(Notifier):
    """Render notices as panels and optionally wait for Enter."""

    def __init__(self, confirm: bool = True, prompt_fn: Optional[Callable[[str], str]] = None):
        self.confirm = confirm
        self._prompt = prompt_fn or input

    def alert(self, message: str) -> None:
        render_alert(message)
        if not self.confirm:
            return
        try:
            self._prompt("  press Enter to continue ")
        except EOFError:
            pass
