"""Selection state for the upload form.

SelectionState is immutable: every transition returns a new instance.
SelectionStore holds the current state and notifies subscribers when it is
replaced, so tests can assert transitions without driving a terminal.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Tuple


PDF_MIME_TYPE = "application/pdf"


# ---------------------------------------------------------------------------
# Selected file
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SelectedFile:
    """A picked file: raw bytes plus its declared MIME type and display name."""

    name: str
    mime_type: str
    data: bytes = b""
    path: Optional[Path] = None

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def is_pdf(self) -> bool:
        return (self.mime_type or "").startswith(PDF_MIME_TYPE)


# ---------------------------------------------------------------------------
# Selection state
# ---------------------------------------------------------------------------

class SelectionState:
    """Ordered selection of files, or the explicit unset sentinel.

    ``SelectionState.unset()`` and ``SelectionState(())`` are different
    values: the form disables its actions only on the former.
    """

    __slots__ = ("_files",)

    def __init__(self, files: Optional[Tuple[SelectedFile, ...]] = None):
        self._files = None if files is None else tuple(files)

    @classmethod
    def unset(cls) -> "SelectionState":
        return cls(None)

    @property
    def is_unset(self) -> bool:
        return self._files is None

    @property
    def files(self) -> Tuple[SelectedFile, ...]:
        return self._files or ()

    @property
    def names(self) -> List[str]:
        return [f.name for f in self.files]

    def append(self, file: SelectedFile) -> "SelectionState":
        """Return a new state with ``file`` added at the end."""
        return SelectionState(self.files + (file,))

    def __len__(self) -> int:
        return len(self.files)

    def __iter__(self):
        return iter(self.files)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SelectionState):
            return NotImplemented
        return self._files == other._files

    def __hash__(self) -> int:
        return hash(self._files)

    def __repr__(self) -> str:
        if self.is_unset:
            return "SelectionState(unset)"
        return f"SelectionState({self.names!r})"


Listener = Callable[[SelectionState, SelectionState], None]


class SelectionStore:
    """Owns the current SelectionState.

    Call mutator methods (not attribute sets) so subscribers see every
    replacement as an ``(old, new)`` pair.
    """

    def __init__(self, initial: Optional[SelectionState] = None) -> None:
        self._state = initial if initial is not None else SelectionState.unset()
        self._listeners: List[Listener] = []

    @property
    def state(self) -> SelectionState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener. Returns a callable that removes it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def replace(self, new_state: SelectionState) -> SelectionState:
        old = self._state
        self._state = new_state
        if old != new_state:
            for listener in list(self._listeners):
                listener(old, new_state)
        return new_state

    # -- Mutators ----------------------------------------------------------

    def append(self, file: SelectedFile) -> SelectionState:
        return self.replace(self._state.append(file))

    def extend(self, files: Iterable[SelectedFile]) -> SelectionState:
        state = self._state
        for f in files:
            state = state.append(f)
        return self.replace(state)

    def clear(self) -> SelectionState:
        return self.replace(SelectionState.unset())
