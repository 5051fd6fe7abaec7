"""File picker collaborators.

A picker is the source of SelectedFile handles. Like a native file input it
holds a pending value until it is reset, and it carries an ``accept`` hint
that only filters what is offered, never what the controller accepts.
"""

import logging
import mimetypes
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, List, Optional

from .errors import FileSelectionError
from .state import PDF_MIME_TYPE, SelectedFile

logger = logging.getLogger(__name__)

_FALLBACK_MIME_TYPE = "application/octet-stream"


def guess_mime_type(path: Path) -> str:
    """Declared MIME type for a path, from its extension."""
    return mimetypes.guess_type(str(path))[0] or _FALLBACK_MIME_TYPE


def matches_accept(path: Path, accept: str) -> bool:
    """Check a path against an ``accept`` hint.

    The hint is a comma-separated list of MIME types (``application/pdf``,
    ``image/*``) and extensions (``.pdf``). An empty hint matches everything.
    """
    tokens = [t.strip().lower() for t in accept.split(",") if t.strip()]
    if not tokens:
        return True

    mime_type = guess_mime_type(path)
    suffix = path.suffix.lower()
    for token in tokens:
        if token.startswith("."):
            if suffix == token:
                return True
        elif token.endswith("/*"):
            if mime_type.startswith(token[:-1]):
                return True
        elif mime_type == token:
            return True
    return False


class FilePicker(ABC):
    """Abstract source of picked files."""

    def __init__(self, accept: str = PDF_MIME_TYPE, multiple: bool = True):
        self.accept = accept
        self.multiple = multiple

    @abstractmethod
    def pick(self) -> Optional[List[SelectedFile]]:
        """Return the pending selection, or None when nothing was chosen."""
        pass

    @abstractmethod
    def reset(self) -> None:
        """Clear the pending selection so the same file can be picked again."""
        pass


class PathPicker(FilePicker):
    """Picker fed with filesystem paths (command arguments or shell input)."""

    def __init__(self, accept: str = PDF_MIME_TYPE, multiple: bool = True):
        super().__init__(accept, multiple)
        self._value: Optional[List[SelectedFile]] = None

    @property
    def value(self) -> Optional[List[SelectedFile]]:
        return self._value

    def choose(self, paths: Iterable[str]) -> List[SelectedFile]:
        """Load the given paths as the pending selection.

        Directories expand to the files inside them that match the accept
        hint. Raises FileSelectionError for paths that do not exist.
        """
        chosen: List[SelectedFile] = []
        for raw in paths:
            path = Path(raw).expanduser()
            if path.is_dir():
                for child in sorted(path.iterdir()):
                    if child.is_file() and not child.name.startswith("."):
                        if matches_accept(child, self.accept):
                            chosen.append(self._load(child))
            elif path.is_file():
                chosen.append(self._load(path))
            else:
                raise FileSelectionError(f"File not found: {path}")

        if not self.multiple and len(chosen) > 1:
            chosen = chosen[:1]

        self._value = chosen
        return chosen

    def _load(self, path: Path) -> SelectedFile:
        try:
            data = path.read_bytes()
        except OSError as e:
            raise FileSelectionError(f"Error reading file {path}: {e}") from e
        logger.debug("Loaded %s (%d bytes)", path, len(data))
        return SelectedFile(
            name=path.name,
            mime_type=guess_mime_type(path),
            data=data,
            path=path.resolve(),
        )

    def pick(self) -> Optional[List[SelectedFile]]:
        if self._value is None:
            return None
        return list(self._value)

    def reset(self) -> None:
        self._value = None
