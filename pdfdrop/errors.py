"""Exception types raised by pdfdrop.

Selection errors are detected before any network call. Upload errors are
scoped to a single file and never abort the rest of a batch.
"""

from typing import Optional


class PdfDropError(Exception):
    """Base class for all pdfdrop errors."""


# ---------------------------------------------------------------------------
# Selection (raised before any request is made)
# ---------------------------------------------------------------------------

class SelectionError(PdfDropError):
    """A file picker event could not be accepted."""


class NoFileChosenError(SelectionError):
    """The picker produced no file list at all."""


class EmptyFileListError(SelectionError):
    """The picker produced a file list with zero entries."""


class InvalidFileTypeError(SelectionError):
    """A picked file does not declare a PDF MIME type."""

    def __init__(self, name: str, mime_type: str) -> None:
        super().__init__(f"{name}: expected application/pdf, got {mime_type or 'unknown'}")
        self.name = name
        self.mime_type = mime_type


class FileSelectionError(SelectionError):
    """A path handed to the picker does not exist or cannot be read."""


# ---------------------------------------------------------------------------
# Upload (scoped to one file)
# ---------------------------------------------------------------------------

class UploadError(PdfDropError):
    """Uploading a single file failed."""


class UploadTransportError(UploadError):
    """The request raised, or the response body was not JSON."""


class ResponseShapeError(UploadError):
    """The response JSON does not have the expected data/error shape."""


class UploadRejectedError(UploadError):
    """The server answered but reported an error or omitted data."""

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or "upload rejected")
        self.server_message = message
