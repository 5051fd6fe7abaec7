"""pdfdrop - select PDF files and upload each one to a server endpoint."""

__version__ = "0.1.0"

from .cli import cli, PdfDropApp
from .client import UploadClient, UploadOutcome, UploadResponse
from .config import ConfigManager, UploadConfig
from .controller import UploadFormController
from .picker import FilePicker, PathPicker
from .state import SelectedFile, SelectionState, SelectionStore

__all__ = [
    "cli",
    "PdfDropApp",
    "UploadClient",
    "UploadOutcome",
    "UploadResponse",
    "ConfigManager",
    "UploadConfig",
    "UploadFormController",
    "FilePicker",
    "PathPicker",
    "SelectedFile",
    "SelectionState",
    "SelectionStore",
]
