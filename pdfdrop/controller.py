"""Upload form controller.

Mediates between the file picker, the selection store, and the upload
endpoint. Every error is converted into a notice; no controller operation
raises.
"""

import logging
import threading
from typing import List, Optional, Sequence

from .client import UploadClient, UploadOutcome
from .errors import (
    EmptyFileListError,
    InvalidFileTypeError,
    NoFileChosenError,
    ResponseShapeError,
    SelectionError,
    UploadRejectedError,
    UploadTransportError,
)
from .notices import (
    FILES_LIST_EMPTY,
    INVALID_PDF,
    NO_FILE_CHOSEN,
    UPLOAD_FAILED,
    Notifier,
)
from .picker import FilePicker
from .state import SelectedFile, SelectionState, SelectionStore

logger = logging.getLogger(__name__)

_SELECTION_NOTICES = {
    NoFileChosenError: NO_FILE_CHOSEN,
    EmptyFileListError: FILES_LIST_EMPTY,
    InvalidFileTypeError: INVALID_PDF,
}


def validate_batch(raw_files: Optional[Sequence[SelectedFile]]) -> Sequence[SelectedFile]:
    """Check that a picker event carries at least one file."""
    if raw_files is None:
        raise NoFileChosenError(NO_FILE_CHOSEN)
    if len(raw_files) == 0:
        raise EmptyFileListError(FILES_LIST_EMPTY)
    return raw_files


def validate_file(file: SelectedFile) -> SelectedFile:
    """Check the declared MIME type of a single picked file."""
    if not file.is_pdf:
        raise InvalidFileTypeError(file.name, file.mime_type)
    return file


class UploadFormController:
    """Owns the selection and runs the add/cancel/submit actions."""

    def __init__(
        self,
        picker: FilePicker,
        client: UploadClient,
        notifier: Notifier,
        store: Optional[SelectionStore] = None,
        invalid_file_policy: str = "abort",
        clear_after_upload: bool = False,
    ):
        self.picker = picker
        self.client = client
        self.notifier = notifier
        self.store = store or SelectionStore()
        self.invalid_file_policy = invalid_file_policy
        self.clear_after_upload = clear_after_upload
        self._submit_lock = threading.Lock()

    @property
    def state(self) -> SelectionState:
        return self.store.state

    @property
    def can_cancel(self) -> bool:
        return not self.state.is_unset

    @property
    def can_submit(self) -> bool:
        return not self.state.is_unset

    @property
    def submitting(self) -> bool:
        return self._submit_lock.locked()

    def _notify_selection_error(self, error: SelectionError) -> None:
        logger.info("Selection rejected: %s", error)
        self.notifier.alert(_SELECTION_NOTICES.get(type(error), str(error)))

    # -- Actions -----------------------------------------------------------

    def add_files(self, raw_files: Optional[Sequence[SelectedFile]]) -> SelectionState:
        """Append the picked files to the selection.

        With the ``abort`` policy the first non-PDF stops the batch; files
        before it stay selected. With ``skip`` every non-PDF is reported and
        the rest are kept. The picker is reset afterwards in every case.
        """
        try:
            for file in validate_batch(raw_files):
                try:
                    validate_file(file)
                except InvalidFileTypeError as e:
                    self._notify_selection_error(e)
                    if self.invalid_file_policy == "skip":
                        continue
                    break
                self.store.append(file)
                logger.info("Selected %s", file.name)
        except SelectionError as e:
            self._notify_selection_error(e)
        finally:
            self.picker.reset()
        return self.state

    def add_from_picker(self) -> SelectionState:
        """Run add_files on whatever the picker currently holds."""
        return self.add_files(self.picker.pick())

    def cancel_selection(self) -> SelectionState:
        """Drop the whole selection. No-op while nothing is selected."""
        if self.state.is_unset:
            return self.state
        logger.info("Selection cleared (%d files)", len(self.state))
        return self.store.clear()

    def submit_selection(self) -> List[UploadOutcome]:
        """Upload every selected file, one request at a time.

        A failure is reported for its file only; later files are still sent
        and earlier successes stand. A submit started while another one is
        running on this controller is ignored.
        """
        if self.state.is_unset:
            return []

        if not self._submit_lock.acquire(blocking=False):
            logger.warning("Upload already in progress; ignoring submit")
            return []

        try:
            files = self.state.files
            outcomes = [self._upload_one(file) for file in files]
        finally:
            self._submit_lock.release()

        if self.clear_after_upload and outcomes and all(o.ok for o in outcomes):
            self.store.clear()
        return outcomes

    def _upload_one(self, file: SelectedFile) -> UploadOutcome:
        try:
            response = self.client.upload(file).raise_for_error()
        except UploadRejectedError as e:
            message = e.server_message or UPLOAD_FAILED
            logger.error("Upload of %s rejected: %s", file.name, message)
            self.notifier.alert(message)
            return UploadOutcome(file=file, error=message)
        except (UploadTransportError, ResponseShapeError) as e:
            logger.error("Upload of %s failed: %s", file.name, e, exc_info=True)
            self.notifier.alert(UPLOAD_FAILED)
            return UploadOutcome(file=file, error=str(e))

        logger.info("File was uploaded successfully: %s -> %s", file.name, ", ".join(response.urls))
        return UploadOutcome(file=file, urls=response.urls)
