"""HTTP client for the upload endpoint.

One multipart request per file. The endpoint answers with JSON shaped as
``{"data": {"url": str | [str]} | null, "error": str | null}``.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional

import httpx

from .config import UploadConfig
from .errors import ResponseShapeError, UploadRejectedError, UploadTransportError
from .state import SelectedFile

logger = logging.getLogger(__name__)

_RESPONSE_KEYS = {"data", "error"}


@dataclass(frozen=True)
class UploadResponse:
    """Parsed body of an upload response."""

    data: Optional[dict] = None
    error: Optional[str] = None
    status_code: int = 200

    @property
    def urls(self) -> List[str]:
        if not self.data:
            return []
        url = self.data.get("url")
        return [url] if isinstance(url, str) else list(url)

    @property
    def ok(self) -> bool:
        return not self.error and bool(self.data)

    @classmethod
    def from_payload(cls, payload: Any, status_code: int = 200) -> "UploadResponse":
        """Validate a decoded JSON body. Raises ResponseShapeError on mismatch."""
        if not isinstance(payload, dict):
            raise ResponseShapeError(f"expected a JSON object, got {type(payload).__name__}")

        extra = set(payload) - _RESPONSE_KEYS
        if extra:
            raise ResponseShapeError(f"unexpected fields: {', '.join(sorted(extra))}")

        error = payload.get("error")
        if error is not None and not isinstance(error, str):
            raise ResponseShapeError("'error' must be a string or null")

        data = payload.get("data")
        if data is not None:
            if not isinstance(data, dict):
                raise ResponseShapeError("'data' must be an object or null")
            url = data.get("url")
            is_list = isinstance(url, list) and all(isinstance(u, str) for u in url)
            if not isinstance(url, str) and not is_list:
                raise ResponseShapeError("'data.url' must be a string or a list of strings")

        return cls(data=data, error=error, status_code=status_code)

    def raise_for_error(self) -> "UploadResponse":
        """Raise UploadRejectedError when the server reported a failure."""
        if not self.ok:
            raise UploadRejectedError(self.error or None)
        return self


@dataclass
class UploadOutcome:
    """Result of one file's upload attempt within a submit."""

    file: SelectedFile
    urls: List[str] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class UploadClient:
    """Posts files to the upload endpoint, one request per file."""

    def __init__(self, config: UploadConfig, client: Optional[httpx.Client] = None):
        self.config = config
        self.url = config.upload_url
        self.client = client or httpx.Client(timeout=config.timeout)

    def upload(self, file: SelectedFile) -> UploadResponse:
        """Send one file and return the parsed response.

        Raises UploadTransportError if the request fails or the body is not
        JSON, and ResponseShapeError if the JSON has the wrong shape. A
        server-reported error is returned, not raised.
        """
        files = {self.config.field_name: (file.name, file.data, file.mime_type)}
        logger.debug("POST %s (%s, %d bytes)", self.url, file.name, file.size)

        try:
            response = self.client.post(self.url, files=files)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise UploadTransportError(f"{file.name}: {e}") from e

        logger.debug("%s -> HTTP %d", file.name, response.status_code)
        try:
            payload = response.json()
        except (ValueError, RecursionError) as e:
            raise UploadTransportError(
                f"{file.name}: response is not JSON (HTTP {response.status_code})"
            ) from e

        return UploadResponse.from_payload(payload, status_code=response.status_code)

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> "UploadClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
