"""Loanyfy API HTTP client for creating applications and attaching documents"""

from abc import ABC, abstractmethod
from typing import Any, Dict

import httpx

from loanyfy.config import settings
from loanyfy.domain.exceptions import SubmissionError, UploadError
from loanyfy.domain.models import DocumentSet


class BackendClient(ABC):
    """Backend operations the wizard depends on"""

    @abstractmethod
    async def create_application(self, payload: Dict[str, Any]) -> str:
        """Create an application record and return its id"""

    @abstractmethod
    async def attach_documents(self, application_id: str, documents: DocumentSet) -> bool:
        """Attach documents to an existing application"""


def _error_detail(response: httpx.Response) -> str:
    try:
        return str(response.json()["detail"])
    except (KeyError, ValueError, TypeError):
        return f"HTTP {response.status_code}"


class HttpBackendClient(BackendClient):
    """Client for the Loanyfy application API"""

    def __init__(
        self,
        base_url: str | None = None,
        create_timeout: float | None = None,
        upload_timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url or settings.api_base
        self.create_timeout = create_timeout or settings.create_timeout_seconds
        self.upload_timeout = upload_timeout or settings.upload_timeout_seconds
        self.transport = transport

    def _client(self, timeout: float) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=self.base_url, timeout=timeout, transport=self.transport)

    async def create_application(self, payload: Dict[str, Any]) -> str:
        """
        POST the application payload.

        Raises:
            SubmissionError: On timeout, transport fault, HTTP errors, or a
                response without an application id
        """
        async with self._client(self.create_timeout) as client:
            try:
                response = await client.post("/api/applications", json=payload)
                response.raise_for_status()
                application_id = response.json()["applicationId"]
                if not application_id:
                    raise ValueError("empty applicationId")
                return str(application_id)

            except httpx.TimeoutException as e:
                raise SubmissionError(f"Create application timeout after {self.create_timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise SubmissionError(f"Create application error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise SubmissionError(f"Loanyfy API unreachable: {e}") from e
            except (KeyError, ValueError, TypeError) as e:
                raise SubmissionError(f"Invalid create application response: {e}") from e

    async def attach_documents(self, application_id: str, documents: DocumentSet) -> bool:
        """
        POST all documents as one multipart request.

        Raises:
            UploadError: On timeout, transport fault, unknown application,
                missing files, or any other non-success status
        """
        files = list(documents.multipart_files())
        async with self._client(self.upload_timeout) as client:
            try:
                response = await client.post(
                    "/api/applications/upload-docs",
                    data={"applicationId": application_id},
                    files=files,
                )
            except httpx.TimeoutException as e:
                raise UploadError(f"Document upload timeout after {self.upload_timeout}s") from e
            except httpx.RequestError as e:
                raise UploadError("We could not upload your documents right now. Please try again in some time.") from e

        if response.status_code == 404:
            raise UploadError("Application not found for given applicationId")
        if response.is_error:
            raise UploadError(f"Document upload failed: {_error_detail(response)}")

        try:
            return bool(response.json().get("success", False))
        except (ValueError, AttributeError) as e:
            raise UploadError(f"Invalid document upload response: {e}") from e
