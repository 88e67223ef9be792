"""Document upload for the completion step"""

import logging
from typing import Callable, Optional

from loanyfy.client.session import SessionState
from loanyfy.config import settings
from loanyfy.domain.exceptions import SubmissionError, UploadError
from loanyfy.domain.models import DocumentSet
from loanyfy.infrastructure.clients.backend import BackendClient

logger = logging.getLogger(__name__)


class DocumentUploadCoordinator:
    """Makes sure an application exists, then sends all documents in one request"""

    def __init__(
        self,
        session: SessionState,
        backend: BackendClient,
        default_product_type: Optional[str] = settings.default_product_type,
        on_uploaded: Optional[Callable[[str], None]] = None,
    ):
        self.session = session
        self.backend = backend
        self.default_product_type = default_product_type
        self.on_uploaded = on_uploaded

    async def ensure_application_id(self, default_product_type: Optional[str] = None) -> str:
        """
        Return the session's application id, creating the application if needed.

        Holds the session id lock for the whole check-then-create, so a
        background create already in flight finishes first and its id is
        reused.

        Raises:
            SubmissionError: when the create call fails
        """
        async with self.session.id_lock:
            if self.session.application_id is not None:
                return self.session.application_id

            logger.info("No application id yet, creating before upload", extra={"step": "upload"})
            payload = self.session.build_payload(default_product_type)
            application_id = await self.backend.create_application(payload)
            return self.session.assign_application_id(application_id)

    async def submit(self, files: DocumentSet) -> bool:
        """
        Upload the selected documents.

        Returns False when another upload is still in flight.

        Raises:
            UploadError: no documents selected, no application id, or the
                attach call failed. Session state is left as it was.
        """
        if self.session.upload_in_flight:
            logger.info("Upload already in flight, ignoring", extra={"step": "upload"})
            return False
        if not len(files):
            raise UploadError("Please select at least one document to upload.", retryable=False)

        self.session.upload_in_flight = True
        try:
            try:
                application_id = await self.ensure_application_id(self.default_product_type)
            except SubmissionError as e:
                raise UploadError("We could not register your application. Please try again.") from e

            if not await self.backend.attach_documents(application_id, files):
                raise UploadError("There was an issue uploading your documents. Please try again.")
        except UploadError as e:
            logger.warning(f"Document upload failed: {e}", extra={"step": "upload"})
            raise
        finally:
            self.session.upload_in_flight = False

        logger.info(
            "Documents uploaded",
            extra={"step": "upload", "application_id": application_id, "document_count": len(files)},
        )
        if self.on_uploaded is not None:
            self.on_uploaded(application_id)
        return True
