"""Optimistic create-application flow for the loan offer step"""

import asyncio
import enum
import logging
from typing import Any, Callable, Dict, Optional, Set

from loanyfy.client.session import SessionState
from loanyfy.domain.exceptions import SubmissionError
from loanyfy.infrastructure.clients.backend import BackendClient

logger = logging.getLogger(__name__)

# Strong references to background creates; the event loop only keeps weak ones
_background_creates: Set[asyncio.Task] = set()


class SubmissionState(str, enum.Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    COMPLETED = "completed"


class ApplicationSubmissionFlow:
    """
    Advance the user to the completion view, then create the application
    in the background.

    Flow:
    1. Reject the trigger unless the flow is idle and no id exists yet
    2. Build the payload from the session
    3. Call on_complete immediately (no wait for the network)
    4. Create the application in a background task, holding the session's
       id lock so a concurrent upload waits for the result
    5. On failure log and leave the id unset; upload creates it lazily
    """

    def __init__(
        self,
        session: SessionState,
        backend: BackendClient,
        on_complete: Optional[Callable[[Optional[str]], None]] = None,
    ):
        self.session = session
        self.backend = backend
        self.on_complete = on_complete
        self.state = SubmissionState.IDLE
        self.pending: Optional[asyncio.Task] = None

    def submit(self, product_type: Optional[str]) -> bool:
        """Trigger submission; returns False when the trigger is ignored"""
        if (
            self.state is not SubmissionState.IDLE
            or self.session.submission_in_flight
            or self.session.application_id is not None
        ):
            logger.info("Submission already triggered, ignoring", extra={"step": "submit", "state": self.state.value})
            return False

        payload = self.session.build_payload(product_type)
        self.session.submission_in_flight = True
        self.state = SubmissionState.SUBMITTING
        self.pending = asyncio.get_running_loop().create_task(self._create(payload))
        _background_creates.add(self.pending)
        self.pending.add_done_callback(_background_creates.discard)

        if self.on_complete is not None:
            self.on_complete(product_type)
        return True

    async def _create(self, payload: Dict[str, Any]) -> None:
        try:
            async with self.session.id_lock:
                if self.session.application_id is None:
                    application_id = await self.backend.create_application(payload)
                    self.session.assign_application_id(application_id)
        except SubmissionError as e:
            logger.warning(f"Background application create failed: {e}", extra={"step": "submit"})
        finally:
            self.session.submission_in_flight = False
            self.state = SubmissionState.COMPLETED
