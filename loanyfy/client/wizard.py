"""Four-step loan application wizard"""

import logging
from typing import Any, Callable, List, Mapping, Optional

from loanyfy.client.calculator_state import CalculatorState
from loanyfy.client.scheduling import FrameSource
from loanyfy.client.session import SessionState
from loanyfy.client.submission import ApplicationSubmissionFlow
from loanyfy.client.uploads import DocumentUploadCoordinator
from loanyfy.config import settings
from loanyfy.domain.models import ApplicantProfile, BusinessProfile, DocumentSet
from loanyfy.domain.validation import validate_applicant, validate_business
from loanyfy.infrastructure.clients.backend import BackendClient

logger = logging.getLogger(__name__)

WELCOME, BUSINESS_DETAILS, LOAN_OFFER, COMPLETED = 1, 2, 3, 4
TOTAL_STEPS = 4

STEP_LABELS = {
    WELCOME: "Step 1 of 4 – Welcome",
    BUSINESS_DETAILS: "Step 2 of 4 – Business Details",
    LOAN_OFFER: "Step 3 of 4 – Loan Offer",
    COMPLETED: "Step 4 of 4 – Completed",
}


class LoanWizard:
    """
    Owns one SessionState and moves it through the four steps.

    Step listeners are notified after every step change; presentation
    (transitions, confetti) hooks in there and never gates the flow.
    """

    def __init__(
        self,
        backend: BackendClient,
        frame_source: Optional[FrameSource] = None,
        default_product_type: Optional[str] = settings.default_product_type,
    ):
        self._backend = backend
        self._frame_source = frame_source
        self._default_product_type = default_product_type
        self._step_listeners: List[Callable[[int], None]] = []
        self._start()

    def _start(self) -> None:
        self.session = SessionState(calculator=CalculatorState(frame_source=self._frame_source))
        self.submission = ApplicationSubmissionFlow(self.session, self._backend, on_complete=self._on_submitted)
        self.uploads = DocumentUploadCoordinator(
            self.session,
            self._backend,
            default_product_type=self._default_product_type,
            on_uploaded=self._on_uploaded,
        )
        self.thank_you_name = ""
        self.documents_uploaded = False
        self._show(WELCOME)

    @property
    def calculator(self) -> CalculatorState:
        return self.session.calculator

    @property
    def label(self) -> str:
        return STEP_LABELS[self.step]

    @property
    def progress(self) -> float:
        return self.step / TOTAL_STEPS * 100

    def on_step_change(self, listener: Callable[[int], None]) -> None:
        self._step_listeners.append(listener)

    def _show(self, step: int) -> None:
        self.step = step
        for listener in self._step_listeners:
            listener(step)

    def submit_applicant(self, form: Mapping[str, Any], terms_accepted: bool) -> Optional[ApplicantProfile]:
        """Validate step 1 and move to business details; None outside step 1"""
        if self.step != WELCOME:
            logger.info("Applicant form ignored outside the welcome step", extra={"step": self.step})
            return None
        self.session.applicant = validate_applicant(form, terms_accepted)
        self._show(BUSINESS_DETAILS)
        return self.session.applicant

    def back(self) -> None:
        if self.step == BUSINESS_DETAILS:
            self._show(WELCOME)

    def submit_business(self, form: Mapping[str, Any]) -> Optional[BusinessProfile]:
        """Validate step 2 and move to the loan offer; None outside step 2"""
        if self.step != BUSINESS_DETAILS:
            logger.info("Business form ignored outside the business details step", extra={"step": self.step})
            return None
        self.session.business = validate_business(form)
        self._show(LOAN_OFFER)
        return self.session.business

    def process(self, product_type: str) -> bool:
        """Submit the offer for the chosen product; completion is shown at once"""
        if self.step != LOAN_OFFER:
            logger.info("Process ignored outside the loan offer step", extra={"step": self.step})
            return False
        return self.submission.submit(product_type)

    def _on_submitted(self, product_type: Optional[str]) -> None:
        applicant = self.session.applicant
        self.thank_you_name = (applicant.full_name if applicant else "") or "there"
        self._show(COMPLETED)

    async def upload_documents(self, files: DocumentSet) -> bool:
        """Upload from the completion view; ignored on earlier steps"""
        if self.step != COMPLETED:
            logger.info("Upload ignored before the completion step", extra={"step": self.step})
            return False
        return await self.uploads.submit(files)

    def _on_uploaded(self, application_id: str) -> None:
        self.documents_uploaded = True

    def restart(self) -> None:
        """Drop the current session and start again at step 1"""
        self.session.calculator.close()
        self._start()
