"""Unit tests for document upload coordination"""

import asyncio
import pytest
from loanyfy.client.session import SessionState
from loanyfy.client.submission import ApplicationSubmissionFlow
from loanyfy.client.uploads import DocumentUploadCoordinator
from loanyfy.domain.exceptions import SubmissionError, UploadError
from loanyfy.domain.models import DocumentSet, TERM_LOAN


@pytest.fixture
def uploaded():
    return []


@pytest.fixture
def coordinator(session: SessionState, backend, uploaded) -> DocumentUploadCoordinator:
    return DocumentUploadCoordinator(session, backend, default_product_type=None, on_uploaded=uploaded.append)


async def test_ensure_application_id_is_idempotent(coordinator, session, backend):
    session.application_id = "app-existing"

    assert await coordinator.ensure_application_id() == "app-existing"
    assert await coordinator.ensure_application_id() == "app-existing"
    assert backend.create_calls == []


async def test_ensure_application_id_creates_once(coordinator, session, backend):
    first = await coordinator.ensure_application_id(TERM_LOAN)
    second = await coordinator.ensure_application_id(TERM_LOAN)

    assert first == second == "app-1"
    assert len(backend.create_calls) == 1
    assert backend.create_calls[0]["productType"] == "Term Loan"


async def test_ensure_application_id_propagates_failure(coordinator, session, backend):
    backend.create_error = SubmissionError("Create application error: 503")

    with pytest.raises(SubmissionError):
        await coordinator.ensure_application_id()

    assert session.application_id is None


async def test_upload_without_prior_submit_creates_first(coordinator, session, backend, documents, uploaded):
    assert await coordinator.submit(documents) is True

    assert backend.events == ["create", "attach"]
    assert backend.attach_calls[0][0] == "app-1"
    assert uploaded == ["app-1"]


async def test_upload_reuses_existing_id(coordinator, session, backend, documents, uploaded):
    session.application_id = "app-existing"

    await coordinator.submit(documents)

    assert backend.create_calls == []
    application_id, sent = backend.attach_calls[0]
    assert application_id == "app-existing"
    assert len(sent) == 3


async def test_zero_documents_rejected_before_network(coordinator, backend, uploaded):
    with pytest.raises(UploadError) as exc:
        await coordinator.submit(DocumentSet())

    assert exc.value.retryable is False
    assert backend.events == []
    assert uploaded == []


async def test_create_failure_surfaces_as_upload_error(coordinator, session, backend, documents):
    backend.create_error = SubmissionError("timeout")

    with pytest.raises(UploadError) as exc:
        await coordinator.submit(documents)

    assert isinstance(exc.value.__cause__, SubmissionError)
    assert exc.value.retryable
    assert backend.attach_calls == []
    assert not session.upload_in_flight


async def test_attach_failure_allows_manual_retry(coordinator, session, backend, documents, uploaded):
    backend.attach_error = UploadError("Document upload failed: HTTP 502")

    with pytest.raises(UploadError):
        await coordinator.submit(documents)

    assert session.application_id == "app-1"
    assert not session.upload_in_flight
    assert uploaded == []

    backend.attach_error = None
    assert await coordinator.submit(documents) is True

    assert len(backend.create_calls) == 1
    assert [call[0] for call in backend.attach_calls] == ["app-1", "app-1"]
    assert uploaded == ["app-1"]


async def test_concurrent_upload_is_rejected(coordinator, session, backend, documents):
    session.application_id = "app-existing"
    backend.attach_gate = asyncio.Event()

    first = asyncio.create_task(coordinator.submit(documents))
    await asyncio.sleep(0)

    assert session.upload_in_flight
    assert await coordinator.submit(documents) is False

    backend.attach_gate.set()
    assert await first is True
    assert len(backend.attach_calls) == 1


async def test_upload_during_background_create_reuses_its_id(session, backend, coordinator, documents):
    """Submit then upload before the create resolves: one record, one id"""
    flow = ApplicationSubmissionFlow(session, backend)
    backend.create_gate = asyncio.Event()

    flow.submit(TERM_LOAN)
    upload = asyncio.create_task(coordinator.submit(documents))
    await asyncio.sleep(0)
    assert backend.attach_calls == []

    backend.create_gate.set()
    await flow.pending
    assert await upload is True

    assert len(backend.create_calls) == 1
    assert backend.attach_calls[0][0] == session.application_id == "app-1"


async def test_failed_background_create_is_retried_lazily(session, backend, coordinator, documents):
    flow = ApplicationSubmissionFlow(session, backend)
    backend.create_error = SubmissionError("Create application error: 500")
    flow.submit(TERM_LOAN)
    await flow.pending
    assert session.application_id is None

    backend.create_error = None
    await coordinator.submit(documents)

    assert len(backend.create_calls) == 2
    assert session.application_id == "app-1"
    assert backend.attach_calls[0][0] == "app-1"
