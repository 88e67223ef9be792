"""Pytest fixtures for testing"""

import asyncio
import itertools
import pytest
from typing import Any, Dict, Generator, List, Optional
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from loanyfy.api.main import create_app
from loanyfy.api.dependencies import get_document_storage
from loanyfy.client.calculator_state import CalculatorState
from loanyfy.client.scheduling import ManualFrameSource
from loanyfy.client.session import SessionState
from loanyfy.domain.models import DocumentSet, UploadDocument
from loanyfy.infrastructure.clients.backend import BackendClient
from loanyfy.infrastructure.database.models import Base
from loanyfy.infrastructure.database.session import get_db
from loanyfy.infrastructure.storage.documents import LocalDocumentStorage


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class FakeBackend(BackendClient):
    """
    In-memory backend double.

    Set `create_gate` / `attach_gate` to an asyncio.Event to hold calls
    in flight until the test releases them.
    """

    def __init__(self) -> None:
        self.events: List[str] = []
        self.create_calls: List[Dict[str, Any]] = []
        self.attach_calls: List[tuple] = []
        self.create_error: Optional[Exception] = None
        self.attach_error: Optional[Exception] = None
        self.create_gate: Optional[asyncio.Event] = None
        self.attach_gate: Optional[asyncio.Event] = None
        self._ids = (f"app-{i}" for i in itertools.count(1))

    async def create_application(self, payload: Dict[str, Any]) -> str:
        self.events.append("create")
        self.create_calls.append(payload)
        if self.create_gate is not None:
            await self.create_gate.wait()
        if self.create_error is not None:
            raise self.create_error
        return next(self._ids)

    async def attach_documents(self, application_id: str, documents: DocumentSet) -> bool:
        self.events.append("attach")
        self.attach_calls.append((application_id, documents))
        if self.attach_gate is not None:
            await self.attach_gate.wait()
        if self.attach_error is not None:
            raise self.attach_error
        return True


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def frames() -> ManualFrameSource:
    return ManualFrameSource()


@pytest.fixture
def session(frames: ManualFrameSource) -> SessionState:
    return SessionState(calculator=CalculatorState(frame_source=frames))


@pytest.fixture
def applicant_form() -> Dict[str, str]:
    return {
        "full_name": "Asha Verma",
        "mobile_phone": "9876543210",
        "email": "asha@example.com",
        "tax_id": "abcde1234f",
    }


@pytest.fixture
def business_form() -> Dict[str, str]:
    return {
        "trade_name": "Verma Traders",
        "vintage": "3-5 years",
        "address": "12 MG Road",
        "pincode": "560001",
        "city": "Bengaluru",
        "state": "Karnataka",
        "constitution_type": "Proprietorship",
        "annual_turnover": "1-5 Cr",
        "industry_type": "Retail",
        "monthly_obligation": "15000",
    }


@pytest.fixture
def documents() -> DocumentSet:
    """One identity document and two bank statements"""
    return DocumentSet(
        identity_doc=UploadDocument("pan card.pdf", b"%PDF-pan", "application/pdf"),
        bank_statements=[
            UploadDocument("jan.pdf", b"%PDF-jan", "application/pdf"),
            UploadDocument("feb.pdf", b"%PDF-feb", "application/pdf"),
        ],
    )


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def app(db: Session, upload_dir) -> FastAPI:
    """FastAPI app wired to the test database and a temporary upload dir"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_document_storage] = lambda: LocalDocumentStorage(upload_dir)
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Create FastAPI test client with test database"""
    return TestClient(app)
