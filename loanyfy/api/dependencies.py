"""Dependency injection for FastAPI endpoints"""

from fastapi import Request
from loanyfy.infrastructure.storage.documents import LocalDocumentStorage


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_document_storage() -> LocalDocumentStorage:
    """Provide disk storage for uploaded documents"""
    return LocalDocumentStorage()
