"""POST /api/applications and /api/applications/upload-docs"""

import uuid
import logging
from typing import Any, Dict, List, Optional
from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile
from sqlalchemy.orm import Session

from loanyfy.api.v1.schemas import ApplicationCreate, ApplicationCreated, DocumentsUploaded
from loanyfy.api.dependencies import get_document_storage, get_request_id
from loanyfy.infrastructure.database.session import get_db
from loanyfy.infrastructure.database.repositories import ApplicationRepository
from loanyfy.infrastructure.storage.documents import LocalDocumentStorage
from loanyfy.infrastructure.observability.metrics import record_application, record_upload
from loanyfy.infrastructure.observability.logging import log_application_event

router = APIRouter()

MAX_BANK_STATEMENTS = 20


@router.post("/applications", response_model=ApplicationCreated, status_code=201)
def create_application(
    body: ApplicationCreate,
    request: Request,
    db: Session = Depends(get_db),
):
    """
    Create an application from wizard steps 1-3.

    Documents are attached later through /applications/upload-docs
    using the returned applicationId.
    """
    request_id = get_request_id(request)

    try:
        repo = ApplicationRepository(db)
        application = repo.create_application(
            full_name=body.full_name,
            mobile=body.mobile,
            email=body.email,
            pan_number=body.pan_number,
            alt_mobile=body.alt_mobile,
            dob=body.dob,
            aadhaar_number=body.aadhaar_number,
            product_type=body.product_type,
            business=body.business.model_dump(by_alias=True, exclude_none=True),
            calculator=body.calculator.model_dump(by_alias=True, exclude_none=True),
        )
        db.commit()

    except Exception as e:
        db.rollback()
        logging.error(f"Create application error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Server error")

    application_id = str(application.id)
    record_application(body.product_type)
    log_application_event(request_id, application_id, "created", product_type=body.product_type)

    return ApplicationCreated(id=application_id, application_id=application_id)


@router.post("/applications/upload-docs", response_model=DocumentsUploaded)
def upload_documents(
    request: Request,
    application_id: Optional[str] = Form(default=None, alias="applicationId"),
    identity_doc: Optional[UploadFile] = File(default=None, alias="identityDoc"),
    address_doc: Optional[UploadFile] = File(default=None, alias="addressDoc"),
    business_registration_doc: Optional[UploadFile] = File(default=None, alias="businessRegistrationDoc"),
    utility_bill_doc: Optional[UploadFile] = File(default=None, alias="utilityBillDoc"),
    bank_statement_doc: Optional[List[UploadFile]] = File(default=None, alias="bankStatementDoc"),
    db: Session = Depends(get_db),
    storage: LocalDocumentStorage = Depends(get_document_storage),
):
    """
    Store uploaded documents and link them to an application.

    Only the slots present in this request are written; documents
    attached by earlier uploads are kept.
    """
    request_id = get_request_id(request)

    if not application_id:
        record_upload("missing_id")
        raise HTTPException(status_code=400, detail="applicationId is required to attach documents")

    single_slots = {
        "identity_doc": identity_doc,
        "address_doc": address_doc,
        "business_registration_doc": business_registration_doc,
        "utility_bill_doc": utility_bill_doc,
    }
    single_slots = {slot: f for slot, f in single_slots.items() if f is not None}
    bank_statements = bank_statement_doc or []

    if not single_slots and not bank_statements:
        record_upload("empty")
        raise HTTPException(status_code=400, detail="No documents received to upload")
    if len(bank_statements) > MAX_BANK_STATEMENTS:
        record_upload("too_many")
        raise HTTPException(status_code=400, detail=f"At most {MAX_BANK_STATEMENTS} bank statements per upload")

    repo = ApplicationRepository(db)
    try:
        application_uuid = uuid.UUID(application_id)
    except ValueError:
        application_uuid = None
    if application_uuid is None or repo.get_application(application_uuid) is None:
        record_upload("not_found")
        raise HTTPException(status_code=404, detail="Application not found for given applicationId")

    saved: List[str] = []

    def save(upload: UploadFile) -> str:
        path = storage.save(upload.filename, upload.file)
        saved.append(path)
        return path

    try:
        documents: Dict[str, Any] = {slot: save(upload) for slot, upload in single_slots.items()}
        if bank_statements:
            documents["bank_statements"] = [save(f) for f in bank_statements]

        if not repo.attach_documents(application_uuid, documents):
            db.rollback()
            storage.discard(saved)
            record_upload("not_found")
            raise HTTPException(status_code=404, detail="Application not found for given applicationId")
        db.commit()

    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        storage.discard(saved)
        record_upload("error")
        logging.error(f"Upload docs error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Server error while uploading documents")

    record_upload("success", documents)
    log_application_event(request_id, application_id, "documents_attached", slots=sorted(documents))

    return DocumentsUploaded(message="Documents uploaded & linked to application")
