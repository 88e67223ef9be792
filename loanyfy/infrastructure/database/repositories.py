"""Data access layer for loan applications"""

import uuid
from typing import Any, Dict, Optional
from sqlalchemy import update
from sqlalchemy.orm import Session
from loanyfy.infrastructure.database.models import LoanApplication


class ApplicationRepository:
    """Repository for loan applications"""

    def __init__(self, db: Session):
        self.db = db

    def create_application(
        self,
        full_name: str,
        mobile: str,
        business: Dict[str, Any],
        calculator: Dict[str, Any],
        **applicant: Any,
    ) -> LoanApplication:
        """Persist a new application"""
        db_application = LoanApplication(
            full_name=full_name,
            mobile=mobile,
            business=business,
            calculator=calculator,
            **applicant,
        )
        self.db.add(db_application)
        self.db.flush()  # Get ID without committing
        return db_application

    def get_application(self, application_id: uuid.UUID) -> Optional[LoanApplication]:
        return self.db.get(LoanApplication, application_id)

    def attach_documents(self, application_id: uuid.UUID, documents: Dict[str, Any]) -> bool:
        """
        Set only the given document columns.

        Issued as a column-level UPDATE so slots not in `documents` keep
        whatever an earlier upload stored.

        Returns:
            False when no application has this id
        """
        result = self.db.execute(
            update(LoanApplication)
            .where(LoanApplication.id == application_id)
            .values(**documents)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount > 0
