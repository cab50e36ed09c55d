from typing import Generator
from fastapi import Depends
from sqlalchemy.orm import Session

from app.db.session import SessionLocal
from app.services.evidence_service import EvidenceService
from app.services.user_service import UserService
from app.services.storage import FilecoinStorage


def get_db() -> Generator[Session, None, None]:
    """
    Yields a DB session per request.
    Ensures the session is closed even on exceptions.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_storage() -> FilecoinStorage:
    """
    Provides the Filecoin storage service.
    Overridable via app.dependency_overrides so tests never reach the network.
    """
    return FilecoinStorage()


def get_evidence_service(
    db: Session = Depends(get_db),
    storage: FilecoinStorage = Depends(get_storage),
) -> EvidenceService:
    return EvidenceService(db=db, storage=storage)


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(db=db)
