from fastapi import Request

from app.db.base import SessionLocal
from app.services.email import EmailClient


def get_db():
    # Closing the session rolls back anything left uncommitted, including
    # when the client goes away mid-request.
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_email_client(request: Request) -> EmailClient:
    """Borrow the process-wide email client created at startup."""
    return request.app.state.email_client
