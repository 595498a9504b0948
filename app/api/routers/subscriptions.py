from fastapi import APIRouter, Depends, Form, Query, Response, status
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_email_client
from app.core.config import settings
from app.services.email import EmailClient
from app.services.subscription import confirm, subscribe

router = APIRouter(prefix="/subscriptions", tags=["subscriptions"])


@router.post("", status_code=status.HTTP_200_OK, response_class=Response)
async def create_subscription(
    # Missing fields fall through to domain validation and become a 400.
    name: str = Form(""),
    email: str = Form(""),
    db: Session = Depends(get_db),
    email_client: EmailClient = Depends(get_email_client),
):
    """
    Subscribe to the newsletter.

    The subscriber is stored as pending and a confirmation link is emailed.
    """
    await subscribe(db, email_client, name=name, email=email, base_url=settings.app_base_url)
    return Response(status_code=status.HTTP_200_OK)


@router.get("/confirm", status_code=status.HTTP_200_OK, response_class=Response)
def confirm_subscription(
    subscription_token: str | None = Query(None),
    db: Session = Depends(get_db),
):
    """Confirm a pending subscriber using the token from the confirmation email."""
    confirm(db, subscription_token)
    return Response(status_code=status.HTTP_200_OK)
