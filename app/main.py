from contextlib import asynccontextmanager

from fastapi import FastAPI, Response, status

from app.api.exception_handlers import register_exception_handlers
from app.api.router import api_router
from app.core.config import settings
from app.core.logging import configure_logging
from app.domain import SubscriberEmail
from app.services.email import EmailClient

configure_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # One email client per process, borrowed by every request.
    app.state.email_client = EmailClient(
        base_url=settings.email_base_url,
        sender=SubscriberEmail.parse(settings.email_sender),
        authorization_token=settings.email_authorization_token,
        timeout=settings.email_timeout_seconds,
    )
    try:
        yield
    finally:
        await app.state.email_client.aclose()


app = FastAPI(lifespan=lifespan)

register_exception_handlers(app)
app.include_router(api_router)


@app.get("/health-check", response_class=Response)
def health_check():
    return Response(status_code=status.HTTP_200_OK)
