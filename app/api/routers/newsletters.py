import logging

from fastapi import APIRouter, Response, status

from app.schemas.newsletter import NewsletterIssue

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/newsletter", tags=["newsletter"])


@router.post("", status_code=status.HTTP_200_OK, response_class=Response)
def publish_newsletter(issue: NewsletterIssue):
    """
    Accept a newsletter issue.

    Delivery to confirmed subscribers is not implemented: the issue is
    validated and acknowledged, and no email is sent.
    """
    logger.info("Received newsletter issue %r; delivery is not implemented", issue.title)
    return Response(status_code=status.HTTP_200_OK)
