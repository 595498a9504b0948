"""Subscription store.

Every function works inside the caller's session and never commits: the
subscription workflow decides where the transaction boundary is.
"""

import logging
import uuid
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.db.models.subscription import Subscription as SubscriptionModel
from app.db.models.subscription import SubscriptionToken as SubscriptionTokenModel
from app.domain import NewSubscriber, SubscriptionStatus
from app.errors import StoreError, TokenStoreError

logger = logging.getLogger(__name__)


def get_subscriber_by_email(db: Session, email: str) -> SubscriptionModel | None:
    """Get a subscriber by email."""
    return db.query(SubscriptionModel).filter(SubscriptionModel.email == email).first()


def get_subscriber_id_from_token(db: Session, token: str) -> uuid.UUID | None:
    """Get the id of the subscriber a token was issued to, or None if unknown."""
    row = (
        db.query(SubscriptionTokenModel.subscriber_id)
        .filter(SubscriptionTokenModel.subscription_token == token)
        .first()
    )
    return row.subscriber_id if row else None


def insert_subscriber(db: Session, new_subscriber: NewSubscriber) -> uuid.UUID:
    """
    Add a new subscriber in the pending_confirmation state and return its id.

    The row is flushed but stays invisible to other sessions until the caller commits.

    Raises:
        StoreError: On constraint violation or datastore failure.
    """
    subscriber_id = uuid.uuid4()
    db_subscriber = SubscriptionModel(
        id=subscriber_id,
        email=new_subscriber.email.value,
        name=new_subscriber.name.value,
        subscribed_at=datetime.now(timezone.utc),
        status=SubscriptionStatus.PENDING_CONFIRMATION.value,
    )
    db.add(db_subscriber)
    try:
        db.flush()
    except SQLAlchemyError as e:
        logger.error("Failed to insert subscriber %s: %s", new_subscriber.email, e)
        raise StoreError("Failed to insert new subscriber") from e
    return subscriber_id


def store_token(db: Session, subscriber_id: uuid.UUID, token: str) -> None:
    """
    Associate a subscription token with a subscriber.

    Raises:
        TokenStoreError: If the token row cannot be written (including a token collision).
    """
    db.add(SubscriptionTokenModel(subscription_token=token, subscriber_id=subscriber_id))
    try:
        db.flush()
    except SQLAlchemyError as e:
        logger.error("Failed to store subscription token for subscriber %s: %s", subscriber_id, e)
        raise TokenStoreError("Failed to store subscription token") from e


def confirm_subscriber(db: Session, token: str) -> bool:
    """
    Mark the subscriber owning ``token`` as confirmed.

    Returns False when the token is unknown. Confirming an already confirmed
    subscriber succeeds and leaves the status unchanged.

    Raises:
        StoreError: On datastore failure.
    """
    token_owner = select(SubscriptionTokenModel.subscriber_id).where(
        SubscriptionTokenModel.subscription_token == token
    )
    try:
        # One UPDATE; an unknown token matches no row.
        updated = (
            db.query(SubscriptionModel)
            .filter(SubscriptionModel.id.in_(token_owner))
            .update(
                {SubscriptionModel.status: SubscriptionStatus.CONFIRMED.value},
                synchronize_session=False,
            )
        )
    except SQLAlchemyError as e:
        logger.error("Failed to confirm subscriber: %s", e)
        raise StoreError("Failed to confirm subscriber") from e
    return updated > 0
