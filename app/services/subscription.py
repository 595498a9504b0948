"""Subscription service: sign-up with confirmation email, and token redemption."""

import logging
from urllib.parse import urlencode

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

import app.repositories.subscription as subscription_repo
from app.core.tokens import generate_subscription_token
from app.domain import NewSubscriber, SubscriberEmail, SubscriberName
from app.errors import (
    ConfirmSubscriberError,
    InsertSubscriberError,
    MissingTokenError,
    NotifierError,
    PoolError,
    SendEmailError,
    StoreError,
    StoreTokenError,
    SubscriptionFailedError,
    TransactionCommitError,
    UnknownTokenError,
    error_chain_fmt,
)
from app.services.email import EmailClient

logger = logging.getLogger(__name__)

CONFIRMATION_PATH = "/subscriptions/confirm"
CONFIRMATION_SUBJECT = "Welcome!"


def parse_new_subscriber(name: str, email: str) -> NewSubscriber:
    """
    Turn raw form fields into a NewSubscriber.

    Raises:
        DomainValidationError: If the name or the email is invalid.
    """
    return NewSubscriber(email=SubscriberEmail.parse(email), name=SubscriberName.parse(name))


def build_confirmation_link(base_url: str, subscription_token: str) -> str:
    query = urlencode({"subscription_token": subscription_token})
    return f"{base_url.rstrip('/')}{CONFIRMATION_PATH}?{query}"


def _log_failure(error: SubscriptionFailedError, cause: BaseException) -> SubscriptionFailedError:
    error.__cause__ = cause
    logger.error("Failed to %s\n%s", error.stage, error_chain_fmt(error))
    return error


def _fail(db: Session, error: SubscriptionFailedError, cause: BaseException) -> SubscriptionFailedError:
    """Roll back the open transaction and log the failure with its cause chain."""
    db.rollback()
    return _log_failure(error, cause)


def _persist_new_subscriber(db: Session, new_subscriber: NewSubscriber) -> str:
    """
    Insert the subscriber and its token in one transaction and commit.

    Nothing is left behind when any step fails. Returns the subscription token.
    """
    try:
        db.connection()
    except SQLAlchemyError as e:
        raise _fail(db, PoolError("Failed to acquire a database connection"), e) from e

    try:
        subscriber_id = subscription_repo.insert_subscriber(db, new_subscriber)
    except StoreError as e:
        raise _fail(db, InsertSubscriberError("Failed to insert new subscriber"), e) from e

    subscription_token = generate_subscription_token()
    try:
        subscription_repo.store_token(db, subscriber_id, subscription_token)
    except StoreError as e:
        raise _fail(db, StoreTokenError("Failed to store the subscription token"), e) from e

    try:
        db.commit()
    except SQLAlchemyError as e:
        raise _fail(
            db, TransactionCommitError("Failed to commit the new subscriber transaction"), e
        ) from e

    logger.info("Stored new subscriber %s as pending confirmation", subscriber_id)
    return subscription_token


async def send_confirmation_email(
    email_client: EmailClient,
    recipient: SubscriberEmail,
    confirmation_link: str,
) -> None:
    """Send the welcome email. Both bodies carry the confirmation link exactly once."""
    html_body = (
        "Welcome to our newsletter!<br />"
        f'Click <a href="{confirmation_link}">here</a> to confirm your subscription.'
    )
    text_body = (
        "Welcome to our newsletter!\n"
        f"Visit {confirmation_link} to confirm your subscription."
    )
    await email_client.send_email(recipient, CONFIRMATION_SUBJECT, html_body, text_body)


async def subscribe(
    db: Session,
    email_client: EmailClient,
    name: str,
    email: str,
    base_url: str,
) -> str:
    """
    Register a new subscriber and email them a confirmation link.

    - Validates name and email
    - Persists subscriber (pending_confirmation) and token atomically
    - Sends the confirmation email after the commit

    A failed email does not undo the commit: the subscriber stays pending.

    Returns:
        The confirmation link that was emailed.

    Raises:
        DomainValidationError: If the name or the email is invalid.
        SubscriptionFailedError: On persistence or email failure (see subclasses).
    """
    new_subscriber = parse_new_subscriber(name, email)
    logger.info("Adding a new subscriber: %s", new_subscriber.email)

    # Blocking Session calls run in the threadpool so other requests keep being served.
    subscription_token = await run_in_threadpool(_persist_new_subscriber, db, new_subscriber)
    confirmation_link = build_confirmation_link(base_url, subscription_token)

    try:
        await send_confirmation_email(email_client, new_subscriber.email, confirmation_link)
    except NotifierError as e:
        raise _log_failure(SendEmailError("Failed to send a confirmation email"), e) from e

    logger.info("New subscriber %s is awaiting confirmation", new_subscriber.email)
    return confirmation_link


def confirm(db: Session, subscription_token: str | None) -> None:
    """
    Confirm the subscriber a token was issued to.

    Visiting the same link again is not an error.

    Raises:
        MissingTokenError: If no token was supplied.
        UnknownTokenError: If the token does not belong to any subscriber.
        ConfirmSubscriberError: On datastore failure.
    """
    if not subscription_token:
        raise MissingTokenError("Missing subscription token")

    logger.info("Confirming a pending subscriber")
    try:
        found = subscription_repo.confirm_subscriber(db, subscription_token)
        if found:
            db.commit()
    except (StoreError, SQLAlchemyError) as e:
        raise _fail(db, ConfirmSubscriberError("Failed to confirm subscriber"), e) from e

    if not found:
        raise UnknownTokenError("Unknown subscription token")
    logger.info("Subscriber confirmed")
