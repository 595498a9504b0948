"""Custom domain exceptions for the application."""

# Stable, machine-readable error codes, used as log context.
VALIDATION_ERROR = "VALIDATION_ERROR"
SUBSCRIPTION_FAILED = "SUBSCRIPTION_FAILED"


class DomainError(Exception):
    """Base exception for domain/business logic errors."""

    pass


class DomainValidationError(DomainError):
    """Raised when client input fails domain validation (e.g. invalid name or email)."""

    pass


class MissingTokenError(DomainValidationError):
    """Raised when a confirmation request carries no subscription token."""

    pass


class UnknownTokenError(DomainValidationError):
    """Raised when a subscription token does not resolve to any subscriber."""

    pass


class StoreError(DomainError):
    """Raised by the subscription store on constraint violations or connectivity failures."""

    pass


class TokenStoreError(StoreError):
    """Raised when a subscription token cannot be stored."""

    pass


class NotifierError(DomainError):
    """Raised when the email API rejects a request or cannot be reached."""

    pass


class SubscriptionFailedError(DomainError):
    """Base for server-side workflow failures. The causing error is chained via ``__cause__``."""

    stage = "subscription"


class PoolError(SubscriptionFailedError):
    stage = "acquire a database connection"


class InsertSubscriberError(SubscriptionFailedError):
    stage = "insert new subscriber"


class StoreTokenError(SubscriptionFailedError):
    stage = "store subscription token"


class TransactionCommitError(SubscriptionFailedError):
    stage = "commit new subscriber transaction"


class SendEmailError(SubscriptionFailedError):
    stage = "send confirmation email"


class ConfirmSubscriberError(SubscriptionFailedError):
    stage = "confirm subscriber"


def error_chain_fmt(exc: BaseException) -> str:
    """Render an exception followed by every exception in its cause chain."""
    lines = [f"{type(exc).__name__}: {exc}"]
    seen = {id(exc)}
    current = _cause_of(exc)
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        lines.append(f"Caused by:\n\t{type(current).__name__}: {current}")
        current = _cause_of(current)
    return "\n".join(lines)


def _cause_of(exc: BaseException) -> BaseException | None:
    if exc.__cause__ is not None:
        return exc.__cause__
    if exc.__suppress_context__:
        return None
    return exc.__context__
