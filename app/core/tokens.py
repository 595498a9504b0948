import secrets
import string

SUBSCRIPTION_TOKEN_LENGTH = 25
_TOKEN_ALPHABET = string.ascii_letters + string.digits


def generate_subscription_token() -> str:
    """Generate a random 25-character alphanumeric subscription token.

    Uniqueness is not checked here; the token table's primary key rejects a
    collision, which surfaces as a token store error.
    """
    return "".join(secrets.choice(_TOKEN_ALPHABET) for _ in range(SUBSCRIPTION_TOKEN_LENGTH))
