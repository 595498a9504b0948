from __future__ import annotations

from dataclasses import dataclass

from email_validator import EmailNotValidError, validate_email

from app.errors import DomainValidationError


@dataclass(frozen=True, slots=True)
class SubscriberEmail:
    """A syntactically valid email address (local-part@domain.tld)."""

    value: str

    @classmethod
    def parse(cls, raw: str) -> SubscriberEmail:
        # Same validator pydantic's EmailStr delegates to, minus the
        # "Display Name <addr>" form which is not an address.
        # test_environment lets the reserved .test domain through.
        try:
            validated = validate_email(raw, check_deliverability=False, test_environment=True)
        except EmailNotValidError as e:
            raise DomainValidationError(f"{raw!r} is not a valid subscriber email.") from e

        # test_environment also admits a bare "test" domain; a dotted domain is still required.
        if "." not in validated.ascii_domain:
            raise DomainValidationError(f"{raw!r} is not a valid subscriber email.")
        return cls(raw)

    def __str__(self) -> str:
        return self.value
