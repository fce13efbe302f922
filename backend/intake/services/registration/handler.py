"""Registration handler: sanitize, validate, audit, respond.

The handler is independent of Flask. The HTTP route builds the raw field
mapping from the form and passes it in together with the request method.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Mapping, Optional

from backend.intake.audit_log import AuditLogRecord, AuditLogStore
from .sanitizer import sanitize_input
from .validators import DEFAULT_MIN_AGE, ErrorKind, check_method, default_validators

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = 'Registration submitted successfully!'
TIMESTAMP_FORMAT = '%Y-%m-%d %H:%M:%S'


@dataclass(frozen=True)
class RegistrationInput:
    first_name: str
    last_name: str
    email: str
    phone: str
    address: str
    city: str
    state: str
    country: str
    gender: str
    dob: str
    message: str
    terms_accepted: bool

    @classmethod
    def from_form(cls, raw_input: Mapping[str, str]) -> 'RegistrationInput':
        """Build a sanitized registration from submitted form fields.

        ``terms`` counts as accepted whenever the key is present, even with an
        empty value, which is how browsers submit a checked box without value.
        """
        def field(name):
            return sanitize_input(raw_input.get(name))

        return cls(
            first_name=field('firstName'),
            last_name=field('lastName'),
            email=field('email'),
            phone=field('phone'),
            address=field('address'),
            city=field('city'),
            state=field('state'),
            country=field('country'),
            gender=field('gender'),
            dob=field('dob'),
            message=field('message'),
            terms_accepted='terms' in raw_input,
        )


@dataclass(frozen=True)
class RegistrationResult:
    success: bool
    message: str
    error: Optional[ErrorKind] = None

    @classmethod
    def failure(cls, kind: ErrorKind, reason: str) -> 'RegistrationResult':
        return cls(False, f'Error: {reason}', kind)

    def to_dict(self) -> dict:
        return {'success': self.success, 'message': self.message}


class RegistrationHandler:
    """Run the registration pipeline against an audit log store."""

    def __init__(
        self,
        audit_log: AuditLogStore,
        *,
        min_age: int = DEFAULT_MIN_AGE,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.audit_log = audit_log
        self.clock = clock or datetime.now
        self.validators = default_validators(min_age)

    def handle(self, raw_input: Mapping[str, str], method: str) -> RegistrationResult:
        result = check_method(method)
        if not result.ok:
            return RegistrationResult.failure(result.kind, result.reason)

        registration = RegistrationInput.from_form(raw_input)
        now = self.clock()
        today = now.date()

        for validator in self.validators:
            result = validator(registration, today)
            if not result.ok:
                logger.info(f"Registration rejected: {result.kind.value}")
                return RegistrationResult.failure(result.kind, result.reason)

        # Persisting the registration (e.g. an INSERT into a registrations
        # table) would happen here; this service only keeps the audit log.

        self.audit_log.append(AuditLogRecord(
            firstName=registration.first_name,
            lastName=registration.last_name,
            email=registration.email,
            phone=registration.phone,
            city=registration.city,
            country=registration.country,
            timestamp=now.strftime(TIMESTAMP_FORMAT),
        ))
        logger.info(f"Registration accepted for {registration.email}")

        return RegistrationResult(True, SUCCESS_MESSAGE)
