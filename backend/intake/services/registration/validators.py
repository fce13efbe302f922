"""Ordered registration validators.

Every validator takes the sanitized registration and the current date and
returns a ``ValidationResult``. The handler runs them in sequence and stops at
the first failure; no validator raises for bad input.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import TYPE_CHECKING, Callable, List, Optional

from dateutil import parser as date_parser
from markupsafe import Markup

if TYPE_CHECKING:
    from .handler import RegistrationInput


class ErrorKind(str, Enum):
    INVALID_METHOD = 'InvalidMethod'
    MISSING_REQUIRED_FIELD = 'MissingRequiredField'
    INVALID_EMAIL = 'InvalidEmail'
    INVALID_PHONE = 'InvalidPhone'
    INVALID_DATE_OF_BIRTH = 'InvalidDateOfBirth'
    UNDERAGE = 'Underage'
    INVALID_NAME_FORMAT = 'InvalidNameFormat'
    INVALID_CITY_FORMAT = 'InvalidCityFormat'


@dataclass(frozen=True)
class ValidationResult:
    ok: bool
    kind: Optional[ErrorKind] = None
    reason: Optional[str] = None

    @classmethod
    def passed(cls) -> 'ValidationResult':
        return cls(True)

    @classmethod
    def failed(cls, kind: ErrorKind, reason: str) -> 'ValidationResult':
        return cls(False, kind, reason)


PASSED = ValidationResult.passed()

REQUIRED_FIELDS = (
    'first_name', 'last_name', 'email', 'phone', 'address',
    'city', 'state', 'country', 'gender', 'dob',
)

EMAIL_RE = re.compile(r"[^@\s]+@[^@\s]+\.[^@\s]+")
PHONE_RE = re.compile(r"[0-9\s()+-]{10,}", re.ASCII)
NAME_RE = re.compile(r"[A-Za-z\s'-]{2,}", re.ASCII)

# Characters removed from the phone number before the format check
_PHONE_STRIP = str.maketrans('', '', ' -()')

DEFAULT_MIN_AGE = 18


def check_method(method: str) -> ValidationResult:
    if method != 'POST':
        return ValidationResult.failed(ErrorKind.INVALID_METHOD, 'Invalid request method')
    return PASSED


def check_required_fields(registration: 'RegistrationInput', today: date) -> ValidationResult:
    missing = [name for name in REQUIRED_FIELDS if not getattr(registration, name)]
    if missing or not registration.terms_accepted:
        return ValidationResult.failed(
            ErrorKind.MISSING_REQUIRED_FIELD, 'All required fields must be filled'
        )
    return PASSED


def is_valid_email(email: str) -> bool:
    if not isinstance(email, str):
        return False
    return bool(EMAIL_RE.fullmatch(email))


def check_email(registration: 'RegistrationInput', today: date) -> ValidationResult:
    if not is_valid_email(registration.email):
        return ValidationResult.failed(ErrorKind.INVALID_EMAIL, 'Invalid email format')
    return PASSED


def normalize_phone(phone: str) -> str:
    """Drop spaces, hyphens and parentheses from a phone number."""
    return phone.translate(_PHONE_STRIP)


def check_phone(registration: 'RegistrationInput', today: date) -> ValidationResult:
    if not PHONE_RE.fullmatch(normalize_phone(registration.phone)):
        return ValidationResult.failed(ErrorKind.INVALID_PHONE, 'Invalid phone number format')
    return PASSED


def parse_date_of_birth(dob: str) -> Optional[date]:
    """Parse a free-form date string, returning None when it is not a date."""
    try:
        return date_parser.parse(dob).date()
    except (ValueError, OverflowError):
        return None


def calculate_age(birth_date: date, today: date) -> int:
    """Age in completed years as of ``today``."""
    age = today.year - birth_date.year
    if (today.month, today.day) < (birth_date.month, birth_date.day):
        age -= 1
    return age


def age_check(min_age: int = DEFAULT_MIN_AGE) -> Callable[['RegistrationInput', date], ValidationResult]:
    """Build the date-of-birth validator for a minimum age.

    The date is parsed once: an unparseable value fails as an invalid date of
    birth before the age is looked at.
    """

    def check_age(registration: 'RegistrationInput', today: date) -> ValidationResult:
        birth_date = parse_date_of_birth(registration.dob)
        if birth_date is None:
            return ValidationResult.failed(ErrorKind.INVALID_DATE_OF_BIRTH, 'Invalid date of birth')
        if calculate_age(birth_date, today) < min_age:
            return ValidationResult.failed(
                ErrorKind.UNDERAGE, f'You must be at least {min_age} years old'
            )
        return PASSED

    return check_age


def is_valid_name(value: str) -> bool:
    # Sanitized values carry entities (O&#39;Brien); match the plain text.
    return bool(NAME_RE.fullmatch(Markup(value).unescape()))


def check_names(registration: 'RegistrationInput', today: date) -> ValidationResult:
    if not is_valid_name(registration.first_name):
        return ValidationResult.failed(ErrorKind.INVALID_NAME_FORMAT, 'Invalid first name format')
    if not is_valid_name(registration.last_name):
        return ValidationResult.failed(ErrorKind.INVALID_NAME_FORMAT, 'Invalid last name format')
    if not is_valid_name(registration.city):
        return ValidationResult.failed(ErrorKind.INVALID_CITY_FORMAT, 'Invalid city format')
    return PASSED


def default_validators(min_age: int = DEFAULT_MIN_AGE) -> List[Callable[['RegistrationInput', date], ValidationResult]]:
    """Validators in the order they must run after sanitation."""
    return [
        check_required_fields,
        check_email,
        check_phone,
        age_check(min_age),
        check_names,
    ]
