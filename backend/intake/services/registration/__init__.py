"""Registration intake: sanitation, validation and audit logging."""
from .handler import RegistrationHandler, RegistrationInput, RegistrationResult
from .validators import ErrorKind, ValidationResult

__all__ = [
    'ErrorKind',
    'RegistrationHandler',
    'RegistrationInput',
    'RegistrationResult',
    'ValidationResult',
]
