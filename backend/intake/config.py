"""Configuration settings and environment variables.

This module loads values from environment variables (including a .env file)
and provides small helpers to safely parse integers and booleans while
stripping inline comments. This avoids crashes when a .env value contains
an inline comment like:

    AUDIT_LOG_MAX_BYTES=1000000 # 1MB cap

The helpers fall back to defaults and emit warnings when parsing fails.
"""

import os
import logging
from typing import Optional
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

_logger = logging.getLogger(__name__)


def _strip_inline_comment(val: str) -> str:
    """Strip an inline comment from a string and trim whitespace/quotes.

    Example: "1000000 # 1MB cap" -> "1000000"
    """
    if val is None:
        return ''
    val = val.split('#', 1)[0]
    val = val.strip()
    if (val.startswith('"') and val.endswith('"')) or (
        val.startswith("'") and val.endswith("'")
    ):
        val = val[1:-1]
    return val


def _get_env(name: str, default: Optional[str] = None) -> Optional[str]:
    raw = os.environ.get(name)
    if raw is None:
        return default
    stripped = _strip_inline_comment(raw)
    return stripped if stripped != '' else default


def _get_int_env(name: str, default: int) -> int:
    raw = _get_env(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except (ValueError, TypeError):
        _logger.warning("Invalid integer for %s: %r, falling back to %s", name, raw, default)
        return default


def _get_bool_env(name: str, default: bool) -> bool:
    raw = _get_env(name)
    if raw is None:
        return default
    return raw.lower() in ['true', '1', 'on', 'yes']


class Config:
    """Base configuration class with default settings."""

    # Flask settings
    SECRET_KEY = _get_env('SECRET_KEY') or 'dev-secret-key-change-in-production'

    # Audit log settings. 'file' writes JSON lines to AUDIT_LOG_PATH,
    # 'memory' keeps them in the worker process only.
    AUDIT_LOG_BACKEND = (_get_env('AUDIT_LOG_BACKEND') or 'file').lower()
    AUDIT_LOG_PATH = _get_env('AUDIT_LOG_PATH') or os.path.join(os.getcwd(), 'registrations_log.txt')
    AUDIT_LOG_MAX_BYTES = _get_int_env('AUDIT_LOG_MAX_BYTES', 1000000)

    # Registration rules
    MIN_REGISTRANT_AGE = _get_int_env('MIN_REGISTRANT_AGE', 18)

    # Mail settings (confirmation email is disabled unless explicitly enabled)
    MAIL_SERVER = _get_env('MAIL_SERVER')
    MAIL_PORT = _get_int_env('MAIL_PORT', 587)
    MAIL_USE_TLS = _get_bool_env('MAIL_USE_TLS', True)
    MAIL_USERNAME = _get_env('MAIL_USERNAME')
    MAIL_PASSWORD = _get_env('MAIL_PASSWORD')
    MAIL_DEFAULT_SENDER = _get_env('MAIL_DEFAULT_SENDER') or 'noreply@registration.com'
    CONFIRMATION_EMAIL_ENABLED = _get_bool_env('CONFIRMATION_EMAIL_ENABLED', False)

    # Rate limiting
    RATELIMIT_ENABLED = _get_bool_env('RATELIMIT_ENABLED', True)
    RATELIMIT_STORAGE_URI = _get_env('RATELIMIT_STORAGE_URL') or 'memory://'
    REGISTRATION_RATE_LIMIT = _get_env('REGISTRATION_RATE_LIMIT') or '30 per hour'


class DevelopmentConfig(Config):
    """Development configuration with debug mode enabled."""
    DEBUG = True
    TESTING = False


class ProductionConfig(Config):
    """Production configuration with security settings."""
    DEBUG = False
    TESTING = False


class TestingConfig(Config):
    """Testing configuration: in-memory audit log, no rate limiting, no mail."""
    TESTING = True
    AUDIT_LOG_BACKEND = 'memory'
    RATELIMIT_ENABLED = False
    CONFIRMATION_EMAIL_ENABLED = False
    MAIL_SUPPRESS_SEND = True


# Configuration mapping
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
