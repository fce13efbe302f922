"""Flask extensions initialization (Mail, Limiter) and the registration handler wiring."""
import logging

from flask_mail import Mail
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from backend.intake.audit_log import create_audit_log_store
from backend.intake.services.registration.handler import RegistrationHandler

logger = logging.getLogger(__name__)

# Initialize Flask extensions
mail = Mail()
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["200 per day", "50 per hour"],
    headers_enabled=True,
)


def init_extensions(app, audit_log=None, clock=None):
    """Initialize Flask extensions and attach the registration handler.

    Args:
        app: Flask application instance
        audit_log: Optional AuditLogStore overriding the configured backend
        clock: Optional callable returning the current datetime
    """
    mail.init_app(app)
    limiter.init_app(app)

    if audit_log is None:
        audit_log = create_audit_log_store(app.config)
    app.extensions['audit_log'] = audit_log
    app.extensions['registration_handler'] = RegistrationHandler(
        audit_log,
        min_age=app.config.get('MIN_REGISTRANT_AGE', 18),
        clock=clock,
    )
    logger.info("Audit log backend: %s", audit_log.backend)


def get_registration_handler(app) -> RegistrationHandler:
    return app.extensions['registration_handler']
