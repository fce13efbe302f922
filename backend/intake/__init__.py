"""Flask application factory and initialization."""
import logging

from flask import Flask, jsonify
from backend.intake.config import Config
from backend.intake.extensions import init_extensions

logger = logging.getLogger(__name__)


def create_app(config_class=Config, audit_log=None, clock=None):
    """Create and configure the Flask application.

    Args:
        config_class: Configuration class to use
        audit_log: Optional AuditLogStore to use instead of the configured one
        clock: Optional callable returning the current datetime

    Returns:
        Flask: Configured Flask application instance
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    init_extensions(app, audit_log=audit_log, clock=clock)

    @app.route('/api/health')
    def health_check():
        """Health check endpoint."""
        return jsonify({
            "status": "ok",
            "service": "registration-intake-api",
            "audit_log": app.extensions['audit_log'].backend,
        })

    @app.errorhandler(429)
    def rate_limited(error):
        return jsonify({
            "success": False,
            "message": f"Error: Too many requests ({error.description})",
        }), 429

    register_blueprints(app)

    # Add CORS headers so the registration form can post from another origin
    @app.after_request
    def after_request(response):
        response.headers['Access-Control-Allow-Origin'] = '*'
        response.headers['Access-Control-Allow-Methods'] = 'GET, POST, OPTIONS'
        response.headers['Access-Control-Allow-Headers'] = 'Content-Type'
        return response

    return app


def register_blueprints(app):
    """Register Flask blueprints with the application.

    Args:
        app: Flask application instance
    """
    # Import blueprints here to avoid circular imports
    from backend.intake.blueprints.api.registration.routes import registration_bp, process_registration

    app.register_blueprint(registration_bp, url_prefix='/api/registration')

    # Legacy form action kept as an alias of the same view
    app.add_url_rule(
        '/process_registration',
        endpoint='process_registration_legacy',
        view_func=process_registration,
        methods=['GET', 'POST', 'PUT', 'PATCH', 'DELETE'],
    )
