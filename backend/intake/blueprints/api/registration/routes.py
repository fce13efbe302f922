"""
Registration API routes.

Purpose: Accept registration form submissions and answer with a JSON result.
Key endpoints:
- POST /: Validate a registration and append it to the audit log

Any other method is accepted by the route and answered with an
"Invalid request method" error in the usual envelope. OPTIONS is the
exception: Flask answers it itself (200 with an Allow header) so CORS
preflight requests never reach the handler.
"""
import logging

from flask import Blueprint, jsonify, request, current_app

from backend.intake.extensions import limiter, get_registration_handler

logger = logging.getLogger(__name__)

registration_bp = Blueprint('registration', __name__)


def _registration_rate_limit():
    return current_app.config.get('REGISTRATION_RATE_LIMIT') or '30 per hour'


@registration_bp.route('', methods=['GET', 'POST', 'PUT', 'PATCH', 'DELETE'], strict_slashes=False)
@limiter.limit(_registration_rate_limit)
def process_registration():
    """
    Process a registration submission.

    Form fields: firstName, lastName, email, phone, address, city, state,
    country, gender, dob, message (optional), terms (presence flag).

    Returns:
        JSON {"success": bool, "message": str}; 400 on validation failure
    """
    try:
        handler = get_registration_handler(current_app)
        result = handler.handle(request.form, request.method)
    except Exception:
        logger.exception("Unhandled error while processing registration")
        return jsonify({
            'success': False,
            'message': 'Error: Internal server error'
        }), 500

    if not result.success:
        return jsonify(result.to_dict()), 400
    return jsonify(result.to_dict())
