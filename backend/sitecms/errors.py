import logging
from flask import jsonify
from werkzeug.exceptions import HTTPException
from sitecms.domain.invariants.exceptions import InvariantViolation
from sitecms.persistence.bridge import PersistenceError
from sitecms.application.list_editor import DeleteNotConfirmed

logger = logging.getLogger(__name__)

def register_error_handlers(app):
    @app.errorhandler(InvariantViolation)
    def handle_invariant_violation(error):
        response = jsonify({
            "error": "InvariantViolation",
            "message": str(error)
        })
        response.status_code = 400
        return response

    @app.errorhandler(DeleteNotConfirmed)
    def handle_delete_not_confirmed(error):
        response = jsonify({
            "error": "DeleteNotConfirmed",
            "message": str(error),
            "record_id": error.record_id,
        })
        response.status_code = 428
        return response

    @app.errorhandler(PersistenceError)
    def handle_persistence_error(error):
        logger.warning("Returning 503 for settings key %r: %s", error.key, error)
        response = jsonify({
            "error": "PersistenceError",
            "message": str(error),
            "key": error.key,
            "retryable": True,
        })
        response.status_code = 503
        return response

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        response = jsonify({
            "error": error.name,
            "message": error.description,
        })
        response.status_code = error.code
        return response
