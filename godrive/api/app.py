"""Flask application factory for the GoDrive REST API."""

import logging
from typing import Optional

from flask import Flask, jsonify, request
from flask_cors import CORS

from godrive.api.parsing import MissingFieldsError
from godrive.api.routes import api
from godrive.errors import (
    AlreadyExistsError, GoDriveError, InvalidArgumentError,
    InvalidTransitionError, NotFoundError, StorageError,
)
from godrive.repositories import Repository, create_repository
from godrive.services import LockRegistry, QueryService, RideService

logger = logging.getLogger(__name__)

# Checked in order; the first matching class decides the status code
ERROR_STATUS_CODES = [
    (NotFoundError, 404),
    (AlreadyExistsError, 409),
    (InvalidTransitionError, 409),
    (InvalidArgumentError, 400),
    (StorageError, 502),
]


def status_code_for(error: GoDriveError) -> int:
    for error_type, status in ERROR_STATUS_CODES:
        if isinstance(error, error_type):
            return status
    return 500


def create_app(repository: Optional[Repository] = None) -> Flask:
    """
    Build the GoDrive API.

    Args:
        repository: Storage backend; built from configuration when omitted

    Returns:
        Flask: The configured application
    """
    repository = repository or create_repository()
    app = Flask(__name__)
    CORS(app)

    app.extensions["godrive"] = {
        "repository": repository,
        "rides": RideService(repository, LockRegistry()),
        "queries": QueryService(repository),
    }
    app.register_blueprint(api)

    @app.errorhandler(GoDriveError)
    def handle_domain_error(error):
        status = status_code_for(error)
        if status >= 500:
            logger.error(f"{request.method} {request.path} failed: {str(error)}")
        else:
            logger.warning(f"{request.method} {request.path} rejected: {str(error)}")
        body = {"error": type(error).__name__, "message": str(error)}
        if isinstance(error, MissingFieldsError):
            body["required"] = error.required
            body["missing"] = error.missing
        return jsonify(body), status

    @app.errorhandler(404)
    def handle_unknown_route(error):
        return jsonify({"error": "Route not found", "path": request.path,
                        "method": request.method}), 404

    @app.errorhandler(405)
    def handle_wrong_method(error):
        return jsonify({"error": "Method not allowed", "path": request.path,
                        "method": request.method}), 405

    @app.errorhandler(500)
    def handle_internal_error(error):
        logger.exception(f"Unhandled error on {request.method} {request.path}")
        return jsonify({"error": "Internal server error"}), 500

    return app
