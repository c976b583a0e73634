from __future__ import annotations

import logging
from typing import Any, Dict

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.exceptions import ConflictError, DomainError, StoreError, ValidationError

logger = logging.getLogger(__name__)


def json_body() -> Dict[str, Any]:
    """Return the request's JSON object, or raise ValidationError."""
    body = request.get_json(silent=True)
    if body is None:
        raise ValidationError("Request body must be JSON")
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body


def message(text: str, status: int = 200):
    return jsonify({"message": text}), status


def register_error_handlers(app: Flask) -> None:
    """Every failure leaves as ``{"error": str}`` with the matching status."""

    @app.errorhandler(ConflictError)
    def handle_conflict(e: ConflictError):
        logger.warning("%s %s -> 409: %s (currentVersion=%s)", request.method, request.path, e, e.current_version)
        return jsonify({"error": str(e), "currentVersion": e.current_version}), 409

    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        if isinstance(e, StoreError):
            logger.error("%s %s -> %s: %s", request.method, request.path, e.status_code, e)
        else:
            logger.info("%s %s -> %s: %s", request.method, request.path, e.status_code, e)
        return jsonify({"error": str(e)}), e.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return jsonify({"error": e.description}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        if app.config.get("DEBUG"):
            return jsonify({"error": f"Internal server error: {e}"}), 500
        return jsonify({"error": "Internal server error"}), 500
