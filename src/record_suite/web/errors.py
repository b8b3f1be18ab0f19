from __future__ import annotations

from http import HTTPStatus

from flask import Flask, jsonify
from loguru import logger
from werkzeug.exceptions import HTTPException

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DomainError,
    NotFoundError,
    ValidationError,
)

STATUS_BY_ERROR = (
    (NotFoundError, HTTPStatus.NOT_FOUND),
    (ConflictError, HTTPStatus.CONFLICT),
    (ValidationError, HTTPStatus.BAD_REQUEST),
    (AuthenticationError, HTTPStatus.UNAUTHORIZED),
    (AuthorizationError, HTTPStatus.FORBIDDEN),
)


def status_for(error: DomainError) -> HTTPStatus:
    for error_type, status in STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status
    return HTTPStatus.BAD_REQUEST


def error_response(message: str, status: int):
    return jsonify({"success": False, "message": message}), int(status)


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        status = status_for(e)
        logger.warning("{} -> {}: {}", type(e).__name__, int(status), e)
        return error_response(str(e), status)

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return error_response(e.description or e.name, e.code or HTTPStatus.INTERNAL_SERVER_ERROR)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.exception("Unhandled error while serving request")
        if app.config.get("DEBUG"):
            return error_response(f"Internal error: {e}", HTTPStatus.INTERNAL_SERVER_ERROR)
        return error_response("Internal error", HTTPStatus.INTERNAL_SERVER_ERROR)
