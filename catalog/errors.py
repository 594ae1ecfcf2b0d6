from flask import current_app, render_template
from werkzeug.exceptions import HTTPException
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
import logging

logger = logging.getLogger(__name__)


def error_page(title: str, message: str, status: int, details: dict | None = None):
    return render_template("error.html", title=title, message=message, status=status, details=details), status


def register_error_handlers(app):
    # 404 Not Found
    @app.errorhandler(404)
    def not_found(e):
        message = getattr(e, "description", None) or "Not found"
        return error_page("Not Found", message, 404)

    # 409 Conflict
    @app.errorhandler(409)
    def conflict(e):
        message = getattr(e, "description", "Conflict")
        return error_page("Conflict", message, 409)

    # Integrity errors (dangling references, FK violations)
    @app.errorhandler(IntegrityError)
    def handle_integrity_error(err: IntegrityError):
        # The storage layer already rolled back the failed commit
        message = str(getattr(err, "orig", err))
        logger.warning("Integrity error: %s", message)
        details = {"db_error": message} if current_app.debug else None
        lower_msg = message.lower()
        if "foreign key" in lower_msg:
            return error_page("Conflict", "A referenced record does not exist.", 409, details)
        return error_page("Conflict", "The change conflicts with stored data.", 409, details)

    # Store failures other than integrity: fatal for this request only
    @app.errorhandler(SQLAlchemyError)
    def handle_store_error(err: SQLAlchemyError):
        logger.exception("Database failure", exc_info=err)
        details = {"type": err.__class__.__name__, "message": str(err)} if current_app.debug else None
        return error_page("Error", "The catalog database is unavailable.", 500, details)

    # Werkzeug HTTPExceptions map to their status codes
    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        # Routing redirects (e.g. missing trailing slash) are responses, not errors
        if err.code is not None and err.code < 400:
            return err
        return error_page(err.name, err.description, err.code or 400)

    # 500 Internal Error (catch-all)
    @app.errorhandler(Exception)
    def internal_error(err: Exception):
        # In dev, include exception details to speed up debugging
        logger.exception("Unhandled exception", exc_info=err)
        details = None
        if current_app and current_app.debug:
            details = {"type": err.__class__.__name__, "message": str(err)}
        return error_page("Error", "An unexpected error occurred", 500, details)
