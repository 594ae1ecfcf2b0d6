from flask import Blueprint

from utils.decorators import get_storage

bp = Blueprint("health", __name__)


@bp.get("/health")
def health():
    """Liveness plus a database round-trip."""
    if not get_storage().ping():
        return {"status": "degraded", "database": "error"}, 503
    return {"status": "ok", "database": "ok"}, 200
