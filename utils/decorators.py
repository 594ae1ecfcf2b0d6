from __future__ import annotations

import logging
from functools import wraps

from flask import abort, current_app

from models.db_storage import DBStorage

logger = logging.getLogger(__name__)


def get_storage() -> DBStorage:
    """The DBStorage opened by create_app for this application."""
    return current_app.extensions["storage"]


def entity_required(cls, id_arg: str, on_missing=None):
    """
    Load `cls` by the route's `id_arg` and pass it to the view as `entity`.

    When nothing matches, return on_missing() if given, else abort(404).
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            entity_id = kwargs[id_arg]
            entity = get_storage().get(cls, entity_id)
            if entity is None:
                logger.debug("%s not found: %s", cls.__name__, entity_id)
                if on_missing is not None:
                    return on_missing()
                abort(404, description=f"{cls.__name__} not found")
            return fn(*args, entity=entity, **kwargs)

        return wrapper

    return decorator
