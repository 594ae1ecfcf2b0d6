import logging

from flask import Flask, redirect, url_for

from .config import get_config
from .errors import register_error_handlers
from models.db_storage import DBStorage

URL_PREFIX = "/catalog"


def create_app(config_name: str | None = None, test_config: dict | None = None) -> Flask:
    """
    Application factory: creates and configures the Flask app.

    The DBStorage handle is opened here, kept in app.extensions["storage"]
    and its per-request session removed on every app-context teardown.
    """
    app = Flask(__name__)

    # Load configuration (reads .env via get_config), then explicit overrides
    app.config.from_object(get_config(config_name))
    if test_config:
        app.config.update(test_config)

    logging.basicConfig(
        level=app.config.get("LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    storage = DBStorage(app.config["DATABASE_URL"], echo=app.config.get("SQL_ECHO", False))
    storage.reload()
    app.extensions["storage"] = storage

    register_error_handlers(app)

    from .health import bp as health_bp
    from .books import bp as books_bp
    from .authors import bp as authors_bp
    from .genres import bp as genres_bp
    from .bookinstances import bp as bookinstances_bp

    app.register_blueprint(health_bp)
    app.register_blueprint(books_bp, url_prefix=URL_PREFIX)
    app.register_blueprint(authors_bp, url_prefix=URL_PREFIX)
    app.register_blueprint(genres_bp, url_prefix=URL_PREFIX)
    app.register_blueprint(bookinstances_bp, url_prefix=URL_PREFIX)

    # Ensure the DB session is removed at the end of each request/app context
    @app.teardown_appcontext
    def remove_session(exception=None):
        storage.close()

    @app.route("/")
    def root():
        return redirect(url_for("books.index"))

    return app
