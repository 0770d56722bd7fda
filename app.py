import logging
from dataclasses import replace

from flask import Flask, render_template
from flask_wtf.csrf import CSRFProtect

from config import AppConfig
from controllers.admin_gate import AdminGate
from db.database import engine_from_config, create_session_factory, create_tables
from db.errors import StorageError, NotFoundError
from routes import init_routes

logger = logging.getLogger(__name__)

csrf = CSRFProtect()


def register_error_handlers(app):
    """Render storage and lookup failures as a generic server error page."""

    @app.errorhandler(StorageError)
    def handle_storage_error(e):
        logger.error(f"Storage failure: {e.message}", exc_info=e.original_error)
        return render_template("error.html"), 500

    @app.errorhandler(NotFoundError)
    def handle_not_found(e):
        # Missing rows are not distinguished from other failures yet
        logger.error(f"Lookup failed: {e.message}")
        return render_template("error.html"), 500


def create_app(config: AppConfig = None, database_url=None):
    """Application factory pattern for better testing and configuration.

    Args:
        config: Optional AppConfig. If not provided, built from the environment.
        database_url: Optional database URL override.
    """
    if config is None:
        config = AppConfig.from_env()
    if database_url:
        config = replace(config, database_url=database_url)

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    app = Flask(__name__)
    app.config["SECRET_KEY"] = config.secret_key
    app.config["APP_CONFIG"] = config

    # Hooks run in registration order; the gate must precede the CSRF check
    AdminGate().install(app)
    csrf.init_app(app)

    logger.info("Initializing database")
    engine = engine_from_config(config)
    try:
        create_tables(engine)
    except Exception as e:
        logger.warning(f"Database table creation warning: {e}")
    session_factory = create_session_factory(engine)
    app.config["DB_ENGINE"] = engine
    app.config["SESSION_FACTORY"] = session_factory

    register_error_handlers(app)
    init_routes(app, config, session_factory)

    return app


# === Main ===
if __name__ == "__main__":
    import os
    app = create_app()
    debug_mode = os.getenv('FLASK_ENV') != 'production'
    app.run(host='0.0.0.0', port=5001, debug=debug_mode)
