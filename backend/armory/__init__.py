# backend/armory/__init__.py
from flask import Flask, request

from .config import Config
from .extensions import RECORD_STORE_KEY, db


def create_app(overrides: dict | None = None) -> Flask:
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(Config)
    if overrides:
        app.config.update(overrides)

    # Initialize extensions
    db.init_app(app)

    # Import models so SQLAlchemy metadata knows every table
    from . import models  # noqa: F401

    from .services.record_store import SqlRecordStore, create_record_store
    from .services.seed_service import seed_demo_movements

    store = create_record_store(app.config["RECORD_STORE_BACKEND"])
    app.extensions[RECORD_STORE_KEY] = store

    with app.app_context():
        if isinstance(store, SqlRecordStore):
            store.create_schema()
        if app.config["SEED_DEMO_DATA"]:
            counts = seed_demo_movements(store)
            app.logger.info("Seeded demo movements: %s", counts)

    # Register blueprints
    from .routes.system import system_bp
    from .routes.movements import movements_bp
    from .routes.reports import reports_bp

    app.register_blueprint(system_bp)
    app.register_blueprint(movements_bp)
    app.register_blueprint(reports_bp)

    @app.after_request
    def add_cors_headers(response):
        origin = request.headers.get("Origin")
        if origin in app.config["CORS_ORIGINS"]:
            response.headers["Access-Control-Allow-Origin"] = origin
            response.headers["Vary"] = "Origin"
            response.headers["Access-Control-Allow-Headers"] = "X-Username, Content-Type"
            response.headers["Access-Control-Allow-Methods"] = "GET,POST,OPTIONS"
        return response

    # Register CLI commands
    from .cli import register_commands
    register_commands(app)

    return app
