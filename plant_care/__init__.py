# plant_care/__init__.py

# =====================================================================================
# 1. Environment (loaded before anything reads os.getenv)
# =====================================================================================
from dotenv import load_dotenv
load_dotenv()

# =====================================================================================
# 2. Module imports
# =====================================================================================
import os
import logging
from typing import Any, Dict, Optional

from flask import Flask, jsonify
from marshmallow import ValidationError
from werkzeug.exceptions import HTTPException

# - config and errors
from plant_care.core.config import config_by_name
from plant_care.core.errors import PlantCareError

# - storage
from plant_care.repositories import create_store

# - API blueprints
from plant_care.api.plants.routes import plants_bp
from plant_care.api.actions.routes import actions_bp
from plant_care.api.tasks.routes import tasks_bp

# - services
from plant_care.api.plants.services import PlantService
from plant_care.api.actions.services import CareActionService
from plant_care.api.tasks.services import TaskService

from plant_care.commands import register_commands


def create_app(config_name: Optional[str] = None, overrides: Optional[Dict[str, Any]] = None) -> Flask:
    """
    Flask application factory.

    :param config_name: key of config_by_name; defaults to FLASK_ENV, then 'development'
    :param overrides: config values applied on top of the config class (used by tests)
    """
    # =====================================================================================
    # 3. App and configuration
    # =====================================================================================
    config_name = config_name or os.getenv('FLASK_ENV', 'development')
    if config_name not in config_by_name:
        raise ValueError(f"Unknown config '{config_name}'. Expected one of: {', '.join(config_by_name)}")

    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])
    if overrides:
        app.config.update(overrides)
    app.json.ensure_ascii = False
    app.json.sort_keys = False

    if not app.debug and not app.testing:
        logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]')

    # =====================================================================================
    # 4. Storage backend (config passed explicitly, no module-level globals)
    # =====================================================================================
    try:
        store = create_store(app.config)
        logging.info(f"Storage backend '{store.backend_name}' initialized successfully")
    except PlantCareError as e:
        logging.error(f"Failed to initialize storage backend: {e}")
        raise

    # =====================================================================================
    # 5. Services, stored in app.services for the routes
    # =====================================================================================
    app.services = {}
    app.services['store'] = store
    app.services['plants'] = PlantService(store)
    app.services['care_actions'] = CareActionService(store)
    app.services['tasks'] = TaskService(
        store,
        window_days=app.config['TASK_WINDOW_DAYS'],
        max_window_days=app.config['MAX_TASK_WINDOW_DAYS']
    )

    # =====================================================================================
    # 6. Blueprints
    # =====================================================================================
    app.register_blueprint(plants_bp, url_prefix='/api/plants')
    app.register_blueprint(actions_bp, url_prefix='/api/actions')
    # same endpoints under the plants prefix used by the web client
    app.register_blueprint(actions_bp, url_prefix='/api/plants/actions', name='plant_actions_bp')
    app.register_blueprint(tasks_bp, url_prefix='/api/tasks')

    register_commands(app)

    # =====================================================================================
    # 7. Global error handlers
    # =====================================================================================
    @app.errorhandler(ValidationError)
    def handle_marshmallow_validation(err):
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400

    @app.errorhandler(PlantCareError)
    def handle_plant_care_error(err):
        return jsonify(err.to_dict()), err.status_code

    @app.errorhandler(HTTPException)
    def handle_http_exception(err):
        return jsonify({"error_code": err.name.upper().replace(' ', '_'), "message": err.description}), err.code

    @app.errorhandler(Exception)
    def handle_generic_exception(err):
        logging.error(f"An unhandled exception occurred: {err}", exc_info=True)
        return jsonify({"error_code": "INTERNAL_SERVER_ERROR", "message": "An unexpected server error occurred."}), 500

    logging.info(f"Flask app created for '{config_name}' environment.")
    return app
