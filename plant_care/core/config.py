# plant_care/core/config.py

import os


def getenv(key: str, default: str = None) -> str:
    """
    Reads an environment variable and strips one pair of surrounding quotes.
    Values copied from hosting dashboards often arrive as '"abc"'.
    """
    value = os.getenv(key)
    if value is None or value == "":
        return default
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ('"', "'"):
        return value[1:-1]
    return value


class Config:
    """Common settings shared by every environment."""
    # Which backend stores plants and care actions: 'json_file', 'firestore' or 'jsonbin'.
    STORAGE_BACKEND = getenv('STORAGE_BACKEND', 'json_file')

    # json_file backend: directory holding plants.json and actions.json.
    DATA_DIR = getenv('DATA_DIR', os.path.join(os.getcwd(), 'data'))

    # jsonbin backend: one bin for plants, one for actions.
    JSON_BIN_API_URL = getenv('JSON_BIN_API_URL', 'https://api.jsonbin.io/v3/b')
    JSON_BIN_API_KEY = getenv('JSON_BIN_API_KEY')
    PLANTS_BIN_ID = getenv('PLANTS_BIN_ID')
    ACTIONS_BIN_ID = getenv('ACTIONS_BIN_ID')
    JSON_BIN_TIMEOUT = float(getenv('JSON_BIN_TIMEOUT', '10'))

    # firestore backend
    FIREBASE_CREDENTIALS_PATH = getenv('FIREBASE_CREDENTIALS_PATH')
    FIRESTORE_PLANTS_COLLECTION = getenv('FIRESTORE_PLANTS_COLLECTION', 'plants')
    FIRESTORE_ACTIONS_COLLECTION = getenv('FIRESTORE_ACTIONS_COLLECTION', 'plant_actions')

    # Calendar window used by GET /api/tasks when 'days' is not given.
    TASK_WINDOW_DAYS = int(getenv('TASK_WINDOW_DAYS', '30'))
    MAX_TASK_WINDOW_DAYS = 366

    # Maximum request body size in bytes (covers inline base64 plant images).
    MAX_CONTENT_LENGTH = 8 * 1024 * 1024


class DevelopmentConfig(Config):
    """Local development: debug mode, file storage unless overridden."""
    DEBUG = True


class TestingConfig(Config):
    """Test runs always use the file backend in a directory chosen by the test."""
    TESTING = True
    DEBUG = False
    STORAGE_BACKEND = 'json_file'


class ProductionConfig(Config):
    DEBUG = False


# Maps FLASK_ENV values to config classes; used by create_app.
config_by_name = dict(
    development=DevelopmentConfig,
    testing=TestingConfig,
    production=ProductionConfig
)
