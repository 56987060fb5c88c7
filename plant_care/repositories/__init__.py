# plant_care/repositories/__init__.py
"""
Storage backends for plants and care actions.

create_store() builds the backend named by STORAGE_BACKEND from an explicit
config mapping (normally app.config); nothing reads the environment here.
"""
from typing import Any, Mapping, Optional

from plant_care.core.errors import ConfigurationError
from plant_care.repositories.base import CareActionRepository, CareDataStore, PlantRepository

BACKENDS = ('json_file', 'firestore', 'jsonbin')


def create_store(config: Mapping[str, Any], backend: Optional[str] = None) -> CareDataStore:
    backend = backend or config.get('STORAGE_BACKEND', 'json_file')

    if backend == 'json_file':
        from plant_care.repositories.json_file import JsonFileStore
        data_dir = config.get('DATA_DIR')
        if not data_dir:
            raise ConfigurationError("DATA_DIR is required for the json_file backend")
        return JsonFileStore(data_dir)

    if backend == 'firestore':
        from plant_care.repositories.firestore import FirestoreStore, init_firestore_client
        db = init_firestore_client(config.get('FIREBASE_CREDENTIALS_PATH'))
        return FirestoreStore(
            db,
            plants_collection=config.get('FIRESTORE_PLANTS_COLLECTION', 'plants'),
            actions_collection=config.get('FIRESTORE_ACTIONS_COLLECTION', 'plant_actions'),
        )

    if backend == 'jsonbin':
        from plant_care.repositories.jsonbin import JsonBinClient, JsonBinStore
        client = JsonBinClient(
            api_key=config.get('JSON_BIN_API_KEY'),
            api_url=config.get('JSON_BIN_API_URL'),
            timeout=config.get('JSON_BIN_TIMEOUT', 10.0),
        )
        return JsonBinStore(client, config.get('PLANTS_BIN_ID'), config.get('ACTIONS_BIN_ID'))

    raise ConfigurationError(f"Unknown STORAGE_BACKEND '{backend}'. Expected one of: {', '.join(BACKENDS)}")


__all__ = ['BACKENDS', 'create_store', 'CareDataStore', 'PlantRepository', 'CareActionRepository']
