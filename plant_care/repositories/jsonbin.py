# plant_care/repositories/jsonbin.py
"""
JSONBin.io backend.

Plants and actions live in two bins holding the same documents as the JSON
file backend ({"plants": [...]}, {"actions": [...]}). Every mutation reads the
whole bin and writes it back, so two processes writing at once can lose an
update; within one process the store lock serializes writers.
"""

import logging
import threading
from datetime import date
from typing import Any, Dict, List, Optional

import requests

from plant_care.core.errors import ConfigurationError, StorageError
from plant_care.models.care_action import CareAction
from plant_care.models.plant import Plant
from plant_care.repositories.base import (
    CareActionRepository, CareDataStore, PlantRepository, matches
)

DEFAULT_API_URL = "https://api.jsonbin.io/v3/b"


class JsonBinClient:
    """Thin requests wrapper around the JSONBin v3 bin endpoints."""

    def __init__(self, api_key: str, api_url: str = DEFAULT_API_URL, timeout: float = 10.0,
                 session: Optional[requests.Session] = None):
        if not api_key:
            raise ConfigurationError("JSON_BIN_API_KEY is required for the jsonbin backend")
        self.api_url = (api_url or DEFAULT_API_URL).rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()
        self.headers = {
            "X-Master-Key": api_key,
            "X-Bin-Meta": "false",
        }

    def read_bin(self, bin_id: str) -> Dict[str, Any]:
        """Latest version of a bin's record; a bin that does not exist reads as {}."""
        url = f"{self.api_url}/{bin_id}/latest"
        try:
            response = self.session.get(url, headers=self.headers, timeout=self.timeout)
        except requests.RequestException as e:
            raise StorageError(f"Failed to read jsonBin {bin_id}: {e}")

        if response.status_code == 404:
            logging.warning(f"jsonBin {bin_id} not found, treating as empty")
            return {}
        if not response.ok:
            raise StorageError(f"Failed to read jsonBin {bin_id}: {response.status_code} {response.reason}")
        try:
            data = response.json()
        except ValueError as e:
            raise StorageError(f"jsonBin {bin_id} returned invalid JSON: {e}")
        return data if isinstance(data, dict) else {}

    def update_bin(self, bin_id: str, data: Dict[str, Any]) -> None:
        url = f"{self.api_url}/{bin_id}"
        headers = dict(self.headers, **{"Content-Type": "application/json"})
        try:
            response = self.session.put(url, json=data, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            raise StorageError(f"Failed to update jsonBin {bin_id}: {e}")
        if not response.ok:
            raise StorageError(f"Failed to update jsonBin {bin_id}: {response.status_code} {response.reason}")


class _BinCollection:
    """One bin seen as a list of item dicts under root_key."""

    def __init__(self, client: JsonBinClient, bin_id: str, root_key: str, lock: threading.RLock):
        self.client = client
        self.bin_id = bin_id
        self.root_key = root_key
        self.lock = lock

    def read_items(self) -> List[Dict[str, Any]]:
        items = self.client.read_bin(self.bin_id).get(self.root_key) or []
        if not isinstance(items, list):
            raise StorageError(f"jsonBin {self.bin_id} does not contain a '{self.root_key}' list")
        return items

    def write_items(self, items: List[Dict[str, Any]]) -> None:
        self.client.update_bin(self.bin_id, {self.root_key: items})


class JsonBinPlantRepository(PlantRepository):

    def __init__(self, collection: _BinCollection):
        self.collection = collection

    def _load(self) -> List[Plant]:
        try:
            return [Plant.from_dict(item) for item in self.collection.read_items()]
        except (KeyError, ValueError, TypeError) as e:
            raise StorageError(f"Malformed plant data in jsonBin {self.collection.bin_id}: {e}")

    def list(self) -> List[Plant]:
        return self._load()

    def get(self, plant_id: str) -> Optional[Plant]:
        return next((p for p in self._load() if p.id == plant_id), None)

    def upsert(self, plant: Plant) -> Plant:
        with self.collection.lock:
            plants = self._load()
            for index, existing in enumerate(plants):
                if existing.id == plant.id:
                    plants[index] = plant
                    break
            else:
                plants.append(plant)
            self.collection.write_items([p.to_dict() for p in plants])
        return plant

    def remove(self, plant_id: str) -> bool:
        with self.collection.lock:
            plants = self._load()
            remaining = [p for p in plants if p.id != plant_id]
            if len(remaining) == len(plants):
                return False
            self.collection.write_items([p.to_dict() for p in remaining])
        return True


class JsonBinCareActionRepository(CareActionRepository):

    def __init__(self, collection: _BinCollection):
        self.collection = collection

    def list(self, plant_id: Optional[str] = None, on_date: Optional[date] = None) -> List[CareAction]:
        try:
            actions = [CareAction.from_dict(item) for item in self.collection.read_items()]
        except (KeyError, ValueError, TypeError) as e:
            raise StorageError(f"Malformed action data in jsonBin {self.collection.bin_id}: {e}")
        return [a for a in actions if matches(a, plant_id, on_date)]

    def add(self, action: CareAction) -> CareAction:
        with self.collection.lock:
            items = self.collection.read_items()
            items.append(action.to_dict())
            self.collection.write_items(items)
        return action


class JsonBinStore(CareDataStore):
    backend_name = "jsonbin"

    def __init__(self, client: JsonBinClient, plants_bin_id: str, actions_bin_id: str):
        if not plants_bin_id or not actions_bin_id:
            raise ConfigurationError("PLANTS_BIN_ID and ACTIONS_BIN_ID are required for the jsonbin backend")
        lock = threading.RLock()
        super().__init__(
            plants=JsonBinPlantRepository(_BinCollection(client, plants_bin_id, 'plants', lock)),
            actions=JsonBinCareActionRepository(_BinCollection(client, actions_bin_id, 'actions', lock)),
        )
        logging.info(f"JsonBinStore initialized (plants bin: {plants_bin_id}, actions bin: {actions_bin_id})")
