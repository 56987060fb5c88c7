# plant_care/repositories/json_file.py
"""
Flat-file backend.

    <DATA_DIR>/plants.json   {"plants": [...]}
    <DATA_DIR>/actions.json  {"actions": [...]}

Every mutation rewrites the whole document. Writes go to a temporary file
that replaces the original, so a crash never leaves half a document behind.
A missing file reads as an empty collection.
"""

import json
import logging
import os
import tempfile
import threading
from datetime import date
from typing import Any, Dict, List, Optional

from plant_care.core.errors import StorageError
from plant_care.models.care_action import CareAction
from plant_care.models.plant import Plant
from plant_care.repositories.base import (
    CareActionRepository, CareDataStore, PlantRepository, matches
)


class JsonDocumentFile:
    """One JSON document of the form {root_key: [item, ...]}."""

    def __init__(self, path: str, root_key: str, lock: threading.RLock):
        self.path = path
        self.root_key = root_key
        self.lock = lock

    def read_items(self) -> List[Dict[str, Any]]:
        if not os.path.exists(self.path):
            return []
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                content = f.read()
        except OSError as e:
            raise StorageError(f"Cannot read {self.path}: {e}")

        if not content.strip():
            return []
        try:
            document = json.loads(content)
        except json.JSONDecodeError as e:
            raise StorageError(f"Malformed JSON in {self.path}: {e}")

        items = document.get(self.root_key, []) if isinstance(document, dict) else None
        if not isinstance(items, list):
            raise StorageError(f"{self.path} does not contain a '{self.root_key}' list")
        return items

    def write_items(self, items: List[Dict[str, Any]]) -> None:
        directory = os.path.dirname(self.path) or '.'
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=f".{self.root_key}-", suffix=".json")
            try:
                with os.fdopen(fd, 'w', encoding='utf-8') as f:
                    json.dump({self.root_key: items}, f, ensure_ascii=False, indent=2)
                os.replace(tmp_path, self.path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.remove(tmp_path)
                raise
        except OSError as e:
            raise StorageError(f"Cannot write {self.path}: {e}")


class JsonFilePlantRepository(PlantRepository):

    def __init__(self, document: JsonDocumentFile):
        self.document = document

    def _load(self) -> List[Plant]:
        try:
            return [Plant.from_dict(item) for item in self.document.read_items()]
        except (KeyError, ValueError, TypeError) as e:
            raise StorageError(f"Malformed plant data in {self.document.path}: {e}")

    def list(self) -> List[Plant]:
        with self.document.lock:
            return self._load()

    def get(self, plant_id: str) -> Optional[Plant]:
        with self.document.lock:
            return next((p for p in self._load() if p.id == plant_id), None)

    def upsert(self, plant: Plant) -> Plant:
        with self.document.lock:
            plants = self._load()
            for index, existing in enumerate(plants):
                if existing.id == plant.id:
                    plants[index] = plant
                    break
            else:
                plants.append(plant)
            self.document.write_items([p.to_dict() for p in plants])
        return plant

    def remove(self, plant_id: str) -> bool:
        with self.document.lock:
            plants = self._load()
            remaining = [p for p in plants if p.id != plant_id]
            if len(remaining) == len(plants):
                return False
            self.document.write_items([p.to_dict() for p in remaining])
        return True


class JsonFileCareActionRepository(CareActionRepository):

    def __init__(self, document: JsonDocumentFile):
        self.document = document

    def _load(self) -> List[CareAction]:
        try:
            return [CareAction.from_dict(item) for item in self.document.read_items()]
        except (KeyError, ValueError, TypeError) as e:
            raise StorageError(f"Malformed action data in {self.document.path}: {e}")

    def list(self, plant_id: Optional[str] = None, on_date: Optional[date] = None) -> List[CareAction]:
        with self.document.lock:
            return [a for a in self._load() if matches(a, plant_id, on_date)]

    def add(self, action: CareAction) -> CareAction:
        with self.document.lock:
            actions = self._load()
            actions.append(action)
            self.document.write_items([a.to_dict() for a in actions])
        return action


class JsonFileStore(CareDataStore):
    backend_name = "json_file"

    def __init__(self, data_dir: str):
        self.data_dir = data_dir
        lock = threading.RLock()
        super().__init__(
            plants=JsonFilePlantRepository(JsonDocumentFile(os.path.join(data_dir, 'plants.json'), 'plants', lock)),
            actions=JsonFileCareActionRepository(JsonDocumentFile(os.path.join(data_dir, 'actions.json'), 'actions', lock)),
        )
        logging.info(f"JsonFileStore initialized (data_dir: {data_dir})")
