# plant_care/repositories/firestore.py
"""
Firestore backend: one document per record.

- plants collection: document id = plant id
- actions collection: document id = '{plantId}_{type}_{YYYYMMDD}', plus a
  'searchDate' (YYYY-MM-DD) field for per-day queries. The deterministic id
  makes "one action of a kind per plant per day" hold at the storage level.
"""

import logging
import os
from datetime import date
from typing import List, Optional

import firebase_admin
from firebase_admin import credentials, firestore

from plant_care.core.errors import ConfigurationError, ConflictError, StorageError
from plant_care.models.care_action import CareAction, CareActionType
from plant_care.models.plant import Plant
from plant_care.repositories.base import CareActionRepository, CareDataStore, PlantRepository
from plant_care.utils.datetime_utils import DateTimeUtils


def action_document_id(plant_id: str, action_type: CareActionType, day: date) -> str:
    return f"{plant_id}_{action_type.value}_{day.strftime('%Y%m%d')}"


def init_firestore_client(credentials_path: Optional[str]):
    """Initializes the default Firebase app once and returns a Firestore client."""
    if not firebase_admin._apps:
        if not credentials_path:
            raise ConfigurationError("FIREBASE_CREDENTIALS_PATH is required for the firestore backend")
        if not os.path.exists(credentials_path):
            raise ConfigurationError(f"Firebase credentials file not found: {credentials_path}")
        cred = credentials.Certificate(credentials_path)
        firebase_admin.initialize_app(cred)
    return firestore.client()


class FirestorePlantRepository(PlantRepository):

    def __init__(self, db, collection_name: str = 'plants'):
        self.plants_ref = db.collection(collection_name)

    @staticmethod
    def _to_plant(doc) -> Plant:
        try:
            return Plant.from_dict(DateTimeUtils.from_firestore(doc.to_dict()))
        except (KeyError, ValueError, TypeError) as e:
            raise StorageError(f"Malformed plant document {doc.id}: {e}")

    def list(self) -> List[Plant]:
        try:
            return [self._to_plant(doc) for doc in self.plants_ref.stream()]
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(f"Failed to list plants: {e}")

    def get(self, plant_id: str) -> Optional[Plant]:
        try:
            doc = self.plants_ref.document(plant_id).get()
        except Exception as e:
            raise StorageError(f"Failed to read plant {plant_id}: {e}")
        if not doc.exists:
            return None
        return self._to_plant(doc)

    def upsert(self, plant: Plant) -> Plant:
        try:
            self.plants_ref.document(plant.id).set(plant.to_record())
        except Exception as e:
            raise StorageError(f"Failed to save plant {plant.id}: {e}")
        return plant

    def remove(self, plant_id: str) -> bool:
        try:
            doc_ref = self.plants_ref.document(plant_id)
            if not doc_ref.get().exists:
                return False
            doc_ref.delete()
        except Exception as e:
            raise StorageError(f"Failed to delete plant {plant_id}: {e}")
        return True


class FirestoreCareActionRepository(CareActionRepository):

    def __init__(self, db, collection_name: str = 'plant_actions'):
        self.actions_ref = db.collection(collection_name)

    @staticmethod
    def _to_action(doc) -> CareAction:
        try:
            return CareAction.from_dict(DateTimeUtils.from_firestore(doc.to_dict()))
        except (KeyError, ValueError, TypeError) as e:
            raise StorageError(f"Malformed action document {doc.id}: {e}")

    def list(self, plant_id: Optional[str] = None, on_date: Optional[date] = None) -> List[CareAction]:
        query = self.actions_ref
        if plant_id is not None:
            query = query.where('plantId', '==', plant_id)
        if on_date is not None:
            query = query.where('searchDate', '==', DateTimeUtils.to_date_string(on_date))
        try:
            actions = [self._to_action(doc) for doc in query.stream()]
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(f"Failed to query actions: {e}")
        # ordering in Python avoids a composite index on (plantId, searchDate, date)
        return sorted(actions, key=lambda a: a.date)

    def find_for_day(self, plant_id: str, action_type: CareActionType, day: date) -> Optional[CareAction]:
        try:
            doc = self.actions_ref.document(action_document_id(plant_id, action_type, day)).get()
        except Exception as e:
            raise StorageError(f"Failed to read action for plant {plant_id}: {e}")
        return self._to_action(doc) if doc.exists else None

    def document_for(self, action: CareAction):
        return self.actions_ref.document(
            action_document_id(action.plant_id, action.type, DateTimeUtils.calendar_day(action.date)))

    def add(self, action: CareAction) -> CareAction:
        try:
            self.document_for(action).set(action.to_record())
        except Exception as e:
            raise StorageError(f"Failed to save action {action.id}: {e}")
        return action


class FirestoreStore(CareDataStore):
    backend_name = "firestore"

    def __init__(self, db, plants_collection: str = 'plants', actions_collection: str = 'plant_actions'):
        self.db = db
        super().__init__(
            plants=FirestorePlantRepository(db, plants_collection),
            actions=FirestoreCareActionRepository(db, actions_collection),
        )
        logging.info(f"FirestoreStore initialized (collections: {plants_collection}, {actions_collection})")

    def record_care_action(self, plant: Plant, action: CareAction, previous: Plant) -> None:
        """[Transaction] Duplicate check, plant update and action creation commit together."""
        transaction = self.db.transaction()
        plant_ref = self.plants.plants_ref.document(plant.id)
        action_ref = self.actions.document_for(action)

        @firestore.transactional
        def _record_in_transaction(transaction):
            snapshot = action_ref.get(transaction=transaction)
            if snapshot.exists:
                existing = self.actions._to_action(snapshot)
                raise ConflictError(f"Plant already {action.type.past_tense} today", existing=existing)
            transaction.set(plant_ref, plant.to_record())
            transaction.create(action_ref, action.to_record())

        try:
            _record_in_transaction(transaction)
        except (ConflictError, StorageError):
            raise
        except Exception as e:
            logging.error(f"Care action transaction failed for plant {plant.id}: {e}", exc_info=True)
            raise StorageError(f"Failed to record {action.type.value} for plant {plant.id}")
