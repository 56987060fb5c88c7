# plant_care/api/plants/routes.py
import logging
from flask import Blueprint, request, jsonify, current_app
from marshmallow import ValidationError

from plant_care.core.errors import PlantCareError
from .schemas import (
    PlantCreateSchema,
    PlantUpdateSchema,
    PlantResponseSchema,
    PlantScheduleResponseSchema
)

plants_bp = Blueprint('plants_bp', __name__)


def _dump(plant):
    return PlantResponseSchema().dump(plant.to_dict())


@plants_bp.route('', methods=['GET'])
def list_plants():
    """All plants."""
    service = current_app.services['plants']
    try:
        plants = service.list_plants()
        return jsonify([_dump(p) for p in plants]), 200
    except PlantCareError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        logging.error(f"List plants API error: {e}", exc_info=True)
        return jsonify({"error_code": "FETCH_FAILED", "message": "Failed to fetch plants"}), 500


@plants_bp.route('', methods=['POST'])
def create_plant():
    """Creates a plant. name, wateringInterval and mistingInterval are required."""
    service = current_app.services['plants']
    try:
        validated_data = PlantCreateSchema().load(request.get_json(silent=True) or {})
        plant = service.create_plant(validated_data)
        return jsonify(_dump(plant)), 201
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except PlantCareError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        logging.error(f"Plant creation API error: {e}", exc_info=True)
        return jsonify({"error_code": "PLANT_CREATION_FAILED", "message": "Failed to create plant"}), 500


@plants_bp.route('/<string:plant_id>', methods=['GET'])
def get_plant(plant_id: str):
    service = current_app.services['plants']
    try:
        plant = service.get_plant(plant_id)
        return jsonify(_dump(plant)), 200
    except PlantCareError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        logging.error(f"Get plant API error (plant_id: {plant_id}): {e}", exc_info=True)
        return jsonify({"error_code": "FETCH_FAILED", "message": "Failed to fetch plant"}), 500


@plants_bp.route('/<string:plant_id>', methods=['PUT'])
def update_plant(plant_id: str):
    """Updates a plant; only the supplied fields change."""
    service = current_app.services['plants']
    try:
        update_data = PlantUpdateSchema(partial=True).load(request.get_json(silent=True) or {})
        if not update_data:
            return jsonify({"error_code": "NO_DATA", "message": "No fields to update"}), 400

        plant = service.update_plant(plant_id, update_data)
        return jsonify(_dump(plant)), 200
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except PlantCareError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        logging.error(f"Update plant API error (plant_id: {plant_id}): {e}", exc_info=True)
        return jsonify({"error_code": "UPDATE_FAILED", "message": "Failed to update plant"}), 500


@plants_bp.route('/<string:plant_id>', methods=['DELETE'])
def delete_plant(plant_id: str):
    service = current_app.services['plants']
    try:
        service.delete_plant(plant_id)
        return jsonify({"success": True, "id": plant_id}), 200
    except PlantCareError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        logging.error(f"Delete plant API error (plant_id: {plant_id}): {e}", exc_info=True)
        return jsonify({"error_code": "DELETE_FAILED", "message": "Failed to delete plant"}), 500


@plants_bp.route('/<string:plant_id>/schedule', methods=['GET'])
def get_plant_schedule(plant_id: str):
    """Next watering/misting dates and their status for one plant."""
    service = current_app.services['plants']
    try:
        schedule = service.get_schedule(plant_id)
        return jsonify(PlantScheduleResponseSchema().dump(schedule)), 200
    except PlantCareError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        logging.error(f"Plant schedule API error (plant_id: {plant_id}): {e}", exc_info=True)
        return jsonify({"error_code": "FETCH_FAILED", "message": "Failed to compute schedule"}), 500
