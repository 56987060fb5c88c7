# plant_care/api/actions/routes.py
import logging
from flask import Blueprint, request, jsonify, current_app
from marshmallow import ValidationError

from plant_care.api.plants.schemas import PlantResponseSchema
from plant_care.core.errors import PlantCareError
from .schemas import (
    CareActionCreateSchema,
    CareActionsQuerySchema,
    CareActionSchema,
    TodayActionsQuerySchema
)

# Registered twice in create_app: /api/actions and /api/plants/actions
actions_bp = Blueprint('actions_bp', __name__)


@actions_bp.route('', methods=['POST'])
def record_care_action():
    """
    Waters or mists a plant.

    Body: {"plantId": "...", "actionType": "watering" | "misting"}
    201: {"success": true, "plant": {...}, "action": {...}}
    409: already performed today, the existing action is attached
    """
    service = current_app.services['care_actions']
    try:
        data = CareActionCreateSchema().load(request.get_json(silent=True) or {})
        plant, action = service.record_action(data['plantId'], data['actionType'])
        return jsonify({
            "success": True,
            "plant": PlantResponseSchema().dump(plant.to_dict()),
            "action": CareActionSchema().dump(action.to_dict()),
        }), 201
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except PlantCareError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        logging.error(f"Care action API error: {e}", exc_info=True)
        return jsonify({"error_code": "ACTION_FAILED", "message": "Failed to perform plant action"}), 500


@actions_bp.route('', methods=['GET'])
def list_care_actions():
    """
    Recorded actions, optionally filtered.

    Query parameters:
    - plantId: only this plant's actions
    - date: only actions on this calendar day (YYYY-MM-DD)
    """
    service = current_app.services['care_actions']
    try:
        params = CareActionsQuerySchema().load(request.args)
        actions = service.list_actions(plant_id=params.get('plantId'), date_str=params.get('date'))
        return jsonify(CareActionSchema(many=True).dump([a.to_dict() for a in actions])), 200
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except PlantCareError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        logging.error(f"Care action retrieval API error: {e}", exc_info=True)
        return jsonify({"error_code": "FETCH_FAILED", "message": "Failed to fetch plant actions"}), 500


@actions_bp.route('/today', methods=['GET'])
def get_today_actions():
    """Today's actions for one plant and whether watering/misting is still possible."""
    service = current_app.services['care_actions']
    try:
        params = TodayActionsQuerySchema().load(request.args)
        status = service.get_today_status(params['plantId'])
        status['actions'] = CareActionSchema(many=True).dump([a.to_dict() for a in status['actions']])
        return jsonify(status), 200
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except PlantCareError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        logging.error(f"Today's actions API error: {e}", exc_info=True)
        return jsonify({"error_code": "FETCH_FAILED", "message": "Failed to fetch today's actions"}), 500
