# plant_care/api/tasks/routes.py
import logging
from flask import Blueprint, request, jsonify, current_app
from marshmallow import ValidationError

from plant_care.core.errors import PlantCareError
from .schemas import TasksQuerySchema, TasksResponseSchema, TodayTasksResponseSchema

tasks_bp = Blueprint('tasks_bp', __name__)


@tasks_bp.route('/today', methods=['GET'])
def get_today_tasks():
    """Care tasks due today, plus overdue ones."""
    service = current_app.services['tasks']
    try:
        result = service.get_today_tasks()
        return jsonify(TodayTasksResponseSchema().dump(result)), 200
    except PlantCareError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        logging.error(f"Today's tasks API error: {e}", exc_info=True)
        return jsonify({"error_code": "FETCH_FAILED", "message": "Failed to load today's tasks"}), 500


@tasks_bp.route('', methods=['GET'])
def get_upcoming_tasks():
    """
    Calendar of care tasks from today on.

    Query parameters:
    - days: window length in days (1-366, default TASK_WINDOW_DAYS)
    - grouped: also return tasks keyed by date (true/false)

    Example:
    - GET /api/tasks?days=14&grouped=true
    """
    service = current_app.services['tasks']
    try:
        params = TasksQuerySchema().load(request.args)
        result = service.get_upcoming_tasks(days=params.get('days'), grouped=params.get('grouped', False))
        return jsonify(TasksResponseSchema().dump(result)), 200
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except PlantCareError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        logging.error(f"Task calendar API error: {e}", exc_info=True)
        return jsonify({"error_code": "FETCH_FAILED", "message": "Failed to generate tasks"}), 500
