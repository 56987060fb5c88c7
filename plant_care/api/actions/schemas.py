# plant_care/api/actions/schemas.py
from marshmallow import Schema, fields, validate, EXCLUDE

from plant_care.models.care_action import CareActionType


class CareActionCreateSchema(Schema):
    """POST /api/actions request body."""
    class Meta:
        unknown = EXCLUDE

    plantId = fields.Str(required=True, validate=validate.Length(min=1))
    actionType = fields.Str(required=True, validate=validate.OneOf(CareActionType.values()))


class CareActionsQuerySchema(Schema):
    """GET /api/actions query parameters; both filters optional."""
    class Meta:
        unknown = EXCLUDE

    plantId = fields.Str(validate=validate.Length(min=1))
    date = fields.Str(validate=validate.Regexp(r'^\d{4}-\d{2}-\d{2}(T.*)?$'))


class TodayActionsQuerySchema(Schema):
    class Meta:
        unknown = EXCLUDE

    plantId = fields.Str(required=True, validate=validate.Length(min=1))


class CareActionSchema(Schema):
    id = fields.Str()
    plantId = fields.Str()
    type = fields.Str()
    date = fields.Str()
