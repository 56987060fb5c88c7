# plant_care/api/plants/schemas.py
from datetime import timezone

from marshmallow import Schema, fields, validate, EXCLUDE


class PlantCreateSchema(Schema):
    """POST /api/plants request body."""
    class Meta:
        unknown = EXCLUDE

    id = fields.Str(validate=validate.Length(min=1, max=100))
    name = fields.Str(required=True, validate=validate.Length(min=1))
    species = fields.Str(allow_none=True)
    image = fields.Str(allow_none=True)  # base64 data URL or remote URL
    imageName = fields.Str(allow_none=True)
    wateringInterval = fields.Int(required=True, strict=True, validate=validate.Range(min=1))
    mistingInterval = fields.Int(required=True, strict=True, validate=validate.Range(min=1))
    lastWatered = fields.AwareDateTime(default_timezone=timezone.utc)
    lastMisted = fields.AwareDateTime(default_timezone=timezone.utc)
    notes = fields.Str(allow_none=True)


class PlantUpdateSchema(PlantCreateSchema):
    """PUT /api/plants/<plant_id>: every field optional, supplied fields are merged."""
    pass


class PlantResponseSchema(Schema):
    id = fields.Str(dump_only=True)
    name = fields.Str()
    species = fields.Str(allow_none=True)
    image = fields.Str(allow_none=True)
    imageName = fields.Str(allow_none=True)
    wateringInterval = fields.Int()
    mistingInterval = fields.Int()
    lastWatered = fields.Str()
    lastMisted = fields.Str()
    notes = fields.Str(allow_none=True)


class ScheduleEntrySchema(Schema):
    interval = fields.Int()
    lastPerformedAt = fields.Str()
    nextDate = fields.Str()
    daysUntil = fields.Int()
    status = fields.Str()


class PlantScheduleResponseSchema(Schema):
    """GET /api/plants/<plant_id>/schedule response."""
    plantId = fields.Str()
    date = fields.Str()
    watering = fields.Nested(ScheduleEntrySchema)
    misting = fields.Nested(ScheduleEntrySchema)
