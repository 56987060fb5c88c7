# plant_care/api/tasks/schemas.py
from marshmallow import Schema, fields, validate, pre_load, EXCLUDE


class TasksQuerySchema(Schema):
    """GET /api/tasks query parameters."""
    class Meta:
        unknown = EXCLUDE

    days = fields.Int(validate=validate.Range(min=1, max=366))
    grouped = fields.Bool(load_default=False)

    @pre_load
    def preprocess_data(self, data, **kwargs):
        # ImmutableMultiDict -> plain dict
        processed_data = dict(data)
        if 'grouped' in processed_data and isinstance(processed_data['grouped'], str):
            processed_data['grouped'] = processed_data['grouped'].lower() in ('true', '1', 'yes')
        return processed_data


class CareTaskSchema(Schema):
    id = fields.Str()
    plantId = fields.Str()
    plantName = fields.Str()
    type = fields.Str()
    date = fields.Str()
    status = fields.Str()


class TodayTasksResponseSchema(Schema):
    date = fields.Str()
    due = fields.List(fields.Nested(CareTaskSchema), dump_default=[])
    overdue = fields.List(fields.Nested(CareTaskSchema), dump_default=[])
    count = fields.Int()


class TasksResponseSchema(Schema):
    tasks = fields.List(fields.Nested(CareTaskSchema), dump_default=[])
    meta = fields.Dict(dump_default={})
    grouped = fields.Dict(keys=fields.Str(), values=fields.List(fields.Nested(CareTaskSchema)))
