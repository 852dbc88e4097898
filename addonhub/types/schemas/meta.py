from marshmallow import fields
from addonhub.types.base import BaseSchema
from addonhub.types.models.meta import ObjectMeta, Condition


class ObjectMetaSchema(BaseSchema):
    __model__ = ObjectMeta

    name = fields.String(data_key="name", load_default=None)
    namespace = fields.String(data_key="namespace", load_default=None, allow_none=True)
    uid = fields.String(data_key="uid", load_default=None, allow_none=True)
    resource_version = fields.String(
        data_key="resourceVersion", load_default=None, allow_none=True
    )
    generation = fields.Integer(data_key="generation", load_default=0)
    labels = fields.Dict(
        keys=fields.String(),
        values=fields.String(),
        data_key="labels",
        load_default=dict,
        allow_none=True,
    )
    annotations = fields.Dict(
        keys=fields.String(),
        values=fields.String(),
        data_key="annotations",
        load_default=dict,
        allow_none=True,
    )


class ConditionSchema(BaseSchema):
    __model__ = Condition

    type = fields.String(data_key="type", required=True)
    status = fields.String(data_key="status", required=True)
    reason = fields.String(data_key="reason", load_default=None, allow_none=True)
    message = fields.String(data_key="message", load_default=None, allow_none=True)
    observed_generation = fields.Integer(
        data_key="observedGeneration", load_default=None, allow_none=True
    )
    last_transition_time = fields.String(
        data_key="lastTransitionTime", load_default=None, allow_none=True
    )
