from marshmallow import fields
from addonhub.types.base import BaseSchema
from addonhub.types.models.manifest_work import ManifestWorkStatus, ManifestWork
from addonhub.types.schemas.meta import ObjectMetaSchema, ConditionSchema


class ManifestWorkStatusSchema(BaseSchema):
    __model__ = ManifestWorkStatus

    conditions = fields.List(
        fields.Nested(ConditionSchema), data_key="conditions", load_default=list
    )


class ManifestWorkSchema(BaseSchema):
    """Loads the parts of a ManifestWork relevant to rollout tracking.

    The manifests themselves (`spec.workload`) are not modeled.
    """

    __model__ = ManifestWork

    metadata = fields.Nested(ObjectMetaSchema, data_key="metadata", required=True)
    status = fields.Nested(
        ManifestWorkStatusSchema,
        data_key="status",
        load_default=lambda: ManifestWorkStatusSchema().load({}),
    )
