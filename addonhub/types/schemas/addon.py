from marshmallow import fields
from addonhub.types.base import BaseSchema
from addonhub.types.models.addon import (
    ConfigGroupResource,
    ConfigSpecHash,
    AddonConfig,
    ConfigReference,
    ManagedClusterAddOnSpec,
    ManagedClusterAddOnStatus,
    ManagedClusterAddOn,
)
from addonhub.types.schemas.meta import ObjectMetaSchema, ConditionSchema


class ConfigGroupResourceSchema(BaseSchema):
    __model__ = ConfigGroupResource

    group = fields.String(data_key="group", load_default="", allow_none=True)
    resource = fields.String(data_key="resource", required=True)


class ConfigSpecHashSchema(BaseSchema):
    __model__ = ConfigSpecHash

    namespace = fields.String(data_key="namespace", load_default=None, allow_none=True)
    name = fields.String(data_key="name", required=True)
    spec_hash = fields.String(data_key="specHash", load_default=None, allow_none=True)


class AddonConfigSchema(ConfigGroupResourceSchema):
    __model__ = AddonConfig

    namespace = fields.String(data_key="namespace", load_default=None, allow_none=True)
    name = fields.String(data_key="name", required=True)


class ConfigReferenceSchema(ConfigGroupResourceSchema):
    __model__ = ConfigReference

    namespace = fields.String(data_key="namespace", load_default=None, allow_none=True)
    name = fields.String(data_key="name", load_default=None, allow_none=True)
    desired_config = fields.Nested(
        ConfigSpecHashSchema,
        data_key="desiredConfig",
        load_default=None,
        allow_none=True,
    )
    last_applied_config = fields.Nested(
        ConfigSpecHashSchema,
        data_key="lastAppliedConfig",
        load_default=None,
        allow_none=True,
    )
    last_observed_generation = fields.Integer(
        data_key="lastObservedGeneration", load_default=None, allow_none=True
    )


class ManagedClusterAddOnSpecSchema(BaseSchema):
    __model__ = ManagedClusterAddOnSpec

    install_namespace = fields.String(
        data_key="installNamespace", load_default=None, allow_none=True
    )
    configs = fields.List(
        fields.Nested(AddonConfigSchema), data_key="configs", load_default=list
    )


class ManagedClusterAddOnStatusSchema(BaseSchema):
    __model__ = ManagedClusterAddOnStatus

    supported_configs = fields.List(
        fields.Nested(ConfigGroupResourceSchema),
        data_key="supportedConfigs",
        load_default=list,
    )
    config_references = fields.List(
        fields.Nested(ConfigReferenceSchema),
        data_key="configReferences",
        load_default=list,
    )
    conditions = fields.List(
        fields.Nested(ConditionSchema), data_key="conditions", load_default=list
    )


class ManagedClusterAddOnSchema(BaseSchema):
    __model__ = ManagedClusterAddOn

    metadata = fields.Nested(ObjectMetaSchema, data_key="metadata", required=True)
    spec = fields.Nested(
        ManagedClusterAddOnSpecSchema,
        data_key="spec",
        load_default=lambda: ManagedClusterAddOnSpecSchema().load({}),
    )
    status = fields.Nested(
        ManagedClusterAddOnStatusSchema,
        data_key="status",
        load_default=lambda: ManagedClusterAddOnStatusSchema().load({}),
    )
