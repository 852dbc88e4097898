from marshmallow import fields
from addonhub.types.base import BaseSchema
from addonhub.types.models.addon_definition import (
    AddOnMeta,
    ConfigCoordinates,
    SupportedConfig,
    ClusterManagementAddOnSpec,
    ClusterManagementAddOn,
)
from addonhub.types.schemas.addon import ConfigGroupResourceSchema
from addonhub.types.schemas.meta import ObjectMetaSchema


class AddOnMetaSchema(BaseSchema):
    __model__ = AddOnMeta

    display_name = fields.String(data_key="displayName", load_default=None, allow_none=True)
    description = fields.String(data_key="description", load_default=None, allow_none=True)


class ConfigCoordinatesSchema(BaseSchema):
    __model__ = ConfigCoordinates

    namespace = fields.String(data_key="namespace", load_default=None, allow_none=True)
    name = fields.String(data_key="name", required=True)


class SupportedConfigSchema(ConfigGroupResourceSchema):
    __model__ = SupportedConfig

    default_config = fields.Nested(
        ConfigCoordinatesSchema,
        data_key="defaultConfig",
        load_default=None,
        allow_none=True,
    )


class ClusterManagementAddOnSpecSchema(BaseSchema):
    __model__ = ClusterManagementAddOnSpec

    addon_meta = fields.Nested(
        AddOnMetaSchema, data_key="addOnMeta", load_default=None, allow_none=True
    )
    supported_configs = fields.List(
        fields.Nested(SupportedConfigSchema),
        data_key="supportedConfigs",
        load_default=list,
    )


class ClusterManagementAddOnSchema(BaseSchema):
    __model__ = ClusterManagementAddOn

    metadata = fields.Nested(ObjectMetaSchema, data_key="metadata", required=True)
    spec = fields.Nested(
        ClusterManagementAddOnSpecSchema,
        data_key="spec",
        load_default=lambda: ClusterManagementAddOnSpecSchema().load({}),
    )
