from typing import List, Optional
from addonhub.types.base import BaseModel
from addonhub.types.models.meta import ObjectMeta
from addonhub.types.models.addon import ConfigGroupResource


class AddOnMeta(BaseModel):
    display_name: Optional[str]
    description: Optional[str]


class ConfigCoordinates(BaseModel):
    namespace: Optional[str]
    name: str


class SupportedConfig(ConfigGroupResource):
    default_config: Optional[ConfigCoordinates]


class ClusterManagementAddOnSpec(BaseModel):
    addon_meta: Optional[AddOnMeta]
    supported_configs: List[SupportedConfig]


class ClusterManagementAddOn(BaseModel):
    """Fleet-wide definition of an add-on."""

    metadata: ObjectMeta
    spec: ClusterManagementAddOnSpec

    @property
    def name(self) -> str:
        return self.metadata.name
