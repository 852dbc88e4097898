from typing import List, Optional, Tuple
from addonhub.types.base import BaseModel
from addonhub.types.models.meta import ObjectMeta, Condition


class ConfigGroupResource(BaseModel):
    """Kind of configuration, identified by API group and resource."""

    group: str
    resource: str

    @property
    def key(self) -> Tuple[str, str]:
        return (self.group or "", self.resource or "")


class ConfigSpecHash(BaseModel):
    """A configuration object plus the hash of its spec."""

    namespace: Optional[str]
    name: str
    spec_hash: Optional[str]


class AddonConfig(ConfigGroupResource):
    """Entry of `spec.configs`."""

    namespace: Optional[str]
    name: str


class ConfigReference(ConfigGroupResource):
    """Entry of `status.configReferences`."""

    namespace: Optional[str]
    name: Optional[str]
    desired_config: Optional[ConfigSpecHash]
    last_applied_config: Optional[ConfigSpecHash]
    last_observed_generation: Optional[int]


class ManagedClusterAddOnSpec(BaseModel):
    install_namespace: Optional[str]
    configs: List[AddonConfig]


class ManagedClusterAddOnStatus(BaseModel):
    supported_configs: List[ConfigGroupResource]
    config_references: List[ConfigReference]
    conditions: List[Condition]


class ManagedClusterAddOn(BaseModel):
    """Per-cluster installation of an add-on."""

    metadata: ObjectMeta
    spec: ManagedClusterAddOnSpec
    status: ManagedClusterAddOnStatus

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def namespace(self) -> str:
        return self.metadata.namespace

    @property
    def key(self) -> str:
        return f"{self.namespace}/{self.name}"
