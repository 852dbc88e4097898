from .meta import ObjectMeta, Condition
from .addon import (
    ConfigGroupResource,
    ConfigSpecHash,
    AddonConfig,
    ConfigReference,
    ManagedClusterAddOnSpec,
    ManagedClusterAddOnStatus,
    ManagedClusterAddOn,
)
from .addon_definition import (
    AddOnMeta,
    ConfigCoordinates,
    SupportedConfig,
    ClusterManagementAddOnSpec,
    ClusterManagementAddOn,
)
from .manifest_work import ManifestWorkStatus, ManifestWork
