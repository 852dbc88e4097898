from .meta import ObjectMetaSchema, ConditionSchema
from .addon import (
    ConfigGroupResourceSchema,
    ConfigSpecHashSchema,
    AddonConfigSchema,
    ConfigReferenceSchema,
    ManagedClusterAddOnSpecSchema,
    ManagedClusterAddOnStatusSchema,
    ManagedClusterAddOnSchema,
)
from .addon_definition import (
    AddOnMetaSchema,
    ConfigCoordinatesSchema,
    SupportedConfigSchema,
    ClusterManagementAddOnSpecSchema,
    ClusterManagementAddOnSchema,
)
from .manifest_work import ManifestWorkStatusSchema, ManifestWorkSchema
