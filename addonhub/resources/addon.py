from typing import Any, Dict
from addonhub.common.constants import AddonApi
from addonhub.resources.base import BaseResource


class ManagedClusterAddOnResource(BaseResource):
    """Writes to ManagedClusterAddOn objects on the hub."""

    KIND = AddonApi.MANAGED_CLUSTER_ADDON_KIND
    GROUP = AddonApi.GROUP
    VERSION = AddonApi.VERSION
    PLURAL = AddonApi.MANAGED_CLUSTER_ADDON_PLURAL

    async def patch_status(
        self, namespace: str, name: str, patch: Dict[str, Any]
    ) -> Dict[str, Any]:
        """Apply a JSON merge patch to the addon's status subresource."""
        return await self.patch_custom_object_status(
            self.custom_objects_api, namespace, name, patch
        )
