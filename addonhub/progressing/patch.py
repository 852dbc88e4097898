import logging
from typing import Any, Dict, Optional, Protocol
from addonhub.types.models import ManagedClusterAddOn
from addonhub.types.schemas import ManagedClusterAddOnStatusSchema
from addonhub.utils.helpers import canonicalize_dict, create_merge_patch, deep_compare_dict

logger = logging.getLogger(__name__)

# Status fields owned by the progressing controller
_OWNED_FIELDS = ("config_references", "conditions")

_status_schema = ManagedClusterAddOnStatusSchema(only=_OWNED_FIELDS)


class AddonStatusClient(Protocol):
    async def patch_status(
        self, namespace: str, name: str, patch: Dict[str, Any]
    ) -> Dict[str, Any]: ...


def owned_status(addon: ManagedClusterAddOn) -> Dict[str, Any]:
    """Dump the status fields this controller owns, in API form."""
    dumped = _status_schema.dump(addon.status)
    return {
        "configReferences": dumped.get("configReferences", []),
        "conditions": dumped.get("conditions", []),
    }


def build_status_patch(
    new: ManagedClusterAddOn, old: ManagedClusterAddOn
) -> Optional[Dict[str, Any]]:
    """Merge patch from `old` to `new` status, or None when nothing changed.

    The patch carries the uid and resourceVersion of `new` so the API server
    rejects it if the addon changed since it was read.
    """
    old_status = owned_status(old)
    new_status = owned_status(new)
    if deep_compare_dict(old_status, new_status):
        return None

    metadata = {
        "uid": new.metadata.uid,
        "resourceVersion": new.metadata.resource_version,
    }
    modified = {
        "metadata": {k: v for k, v in metadata.items() if v is not None},
        "status": new_status,
    }
    return create_merge_patch({"status": old_status}, modified)


async def patch_progressing_and_last_applied(
    client: AddonStatusClient, new: ManagedClusterAddOn, old: ManagedClusterAddOn
) -> Optional[Dict[str, Any]]:
    """Persist the owned status fields of `new` if they differ from `old`.

    Returns:
        The patch that was sent, or None if no request was needed.
    """
    patch = build_status_patch(new, old)
    if patch is None:
        return None

    logger.info(
        f"Patching addon {new.namespace}/{new.name} condition and last applied config "
        f"with {canonicalize_dict(patch)}"
    )
    await client.patch_status(new.namespace, new.name, patch)
    return patch
