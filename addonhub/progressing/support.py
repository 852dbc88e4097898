from typing import Tuple
from addonhub.types.models import ManagedClusterAddOn, ConfigGroupResource


def is_configuration_supported(
    addon: ManagedClusterAddOn,
) -> Tuple[bool, ConfigGroupResource]:
    """Check every configured kind against the addon's supported kinds.

    Returns:
        `(True, <empty group/resource>)` when all kinds are supported, else
        `(False, <first unsupported group/resource>)` in declaration order.
    """
    supported = {config.key for config in addon.status.supported_configs}

    for config in addon.spec.configs:
        if config.key not in supported:
            return False, ConfigGroupResource(group=config.group or "", resource=config.resource)

    return True, ConfigGroupResource(group="", resource="")
