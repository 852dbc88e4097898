from .base import BaseResource
from .addon import ManagedClusterAddOnResource

__all__ = ["BaseResource", "ManagedClusterAddOnResource"]
