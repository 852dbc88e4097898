from addonhub.cache.store import (
    CacheError,
    ObjectStore,
    HubCache,
    object_key,
    split_key,
)

__all__ = ["CacheError", "ObjectStore", "HubCache", "object_key", "split_key"]
