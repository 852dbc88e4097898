"""In-memory views of the hub objects the operator watches.

Stores are populated from watch events (see `addonhub.handlers.watch`) and
are read by the reconcile pipeline. Raw bodies are kept as received and
decoded into models on read, so a malformed object surfaces as a
`CacheError` for the reader instead of being silently dropped.
"""

import copy
import logging
from typing import Any, Dict, Generic, Iterable, List, Mapping, Optional, Type, TypeVar
from marshmallow import ValidationError
from addonhub.types.base import BaseSchema
from addonhub.types.schemas import (
    ManagedClusterAddOnSchema,
    ClusterManagementAddOnSchema,
    ManifestWorkSchema,
)
from addonhub.types.models import (
    ManagedClusterAddOn,
    ClusterManagementAddOn,
    ManifestWork,
)

logger = logging.getLogger(__name__)

DELETED = "DELETED"

MT = TypeVar("MT")


class CacheError(Exception):
    """Raised when a cached object can't be read."""


def object_key(name: str, namespace: Optional[str] = None) -> str:
    return f"{namespace}/{name}" if namespace else name


def split_key(key: str):
    """Split a `namespace/name` key. Cluster-scoped keys have no namespace.

    Raises:
        ValueError: if the key has more than one separator or an empty name.
    """
    parts = key.split("/")
    if len(parts) == 1 and parts[0]:
        return None, parts[0]
    if len(parts) == 2 and parts[1]:
        return parts[0] or None, parts[1]
    raise ValueError(f"unexpected key format: {key!r}")


class ObjectStore(Generic[MT]):
    """Read-only indexed view over one kind of object."""

    def __init__(self, kind: str, schema: Type[BaseSchema]) -> None:
        self.kind = kind
        self._schema = schema()
        self._objects: Dict[str, Dict[str, Any]] = {}

    def __len__(self) -> int:
        return len(self._objects)

    def apply_event(self, event_type: Optional[str], body: Mapping[str, Any]) -> str:
        """Record a watch event and return the key of the affected object."""
        metadata = body.get("metadata") or {}
        key = object_key(metadata.get("name"), metadata.get("namespace"))
        if event_type == DELETED:
            self._objects.pop(key, None)
        else:
            self._objects[key] = copy.deepcopy(dict(body))
        logger.debug(f"{self.kind} {key} {event_type or 'listed'}")
        return key

    def _decode(self, key: str, raw: Dict[str, Any]) -> MT:
        try:
            return self._schema.load(raw)
        except ValidationError as ex:
            raise CacheError(f"failed to decode {self.kind} {key}: {ex.messages}") from ex

    def get(self, name: str, namespace: Optional[str] = None) -> Optional[MT]:
        key = object_key(name, namespace)
        raw = self._objects.get(key)
        if raw is None:
            return None
        return self._decode(key, raw)

    def list(
        self, namespace: Optional[str] = None, labels: Optional[Mapping[str, str]] = None
    ) -> List[MT]:
        """List objects, optionally filtered by namespace and equality labels.

        Objects come back ordered by name.
        """
        result = []
        for key, raw in sorted(self._objects.items(), key=lambda kv: _name_of(kv[1])):
            metadata = raw.get("metadata") or {}
            if namespace is not None and metadata.get("namespace") != namespace:
                continue
            if labels and not _labels_match(metadata.get("labels") or {}, labels):
                continue
            result.append(self._decode(key, raw))
        return result

    def keys(self) -> Iterable[str]:
        return list(self._objects.keys())


def _name_of(raw: Mapping[str, Any]) -> str:
    return (raw.get("metadata") or {}).get("name") or ""


def _labels_match(actual: Mapping[str, str], selector: Mapping[str, str]) -> bool:
    return all(actual.get(k) == v for k, v in selector.items())


class HubCache:
    """The three stores the progressing controller reads from."""

    def __init__(self) -> None:
        self.addons: ObjectStore[ManagedClusterAddOn] = ObjectStore(
            "ManagedClusterAddOn", ManagedClusterAddOnSchema
        )
        self.definitions: ObjectStore[ClusterManagementAddOn] = ObjectStore(
            "ClusterManagementAddOn", ClusterManagementAddOnSchema
        )
        self.works: ObjectStore[ManifestWork] = ObjectStore(
            "ManifestWork", ManifestWorkSchema
        )

    def addon_keys_for(self, addon_name: str) -> List[str]:
        """Keys of every installed instance of the named add-on."""
        keys = []
        for key in self.addons.keys():
            _, name = split_key(key)
            if name == addon_name:
                keys.append(key)
        return sorted(keys)
