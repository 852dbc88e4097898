"""Watch handlers feeding the hub cache and the reconcile queue.

Every event updates the cache first and then requests reconciliation of the
addons it affects:

- a ManagedClusterAddOn event affects that addon
- a ClusterManagementAddOn event affects every installed instance of it
- a ManifestWork event affects the addon named by its addon-name label
"""

import kopf
import logging
from typing import Any, Iterable, List, Mapping
from addonhub.cache import HubCache, object_key
from addonhub.common.constants import AddonApi, WorkApi, ResourceLabels


class EventLogFilter(logging.Filter):
    def filter(self, record):
        """Event handler logs are noisy so we filter them out."""
        return "_event' succeeded" not in record.getMessage()


kopf_logger = logging.getLogger("kopf.objects")
kopf_logger.addFilter(EventLogFilter())


def addon_event_keys(cache: HubCache, event: Mapping[str, Any]) -> List[str]:
    return [cache.addons.apply_event(event.get("type"), event["object"])]


def definition_event_keys(cache: HubCache, event: Mapping[str, Any]) -> List[str]:
    key = cache.definitions.apply_event(event.get("type"), event["object"])
    return cache.addon_keys_for(key)


def work_event_keys(cache: HubCache, event: Mapping[str, Any]) -> List[str]:
    cache.works.apply_event(event.get("type"), event["object"])
    metadata = event["object"].get("metadata") or {}
    addon_name = (metadata.get("labels") or {}).get(ResourceLabels.ADDON_NAME_LABEL)
    if not addon_name:
        return []
    return [object_key(addon_name, metadata.get("namespace"))]


def _enqueue(memo: kopf.Memo, keys: Iterable[str]) -> None:
    for key in keys:
        memo.queue.add(key)


@kopf.on.event(AddonApi.GROUP, AddonApi.VERSION, AddonApi.MANAGED_CLUSTER_ADDON_PLURAL)
def on_addon_event(event, memo: kopf.Memo, **kwargs):
    """Track ManagedClusterAddOn changes."""
    _enqueue(memo, addon_event_keys(memo.cache, event))


@kopf.on.event(AddonApi.GROUP, AddonApi.VERSION, AddonApi.CLUSTER_MANAGEMENT_ADDON_PLURAL)
def on_definition_event(event, memo: kopf.Memo, **kwargs):
    """Track ClusterManagementAddOn changes."""
    _enqueue(memo, definition_event_keys(memo.cache, event))


@kopf.on.event(WorkApi.GROUP, WorkApi.VERSION, WorkApi.MANIFEST_WORK_PLURAL)
def on_work_event(event, memo: kopf.Memo, **kwargs):
    """Track ManifestWork changes."""
    _enqueue(memo, work_event_keys(memo.cache, event))
