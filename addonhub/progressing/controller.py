"""Progressing controller.

Keeps the `Progressing` condition and `lastAppliedConfig` of every
ManagedClusterAddOn in step with the ManifestWorks dispatched for it. Each
sync is a pure function of the cached addon, its ClusterManagementAddOn and
its ManifestWorks, so syncing the same key twice with unchanged inputs
issues at most one status patch.
"""

import copy
import logging
from typing import Callable, FrozenSet, Optional
from kubernetes_asyncio.client import ApiException
from addonhub.cache import CacheError, HubCache, split_key
from addonhub.common.constants import ConditionTypes, ResourceLabels
from addonhub.progressing.matching import evaluate_works
from addonhub.progressing.patch import AddonStatusClient, patch_progressing_and_last_applied
from addonhub.progressing.state import (
    PROGRESSING_DOING,
    PROGRESSING_FAILED,
    PROGRESSING_SUCCEED,
    is_upgrade,
    set_configuration_unsupported,
    set_progressing_and_last_applied,
    set_waiting_for_manifest_applied,
)
from addonhub.progressing.support import is_configuration_supported
from addonhub.sensors import OperatorSensor
from addonhub.types.models import ClusterManagementAddOn, ManagedClusterAddOn
from addonhub.types.settings import CONFLICT_RETRY_DELAY_SECONDS
from addonhub.utils.errors import convert_api_exception, not_found_error
from addonhub.utils.helpers import find_condition

logger = logging.getLogger(__name__)

ShouldReconcile = Callable[[ClusterManagementAddOn], bool]


def addon_name_filter(names: FrozenSet[str]) -> ShouldReconcile:
    """Ownership predicate reconciling only the named add-ons, or all if empty."""

    def should_reconcile(definition: ClusterManagementAddOn) -> bool:
        return not names or definition.name in names

    return should_reconcile


class AddonProgressingController:
    """Reconciles addon progressing state from the hub cache."""

    def __init__(
        self,
        cache: HubCache,
        addon_client: AddonStatusClient,
        should_reconcile: ShouldReconcile = None,
        sensor: Optional[OperatorSensor] = None,
        conflict_delay: float = CONFLICT_RETRY_DELAY_SECONDS,
    ) -> None:
        self.cache = cache
        self.addon_client = addon_client
        self.should_reconcile = should_reconcile or addon_name_filter(frozenset())
        self.sensor = sensor
        self.conflict_delay = conflict_delay

    async def sync(self, key: str) -> None:
        logger.debug(f"Reconciling addon {key!r}")

        try:
            namespace, addon_name = split_key(key)
        except ValueError:
            # ignore addon whose key is invalid
            return

        addon = self.cache.addons.get(addon_name, namespace)
        if addon is None:
            return

        definition = self.cache.definitions.get(addon_name)
        if definition is None:
            return

        if not self.should_reconcile(definition):
            return

        sensor_state = None
        if self.sensor:
            sensor_state = self.sensor.on_reconcile_start(
                addon.name, addon.namespace, addon.metadata.generation
            )

        success = True
        error = None
        try:
            await self.update_progressing_and_last_applied(copy.deepcopy(addon), addon)
        except Exception as e:
            success = False
            error = e
            raise
        finally:
            if self.sensor:
                self.sensor.on_reconcile_complete(
                    addon.name, addon.namespace, sensor_state, success, error
                )

    async def update_progressing_and_last_applied(
        self, new: ManagedClusterAddOn, old: ManagedClusterAddOn
    ) -> None:
        supported, config = is_configuration_supported(new)
        if not supported:
            set_configuration_unsupported(new, config)
            return await self._patch(new, old)

        # The addon is not deployed until the manifests were dispatched at least once
        if find_condition(new.status.conditions, ConditionTypes.MANIFEST_APPLIED) is None:
            set_waiting_for_manifest_applied(new)
            return await self._patch(new, old)

        upgrade = is_upgrade(new)

        try:
            works = self.cache.works.list(
                namespace=new.namespace,
                labels={ResourceLabels.ADDON_NAME_LABEL: new.name},
            )
        except CacheError as e:
            logger.warning(f"Failed to list works of addon {new.key}: {e}")
            set_progressing_and_last_applied(upgrade, PROGRESSING_FAILED, str(e), new)
            return await self._patch(new, old)

        caught_up, message = evaluate_works(works, new)
        if not caught_up:
            set_progressing_and_last_applied(upgrade, PROGRESSING_DOING, message, new)
            return await self._patch(new, old)

        # every work matches the addon and is ready
        set_progressing_and_last_applied(upgrade, PROGRESSING_SUCCEED, "", new)
        return await self._patch(new, old)

    async def _patch(self, new: ManagedClusterAddOn, old: ManagedClusterAddOn) -> None:
        try:
            patch = await patch_progressing_and_last_applied(self.addon_client, new, old)
        except ApiException as e:
            if not_found_error(e):
                logger.info(f"Addon {new.key} is gone, dropping status patch")
                return
            convert_api_exception(e, conflict_delay=self.conflict_delay)
        if patch is None or not self.sensor:
            return

        self.sensor.on_status_patched(new.name, new.namespace, list(patch.get("status", {})))
        old_cond = find_condition(old.status.conditions, ConditionTypes.PROGRESSING)
        new_cond = find_condition(new.status.conditions, ConditionTypes.PROGRESSING)
        if new_cond is not None and (old_cond is None or old_cond.reason != new_cond.reason):
            self.sensor.on_progressing_changed(new.name, new.namespace, new_cond.reason)
