"""Matching of dispatched ManifestWorks against an addon's desired configs.

A ManifestWork embeds the spec hash of every config it was rendered from in
the `open-cluster-management.io/config-spec-hash` annotation, e.g.::

    {"addondeploymentconfigs.addon.open-cluster-management.io/ns/cfg": "3f9a..."}

The addon is caught up with a work when these hashes equal the desired config
hashes recorded on the addon, and the work reports itself applied and
available for its current generation.
"""

import json
import logging
from typing import Dict, List, Tuple
from addonhub.common.constants import (
    ConditionStatus,
    ConditionTypes,
    ResourceLabels,
    pre_delete_hook_work_name,
)
from addonhub.types.models import ManagedClusterAddOn, ManifestWork, ConfigReference
from addonhub.utils.helpers import find_condition

logger = logging.getLogger(__name__)

NO_WORKS = "no addon works"
CONFIGS_MISMATCH = "configs mismatch"
WORK_NOT_READY = "work is not ready"


def config_identity(ref: ConfigReference) -> str:
    """Key of a desired config: `<resource>[.<group>]/<namespace>/<name>`."""
    resource = ref.resource
    if ref.group:
        resource += f".{ref.group}"
    desired = ref.desired_config
    return f"{resource}/{desired.namespace or ''}/{desired.name}"


def configs_to_map(config_references: List[ConfigReference]) -> Dict[str, str]:
    """Map the desired config identities of an addon to their spec hashes."""
    spec_hashes = {}
    for ref in config_references:
        if ref.desired_config is None:
            continue
        spec_hashes[config_identity(ref)] = ref.desired_config.spec_hash or ""
    return spec_hashes


def parse_spec_hash_annotation(value: str) -> Dict[str, str]:
    """Decode the config spec hash annotation of a ManifestWork.

    A JSON `null` decodes to an empty mapping.

    Raises:
        ValueError: if the annotation is not a JSON object of strings.
    """
    decoded = json.loads(value)
    if decoded is None:
        return {}
    if not isinstance(decoded, dict) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in decoded.items()
    ):
        raise ValueError(f"expected a JSON object of strings, got {value!r}")
    return decoded


def work_configs_match_addon(work: ManifestWork, addon: ManagedClusterAddOn) -> bool:
    annotations = work.metadata.annotations or {}
    if ResourceLabels.CONFIG_SPEC_HASH_ANNOTATION not in annotations:
        return len(addon.status.config_references) == 0

    try:
        work_spec_hashes = parse_spec_hash_annotation(
            annotations[ResourceLabels.CONFIG_SPEC_HASH_ANNOTATION]
        )
    except ValueError as e:
        logger.warning(f"Invalid config spec hash annotation on work {work.name}: {e}")
        return False

    # the dispatcher has not stamped every config yet
    if any(v == "" for v in work_spec_hashes.values()):
        return False

    for ref in addon.status.config_references:
        if ref.desired_config is None or not ref.desired_config.spec_hash:
            return False

    return work_spec_hashes == configs_to_map(addon.status.config_references)


def work_is_ready(work: ManifestWork) -> bool:
    """A work is ready when it is both Available and Applied at its current generation."""
    for cond_type in (ConditionTypes.WORK_AVAILABLE, ConditionTypes.WORK_APPLIED):
        cond = find_condition(work.status.conditions, cond_type)
        if (
            cond is None
            or cond.status != ConditionStatus.TRUE
            or (cond.observed_generation or 0) != (work.generation or 0)
        ):
            return False
    return True


def is_pre_delete_hook_work(work: ManifestWork, addon_name: str) -> bool:
    return work.name.startswith(pre_delete_hook_work_name(addon_name))


def evaluate_works(
    works: List[ManifestWork], addon: ManagedClusterAddOn
) -> Tuple[bool, str]:
    """Check whether every deploy work of the addon has caught up.

    Returns:
        `(True, "")` when all works match and are ready, otherwise
        `(False, <reason message>)` for the first work that does not.
    """
    evaluated = 0
    for work in works:
        if is_pre_delete_hook_work(work, addon.name):
            continue
        evaluated += 1

        if not work_configs_match_addon(work, addon):
            logger.debug(f"Work {work.name} configs do not match addon {addon.key}")
            return False, CONFIGS_MISMATCH

        if not work_is_ready(work):
            logger.debug(f"Work {work.name} of addon {addon.key} is not ready")
            return False, WORK_NOT_READY

    if evaluated == 0:
        return False, NO_WORKS
    return True, ""
