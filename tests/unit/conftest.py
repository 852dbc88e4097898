"""Shared builders for hub objects used across unit tests."""

import json
import pytest
from addonhub.cache import HubCache
from addonhub.common.constants import ConditionTypes, ResourceLabels

ADDON_CONFIG_GROUP = "addon.open-cluster-management.io"
ADDON_CONFIG_RESOURCE = "addondeploymentconfigs"


def condition(type_, status="True", observed_generation=None, reason=None, message=None):
    cond = {"type": type_, "status": status, "lastTransitionTime": "2024-01-01T00:00:00Z"}
    if observed_generation is not None:
        cond["observedGeneration"] = observed_generation
    if reason is not None:
        cond["reason"] = reason
    if message is not None:
        cond["message"] = message
    return cond


def manifest_applied():
    return condition(ConditionTypes.MANIFEST_APPLIED, "True", reason="AddonManifestApplied")


def config_reference(desired_hash="hash1", last_applied_hash=None, name="test", namespace="cluster1"):
    ref = {
        "group": ADDON_CONFIG_GROUP,
        "resource": ADDON_CONFIG_RESOURCE,
        "namespace": namespace,
        "name": name,
        "desiredConfig": {"namespace": namespace, "name": name, "specHash": desired_hash},
    }
    if last_applied_hash is not None:
        ref["lastAppliedConfig"] = {
            "namespace": namespace,
            "name": name,
            "specHash": last_applied_hash,
        }
    return ref


def make_addon(
    name="test",
    namespace="cluster1",
    conditions=None,
    config_references=None,
    configs=None,
    supported_configs=None,
):
    return {
        "apiVersion": "addon.open-cluster-management.io/v1alpha1",
        "kind": "ManagedClusterAddOn",
        "metadata": {
            "name": name,
            "namespace": namespace,
            "uid": f"uid-{name}",
            "resourceVersion": "100",
            "generation": 1,
        },
        "spec": {"installNamespace": "open-cluster-management-agent-addon", "configs": configs or []},
        "status": {
            "supportedConfigs": supported_configs or [],
            "configReferences": config_references or [],
            "conditions": conditions or [],
        },
    }


def make_definition(name="test"):
    return {
        "apiVersion": "addon.open-cluster-management.io/v1alpha1",
        "kind": "ClusterManagementAddOn",
        "metadata": {"name": name, "uid": f"cma-{name}"},
        "spec": {
            "addOnMeta": {"displayName": name},
            "supportedConfigs": [
                {"group": ADDON_CONFIG_GROUP, "resource": ADDON_CONFIG_RESOURCE}
            ],
        },
    }


def spec_hash_key(name="test", namespace="cluster1"):
    return f"{ADDON_CONFIG_RESOURCE}.{ADDON_CONFIG_GROUP}/{namespace}/{name}"


def make_work(
    name="addon-test-deploy-0",
    namespace="cluster1",
    addon_name="test",
    spec_hashes=None,
    generation=1,
    applied=True,
    available=True,
    observed_generation=1,
):
    annotations = {}
    if spec_hashes is not None:
        annotations[ResourceLabels.CONFIG_SPEC_HASH_ANNOTATION] = json.dumps(spec_hashes)
    return {
        "apiVersion": "work.open-cluster-management.io/v1",
        "kind": "ManifestWork",
        "metadata": {
            "name": name,
            "namespace": namespace,
            "generation": generation,
            "labels": {ResourceLabels.ADDON_NAME_LABEL: addon_name},
            "annotations": annotations,
        },
        "spec": {"workload": {"manifests": []}},
        "status": {
            "conditions": [
                condition(
                    ConditionTypes.WORK_APPLIED,
                    "True" if applied else "False",
                    observed_generation=observed_generation,
                ),
                condition(
                    ConditionTypes.WORK_AVAILABLE,
                    "True" if available else "False",
                    observed_generation=observed_generation,
                ),
            ]
        },
    }


class FakeAddonClient:
    """Records status patches instead of sending them."""

    def __init__(self, error=None):
        self.actions = []
        self.error = error

    async def patch_status(self, namespace, name, patch):
        if self.error is not None:
            raise self.error
        self.actions.append((namespace, name, patch))
        return {}


def apply_status_patch(body, patch):
    """Merge a status patch into a raw addon body the way the API server would."""
    body = json.loads(json.dumps(body))
    body["status"].update(patch.get("status", {}))
    body["metadata"]["resourceVersion"] = str(int(body["metadata"]["resourceVersion"]) + 1)
    return body


@pytest.fixture
def cache():
    return HubCache()


@pytest.fixture
def client():
    return FakeAddonClient()
