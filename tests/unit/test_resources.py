"""Unit tests for writing addon status through the Kubernetes API client."""

import asyncio
import json
from kubernetes_asyncio.client import ApiClient, Configuration
from addonhub.resources import ManagedClusterAddOnResource

HOST = "https://hub.example.com:6443"


class RecordedResponse:
    """Minimal stand-in for the REST client's response object."""

    status = 200
    reason = "OK"

    def __init__(self, body):
        self.data = json.dumps(body).encode("utf-8")

    def getheaders(self):
        return {"Content-Type": "application/json"}

    def getheader(self, name, default=None):
        return self.getheaders().get(name, default)


def patch_status(patch):
    """Send `patch` through a real ApiClient and return the captured request."""
    requests = []

    async def request(*args, **kwargs):
        requests.append((args, kwargs))
        return RecordedResponse({"status": patch.get("status", {})})

    async def scenario():
        api_client = ApiClient(Configuration(host=HOST))
        api_client.rest_client.request = request
        try:
            result = await ManagedClusterAddOnResource(api_client).patch_status(
                "cluster1", "test", patch
            )
        finally:
            await api_client.close()
        return result

    result = asyncio.run(scenario())
    assert len(requests) == 1
    args, kwargs = requests[0]
    method = args[0] if args else kwargs["method"]
    url = args[1] if len(args) > 1 else kwargs["url"]
    return method, url, kwargs, result


class TestManagedClusterAddOnResource:
    """Tests for ManagedClusterAddOnResource.patch_status."""

    patch = {
        "metadata": {"uid": "uid-test", "resourceVersion": "100"},
        "status": {
            "conditions": [
                {"type": "Progressing", "status": "True", "reason": "Installing"}
            ]
        },
    }

    def test_patches_status_subresource(self):
        method, url, _, _ = patch_status(self.patch)
        assert method == "PATCH"
        assert url == (
            f"{HOST}/apis/addon.open-cluster-management.io/v1alpha1"
            "/namespaces/cluster1/managedclusteraddons/test/status"
        )

    def test_sends_merge_patch(self):
        _, _, kwargs, _ = patch_status(self.patch)
        assert kwargs["headers"]["Content-Type"] == "application/merge-patch+json"
        assert kwargs["body"] == self.patch

    def test_returns_patched_object(self):
        _, _, _, result = patch_status(self.patch)
        assert result["status"] == self.patch["status"]
