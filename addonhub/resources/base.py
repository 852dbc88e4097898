from typing import Any, Dict
from kubernetes_asyncio.client import ApiClient, CustomObjectsApi


class BaseResource:
    """Base class for custom resources the operator writes to."""

    GROUP: str
    VERSION: str
    PLURAL: str

    # Shared across instances, set on operator startup
    shared_api_client: ApiClient = None

    def __init__(self, api_client: ApiClient = None) -> None:
        self._api_client = api_client

    @property
    def api_client(self) -> ApiClient:
        return self._api_client or self.shared_api_client

    @property
    def custom_objects_api(self) -> CustomObjectsApi:
        return CustomObjectsApi(self.api_client)

    async def patch_custom_object_status(
        self,
        custom_objects_api: CustomObjectsApi,
        namespace: str,
        name: str,
        body: Dict[str, Any],
    ) -> Dict[str, Any]:
        """Merge-patch the status subresource of a namespaced custom object.

        The generated client defaults PATCH bodies to JSON Patch, so the merge
        patch content type is set explicitly.
        """
        return await custom_objects_api.patch_namespaced_custom_object_status(
            group=self.GROUP,
            version=self.VERSION,
            namespace=namespace,
            plural=self.PLURAL,
            name=name,
            body=body,
            _content_type="application/merge-patch+json",
        )
