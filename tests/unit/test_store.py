"""Unit tests for the hub cache stores."""

import pytest
from addonhub.cache import CacheError, HubCache, object_key, split_key
from conftest import make_addon, make_definition, make_work


class TestKeys:
    def test_object_key(self):
        assert object_key("test", "cluster1") == "cluster1/test"
        assert object_key("test") == "test"

    @pytest.mark.parametrize(
        "key,expected",
        [
            ("cluster1/test", ("cluster1", "test")),
            ("test", (None, "test")),
            ("/test", (None, "test")),
        ],
    )
    def test_split_key(self, key, expected):
        assert split_key(key) == expected

    @pytest.mark.parametrize("key", ["", "a/b/c", "cluster1/"])
    def test_split_invalid_key(self, key):
        with pytest.raises(ValueError):
            split_key(key)


class TestObjectStore:
    def test_apply_and_get(self):
        cache = HubCache()
        key = cache.addons.apply_event("ADDED", make_addon())
        assert key == "cluster1/test"

        addon = cache.addons.get("test", "cluster1")
        assert addon.name == "test"
        assert addon.namespace == "cluster1"
        assert addon.metadata.resource_version == "100"
        assert cache.addons.get("test", "cluster2") is None

    def test_delete(self):
        cache = HubCache()
        cache.addons.apply_event(None, make_addon())
        cache.addons.apply_event("DELETED", make_addon())
        assert cache.addons.get("test", "cluster1") is None
        assert len(cache.addons) == 0

    def test_stored_body_is_a_copy(self):
        cache = HubCache()
        body = make_addon()
        cache.addons.apply_event(None, body)
        body["metadata"]["resourceVersion"] = "999"
        assert cache.addons.get("test", "cluster1").metadata.resource_version == "100"

    def test_cluster_scoped(self):
        cache = HubCache()
        assert cache.definitions.apply_event(None, make_definition()) == "test"
        definition = cache.definitions.get("test")
        assert definition.name == "test"
        assert definition.spec.supported_configs[0].resource == "addondeploymentconfigs"

    def test_list_filters_by_namespace_and_labels(self):
        cache = HubCache()
        cache.works.apply_event(None, make_work(name="w-2"))
        cache.works.apply_event(None, make_work(name="w-1"))
        cache.works.apply_event(None, make_work(name="w-3", namespace="cluster2"))
        cache.works.apply_event(None, make_work(name="w-4", addon_name="other"))

        works = cache.works.list(
            namespace="cluster1",
            labels={"open-cluster-management.io/addon-name": "test"},
        )
        assert [w.name for w in works] == ["w-1", "w-2"]
        assert len(cache.works.list()) == 4

    def test_malformed_object_raises_cache_error(self):
        cache = HubCache()
        body = make_addon()
        body["metadata"]["generation"] = "x"
        cache.addons.apply_event(None, body)
        with pytest.raises(CacheError):
            cache.addons.get("test", "cluster1")

    def test_addon_keys_for(self):
        cache = HubCache()
        cache.addons.apply_event(None, make_addon(namespace="cluster2"))
        cache.addons.apply_event(None, make_addon(namespace="cluster1"))
        cache.addons.apply_event(None, make_addon(name="other"))
        assert cache.addon_keys_for("test") == ["cluster1/test", "cluster2/test"]
        assert cache.addon_keys_for("missing") == []
