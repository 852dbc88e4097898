"""Unit tests for mapping watch events to reconcile keys."""

from types import SimpleNamespace
from addonhub.handlers import probes
from addonhub.handlers.watch import (
    addon_event_keys,
    definition_event_keys,
    on_addon_event,
    work_event_keys,
)
from addonhub.utils.workqueue import ReconcileQueue
from conftest import make_addon, make_definition, make_work


class TestEventKeys:
    def test_addon_event(self, cache):
        event = {"type": "ADDED", "object": make_addon()}
        assert addon_event_keys(cache, event) == ["cluster1/test"]
        assert cache.addons.get("test", "cluster1") is not None

    def test_addon_deleted_event_still_requests_reconcile(self, cache):
        cache.addons.apply_event(None, make_addon())
        event = {"type": "DELETED", "object": make_addon()}
        assert addon_event_keys(cache, event) == ["cluster1/test"]
        assert cache.addons.get("test", "cluster1") is None

    def test_definition_event_fans_out_to_installed_addons(self, cache):
        cache.addons.apply_event(None, make_addon(namespace="cluster1"))
        cache.addons.apply_event(None, make_addon(namespace="cluster2"))
        cache.addons.apply_event(None, make_addon(name="other", namespace="cluster1"))

        event = {"type": "MODIFIED", "object": make_definition()}
        assert definition_event_keys(cache, event) == ["cluster1/test", "cluster2/test"]
        assert cache.definitions.get("test") is not None

    def test_work_event_maps_to_labelled_addon(self, cache):
        event = {"type": "MODIFIED", "object": make_work(namespace="cluster2")}
        assert work_event_keys(cache, event) == ["cluster2/test"]
        assert len(cache.works) == 1

    def test_unlabelled_work_is_stored_only(self, cache):
        body = make_work()
        body["metadata"]["labels"] = {}
        assert work_event_keys(cache, {"type": None, "object": body}) == []
        assert len(cache.works) == 1


class TestHandlers:
    def test_addon_handler_enqueues(self, cache):
        async def sync(key):
            pass

        memo = SimpleNamespace(cache=cache, queue=ReconcileQueue(sync, workers=1))
        on_addon_event(event={"type": None, "object": make_addon()}, memo=memo)
        assert "cluster1/test" in memo.queue
        assert memo.queue.depth == 1

    def test_queue_probe(self):
        assert probes.get_queue_depth(memo=SimpleNamespace()) == 0
