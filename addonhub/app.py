import kopf
import logging
import addonhub.handlers.watch as watch
import addonhub.handlers.probes as probes
from addonhub.cache import HubCache
from addonhub.progressing import AddonProgressingController, addon_name_filter
from addonhub.resources import BaseResource, ManagedClusterAddOnResource
from addonhub.sensors import init_metrics_server, SensorDelegate, PrometheusMonitor
from addonhub.types.settings import Settings
from addonhub.utils.workqueue import ReconcileQueue
from kubernetes_asyncio import config
from kubernetes_asyncio.client.api_client import ApiClient


@kopf.on.startup()
async def setup(
    settings: kopf.OperatorSettings, memo: kopf.Memo, logger: logging.Logger, **kwargs
):
    # Load Kubernetes config - try in-cluster first (for production), then local kubeconfig (for dev)
    try:
        config.load_incluster_config()
        logger.info("Loaded in-cluster Kubernetes configuration")
    except config.ConfigException:
        logger.info("In-cluster config not found, trying local kubeconfig")
        try:
            await config.load_kube_config()
            logger.info("Loaded local Kubernetes configuration")
        except config.ConfigException as e:
            logger.error(f"Failed to load Kubernetes configuration: {e}")
            raise

    memo.conf = conf = Settings()

    shared_client = ApiClient()
    BaseResource.shared_api_client = shared_client
    logger.info("Shared Kubernetes API client initialized")

    sensor_delegate = SensorDelegate()
    if conf.metrics_enabled:
        sensor_delegate.add(PrometheusMonitor())
        try:
            init_metrics_server(conf.metrics_port)
        except Exception as e:
            logger.error(f"Failed to start metrics server: {e}")
            logger.warning("Continuing without metrics server")
    memo.sensor = sensor_delegate

    memo.cache = HubCache()
    memo.controller = AddonProgressingController(
        memo.cache,
        ManagedClusterAddOnResource(),
        should_reconcile=addon_name_filter(conf.addon_names),
        sensor=sensor_delegate,
        conflict_delay=conf.conflict_retry_delay_seconds,
    )
    memo.queue = ReconcileQueue(
        memo.controller.sync,
        workers=conf.reconcile_workers,
        base_delay=conf.retry_base_delay_seconds,
        max_delay=conf.retry_max_delay_seconds,
        sensor=sensor_delegate,
    )
    memo.queue.start()

    if conf.addon_names:
        logger.info(f"Reconciling addons: {', '.join(sorted(conf.addon_names))}")

    # Limit the number of concurrent workers to prevent flooding the API
    settings.batching.worker_limit = conf.kopf_worker_limit

    # Post only warnings and errors as Kubernetes events
    settings.posting.enabled = True
    settings.posting.level = logging.WARNING


@kopf.on.cleanup()
async def cleanup(memo: kopf.Memo, logger: logging.Logger, **kwargs):
    """Cleanup handler for operator shutdown."""
    logger.info("Shutting down operator...")

    queue = getattr(memo, "queue", None)
    if queue is not None:
        await queue.stop()

    if BaseResource.shared_api_client:
        await BaseResource.shared_api_client.close()
        BaseResource.shared_api_client = None
        logger.info("Shared API client closed")

    logger.info("Operator shutdown complete")


__all__ = [
    "watch",
    "probes",
]
