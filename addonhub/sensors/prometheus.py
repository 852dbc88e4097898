"""Prometheus monitoring backend.

Metrics fall into two groups:

1. Reconcile loop health - sync duration, throughput, errors and queueing
2. Addon status - status patches and Progressing reason transitions
"""

from typing import Any, Dict, List, Optional
import time
import logging

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Gauge, Histogram

from addonhub.sensors.base import OperatorSensor

logger = logging.getLogger(__name__)


class PrometheusMonitor(OperatorSensor):
    """Prometheus metrics monitor for the addon progressing controller.

    Example:
        monitor = PrometheusMonitor()
        state = monitor.on_reconcile_start("my-addon", "cluster1", 3)
        monitor.on_reconcile_complete("my-addon", "cluster1", state, True)
    """

    def __init__(self, registry: CollectorRegistry = REGISTRY):
        super().__init__()

        # =============================================================================
        # Reconcile Loop Metrics
        # =============================================================================

        self.reconcile_duration = Histogram(
            'addonhub_reconcile_duration_seconds',
            'Time spent syncing an addon',
            labelnames=['addon_name', 'namespace', 'result'],
            buckets=[0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 2.5, 5.0, 10.0],
            registry=registry,
        )

        self.reconcile_total = Counter(
            'addonhub_reconcile_total',
            'Total number of addon syncs',
            labelnames=['addon_name', 'namespace', 'result'],
            registry=registry,
        )

        self.reconcile_errors = Counter(
            'addonhub_reconcile_errors_total',
            'Total number of failed addon syncs',
            labelnames=['addon_name', 'namespace', 'error_type'],
            registry=registry,
        )

        self.reconcile_queue_depth = Gauge(
            'addonhub_reconcile_queue_depth',
            'Number of addon keys waiting in the reconcile queue',
            registry=registry,
        )

        self.reconcile_queue_wait_seconds = Histogram(
            'addonhub_reconcile_queue_wait_seconds',
            'Time an addon key spent waiting in the reconcile queue',
            buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 5.0, 10.0, 30.0],
            registry=registry,
        )

        # =============================================================================
        # Status Metrics
        # =============================================================================

        self.status_patches = Counter(
            'addonhub_status_patches_total',
            'Total number of addon status patches',
            labelnames=['addon_name', 'namespace', 'update_field'],
            registry=registry,
        )

        self.progressing_transitions = Counter(
            'addonhub_progressing_transitions_total',
            'Total number of Progressing condition reason transitions',
            labelnames=['addon_name', 'namespace', 'reason'],
            registry=registry,
        )

        logger.info("PrometheusMonitor initialized with all metrics")

    # =============================================================================
    # Reconcile Lifecycle Hooks
    # =============================================================================

    def on_reconcile_start(
        self,
        addon_name: str,
        namespace: str,
        generation: Optional[int],
    ) -> Optional[Dict[str, Any]]:
        """Record sync start time."""
        return {'start_time': time.time()}

    def on_reconcile_complete(
        self,
        addon_name: str,
        namespace: str,
        state: Optional[Dict[str, Any]],
        success: bool,
        error: Optional[Exception] = None,
    ) -> None:
        """Record sync duration and result."""
        result = 'success' if success else 'failure'
        if state:
            duration = time.time() - state['start_time']
            self.reconcile_duration.labels(
                addon_name=addon_name,
                namespace=namespace,
                result=result,
            ).observe(duration)

        self.reconcile_total.labels(
            addon_name=addon_name,
            namespace=namespace,
            result=result,
        ).inc()

        if error:
            self.reconcile_errors.labels(
                addon_name=addon_name,
                namespace=namespace,
                error_type=error.__class__.__name__,
            ).inc()

    def on_reconcile_queued(self, key: str, queue_depth: int) -> None:
        self.reconcile_queue_depth.set(queue_depth)

    def on_reconcile_dequeued(self, key: str, wait_time: float, queue_depth: int) -> None:
        self.reconcile_queue_wait_seconds.observe(wait_time)
        self.reconcile_queue_depth.set(queue_depth)

    # =============================================================================
    # Status Hooks
    # =============================================================================

    def on_status_patched(
        self, addon_name: str, namespace: str, update_fields: List[str]
    ) -> None:
        for field in update_fields:
            self.status_patches.labels(
                addon_name=addon_name,
                namespace=namespace,
                update_field=field,
            ).inc()

    def on_progressing_changed(self, addon_name: str, namespace: str, reason: str) -> None:
        self.progressing_transitions.labels(
            addon_name=addon_name,
            namespace=namespace,
            reason=reason,
        ).inc()
