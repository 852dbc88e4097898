"""Base sensor class for operator monitoring.

Hooks are no-ops by default so subclasses override only the events they
care about. Start hooks may return a state dict which is handed back to the
matching complete hook.
"""

from typing import Any, Dict, List, Optional
import logging

logger = logging.getLogger(__name__)


class OperatorSensor:
    """Lifecycle hooks of the addon progressing controller.

    Example:
        class LoggingSensor(OperatorSensor):
            def on_reconcile_start(self, addon_name, namespace, generation):
                return {'start_time': time.time()}

            def on_reconcile_complete(self, addon_name, namespace, state, success, error=None):
                duration = time.time() - state['start_time']
                logger.info(f"Reconciled {namespace}/{addon_name} in {duration}s")
    """

    # =============================================================================
    # Reconciliation Lifecycle Hooks
    # =============================================================================

    def on_reconcile_start(
        self,
        addon_name: str,
        namespace: str,
        generation: Optional[int],
    ) -> Optional[Dict[str, Any]]:
        """Called when an addon sync begins.

        Args:
            addon_name: ManagedClusterAddOn name
            namespace: Managed cluster namespace
            generation: Addon generation number

        Returns:
            Optional state dict passed to on_reconcile_complete
        """
        pass

    def on_reconcile_complete(
        self,
        addon_name: str,
        namespace: str,
        state: Optional[Dict[str, Any]],
        success: bool,
        error: Optional[Exception] = None,
    ) -> None:
        """Called when an addon sync completes.

        Args:
            addon_name: ManagedClusterAddOn name
            namespace: Managed cluster namespace
            state: State dict returned from on_reconcile_start
            success: Whether the sync succeeded
            error: Exception if the sync failed
        """
        pass

    def on_reconcile_queued(self, key: str, queue_depth: int) -> None:
        """Called when an addon key is added to the reconcile queue.

        Args:
            key: `namespace/name` of the addon
            queue_depth: Number of keys waiting in the queue
        """
        pass

    def on_reconcile_dequeued(self, key: str, wait_time: float, queue_depth: int) -> None:
        """Called when a worker picks an addon key from the queue.

        Args:
            key: `namespace/name` of the addon
            wait_time: Time spent in queue (seconds)
            queue_depth: Number of keys still waiting in the queue
        """
        pass

    # =============================================================================
    # Status Hooks
    # =============================================================================

    def on_status_patched(
        self,
        addon_name: str,
        namespace: str,
        update_fields: List[str],
    ) -> None:
        """Called after the addon status was patched.

        Args:
            addon_name: ManagedClusterAddOn name
            namespace: Managed cluster namespace
            update_fields: Top level status fields present in the patch
        """
        pass

    def on_progressing_changed(
        self,
        addon_name: str,
        namespace: str,
        reason: str,
    ) -> None:
        """Called when the Progressing condition moves to a new reason.

        Args:
            addon_name: ManagedClusterAddOn name
            namespace: Managed cluster namespace
            reason: New reason of the Progressing condition
        """
        pass
