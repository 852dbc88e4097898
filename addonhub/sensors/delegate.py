"""Sensor delegation for fan-out to several monitoring backends."""

from typing import Any, Dict, List, Optional, Set
import logging

from addonhub.sensors.base import OperatorSensor

logger = logging.getLogger(__name__)


class SensorDelegate(OperatorSensor):
    """Delegate sensor that forwards every event to its child sensors.

    A failing child sensor is logged and never breaks the caller. Start hook
    state is tracked per child sensor.
    """

    def __init__(self) -> None:
        self._sensors: Set[OperatorSensor] = set()

    def add(self, sensor: OperatorSensor) -> None:
        logger.info(f"Adding sensor: {sensor.__class__.__name__}")
        self._sensors.add(sensor)

    def remove(self, sensor: OperatorSensor) -> None:
        logger.info(f"Removing sensor: {sensor.__class__.__name__}")
        self._sensors.discard(sensor)

    def clear(self) -> None:
        logger.info(f"Clearing {len(self._sensors)} sensors")
        self._sensors.clear()

    def _call(self, hook: str, *args) -> None:
        for sensor in self._sensors:
            try:
                getattr(sensor, hook)(*args)
            except Exception as e:
                logger.error(
                    f"Error in {sensor.__class__.__name__}.{hook}: {e}",
                    exc_info=True,
                )

    def on_reconcile_start(
        self,
        addon_name: str,
        namespace: str,
        generation: Optional[int],
    ) -> Optional[Dict[OperatorSensor, Any]]:
        """Delegate reconcile_start to all sensors.

        Returns:
            Dict mapping each sensor to its returned state, or None if no sensors
        """
        if not self._sensors:
            return None

        states = {}
        for sensor in self._sensors:
            try:
                state = sensor.on_reconcile_start(addon_name, namespace, generation)
                if state is not None:
                    states[sensor] = state
            except Exception as e:
                logger.error(
                    f"Error in {sensor.__class__.__name__}.on_reconcile_start: {e}",
                    exc_info=True,
                )

        return states if states else None

    def on_reconcile_complete(
        self,
        addon_name: str,
        namespace: str,
        state: Optional[Dict[OperatorSensor, Any]],
        success: bool,
        error: Optional[Exception] = None,
    ) -> None:
        for sensor in self._sensors:
            try:
                sensor_state = state.get(sensor) if state else None
                sensor.on_reconcile_complete(addon_name, namespace, sensor_state, success, error)
            except Exception as e:
                logger.error(
                    f"Error in {sensor.__class__.__name__}.on_reconcile_complete: {e}",
                    exc_info=True,
                )

    def on_reconcile_queued(self, key: str, queue_depth: int) -> None:
        self._call("on_reconcile_queued", key, queue_depth)

    def on_reconcile_dequeued(self, key: str, wait_time: float, queue_depth: int) -> None:
        self._call("on_reconcile_dequeued", key, wait_time, queue_depth)

    def on_status_patched(
        self, addon_name: str, namespace: str, update_fields: List[str]
    ) -> None:
        self._call("on_status_patched", addon_name, namespace, update_fields)

    def on_progressing_changed(self, addon_name: str, namespace: str, reason: str) -> None:
        self._call("on_progressing_changed", addon_name, namespace, reason)
