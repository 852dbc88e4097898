"""Operator sensors.

Hook based instrumentation of the reconcile loop. `OperatorSensor` defines
the hooks, `SensorDelegate` fans events out to several backends and
`PrometheusMonitor` turns them into metrics.
"""

from addonhub.sensors.base import OperatorSensor
from addonhub.sensors.delegate import SensorDelegate
from addonhub.sensors.prometheus import PrometheusMonitor
from addonhub.sensors.server import init_metrics_server

__all__ = [
    'OperatorSensor',
    'SensorDelegate',
    'PrometheusMonitor',
    'init_metrics_server',
]
