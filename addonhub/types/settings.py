import os
from typing import Any, FrozenSet

_TRUE, _FALSE = {"True", "true", "yes", "1"}, {"False", "false", "no", "0"}


def _getenv(name: str, *default: Any) -> Any:
    try:
        v = os.environ[name]
        if v in _TRUE:
            return True
        elif v in _FALSE:
            return False
        else:
            return v
    except KeyError:
        pass
    if default:
        return default[0]
    raise KeyError(name)


def _getenv_list(name: str) -> FrozenSet[str]:
    """Read a comma separated environment variable as a set of names."""
    raw = os.environ.get(name, "")
    return frozenset(v.strip() for v in raw.split(",") if v.strip())


# ------------------------------------------------
# ---- Defaults and environment variables ----
# ------------------------------------------------

#: Number of workers draining the reconcile queue concurrently
RECONCILE_WORKERS = int(_getenv("RECONCILE_WORKERS", 4))

#: Initial delay before an addon key is retried after an unexpected error
RETRY_BASE_DELAY_SECONDS = float(_getenv("RETRY_BASE_DELAY_SECONDS", 1.0))

#: Upper bound of the exponential retry delay
RETRY_MAX_DELAY_SECONDS = float(_getenv("RETRY_MAX_DELAY_SECONDS", 60.0))

#: Delay before an addon key is retried after a status patch conflict
CONFLICT_RETRY_DELAY_SECONDS = float(_getenv("CONFLICT_RETRY_DELAY_SECONDS", 1.0))

#: Add-on names reconciled by this operator instance, empty means all
ADDON_NAMES = _getenv_list("ADDON_NAMES")

#: Kopf batching worker limit
KOPF_WORKER_LIMIT = int(_getenv("KOPF_WORKER_LIMIT", 2))

#: Serve prometheus metrics
METRICS_ENABLED = bool(_getenv("METRICS_ENABLED", True))

#: Port of the prometheus metrics endpoint
METRICS_PORT = int(_getenv("METRICS_PORT", 8000))


class Settings:
    """Operator settings"""

    reconcile_workers: int = RECONCILE_WORKERS
    retry_base_delay_seconds: float = RETRY_BASE_DELAY_SECONDS
    retry_max_delay_seconds: float = RETRY_MAX_DELAY_SECONDS
    conflict_retry_delay_seconds: float = CONFLICT_RETRY_DELAY_SECONDS
    addon_names: FrozenSet[str] = ADDON_NAMES
    kopf_worker_limit: int = KOPF_WORKER_LIMIT
    metrics_enabled: bool = METRICS_ENABLED
    metrics_port: int = METRICS_PORT

    def __init__(
        self,
        *args,
        reconcile_workers: int = None,
        retry_base_delay_seconds: float = None,
        retry_max_delay_seconds: float = None,
        conflict_retry_delay_seconds: float = None,
        addon_names: FrozenSet[str] = None,
        kopf_worker_limit: int = None,
        metrics_enabled: bool = None,
        metrics_port: int = None,
        **kwargs,
    ):
        if reconcile_workers is not None:
            self.reconcile_workers = reconcile_workers

        if retry_base_delay_seconds is not None:
            self.retry_base_delay_seconds = retry_base_delay_seconds

        if retry_max_delay_seconds is not None:
            self.retry_max_delay_seconds = retry_max_delay_seconds

        if conflict_retry_delay_seconds is not None:
            self.conflict_retry_delay_seconds = conflict_retry_delay_seconds

        if addon_names is not None:
            self.addon_names = frozenset(addon_names)

        if kopf_worker_limit is not None:
            self.kopf_worker_limit = kopf_worker_limit

        if metrics_enabled is not None:
            self.metrics_enabled = metrics_enabled

        if metrics_port is not None:
            self.metrics_port = metrics_port
