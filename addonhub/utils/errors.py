import json
import kopf
import kubernetes_asyncio
from addonhub.types.settings import CONFLICT_RETRY_DELAY_SECONDS

_ALREADY_EXISTS = "alreadyexists"
_NOT_FOUND = "notfound"
_CONFLICT = "conflict"


def _reason(ex: kubernetes_asyncio.client.ApiException) -> str:
    try:
        err = json.loads(ex.body)
    except (TypeError, ValueError):
        return ""
    return err.get("reason", "").lower() if isinstance(err, dict) else ""


def not_found_error(ex: Exception) -> bool:
    if not isinstance(ex, kubernetes_asyncio.client.ApiException):
        return False
    return ex.status == 404 or _reason(ex) == _NOT_FOUND


def conflict_error(ex: Exception) -> bool:
    if not isinstance(ex, kubernetes_asyncio.client.ApiException):
        return False
    return ex.status == 409 or _reason(ex) == _CONFLICT


def convert_api_exception(
    ex: kubernetes_asyncio.client.ApiException,
    permanent: bool = None,
    conflict_delay: float = CONFLICT_RETRY_DELAY_SECONDS,
):
    """
    Convert kubernetes ApiException to a Kopf-friendly exception.

    Args:
        ex: The ApiException to convert
        permanent: If True, raises PermanentError (won't retry). If False, raises TemporaryError (will retry).
                   If None, automatically determines based on status code.
        conflict_delay: Retry delay for optimistic-concurrency conflicts.

    Raises:
        kopf.TemporaryError or kopf.PermanentError with serializable error details
    """
    if not isinstance(ex, kubernetes_asyncio.client.ApiException):
        raise ex

    error_msg = f"Kubernetes API error ({ex.status}): {ex.reason}"

    try:
        if ex.body:
            body = json.loads(ex.body)
            if "message" in body:
                error_msg = f"{error_msg} - {body['message']}"
    except (json.JSONDecodeError, TypeError, AttributeError):
        pass

    # A conflict means our view of the object is stale, re-read and retry soon.
    if permanent is None and conflict_error(ex):
        raise kopf.TemporaryError(error_msg, delay=conflict_delay)

    # 4xx errors (except 408, 429) are typically permanent
    if permanent is None:
        is_permanent = ex.status is not None and 400 <= ex.status < 500 and ex.status not in [408, 429]
    else:
        is_permanent = permanent

    if is_permanent:
        raise kopf.PermanentError(error_msg)
    else:
        raise kopf.TemporaryError(error_msg, delay=30)
