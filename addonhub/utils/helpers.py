import copy
import jsonpickle
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from addonhub.types.models import Condition

RFC3339_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def now() -> str:
    """Current time in the second-precision form Kubernetes uses for conditions."""
    return utc_now().strftime(RFC3339_FORMAT)


def find_condition(conds: List[Condition], type_: str) -> Optional[Condition]:
    for c in conds or []:
        if c.type == type_:
            return c
    return None


def set_condition(conds: List[Condition], newc: Condition) -> List[Condition]:
    """Merge by .type. Only bump lastTransitionTime when status flips.

    Returns a new list; the input list and its conditions are left untouched.
    """
    conds = list(conds or [])
    newc = copy.copy(newc)
    for i, c in enumerate(conds):
        if c.type == newc.type:
            ltt = c.last_transition_time or newc.last_transition_time or now()
            if c.status != newc.status:
                ltt = newc.last_transition_time or now()
            newc.last_transition_time = ltt
            conds[i] = newc
            break
    else:
        if not newc.last_transition_time:
            newc.last_transition_time = now()
        conds.append(newc)
    return conds


def sort_dict_keys(d):
    """Recursively sort dictionary keys and handle nested structures.

    Args:
        d: Data structure (dict, list, or primitive type)

    Returns:
        Sorted version of the data structure
    """
    if isinstance(d, dict):
        return {key: sort_dict_keys(value) for key, value in sorted(d.items())}
    elif isinstance(d, list):
        return [sort_dict_keys(item) for item in d]
    else:
        return d


def canonicalize_dict(data) -> str:
    """
    Returns a canonical JSON representation of a dictionary.

    Keys are sorted recursively so the representation stays the same
    regardless of key order. List order is preserved. String keys are
    written as is.
    """
    return jsonpickle.dumps(sort_dict_keys(data), unpicklable=False, keys=True)


def deep_compare_dict(data1, data2) -> bool:
    """Compare two data structures deeply, ignoring dictionary key order.

    Args:
        data1: First data structure (dict, list, or nested combination)
        data2: Second data structure (dict, list, or nested combination)

    Returns:
        True if data structures are equivalent, False otherwise
    """
    if data1 is None and data2 is None:
        return True
    if data1 is None or data2 is None:
        return False

    if not isinstance(data1, type(data2)) and not isinstance(data2, type(data1)):
        return False

    try:
        return canonicalize_dict(data1) == canonicalize_dict(data2)
    except (TypeError, ValueError):
        return data1 == data2


def create_merge_patch(original: Dict[str, Any], modified: Dict[str, Any]) -> Dict[str, Any]:
    """Build an RFC 7386 JSON merge patch turning `original` into `modified`.

    Objects are diffed recursively. Any other value, lists included, is
    replaced wholesale when it differs. Keys missing from `modified` are
    deleted with null.
    """
    patch = {}
    for key, value in modified.items():
        if key not in original:
            patch[key] = value
        elif isinstance(value, dict) and isinstance(original[key], dict):
            nested = create_merge_patch(original[key], value)
            if nested:
                patch[key] = nested
        elif not deep_compare_dict(original[key], value):
            patch[key] = value
    for key in original:
        if key not in modified:
            patch[key] = None
    return patch
