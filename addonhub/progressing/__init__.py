from addonhub.progressing.controller import AddonProgressingController, addon_name_filter
from addonhub.progressing.matching import evaluate_works, work_configs_match_addon, work_is_ready
from addonhub.progressing.patch import build_status_patch, patch_progressing_and_last_applied
from addonhub.progressing.support import is_configuration_supported

__all__ = [
    "AddonProgressingController",
    "addon_name_filter",
    "evaluate_works",
    "work_configs_match_addon",
    "work_is_ready",
    "build_status_patch",
    "patch_progressing_and_last_applied",
    "is_configuration_supported",
]
