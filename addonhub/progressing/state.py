import copy
from addonhub.common.constants import (
    ConditionStatus,
    ConditionTypes,
    ProgressingReasons,
)
from addonhub.types.models import (
    ManagedClusterAddOn,
    ConfigGroupResource,
    Condition,
)
from addonhub.utils.helpers import set_condition

PROGRESSING_DOING = "Doing"
PROGRESSING_SUCCEED = "Succeed"
PROGRESSING_FAILED = "Failed"


def progressing_condition(status: str, reason: str, message: str) -> Condition:
    return Condition(
        type=ConditionTypes.PROGRESSING,
        status=status,
        reason=reason,
        message=message,
        observed_generation=None,
        last_transition_time=None,
    )


def is_upgrade(addon: ManagedClusterAddOn) -> bool:
    """An addon is upgrading once any of its configs has been applied before."""
    for ref in addon.status.config_references:
        if ref.last_applied_config is not None and ref.last_applied_config.spec_hash:
            return True
    return False


def is_converged(addon: ManagedClusterAddOn) -> bool:
    """True when every config reference has its desired config applied.

    An addon without config references is never considered converged.
    """
    refs = addon.status.config_references
    if not refs:
        return False
    return all(ref.last_applied_config == ref.desired_config for ref in refs)


def set_configuration_unsupported(
    addon: ManagedClusterAddOn, config: ConfigGroupResource
) -> None:
    addon.status.conditions = set_condition(
        addon.status.conditions,
        progressing_condition(
            ConditionStatus.FALSE,
            ProgressingReasons.CONFIGURATION_UNSUPPORTED,
            f"Configuration with gvr {config.group}/{config.resource} is not supported for this addon",
        ),
    )


def set_waiting_for_manifest_applied(addon: ManagedClusterAddOn) -> None:
    addon.status.conditions = set_condition(
        addon.status.conditions,
        progressing_condition(
            ConditionStatus.FALSE,
            ProgressingReasons.WAITING_FOR_MANIFEST_APPLIED,
            "Waiting for ManagedClusterAddOn ManifestApplied condition",
        ),
    )


def set_progressing_and_last_applied(
    upgrade: bool, state: str, message: str, addon: ManagedClusterAddOn
) -> None:
    """Set the Progressing condition for `state`, advancing lastAppliedConfig on success.

    Once every config is applied the condition is left as is, so a settled
    addon keeps its condition and transition time.
    """
    if is_converged(addon):
        return

    if state == PROGRESSING_DOING:
        if upgrade:
            condition = progressing_condition(
                ConditionStatus.TRUE, ProgressingReasons.UPGRADING, f"upgrading... {message}"
            )
        else:
            condition = progressing_condition(
                ConditionStatus.TRUE, ProgressingReasons.INSTALLING, f"installing... {message}"
            )
    elif state == PROGRESSING_SUCCEED:
        for ref in addon.status.config_references:
            ref.last_applied_config = copy.deepcopy(ref.desired_config)
        if upgrade:
            condition = progressing_condition(
                ConditionStatus.FALSE,
                ProgressingReasons.UPGRADE_SUCCEED,
                "upgrade completed with no errors.",
            )
        else:
            condition = progressing_condition(
                ConditionStatus.FALSE,
                ProgressingReasons.INSTALL_SUCCEED,
                "install completed with no errors.",
            )
    elif state == PROGRESSING_FAILED:
        condition = progressing_condition(
            ConditionStatus.FALSE,
            ProgressingReasons.UPGRADE_FAILED if upgrade else ProgressingReasons.INSTALL_FAILED,
            message,
        )
    else:
        raise ValueError(f"unknown progressing state: {state!r}")

    addon.status.conditions = set_condition(addon.status.conditions, condition)
