class AddonApi:
    GROUP = "addon.open-cluster-management.io"
    VERSION = "v1alpha1"

    MANAGED_CLUSTER_ADDON_KIND = "ManagedClusterAddOn"
    MANAGED_CLUSTER_ADDON_PLURAL = "managedclusteraddons"

    CLUSTER_MANAGEMENT_ADDON_KIND = "ClusterManagementAddOn"
    CLUSTER_MANAGEMENT_ADDON_PLURAL = "clustermanagementaddons"


class WorkApi:
    GROUP = "work.open-cluster-management.io"
    VERSION = "v1"

    MANIFEST_WORK_KIND = "ManifestWork"
    MANIFEST_WORK_PLURAL = "manifestworks"


class ResourceLabels:
    OCM_DOMAIN: str = "open-cluster-management.io/"

    #: Label on a ManifestWork naming the add-on it was dispatched for
    ADDON_NAME_LABEL = OCM_DOMAIN + "addon-name"

    #: Annotation on a ManifestWork carrying the config spec hashes it embeds
    CONFIG_SPEC_HASH_ANNOTATION = OCM_DOMAIN + "config-spec-hash"


class ConditionTypes:
    # Addon
    MANIFEST_APPLIED = "ManifestApplied"
    PROGRESSING = "Progressing"

    # ManifestWork
    WORK_APPLIED = "Applied"
    WORK_AVAILABLE = "Available"


class ConditionStatus:
    TRUE = "True"
    FALSE = "False"
    UNKNOWN = "Unknown"


class ProgressingReasons:
    INSTALLING = "Installing"
    INSTALL_SUCCEED = "InstallSucceed"
    INSTALL_FAILED = "InstallFailed"
    UPGRADING = "Upgrading"
    UPGRADE_SUCCEED = "UpgradeSucceed"
    UPGRADE_FAILED = "UpgradeFailed"
    CONFIGURATION_UNSUPPORTED = "ConfigurationUnsupported"
    WAITING_FOR_MANIFEST_APPLIED = "WaitingForManifestApplied"


def pre_delete_hook_work_name(addon_name: str) -> str:
    """Name (and prefix) of the ManifestWork holding an add-on's pre-delete hook."""
    return f"addon-{addon_name}-pre-delete"
