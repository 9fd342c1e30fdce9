"""
Shared vocabulary for checks: condition types, reasons, annotation keys,
management states and check types.
"""

from __future__ import annotations

# ── Condition types ─────────────────────────────────────────────

CONDITION_TYPE_VALIDATED = "Validated"
CONDITION_TYPE_AVAILABLE = "Available"
CONDITION_TYPE_READY = "Ready"
CONDITION_TYPE_COMPATIBLE = "Compatible"
CONDITION_TYPE_CONFIGURED = "Configured"

# ── Reasons ─────────────────────────────────────────────────────

REASON_REQUIREMENTS_MET = "RequirementsMet"
REASON_RESOURCE_FOUND = "ResourceFound"
REASON_RESOURCE_NOT_FOUND = "ResourceNotFound"
REASON_CONFIGURATION_VALID = "ConfigurationValid"
REASON_CONFIGURATION_INVALID = "ConfigurationInvalid"
REASON_CONFIGURATION_UNMANAGED = "ConfigurationUnmanaged"
REASON_VERSION_COMPATIBLE = "VersionCompatible"
REASON_VERSION_INCOMPATIBLE = "VersionIncompatible"
REASON_WORKLOADS_IMPACTED = "WorkloadsImpacted"
REASON_MIGRATION_PENDING = "MigrationPending"
REASON_NO_MIGRATION_REQUIRED = "NoMigrationRequired"
REASON_FEATURE_REMOVED = "FeatureRemoved"
REASON_DEPRECATED = "Deprecated"
REASON_INSUFFICIENT_DATA = "InsufficientData"
REASON_API_ACCESS_DENIED = "APIAccessDenied"
REASON_CHECK_EXECUTION_FAILED = "CheckExecutionFailed"

# ── Management states ───────────────────────────────────────────

MANAGEMENT_STATE_MANAGED = "Managed"
MANAGEMENT_STATE_UNMANAGED = "Unmanaged"
MANAGEMENT_STATE_REMOVED = "Removed"

# ── Check types ─────────────────────────────────────────────────

CHECK_TYPE_REMOVAL = "removal"
CHECK_TYPE_INSTALLED = "installed"
CHECK_TYPE_IMPACTED_WORKLOADS = "impacted-workloads"
CHECK_TYPE_CONFIG_MIGRATION = "config-migration"
CHECK_TYPE_DATA_INTEGRITY = "data-integrity"
CHECK_TYPE_DEPRECATION = "deprecation"

# ── Annotation keys ─────────────────────────────────────────────

ANNOTATION_COMPONENT_MANAGEMENT_STATE = "component.opendatahub.io/management-state"
ANNOTATION_SERVICE_MANAGEMENT_STATE = "service.opendatahub.io/management-state"
ANNOTATION_CHECK_TARGET_VERSION = "check.opendatahub.io/target-version"
ANNOTATION_IMPACTED_WORKLOAD_COUNT = "workload.opendatahub.io/impacted-count"

# Namespace annotation naming who requested the project.
ANNOTATION_NAMESPACE_REQUESTER = "openshift.io/requester"
