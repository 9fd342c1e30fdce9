"""
Canned diagnostic outcomes shared by checks and builders.

Missing singletons and disabled components are findings, not errors:
these helpers turn them into ordinary results so check bodies stay short.
"""

from __future__ import annotations

from typing import Any

from upgrade_lint.check.constants import (
    CONDITION_TYPE_AVAILABLE,
    CONDITION_TYPE_COMPATIBLE,
    CONDITION_TYPE_CONFIGURED,
    REASON_RESOURCE_NOT_FOUND,
    REASON_VERSION_COMPATIBLE,
    REASON_VERSION_INCOMPATIBLE,
)
from upgrade_lint.check.result import (
    ConditionStatus,
    DiagnosticResult,
    Impact,
    new_condition,
)


def _not_found(
    group: str,
    kind: str,
    name: str,
    description: str,
    message: str,
) -> DiagnosticResult:
    result = DiagnosticResult.new(group, kind, name, description)
    result.set_condition(
        new_condition(
            CONDITION_TYPE_AVAILABLE,
            ConditionStatus.FALSE,
            REASON_RESOURCE_NOT_FOUND,
            message,
            impact=Impact.ADVISORY,
        )
    )
    return result


def data_science_cluster_not_found(
    group: str,
    kind: str,
    name: str,
    description: str = "",
) -> DiagnosticResult:
    """Result for a cluster without a DataScienceCluster."""
    return _not_found(group, kind, name, description, "No DataScienceCluster found")


def dsc_initialization_not_found(
    group: str,
    kind: str,
    name: str,
    description: str = "",
) -> DiagnosticResult:
    """Result for a cluster without a DSCInitialization."""
    return _not_found(group, kind, name, description, "No DSCInitialization found")


def set_component_not_configured(result: DiagnosticResult, component: str) -> None:
    """Mark ``result`` as skipped because the component is not in a relevant state."""
    result.set_condition(
        new_condition(
            CONDITION_TYPE_CONFIGURED,
            ConditionStatus.FALSE,
            REASON_RESOURCE_NOT_FOUND,
            "Component %s is not configured",
            component,
            impact=Impact.NONE,
        )
    )


def set_compatibility_success(result: DiagnosticResult, message: str, *args: Any) -> None:
    result.set_condition(
        new_condition(
            CONDITION_TYPE_COMPATIBLE,
            ConditionStatus.TRUE,
            REASON_VERSION_COMPATIBLE,
            message,
            *args,
        )
    )


def set_compatibility_failure(
    result: DiagnosticResult,
    message: str,
    *args: Any,
    impact: Impact = Impact.BLOCKING,
    remediation: str | None = None,
) -> None:
    result.set_condition(
        new_condition(
            CONDITION_TYPE_COMPATIBLE,
            ConditionStatus.FALSE,
            REASON_VERSION_INCOMPATIBLE,
            message,
            *args,
            impact=impact,
            remediation=remediation,
        )
    )
