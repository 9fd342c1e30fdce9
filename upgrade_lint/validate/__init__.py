"""Validate: fluent builders for the common shapes of check bodies.

    from upgrade_lint import validate

    validate.component(check, "kserve", target).in_state(...).run(ctx, fn)
    validate.workloads(check, target, INFERENCE_SERVICE).filter(...).run(ctx, fn)
"""

from upgrade_lint.validate.component import ComponentBuilder, ComponentRequest, component
from upgrade_lint.validate.results import (
    data_science_cluster_not_found,
    dsc_initialization_not_found,
    set_compatibility_failure,
    set_compatibility_success,
    set_component_not_configured,
)
from upgrade_lint.validate.workload import (
    WorkloadBuilder,
    WorkloadRequest,
    workloads,
    workloads_metadata,
)

__all__ = [
    "ComponentBuilder",
    "ComponentRequest",
    "WorkloadBuilder",
    "WorkloadRequest",
    "component",
    "data_science_cluster_not_found",
    "dsc_initialization_not_found",
    "set_compatibility_failure",
    "set_compatibility_success",
    "set_component_not_configured",
    "workloads",
    "workloads_metadata",
]
