"""
Workload builder: boilerplate for checks over many objects of one type.

The builder lists the resource type (full objects or metadata only),
treats a missing resource type as "no workloads", applies an optional
filter, records the impacted count, calls the check body, and finally
fills ``impacted_objects`` from the filtered items if the body left it
unset.

Usage:

    return (
        validate.workloads_metadata(self, target, NOTEBOOK)
        .for_component("workbenches")
        .filter(lambda nb: bool(nb.get_annotation(LEGACY_ANNOTATION)))
        .complete(ctx, self._conditions)
    )
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Generic, TypeVar

from upgrade_lint.check.constants import (
    ANNOTATION_CHECK_TARGET_VERSION,
    ANNOTATION_IMPACTED_WORKLOAD_COUNT,
    CONDITION_TYPE_AVAILABLE,
    CONDITION_TYPE_CONFIGURED,
    MANAGEMENT_STATE_REMOVED,
    REASON_REQUIREMENTS_MET,
    REASON_RESOURCE_NOT_FOUND,
)
from upgrade_lint.check.errors import LintError
from upgrade_lint.check.result import (
    Condition,
    ConditionStatus,
    DiagnosticResult,
    Impact,
    new_condition,
)
from upgrade_lint.client.components import has_management_state
from upgrade_lint.client.errors import is_not_found, is_resource_type_not_found
from upgrade_lint.client.objects import (
    NamespacedNamer,
    ObjectMetadata,
    Unstructured,
    to_namespaced_names,
)
from upgrade_lint.client.reader import Reader, get_data_science_cluster
from upgrade_lint.client.resources import ResourceType

if TYPE_CHECKING:
    from upgrade_lint.check.base import Check, Target
    from upgrade_lint.check.context import CheckContext

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=NamespacedNamer)


@dataclass
class WorkloadRequest(Generic[T]):
    """What a workload check body receives.

    ``items`` is already filtered. ``result`` carries the target-version
    and impacted-count annotations.
    """

    target: Target
    result: DiagnosticResult
    items: list[T] = field(default_factory=list)

    @property
    def client(self) -> Reader:
        return self.target.client


WorkloadValidateFn = Callable[["CheckContext", WorkloadRequest[T]], None]
WorkloadConditionFn = Callable[["CheckContext", WorkloadRequest[T]], Sequence[Condition]]


class WorkloadBuilder(Generic[T]):
    """Fluent builder for workload-based validation.

    Built through ``workloads`` or ``workloads_metadata``, which pick the
    listing call.
    """

    def __init__(
        self,
        check: Check,
        target: Target,
        resource_type: ResourceType,
        list_fn: Callable[[], list[T]],
    ):
        self._check = check
        self._target = target
        self._resource_type = resource_type
        self._list_fn = list_fn
        self._filter_fn: Callable[[T], bool] | None = None
        self._component_names: tuple[str, ...] = ()

    def filter(self, fn: Callable[[T], bool]) -> WorkloadBuilder[T]:
        """Keep only items for which ``fn`` returns True.

        An exception from ``fn`` stops the run and propagates.
        """
        self._filter_fn = fn
        return self

    def for_component(self, *names: str) -> WorkloadBuilder[T]:
        """Require at least one of ``names`` to not be Removed.

        When every named component is Removed the workloads are not
        inspected and a passing result is returned.
        """
        self._component_names = names
        return self

    def run(self, ctx: CheckContext, fn: WorkloadValidateFn[T]) -> DiagnosticResult:
        """List, filter, annotate, call ``fn``, then fill impacted objects.

        Raises:
            LintError: Listing, filtering or the DataScienceCluster lookup
                failed for a reason other than "not found".
        """
        result = self._check.new_result()

        if self._target.target_version is not None:
            result.annotations[ANNOTATION_CHECK_TARGET_VERSION] = str(self._target.target_version)

        if self._component_names and self._short_circuit(result):
            return result

        kind = self._resource_type.kind
        try:
            items = self._list_fn()
        except Exception as e:
            if not is_resource_type_not_found(e):
                raise LintError(f"listing {kind} resources: {e}") from e
            logger.debug("%s: resource type %s not registered", self._check.id, self._resource_type)
            items = []

        if self._filter_fn is not None:
            filtered: list[T] = []
            for item in items:
                try:
                    keep = self._filter_fn(item)
                except Exception as e:
                    raise LintError(f"filtering {kind} resources: {e}") from e
                if keep:
                    filtered.append(item)
            items = filtered

        result.annotations[ANNOTATION_IMPACTED_WORKLOAD_COUNT] = str(len(items))

        request = WorkloadRequest(target=self._target, result=result, items=items)
        fn(ctx, request)

        if result.impacted_objects is None and items:
            result.set_impacted_objects(self._resource_type, to_namespaced_names(items))

        return result

    def complete(self, ctx: CheckContext, fn: WorkloadConditionFn[T]) -> DiagnosticResult:
        """Like ``run``, for bodies that only produce conditions."""

        def apply(ctx: CheckContext, request: WorkloadRequest[T]) -> None:
            for condition in fn(ctx, request):
                request.result.set_condition(condition)

        return self.run(ctx, apply)

    def _short_circuit(self, result: DiagnosticResult) -> bool:
        """Fill ``result`` and return True when the workloads need no inspection."""
        try:
            dsc = get_data_science_cluster(self._target.client)
        except Exception as e:
            if not is_not_found(e):
                raise LintError(f"getting DataScienceCluster: {e}") from e
            result.set_condition(
                new_condition(
                    CONDITION_TYPE_AVAILABLE,
                    ConditionStatus.FALSE,
                    REASON_RESOURCE_NOT_FOUND,
                    "No DataScienceCluster found",
                    impact=Impact.ADVISORY,
                )
            )
            return True

        for name in self._component_names:
            if not has_management_state(dsc, name, MANAGEMENT_STATE_REMOVED):
                return False

        logger.debug(
            "%s: components %s all removed, skipping workloads",
            self._check.id, list(self._component_names),
        )
        result.set_condition(
            new_condition(
                CONDITION_TYPE_CONFIGURED,
                ConditionStatus.TRUE,
                REASON_REQUIREMENTS_MET,
                "All of %s are Removed; no workloads to check",
                ", ".join(self._component_names),
            )
        )
        return True


def workloads(
    check: Check,
    target: Target,
    resource_type: ResourceType,
) -> WorkloadBuilder[Unstructured]:
    """Builder over full objects, for bodies that need spec or status."""
    return WorkloadBuilder(
        check, target, resource_type,
        lambda: target.client.list(resource_type),
    )


def workloads_metadata(
    check: Check,
    target: Target,
    resource_type: ResourceType,
) -> WorkloadBuilder[ObjectMetadata]:
    """Builder over metadata only (names, labels, annotations, finalizers)."""
    return WorkloadBuilder(
        check, target, resource_type,
        lambda: target.client.list_metadata(resource_type),
    )
