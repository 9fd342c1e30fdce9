"""
Verbose rendering of impacted objects.

A check may take over how its impacted objects are printed by providing
``format_verbose_output``. Checks that don't get the default
namespace-grouped layout:

        - cluster-scoped (Kind)
        my-project (requester: alice):
          - notebook-a (Notebook)
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Protocol, TextIO, runtime_checkable

from upgrade_lint.check.result import DiagnosticResult, ImpactedObject


@runtime_checkable
class VerboseOutputFormatter(Protocol):
    """Optional capability: custom verbose rendering for a check's result."""

    def format_verbose_output(self, out: TextIO, result: DiagnosticResult) -> None: ...


class DefaultVerboseFormatter:
    """Group impacted objects by namespace.

    Cluster-scoped objects come first without a header; namespaces follow
    in alphabetical order, each with an optional requester note.

    Args:
        namespace_requesters: Namespace name → requester annotation value.
    """

    def __init__(self, namespace_requesters: Mapping[str, str] | None = None):
        self.namespace_requesters = dict(namespace_requesters or {})

    def format_verbose_output(self, out: TextIO, result: DiagnosticResult) -> None:
        for namespace, objects in group_by_namespace(result.impacted_objects or []):
            if not namespace:
                for obj in objects:
                    out.write(f"    - {format_impacted_object(obj)}\n")
                continue

            header = namespace
            requester = self.namespace_requesters.get(namespace)
            if requester:
                header = f"{namespace} (requester: {requester})"

            out.write(f"    {header}:\n")
            for obj in objects:
                out.write(f"      - {format_impacted_object(obj)}\n")


def format_impacted_object(obj: ImpactedObject) -> str:
    """``name (Kind)``, or just ``name`` when the kind is unknown."""
    if obj.kind:
        return f"{obj.name} ({obj.kind})"
    return obj.name


def group_by_namespace(
    objects: Iterable[ImpactedObject],
) -> list[tuple[str, list[ImpactedObject]]]:
    """Sub-group objects by namespace, sorted, cluster-scoped ("") first.

    Order within a namespace is preserved.
    """
    groups: dict[str, list[ImpactedObject]] = {}
    for obj in objects:
        groups.setdefault(obj.namespace, []).append(obj)
    return [(ns, groups[ns]) for ns in sorted(groups)]


def format_verbose(
    check: object,
    result: DiagnosticResult,
    out: TextIO,
    default: DefaultVerboseFormatter | None = None,
) -> None:
    """Render ``result`` with the check's own formatter if it has one."""
    if isinstance(check, VerboseOutputFormatter):
        check.format_verbose_output(out, result)
        return
    (default or DefaultVerboseFormatter()).format_verbose_output(out, result)
