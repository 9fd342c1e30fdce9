"""
Diagnostic result: the structured outcome of one check.

A DiagnosticResult mirrors the identity of the check that produced it
(group / kind / name), carries free-form annotations, an ordered list of
typed conditions, and the objects the finding applies to. Renderers and
upgrade gating consume it; checks and the executor produce it.

Conditions are tri-state assertions (True / False / Unknown) with an
``impact`` used to gate upgrades: BLOCKING halts, ADVISORY warns, NONE is
informational.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field

from upgrade_lint.check.errors import InvalidResultError
from upgrade_lint.client.objects import NamespacedName
from upgrade_lint.client.resources import ResourceType

# domain (must contain a dot) / non-empty key
_ANNOTATION_KEY_RE = re.compile(
    r"^[A-Za-z0-9]([-A-Za-z0-9]*[A-Za-z0-9])?"
    r"(\.[A-Za-z0-9]([-A-Za-z0-9]*[A-Za-z0-9])?)+"
    r"/[A-Za-z0-9]([-A-Za-z0-9_.]*[A-Za-z0-9])?$"
)


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class ConditionStatus(StrEnum):
    """Tri-state condition status."""

    TRUE = "True"
    FALSE = "False"
    UNKNOWN = "Unknown"


class Impact(StrEnum):
    """Severity of a condition for upgrade gating."""

    NONE = "none"
    ADVISORY = "advisory"
    BLOCKING = "blocking"


_DEFAULT_IMPACT = {
    ConditionStatus.TRUE: Impact.NONE,
    ConditionStatus.FALSE: Impact.BLOCKING,
    ConditionStatus.UNKNOWN: Impact.ADVISORY,
}

_IMPACT_RANK = {Impact.NONE: 0, Impact.ADVISORY: 1, Impact.BLOCKING: 2}


class Condition(BaseModel):
    """One typed assertion within a diagnostic result.

    ``status`` is kept as a plain string so that malformed results can be
    built and then rejected by ``DiagnosticResult.validate_structure``.
    """

    type: str
    status: str
    reason: str
    message: str = ""
    last_transition_time: str = Field(default_factory=_now_iso)
    impact: Impact = Impact.NONE
    remediation: str | None = None


class ImpactedObject(BaseModel):
    """Lightweight reference to an object a finding applies to."""

    api_version: str = ""
    kind: str = ""
    namespace: str = ""
    name: str
    annotations: dict[str, str] = Field(default_factory=dict)


class DiagnosticSpec(BaseModel):
    description: str = ""


class DiagnosticStatus(BaseModel):
    conditions: list[Condition] = Field(default_factory=list)


class DiagnosticResult(BaseModel):
    """Outcome of one check's evaluation.

    ``impacted_objects`` is None until someone sets it. The workload
    builder relies on that to tell "not set" from "set to empty".
    """

    group: str
    kind: str
    name: str
    spec: DiagnosticSpec = Field(default_factory=DiagnosticSpec)
    annotations: dict[str, str] = Field(default_factory=dict)
    status: DiagnosticStatus = Field(default_factory=DiagnosticStatus)
    impacted_objects: list[ImpactedObject] | None = None

    @classmethod
    def new(cls, group: str, kind: str, name: str, description: str = "") -> DiagnosticResult:
        """Create an empty result with the given identity."""
        return cls(
            group=group,
            kind=kind,
            name=name,
            spec=DiagnosticSpec(description=description),
        )

    @property
    def conditions(self) -> list[Condition]:
        return self.status.conditions

    def set_condition(self, condition: Condition) -> None:
        """Upsert by type: replace in place if present, otherwise append."""
        for i, existing in enumerate(self.status.conditions):
            if existing.type == condition.type:
                self.status.conditions[i] = condition
                return
        self.status.conditions.append(condition)

    def get_condition(self, condition_type: str) -> Condition | None:
        for condition in self.status.conditions:
            if condition.type == condition_type:
                return condition
        return None

    def set_impacted_objects(
        self,
        resource_type: ResourceType,
        names: Iterable[NamespacedName],
    ) -> None:
        """Replace impacted objects with references of ``resource_type``."""
        self.impacted_objects = [
            ImpactedObject(
                api_version=resource_type.api_version,
                kind=resource_type.kind,
                namespace=ref.namespace,
                name=ref.name,
            )
            for ref in names
        ]

    def add_impacted_object(self, obj: ImpactedObject) -> None:
        if self.impacted_objects is None:
            self.impacted_objects = []
        self.impacted_objects.append(obj)

    @property
    def impact(self) -> Impact:
        """Highest impact across all conditions (NONE when there are none)."""
        highest = Impact.NONE
        for condition in self.status.conditions:
            if _IMPACT_RANK[condition.impact] > _IMPACT_RANK[highest]:
                highest = condition.impact
        return highest

    @property
    def is_blocking(self) -> bool:
        return self.impact == Impact.BLOCKING

    def validate_structure(self) -> None:
        """Check structural invariants.

        Raises:
            InvalidResultError: On the first violation found.
        """
        if not self.group:
            raise InvalidResultError("group must not be empty")
        if not self.kind:
            raise InvalidResultError("kind must not be empty")
        if not self.name:
            raise InvalidResultError("name must not be empty")

        if not self.status.conditions:
            raise InvalidResultError("status.conditions must contain at least one condition")

        valid_statuses = {s.value for s in ConditionStatus}
        for i, condition in enumerate(self.status.conditions):
            if not condition.type:
                raise InvalidResultError(f"condition with empty type found at index {i}")
            if condition.status not in valid_statuses:
                raise InvalidResultError(
                    f"condition {condition.type} has invalid status {condition.status!r} "
                    f"(must be True, False, or Unknown)"
                )
            if not condition.reason:
                raise InvalidResultError(f"condition {condition.type} has empty reason")

        for key in self.annotations:
            if not _ANNOTATION_KEY_RE.match(key):
                raise InvalidResultError(
                    f"annotation key {key!r} must be in domain/key format "
                    f"(e.g. 'openshiftai.io/version')"
                )

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


def new_condition(
    condition_type: str,
    status: ConditionStatus | str,
    reason: str,
    message: str = "",
    *args: Any,
    impact: Impact | None = None,
    remediation: str | None = None,
) -> Condition:
    """Build a condition stamped with the current time.

    ``message`` is %-formatted with ``args`` when any are given. Without an
    explicit ``impact`` the status decides: True → NONE, False → BLOCKING,
    Unknown → ADVISORY.
    """
    if args:
        message = message % args

    if impact is None:
        impact = _DEFAULT_IMPACT[ConditionStatus(status)]

    return Condition(
        type=condition_type,
        status=str(status),
        reason=reason,
        message=message,
        impact=impact,
        remediation=remediation,
    )
