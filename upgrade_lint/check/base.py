"""
Check base: the contract between the executor and individual rules.

Every diagnostic rule implements ``Check``. The executor only talks to
checks through this contract: it asks ``can_apply`` first and then calls
``validate``, handing both the same read-only ``Target``.

To create a new check:
    1. Subclass BaseCheck (or Check for full control)
    2. Implement can_apply and validate
    3. Register an instance with a CheckRegistry at startup
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import StrEnum
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from upgrade_lint.check.result import DiagnosticResult
from upgrade_lint.client.objects import Unstructured
from upgrade_lint.client.reader import Reader
from upgrade_lint.util.version import Version

if TYPE_CHECKING:
    from upgrade_lint.check.context import CheckContext


class CheckGroup(StrEnum):
    """Coarse category of a check, used for selection shortcuts."""

    COMPONENT = "component"
    SERVICE = "service"
    WORKLOAD = "workload"
    DEPENDENCY = "dependency"


# Display and reporting order.
CANONICAL_GROUP_ORDER = (
    CheckGroup.DEPENDENCY,
    CheckGroup.SERVICE,
    CheckGroup.COMPONENT,
    CheckGroup.WORKLOAD,
)


class Target(BaseModel):
    """Everything a check is evaluated against.

    For lint mode ``current_version`` and ``target_version`` are the same
    detected version; for upgrade mode they are the FROM and TO versions.
    Either may be None when unknown. ``resource`` is only set when a run
    focuses on one discovered object.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    client: Reader
    current_version: Version | None = None
    target_version: Version | None = None
    resource: Unstructured | None = None


class Check(ABC):
    """Abstract base class for all diagnostic checks.

    Checks are built once at startup and must not keep per-run state.
    """

    @property
    @abstractmethod
    def id(self) -> str:
        """Globally unique dotted ID (e.g. 'components.kserve.servicemesh-removal')."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable label."""

    @property
    @abstractmethod
    def description(self) -> str:
        """What this check validates."""

    @property
    @abstractmethod
    def group(self) -> CheckGroup:
        """Which group the check belongs to."""

    @property
    def kind(self) -> str:
        """Subject of the check (e.g. 'kserve'). Defaults to the ID."""
        return self.id

    @property
    def check_type(self) -> str:
        """Kind of verification (e.g. 'removal'). Defaults to the name."""
        return self.name

    @abstractmethod
    def can_apply(self, target: Target) -> bool:
        """Whether the check is relevant for this target.

        May raise; the executor treats an exception as "does not apply".
        """

    @abstractmethod
    def validate(self, ctx: CheckContext, target: Target) -> DiagnosticResult:
        """Evaluate the check and return its result.

        Infrastructure failures should be raised, not encoded: the executor
        turns them into a well-formed diagnostic.
        """

    def new_result(self) -> DiagnosticResult:
        """An empty result carrying this check's identity."""
        return DiagnosticResult.new(
            str(self.group),
            self.kind,
            self.check_type,
            self.description,
        )

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} id={self.id!r}>"


class BaseCheck(Check):
    """Check with identity supplied at construction.

    Subclasses only implement ``can_apply`` and ``validate``.
    """

    def __init__(
        self,
        *,
        check_id: str,
        name: str,
        group: CheckGroup,
        kind: str,
        check_type: str,
        description: str = "",
        remediation: str = "",
    ):
        self._id = check_id
        self._name = name
        self._group = group
        self._kind = kind
        self._check_type = check_type
        self._description = description
        self.remediation = remediation

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return self._description

    @property
    def group(self) -> CheckGroup:
        return self._group

    @property
    def kind(self) -> str:
        return self._kind

    @property
    def check_type(self) -> str:
        return self._check_type
