"""
Shared test fixtures and configuration.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from upgrade_lint.check.base import BaseCheck, CheckGroup, Target
from upgrade_lint.check.constants import CONDITION_TYPE_VALIDATED, REASON_REQUIREMENTS_MET
from upgrade_lint.check.context import CheckContext
from upgrade_lint.check.result import ConditionStatus, DiagnosticResult, new_condition
from upgrade_lint.client.memory import InMemoryReader
from upgrade_lint.client.resources import DATA_SCIENCE_CLUSTER, DSC_INITIALIZATION
from upgrade_lint.util.version import Version


class StubCheck(BaseCheck):
    """Configurable check for exercising the engine.

    Args:
        applies: Returned by can_apply, or raised if it is an exception.
        validate_fn: Replaces validate; defaults to a passing result.
    """

    def __init__(
        self,
        check_id: str,
        group: CheckGroup = CheckGroup.COMPONENT,
        applies: bool | Exception = True,
        validate_fn: Callable[[CheckContext, Target], DiagnosticResult] | None = None,
        kind: str = "stub",
        check_type: str = "test",
    ):
        super().__init__(
            check_id=check_id,
            name=f"Stub {check_id}",
            group=group,
            kind=kind,
            check_type=check_type,
            description=f"Stub check {check_id}",
        )
        self._applies = applies
        self._validate_fn = validate_fn
        self.calls = 0

    def can_apply(self, target: Target) -> bool:
        if isinstance(self._applies, Exception):
            raise self._applies
        return self._applies

    def validate(self, ctx: CheckContext, target: Target) -> DiagnosticResult:
        self.calls += 1
        if self._validate_fn is not None:
            return self._validate_fn(ctx, target)
        result = self.new_result()
        result.set_condition(
            new_condition(CONDITION_TYPE_VALIDATED, ConditionStatus.TRUE, REASON_REQUIREMENTS_MET)
        )
        return result


def dsc_object(components: dict[str, str] | None = None, name: str = "default-dsc") -> dict[str, Any]:
    """A DataScienceCluster dict with the given ``{component: managementState}``."""
    return {
        "metadata": {"name": name},
        "spec": {
            "components": {
                comp: {"managementState": state}
                for comp, state in (components or {}).items()
            },
        },
    }


def dsci_object(applications_namespace: str = "opendatahub") -> dict[str, Any]:
    return {
        "metadata": {"name": "default-dsci"},
        "spec": {"applicationsNamespace": applications_namespace},
    }


@pytest.fixture
def make_check() -> Callable[..., StubCheck]:
    """Factory for StubCheck instances."""
    return StubCheck


@pytest.fixture
def make_dsc() -> Callable[..., dict[str, Any]]:
    """Factory for DataScienceCluster dicts."""
    return dsc_object


@pytest.fixture
def reader() -> InMemoryReader:
    """Reader with a DSC (kserve Managed, dashboard Removed) and a DSCI."""
    return InMemoryReader({
        DATA_SCIENCE_CLUSTER: [dsc_object({"kserve": "Managed", "dashboard": "Removed"})],
        DSC_INITIALIZATION: [dsci_object()],
    })


@pytest.fixture
def empty_reader() -> InMemoryReader:
    """Reader where no resource type is registered."""
    return InMemoryReader()


@pytest.fixture
def target(reader: InMemoryReader) -> Target:
    return Target(
        client=reader,
        current_version=Version.parse("2.25.0"),
        target_version=Version.parse("3.0.0"),
    )


@pytest.fixture
def ctx() -> CheckContext:
    return CheckContext.background()
