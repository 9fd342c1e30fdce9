"""
Check executor: the orchestration loop for one diagnostic run.

The executor resolves checks through the registry, filters them by
applicability and runs them one after another against a shared target.
A single check failing never aborts the run: errors are turned into a
well-formed diagnostic and kept alongside it.

Flow:
    patterns → registry → can_apply → validate → validate_structure → CheckExecution
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from upgrade_lint.check.base import CANONICAL_GROUP_ORDER, Check, CheckGroup, Target
from upgrade_lint.check.constants import (
    CONDITION_TYPE_VALIDATED,
    REASON_API_ACCESS_DENIED,
    REASON_CHECK_EXECUTION_FAILED,
)
from upgrade_lint.check.context import CheckContext
from upgrade_lint.check.errors import InvalidResultError
from upgrade_lint.check.registry import CheckRegistry
from upgrade_lint.check.result import (
    ConditionStatus,
    DiagnosticResult,
    Impact,
    new_condition,
)
from upgrade_lint.check.selector import SELECTOR_ALL
from upgrade_lint.client.errors import ErrorKind, error_kind

logger = logging.getLogger(__name__)

# Fixed messages for recognised infrastructure failures.
_CLASSIFIED_ERRORS: dict[ErrorKind, tuple[str, str]] = {
    ErrorKind.FORBIDDEN: (
        REASON_API_ACCESS_DENIED,
        "Insufficient permissions to access cluster resources",
    ),
    ErrorKind.UNAUTHORIZED: (
        REASON_API_ACCESS_DENIED,
        "Insufficient permissions to access cluster resources",
    ),
    ErrorKind.TIMEOUT: (REASON_CHECK_EXECUTION_FAILED, "Request timed out"),
    ErrorKind.UNAVAILABLE: (
        REASON_CHECK_EXECUTION_FAILED,
        "API server is unavailable or overloaded",
    ),
}


@dataclass
class CheckExecution:
    """Outcome of running one check.

    ``result`` is always present. ``error`` is set when the check failed to
    run or produced an invalid result; ``result`` then holds the synthetic
    Unknown diagnostic standing in for it.
    """

    check: Check
    result: DiagnosticResult
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class Executor:
    """Runs checks from a registry against a target.

    Args:
        registry: Where checks are resolved from.
    """

    def __init__(self, registry: CheckRegistry):
        self._registry = registry

    @property
    def registry(self) -> CheckRegistry:
        return self._registry

    def execute_all(self, ctx: CheckContext, target: Target) -> list[CheckExecution]:
        """Run every registered check that applies to ``target``."""
        return self._execute_checks(ctx, target, self._registry.list_all())

    def execute_selective(
        self,
        ctx: CheckContext,
        target: Target,
        pattern: str = SELECTOR_ALL,
        group: CheckGroup | None = None,
    ) -> list[CheckExecution]:
        """Run checks matching ``pattern``, optionally restricted to ``group``.

        Raises:
            InvalidPatternError: Before any check runs.
        """
        checks = self._registry.list_by_pattern(pattern, group)
        return self._execute_checks(ctx, target, checks)

    def execute_patterns(
        self,
        ctx: CheckContext,
        target: Target,
        patterns: Iterable[str],
        group: CheckGroup | None = None,
    ) -> list[CheckExecution]:
        """Run the union of checks matching any of ``patterns``.

        Raises:
            InvalidPatternError: Before any check runs.
        """
        checks = self._registry.list_by_patterns(patterns, group)
        return self._execute_checks(ctx, target, checks)

    def _execute_checks(
        self,
        ctx: CheckContext,
        target: Target,
        checks: Sequence[Check],
    ) -> list[CheckExecution]:
        executions: list[CheckExecution] = []

        for check in checks:
            if ctx.done():
                logger.info(
                    "Run stopped (%s) after %d of %d checks",
                    ctx.err(),
                    len(executions),
                    len(checks),
                )
                return executions

            try:
                applies = check.can_apply(target)
            except Exception as e:
                logger.debug("⊘ %s: applicability check failed: %s", check.id, e)
                continue

            if not applies:
                logger.debug("⊘ %s: not applicable", check.id)
                continue

            execution = self._execute_check(ctx, target, check)
            executions.append(execution)

            if execution.error is not None:
                logger.warning("✗ %s → %s", check.id, execution.error)
            else:
                logger.info("✓ %s → %s", check.id, execution.result.impact)

        return executions

    def _execute_check(
        self,
        ctx: CheckContext,
        target: Target,
        check: Check,
    ) -> CheckExecution:
        try:
            result = check.validate(ctx, target)
        except Exception as e:
            return CheckExecution(
                check=check,
                result=_error_result(check, e),
                error=e,
            )

        try:
            if not isinstance(result, DiagnosticResult):
                raise InvalidResultError(
                    f"expected DiagnosticResult, got {type(result).__name__}"
                )
            result.validate_structure()
        except InvalidResultError as e:
            invalid = check.new_result()
            invalid.status.conditions = [
                new_condition(
                    CONDITION_TYPE_VALIDATED,
                    ConditionStatus.UNKNOWN,
                    REASON_CHECK_EXECUTION_FAILED,
                    "Invalid check result: %s",
                    e,
                )
            ]
            err = InvalidResultError(f"invalid result from check {check.id}: {e}")
            err.__cause__ = e
            return CheckExecution(check=check, result=invalid, error=err)

        return CheckExecution(check=check, result=result)


def _error_result(check: Check, err: BaseException) -> DiagnosticResult:
    """Synthesize the Unknown diagnostic standing in for a failed check."""
    classified = _CLASSIFIED_ERRORS.get(error_kind(err))
    if classified is not None:
        reason, message = classified
        condition = new_condition(
            CONDITION_TYPE_VALIDATED,
            ConditionStatus.UNKNOWN,
            reason,
            message,
        )
    else:
        condition = new_condition(
            CONDITION_TYPE_VALIDATED,
            ConditionStatus.UNKNOWN,
            REASON_CHECK_EXECUTION_FAILED,
            "Check execution failed: %s",
            err,
        )

    result = check.new_result()
    result.status.conditions = [condition]
    return result


# ── Reporting ───────────────────────────────────────────────────────


@dataclass
class ExecutionReport:
    """Summary over the executions of one run.

    Executions are bucketed by the highest impact of their result:
    NONE counts as passed, ADVISORY as a warning, BLOCKING as failed.
    Executions carrying an error are also counted as errored.
    """

    executions: list[CheckExecution] = field(default_factory=list)

    @classmethod
    def from_executions(cls, executions: Iterable[CheckExecution]) -> ExecutionReport:
        """Build a report ordered by the canonical group order."""
        rank = {group.value: i for i, group in enumerate(CANONICAL_GROUP_ORDER)}
        ordered = sorted(
            executions,
            key=lambda e: rank.get(str(e.check.group), len(rank)),
        )
        return cls(executions=ordered)

    @property
    def total(self) -> int:
        return len(self.executions)

    @property
    def passed(self) -> int:
        return sum(1 for e in self.executions if e.result.impact == Impact.NONE)

    @property
    def warnings(self) -> int:
        return sum(1 for e in self.executions if e.result.impact == Impact.ADVISORY)

    @property
    def failed(self) -> int:
        return sum(1 for e in self.executions if e.result.impact == Impact.BLOCKING)

    @property
    def errored(self) -> int:
        return sum(1 for e in self.executions if e.error is not None)

    @property
    def blocking(self) -> bool:
        """True when at least one result blocks the upgrade."""
        return self.failed > 0

    def by_group(self) -> dict[str, list[CheckExecution]]:
        """Executions grouped by check group, in canonical order."""
        grouped: dict[str, list[CheckExecution]] = {}
        for execution in self.executions:
            grouped.setdefault(str(execution.check.group), []).append(execution)
        return grouped

    @property
    def status(self) -> str:
        if self.failed:
            return "blocked"
        if self.warnings or self.errored:
            return "warning"
        return "ok"

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "total": self.total,
            "passed": self.passed,
            "warnings": self.warnings,
            "failed": self.failed,
            "errored": self.errored,
            "results": [
                {
                    "check": e.check.id,
                    "error": str(e.error) if e.error is not None else None,
                    "result": e.result.to_dict(),
                }
                for e in self.executions
            ],
        }
