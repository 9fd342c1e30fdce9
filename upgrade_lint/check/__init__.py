"""Check: the diagnostic rule engine and its public types.

Public re-exports for convenient access.
"""

from upgrade_lint.check.base import (
    CANONICAL_GROUP_ORDER,
    BaseCheck,
    Check,
    CheckGroup,
    Target,
)
from upgrade_lint.check.context import CheckContext, check_context_error
from upgrade_lint.check.errors import (
    CheckCanceledError,
    CheckContextError,
    CheckTimeoutError,
    DuplicateCheckError,
    InvalidPatternError,
    InvalidResultError,
    LintError,
)
from upgrade_lint.check.executor import CheckExecution, ExecutionReport, Executor
from upgrade_lint.check.registry import CheckRegistry
from upgrade_lint.check.result import (
    Condition,
    ConditionStatus,
    DiagnosticResult,
    Impact,
    ImpactedObject,
    new_condition,
)
from upgrade_lint.check.selector import matches_pattern
from upgrade_lint.check.verbose import DefaultVerboseFormatter, VerboseOutputFormatter

__all__ = [
    "CANONICAL_GROUP_ORDER",
    "BaseCheck",
    "Check",
    "CheckCanceledError",
    "CheckContext",
    "CheckContextError",
    "CheckExecution",
    "CheckGroup",
    "CheckRegistry",
    "CheckTimeoutError",
    "Condition",
    "ConditionStatus",
    "DefaultVerboseFormatter",
    "DiagnosticResult",
    "DuplicateCheckError",
    "ExecutionReport",
    "Executor",
    "Impact",
    "ImpactedObject",
    "InvalidPatternError",
    "InvalidResultError",
    "LintError",
    "Target",
    "VerboseOutputFormatter",
    "check_context_error",
    "matches_pattern",
]
