"""
Engine errors: the exceptions the check framework raises itself.

Per-check failures never escape the executor; these cover selection,
registration and result-invariant problems.
"""

from __future__ import annotations


class LintError(Exception):
    """Base class for check framework errors."""


class InvalidPatternError(LintError, ValueError):
    """A selection pattern is not a valid glob."""


class DuplicateCheckError(LintError):
    """A check with the same ID is already registered."""

    def __init__(self, check_id: str):
        super().__init__(f"check with ID {check_id} already registered")
        self.check_id = check_id


class InvalidResultError(LintError, ValueError):
    """A DiagnosticResult violates its structural invariants."""


class CheckContextError(LintError):
    """The run context is done; raised or returned by ``check_context_error``."""


class CheckTimeoutError(CheckContextError):
    """The run deadline passed."""

    def __init__(self) -> None:
        super().__init__("check execution timed out")


class CheckCanceledError(CheckContextError):
    """The run was explicitly canceled."""

    def __init__(self) -> None:
        super().__init__("check execution canceled")
