"""
Check registry: the catalogue of available diagnostic checks.

The registry is the single point of check management. It handles
registration, lookup and pattern-based selection. The executor never
holds checks of its own; it always resolves them through the registry.

One instance is built in the composition root and passed to whatever
needs it. There is no module-level default registry.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Iterator
from contextlib import contextmanager

from upgrade_lint.check.base import Check, CheckGroup
from upgrade_lint.check.errors import DuplicateCheckError, InvalidPatternError
from upgrade_lint.check.selector import compile_glob, is_glob_pattern, matches_pattern

logger = logging.getLogger(__name__)


class _ReadWriteLock:
    """Many concurrent readers or one exclusive writer. Writers take priority."""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class CheckRegistry:
    """Concurrency-safe catalogue of checks keyed by ID.

    Features:
        - Register checks, rejecting duplicate IDs
        - Look up a check by ID
        - List all checks, by group, or by selection pattern(s)

    Listing order is unspecified.
    """

    def __init__(self) -> None:
        self._checks: dict[str, Check] = {}
        self._lock = _ReadWriteLock()

    def register(self, check: Check) -> None:
        """Add a check.

        Raises:
            DuplicateCheckError: A check with the same ID is already present.
        """
        check_id = check.id
        with self._lock.write():
            if check_id in self._checks:
                raise DuplicateCheckError(check_id)
            self._checks[check_id] = check
        logger.debug("Registered check: %s", check_id)

    def must_register(self, check: Check) -> None:
        """Register a check, treating failure as a programming error.

        Use while assembling the registry at startup, where a duplicate
        ID can only mean a build-time bug.

        Raises:
            RuntimeError: Registration failed.
        """
        try:
            self.register(check)
        except DuplicateCheckError as e:
            raise RuntimeError(f"failed to register check {check.id}: {e}") from e

    def get(self, check_id: str) -> Check | None:
        """Look up a check by ID."""
        with self._lock.read():
            return self._checks.get(check_id)

    def list_all(self) -> list[Check]:
        """All registered checks, as a fresh list."""
        with self._lock.read():
            return list(self._checks.values())

    def list_by_group(self, group: CheckGroup) -> list[Check]:
        with self._lock.read():
            return [c for c in self._checks.values() if c.group == group]

    def list_by_pattern(
        self,
        pattern: str,
        group: CheckGroup | None = None,
    ) -> list[Check]:
        """Checks matching ``pattern``, optionally restricted to ``group``.

        Raises:
            InvalidPatternError: ``pattern`` is not a valid glob.
        """
        return self.list_by_patterns([pattern], group)

    def list_by_patterns(
        self,
        patterns: Iterable[str],
        group: CheckGroup | None = None,
    ) -> list[Check]:
        """Union of checks matching any of ``patterns``, without duplicates.

        Every pattern is validated before any check is matched or the
        group filter applied, so a bad glob fails regardless of position.

        Raises:
            InvalidPatternError: Any pattern is not a valid glob.
        """
        patterns = list(patterns)
        selected: dict[str, Check] = {}

        with self._lock.read():
            for pattern in patterns:
                if is_glob_pattern(pattern):
                    try:
                        compile_glob(pattern)
                    except InvalidPatternError as e:
                        raise InvalidPatternError(f"selection pattern {pattern!r}: {e}") from e

            for check_id, check in self._checks.items():
                if group and check.group != group:
                    continue
                if any(matches_pattern(check, p) for p in patterns):
                    selected[check_id] = check

        return list(selected.values())

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._checks)

    def __contains__(self, check_id: object) -> bool:
        with self._lock.read():
            return check_id in self._checks
