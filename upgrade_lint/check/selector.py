"""
Selector: decide whether a check matches a selection pattern.

Pattern forms, tried in order:

    "*"                     every check
    "components" etc.       group shortcut (plural, user-facing)
    "components.dashboard"  exact ID
    "components.*"          shell-style glob over the ID

Globs support ``*``, ``?``, ``[...]`` classes (``^``/``!`` negation,
ranges) and ``\\`` escapes. ``*`` and ``?`` never match ``/``. Unlike
``fnmatch``, a malformed glob (such as an unterminated ``[``) is an error
rather than a literal.
"""

from __future__ import annotations

import re
from functools import lru_cache

from upgrade_lint.check.base import Check, CheckGroup
from upgrade_lint.check.errors import InvalidPatternError

SELECTOR_ALL = "*"
SELECTOR_COMPONENTS = "components"
SELECTOR_SERVICES = "services"
SELECTOR_WORKLOADS = "workloads"
SELECTOR_DEPENDENCIES = "dependencies"

GROUP_SHORTCUTS: dict[str, CheckGroup] = {
    SELECTOR_COMPONENTS: CheckGroup.COMPONENT,
    SELECTOR_SERVICES: CheckGroup.SERVICE,
    SELECTOR_WORKLOADS: CheckGroup.WORKLOAD,
    SELECTOR_DEPENDENCIES: CheckGroup.DEPENDENCY,
}


def matches_pattern(check: Check, pattern: str) -> bool:
    """Return True if ``check`` is selected by ``pattern``.

    Raises:
        InvalidPatternError: ``pattern`` is not a valid glob.
    """
    if pattern == SELECTOR_ALL:
        return True

    # Shortcuts win over globbing.
    if pattern in GROUP_SHORTCUTS:
        return check.group == GROUP_SHORTCUTS[pattern]

    if pattern == check.id:
        return True

    return compile_glob(pattern).fullmatch(check.id) is not None


def is_glob_pattern(pattern: str) -> bool:
    """Whether ``pattern`` is matched as a glob rather than ``*`` or a shortcut."""
    return pattern != SELECTOR_ALL and pattern not in GROUP_SHORTCUTS


@lru_cache(maxsize=256)
def compile_glob(pattern: str) -> re.Pattern[str]:
    """Translate a shell-style glob into an anchored regular expression.

    Raises:
        InvalidPatternError: Unterminated class or trailing escape.
    """
    parts: list[str] = []
    i, n = 0, len(pattern)

    while i < n:
        c = pattern[i]
        if c == "*":
            parts.append("[^/]*")
            i += 1
        elif c == "?":
            parts.append("[^/]")
            i += 1
        elif c == "\\":
            if i + 1 >= n:
                raise InvalidPatternError(f"invalid pattern {pattern!r}: trailing escape")
            parts.append(re.escape(pattern[i + 1]))
            i += 2
        elif c == "[":
            cls, i = _translate_class(pattern, i + 1)
            parts.append(cls)
        else:
            parts.append(re.escape(c))
            i += 1

    return re.compile("".join(parts))


def _translate_class(pattern: str, start: int) -> tuple[str, int]:
    """Translate a ``[...]`` class beginning after ``[``; return (regex, next index)."""
    i, n = start, len(pattern)
    negate = False
    if i < n and pattern[i] in "^!":
        negate = True
        i += 1

    items: list[str] = []
    first = True
    while True:
        if i >= n:
            raise InvalidPatternError(f"invalid pattern {pattern!r}: unterminated character class")
        c = pattern[i]
        if c == "]" and not first:
            i += 1
            break
        first = False

        lo, i = _class_char(pattern, i)
        if i + 1 < n and pattern[i] == "-" and pattern[i + 1] != "]":
            hi, i = _class_char(pattern, i + 1)
            if hi < lo:
                raise InvalidPatternError(f"invalid pattern {pattern!r}: bad range {lo}-{hi}")
            items.append(f"{re.escape(lo)}-{re.escape(hi)}")
        else:
            items.append(re.escape(lo))

    body = "".join(items)
    return (f"[^/{body}]" if negate else f"[{body}]"), i


def _class_char(pattern: str, i: int) -> tuple[str, int]:
    if pattern[i] == "\\":
        if i + 1 >= len(pattern):
            raise InvalidPatternError(f"invalid pattern {pattern!r}: trailing escape")
        return pattern[i + 1], i + 2
    return pattern[i], i + 1
