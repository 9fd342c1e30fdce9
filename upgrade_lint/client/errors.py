"""
Client errors: the closed set of failure kinds a Reader can report.

Readers translate whatever their transport produces (HTTP status codes,
kubectl stderr, fake-client rules) into a ``ClientError`` tagged with an
``ErrorKind``. Everything above the reader classifies failures by matching
on the kind, never by inspecting message strings.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorKind(StrEnum):
    """Classification of a resource-read failure."""

    NOT_FOUND = "not_found"
    RESOURCE_TYPE_NOT_FOUND = "resource_type_not_found"
    FORBIDDEN = "forbidden"
    UNAUTHORIZED = "unauthorized"
    TIMEOUT = "timeout"
    UNAVAILABLE = "unavailable"
    OTHER = "other"


class ClientError(Exception):
    """A resource read failed.

    Args:
        kind: Failure classification.
        message: Human-readable description.
        resource: Optional ``kind/namespace/name`` style reference.
    """

    def __init__(self, kind: ErrorKind, message: str, resource: str | None = None):
        super().__init__(message)
        self.kind = kind
        self.resource = resource

    def __repr__(self) -> str:
        return f"<ClientError kind={self.kind.value!r} message={str(self)!r}>"


def error_kind(err: BaseException | None) -> ErrorKind | None:
    """Return the ErrorKind of ``err`` or of any exception it was raised from."""
    seen: set[int] = set()
    current = err
    while current is not None and id(current) not in seen:
        if isinstance(current, ClientError):
            return current.kind
        seen.add(id(current))
        current = current.__cause__ or current.__context__
    return None


def is_not_found(err: BaseException | None) -> bool:
    return error_kind(err) == ErrorKind.NOT_FOUND


def is_resource_type_not_found(err: BaseException | None) -> bool:
    """Whether the resource type itself is not registered in the cluster.

    A plain NOT_FOUND on a list call means the endpoint is missing, so both
    kinds count.
    """
    return error_kind(err) in (ErrorKind.RESOURCE_TYPE_NOT_FOUND, ErrorKind.NOT_FOUND)


def is_permission_error(err: BaseException | None) -> bool:
    return error_kind(err) in (ErrorKind.FORBIDDEN, ErrorKind.UNAUTHORIZED)
