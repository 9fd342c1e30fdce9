"""
In-memory reader: a universal test double for the Reader contract.

Serves objects from a dict keyed by resource type. Resource types that
were never registered behave like a missing CRD. Per-type failures can
be injected to simulate permission or connectivity problems.
"""

from __future__ import annotations

import copy
from typing import Any

from upgrade_lint.client.errors import ClientError, ErrorKind
from upgrade_lint.client.objects import ObjectMetadata, Unstructured
from upgrade_lint.client.resources import ResourceType


class InMemoryReader:
    """Reader backed by in-process objects.

    Args:
        objects: Optional ``{resource_type: [object dicts]}`` seed data.
            Every type present (even with an empty list) counts as
            registered.
    """

    def __init__(self, objects: dict[ResourceType, list[dict[str, Any]]] | None = None):
        self._objects: dict[ResourceType, list[dict[str, Any]]] = {}
        self._failures: dict[ResourceType, ClientError] = {}
        self._call_log: list[tuple[str, ResourceType]] = []
        for resource_type, items in (objects or {}).items():
            self.register_type(resource_type)
            for item in items:
                self.add(resource_type, item)

    @property
    def call_log(self) -> list[tuple[str, ResourceType]]:
        """``(method, resource_type)`` for every call received."""
        return self._call_log

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    def register_type(self, resource_type: ResourceType) -> None:
        """Make ``resource_type`` known without adding objects."""
        self._objects.setdefault(resource_type, [])

    def add(self, resource_type: ResourceType, obj: dict[str, Any]) -> None:
        """Add an object, filling apiVersion/kind from the type if missing."""
        item = copy.deepcopy(obj)
        item.setdefault("apiVersion", resource_type.api_version)
        item.setdefault("kind", resource_type.kind)
        item.setdefault("metadata", {})
        self._objects.setdefault(resource_type, []).append(item)

    def set_failure(
        self,
        resource_type: ResourceType,
        kind: ErrorKind,
        message: str = "injected failure",
    ) -> None:
        """Make every call for ``resource_type`` raise ClientError(kind)."""
        self._failures[resource_type] = ClientError(kind, message, resource=resource_type.kind)

    def reset(self) -> None:
        """Clear call log and injected failures."""
        self._call_log.clear()
        self._failures.clear()

    # ── Reader contract ─────────────────────────────────────────

    def list(self, resource_type: ResourceType) -> list[Unstructured]:
        self._call_log.append(("list", resource_type))
        return [Unstructured(copy.deepcopy(o)) for o in self._items(resource_type)]

    def list_metadata(self, resource_type: ResourceType) -> list[ObjectMetadata]:
        self._call_log.append(("list_metadata", resource_type))
        return [Unstructured(o).to_metadata() for o in self._items(resource_type)]

    def get(
        self,
        resource_type: ResourceType,
        name: str,
        namespace: str | None = None,
    ) -> Unstructured:
        self._call_log.append(("get", resource_type))
        for obj in self._items(resource_type):
            candidate = Unstructured(obj)
            if candidate.name != name:
                continue
            if namespace is not None and candidate.namespace != namespace:
                continue
            return Unstructured(copy.deepcopy(obj))

        ref = f"{namespace}/{name}" if namespace else name
        raise ClientError(
            ErrorKind.NOT_FOUND,
            f'{resource_type.plural} "{ref}" not found',
            resource=f"{resource_type.kind}/{ref}",
        )

    def _items(self, resource_type: ResourceType) -> list[dict[str, Any]]:
        if resource_type in self._failures:
            raise self._failures[resource_type]
        if resource_type not in self._objects:
            raise ClientError(
                ErrorKind.RESOURCE_TYPE_NOT_FOUND,
                f'the server doesn\'t have a resource type "{resource_type}"',
                resource=resource_type.kind,
            )
        return self._objects[resource_type]
