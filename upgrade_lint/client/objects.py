"""
Object representations returned by a Reader.

Two shapes exist:

    Unstructured     the full object as a nested dict (spec, status, ...)
    ObjectMetadata   a metadata-only header (kind, name, namespace,
                     labels, annotations, finalizers)

Both satisfy ``NamespacedNamer``, which is all the workload builder needs
to report impacted objects.
"""

from __future__ import annotations

from typing import Any, NamedTuple, Protocol, runtime_checkable

from pydantic import BaseModel, Field


class FieldTypeError(ValueError):
    """A field exists but holds a value of the wrong type."""


@runtime_checkable
class NamespacedNamer(Protocol):
    """Anything with a name and an (optionally empty) namespace."""

    @property
    def name(self) -> str: ...

    @property
    def namespace(self) -> str: ...


class NamespacedName(NamedTuple):
    namespace: str
    name: str

    def __str__(self) -> str:
        return f"{self.namespace}/{self.name}" if self.namespace else self.name


class Unstructured:
    """A full cluster object held as a plain dict.

    Mirrors what ``yaml.safe_load`` or ``kubectl get -o json`` produce.
    """

    def __init__(self, obj: dict[str, Any] | None = None):
        self.object: dict[str, Any] = obj if obj is not None else {}

    def _metadata(self) -> dict[str, Any]:
        meta = self.object.get("metadata")
        return meta if isinstance(meta, dict) else {}

    @property
    def api_version(self) -> str:
        return str(self.object.get("apiVersion", ""))

    @property
    def kind(self) -> str:
        return str(self.object.get("kind", ""))

    @property
    def name(self) -> str:
        return str(self._metadata().get("name", ""))

    @property
    def namespace(self) -> str:
        return str(self._metadata().get("namespace", "") or "")

    @property
    def annotations(self) -> dict[str, str]:
        return dict(self._metadata().get("annotations") or {})

    @property
    def labels(self) -> dict[str, str]:
        return dict(self._metadata().get("labels") or {})

    def get_annotation(self, key: str) -> str:
        return self.annotations.get(key, "")

    def nested(self, *path: str, default: Any = None) -> Any:
        """Walk ``path`` through nested mappings, returning ``default`` if absent."""
        current: Any = self.object
        for key in path:
            if not isinstance(current, dict) or key not in current:
                return default
            current = current[key]
        return current

    def nested_string(self, *path: str) -> str:
        """Return a string field, ``""`` when absent.

        Raises:
            FieldTypeError: The field exists but is not a string.
        """
        value = self.nested(*path)
        if value is None:
            return ""
        if not isinstance(value, str):
            raise FieldTypeError(
                f".{'.'.join(path)} is {type(value).__name__}, expected string"
            )
        return value

    def to_metadata(self) -> ObjectMetadata:
        meta = self._metadata()
        return ObjectMetadata(
            api_version=self.api_version,
            kind=self.kind,
            name=self.name,
            namespace=self.namespace,
            labels=dict(meta.get("labels") or {}),
            annotations=dict(meta.get("annotations") or {}),
            finalizers=list(meta.get("finalizers") or []),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Unstructured):
            return NotImplemented
        return self.object == other.object

    def __repr__(self) -> str:
        return f"<Unstructured {self.kind} {NamespacedName(self.namespace, self.name)}>"


class ObjectMetadata(BaseModel):
    """Metadata-only view of a cluster object."""

    api_version: str = ""
    kind: str = ""
    name: str
    namespace: str = ""
    labels: dict[str, str] = Field(default_factory=dict)
    annotations: dict[str, str] = Field(default_factory=dict)
    finalizers: list[str] = Field(default_factory=list)

    def get_annotation(self, key: str) -> str:
        return self.annotations.get(key, "")


def to_namespaced_names(items: list[NamespacedNamer]) -> list[NamespacedName]:
    """Collect namespace/name pairs, preserving order."""
    return [NamespacedName(item.namespace, item.name) for item in items]
