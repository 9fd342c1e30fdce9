"""
Reader: the read-only resource access contract consumed by checks.

The check framework never talks to a cluster directly. It is handed a
Reader and calls only the three methods below. Implementations raise
``ClientError`` with an ``ErrorKind`` on failure.

The module also carries the singleton lookups shared by many checks
(DataScienceCluster, DSCInitialization, applications namespace).
"""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

from upgrade_lint.client.errors import ClientError, ErrorKind, is_resource_type_not_found
from upgrade_lint.client.objects import ObjectMetadata, Unstructured
from upgrade_lint.client.resources import (
    DATA_SCIENCE_CLUSTER,
    DSC_INITIALIZATION,
    ResourceType,
)

logger = logging.getLogger(__name__)


@runtime_checkable
class Reader(Protocol):
    """Read-only access to cluster resources."""

    def list(self, resource_type: ResourceType) -> list[Unstructured]:
        """List every object of ``resource_type`` across namespaces."""
        ...

    def list_metadata(self, resource_type: ResourceType) -> list[ObjectMetadata]:
        """List metadata headers of every object of ``resource_type``."""
        ...

    def get(
        self,
        resource_type: ResourceType,
        name: str,
        namespace: str | None = None,
    ) -> Unstructured:
        """Fetch one object. Raises ClientError(NOT_FOUND) when absent."""
        ...


def _get_singleton(reader: Reader, resource_type: ResourceType) -> Unstructured:
    try:
        items = reader.list(resource_type)
    except ClientError as e:
        if is_resource_type_not_found(e):
            raise ClientError(
                ErrorKind.NOT_FOUND,
                f"no {resource_type.kind} found: resource type not registered",
                resource=resource_type.kind,
            ) from e
        raise

    if not items:
        raise ClientError(
            ErrorKind.NOT_FOUND,
            f"no {resource_type.kind} found",
            resource=resource_type.kind,
        )

    if len(items) > 1:
        logger.warning(
            "Found %d %s objects, using '%s'",
            len(items), resource_type.kind, items[0].name,
        )
    return items[0]


def get_data_science_cluster(reader: Reader) -> Unstructured:
    """Return the cluster's DataScienceCluster singleton.

    Raises:
        ClientError: NOT_FOUND when none exists (or the CRD is missing).
    """
    return _get_singleton(reader, DATA_SCIENCE_CLUSTER)


def get_dsc_initialization(reader: Reader) -> Unstructured:
    """Return the cluster's DSCInitialization singleton."""
    return _get_singleton(reader, DSC_INITIALIZATION)


def get_applications_namespace(reader: Reader) -> str:
    """Return ``spec.applicationsNamespace`` from the DSCInitialization.

    Raises:
        ClientError: NOT_FOUND when the DSCInitialization is missing or
            does not declare an applications namespace.
        FieldTypeError: The field is not a string.
    """
    dsci = get_dsc_initialization(reader)
    namespace = dsci.nested_string("spec", "applicationsNamespace")
    if not namespace:
        raise ClientError(
            ErrorKind.NOT_FOUND,
            f"{DSC_INITIALIZATION.kind} '{dsci.name}' has no spec.applicationsNamespace",
            resource=f"{DSC_INITIALIZATION.kind}/{dsci.name}",
        )
    return namespace
