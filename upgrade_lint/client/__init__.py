"""Client: the read-only resource access layer consumed by checks.

Public re-exports for convenient access.
"""

from upgrade_lint.client.components import get_management_state, has_management_state
from upgrade_lint.client.errors import (
    ClientError,
    ErrorKind,
    error_kind,
    is_not_found,
    is_permission_error,
    is_resource_type_not_found,
)
from upgrade_lint.client.memory import InMemoryReader
from upgrade_lint.client.objects import (
    FieldTypeError,
    NamespacedName,
    NamespacedNamer,
    ObjectMetadata,
    Unstructured,
    to_namespaced_names,
)
from upgrade_lint.client.reader import (
    Reader,
    get_applications_namespace,
    get_data_science_cluster,
    get_dsc_initialization,
)
from upgrade_lint.client.resources import ResourceType

__all__ = [
    "ClientError",
    "ErrorKind",
    "FieldTypeError",
    "InMemoryReader",
    "NamespacedName",
    "NamespacedNamer",
    "ObjectMetadata",
    "Reader",
    "ResourceType",
    "Unstructured",
    "error_kind",
    "get_applications_namespace",
    "get_data_science_cluster",
    "get_dsc_initialization",
    "get_management_state",
    "has_management_state",
    "is_not_found",
    "is_permission_error",
    "is_resource_type_not_found",
    "to_namespaced_names",
]
