"""
Component state lookups on a DataScienceCluster.

Components live under ``spec.components.<name>`` and declare a
``managementState`` of Managed, Unmanaged or Removed.
"""

from __future__ import annotations

from upgrade_lint.client.objects import FieldTypeError, Unstructured


def get_management_state(dsc: Unstructured, component: str) -> str:
    """Return the component's management state, ``""`` if not declared.

    Raises:
        FieldTypeError: The field exists but is not a string.
    """
    return dsc.nested_string("spec", "components", component, "managementState")


def has_management_state(dsc: Unstructured, component: str, *states: str) -> bool:
    """Whether the component is in any of ``states``.

    A malformed state field counts as no match.
    """
    try:
        state = get_management_state(dsc, component)
    except FieldTypeError:
        return False
    return state in states
