"""
Component builder: boilerplate for checks about one DSC component.

The builder fetches the DataScienceCluster, reads the component's
management state, short-circuits when the component is not in a
relevant state, and pre-populates the result annotations before handing
control to the check body.

Usage:

    return (
        validate.component(self, "codeflare", target)
        .in_state(MANAGEMENT_STATE_MANAGED, MANAGEMENT_STATE_UNMANAGED)
        .run(ctx, self._validate_codeflare)
    )
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import TYPE_CHECKING

from upgrade_lint.check.constants import (
    ANNOTATION_CHECK_TARGET_VERSION,
    ANNOTATION_COMPONENT_MANAGEMENT_STATE,
)
from upgrade_lint.check.errors import LintError
from upgrade_lint.check.result import DiagnosticResult
from upgrade_lint.client.components import get_management_state
from upgrade_lint.client.errors import is_not_found
from upgrade_lint.client.objects import FieldTypeError, Unstructured
from upgrade_lint.client.reader import (
    Reader,
    get_applications_namespace,
    get_data_science_cluster,
)
from upgrade_lint.validate.results import (
    data_science_cluster_not_found,
    set_component_not_configured,
)

if TYPE_CHECKING:
    from upgrade_lint.check.base import Check, Target
    from upgrade_lint.check.context import CheckContext

logger = logging.getLogger(__name__)


class ComponentRequest:
    """Pre-fetched data handed to a component check body.

    Attributes:
        result: The result being built, annotations already populated.
        dsc: The DataScienceCluster.
        management_state: The component's management state.
        client: Reader for any further lookups.
    """

    def __init__(
        self,
        result: DiagnosticResult,
        dsc: Unstructured,
        management_state: str,
        client: Reader,
    ):
        self.result = result
        self.dsc = dsc
        self.management_state = management_state
        self.client = client

        self._ns_lock = threading.Lock()
        self._ns_loaded = False
        self._ns_value = ""
        self._ns_error: Exception | None = None

    def applications_namespace(self) -> str:
        """The applications namespace declared by the DSCInitialization.

        Fetched on first call; later calls return the cached value, or
        re-raise the cached error.
        """
        with self._ns_lock:
            if not self._ns_loaded:
                try:
                    self._ns_value = get_applications_namespace(self.client)
                except Exception as e:
                    self._ns_error = e
                self._ns_loaded = True

        if self._ns_error is not None:
            raise self._ns_error
        return self._ns_value


ComponentValidateFn = Callable[["CheckContext", ComponentRequest], None]


class ComponentBuilder:
    """Fluent builder for component-based validation."""

    def __init__(self, check: Check, component: str, target: Target):
        self._check = check
        self._component = component
        self._target = target
        self._required_states: tuple[str, ...] = ()

    def in_state(self, *states: str) -> ComponentBuilder:
        """Only validate when the component is in one of ``states``.

        Without this call the check body runs for any state.
        """
        self._required_states = states
        return self

    def run(self, ctx: CheckContext, fn: ComponentValidateFn) -> DiagnosticResult:
        """Fetch, filter, annotate, then call ``fn``.

        Returns:
            A "not found" result when there is no DataScienceCluster, a
            "not configured" result when the component is in another state,
            otherwise the result ``fn`` filled in.

        Raises:
            LintError: The DataScienceCluster could not be read, or its
                management state field is malformed.
        """
        check = self._check

        try:
            dsc = get_data_science_cluster(self._target.client)
        except Exception as e:
            if is_not_found(e):
                logger.debug("%s: no DataScienceCluster", check.id)
                return data_science_cluster_not_found(
                    str(check.group),
                    check.kind,
                    check.check_type,
                    check.description,
                )
            raise LintError(f"getting DataScienceCluster: {e}") from e

        try:
            state = get_management_state(dsc, self._component)
        except FieldTypeError as e:
            raise LintError(f"querying {self._component} managementState: {e}") from e

        result = check.new_result()

        if self._required_states and state not in self._required_states:
            logger.debug(
                "%s: component %s is %r, not in %s",
                check.id, self._component, state, list(self._required_states),
            )
            set_component_not_configured(result, self._component)
            return result

        result.annotations[ANNOTATION_COMPONENT_MANAGEMENT_STATE] = state
        if self._target.target_version is not None:
            result.annotations[ANNOTATION_CHECK_TARGET_VERSION] = str(self._target.target_version)

        request = ComponentRequest(
            result=result,
            dsc=dsc,
            management_state=state,
            client=self._target.client,
        )
        fn(ctx, request)
        return result


def component(check: Check, name: str, target: Target) -> ComponentBuilder:
    """Start a component validation for ``spec.components.<name>``."""
    return ComponentBuilder(check, name, target)
