"""
End-to-end tests: realistic checks built on the validation builders,
selected from a registry and run by the executor.
"""

import pytest

from upgrade_lint import validate
from upgrade_lint.check.base import BaseCheck, CheckGroup, Target
from upgrade_lint.check.constants import (
    CHECK_TYPE_IMPACTED_WORKLOADS,
    CHECK_TYPE_REMOVAL,
    CONDITION_TYPE_COMPATIBLE,
    MANAGEMENT_STATE_MANAGED,
    MANAGEMENT_STATE_UNMANAGED,
    REASON_REQUIREMENTS_MET,
    REASON_WORKLOADS_IMPACTED,
)
from upgrade_lint.check.context import CheckContext
from upgrade_lint.check.executor import ExecutionReport, Executor
from upgrade_lint.check.registry import CheckRegistry
from upgrade_lint.check.result import ConditionStatus, Impact, new_condition
from upgrade_lint.client.errors import ErrorKind
from upgrade_lint.client.memory import InMemoryReader
from upgrade_lint.client.resources import (
    DATA_SCIENCE_CLUSTER,
    DSC_INITIALIZATION,
    INFERENCE_SERVICE,
)
from upgrade_lint.config.loader import LintConfig
from upgrade_lint.util.version import is_upgrade_from_2x_to_3x

MODELMESH_ANNOTATION = "serving.kserve.io/deploymentMode"


class ModelMeshRemovalCheck(BaseCheck):
    """ModelMesh is removed in 3.x; a managed ModelMesh blocks the upgrade."""

    def __init__(self):
        super().__init__(
            check_id="components.modelmeshserving.removal",
            name="ModelMesh removal",
            group=CheckGroup.COMPONENT,
            kind="modelmeshserving",
            check_type=CHECK_TYPE_REMOVAL,
            description="Validates ModelMesh is disabled before upgrading to 3.x",
        )

    def can_apply(self, target: Target) -> bool:
        return is_upgrade_from_2x_to_3x(target.current_version, target.target_version)

    def validate(self, ctx, target):
        return (
            validate.component(self, "modelmeshserving", target)
            .in_state(MANAGEMENT_STATE_MANAGED, MANAGEMENT_STATE_UNMANAGED)
            .run(ctx, self._validate)
        )

    def _validate(self, ctx, req):
        validate.set_compatibility_failure(
            req.result,
            "ModelMesh is %s but is removed in %s",
            req.management_state,
            req.result.annotations.get("check.opendatahub.io/target-version", "3.x"),
            remediation="Set modelmeshserving managementState to Removed",
        )


class ModelMeshWorkloadsCheck(BaseCheck):
    """InferenceServices deployed in ModelMesh mode need migration."""

    def __init__(self):
        super().__init__(
            check_id="workloads.kserve.modelmesh-isvc",
            name="ModelMesh InferenceServices",
            group=CheckGroup.WORKLOAD,
            kind="kserve",
            check_type=CHECK_TYPE_IMPACTED_WORKLOADS,
            description="Lists InferenceServices deployed with ModelMesh",
        )

    def can_apply(self, target: Target) -> bool:
        return is_upgrade_from_2x_to_3x(target.current_version, target.target_version)

    def validate(self, ctx, target):
        return (
            validate.workloads_metadata(self, target, INFERENCE_SERVICE)
            .for_component("modelmeshserving")
            .filter(lambda isvc: isvc.get_annotation(MODELMESH_ANNOTATION) == "ModelMesh")
            .complete(ctx, self._conditions)
        )

    def _conditions(self, ctx, req):
        if not req.items:
            return [new_condition(
                CONDITION_TYPE_COMPATIBLE, ConditionStatus.TRUE, REASON_REQUIREMENTS_MET,
                "No ModelMesh InferenceServices found",
            )]
        return [new_condition(
            CONDITION_TYPE_COMPATIBLE, ConditionStatus.FALSE, REASON_WORKLOADS_IMPACTED,
            "Found %d ModelMesh InferenceService(s)", len(req.items),
            impact=Impact.ADVISORY,
        )]


class AppsNamespaceCheck(BaseCheck):
    """Reads the applications namespace; used to exercise error classification."""

    def __init__(self):
        super().__init__(
            check_id="services.dsci.namespace",
            name="Applications namespace",
            group=CheckGroup.SERVICE,
            kind="dsci",
            check_type="installed",
        )

    def can_apply(self, target):
        return True

    def validate(self, ctx, target):
        return validate.component(self, "kserve", target).run(ctx, self._validate)

    def _validate(self, ctx, req):
        namespace = req.applications_namespace()
        validate.set_compatibility_success(req.result, "Applications namespace is %s", namespace)


def _isvc(namespace, name, mode):
    return {
        "metadata": {
            "name": name,
            "namespace": namespace,
            "annotations": {MODELMESH_ANNOTATION: mode},
        },
    }


@pytest.fixture
def cluster(make_dsc):
    return InMemoryReader({
        DATA_SCIENCE_CLUSTER: [make_dsc({"modelmeshserving": "Managed", "kserve": "Managed"})],
        DSC_INITIALIZATION: [{"metadata": {"name": "dsci"}, "spec": {"applicationsNamespace": "rhoai"}}],
        INFERENCE_SERVICE: [
            _isvc("team-a", "mm-1", "ModelMesh"),
            _isvc("team-a", "raw-1", "RawDeployment"),
            _isvc("team-b", "mm-2", "ModelMesh"),
        ],
    })


@pytest.fixture
def executor():
    registry = CheckRegistry()
    registry.must_register(ModelMeshRemovalCheck())
    registry.must_register(ModelMeshWorkloadsCheck())
    registry.must_register(AppsNamespaceCheck())
    return Executor(registry)


def _config(**versions):
    return LintConfig.model_validate({"versions": versions})


class TestUpgradeRun:
    def test_full_run(self, executor, cluster):
        config = _config(current="2.25.0", target="3.0.0")
        executions = executor.execute_all(config.build_context(), config.build_target(cluster))
        report = ExecutionReport.from_executions(executions)

        assert report.total == 3
        assert report.errored == 0
        assert report.blocking

        by_id = {e.check.id: e.result for e in report.executions}

        removal = by_id["components.modelmeshserving.removal"]
        condition = removal.get_condition(CONDITION_TYPE_COMPATIBLE)
        assert condition.message == "ModelMesh is Managed but is removed in 3.0.0"
        assert condition.remediation == "Set modelmeshserving managementState to Removed"
        assert removal.is_blocking

        workloads = by_id["workloads.kserve.modelmesh-isvc"]
        assert workloads.impact == Impact.ADVISORY
        assert [(o.namespace, o.name) for o in workloads.impacted_objects] == [
            ("team-a", "mm-1"),
            ("team-b", "mm-2"),
        ]
        assert workloads.annotations["workload.opendatahub.io/impacted-count"] == "2"

        namespace = by_id["services.dsci.namespace"]
        assert namespace.get_condition(CONDITION_TYPE_COMPATIBLE).message == (
            "Applications namespace is rhoai"
        )

        # service → component → workload
        assert [e.check.group for e in report.executions] == [
            CheckGroup.SERVICE,
            CheckGroup.COMPONENT,
            CheckGroup.WORKLOAD,
        ]

    def test_lint_mode_skips_upgrade_checks(self, executor, cluster):
        config = _config(current="3.0.0")
        executions = executor.execute_all(CheckContext.background(), config.build_target(cluster))
        assert [e.check.id for e in executions] == ["services.dsci.namespace"]

    def test_selection_by_shortcut(self, executor, cluster):
        config = _config(current="2.25.0", target="3.0.0")
        executions = executor.execute_patterns(
            CheckContext.background(), config.build_target(cluster), ["workloads"]
        )
        assert [e.check.id for e in executions] == ["workloads.kserve.modelmesh-isvc"]

    def test_removed_component_passes(self, executor, make_dsc):
        cluster = InMemoryReader({
            DATA_SCIENCE_CLUSTER: [make_dsc({"modelmeshserving": "Removed"})],
            INFERENCE_SERVICE: [_isvc("team-a", "mm-1", "ModelMesh")],
        })
        config = _config(current="2.25.0", target="3.0.0")
        executions = executor.execute_patterns(
            CheckContext.background(), config.build_target(cluster), ["*modelmesh*"]
        )
        report = ExecutionReport.from_executions(executions)

        assert report.total == 2
        assert not report.blocking
        assert report.errored == 0

    def test_permission_failure_isolated(self, executor, cluster):
        cluster.set_failure(DSC_INITIALIZATION, ErrorKind.FORBIDDEN)
        config = _config(current="2.25.0", target="3.0.0")
        report = ExecutionReport.from_executions(
            executor.execute_all(CheckContext.background(), config.build_target(cluster))
        )

        assert report.total == 3
        assert report.errored == 1
        [failed] = [e for e in report.executions if e.error is not None]
        assert failed.check.id == "services.dsci.namespace"
        assert failed.result.conditions[0].reason == "APIAccessDenied"
