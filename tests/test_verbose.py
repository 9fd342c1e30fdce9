"""
Tests for verbose impacted-object rendering.
"""

import io

from upgrade_lint.check.result import DiagnosticResult, ImpactedObject
from upgrade_lint.check.verbose import (
    DefaultVerboseFormatter,
    VerboseOutputFormatter,
    format_verbose,
    group_by_namespace,
)


def _result(*objects: ImpactedObject) -> DiagnosticResult:
    result = DiagnosticResult.new("workload", "notebook", "impacted-workloads")
    for obj in objects:
        result.add_impacted_object(obj)
    return result


class CustomCheck:
    def format_verbose_output(self, out, result):
        out.write(f"custom: {len(result.impacted_objects or [])}\n")


class TestGroupByNamespace:
    def test_cluster_scoped_first_then_sorted(self):
        groups = group_by_namespace([
            ImpactedObject(namespace="zeta", name="z1"),
            ImpactedObject(namespace="", name="c1"),
            ImpactedObject(namespace="alpha", name="a1"),
            ImpactedObject(namespace="zeta", name="z2"),
        ])
        assert [ns for ns, _ in groups] == ["", "alpha", "zeta"]
        assert [o.name for o in groups[2][1]] == ["z1", "z2"]


class TestDefaultVerboseFormatter:
    def test_layout(self):
        out = io.StringIO()
        result = _result(
            ImpactedObject(namespace="team-b", name="nb-2", kind="Notebook"),
            ImpactedObject(namespace="", name="default-dsc", kind="DataScienceCluster"),
            ImpactedObject(namespace="team-a", name="nb-1"),
        )

        DefaultVerboseFormatter({"team-a": "alice"}).format_verbose_output(out, result)

        assert out.getvalue() == (
            "    - default-dsc (DataScienceCluster)\n"
            "    team-a (requester: alice):\n"
            "      - nb-1\n"
            "    team-b:\n"
            "      - nb-2 (Notebook)\n"
        )

    def test_empty_requester_ignored(self):
        out = io.StringIO()
        result = _result(ImpactedObject(namespace="team-a", name="nb-1"))
        DefaultVerboseFormatter({"team-a": ""}).format_verbose_output(out, result)
        assert out.getvalue().splitlines()[0] == "    team-a:"

    def test_no_objects(self):
        out = io.StringIO()
        DefaultVerboseFormatter().format_verbose_output(out, _result())
        assert out.getvalue() == ""


class TestFormatVerbose:
    def test_capability_detected(self):
        assert isinstance(CustomCheck(), VerboseOutputFormatter)
        out = io.StringIO()
        format_verbose(CustomCheck(), _result(ImpactedObject(name="x")), out)
        assert out.getvalue() == "custom: 1\n"

    def test_fallback_to_default(self, make_check):
        out = io.StringIO()
        format_verbose(make_check("workloads.x"), _result(ImpactedObject(name="x")), out)
        assert out.getvalue() == "    - x\n"
