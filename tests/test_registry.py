"""
Tests for the check registry: registration, lookup, selection, concurrency.
"""

import threading

import pytest

from upgrade_lint.check.base import CheckGroup
from upgrade_lint.check.errors import DuplicateCheckError, InvalidPatternError
from upgrade_lint.check.registry import CheckRegistry


@pytest.fixture
def registry(make_check):
    reg = CheckRegistry()
    reg.register(make_check("components.dashboard", group=CheckGroup.COMPONENT))
    reg.register(make_check("components.kserve", group=CheckGroup.COMPONENT))
    reg.register(make_check("services.servicemesh", group=CheckGroup.SERVICE))
    reg.register(make_check("workloads.notebook", group=CheckGroup.WORKLOAD))
    reg.register(make_check("dependencies.certmanager", group=CheckGroup.DEPENDENCY))
    return reg


def _ids(checks):
    return sorted(c.id for c in checks)


# ── Registration ─────────────────────────────────────────────────────


class TestRegistration:
    def test_register_and_get(self, make_check):
        reg = CheckRegistry()
        check = make_check("components.kueue")
        reg.register(check)
        assert reg.get("components.kueue") is check
        assert "components.kueue" in reg
        assert len(reg) == 1

    def test_get_unknown(self):
        assert CheckRegistry().get("nope") is None

    def test_duplicate_rejected(self, make_check):
        reg = CheckRegistry()
        first = make_check("components.kueue")
        reg.register(first)
        with pytest.raises(DuplicateCheckError, match="components.kueue"):
            reg.register(make_check("components.kueue"))
        assert reg.get("components.kueue") is first
        assert len(reg) == 1

    def test_must_register_raises_runtime_error(self, make_check):
        reg = CheckRegistry()
        reg.must_register(make_check("components.kueue"))
        with pytest.raises(RuntimeError) as exc_info:
            reg.must_register(make_check("components.kueue"))
        assert isinstance(exc_info.value.__cause__, DuplicateCheckError)

    def test_concurrent_duplicate_registration(self, make_check):
        reg = CheckRegistry()
        errors: list[Exception] = []
        barrier = threading.Barrier(8)

        def worker():
            barrier.wait()
            try:
                reg.register(make_check("components.race"))
            except DuplicateCheckError as e:
                errors.append(e)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(reg) == 1
        assert len(errors) == 7

    def test_concurrent_register_and_read(self, make_check):
        reg = CheckRegistry()
        stop = threading.Event()
        seen: list[int] = []

        def reader():
            while not stop.is_set():
                seen.append(len(reg.list_all()))

        readers = [threading.Thread(target=reader) for _ in range(4)]
        for t in readers:
            t.start()
        for i in range(100):
            reg.register(make_check(f"components.c{i}"))
        stop.set()
        for t in readers:
            t.join()

        assert len(reg) == 100
        assert all(0 <= n <= 100 for n in seen)


# ── Listing ──────────────────────────────────────────────────────────


class TestListing:
    def test_list_all(self, registry):
        assert len(registry.list_all()) == 5

    def test_list_all_returns_fresh_list(self, registry):
        registry.list_all().clear()
        assert len(registry.list_all()) == 5

    def test_list_by_group(self, registry):
        assert _ids(registry.list_by_group(CheckGroup.COMPONENT)) == [
            "components.dashboard",
            "components.kserve",
        ]

    def test_list_by_pattern_wildcard(self, registry):
        assert len(registry.list_by_pattern("*")) == 5

    def test_list_by_pattern_shortcut(self, registry):
        assert _ids(registry.list_by_pattern("services")) == ["services.servicemesh"]

    def test_list_by_pattern_glob(self, registry):
        assert _ids(registry.list_by_pattern("*dashboard*")) == ["components.dashboard"]

    def test_list_by_pattern_with_group(self, registry):
        assert _ids(registry.list_by_pattern("*", CheckGroup.WORKLOAD)) == [
            "workloads.notebook",
        ]
        assert registry.list_by_pattern("components.*", CheckGroup.SERVICE) == []

    def test_invalid_pattern(self, registry):
        with pytest.raises(InvalidPatternError, match=r"selection pattern '\['"):
            registry.list_by_pattern("[")

    def test_invalid_pattern_outside_group(self, make_check):
        reg = CheckRegistry()
        reg.register(make_check("components.dashboard", group=CheckGroup.COMPONENT))
        with pytest.raises(InvalidPatternError):
            reg.list_by_pattern("[", CheckGroup.SERVICE)

    def test_invalid_pattern_empty_registry(self):
        with pytest.raises(InvalidPatternError):
            CheckRegistry().list_by_pattern("components.[")


class TestListByPatterns:
    def test_union(self, registry):
        checks = registry.list_by_patterns(["components.dashboard", "services"])
        assert _ids(checks) == ["components.dashboard", "services.servicemesh"]

    def test_overlap_deduplicated(self, registry):
        checks = registry.list_by_patterns(["components", "components.*", "*kserve"])
        assert _ids(checks) == ["components.dashboard", "components.kserve"]

    def test_no_match(self, registry):
        assert registry.list_by_patterns(["nothing.*"]) == []

    def test_empty_patterns(self, registry):
        assert registry.list_by_patterns([]) == []

    def test_invalid_pattern_anywhere(self, registry):
        with pytest.raises(InvalidPatternError):
            registry.list_by_patterns(["components", "[bad"])

    @pytest.mark.parametrize("patterns", [
        ["*", "["],
        ["components.*", "["],
        ["components.dashboard", "services", "workloads.[a"],
    ])
    def test_invalid_pattern_after_full_match(self, registry, patterns):
        with pytest.raises(InvalidPatternError):
            registry.list_by_patterns(patterns)
