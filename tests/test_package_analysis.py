"""Tests for version range classification and usage statistics."""

import pytest

from depscope.graphs.models import ExternalDependencyUsage
from depscope.models import DependencyInfo
from depscope.package_analysis.usage import compute_usage_statistics
from depscope.package_analysis.versions import (
    analyze_versions,
    classify_version,
    detect_specifier_source,
)


@pytest.mark.parametrize("version,expected", [
    ("^1.0.0", "caret"),
    ("^0.2", "caret"),
    ("~2.1.0", "tilde"),
    ("~>1.2", "tilde"),
    ("1.0.0", "exact"),
    ("v2.3.4", "exact"),
    ("1.0.0-beta.1+build.5", "exact"),
    (" 1.0.0 ", "exact"),
    (">=3.0.0 <4.0.0", "complex"),
    ("1.x", "complex"),
    ("*", "complex"),
    ("latest", "complex"),
    ("1.0.0 || 2.0.0", "complex"),
    ("git+https://github.com/user/repo.git#main", "complex"),
    ("file:../local-package", "complex"),
    ("https://example.com/pkg.tgz", "complex"),
    ("npm:other@^1.0.0", "complex"),
    ("", "complex"),
])
def test_classify_version(version, expected):
    assert classify_version(version) == expected


@pytest.mark.parametrize("version,expected", [
    ("git+ssh://git@github.com/a/b.git", "git"),
    ("github:user/repo", "git"),
    ("file:../x", "local"),
    ("link:../x", "local"),
    ("https://x/y.tgz", "url"),
    ("npm:lodash@4", "alias"),
    ("workspace:*", "workspace"),
    ("^1.0.0", "registry"),
])
def test_detect_specifier_source(version, expected):
    assert detect_specifier_source(version) == expected


def test_every_dependency_lands_in_one_bucket():
    deps = [DependencyInfo(name=f"p{i}", version=v)
            for i, v in enumerate(["^1.0.0", "~2.1.0", "1.0.0", ">=3.0.0 <4.0.0", "git://x"])]

    analysis = analyze_versions(deps)

    assert (analysis.caret_ranges, analysis.tilde_ranges,
            analysis.exact_versions, analysis.complex_ranges) == (1, 1, 1, 2)
    assert analysis.total == len(deps)


def test_nameless_dependencies_are_skipped():
    analysis = analyze_versions([DependencyInfo(name="", version="^1.0.0")])

    assert analysis.total == 0


# ── Usage statistics ──


def _usage(name, count):
    return ExternalDependencyUsage(name=name, usage_count=count)


class TestUsageStatistics:
    def test_rankings(self):
        usages = [_usage("a", 2), _usage("b", 5), _usage("c", 1), _usage("d", 2)]

        stats = compute_usage_statistics(usages, [])

        assert [u.name for u in stats.most_used] == ["b", "a", "d", "c"]
        assert [u.name for u in stats.least_used] == ["c", "a", "d", "b"]

    def test_top_n_limits_lists(self):
        usages = [_usage(f"p{i}", i) for i in range(15)]

        stats = compute_usage_statistics(usages, [], top_n=3)

        assert [u.count for u in stats.most_used] == [14, 13, 12]
        assert [u.count for u in stats.least_used] == [0, 1, 2]
        assert len(stats.usage_distribution) == 15

    def test_unused_declared_packages(self):
        declared = [DependencyInfo(name="react"), DependencyInfo(name="left-pad"),
                    DependencyInfo(name="left-pad"), DependencyInfo(name="")]

        stats = compute_usage_statistics([_usage("react", 1)], declared)

        assert stats.unused == ("left-pad",)

    def test_nothing_declared_nothing_used(self):
        stats = compute_usage_statistics([], [])

        assert (stats.most_used, stats.least_used, stats.unused) == ((), (), ())
        assert stats.to_dict() == {
            "most_used": [], "least_used": [], "unused": [], "usage_distribution": {},
        }


def test_null_version_is_classified_as_complex():
    analysis = analyze_versions([DependencyInfo.from_dict({"name": "react", "version": None})])

    assert analysis.complex_ranges == 1
