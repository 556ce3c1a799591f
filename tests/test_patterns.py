"""Tests for glob compilation and relation filtering."""

import pytest

from depscope.models import Relation
from depscope.patterns import PathMatcher, compile_pattern, filter_relations


ROOT = "/test/project"


def _rel(from_id, to_id, rel_type="import"):
    return Relation(id=f"{from_id}->{to_id}", type=rel_type, from_id=from_id, to_id=to_id)


@pytest.mark.parametrize("pattern,path,expected", [
    ("src/**/*.ts", "src/a.ts", True),
    ("src/**/*.ts", "src/deep/er/a.ts", True),
    ("src/**/*.ts", "lib/a.ts", False),
    ("src/**/*.ts", "packages/x/src/a.ts", True),
    ("*.ts", "a.ts", True),
    ("*.ts", "src/a.ts", True),
    ("src/*.ts", "src/sub/a.ts", False),
    ("**/test/**", "test/a.ts", True),
    ("**/test/**", "src/a.ts", False),
    ("**/test/**", "src/latest/a.ts", False),
    ("a?.ts", "ab.ts", True),
    ("a?.ts", "a/.ts", False),
    ("Src/*.ts", "src/a.ts", False),
    ("**", "anything/at/all", True),
    ("src/a.ts", "src/a.ts", True),
    ("src/a.ts", "src/aXts", False),
])
def test_compile_pattern(pattern, path, expected):
    assert bool(compile_pattern(pattern).match(path)) is expected


def test_leading_slash_anchors_to_absolute_path():
    rx = compile_pattern("/test/project/src/**/*.ts")

    assert rx.match("/test/project/src/components/Button.ts")
    assert not rx.match("/other/test/project/src/Button.ts")


class TestPathMatcher:
    def test_relative_patterns_use_root_relative_path(self):
        matcher = PathMatcher(["**/test/**"], ROOT)

        assert matcher.matches(f"{ROOT}/test/file.test.ts")
        assert not matcher.matches(f"{ROOT}/src/file.ts")

    def test_paths_outside_root_are_matched_as_is(self):
        matcher = PathMatcher(["src/*.ts"], ROOT)

        assert matcher.matches("/elsewhere/src/a.ts")

    def test_external_ids_never_match(self):
        assert not PathMatcher(["**"], ROOT).matches("external:react")

    def test_empty_matcher_is_falsy(self):
        assert not PathMatcher([], ROOT)
        assert not PathMatcher(["", None], ROOT)


class TestFilterRelations:
    def test_no_patterns_keeps_well_formed_relations(self):
        relations = [_rel("a", "b"), _rel("", "b"), _rel("a", "")]

        assert filter_relations(relations) == [relations[0]]

    def test_match_all_include_is_same_as_none(self):
        relations = [_rel("a", "b"), _rel("a", "external:react")]

        assert filter_relations(relations, include_patterns=["**/*"]) == relations

    def test_include_by_source_keeps_external_relation(self):
        relations = [_rel(f"{ROOT}/src/a.ts", "external:react")]

        kept = filter_relations(relations, ROOT, include_patterns=["src/**"])

        assert kept == relations

    def test_include_by_internal_target(self):
        relations = [_rel(f"{ROOT}/lib/a.ts", f"{ROOT}/src/b.ts")]

        assert filter_relations(relations, ROOT, include_patterns=["src/**"]) == relations

    def test_exclude_applies_after_include(self):
        relations = [
            _rel(f"{ROOT}/src/a.ts", f"{ROOT}/src/b.ts"),
            _rel(f"{ROOT}/src/a.ts", f"{ROOT}/src/b.spec.ts"),
        ]

        kept = filter_relations(
            relations, ROOT, include_patterns=["src/**"], exclude_patterns=["*.spec.ts"]
        )

        assert kept == relations[:1]

    def test_relation_kind_does_not_affect_filtering(self):
        relations = [_rel("a", "b", "inherits"), _rel("a", "c", "extends"), _rel("a", "d", "")]

        assert filter_relations(relations) == relations
