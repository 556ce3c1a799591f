"""Include/exclude glob filtering of relations.

Glob syntax:
  ``**``  any number of whole path segments (including none)
  ``*``   any run of characters within one segment
  ``?``   exactly one character within one segment

A pattern starting with ``/`` is anchored at the start of the absolute
module path. Any other pattern is tested against the path relative to the
project root and may start at any segment boundary, so ``src/**/*.ts``
matches ``<root>/src/a.ts`` as well as ``<root>/packages/x/src/a.ts``.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Optional, Pattern, Sequence

from .graphs.models import EXTERNAL_PREFIX
from .models import Relation


MATCH_ALL_PATTERNS = ("**/*", "**")


def compile_pattern(pattern: str) -> Pattern[str]:
    """Translate a glob pattern into a compiled regular expression."""
    anchored = pattern.startswith("/")
    body = pattern[1:] if anchored else pattern

    parts: List[str] = []
    i = 0
    n = len(body)
    while i < n:
        c = body[i]
        if body.startswith("**", i):
            i += 2
            if i < n and body[i] == "/":
                parts.append("(?:[^/]*/)*")
                i += 1
            else:
                parts.append(".*")
            continue
        if c == "*":
            parts.append("[^/]*")
        elif c == "?":
            parts.append("[^/]")
        else:
            parts.append(re.escape(c))
        i += 1

    regex = "".join(parts)
    if anchored:
        return re.compile(f"^/{regex}$")
    return re.compile(f"^(?:.*/)?{regex}$")


class PathMatcher:
    """A compiled set of glob patterns bound to a project root."""

    def __init__(self, patterns: Iterable[str], root_path: str = ""):
        self.patterns: List[str] = [p for p in patterns if isinstance(p, str) and p]
        self._anchored = [compile_pattern(p) for p in self.patterns if p.startswith("/")]
        self._relative = [compile_pattern(p) for p in self.patterns if not p.startswith("/")]
        self._root = root_path.rstrip("/")

    def __bool__(self) -> bool:
        return bool(self.patterns)

    def matches(self, path: str) -> bool:
        if not path or path.startswith(EXTERNAL_PREFIX):
            return False
        if any(rx.match(path) for rx in self._anchored):
            return True
        rel = self._relative_to_root(path)
        return any(rx.match(rel) for rx in self._relative)

    def _relative_to_root(self, path: str) -> str:
        if self._root and path.startswith(self._root + "/"):
            return path[len(self._root) + 1:]
        return path


def _includes_everything(patterns: Optional[Sequence[str]]) -> bool:
    if not patterns:
        return True
    return all(p in MATCH_ALL_PATTERNS for p in patterns)


def filter_relations(
    relations: Iterable[Relation],
    root_path: str = "",
    include_patterns: Optional[Sequence[str]] = None,
    exclude_patterns: Optional[Sequence[str]] = None,
) -> List[Relation]:
    """Keep the relations selected by the include/exclude globs.

    Malformed relations (empty endpoints) are dropped here as well. The
    relation kind plays no part. An empty or missing include list selects
    everything; excludes are applied after inclusion.
    """
    include: Optional[PathMatcher] = None
    if not _includes_everything(include_patterns):
        include = PathMatcher(include_patterns or [], root_path)
    exclude = PathMatcher(exclude_patterns or [], root_path)

    kept: List[Relation] = []
    for rel in relations:
        if not rel.is_well_formed:
            continue
        if include is not None and not (include.matches(rel.from_id) or include.matches(rel.to_id)):
            continue
        if exclude and (exclude.matches(rel.from_id) or exclude.matches(rel.to_id)):
            continue
        kept.append(rel)
    return kept
