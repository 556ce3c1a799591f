"""Version range classification for manifest-declared dependencies."""

from __future__ import annotations

import re
from typing import Iterable

from ..models import DependencyInfo
from .models import VersionAnalysis


_EXACT_VERSION_RE = re.compile(
    r"^v?\d+\.\d+\.\d+"
    r"(?:-[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?"
    r"(?:\+[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?$"
)

_GIT_PREFIXES = ("git+", "git:", "git@", "github:", "gitlab:", "bitbucket:")


def detect_specifier_source(version: str) -> str:
    """Detect where a version specifier points: registry, git, local, url, alias, workspace."""
    specifier = version.strip()
    if specifier.startswith(_GIT_PREFIXES) or specifier.endswith(".git") or ".git#" in specifier:
        return "git"
    if specifier.startswith(("file:", "link:")):
        return "local"
    if specifier.startswith(("http://", "https://")):
        return "url"
    if specifier.startswith("npm:"):
        return "alias"
    if specifier.startswith("workspace:"):
        return "workspace"
    return "registry"


def classify_version(version: str) -> str:
    """Return ``caret``, ``tilde``, ``exact`` or ``complex`` for one specifier."""
    specifier = version.strip() if isinstance(version, str) else ""
    if not specifier or detect_specifier_source(specifier) != "registry":
        return "complex"
    if specifier.startswith("^"):
        return "caret"
    if specifier.startswith("~"):
        return "tilde"
    if _EXACT_VERSION_RE.match(specifier):
        return "exact"
    return "complex"


def analyze_versions(dependencies: Iterable[DependencyInfo]) -> VersionAnalysis:
    """Count declared dependencies per version bucket. Nameless entries are skipped."""
    counts = {"caret": 0, "tilde": 0, "exact": 0, "complex": 0}
    for dep in dependencies:
        if not dep.name:
            continue
        counts[classify_version(dep.version)] += 1
    return VersionAnalysis(
        caret_ranges=counts["caret"],
        tilde_ranges=counts["tilde"],
        exact_versions=counts["exact"],
        complex_ranges=counts["complex"],
    )
