"""Data models for manifest-level analysis and the combined result."""

from __future__ import annotations

from dataclasses import dataclass, field, asdict
from typing import Dict, List, Optional, Tuple

from ..graphs.models import ExternalDependencyUsage, InternalDependencyEdge
from ..models import DependencyInfo


@dataclass(frozen=True)
class VersionAnalysis:
    """Counts of declared version specifiers by kind."""
    caret_ranges: int = 0
    tilde_ranges: int = 0
    exact_versions: int = 0
    complex_ranges: int = 0

    @property
    def total(self) -> int:
        return self.caret_ranges + self.tilde_ranges + self.exact_versions + self.complex_ranges

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class UsageCount:
    name: str
    count: int

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class UsageStatistics:
    most_used: Tuple[UsageCount, ...] = ()
    least_used: Tuple[UsageCount, ...] = ()
    unused: Tuple[str, ...] = ()
    usage_distribution: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "most_used": [u.to_dict() for u in self.most_used],
            "least_used": [u.to_dict() for u in self.least_used],
            "unused": list(self.unused),
            "usage_distribution": dict(self.usage_distribution),
        }


@dataclass(frozen=True)
class DependencyMetrics:
    total_dependencies: int = 0
    internal_dependencies: int = 0
    external_dependencies: int = 0
    max_depth: int = 0
    average_depth: float = 0.0
    circular_dependencies: int = 0
    dependency_density: float = 0.0

    def to_dict(self) -> dict:
        d = asdict(self)
        # round floats
        for k, v in d.items():
            if isinstance(v, float):
                d[k] = round(v, 2)
        return d


@dataclass(frozen=True)
class DependencyAnalysisResult:
    """Complete dependency analysis result."""
    internal_dependencies: Tuple[InternalDependencyEdge, ...] = ()
    external_dependencies: Tuple[ExternalDependencyUsage, ...] = ()
    package_dependencies: Tuple[DependencyInfo, ...] = ()
    circular_dependencies: Tuple[Tuple[str, ...], ...] = ()
    metrics: DependencyMetrics = field(default_factory=DependencyMetrics)
    version_analysis: VersionAnalysis = field(default_factory=VersionAnalysis)
    usage_statistics: UsageStatistics = field(default_factory=UsageStatistics)

    def to_dict(self) -> dict:
        return {
            "internal_dependencies": [e.to_dict() for e in self.internal_dependencies],
            "external_dependencies": [e.to_dict() for e in self.external_dependencies],
            "package_dependencies": [d.to_dict() for d in self.package_dependencies],
            "circular_dependencies": [list(c) for c in self.circular_dependencies],
            "metrics": self.metrics.to_dict(),
            "version_analysis": self.version_analysis.to_dict(),
            "usage_statistics": self.usage_statistics.to_dict(),
        }

    def external_usage(self, name: str) -> Optional[ExternalDependencyUsage]:
        for usage in self.external_dependencies:
            if usage.name == name:
                return usage
        return None

    @property
    def cycle_lists(self) -> List[List[str]]:
        return [list(c) for c in self.circular_dependencies]
