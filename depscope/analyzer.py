"""Dependency analysis: orchestrates filtering, classification, graph analyses
and manifest analyses into a single DependencyAnalysisResult.

Every call works only on its arguments and local structures, so concurrent
calls are independent and identical input gives an equal result.
"""

from __future__ import annotations

import sys
from typing import Any, List, Mapping, Optional, Union

from .config import AnalysisOptions
from .graphs.aggregation import aggregate_external_usage, aggregate_internal_edges
from .graphs.classifier import build_node_file_map, classify_relations, map_relation_endpoints
from .graphs.cycles import find_cycles
from .graphs.depth import compute_depth_metrics
from .graphs.models import DependencyGraph, DepthMetrics
from .models import DependencyInfo, ProjectInfo, unrecognized_relation_types
from .package_analysis.models import (
    DependencyAnalysisResult,
    DependencyMetrics,
    UsageStatistics,
    VersionAnalysis,
)
from .package_analysis.usage import compute_usage_statistics
from .package_analysis.versions import analyze_versions
from .patterns import filter_relations
from .validation import validate_project


ProjectInput = Union[ProjectInfo, Mapping[str, Any], None]
OptionsInput = Union[AnalysisOptions, Mapping[str, Any], None]


class DependencyAnalyzer:
    """Derives dependency structure from a parsed project."""

    def __init__(self, verbose: bool = False):
        self.verbose = verbose

    def analyze(self, project: ProjectInput, options: OptionsInput = None) -> DependencyAnalysisResult:
        """Analyze *project* and return the combined result.

        Raises:
            InvalidInputError: the project record is structurally invalid.
        """
        validate_project(project)
        info = project if isinstance(project, ProjectInfo) else ProjectInfo.from_dict(project)
        opts = _coerce_options(options)

        self._log(f"Project root: {info.root_path}")
        self._log(f"Relations: {len(info.relations)}, AST nodes: {len(info.ast)}")

        # 1. Endpoints -> file paths, then include/exclude globs
        node_files = build_node_file_map(info.ast)
        relations = map_relation_endpoints(info.relations, node_files)
        relations = filter_relations(
            relations,
            root_path=info.root_path,
            include_patterns=opts.include_patterns,
            exclude_patterns=opts.exclude_patterns,
        )
        self._log(f"Relations after filtering: {len(relations)}")
        unrecognized = unrecognized_relation_types(relations, opts.custom_relation_types)
        if unrecognized:
            self._log(f"Unrecognized relation kinds kept as-is: {', '.join(unrecognized)}")

        # 2. Classification and aggregation
        classified = classify_relations(relations)
        internal = aggregate_internal_edges(classified)
        external = aggregate_external_usage(classified)
        self._log(f"Internal edges: {len(internal)}, external packages: {len(external)}")

        # 3. Graph analyses
        graph = DependencyGraph.from_edges(internal)
        cycles = find_cycles(graph) if opts.detect_circular_dependencies else []
        depth = compute_depth_metrics(graph)
        if cycles:
            self._log(f"Circular dependencies: {len(cycles)}")

        # 4. Manifest analyses
        versioned: List[DependencyInfo] = list(info.dependencies)
        if opts.include_dev_dependencies:
            versioned.extend(info.dev_dependencies)
        version_analysis = (
            analyze_versions(versioned) if opts.include_version_analysis else VersionAnalysis()
        )
        usage_statistics = (
            compute_usage_statistics(external, info.dependencies, top_n=opts.usage_top_n)
            if opts.include_usage_statistics
            else UsageStatistics()
        )

        return assemble_result(
            internal=internal,
            external=external,
            package_dependencies=[*info.dependencies, *info.dev_dependencies],
            cycles=cycles,
            depth=depth,
            version_analysis=version_analysis,
            usage_statistics=usage_statistics,
            total_files=info.total_files,
        )

    def _log(self, message: str) -> None:
        if self.verbose:
            print(f"[depscope] {message}", file=sys.stderr)


def assemble_result(
    internal,
    external,
    package_dependencies,
    cycles,
    depth: DepthMetrics,
    version_analysis: VersionAnalysis,
    usage_statistics: UsageStatistics,
    total_files: int = 0,
) -> DependencyAnalysisResult:
    """Compose the analysis pieces into the final result."""
    total = len(internal) + len(external)
    metrics = DependencyMetrics(
        total_dependencies=total,
        internal_dependencies=len(internal),
        external_dependencies=len(external),
        max_depth=depth.max_depth,
        average_depth=round(depth.average_depth, 2),
        circular_dependencies=len(cycles),
        dependency_density=round(total / total_files, 2) if total_files > 0 else 0.0,
    )
    return DependencyAnalysisResult(
        internal_dependencies=tuple(internal),
        external_dependencies=tuple(external),
        package_dependencies=tuple(package_dependencies),
        circular_dependencies=tuple(tuple(c) for c in cycles),
        metrics=metrics,
        version_analysis=version_analysis,
        usage_statistics=usage_statistics,
    )


def _coerce_options(options: OptionsInput) -> AnalysisOptions:
    if isinstance(options, AnalysisOptions):
        return options
    if isinstance(options, Mapping):
        return AnalysisOptions.from_dict(options)
    return AnalysisOptions()


def analyze_dependencies(
    project: ProjectInput,
    options: OptionsInput = None,
    verbose: bool = False,
) -> DependencyAnalysisResult:
    """Module-level shortcut for ``DependencyAnalyzer(verbose).analyze(...)``."""
    return DependencyAnalyzer(verbose=verbose).analyze(project, options)
