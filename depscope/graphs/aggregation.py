"""Edge aggregation.

Classified relations are grouped by key, ``(from, to)`` for module edges and
the package name for external usage, and each group is folded into one
immutable record.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Tuple

from .models import (
    ClassifiedRelation,
    ExternalDependencyUsage,
    ExternalTarget,
    InternalDependencyEdge,
    InternalTarget,
)


def _unique(values: Iterable[str]) -> Tuple[str, ...]:
    """Deduplicate, keeping first-seen order."""
    return tuple(dict.fromkeys(values))


def _group_internal(
    classified: Iterable[ClassifiedRelation],
) -> Dict[Tuple[str, str], List[ClassifiedRelation]]:
    groups: Dict[Tuple[str, str], List[ClassifiedRelation]] = {}
    for item in classified:
        if isinstance(item.target, InternalTarget):
            groups.setdefault((item.source, item.target.path), []).append(item)
    return groups


def _group_external(
    classified: Iterable[ClassifiedRelation],
) -> Dict[str, List[ClassifiedRelation]]:
    groups: Dict[str, List[ClassifiedRelation]] = {}
    for item in classified:
        if isinstance(item.target, ExternalTarget):
            groups.setdefault(item.target.package_name, []).append(item)
    return groups


def _fold_edge(key: Tuple[str, str], group: List[ClassifiedRelation]) -> InternalDependencyEdge:
    first = group[0]
    metas = [item.relation.metadata for item in group]
    return InternalDependencyEdge(
        from_node=key[0],
        to_node=key[1],
        type=first.relation.type,
        module_path=first.relation.metadata.module_path,
        resolved_path=first.target.resolved_path,
        imported_names=_unique(name for m in metas for name in m.imported_names),
        is_barrel_export=any(m.is_barrel_export for m in metas),
        is_type_only=all(m.is_type_only for m in metas),
        is_namespace=any(m.is_namespace for m in metas),
        is_dynamic=any(m.is_dynamic for m in metas),
        conditions=_unique(m.condition for m in metas if m.condition),
        usage_count=len(group),
    )


def _fold_usage(name: str, group: List[ClassifiedRelation]) -> ExternalDependencyUsage:
    metas = [item.relation.metadata for item in group]
    type_only = sum(1 for m in metas if m.is_type_only)
    return ExternalDependencyUsage(
        name=name,
        usage_count=len(group),
        files=_unique(item.source for item in group),
        imported_names=_unique(n for m in metas for n in m.imported_names),
        type_only_imports=type_only,
        runtime_imports=len(group) - type_only,
        is_namespace=any(m.is_namespace for m in metas),
        is_dynamic=any(m.is_dynamic for m in metas),
        conditions=_unique(m.condition for m in metas if m.condition),
        is_scoped=group[0].target.is_scoped,
    )


def aggregate_internal_edges(
    classified: Iterable[ClassifiedRelation],
) -> List[InternalDependencyEdge]:
    """One edge per (from, to); the first relation decides the edge type."""
    return [_fold_edge(key, group) for key, group in _group_internal(classified).items()]


def aggregate_external_usage(
    classified: Iterable[ClassifiedRelation],
) -> List[ExternalDependencyUsage]:
    """One usage record per package, in first-seen order."""
    return [_fold_usage(name, group) for name, group in _group_external(classified).items()]
