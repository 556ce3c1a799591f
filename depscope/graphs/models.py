"""Data models for dependency graph analysis."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple, Union

from ..models import Relation


EXTERNAL_PREFIX = "external:"


# ---------------------------------------------------------------------------
# Classified relation targets
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class InternalTarget:
    """A module inside the analyzed project."""
    path: str
    resolved_path: str


@dataclass(frozen=True)
class ExternalTarget:
    """A third-party package referenced as ``external:<name>``."""
    package_name: str

    @property
    def is_scoped(self) -> bool:
        return self.package_name.startswith("@")


Target = Union[InternalTarget, ExternalTarget]


@dataclass(frozen=True)
class ClassifiedRelation:
    relation: Relation
    source: str
    target: Target

    @property
    def is_external(self) -> bool:
        return isinstance(self.target, ExternalTarget)


# ---------------------------------------------------------------------------
# Aggregated records
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class InternalDependencyEdge:
    """An aggregated dependency between two project modules."""
    from_node: str
    to_node: str
    type: str = "import"
    module_path: str = ""
    resolved_path: str = ""
    imported_names: Tuple[str, ...] = ()
    is_barrel_export: bool = False
    is_type_only: bool = False
    is_namespace: bool = False
    is_dynamic: bool = False
    conditions: Tuple[str, ...] = ()
    usage_count: int = 1

    @property
    def key(self) -> Tuple[str, str]:
        return (self.from_node, self.to_node)

    def to_dict(self) -> dict:
        return {
            "from": self.from_node,
            "to": self.to_node,
            "type": self.type,
            "module_path": self.module_path,
            "resolved_path": self.resolved_path,
            "imported_names": list(self.imported_names),
            "is_barrel_export": self.is_barrel_export,
            "is_type_only": self.is_type_only,
            "is_namespace": self.is_namespace,
            "is_dynamic": self.is_dynamic,
            "conditions": list(self.conditions),
            "usage_count": self.usage_count,
        }


@dataclass(frozen=True)
class ExternalDependencyUsage:
    """How one third-party package is consumed across the project."""
    name: str
    usage_count: int = 0
    files: Tuple[str, ...] = ()
    imported_names: Tuple[str, ...] = ()
    type_only_imports: int = 0
    runtime_imports: int = 0
    is_namespace: bool = False
    is_dynamic: bool = False
    conditions: Tuple[str, ...] = ()
    is_scoped: bool = False

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "usage_count": self.usage_count,
            "files": list(self.files),
            "imported_names": list(self.imported_names),
            "type_only_imports": self.type_only_imports,
            "runtime_imports": self.runtime_imports,
            "is_namespace": self.is_namespace,
            "is_dynamic": self.is_dynamic,
            "conditions": list(self.conditions),
            "is_scoped": self.is_scoped,
        }


# ---------------------------------------------------------------------------
# Graph
# ---------------------------------------------------------------------------

@dataclass
class DependencyGraph:
    """Adjacency over internal modules, in first-seen order."""
    adjacency: Dict[str, List[str]] = field(default_factory=dict)

    @classmethod
    def from_edges(cls, edges: Iterable[InternalDependencyEdge]) -> "DependencyGraph":
        # edges are already unique per (from, to)
        adjacency: Dict[str, List[str]] = {}
        for edge in edges:
            adjacency.setdefault(edge.from_node, []).append(edge.to_node)
            adjacency.setdefault(edge.to_node, [])
        return cls(adjacency=adjacency)

    @property
    def nodes(self) -> List[str]:
        return list(self.adjacency)

    def successors(self, node: str) -> List[str]:
        return self.adjacency.get(node, [])


@dataclass(frozen=True)
class DepthMetrics:
    max_depth: int = 0
    average_depth: float = 0.0
    edge_depths: Optional[Dict[Tuple[str, str], int]] = None
