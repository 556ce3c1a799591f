"""Data models for the project records consumed by dependency analysis.

Records arrive from the upstream parser / manifest loader as JSON-like
mappings using camelCase keys (``rootPath``, ``filePath``,
``importedNames``...). Every model accepts either spelling in ``from_dict``.
"""

from __future__ import annotations

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple


RELATION_TYPES = (
    "import",
    "export",
    "extends",
    "implements",
    "references",
    "calls",
    "uses",
    "depends",
)


def unrecognized_relation_types(relations: Iterable["Relation"], custom_types: Iterable[str] = ()) -> List[str]:
    """Relation kinds that are neither built in nor configured, in first-seen order."""
    known = set(RELATION_TYPES)
    known.update(t for t in custom_types if isinstance(t, str))
    return list(dict.fromkeys(r.type for r in relations if r.type not in known))


def _get(data: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    """Return the first present key out of *keys*."""
    for key in keys:
        if key in data:
            return data[key]
    return default


def _as_dict(value: Any) -> Dict[str, Any]:
    return dict(value) if isinstance(value, Mapping) else {}


def _as_str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _as_names(value: Any) -> Tuple[str, ...]:
    if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple)):
        return ()
    return tuple(v for v in value if isinstance(v, str) and v)


def _as_version(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def is_sequence(value: Any) -> bool:
    """True for list-like values; strings and mappings do not count."""
    return isinstance(value, (list, tuple))


# ---------------------------------------------------------------------------
# AST nodes
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ASTNode:
    """A parsed source entity. Only ``id`` and ``file_path`` matter here."""
    id: str
    file_path: str = ""
    name: str = ""
    type: str = ""
    start: int = 0
    end: int = 0
    properties: Dict[str, Any] = field(default_factory=dict)
    metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> "ASTNode":
        if isinstance(data, ASTNode):
            return data
        if not isinstance(data, Mapping):
            return cls(id="")
        start = _get(data, "start", default=0)
        end = _get(data, "end", default=0)
        return cls(
            id=_as_str(_get(data, "id")),
            file_path=_as_str(_get(data, "file_path", "filePath")),
            name=_as_str(_get(data, "name")),
            type=_as_str(_get(data, "type", "nodeType", "node_type")),
            start=start if isinstance(start, int) else 0,
            end=end if isinstance(end, int) else 0,
            properties=_as_dict(_get(data, "properties")),
            metadata=_as_dict(_get(data, "metadata")),
        )


# ---------------------------------------------------------------------------
# Relations
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RelationMetadata:
    module_path: str = ""
    imported_names: Tuple[str, ...] = ()
    is_default: bool = False
    is_namespace: bool = False
    is_type_only: bool = False
    is_dynamic: bool = False
    condition: Optional[str] = None
    is_barrel_export: bool = False
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> "RelationMetadata":
        if isinstance(data, RelationMetadata):
            return data
        if not isinstance(data, Mapping):
            return cls()
        known = {
            "modulePath", "module_path", "importedNames", "imported_names",
            "isDefault", "is_default", "isNamespace", "is_namespace",
            "isTypeOnly", "is_type_only", "isDynamic", "is_dynamic",
            "condition", "isBarrelExport", "is_barrel_export",
        }
        condition = _get(data, "condition")
        return cls(
            module_path=_as_str(_get(data, "module_path", "modulePath")),
            imported_names=_as_names(_get(data, "imported_names", "importedNames")),
            is_default=bool(_get(data, "is_default", "isDefault", default=False)),
            is_namespace=bool(_get(data, "is_namespace", "isNamespace", default=False)),
            is_type_only=bool(_get(data, "is_type_only", "isTypeOnly", default=False)),
            is_dynamic=bool(_get(data, "is_dynamic", "isDynamic", default=False)),
            condition=condition if isinstance(condition, str) and condition else None,
            is_barrel_export=bool(
                _get(data, "is_barrel_export", "isBarrelExport", default=False)
            ),
            extra={k: v for k, v in data.items() if k not in known},
        )


@dataclass(frozen=True)
class Relation:
    """A single import/export link as recorded by the upstream extractor."""
    id: str
    type: str
    from_id: str
    to_id: str
    metadata: RelationMetadata = field(default_factory=RelationMetadata)

    @classmethod
    def from_dict(cls, data: Any) -> "Relation":
        if isinstance(data, Relation):
            return data
        if not isinstance(data, Mapping):
            return cls(id="", type="", from_id="", to_id="")
        return cls(
            id=_as_str(_get(data, "id")),
            type=_as_str(_get(data, "type", default="import")),
            from_id=_as_str(_get(data, "from", "from_id")),
            to_id=_as_str(_get(data, "to", "to_id")),
            metadata=RelationMetadata.from_dict(_get(data, "metadata")),
        )

    @property
    def is_well_formed(self) -> bool:
        return bool(self.from_id) and bool(self.to_id)


# ---------------------------------------------------------------------------
# Manifest dependencies
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DependencyInfo:
    """A dependency declared in the package manifest."""
    name: str
    version: str = ""
    type: str = "production"  # production | development | peer | optional
    source: str = "npm"  # npm | yarn | pnpm | git | local
    metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any, default_type: str = "production") -> "DependencyInfo":
        if isinstance(data, DependencyInfo):
            return data
        if not isinstance(data, Mapping):
            return cls(name="")
        version = _get(data, "version", default="")
        return cls(
            name=_as_str(_get(data, "name")),
            version=_as_version(version),
            type=_as_str(_get(data, "type")) or default_type,
            source=_as_str(_get(data, "source")) or "npm",
            metadata=_as_dict(_get(data, "metadata")),
        )

    def to_dict(self) -> dict:
        return asdict(self)


# ---------------------------------------------------------------------------
# Project
# ---------------------------------------------------------------------------

@dataclass
class ProjectInfo:
    """The slice of a parsed project that dependency analysis reads."""
    root_path: str
    dependencies: List[DependencyInfo] = field(default_factory=list)
    dev_dependencies: List[DependencyInfo] = field(default_factory=list)
    ast: List[ASTNode] = field(default_factory=list)
    relations: List[Relation] = field(default_factory=list)
    total_files: int = 0
    name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ProjectInfo":
        """Build from a raw project record. Expects an already validated record."""
        structure = _as_dict(_get(data, "structure"))
        total_files = _get(data, "total_files", "totalFiles")
        if total_files is None:
            total_files = _get(structure, "total_files", "totalFiles", default=0)
        name = _get(data, "name")
        return cls(
            root_path=_as_str(_get(data, "root_path", "rootPath")),
            dependencies=_dependency_list(_get(data, "dependencies"), "production"),
            dev_dependencies=_dependency_list(
                _get(data, "dev_dependencies", "devDependencies"), "development"
            ),
            ast=[ASTNode.from_dict(n) for n in (_get(data, "ast") or [])],
            relations=[Relation.from_dict(r) for r in (_get(data, "relations") or [])],
            total_files=total_files if isinstance(total_files, int) else 0,
            name=name if isinstance(name, str) else None,
        )


def _dependency_list(value: Any, default_type: str) -> List[DependencyInfo]:
    if not is_sequence(value):
        return []
    return [DependencyInfo.from_dict(d, default_type) for d in value]
