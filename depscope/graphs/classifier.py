"""Relation classification: internal module edges vs external packages.

Relation endpoints are opaque ids from the upstream extractor. They are
first mapped through the AST (node id -> file path), then every relation is
tagged either as an InternalTarget with a canonical path or as an
ExternalTarget naming the package.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Dict, Iterable, List, Optional

from ..models import ASTNode, Relation
from .models import (
    EXTERNAL_PREFIX,
    ClassifiedRelation,
    ExternalTarget,
    InternalTarget,
)


SOURCE_EXTENSIONS = (".ts", ".tsx", ".js", ".jsx", ".mjs", ".cjs", ".json")
DEFAULT_EXTENSION = ".ts"


def build_node_file_map(ast: Iterable[ASTNode]) -> Dict[str, str]:
    """Map AST node ids to the file that declares them."""
    node_files: Dict[str, str] = {}
    for node in ast:
        if node.id and node.file_path:
            node_files.setdefault(node.id, node.file_path)
    return node_files


def map_relation_endpoints(
    relations: Iterable[Relation],
    node_files: Dict[str, str],
) -> List[Relation]:
    """Replace endpoints that name AST nodes with their file paths."""
    if not node_files:
        return list(relations)
    mapped: List[Relation] = []
    for rel in relations:
        from_id = node_files.get(rel.from_id, rel.from_id)
        to_id = node_files.get(rel.to_id, rel.to_id)
        if from_id != rel.from_id or to_id != rel.to_id:
            rel = replace(rel, from_id=from_id, to_id=to_id)
        mapped.append(rel)
    return mapped


def is_relative_module_path(module_path: str) -> bool:
    return module_path.startswith("./") or module_path.startswith("../")


def resolve_relative_path(from_path: str, module_path: str) -> str:
    """Resolve *module_path* against the directory of *from_path*.

    ``..`` pops one segment (never above the root) and ``.`` is ignored.
    The leading ``/`` of an absolute *from_path* is kept.
    """
    cut = from_path.rfind("/")
    from_dir = from_path[:cut] if cut >= 0 else ""

    stack = [p for p in from_dir.split("/") if p]
    for part in module_path.split("/"):
        if part == "..":
            if stack:
                stack.pop()
        elif part and part != ".":
            stack.append(part)

    resolved = "/".join(stack)
    if from_path.startswith("/"):
        resolved = "/" + resolved
    return resolved


def resolve_target_path(from_path: str, to_path: str, module_path: str) -> str:
    """Canonical path of an internal target.

    Relative module paths are resolved against the importing file and get
    the default source extension when they carry none. Otherwise the
    target id is already resolved.
    """
    if not module_path or not is_relative_module_path(module_path):
        return to_path
    resolved = resolve_relative_path(from_path, module_path)
    if not resolved.endswith(SOURCE_EXTENSIONS):
        resolved += DEFAULT_EXTENSION
    return resolved


def classify_relation(relation: Relation) -> Optional[ClassifiedRelation]:
    """Tag *relation* as internal or external.

    Returns None for relations that cannot be classified: empty endpoints,
    a bare ``external:`` marker, or a module depending on itself.
    """
    if not relation.is_well_formed:
        return None

    if relation.to_id.startswith(EXTERNAL_PREFIX):
        package_name = relation.to_id[len(EXTERNAL_PREFIX):]
        if not package_name:
            return None
        return ClassifiedRelation(
            relation=relation,
            source=relation.from_id,
            target=ExternalTarget(package_name=package_name),
        )

    if relation.from_id == relation.to_id:
        return None

    resolved = resolve_target_path(
        relation.from_id, relation.to_id, relation.metadata.module_path
    )
    return ClassifiedRelation(
        relation=relation,
        source=relation.from_id,
        target=InternalTarget(path=relation.to_id, resolved_path=resolved),
    )


def classify_relations(relations: Iterable[Relation]) -> List[ClassifiedRelation]:
    classified: List[ClassifiedRelation] = []
    for rel in relations:
        item = classify_relation(rel)
        if item is not None:
            classified.append(item)
    return classified
