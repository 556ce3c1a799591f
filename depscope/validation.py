"""Structural validation of project records before analysis."""

from __future__ import annotations

from typing import Any, Mapping, Union

from .errors import InvalidInputError
from .models import ProjectInfo, is_sequence


_ABSENT = object()


def validate_project(project: Union[ProjectInfo, Mapping[str, Any], None]) -> None:
    """Raise InvalidInputError when *project* cannot be analyzed.

    Only the shape is checked: a root path must be present and ``ast`` /
    ``relations`` must be sequences when given. Missing optional fields are
    fine, and odd items inside the sequences are left to the analysis steps.
    """
    if project is None:
        raise InvalidInputError("Project info is required")

    if isinstance(project, ProjectInfo):
        root_path = project.root_path
        ast = project.ast
        relations = project.relations
    elif isinstance(project, Mapping):
        root_path = _lookup(project, "root_path", "rootPath")
        ast = _lookup(project, "ast")
        relations = _lookup(project, "relations")
    else:
        raise InvalidInputError("Project info is required")

    if not isinstance(root_path, str) or not root_path:
        raise InvalidInputError("Project root path is required")

    if ast is not _ABSENT and ast is not None and not is_sequence(ast):
        raise InvalidInputError("AST nodes must be an array")

    if relations is not _ABSENT and relations is not None and not is_sequence(relations):
        raise InvalidInputError("Relations must be an array")


def _lookup(data: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    return _ABSENT
