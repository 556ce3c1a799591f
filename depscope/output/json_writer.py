"""JSON output writer."""

from __future__ import annotations

import json
import os
import sys
from datetime import datetime, timezone
from typing import Optional

from ..package_analysis.models import DependencyAnalysisResult


def build_document(result: DependencyAnalysisResult, project_name: Optional[str] = None) -> dict:
    """Wrap a result in the JSON document layout."""
    data = {
        "generated_at": _now_iso(),
        **result.to_dict(),
    }
    if project_name:
        data["project"] = project_name
    return data


def write_result(
    result: DependencyAnalysisResult,
    path: Optional[str] = None,
    indent: int = 2,
    project_name: Optional[str] = None,
) -> Optional[str]:
    """Write the analysis result as JSON to *path*, or to stdout when None.

    Returns the written path, or None for stdout.
    """
    data = build_document(result, project_name)

    if path is None:
        json.dump(data, sys.stdout, indent=indent, ensure_ascii=False, default=str)
        sys.stdout.write("\n")
        return None

    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    _write_json(path, data, indent)
    return path


def _write_json(path: str, data: dict, indent: int = 2):
    with open(path, "w", encoding="utf-8") as fh:
        json.dump(data, fh, indent=indent, ensure_ascii=False, default=str)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()
