"""Configuration loading for dependency analysis."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from typing import Any, List, Mapping, Optional

import yaml


# ---------------------------------------------------------------------------
# Analysis options
# ---------------------------------------------------------------------------

_OPTION_ALIASES = {
    "includePatterns": "include_patterns",
    "excludePatterns": "exclude_patterns",
    "customRelationTypes": "custom_relation_types",
    "detectCircularDependencies": "detect_circular_dependencies",
    "includeVersionAnalysis": "include_version_analysis",
    "includeUsageStatistics": "include_usage_statistics",
    "includeDevDependencies": "include_dev_dependencies",
    "usageTopN": "usage_top_n",
}


@dataclass
class AnalysisOptions:
    include_patterns: List[str] = field(default_factory=list)
    exclude_patterns: List[str] = field(default_factory=list)
    custom_relation_types: List[str] = field(default_factory=list)
    detect_circular_dependencies: bool = True
    include_version_analysis: bool = True
    include_usage_statistics: bool = True
    include_dev_dependencies: bool = True
    usage_top_n: int = 10

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "AnalysisOptions":
        """Build options from a mapping; camelCase keys are accepted too."""
        options = cls()
        if not data:
            return options
        _apply_dict(options, {_OPTION_ALIASES.get(k, k): v for k, v in data.items()})
        # YAML may give None (``include_patterns:``), a bare string or mixed items
        for name in ("include_patterns", "exclude_patterns", "custom_relation_types"):
            value = getattr(options, name)
            if isinstance(value, str):
                setattr(options, name, [value])
            elif isinstance(value, (list, tuple)):
                setattr(options, name, [v for v in value if isinstance(v, str)])
            else:
                setattr(options, name, [])
        options.usage_top_n = _as_top_n(options.usage_top_n)
        return options


def _as_top_n(value: Any) -> int:
    """Coerce ``usage_top_n`` from YAML; unusable values give the default."""
    if isinstance(value, bool):
        return AnalysisOptions.usage_top_n
    try:
        return max(int(value), 0)
    except (TypeError, ValueError):
        return AnalysisOptions.usage_top_n


# ---------------------------------------------------------------------------
# Output config
# ---------------------------------------------------------------------------

@dataclass
class OutputConfig:
    path: Optional[str] = None  # None -> stdout
    indent: int = 2


# ---------------------------------------------------------------------------
# Top-level Config
# ---------------------------------------------------------------------------

@dataclass
class DepscopeConfig:
    version: str = "1.0"
    analysis: AnalysisOptions = field(default_factory=AnalysisOptions)
    output: OutputConfig = field(default_factory=OutputConfig)


# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------

def _apply_dict(obj, data: dict):
    """Apply dictionary values to a dataclass instance, recursively."""
    if not isinstance(data, dict):
        return
    known = {f.name for f in fields(obj)}
    for key, value in data.items():
        if key not in known:
            continue
        current = getattr(obj, key)
        if hasattr(current, '__dataclass_fields__') and isinstance(value, dict):
            _apply_dict(current, value)
        else:
            setattr(obj, key, value)


def load_config(config_path: Optional[str] = None, repo_root: Optional[str] = None) -> DepscopeConfig:
    """Load configuration from a YAML file.

    Search order when *config_path* is None:
      1. ``depscope.yaml`` in *repo_root*
      2. ``analysis/depscope.yaml`` in *repo_root*

    *repo_root* defaults to cwd. A file that does not hold a mapping is
    ignored and defaults apply.
    """
    if repo_root is None:
        repo_root = os.getcwd()

    config = DepscopeConfig()

    if config_path is None:
        candidates = [
            os.path.join(repo_root, "depscope.yaml"),
            os.path.join(repo_root, "analysis", "depscope.yaml"),
        ]
        for candidate in candidates:
            if os.path.isfile(candidate):
                config_path = candidate
                break

    if config_path and os.path.isfile(config_path):
        with open(config_path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
        if not isinstance(data, dict):
            return config
        if "version" in data:
            config.version = str(data["version"])
        if "analysis" in data and isinstance(data["analysis"], dict):
            config.analysis = AnalysisOptions.from_dict(data["analysis"])
        if "output" in data:
            _apply_dict(config.output, data["output"])

    return config
