"""depscope: dependency-graph analysis for parsed projects."""

from .analyzer import DependencyAnalyzer, analyze_dependencies
from .config import AnalysisOptions, load_config
from .errors import InvalidInputError
from .models import ASTNode, DependencyInfo, ProjectInfo, Relation, RelationMetadata
from .package_analysis.models import DependencyAnalysisResult

__version__ = "1.0.0"

__all__ = [
    "ASTNode",
    "AnalysisOptions",
    "DependencyAnalysisResult",
    "DependencyAnalyzer",
    "DependencyInfo",
    "InvalidInputError",
    "ProjectInfo",
    "Relation",
    "RelationMetadata",
    "analyze_dependencies",
    "load_config",
]
