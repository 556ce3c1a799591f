"""CLI entry point for depscope.

Usage:
    depscope [options] PROJECT_JSON
    python -m depscope [options] PROJECT_JSON

Options:
    PROJECT_JSON          Parsed project record (JSON) from the upstream parser
    --config PATH         Path to depscope.yaml config file
    --include LIST        Comma-separated include globs
    --exclude LIST        Comma-separated exclude globs
    --custom-types LIST   Comma-separated extra relation types to expect
    --no-cycles           Skip circular dependency detection
    --no-dev              Leave dev dependencies out of version analysis
    --output PATH         Write result JSON here (default: stdout)
    --indent N            JSON indentation (default: 2)
    --verbose / -v        Progress output on stderr
    --quiet / -q          Suppress progress output
    --help / -h           Show this help
"""

from __future__ import annotations

import argparse
import json
import os
import sys


def _split(value):
    return [v.strip() for v in value.split(",") if v.strip()]


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="depscope",
        description="Analyze module and package dependencies of a parsed project",
    )
    parser.add_argument(
        "project_json",
        help="Path to the parsed project record (JSON)",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to depscope.yaml configuration file",
    )
    parser.add_argument(
        "--include",
        type=str,
        default=None,
        help="Comma-separated include globs",
    )
    parser.add_argument(
        "--exclude",
        type=str,
        default=None,
        help="Comma-separated exclude globs",
    )
    parser.add_argument(
        "--custom-types",
        type=str,
        default=None,
        help="Comma-separated custom relation types (not reported as unrecognized)",
    )
    parser.add_argument(
        "--no-cycles",
        action="store_true",
        default=False,
        help="Disable circular dependency detection",
    )
    parser.add_argument(
        "--no-dev",
        action="store_true",
        default=False,
        help="Exclude dev dependencies from version analysis",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output file for the result JSON (default: stdout)",
    )
    parser.add_argument(
        "--indent",
        type=int,
        default=None,
        help="JSON indentation",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        default=False,
        help="Verbose output on stderr",
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        default=False,
        help="Suppress output",
    )

    args = parser.parse_args(argv)

    project_path = os.path.abspath(args.project_json)
    if not os.path.isfile(project_path):
        print(f"Error: project file not found: {project_path}", file=sys.stderr)
        return 1

    # Load config
    from .config import load_config
    config = load_config(config_path=args.config, repo_root=os.path.dirname(project_path))

    # Apply CLI overrides
    options = config.analysis
    if args.include:
        options.include_patterns = _split(args.include)
    if args.exclude:
        options.exclude_patterns = _split(args.exclude)
    if args.custom_types:
        options.custom_relation_types = _split(args.custom_types)
    if args.no_cycles:
        options.detect_circular_dependencies = False
    if args.no_dev:
        options.include_dev_dependencies = False
    if args.output:
        config.output.path = args.output
    if args.indent is not None:
        config.output.indent = args.indent

    verbose = args.verbose and not args.quiet

    try:
        with open(project_path, "r", encoding="utf-8") as fh:
            project = json.load(fh)
    except (OSError, ValueError) as e:
        print(f"Error: cannot read project file {project_path}: {e}", file=sys.stderr)
        return 1

    from .analyzer import DependencyAnalyzer
    from .errors import InvalidInputError
    from .output.json_writer import write_result

    try:
        result = DependencyAnalyzer(verbose=verbose).analyze(project, options)
    except InvalidInputError as e:
        print(f"Error: invalid project: {e.reason}", file=sys.stderr)
        return 1

    project_name = project.get("name") if isinstance(project, dict) else None
    written = write_result(
        result,
        path=config.output.path,
        indent=config.output.indent,
        project_name=project_name if isinstance(project_name, str) else None,
    )

    if verbose:
        m = result.metrics
        print(f"[depscope] {m.internal_dependencies} internal, "
              f"{m.external_dependencies} external, "
              f"{m.circular_dependencies} cycles, max depth {m.max_depth}",
              file=sys.stderr)
        if written:
            print(f"[depscope] Wrote {written}", file=sys.stderr)

    return 0


if __name__ == "__main__":
    sys.exit(main())
