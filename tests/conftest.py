"""Shared test fixtures for depscope tests."""

import pytest


ROOT = "/test/project"


def make_relation(from_id, to_id, rel_type="import", rel_id=None, **metadata):
    """Build a raw relation record the way the upstream extractor emits it."""
    return {
        "id": rel_id or f"{from_id}->{to_id}",
        "type": rel_type,
        "from": from_id,
        "to": to_id,
        "metadata": metadata,
    }


def make_dependency(name, version="^1.0.0", dep_type="production", source="npm", **metadata):
    return {
        "name": name,
        "version": version,
        "type": dep_type,
        "source": source,
        "metadata": metadata,
    }


@pytest.fixture
def project():
    """A raw project record with a small manifest and no relations."""
    return {
        "type": "typescript",
        "rootPath": ROOT,
        "name": "test-project",
        "dependencies": [
            make_dependency("react", "^18.0.0"),
            make_dependency("typescript", "^4.9.0", dep_type="development"),
        ],
        "devDependencies": [
            make_dependency("jest", "^29.0.0", dep_type="development"),
        ],
        "structure": {"files": [], "directories": [], "totalFiles": 0},
        "ast": [],
        "relations": [],
    }
