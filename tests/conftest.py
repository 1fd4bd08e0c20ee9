"""
Global fixtures live here

This tells pytest how to prepare a Context and sample documents for tests.
"""
import pytest
from pathlib import Path
from dotmix.core.runtime import build_context, Context

@pytest.fixture
def test_context(tmp_path: Path) -> Context:
    """
    Creates a Context with a temporary settings directory
    """
    settings_dir = tmp_path / "dotmix_settings"
    ctx = build_context(settings_dir=settings_dir, verbose=False)
    # return the context to the test
    yield ctx

@pytest.fixture
def nested() -> dict:
    """A small nested document."""
    return {
        "foo": "bar",
        "child1": {
            "id": 123,
            "name": "Child 1",
            "child2": {"name": "Child 2"},
        },
    }

@pytest.fixture
def records() -> list[dict]:
    """A collection of nested records."""
    return [
        {"id": 10, "name": "Name 1", "child": {"name": "child1"}},
        {"id": 11, "name": "Name 2", "child": {"name": "child2"}},
        {"id": 12, "name": "Name 3", "child": {"name": "child3"}},
    ]
