"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest

from autodeps.adapters.mock import MockAdapter
from autodeps.adapters.registry import AdapterRegistry


def make_tree(root: Path, *files: str) -> Path:
    """Create empty files (and their parent directories) under ``root``."""
    for rel in files:
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("")
    return root


@pytest.fixture
def mock_shell() -> MockAdapter:
    """A mock standing in for the shell adapter."""
    return MockAdapter(adapter_name="shell")


@pytest.fixture
def registry(mock_shell: MockAdapter) -> AdapterRegistry:
    """Registry that dispatches to the mock shell adapter."""
    reg = AdapterRegistry()
    reg.register(mock_shell)
    return reg
