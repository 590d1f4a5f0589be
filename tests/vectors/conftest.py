"""Pytest fixtures and configuration for sample vectors."""

from pathlib import Path
from typing import List

from .schema import VectorCase

VECTORS_DIR = Path(__file__).parent / "data"


def load_all_vectors() -> List[VectorCase]:
    """Load all sample vectors from JSON files."""
    return [VectorCase.from_path(path) for path in sorted(VECTORS_DIR.glob("*.json"))]


def pytest_generate_tests(metafunc):
    """Parametrize vector_case fixture with all sample vectors."""
    if "vector_case" in metafunc.fixturenames:
        vectors = load_all_vectors()
        metafunc.parametrize("vector_case", vectors, ids=[v.id for v in vectors])
