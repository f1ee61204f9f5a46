"""Test setup for docweave."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from docweave.markdown import DocumentRenderer  # noqa: E402


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for pytest.

    This allows running integration tests selectively:
        pytest -m integration       # run only integration tests
        pytest -m "not integration" # skip integration tests
    """
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests (make real network calls)",
    )


@pytest.fixture
def renderer() -> DocumentRenderer:
    """A renderer with its own, empty frontmatter cache."""
    return DocumentRenderer()


@pytest.fixture
def valid_document() -> str:
    return (
        "---\n"
        "title: Getting Started\n"
        "description: Install and configure the toolkit\n"
        "published: true\n"
        "sort: 2\n"
        "---\n"
        "\n"
        "# Getting Started\n"
        "\n"
        "## Install\n"
        "\n"
        "Run the installer.\n"
    )
