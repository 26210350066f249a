"""
Shared pytest fixtures.
"""

import io

import pytest
from rich.console import Console


@pytest.fixture
def output():
    """Buffer a plain console writes its report into."""
    return io.StringIO()


@pytest.fixture
def console(output):
    """Console without styling, writing to the output buffer."""
    return Console(file=output, width=200, color_system=None,
                   force_terminal=False, highlight=False, soft_wrap=True)
