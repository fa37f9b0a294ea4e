import pytest

from trefila_core.config import DrawingLimits
from trefila_core.models import DrawingSpec


@pytest.fixture
def default_limits() -> DrawingLimits:
    """Shop-floor limits used across unit tests."""
    return DrawingLimits()


@pytest.fixture
def wire_rod_spec() -> DrawingSpec:
    """5.5 mm wire rod drawn to 3.2 mm in four passes."""
    return DrawingSpec(entry_diameter=5.5, exit_diameter=3.2, pass_count=4, mode="progressive")
