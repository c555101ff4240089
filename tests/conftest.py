"""
Pytest configuration and shared fixtures for sparse planner tests.

Provides a gantry kinematics model, ready-made dense trajectories and planners
used across the unit test suite.
"""

import os
import sys
import logging

import pytest

# Add the parent directory to Python path so we can import the package and test utilities
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from sparse_planner.planning import SparsePlanner
from tests.utils import GantryModel, line_points

logger = logging.getLogger(__name__)


# ============================================================================
# MODEL AND TRAJECTORY FIXTURES
# ============================================================================

@pytest.fixture
def gantry() -> GantryModel:
    """XYZ gantry whose joint values equal the tool position."""
    return GantryModel()


@pytest.fixture
def line10():
    """Ten collinear points p0..p9 spaced 0.1 m along X."""
    return line_points(10)


@pytest.fixture
def planner(gantry) -> SparsePlanner:
    """Planner over the gantry with the sampling used by the scenarios (k=3)."""
    return SparsePlanner(gantry, sampling=3)


@pytest.fixture
def planned(planner, line10):
    """Planner that has already accepted the ten-point line."""
    planner.set_trajectory(line10)
    return planner, line10


# ============================================================================
# PYTEST CONFIGURATION HOOKS
# ============================================================================

def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests that test individual components in isolation"
    )
    config.addinivalue_line(
        "markers", "slow: Slow-running tests (typically those solving real robot IK)"
    )


def pytest_sessionstart(session):
    """Called after the Session object has been created."""
    logger.info("Starting sparse planner test session")


def pytest_sessionfinish(session, exitstatus):
    """Called after whole test run finished."""
    logger.info(f"Sparse planner test session finished with exit status: {exitstatus}")
