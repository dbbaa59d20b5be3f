"""Pytest configuration for raytracer tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts.
    """
    ti.init(arch=ti.cpu, random_seed=42)
    yield


@pytest.fixture(autouse=True)
def clear_uploaded_scene():
    """Clear the Taichi renderer's uploaded scene before and after each test."""
    # Import here so the fields are allocated after ti.init()
    from src.python.core.integrator import reset

    reset()
    yield
    reset()


@pytest.fixture
def default_world():
    """The standard two-sphere test world."""
    from src.python.scene.world import World

    return World.default()
