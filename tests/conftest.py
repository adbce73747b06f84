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
    segmentation faults due to Taichi runtime conflicts. Scenes own their
    fields, so no per-test clearing is needed.
    """
    ti.init(arch=ti.cpu)
    yield


@pytest.fixture
def red_material():
    """Plain red diffuse material without highlight or reflection."""
    from raytracer.materials import MaterialInfo

    return MaterialInfo(color=(255.0, 0.0, 0.0))


@pytest.fixture
def grey_material():
    """Plain grey diffuse material without highlight or reflection."""
    from raytracer.materials import MaterialInfo

    return MaterialInfo(color=(100.0, 100.0, 100.0))
