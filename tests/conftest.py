"""Shared fixtures for the scene tests."""
import os

# pygame must never try to open a real window during the tests.
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import numpy as np
import pytest

from scene_config import build_scene_config
from shape import Shape, ShapeKind


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def config():
    return build_scene_config()


@pytest.fixture
def make_shape():
    """Factory for shapes: a still, non-wobbling circle unless told otherwise."""
    def _make(x, y, size=20.0, vx=0.0, vy=0.0, **kwargs):
        return Shape(
            position=np.array([x, y], dtype=float),
            velocity=np.array([vx, vy], dtype=float),
            size=size,
            kind=kwargs.pop("kind", ShapeKind.CIRCLE),
            **kwargs
        )
    return _make
