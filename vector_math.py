# vector_math.py

"""
Minimal 2D vector helpers.

Vectors are float64 NumPy arrays of shape (2,). Every helper is pure and
returns a new array; callers that want in-place updates use NumPy's augmented
operators directly (e.g. `shape.velocity += force`).
"""

import numpy as np

# Substituted for a zero distance before normalising a direction.
EPSILON = 1e-3


def vec(x: float = 0.0, y: float = 0.0) -> np.ndarray:
    return np.array([x, y], dtype=float)


def add(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    return a + b


def subtract(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    return a - b


def scale(v: np.ndarray, factor: float) -> np.ndarray:
    return v * factor


def magnitude(v: np.ndarray) -> float:
    return float(np.hypot(v[0], v[1]))


def distance(a: np.ndarray, b: np.ndarray) -> float:
    return float(np.hypot(a[0] - b[0], a[1] - b[1]))


def limit(v: np.ndarray, max_magnitude: float) -> np.ndarray:
    """Clamps the magnitude of `v` to `max_magnitude`, keeping its direction."""
    mag = magnitude(v)
    if mag > max_magnitude and mag > 0.0:
        return v * (max_magnitude / mag)
    return v.copy()


def set_magnitude(v: np.ndarray, new_magnitude: float) -> np.ndarray:
    """
    Rescales `v` to `new_magnitude`.
    A zero vector has no direction and is returned unchanged (as zero).
    """
    mag = magnitude(v)
    if mag == 0.0:
        return np.zeros(2, dtype=float)
    return v * (new_magnitude / mag)


def map_range(value: float, in_min: float, in_max: float, out_min: float, out_max: float) -> float:
    """Linear re-mapping of `value` from one range onto another (unclamped)."""
    if in_max == in_min:
        return out_min
    return out_min + (value - in_min) * (out_max - out_min) / (in_max - in_min)


def random_unit(rng: np.random.Generator) -> np.ndarray:
    angle = rng.uniform(0.0, 2.0 * np.pi)
    return np.array([np.cos(angle), np.sin(angle)])


def wrap_degrees(value: float) -> float:
    """Wraps an angle in degrees into [0, 360)."""
    wrapped = value % 360.0
    # A tiny negative input rounds up to exactly 360.0
    return 0.0 if wrapped >= 360.0 else wrapped
