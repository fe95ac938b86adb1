# shape.py

import logging
from enum import Enum

import numpy as np

from vector_math import magnitude, wrap_degrees

logger = logging.getLogger("generative_scene")


class ShapeKind(Enum):
    """The closed set of drawable shape outlines."""
    CIRCLE = "circle"
    SQUARE = "square"
    TRIANGLE = "triangle"
    PENTAGON = "pentagon"
    STAR = "star"
    HEXAGRAM = "hexagram"


# Point counts for kinds that do not draw from the configured star range.
_FIXED_POINT_COUNTS = {
    ShapeKind.CIRCLE: 0,
    ShapeKind.SQUARE: 4,
    ShapeKind.TRIANGLE: 3,
    ShapeKind.PENTAGON: 5,
    ShapeKind.HEXAGRAM: 6,
}


class Shape:
    """
    A moving shape that lives for the whole scene.

    Data Contract:
    - Inputs: Explicit state values. Use Shape.random() for a randomized shape.
    - Invariants:
        - position, velocity and force are float64 arrays of shape (2,).
        - After integration, |velocity| <= max_speed and force is zero.
        - 0 <= hue < 360.
    """
    def __init__(self, position: np.ndarray, velocity: np.ndarray, size: float,
                 kind: ShapeKind = ShapeKind.CIRCLE, point_count: int = 0,
                 hue: float = 0.0, hue_shift: float = 0.0,
                 rotation: float = 0.0, rotation_speed: float = 0.0,
                 density: float = 1.0,
                 wobble_seed: int = 0, wobble_phase: float = 0.0,
                 wobble_speed: float = 0.0, wobble_amount: float = 0.0,
                 pulse_phase: float = 0.0, pulse_speed: float = 0.0, pulse_amount: float = 0.0):
        if size <= 0:
            raise ValueError(f"Shape size must be positive, got {size}")
        self.position = np.asarray(position, dtype=float).copy()
        self.velocity = np.asarray(velocity, dtype=float).copy()
        self.force = np.zeros(2, dtype=float)
        self.size = size
        self.kind = kind
        self.point_count = point_count or _FIXED_POINT_COUNTS.get(kind, 5)
        self.hue = wrap_degrees(hue)
        self.hue_shift = hue_shift
        self.rotation = rotation
        self.rotation_speed = rotation_speed
        self.density = density
        self.wobble_seed = wobble_seed
        self.wobble_phase = wobble_phase
        self.wobble_speed = wobble_speed
        self.wobble_amount = wobble_amount
        self.pulse_phase = pulse_phase
        self.pulse_speed = pulse_speed
        self.pulse_amount = pulse_amount

    @classmethod
    def random(cls, rng: np.random.Generator, config: dict, width: float, height: float) -> "Shape":
        """Builds a shape with every parameter drawn from the config ranges."""
        kind = ShapeKind(config['shape_kinds'][rng.integers(len(config['shape_kinds']))])
        if kind is ShapeKind.STAR:
            point_count = int(rng.integers(config['star_points_min'], config['star_points_max'] + 1))
        else:
            point_count = _FIXED_POINT_COUNTS[kind]

        angle = rng.uniform(0.0, 2.0 * np.pi)
        speed = rng.uniform(config['initial_speed_min'], config['initial_speed_max'])

        shape = cls(
            position=rng.random(2) * np.array([width, height]),
            velocity=np.array([np.cos(angle), np.sin(angle)]) * speed,
            size=rng.uniform(config['shape_size_min'], config['shape_size_max']),
            kind=kind,
            point_count=point_count,
            hue=rng.uniform(0.0, 360.0),
            hue_shift=rng.uniform(-config['hue_shift_max'], config['hue_shift_max']),
            rotation=rng.uniform(0.0, 2.0 * np.pi),
            rotation_speed=rng.uniform(-config['rotation_speed_max'], config['rotation_speed_max']),
            density=rng.uniform(config['density_min'], config['density_max']),
            wobble_seed=int(rng.integers(0, 2**31 - 1)),
            wobble_phase=rng.uniform(0.0, 1000.0),
            wobble_speed=rng.uniform(config['wobble_speed_min'], config['wobble_speed_max']),
            wobble_amount=rng.uniform(config['wobble_amount_min'], config['wobble_amount_max']),
            pulse_phase=rng.uniform(0.0, 2.0 * np.pi),
            pulse_speed=rng.uniform(config['pulse_speed_min'], config['pulse_speed_max']),
            pulse_amount=rng.uniform(0.0, config['pulse_amount_max']),
        )
        logger.debug(f"Shape created: {shape}")
        return shape

    @property
    def speed(self) -> float:
        return magnitude(self.velocity)

    def apply_force(self, force: np.ndarray):
        """Accumulates `force` until the next integration step consumes it."""
        self.force += force

    def __repr__(self):
        return (f"Shape(kind={self.kind.value}, pos=({self.position[0]:.1f}, {self.position[1]:.1f}), "
                f"speed={self.speed:.2f}, size={self.size:.1f})")
