# visuals.py

"""
Visual Parameter Derivation

Turns entity state into draw calls for the render adapter. Every function
here is pure: it reads the entity (and, for glow breathing, the frame
counter) and never writes back.

Colours are HSB with hue in degrees [0, 360) and saturation, brightness and
alpha in [0, 100], matching pygame.Color.hsva.
"""

import math
from collections import namedtuple
from typing import List, Optional, Sequence

import numpy as np

from vector_math import map_range, wrap_degrees
from wobble_noise import wobble

# A renderer-agnostic instruction to draw one entity.
# `kind` is a ShapeKind value, or "particle", "shockwave" or "connection".
DrawCall = namedtuple(
    'DrawCall',
    ['kind', 'position', 'rotation', 'size', 'hue', 'saturation', 'brightness', 'alpha',
     'point_count', 'glow_radius', 'glow_alpha', 'stroke_weight', 'end'],
    defaults=(0, 0.0, 0.0, 0.0, None)
)

PARTICLE_SATURATION = 80.0
PARTICLE_BRIGHTNESS = 100.0
SHOCKWAVE_SATURATION = 35.0
SHOCKWAVE_BRIGHTNESS = 100.0
CONNECTION_SATURATION = 50.0
CONNECTION_BRIGHTNESS = 100.0

# Frequency of the glow breathing, in radians per frame.
GLOW_BREATH_RATE = 0.05


def visual_size(shape) -> float:
    """Base size modulated by the noise wobble and the sinusoidal size pulse."""
    wobble_term = shape.size * shape.wobble_amount * wobble(shape.wobble_seed, shape.wobble_phase)
    pulse_term = shape.size * shape.pulse_amount * math.sin(shape.pulse_phase)
    return shape.size + wobble_term + pulse_term


def shape_visual(shape, config: dict, frame: int = 0) -> DrawCall:
    max_speed = config['max_speed']
    speed = min(shape.speed, max_speed)
    size = visual_size(shape)

    hue = wrap_degrees(shape.hue + map_range(speed, 0.0, max_speed, 0.0, config['hue_speed_boost']))
    saturation = map_range(speed, 0.0, max_speed, config['saturation_min'], config['saturation_max'])

    breath = 0.85 + 0.15 * math.sin(frame * GLOW_BREATH_RATE + shape.pulse_phase)
    glow_alpha = map_range(speed, 0.0, max_speed, config['glow_alpha_min'], config['glow_alpha_max']) * breath

    return DrawCall(
        kind=shape.kind.value,
        position=(float(shape.position[0]), float(shape.position[1])),
        rotation=shape.rotation,
        size=size,
        hue=hue,
        saturation=saturation,
        brightness=config['brightness'],
        alpha=config['shape_alpha'],
        point_count=shape.point_count,
        glow_radius=size / 2.0 * config['glow_ratio'],
        glow_alpha=glow_alpha,
    )


def particle_visual(particle, config: dict) -> DrawCall:
    """Fades out and shrinks with age while the hue drifts."""
    ratio = particle.life_ratio
    age = particle.initial_lifespan - max(particle.lifespan, 0)
    return DrawCall(
        kind="particle",
        position=(float(particle.position[0]), float(particle.position[1])),
        rotation=0.0,
        size=particle.size * (0.4 + 0.6 * ratio),
        hue=wrap_degrees(particle.hue + config['particle_hue_drift'] * age),
        saturation=PARTICLE_SATURATION,
        brightness=PARTICLE_BRIGHTNESS,
        alpha=config['particle_alpha_max'] * ratio,
    )


def shockwave_visual(shockwave, config: dict) -> DrawCall:
    fade = min(max(shockwave.fade, 0.0), 1.0)
    return DrawCall(
        kind="shockwave",
        position=(float(shockwave.center[0]), float(shockwave.center[1])),
        rotation=0.0,
        size=shockwave.radius,
        hue=shockwave.hue,
        saturation=SHOCKWAVE_SATURATION,
        brightness=SHOCKWAVE_BRIGHTNESS,
        alpha=map_range(fade, 0.0, 1.0, 0.0, config['shockwave_alpha_max']),
        stroke_weight=shockwave.stroke_weight,
    )


def connection_visuals(shapes: Sequence, config: dict, max_distance: Optional[float] = None) -> List[DrawCall]:
    """
    Lines between every pair of shapes closer than `max_distance`, which
    defaults to 'connection_distance'. Closer pairs are more opaque; the
    line takes the pair's average hue.
    """
    max_dist = config['connection_distance'] if max_distance is None else max_distance
    if max_dist <= 0.0 or len(shapes) < 2:
        return []

    positions = np.array([shape.position for shape in shapes], dtype=float)
    diffs = positions[:, np.newaxis, :] - positions[np.newaxis, :, :]
    dists = np.sqrt(np.sum(diffs**2, axis=2))

    # Upper triangle only: each pair once, no self-pairs
    rows, cols = np.nonzero(np.triu(dists < max_dist, k=1))

    calls = []
    for i, j in zip(rows, cols):
        dist = dists[i, j]
        calls.append(DrawCall(
            kind="connection",
            position=(float(positions[i, 0]), float(positions[i, 1])),
            rotation=0.0,
            size=float(dist),
            hue=wrap_degrees((shapes[i].hue + shapes[j].hue) / 2.0),
            saturation=CONNECTION_SATURATION,
            brightness=CONNECTION_BRIGHTNESS,
            alpha=map_range(float(dist), 0.0, max_dist, config['connection_alpha_max'], 0.0),
            end=(float(positions[j, 0]), float(positions[j, 1])),
        ))
    return calls
