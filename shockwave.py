# shockwave.py

import numpy as np

from vector_math import wrap_degrees


class Shockwave:
    """
    An expanding ring left behind by a click.

    Data Contract:
    - Inputs:
        - center (np.ndarray): Ring center in pixels.
        - max_radius (float): Nominal reach. Not a hard cap; it sets the
          initial expansion speed through `speed_ratio`.
        - speed_ratio (float): Initial speed as a fraction of max_radius.
        - stroke_weight (float): Initial ring thickness in pixels.
        - hue (float): Ring hue in degrees.
    - Invariants:
        - radius never decreases.
        - fade drops by exactly `fade_step` per update; expired once fade <= 0.
    """
    def __init__(self, center: np.ndarray, max_radius: float, speed_ratio: float,
                 stroke_weight: float, hue: float = 0.0):
        self.center = np.asarray(center, dtype=float).copy()
        self.radius = 0.0
        self.max_radius = max_radius
        self.speed = max_radius * speed_ratio
        self.fade = 1.0
        self.stroke_weight = stroke_weight
        self.hue = wrap_degrees(hue)

    @property
    def expired(self) -> bool:
        return self.fade <= 0.0

    def update(self, fade_step: float, speed_decay: float, stroke_decay: float) -> bool:
        """Grows and fades the ring by one frame. Returns True while it is still visible."""
        self.radius += self.speed
        self.fade -= fade_step
        self.speed *= speed_decay
        self.stroke_weight *= stroke_decay
        return not self.expired
