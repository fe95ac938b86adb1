# particle.py

import numpy as np

from vector_math import wrap_degrees


class Particle:
    """
    A short-lived trail particle shed by a fast-moving shape.

    Data Contract:
    - Inputs: position, velocity, lifespan (frames), hue (degrees), size (pixels).
    - Invariants: 0 <= lifespan <= initial_lifespan. The particle is expired
      exactly when lifespan reaches zero or below.
    """
    def __init__(self, position: np.ndarray, velocity: np.ndarray, lifespan: int, hue: float, size: float):
        if lifespan < 1:
            raise ValueError(f"Particle lifespan must be at least one frame, got {lifespan}")
        self.position = np.asarray(position, dtype=float).copy()
        self.velocity = np.asarray(velocity, dtype=float).copy()
        self.lifespan = int(lifespan)
        self.initial_lifespan = int(lifespan)
        self.hue = wrap_degrees(hue)
        self.size = size

    @property
    def expired(self) -> bool:
        return self.lifespan <= 0

    @property
    def life_ratio(self) -> float:
        """Remaining fraction of life, 1.0 when fresh and 0.0 when expired."""
        return max(self.lifespan, 0) / self.initial_lifespan

    def update(self, friction: float, jitter: float = 0.0, rng: np.random.Generator = None) -> bool:
        """
        Ages the particle by one frame and moves it.
        v_new = v_old * friction (+ jitter)
        p_new = p_old + v_new

        Returns True while the particle is still alive.
        """
        self.lifespan -= 1
        self.velocity *= friction
        if jitter > 0.0 and rng is not None:
            self.velocity += (rng.random(2) - 0.5) * jitter
        self.position += self.velocity
        return not self.expired
