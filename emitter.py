# emitter.py

import logging

import numpy as np

from entity_pool import EntityPool
from particle import Particle
from vector_math import map_range, random_unit
from visuals import visual_size

logger = logging.getLogger("generative_scene")


class Emitter:
    """
    Sheds trail particles from moving shapes.

    Data Contract:
    - Inputs:
        - config (dict): The validated scene config.
        - rng (np.random.Generator): The master seeded random number generator.
    - Side Effects: Appends to the particle pool passed to maybe_emit().
    - Invariants: Never grows the pool past its capacity.
    """
    def __init__(self, config: dict, rng: np.random.Generator):
        self.rng = rng
        self.max_speed = config['max_speed']
        self.emit_rate = config['emit_rate']
        self.lifespan = config['particle_lifespan']
        self.lifespan_jitter = config['particle_lifespan_jitter']
        self.particle_speed = config['particle_speed']
        self.size_fraction = config['particle_size_fraction']
        self._saturated = False

    def emit_chance(self, speed: float) -> float:
        """Per-tick spawn probability, linear in the shape's speed."""
        return map_range(min(speed, self.max_speed), 0.0, self.max_speed, 0.0, self.emit_rate)

    def maybe_emit(self, shape, particles: EntityPool) -> bool:
        """Rolls the spawn chance for `shape`. Returns True if a particle was added."""
        if self.rng.random() >= self.emit_chance(shape.speed):
            return False

        if not particles.has_room():
            if not self._saturated:
                logger.debug(f"No room left in the '{particles.name}' pool ({len(particles)} live); emission paused.")
                self._saturated = True
            return False
        self._saturated = False

        jitter = int(self.rng.integers(-self.lifespan_jitter, self.lifespan_jitter + 1))
        particle = Particle(
            position=shape.position,
            velocity=random_unit(self.rng) * self.rng.uniform(0.0, self.particle_speed),
            lifespan=max(1, self.lifespan + jitter),
            hue=shape.hue,
            size=visual_size(shape) * self.size_fraction,
        )
        return particles.append(particle)
