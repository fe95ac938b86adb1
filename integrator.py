# integrator.py

import numpy as np

from vector_math import limit, map_range, wrap_degrees


class Integrator:
    """
    Advances shapes by one tick and applies the wrap-around boundary.

    Data Contract:
    - Inputs:
        - config (dict): The validated scene config ('max_speed', 'friction', 'spin_boost').
    - Side Effects: Mutates the shapes passed in.
    - Invariants: After integrate(), |velocity| <= max_speed and force == 0.
    """
    def __init__(self, config: dict):
        self.max_speed = config['max_speed']
        self.friction = config['friction']
        self.spin_boost = config['spin_boost']

    def integrate(self, shape, force: np.ndarray = None):
        """
        Semi-implicit Euler step with damping (dt = 1 frame).
        v_new = limit(v_old + F, max_speed)
        p_new = p_old + v_new
        v_new *= friction
        """
        if force is not None:
            shape.apply_force(force)

        shape.velocity += shape.force
        shape.velocity[:] = limit(shape.velocity, self.max_speed)
        shape.position += shape.velocity
        shape.velocity *= self.friction
        shape.force.fill(0.0)

        # Faster spin when moving fast
        shape.rotation += shape.rotation_speed + map_range(shape.speed, 0.0, self.max_speed, 0.0, self.spin_boost)
        shape.hue = wrap_degrees(shape.hue + shape.hue_shift)
        shape.wobble_phase += shape.wobble_speed
        shape.pulse_phase += shape.pulse_speed

    @staticmethod
    def wrap(shape, width: float, height: float):
        """
        Wraps a shape that has left the viewport to the opposite edge.
        The shape's size is used as margin so it fully leaves before reappearing.
        """
        margin = shape.size
        # Left/right edges
        if shape.position[0] > width + margin:
            shape.position[0] = -margin
        elif shape.position[0] < -margin:
            shape.position[0] = width + margin

        # Top/bottom edges
        if shape.position[1] > height + margin:
            shape.position[1] = -margin
        elif shape.position[1] < -margin:
            shape.position[1] = height + margin
