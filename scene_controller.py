# scene_controller.py

import logging
from typing import List, Optional, Sequence

import numpy as np

from emitter import Emitter
from entity_pool import EntityPool
from force_field import ForceField, snapshot_peers
from integrator import Integrator
from particle import Particle
from scene_config import validate_scene_config
from shape import Shape
from shockwave import Shockwave
from vector_math import distance, map_range, random_unit, vec
from visuals import DrawCall, connection_visuals, particle_visual, shape_visual, shockwave_visual

logger = logging.getLogger("generative_scene")


class Scene:
    """
    All mutable state of a running scene, owned in one place.

    Data Contract:
    - shapes, particles and shockwaves are EntityPools that exclusively own
      their entities and iterate in insertion order.
    - pointer is a float64 array of shape (2,), or None when the pointer is
      outside the viewport.
    - frame is the index of the last completed tick.
    """
    def __init__(self, width: float, height: float, particle_cap: int):
        self.width = float(width)
        self.height = float(height)
        self.shapes: EntityPool[Shape] = EntityPool(name="shapes")
        self.particles: EntityPool[Particle] = EntityPool(capacity=particle_cap, name="particles")
        self.shockwaves: EntityPool[Shockwave] = EntityPool(name="shockwaves")
        self.pointer: Optional[np.ndarray] = None
        self.frame = 0

    @property
    def center(self) -> np.ndarray:
        return vec(self.width / 2.0, self.height / 2.0)


class SceneController:
    """
    Drives the scene one frame at a time and translates host input events.

    Data Contract:
    - Inputs:
        - config (dict): A complete scene config (see scene_config.build_scene_config).
        - rng (np.random.Generator): The master seeded random number generator.
        - viewport (tuple): The initial (width, height) in pixels.
        - renderer: Optional object with a draw(DrawCall) method.
        - shapes (Sequence[Shape] | None): Explicit shapes; random ones are
          generated from the config when omitted.
    - Side Effects: Owns and mutates the Scene. Calls renderer.draw once per
      draw call each tick.
    - Invariants: Input events are applied in the order they arrive, between
      ticks. Nothing inside a tick blocks.
    """
    def __init__(self, config: dict, rng: np.random.Generator, viewport: tuple,
                 renderer=None, shapes: Optional[Sequence[Shape]] = None):
        validate_scene_config(config)
        width, height = viewport
        if width <= 0 or height <= 0:
            raise ValueError(f"Viewport must have a positive size, got {width}x{height}")

        self.config = config
        self.rng = rng
        self.renderer = renderer
        self.scene = Scene(width, height, config['particle_cap'])

        self.force_field = ForceField(config)
        self.connection_distance = float(config['connection_distance'])
        self.integrator = Integrator(config)
        self.emitter = Emitter(config, rng)

        if shapes is None:
            shapes = [Shape.random(rng, config, width, height) for _ in range(config['shape_count'])]
        for shape in shapes:
            self.scene.shapes.append(shape)

        if config['rescale_radii_on_resize']:
            self._recalibrate(width, height)

        logger.info(f"SceneController created with {len(self.scene.shapes)} shapes on a {width}x{height} viewport.")
        logger.info(
            f"Particle cap {config['particle_cap']}, pointer mode '{config['pointer_mode']}', "
            f"pointer radius {self.force_field.pointer_radius:.1f}px, "
            f"connection distance {self.connection_distance:.1f}px."
        )

    # --- Host input events ---

    def on_pointer_move(self, x: float, y: float):
        self.scene.pointer = vec(x, y)

    def on_pointer_leave(self):
        self.scene.pointer = None

    def on_resize(self, width: float, height: float):
        """The new size becomes the wrap boundary from the next tick on."""
        if width <= 0 or height <= 0:
            raise ValueError(f"Viewport must have a positive size, got {width}x{height}")
        self.scene.width = float(width)
        self.scene.height = float(height)
        if self.config['rescale_radii_on_resize']:
            self._recalibrate(width, height)
        logger.info(f"Viewport resized to {width}x{height}.")

    def _recalibrate(self, width: float, height: float):
        """Scales the pointer radius and the connection distance to the viewport."""
        self.force_field.rescale(width, height, self.config['pointer_radius_ratio'])
        # A configured distance of 0 keeps connections off at every size.
        if self.config['connection_distance'] > 0.0:
            self.connection_distance = min(width, height) * self.config['connection_distance_ratio']

    def on_click(self, x: float, y: float) -> int:
        """
        Blasts nearby shapes outward and spawns shockwave rings at the click.

        Shapes inside the explosion radius receive a push that falls linearly
        from 'explosion_force' at the blast center to 'explosion_edge_force'
        at the rim, plus a random jolt to their spin and hue drift. The push
        is accumulated and consumed by the next tick's integration.

        Returns the number of shapes affected.
        """
        config = self.config
        blast = vec(x, y)
        radius = config['explosion_radius']
        affected = 0

        for shape in self.scene.shapes:
            dist = distance(shape.position, blast)
            if dist >= radius:
                continue
            if dist == 0.0:
                direction = random_unit(self.rng)
            else:
                direction = (shape.position - blast) / dist
            strength = map_range(dist, 0.0, radius, config['explosion_force'], config['explosion_edge_force'])
            shape.apply_force(direction * strength)
            shape.rotation_speed += self.rng.uniform(-config['click_spin_jolt'], config['click_spin_jolt'])
            shape.hue_shift += self.rng.uniform(-config['click_hue_jolt'], config['click_hue_jolt'])
            affected += 1

        self._spawn_shockwave(blast, config['shockwave_max_radius'])
        if self.rng.random() < config['secondary_shockwave_chance']:
            offset = self.rng.uniform(-config['secondary_shockwave_offset'], config['secondary_shockwave_offset'], 2)
            self._spawn_shockwave(blast + offset, config['shockwave_max_radius'] * config['secondary_shockwave_scale'])

        logger.debug(
            f"Click at ({x:.0f}, {y:.0f}) affected {affected} shapes; "
            f"{len(self.scene.shockwaves)} shockwaves live."
        )
        return affected

    def _spawn_shockwave(self, center: np.ndarray, max_radius: float):
        self.scene.shockwaves.append(Shockwave(
            center=center,
            max_radius=max_radius,
            speed_ratio=self.config['shockwave_speed_ratio'],
            stroke_weight=self.config['shockwave_stroke_weight'],
            hue=self.rng.uniform(0.0, 360.0),
        ))

    # --- Frame update ---

    def tick(self, frame_index: Optional[int] = None) -> List[DrawCall]:
        """
        Runs one frame: shapes, then particles, then shockwaves, then drawing.
        Returns the draw calls of this frame in back-to-front order.
        """
        scene = self.scene
        config = self.config
        scene.frame = scene.frame + 1 if frame_index is None else frame_index

        # --- 1. Shapes: forces, integration, wrap, emission ---
        center = scene.center
        snapshot = snapshot_peers(scene.shapes)
        spare = config['particle_cap'] - len(scene.particles)
        newborn: EntityPool[Particle] = EntityPool(capacity=max(0, spare), name="newborn particles")
        for index, shape in enumerate(scene.shapes):
            force = self.force_field.compute_force(shape, scene.shapes, scene.pointer, center, snapshot, index)
            self.integrator.integrate(shape, force)
            self.integrator.wrap(shape, scene.width, scene.height)
            # Later shapes see this one where it ended up.
            snapshot.positions[index] = shape.position
            self.emitter.maybe_emit(shape, newborn)

        # --- 2. Particles: age, move, expire ---
        friction = config['particle_friction']
        jitter = config['particle_jitter']
        scene.particles.update(lambda particle: particle.update(friction, jitter, self.rng))
        # Particles shed this tick join after the aging pass, so each is drawn once at full life.
        for particle in newborn:
            scene.particles.append(particle)

        # --- 3. Shockwaves: grow, fade, expire ---
        fade_step = config['shockwave_fade_step']
        speed_decay = config['shockwave_speed_decay']
        stroke_decay = config['shockwave_stroke_decay']
        scene.shockwaves.update(lambda wave: wave.update(fade_step, speed_decay, stroke_decay))

        if scene.frame % config['log_interval'] == 0:
            self._log_stats()

        # --- 4. Drawing ---
        calls = self.draw_calls()
        if self.renderer is not None:
            for call in calls:
                self.renderer.draw(call)
        return calls

    def draw_calls(self) -> List[DrawCall]:
        """Derives the draw calls for the current state without changing it."""
        scene = self.scene
        calls = [shockwave_visual(wave, self.config) for wave in scene.shockwaves]
        calls.extend(connection_visuals(scene.shapes.as_list(), self.config, self.connection_distance))
        calls.extend(shape_visual(shape, self.config, scene.frame) for shape in scene.shapes)
        calls.extend(particle_visual(particle, self.config) for particle in scene.particles)
        return calls

    def _log_stats(self):
        shapes = self.scene.shapes
        mean_speed = float(np.mean([shape.speed for shape in shapes])) if len(shapes) else 0.0
        logger.debug(
            f"Frame={self.scene.frame}, "
            f"Shapes={len(shapes)}, "
            f"Particles={len(self.scene.particles)}/{self.config['particle_cap']}, "
            f"Shockwaves={len(self.scene.shockwaves)}, "
            f"MeanSpeed={mean_speed:.2f}, "
            f"Pointer={self._pointer_label()}"
        )

    def _pointer_label(self) -> str:
        pointer = self.scene.pointer
        if pointer is None:
            return "absent"
        return f"({pointer[0]:.0f}, {pointer[1]:.0f})"
