# force_field.py

import logging
from collections import namedtuple
from typing import Iterable, Optional

import numba
import numpy as np

from vector_math import EPSILON, distance, limit

logger = logging.getLogger("generative_scene")

# Positions and sizes of every shape in one tick, row-aligned with `entities`.
PeerSnapshot = namedtuple("PeerSnapshot", ["entities", "positions", "sizes"])


def snapshot_peers(peers: Iterable) -> PeerSnapshot:
    """Packs the live peers into contiguous arrays for the kernel. None entries are dropped."""
    entities = [peer for peer in peers if peer is not None]
    positions = np.zeros((len(entities), 2), dtype=float)
    sizes = np.zeros(len(entities), dtype=float)
    for row, peer in enumerate(entities):
        positions[row] = peer.position
        sizes[row] = peer.size
    return PeerSnapshot(entities, positions, sizes)


# --- JIT-Compiled Pairwise Kernel ---
# The peer scan is the only O(n^2) step of a tick, so it is compiled by Numba.
# It works on a NumPy snapshot of all shapes and plain scalars only, as required
# by Numba's nopython mode. The snapshot is built once per tick.

@numba.jit(nopython=True, fastmath=True)
def _peer_repulsion_jit(pos_x, pos_y, size, self_index, peer_positions, peer_sizes,
                        interaction_radius, separation_buffer, near_force, far_force, max_force, epsilon):
    """
    Sums the repulsion acting on one shape from every peer that is both inside
    the interaction radius and closer than the size-based minimum separation.
    Strength falls linearly from `near_force` at contact to `far_force` at the
    minimum separation. Each contribution is clamped to `max_force`. Row
    `self_index` is the shape itself and is skipped; pass -1 when the shape is
    not part of the snapshot.
    """
    force_x = 0.0
    force_y = 0.0
    for j in range(peer_positions.shape[0]):
        if j == self_index:
            continue
        diff_x = pos_x - peer_positions[j, 0]
        diff_y = pos_y - peer_positions[j, 1]
        dist = np.sqrt(diff_x * diff_x + diff_y * diff_y)
        min_dist = size * 0.5 + peer_sizes[j] * 0.5 + separation_buffer

        if dist < interaction_radius and dist < min_dist:
            if dist == 0.0:
                dist = epsilon
            strength = near_force + (far_force - near_force) * (dist / min_dist)
            if strength > max_force:
                strength = max_force
            force_x += diff_x / dist * strength
            force_y += diff_y / dist * strength
    return force_x, force_y


class ForceField:
    """
    Computes the net force on one shape for the current tick.

    Data Contract:
    - Inputs:
        - config (dict): The validated scene config.
    - Outputs: compute_force() returns a new float64 array of shape (2,).
    - Side Effects: None. Shapes are only read.
    - Invariants:
        - Every individual force term is clamped to `max_force` before summing.
        - Peer repulsion is evaluated per shape, so A's push from B is not
          required to mirror B's push from A within a tick.
    """
    def __init__(self, config: dict):
        self.pointer_mode = config['pointer_mode']
        self.pointer_radius = float(config['pointer_radius'])
        self.pointer_strength = config['pointer_force']
        self.core_radius = float(config['pointer_core_radius'])
        self.core_strength = config['pointer_core_force']
        self.peer_radius = float(config['peer_radius'])
        self.peer_strength = config['peer_force']
        self.separation_buffer = float(config['peer_separation_buffer'])
        self.center_pull = config['center_pull']
        self.max_force = float(config['max_force'])

    def compute_force(self, entity, peers: Iterable, pointer: Optional[np.ndarray], center: np.ndarray,
                      snapshot: Optional[PeerSnapshot] = None, index: int = -1) -> np.ndarray:
        """Sum of the pointer, peer and center terms acting on `entity`."""
        total = np.zeros(2, dtype=float)
        if pointer is not None:
            total += self.pointer_force(entity, pointer)
        total += self.peer_force(entity, peers, snapshot, index)
        total += self.center_force(entity, center)
        return total

    def pointer_force(self, entity, pointer: np.ndarray) -> np.ndarray:
        """
        Linear-falloff push (or pull) around the pointer, scaled by the
        shape's density, plus a short-range core repulsion that keeps shapes
        from collapsing onto the pointer.
        """
        force = np.zeros(2, dtype=float)
        dist = distance(entity.position, pointer)
        if dist >= self.pointer_radius:
            return force

        if dist == 0.0:
            dist = EPSILON
        away = (entity.position - pointer) / dist

        strength = self.pointer_strength * entity.density * (self.pointer_radius - dist) / self.pointer_radius
        direction = away if self.pointer_mode == "repel" else -away
        force += limit(direction * strength, self.max_force)

        if self.core_radius > 0.0:
            core = self.core_strength * max(0.0, (self.core_radius - dist) / self.core_radius)
            force += limit(away * core, self.max_force)
        return force

    def peer_force(self, entity, peers: Iterable, snapshot: Optional[PeerSnapshot] = None,
                   index: int = -1) -> np.ndarray:
        """
        Repulsion from overlapping peers. Missing (None) peers are skipped.

        When a tick-wide `snapshot` is given, `index` is the entity's row in it
        and `peers` is not read. Otherwise a snapshot of `peers` without the
        entity is taken on the spot.
        """
        if snapshot is None:
            snapshot = snapshot_peers(peer for peer in peers if peer is not entity)
            index = -1
        if len(snapshot.entities) == 0:
            return np.zeros(2, dtype=float)

        force_x, force_y = _peer_repulsion_jit(
            float(entity.position[0]),
            float(entity.position[1]),
            float(entity.size),
            index,
            snapshot.positions,
            snapshot.sizes,
            self.peer_radius,
            self.separation_buffer,
            self.peer_strength * 2.0,  # Contact
            self.peer_strength * 0.1,  # Minimum separation
            self.max_force,
            EPSILON
        )
        return np.array([force_x, force_y])

    def center_force(self, entity, center: np.ndarray) -> np.ndarray:
        """Constant-fraction pull toward the viewport center."""
        return limit((center - entity.position) * self.center_pull, self.max_force)

    def rescale(self, width: float, height: float, ratio: float):
        """Recalibrates the pointer radius to a fraction of the viewport."""
        self.pointer_radius = min(width, height) * ratio
        logger.debug(f"Pointer radius recalibrated to {self.pointer_radius:.1f}px for {width}x{height}.")
