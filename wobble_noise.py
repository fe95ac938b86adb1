# wobble_noise.py

"""
Seeded 1D value noise used for the shape wobble.

The wobble only has to be smooth, bounded and reproducible, so a hashed
value-noise lattice with smoothstep interpolation is enough. The lattice is
addressed by (seed, integer cell) and needs no tables or global state.

The xorshift hash, the seed mixer and the smoothstep curve are adapted from
the value noise in modulo-led-studio (runtime/noise_v2.py); the lattice
lookup and the 1D wobble built on them are specific to this scene.
"""

import math


def _hash_u32(x: int) -> int:
    # xorshift32
    x &= 0xFFFFFFFF
    x ^= (x << 13) & 0xFFFFFFFF
    x ^= (x >> 17) & 0xFFFFFFFF
    x ^= (x << 5) & 0xFFFFFFFF
    return x & 0xFFFFFFFF


def _mix_u32(a: int, b: int) -> int:
    return _hash_u32(a ^ (_hash_u32(b) + 0x9E3779B9 + ((a << 6) & 0xFFFFFFFF) + (a >> 2)))


def _lattice(seed: int, cell: int) -> float:
    """Pseudo-random lattice value in [-1, 1] for one integer cell."""
    h = _mix_u32(seed & 0xFFFFFFFF, cell & 0xFFFFFFFF)
    return (h / 4294967295.0) * 2.0 - 1.0


def _smoothstep(t: float) -> float:
    return t * t * (3.0 - 2.0 * t)


def wobble(seed: int, phase: float) -> float:
    """
    Smooth noise in [-1, 1] as a function of a monotonically advancing phase.
    Continuous in `phase`; identical inputs always give identical outputs.
    """
    cell = math.floor(phase)
    t = _smoothstep(phase - cell)
    a = _lattice(seed, cell)
    b = _lattice(seed, cell + 1)
    return a + (b - a) * t
