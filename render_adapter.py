# render_adapter.py

"""
pygame Render Adapter

Draws DrawCalls produced by the scene onto pygame surfaces. Outline vertex
generation for the shape kinds lives here too; the scene itself never deals
with pixels.

Alpha blending: pygame's draw functions write RGBA straight into the target
instead of blending, so every translucent primitive is painted onto a small
temporary SRCALPHA surface that is then blitted over the target.
"""

import math
from typing import Callable, List, Sequence, Tuple

import pygame

import constants
from shape import ShapeKind
from vector_math import wrap_degrees

Point = Tuple[float, float]


def hsva_color(hue: float, saturation: float, brightness: float, alpha: float) -> pygame.Color:
    """Builds a pygame colour from HSB(A) components, clamped to pygame's ranges."""
    color = pygame.Color(0, 0, 0, 0)
    color.hsva = (
        wrap_degrees(hue),
        min(max(saturation, 0.0), 100.0),
        min(max(brightness, 0.0), 100.0),
        min(max(alpha, 0.0), 100.0),
    )
    return color


def polygon_vertices(center: Point, radius: float, sides: int, rotation: float = 0.0) -> List[Point]:
    """Regular polygon with its first vertex pointing up before rotation."""
    cx, cy = center
    step = 2.0 * math.pi / sides
    start = rotation - math.pi / 2.0
    return [
        (cx + math.cos(start + i * step) * radius, cy + math.sin(start + i * step) * radius)
        for i in range(sides)
    ]


def star_vertices(center: Point, outer_radius: float, inner_radius: float, points: int,
                  rotation: float = 0.0) -> List[Point]:
    """Star outline alternating between outer tips and inner notches."""
    cx, cy = center
    step = 2.0 * math.pi / points
    start = rotation - math.pi / 2.0
    vertices = []
    for i in range(points):
        angle = start + i * step
        vertices.append((cx + math.cos(angle) * outer_radius, cy + math.sin(angle) * outer_radius))
        angle += step / 2.0
        vertices.append((cx + math.cos(angle) * inner_radius, cy + math.sin(angle) * inner_radius))
    return vertices


def triangle_vertices(center: Point, size: float, rotation: float = 0.0) -> List[Point]:
    """Equilateral-looking triangle with its centroid slightly below the apex."""
    height = (math.sqrt(3.0) / 2.0) * size
    local = [(0.0, -height / 1.5), (-size / 2.0, height / 2.5), (size / 2.0, height / 2.5)]
    return _rotate_and_translate(local, center, rotation)


def square_vertices(center: Point, size: float, rotation: float = 0.0) -> List[Point]:
    half = size / 2.0
    local = [(-half, -half), (half, -half), (half, half), (-half, half)]
    return _rotate_and_translate(local, center, rotation)


def hexagram_triangles(center: Point, radius: float, rotation: float = 0.0) -> List[List[Point]]:
    """Two interlocking triangles forming a six-pointed star."""
    return [
        polygon_vertices(center, radius, 3, rotation),
        polygon_vertices(center, radius, 3, rotation + math.pi),
    ]


def _rotate_and_translate(points: Sequence[Point], center: Point, rotation: float) -> List[Point]:
    cos_r = math.cos(rotation)
    sin_r = math.sin(rotation)
    cx, cy = center
    return [(cx + x * cos_r - y * sin_r, cy + x * sin_r + y * cos_r) for x, y in points]


def shape_outlines(call) -> List[List[Point]]:
    """
    Filled polygons making up a shape draw call. Circles have no outline and
    return an empty list; they are drawn with pygame.draw.circle instead.
    """
    kind = ShapeKind(call.kind)
    center = call.position
    size = call.size

    if kind is ShapeKind.CIRCLE:
        return []
    elif kind is ShapeKind.SQUARE:
        return [square_vertices(center, size, call.rotation)]
    elif kind is ShapeKind.TRIANGLE:
        return [triangle_vertices(center, size, call.rotation)]
    elif kind is ShapeKind.PENTAGON:
        return [polygon_vertices(center, size / 2.0, 5, call.rotation)]
    elif kind is ShapeKind.STAR:
        return [star_vertices(center, size / 2.0, size / 4.0, call.point_count or 5, call.rotation)]
    elif kind is ShapeKind.HEXAGRAM:
        return hexagram_triangles(center, size / 2.0, call.rotation)
    raise ValueError(f"No outline defined for shape kind {kind}")


class PygameRenderer:
    """
    Draws scene draw calls onto a main surface and an optional glow surface.

    Data Contract:
    - Inputs:
        - surface (pygame.Surface): The main drawing target.
        - glow_surface (pygame.Surface | None): SRCALPHA target for the bloom pass.
    - Side Effects: Paints onto the surfaces.
    """
    def __init__(self, surface: pygame.Surface, glow_surface: pygame.Surface = None):
        self.surface = surface
        self.glow_surface = glow_surface

    def set_targets(self, surface: pygame.Surface, glow_surface: pygame.Surface = None):
        """Points the renderer at new surfaces, e.g. after a window resize."""
        self.surface = surface
        self.glow_surface = glow_surface

    def draw(self, call):
        if call.kind == "particle":
            self._draw_particle(call)
        elif call.kind == "shockwave":
            self._draw_shockwave(call)
        elif call.kind == "connection":
            self._draw_connection(call)
        else:
            self._draw_shape(call)

    def _draw_shape(self, call):
        color = hsva_color(call.hue, call.saturation, call.brightness, call.alpha)
        radius = call.size / 2.0

        if self.glow_surface is not None and call.glow_radius > 0.0:
            glow = hsva_color(call.hue, call.saturation, call.brightness, call.glow_alpha)
            pygame.draw.circle(self.glow_surface, glow, _int_point(call.position), int(call.glow_radius))

        outlines = shape_outlines(call)
        if not outlines:
            self._draw_translucent(
                [call.position], radius,
                lambda temp, origin: pygame.draw.circle(temp, color, _local(call.position, origin), radius)
            )
            return

        for outline in outlines:
            self._draw_translucent(
                outline, 1.0,
                lambda temp, origin, outline=outline: pygame.draw.polygon(
                    temp, color, [_local(point, origin) for point in outline])
            )

    def _draw_particle(self, call):
        color = hsva_color(call.hue, call.saturation, call.brightness, call.alpha)
        radius = max(call.size / 2.0, 1.0)
        self._draw_translucent(
            [call.position], radius,
            lambda temp, origin: pygame.draw.circle(temp, color, _local(call.position, origin), radius)
        )

    def _draw_shockwave(self, call):
        if call.size < 1.0:
            return
        color = hsva_color(call.hue, call.saturation, call.brightness, call.alpha)
        width = max(1, int(round(call.stroke_weight)))
        self._draw_translucent(
            [call.position], call.size,
            lambda temp, origin: pygame.draw.circle(temp, color, _local(call.position, origin), call.size, width)
        )

    def _draw_connection(self, call):
        color = hsva_color(call.hue, call.saturation, call.brightness, call.alpha)
        self._draw_translucent(
            [call.position, call.end], 1.0,
            lambda temp, origin: pygame.draw.line(
                temp, color, _local(call.position, origin), _local(call.end, origin), constants.CONNECTION_LINE_WIDTH)
        )

    def _draw_translucent(self, points: Sequence[Point], pad: float,
                          paint: Callable[[pygame.Surface, Point], object]):
        """Paints through a temporary SRCALPHA surface covering `points` plus `pad` pixels."""
        xs = [point[0] for point in points]
        ys = [point[1] for point in points]
        left = math.floor(min(xs) - pad) - 1
        top = math.floor(min(ys) - pad) - 1
        width = math.ceil(max(xs) + pad) - left + 2
        height = math.ceil(max(ys) + pad) - top + 2

        # Skip anything entirely off-screen
        target_w, target_h = self.surface.get_size()
        if left >= target_w or top >= target_h or left + width <= 0 or top + height <= 0:
            return

        temp = pygame.Surface((width, height), pygame.SRCALPHA)
        paint(temp, (left, top))
        self.surface.blit(temp, (left, top))


def _local(point: Point, origin: Point) -> Point:
    return (point[0] - origin[0], point[1] - origin[1])


def _int_point(point: Point) -> Tuple[int, int]:
    return (int(point[0]), int(point[1]))
