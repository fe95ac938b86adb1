import math

import pygame
import pytest

from render_adapter import (
    PygameRenderer, hexagram_triangles, hsva_color, polygon_vertices,
    shape_outlines, square_vertices, star_vertices, triangle_vertices,
)
from shape import ShapeKind
from visuals import DrawCall


@pytest.fixture(autouse=True, scope="module")
def pygame_session():
    pygame.init()
    yield
    pygame.quit()


def shape_call(kind, size=40.0, point_count=0, alpha=100.0, position=(50.0, 50.0)):
    return DrawCall(kind=kind, position=position, rotation=0.0, size=size, hue=0.0,
                    saturation=100.0, brightness=100.0, alpha=alpha, point_count=point_count,
                    glow_radius=size * 1.8, glow_alpha=40.0)


class TestVertices:
    def test_polygon_starts_at_the_top(self):
        vertices = polygon_vertices((10.0, 10.0), 5.0, 5)
        assert len(vertices) == 5
        assert vertices[0] == pytest.approx((10.0, 5.0))
        for x, y in vertices:
            assert math.hypot(x - 10.0, y - 10.0) == pytest.approx(5.0)

    def test_star_alternates_radii(self):
        vertices = star_vertices((0.0, 0.0), 10.0, 4.0, 6)
        assert len(vertices) == 12
        radii = [math.hypot(x, y) for x, y in vertices]
        assert radii[0::2] == pytest.approx([10.0] * 6)
        assert radii[1::2] == pytest.approx([4.0] * 6)

    def test_square_rotation(self):
        vertices = square_vertices((0.0, 0.0), 2.0, math.pi / 4)
        for x, y in vertices:
            assert math.hypot(x, y) == pytest.approx(math.sqrt(2.0))
        assert vertices[0] == pytest.approx((0.0, -math.sqrt(2.0)))

    def test_triangle_has_three_corners(self):
        assert len(triangle_vertices((0.0, 0.0), 30.0)) == 3

    def test_hexagram_is_two_opposed_triangles(self):
        up, down = hexagram_triangles((0.0, 0.0), 10.0)
        assert up[0] == pytest.approx((0.0, -10.0))
        assert down[0] == pytest.approx((0.0, 10.0))

    @pytest.mark.parametrize("kind, polygons, corners", [
        ("circle", 0, None),
        ("square", 1, 4),
        ("triangle", 1, 3),
        ("pentagon", 1, 5),
        ("star", 1, 14),
        ("hexagram", 2, 3),
    ])
    def test_every_kind_has_an_outline(self, kind, polygons, corners):
        outlines = shape_outlines(shape_call(kind, point_count=7))
        assert len(outlines) == polygons
        for outline in outlines:
            assert len(outline) == corners

    def test_all_kinds_are_covered(self):
        for kind in ShapeKind:
            shape_outlines(shape_call(kind.value, point_count=5))


def test_hsva_color_clamps_out_of_range_components():
    color = hsva_color(400.0, 150.0, -5.0, 100.0)
    assert color.a == 255
    red = hsva_color(0.0, 100.0, 100.0, 100.0)
    assert (red.r, red.g, red.b) == (255, 0, 0)


class TestPygameRenderer:
    def make(self):
        surface = pygame.Surface((100, 100))
        surface.fill((0, 0, 0))
        glow = pygame.Surface((100, 100), pygame.SRCALPHA)
        return PygameRenderer(surface, glow), surface, glow

    @pytest.mark.parametrize("kind", [kind.value for kind in ShapeKind])
    def test_shapes_paint_their_center(self, kind):
        renderer, surface, _ = self.make()
        renderer.draw(shape_call(kind, point_count=5))
        assert surface.get_at((50, 50)).r > 200

    def test_translucent_shapes_blend(self):
        renderer, surface, _ = self.make()
        renderer.draw(shape_call("circle", alpha=50.0))
        assert 80 < surface.get_at((50, 50)).r < 180

    def test_glow_goes_to_the_glow_surface(self):
        renderer, _, glow = self.make()
        renderer.draw(shape_call("square"))
        assert glow.get_at((50, 50)).a > 0

    def test_particle(self):
        renderer, surface, _ = self.make()
        renderer.draw(DrawCall("particle", (20.0, 20.0), 0.0, 6.0, 120.0, 100.0, 100.0, 100.0))
        assert surface.get_at((20, 20)).g > 200

    def test_shockwave_draws_a_ring(self):
        renderer, surface, _ = self.make()
        renderer.draw(DrawCall("shockwave", (50.0, 50.0), 0.0, 20.0, 0.0, 35.0, 100.0, 100.0,
                               stroke_weight=3.0))
        assert surface.get_at((50 + 19, 50)).r > 200
        assert surface.get_at((50, 50)) == pygame.Color(0, 0, 0)

    def test_connection_draws_a_line(self):
        renderer, surface, _ = self.make()
        renderer.draw(DrawCall("connection", (10.0, 30.0), 0.0, 80.0, 240.0, 0.0, 100.0, 100.0,
                               end=(90.0, 30.0)))
        assert surface.get_at((50, 30)).b > 100

    def test_off_screen_calls_are_skipped(self):
        renderer, surface, _ = self.make()
        renderer.draw(shape_call("star", point_count=5, position=(-500.0, -500.0)))
        renderer.draw(DrawCall("shockwave", (50.0, 50.0), 0.0, 0.5, 0.0, 35.0, 100.0, 100.0))
        assert surface.get_at((50, 50)) == pygame.Color(0, 0, 0)
