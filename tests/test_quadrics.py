import math

import numpy as np
import pytest

from glacier_rt.interaction import Face, Interval, Ray, normalize, vec3
from glacier_rt.quadrics import SpherePrim, TubePrim, quadratic_roots

WIDE = Interval(0.001, math.inf)


@pytest.mark.parametrize("a,b,c", [(1.0, -3.0, 2.0), (2.0, 1.0, -6.0), (1.0, 0.0, -4.0)])
def test_quadratic_roots_solve_equation(a, b, c):
    r1, r2 = quadratic_roots(a, b, c)
    assert r1 <= r2
    for r in (r1, r2):
        assert a * r * r + b * r + c == pytest.approx(0.0, abs=1e-9)


def test_quadratic_no_real_roots():
    assert quadratic_roots(1.0, 0.0, 1.0) == (None, None)


def test_quadratic_degenerate_cases():
    assert quadratic_roots(0.0, 0.0, 1.0) == (None, None)
    root, missing = quadratic_roots(0.0, 2.0, -4.0)
    assert root == pytest.approx(2.0)
    assert missing is None


def unit_sphere():
    return SpherePrim(vec3(0, 0, 0), 1.0)


def test_sphere_hit_from_outside():
    hit = unit_sphere().intersect(Ray(vec3(0, 0, 5), vec3(0, 0, -1)), WIDE)
    assert hit.t == pytest.approx(4.0)
    assert np.linalg.norm(hit.p) == pytest.approx(1.0)
    assert np.allclose(hit.n, [0, 0, 1])
    assert hit.face is Face.OUTSIDE


def test_sphere_hit_from_inside():
    ray = Ray(vec3(0, 0, 0), vec3(0, 0, -1))
    hit = unit_sphere().intersect(ray, WIDE)
    assert hit.face is Face.INSIDE
    assert np.allclose(hit.p, [0, 0, -1])
    assert float(np.dot(hit.n, ray.direction)) < 0.0


def test_sphere_misses():
    sphere = unit_sphere()
    assert sphere.intersect(Ray(vec3(2, 0, 5), vec3(0, 0, -1)), WIDE) is None
    assert sphere.intersect(Ray(vec3(0, 0, 5), vec3(0, 0, 1)), WIDE) is None
    assert sphere.intersect(Ray(vec3(0, 0, 5), vec3(0, 0, -1)), Interval(0.0, 3.0)) is None


def test_sphere_box():
    sphere = SpherePrim(vec3(1, 2, 3), 0.5)
    assert np.allclose(sphere.aabb.lo, [0.5, 1.5, 2.5])
    assert np.allclose(sphere.aabb.hi, [1.5, 2.5, 3.5])


def test_tube_side_hit():
    tube = TubePrim(vec3(0, 0, 0), 1.0, 2.0)
    hit = tube.intersect(Ray(vec3(5, 0, 0), vec3(-1, 0, 0)), WIDE)
    assert np.allclose(hit.p, [1, 0, 0])
    assert np.allclose(hit.n, [1, 0, 0])
    assert hit.face is Face.OUTSIDE


def test_tube_side_miss_above_height():
    tube = TubePrim(vec3(0, 0, 0), 1.0, 2.0)
    assert tube.intersect(Ray(vec3(5, 0, 3), vec3(-1, 0, 0)), WIDE) is None


def steep_ray():
    return Ray(vec3(0.2, 0, 5), normalize(vec3(-0.01, 0, -1)))


def test_tube_top_cap():
    hit = TubePrim(vec3(0, 0, 0), 1.0, 2.0).intersect(steep_ray(), WIDE)
    assert hit.p[2] == pytest.approx(1.0)
    assert np.allclose(hit.n, [0, 0, 1])
    assert hit.face is Face.OUTSIDE


def test_tube_bottom_cap_when_top_hidden():
    ray = steep_ray()
    hit = TubePrim(vec3(0, 0, 0), 1.0, 2.0, top=False, bottom=True).intersect(ray, WIDE)
    assert hit.p[2] == pytest.approx(-1.0)
    assert hit.face is Face.INSIDE
    assert float(np.dot(hit.n, ray.direction)) < 0.0


def test_tube_without_caps_misses_steep_ray():
    tube = TubePrim(vec3(0, 0, 0), 1.0, 2.0, top=False, bottom=False)
    assert tube.intersect(steep_ray(), WIDE) is None


def test_tube_box():
    tube = TubePrim(vec3(0, 0, 0), 1.0, 2.0)
    assert np.allclose(tube.aabb.lo, [-1, -1, -1])
    assert np.allclose(tube.aabb.hi, [1, 1, 1])