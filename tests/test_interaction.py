import math

import numpy as np
import pytest

from glacier_rt.interaction import (
    AABB,
    Face,
    Interval,
    Ray,
    ScatterRecord,
    SurfaceInteraction,
    normalize,
    vec3,
)


def test_normalize_gives_unit_parallel_vector():
    v = vec3(3, 4, 0)
    n = normalize(v)
    assert math.isclose(float(np.linalg.norm(n)), 1.0)
    assert np.allclose(np.cross(n, v), 0.0)
    assert float(np.dot(n, v)) > 0


def test_normalize_zero_raises():
    with pytest.raises(ValueError):
        normalize(vec3(0, 0, 0))


def test_ray_at_zero_is_origin_and_moves_along_direction():
    origin = vec3(1, -2, 0.5)
    direction = vec3(0, 1, 1)
    ray = Ray(origin, direction)
    assert np.allclose(ray.at(0.0), origin)
    step = ray.at(2.5) - origin
    assert np.allclose(np.cross(step, direction), 0.0)
    assert float(np.dot(step, direction)) > 0


def test_interval_is_closed():
    iv = Interval(0.0, 1.0)
    assert iv.contains(0.0)
    assert iv.contains(1.0)
    assert not iv.contains(1.0001)
    assert not iv.contains(-0.0001)


def test_aabb_orders_corners():
    box = AABB(vec3(1, 2, 3), vec3(0, 0, 0))
    assert np.allclose(box.lo, [0, 0, 0])
    assert np.allclose(box.hi, [1, 2, 3])


def test_empty_is_identity_for_enclosure():
    box = AABB(vec3(-1, 0, 2), vec3(1, 3, 4))
    merged = AABB.empty().enclosure(box)
    assert np.allclose(merged.lo, box.lo)
    assert np.allclose(merged.hi, box.hi)
    assert AABB.empty().is_empty
    assert not box.is_empty


def test_enclosure_contains_both():
    a = AABB(vec3(0, 0, 0), vec3(1, 1, 1))
    b = AABB(vec3(2, -1, 0), vec3(3, 0, 5))
    e = a.enclosure(b)
    assert np.allclose(e.lo, [0, -1, 0])
    assert np.allclose(e.hi, [3, 1, 5])


def test_axis_and_longest_axis():
    box = AABB(vec3(0, 0, 0), vec3(1, 5, 2))
    assert box.longest_axis() == 1
    ax = box.axis(2)
    assert ax.min == 0.0 and ax.max == 2.0
    with pytest.raises(ValueError):
        box.axis(3)


def test_check_intersect_hit_and_miss():
    box = AABB(vec3(0, 0, 0), vec3(1, 1, 1))
    bounds = Interval(0.001, math.inf)
    assert box.check_intersect(Ray(vec3(-5, 0.5, 0.5), vec3(1, 0, 0)), bounds)
    assert not box.check_intersect(Ray(vec3(-5, 0.5, 0.5), vec3(-1, 0, 0)), bounds)
    assert not box.check_intersect(Ray(vec3(-5, 2.0, 0.5), vec3(1, 0, 0)), bounds)


def test_check_intersect_respects_bounds():
    box = AABB(vec3(0, 0, 0), vec3(1, 1, 1))
    ray = Ray(vec3(-5, 0.5, 0.5), vec3(1, 0, 0))
    assert not box.check_intersect(ray, Interval(0.0, 1.0))


def test_flat_box_can_be_hit():
    box = AABB(vec3(0, 0, 0), vec3(1, 1, 0))
    ray = Ray(vec3(0.5, 0.5, 3), vec3(0, 0, -1))
    assert box.check_intersect(ray, Interval(0.001, math.inf))


def test_empty_box_is_never_hit():
    ray = Ray(vec3(0, 0, 0), vec3(1, 1, 1))
    assert not AABB.empty().check_intersect(ray, Interval(-math.inf, math.inf))


def test_records_hold_their_fields():
    si = SurfaceInteraction(vec3(0, 0, 0), vec3(0, 0, 1), Face.INSIDE, 2.0)
    assert si.mat is None
    assert si.face is Face.INSIDE
    assert si.t == 2.0
    ray = Ray(vec3(0, 0, 0), vec3(1, 0, 0))
    rec = ScatterRecord(ray, vec3(1, 1, 1))
    assert rec.scattered is ray
    assert np.allclose(rec.color, 1.0)