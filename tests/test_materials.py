import math
import random

import numpy as np
import pytest

from glacier_rt.interaction import Face, Ray, SurfaceInteraction, normalize, vec3
from glacier_rt.materials import (
    Dielectric,
    Emissive,
    Lambertian,
    Material,
    MaterialKind,
    MirrorSpecular,
    Specular,
    perturb,
    reflect,
    refract,
)


def _hit(face=Face.OUTSIDE):
    return SurfaceInteraction(vec3(0, 0, 0), vec3(0, 0, 1), face, 1.0)


def test_reflect_preserves_length_and_flips_normal_part():
    v = vec3(1, 2, -3)
    n = vec3(0, 0, 1)
    r = reflect(v, n)
    assert math.isclose(np.linalg.norm(r), np.linalg.norm(v))
    assert math.isclose(float(np.dot(r, n)), -float(np.dot(v, n)))


def test_refract_with_unit_ratio_passes_straight_through():
    v = normalize(vec3(1, 0, -1))
    assert np.allclose(refract(v, vec3(0, 0, 1), 1.0), v)


def test_perturb_keeps_polar_angle():
    d = vec3(0, 2, 0)
    for alpha, beta in [(0.0, 1.0), (0.3, 2.0), (1.2, 5.0)]:
        out = perturb(d, alpha, beta)
        assert math.isclose(float(np.linalg.norm(out)), 1.0)
        assert math.isclose(float(np.dot(out, normalize(d))), math.cos(alpha), abs_tol=1e-12)


def test_base_material_absorbs():
    m = Material()
    assert m.kind is MaterialKind.NULL
    assert m.scatter(Ray(vec3(0, 0, 1), vec3(0, 0, -1)), _hit()) is None


def test_lambertian_scatters_into_hemisphere():
    m = Lambertian([0.5, 0.25, 1.0], rng=random.Random(1))
    assert m.kind is MaterialKind.LAMBERTIAN
    hit = _hit()
    for _ in range(50):
        rec = m.scatter(Ray(vec3(0, 0, 1), vec3(0, 0, -1)), hit)
        assert float(np.dot(rec.scattered.direction, hit.n)) > 0
        assert np.allclose(rec.scattered.origin, hit.p)
        assert np.allclose(rec.color, [0.5, 0.25, 1.0])


def test_lambertian_rejects_bad_color():
    with pytest.raises(ValueError):
        Lambertian([1.0, 2.0])


def test_specular_stays_near_mirror_direction():
    m = Specular([1, 1, 1], 100.0, rng=random.Random(2))
    assert m.kind is MaterialKind.SPECULAR
    incident = Ray(vec3(-1, 0, 1), normalize(vec3(1, 0, -1)))
    r = reflect(incident.direction, _hit().n)
    for _ in range(50):
        rec = m.scatter(incident, _hit())
        assert float(np.dot(rec.scattered.direction, r)) >= 0


def test_mirror_reflects_exactly():
    m = MirrorSpecular([0.9, 0.9, 0.9])
    assert m.kind is MaterialKind.MIRROR_SPECULAR
    incident = Ray(vec3(-1, 0, 1), vec3(1, 0, -1))
    rec = m.scatter(incident, _hit())
    assert np.allclose(rec.scattered.direction, reflect(incident.direction, _hit().n))


def test_dielectric_unit_index_transmits_straight():
    m = Dielectric(1.0, rng=random.Random(3))
    assert m.kind is MaterialKind.DIELECTRIC
    direction = normalize(vec3(0.2, 0, -1))
    rec = m.scatter(Ray(vec3(0, 0, 1), direction), _hit())
    assert np.allclose(rec.scattered.direction, direction)
    assert np.allclose(rec.color, 1.0)


def test_dielectric_total_internal_reflection():
    m = Dielectric(1.5, rng=random.Random(4))
    l = normalize(vec3(math.sin(math.radians(60)), 0, -math.cos(math.radians(60))))
    rec = m.scatter(Ray(vec3(0, 0, 1), l), _hit(Face.OUTSIDE))
    assert np.allclose(rec.scattered.direction, reflect(l, vec3(0, 0, 1)))


def test_emissive_emits_and_does_not_scatter():
    m = Emissive([4, 4, 4])
    assert m.kind is MaterialKind.EMISSIVE
    assert np.allclose(m.emitted(), [4, 4, 4])
    assert m.scatter(Ray(vec3(0, 0, 1), vec3(0, 0, -1)), _hit()) is None