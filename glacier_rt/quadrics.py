"""Implicit quadric primitives: spheres and capped tubes."""

from __future__ import annotations

import math
from typing import Optional

import numpy as np

from glacier_rt.interaction import AABB, Interval, Ray, SurfaceInteraction, vec3
from glacier_rt.primitives import Primitive, PrimitiveKind, _oriented_hit


def quadratic_roots(a: float, b: float, c: float) -> tuple[Optional[float], Optional[float]]:
    """Real roots of ``a t^2 + b t + c``, smaller first; missing roots are ``None``."""
    if a == 0.0:
        if b == 0.0:
            return None, None
        return -c / b, None
    disc = b * b - 4.0 * a * c
    if disc < 0.0:
        return None, None
    sq = math.sqrt(disc)
    q = -0.5 * (b + sq) if b >= 0.0 else -0.5 * (b - sq)
    if q == 0.0:
        return 0.0, 0.0
    r1, r2 = q / a, c / q
    return (r1, r2) if r1 <= r2 else (r2, r1)


def _nearest_nonnegative(roots) -> Optional[float]:
    t1 = roots[0] if roots[0] is not None else -1.0
    t2 = roots[1] if roots[1] is not None else -1.0
    if t1 < 0.0 and t2 < 0.0:
        return None
    if t1 < 0.0:
        return t2
    if t2 < 0.0:
        return t1
    return min(t1, t2)


class SpherePrim(Primitive):
    """Sphere with the given centre and radius."""

    kind = PrimitiveKind.IMPLICIT

    def __init__(self, center, radius: float) -> None:
        super().__init__()
        self.center = np.asarray(center, dtype=float)
        self.radius = float(radius)
        extent = np.full(3, self.radius)
        self.aabb = AABB(self.center - extent, self.center + extent)

    def intersect(self, ray: Ray, bounds: Interval) -> Optional[SurfaceInteraction]:
        oc = ray.origin - self.center
        a = float(np.dot(ray.direction, ray.direction))
        b = 2.0 * float(np.dot(ray.direction, oc))
        c = float(np.dot(oc, oc)) - self.radius * self.radius

        roots = quadratic_roots(a, b, c)
        if roots == (None, None):
            return None
        t = _nearest_nonnegative(roots)
        if t is None or not bounds.contains(t):
            return None

        p = ray.at(t)
        normal = (p - self.center) / self.radius
        return _oriented_hit(p, normal, t, ray.direction)


class TubePrim(Primitive):
    """Z-aligned cylinder of the given radius and height, optionally capped."""

    kind = PrimitiveKind.IMPLICIT

    def __init__(
        self, center, radius: float, height: float, top: bool = True, bottom: bool = True
    ) -> None:
        super().__init__()
        self.center = np.asarray(center, dtype=float)
        self.radius = float(radius)
        self.height = float(height)
        self.top_cap = bool(top)
        self.bottom_cap = bool(bottom)
        extent = vec3(self.radius, self.radius, self.height / 2.0)
        self.aabb = AABB(self.center - extent, self.center + extent)

    def _cap_hit(
        self, ray: Ray, bounds: Interval, z: float, normal: np.ndarray, closest
    ) -> Optional[SurfaceInteraction]:
        t = (z - float(ray.origin[2])) / float(ray.direction[2])
        if not bounds.contains(t) or (closest is not None and t >= closest.t):
            return closest
        p = ray.at(t)
        dx = float(p[0] - self.center[0])
        dy = float(p[1] - self.center[1])
        if dx * dx + dy * dy <= self.radius * self.radius:
            return _oriented_hit(p, normal, t, ray.direction)
        return closest

    def intersect(self, ray: Ray, bounds: Interval) -> Optional[SurfaceInteraction]:
        closest: Optional[SurfaceInteraction] = None

        ox = float(ray.origin[0] - self.center[0])
        oy = float(ray.origin[1] - self.center[1])
        dx = float(ray.direction[0])
        dy = float(ray.direction[1])

        a = dx * dx + dy * dy
        b = 2.0 * (dx * ox + dy * oy)
        c = ox * ox + oy * oy - self.radius * self.radius

        roots = quadratic_roots(a, b, c)
        if roots == (None, None):
            return None
        t = _nearest_nonnegative(roots)
        if t is None:
            return None

        if bounds.contains(t):
            p = ray.at(t)
            half = self.height / 2.0
            if Interval(-half, half).contains(float(p[2])):
                normal = vec3(p[0] - self.center[0], p[1] - self.center[1], 0.0) / self.radius
                closest = _oriented_hit(p, normal, t, ray.direction)

        if self.top_cap and ray.direction[2] != 0.0:
            z = float(self.center[2]) + self.height / 2.0
            closest = self._cap_hit(ray, bounds, z, vec3(0, 0, 1), closest)

        if self.bottom_cap and ray.direction[2] != 0.0:
            z = float(self.center[2]) - self.height / 2.0
            closest = self._cap_hit(ray, bounds, z, vec3(0, 0, -1), closest)

        return closest