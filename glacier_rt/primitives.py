"""Rendering primitives with planar surfaces and triangle meshes."""

from __future__ import annotations

import abc
import enum
from typing import Optional, Sequence

import numpy as np

from glacier_rt.interaction import (
    AABB,
    Face,
    Interval,
    Ray,
    SurfaceInteraction,
    normalize,
)
from glacier_rt.transform import Transform

# Tolerance for the near-zero and near-boundary comparisons of hit tests.
EPSILON = 1e-8

_UNIT = Interval(0.0, 1.0)


class PrimitiveKind(enum.Enum):
    NULL = 0
    IMPLICIT = 1
    MESH = 2


class Primitive(abc.ABC):
    """Base of all primitives: a surface a ray can hit, in object space.

    Each primitive carries its object-to-world transform, a material and an
    axis-aligned bounding box in object space.
    """

    kind: PrimitiveKind = PrimitiveKind.NULL

    def __init__(self) -> None:
        self.object_to_world = Transform()
        self.material = None
        self.aabb = AABB.empty()

    @abc.abstractmethod
    def intersect(self, ray: Ray, bounds: Interval) -> Optional[SurfaceInteraction]:
        """Closest hit of ``ray`` with parameter inside ``bounds``, or ``None``."""


def _oriented_hit(
    p: np.ndarray, normal: np.ndarray, t: float, direction: np.ndarray
) -> SurfaceInteraction:
    """Hit record whose normal faces against the incoming direction."""
    if float(np.dot(direction, normal)) > 0.0:
        return SurfaceInteraction(p, -normal, Face.INSIDE, float(t))
    return SurfaceInteraction(p, normal.copy(), Face.OUTSIDE, float(t))


class _PlanarPrim(Primitive):
    """Shared plane set-up and hit test for shapes spanned by ``u`` and ``v``."""

    kind = PrimitiveKind.IMPLICIT

    def __init__(self, q, u, v) -> None:
        super().__init__()
        self.q = np.asarray(q, dtype=float)
        self.u = np.asarray(u, dtype=float)
        self.v = np.asarray(v, dtype=float)
        self.normal = normalize(np.cross(self.u, self.v))
        self._d = float(np.dot(self.normal, self.q))

    def _inside(self, alpha: float, beta: float) -> bool:
        raise NotImplementedError

    def intersect(self, ray: Ray, bounds: Interval) -> Optional[SurfaceInteraction]:
        denom = float(np.dot(self.normal, ray.direction))
        if abs(denom) <= EPSILON:
            return None

        t = (self._d - float(np.dot(self.normal, ray.origin))) / denom
        if not bounds.contains(t):
            return None

        hit = ray.at(t)
        p = hit - self.q

        uu = float(np.dot(self.u, self.u))
        uv = float(np.dot(self.u, self.v))
        vv = float(np.dot(self.v, self.v))
        pu = float(np.dot(p, self.u))
        pv = float(np.dot(p, self.v))

        denom_bary = uv * uv - uu * vv
        alpha = (uv * pv - vv * pu) / denom_bary
        beta = (uv * pu - uu * pv) / denom_bary

        if not self._inside(alpha, beta):
            return None
        return _oriented_hit(hit, self.normal, t, ray.direction)


class QuadPrim(_PlanarPrim):
    """Parallelogram with corner ``q`` and edges ``u`` and ``v``."""

    def __init__(self, q, u, v) -> None:
        super().__init__(q, u, v)
        box1 = AABB(self.q, self.q + self.u + self.v)
        box2 = AABB(self.q + self.u, self.q + self.v)
        self.aabb = box1.enclosure(box2)

    def _inside(self, alpha: float, beta: float) -> bool:
        return _UNIT.contains(alpha) and _UNIT.contains(beta)

    def intersect(self, ray: Ray, bounds: Interval) -> Optional[SurfaceInteraction]:
        return super().intersect(ray, bounds)


class DiskPrim(_PlanarPrim):
    """Ellipse centred at ``q`` with semi-axes ``u`` and ``v``."""

    def __init__(self, q, u, v) -> None:
        super().__init__(q, u, v)
        extent = np.sqrt(self.u * self.u + self.v * self.v)
        self.aabb = AABB(self.q - extent, self.q + extent)

    def _inside(self, alpha: float, beta: float) -> bool:
        return not (alpha * alpha + beta * beta > 1.0 + EPSILON)

    def intersect(self, ray: Ray, bounds: Interval) -> Optional[SurfaceInteraction]:
        return super().intersect(ray, bounds)


class TrianglePrim(_PlanarPrim):
    """Triangle with corner ``q`` and edges ``u`` and ``v``."""

    def __init__(self, q, u, v) -> None:
        super().__init__(q, u, v)
        box1 = AABB(self.q, self.q + self.u)
        box2 = AABB(self.q, self.q + self.v)
        self.aabb = box1.enclosure(box2)

    def _inside(self, alpha: float, beta: float) -> bool:
        return not (alpha < -EPSILON or beta < -EPSILON or alpha + beta > 1.0 + EPSILON)

    def intersect(self, ray: Ray, bounds: Interval) -> Optional[SurfaceInteraction]:
        return super().intersect(ray, bounds)


def _closest(hits) -> Optional[SurfaceInteraction]:
    closest = None
    for hit in hits:
        if hit is not None and (closest is None or hit.t < closest.t):
            closest = hit
    return closest


class CuboidPrim(Primitive):
    """Parallelepiped with corner ``o`` and edges ``x``, ``y`` and ``z``."""

    kind = PrimitiveKind.IMPLICIT

    def __init__(self, o, x, y, z) -> None:
        super().__init__()
        o, x, y, z = (np.asarray(a, dtype=float) for a in (o, x, y, z))
        self.quads = (
            QuadPrim(o, y, x),  # front
            QuadPrim(o + z, x, y),  # back
            QuadPrim(o, z, y),  # left
            QuadPrim(o + x, y, z),  # right
            QuadPrim(o, x, z),  # bottom
            QuadPrim(o + y, z, x),  # top
        )
        corners = np.stack(
            [o, o + x, o + y, o + x + y, o + z, o + z + x, o + z + y, o + z + x + y]
        )
        self.aabb = AABB(corners.min(axis=0), corners.max(axis=0))

    def intersect(self, ray: Ray, bounds: Interval) -> Optional[SurfaceInteraction]:
        return _closest(quad.intersect(ray, bounds) for quad in self.quads)


class MeshPrim(Primitive):
    """Triangle mesh given by vertex positions and index triples."""

    kind = PrimitiveKind.MESH

    def __init__(self, vertices: Sequence, triangles: Sequence[Sequence[int]]) -> None:
        super().__init__()
        self.vertices = [np.asarray(p, dtype=float) for p in vertices]
        self.triangles = [tuple(int(i) for i in tri) for tri in triangles]
        for tri in self.triangles:
            if len(tri) != 3:
                raise ValueError("each triangle must have three vertex indices")
            for index in tri:
                if not 0 <= index < len(self.vertices):
                    raise IndexError(f"vertex index {index} out of range")
        self._prims = []
        for a, b, c in self.triangles:
            q, r, s = self.vertices[a], self.vertices[b], self.vertices[c]
            self._prims.append(TrianglePrim(q, r - q, s - q))
        if self.vertices:
            stacked = np.stack(self.vertices)
            self.aabb = AABB(stacked.min(axis=0), stacked.max(axis=0))

    def intersect(self, ray: Ray, bounds: Interval) -> Optional[SurfaceInteraction]:
        return _closest(tri.intersect(ray, bounds) for tri in self._prims)