"""Rays, intervals, bounding boxes and the records produced by ray hits."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

import numpy as np

if TYPE_CHECKING:
    from glacier_rt.materials import Material

# Minimum thickness of a bounding box along any axis, so that flat
# primitives still have a box a ray can pass through.
_MIN_THICKNESS = 1e-4


def vec3(x: float, y: float, z: float) -> np.ndarray:
    """Build a 3-component float vector."""
    return np.array((x, y, z), dtype=float)


def normalize(v) -> np.ndarray:
    """Return ``v`` scaled to unit length."""
    v = np.asarray(v, dtype=float)
    length = float(np.linalg.norm(v))
    if length == 0.0:
        raise ValueError("cannot normalize a zero-length vector")
    return v / length


@dataclass
class Ray:
    """A half line ``origin + t * direction``."""

    origin: np.ndarray
    direction: np.ndarray

    def __post_init__(self) -> None:
        self.origin = np.asarray(self.origin, dtype=float)
        self.direction = np.asarray(self.direction, dtype=float)

    def at(self, t: float) -> np.ndarray:
        """Point on the ray at parameter ``t``."""
        return self.origin + t * self.direction


@dataclass
class Interval:
    """Closed interval ``[min, max]`` of ray parameters."""

    min: float
    max: float

    def contains(self, x: float) -> bool:
        return self.min <= x <= self.max


class AABB:
    """Axis-aligned bounding box spanned by two corner points."""

    __slots__ = ("lo", "hi")

    def __init__(self, a, b) -> None:
        a = np.asarray(a, dtype=float)
        b = np.asarray(b, dtype=float)
        lo = np.minimum(a, b)
        hi = np.maximum(a, b)
        thin = (hi - lo) < _MIN_THICKNESS
        self.lo = np.where(thin, lo - _MIN_THICKNESS / 2.0, lo)
        self.hi = np.where(thin, hi + _MIN_THICKNESS / 2.0, hi)

    @classmethod
    def _from_bounds(cls, lo: np.ndarray, hi: np.ndarray) -> "AABB":
        box = cls.__new__(cls)
        box.lo = lo
        box.hi = hi
        return box

    @classmethod
    def empty(cls) -> "AABB":
        """A box enclosing nothing; the identity for :meth:`enclosure`."""
        return cls._from_bounds(np.full(3, math.inf), np.full(3, -math.inf))

    @property
    def is_empty(self) -> bool:
        return bool(np.any(self.lo > self.hi))

    def enclosure(self, other: "AABB") -> "AABB":
        """Smallest box containing both boxes."""
        return AABB._from_bounds(np.minimum(self.lo, other.lo), np.maximum(self.hi, other.hi))

    def axis(self, index: int) -> Interval:
        """Extent of the box along axis 0, 1 or 2."""
        if index not in (0, 1, 2):
            raise ValueError("axis must be 0, 1, or 2")
        return Interval(float(self.lo[index]), float(self.hi[index]))

    def longest_axis(self) -> int:
        return int(np.argmax(self.hi - self.lo))

    def check_intersect(self, ray: Ray, bounds: Interval) -> bool:
        """Slab test: does the ray cross the box within ``bounds``?"""
        if self.is_empty:
            return False
        t_min, t_max = bounds.min, bounds.max
        for lo, hi, o, d in zip(self.lo, self.hi, ray.origin, ray.direction):
            lo, hi, o, d = float(lo), float(hi), float(o), float(d)
            if d == 0.0:
                if o < lo or o > hi:
                    return False
                continue
            t0 = (lo - o) / d
            t1 = (hi - o) / d
            if t0 > t1:
                t0, t1 = t1, t0
            t_min = max(t_min, t0)
            t_max = min(t_max, t1)
            if t_max <= t_min:
                return False
        return True

    def __repr__(self) -> str:
        return f"AABB(lo={self.lo.tolist()}, hi={self.hi.tolist()})"


class Face(enum.Enum):
    """Side of a surface a ray arrived from."""

    OUTSIDE = 0
    INSIDE = 1


@dataclass
class SurfaceInteraction:
    """Where and how a ray met a surface."""

    p: np.ndarray
    n: np.ndarray
    face: Face
    t: float
    mat: Optional["Material"] = None


@dataclass
class ScatterRecord:
    """The ray leaving a surface and the colour it is attenuated by."""

    scattered: Ray
    color: np.ndarray