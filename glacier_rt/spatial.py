"""Spatial acceleration structures for ray-primitive queries."""

from __future__ import annotations

import abc
import math
from typing import Optional, Sequence

from glacier_rt.interaction import (
    AABB,
    Interval,
    Ray,
    SurfaceInteraction,
    normalize,
)
from glacier_rt.primitives import Primitive

# Smallest ray parameter accepted as a hit, to avoid self-intersection.
T_MIN = 0.001


def _world_bounds() -> Interval:
    return Interval(T_MIN, math.inf)


def _to_world(
    interaction: SurfaceInteraction, primitive: Primitive
) -> SurfaceInteraction:
    """Move an object-space hit record into world space."""
    object_to_world = primitive.object_to_world
    interaction.p = object_to_world.point(interaction.p)
    interaction.n = normalize(object_to_world.normal(interaction.n))
    interaction.mat = primitive.material
    return interaction


class SpatialStructure(abc.ABC):
    """A collection of primitives that answers closest-hit queries."""

    @abc.abstractmethod
    def build(self, prims: Sequence[Primitive]) -> None:
        """Take ownership of the primitives to be queried."""

    @abc.abstractmethod
    def intersect(self, ray: Ray) -> Optional[SurfaceInteraction]:
        """Closest world-space hit of ``ray``, or ``None``."""


class PrimList(SpatialStructure):
    """Brute-force structure that tests every primitive."""

    def __init__(self) -> None:
        self.primitives: list[Primitive] = []

    def build(self, prims: Sequence[Primitive]) -> None:
        self.primitives = list(prims)

    def intersect(self, ray: Ray) -> Optional[SurfaceInteraction]:
        closest: Optional[SurfaceInteraction] = None
        bounds = _world_bounds()

        for primitive in self.primitives:
            local_ray = primitive.object_to_world.inverse().ray(ray)
            hit = primitive.intersect(local_ray, bounds)
            if hit is not None and (closest is None or hit.t < closest.t):
                closest = _to_world(hit, primitive)
                bounds.max = min(closest.t, bounds.max)

        return closest


class BVHNode(abc.ABC):
    """Node of a bounding volume hierarchy."""

    @abc.abstractmethod
    def intersect(self, ray: Ray, bounds: Interval) -> Optional[SurfaceInteraction]:
        """Closest hit within the subtree rooted at this node."""

    @abc.abstractmethod
    def aabb(self) -> AABB:
        """World-space bounding box of the subtree."""


class BVHPrim(BVHNode):
    """Leaf node holding a single primitive."""

    def __init__(self, primitive: Primitive) -> None:
        self.primitive = primitive

    def intersect(self, ray: Ray, bounds: Interval) -> Optional[SurfaceInteraction]:
        primitive = self.primitive
        local_ray = primitive.object_to_world.inverse().ray(ray)

        if not primitive.aabb.check_intersect(local_ray, bounds):
            return None

        hit = primitive.intersect(local_ray, bounds)
        if hit is None:
            return None
        return _to_world(hit, primitive)

    def aabb(self) -> AABB:
        return self.primitive.object_to_world.box(self.primitive.aabb)


class BVHBranch(BVHNode):
    """Inner node with two children."""

    def __init__(self, left: BVHNode, right: BVHNode) -> None:
        self.left = left
        self.right = right
        self._bbox = left.aabb().enclosure(right.aabb())

    def intersect(self, ray: Ray, bounds: Interval) -> Optional[SurfaceInteraction]:
        if not self._bbox.check_intersect(ray, bounds):
            return None

        hit_left = self.left.intersect(ray, bounds)
        right_max = hit_left.t if hit_left is not None else bounds.max
        hit_right = self.right.intersect(ray, Interval(bounds.min, right_max))

        if hit_left is None:
            return hit_right
        if hit_right is None:
            return hit_left
        return hit_left if hit_left.t < hit_right.t else hit_right

    def aabb(self) -> AABB:
        return self._bbox


def _build_tree(prims: list[Primitive]) -> BVHNode:
    if len(prims) == 1:
        return BVHPrim(prims[0])
    if len(prims) == 2:
        return BVHBranch(BVHPrim(prims[0]), BVHPrim(prims[1]))

    total = AABB.empty()
    for prim in prims:
        total = total.enclosure(prim.aabb)

    ax = total.longest_axis()
    ordered = sorted(prims, key=lambda prim: prim.aabb.axis(ax).min)

    middle = len(ordered) // 2
    return BVHBranch(_build_tree(ordered[:middle]), _build_tree(ordered[middle:]))


class BVH(SpatialStructure):
    """Bounding volume hierarchy split along the longest axis at the median."""

    def __init__(self) -> None:
        self.root: Optional[BVHNode] = None

    def build(self, prims: Sequence[Primitive]) -> None:
        prims = list(prims)
        self.root = _build_tree(prims) if prims else None

    def intersect(self, ray: Ray) -> Optional[SurfaceInteraction]:
        if self.root is None:
            return None
        return self.root.intersect(ray, _world_bounds())