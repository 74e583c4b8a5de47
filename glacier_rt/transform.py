"""Affine transforms, scene-node transform parameters and a matrix stack."""

from __future__ import annotations

import enum
import functools
import itertools
import math
import operator
from typing import Optional

import numpy as np

from glacier_rt.interaction import AABB, Ray, vec3


class Transform:
    """A 4x4 affine transform."""

    __slots__ = ("matrix", "_inverse")

    def __init__(self, matrix=None) -> None:
        self.matrix = np.identity(4) if matrix is None else np.array(matrix, dtype=float)
        if self.matrix.shape != (4, 4):
            raise ValueError("transform matrix must be 4x4")
        self._inverse: Optional[Transform] = None

    @classmethod
    def translate(cls, v) -> "Transform":
        m = np.identity(4)
        m[:3, 3] = np.asarray(v, dtype=float)
        return cls(m)

    @classmethod
    def scale(cls, v) -> "Transform":
        m = np.identity(4)
        m[:3, :3] = np.diag(np.asarray(v, dtype=float))
        return cls(m)

    @classmethod
    def rotate_x(cls, angle: float) -> "Transform":
        c, s = math.cos(angle), math.sin(angle)
        m = np.identity(4)
        m[1, 1], m[1, 2], m[2, 1], m[2, 2] = c, -s, s, c
        return cls(m)

    @classmethod
    def rotate_y(cls, angle: float) -> "Transform":
        c, s = math.cos(angle), math.sin(angle)
        m = np.identity(4)
        m[0, 0], m[0, 2], m[2, 0], m[2, 2] = c, s, -s, c
        return cls(m)

    @classmethod
    def rotate_z(cls, angle: float) -> "Transform":
        c, s = math.cos(angle), math.sin(angle)
        m = np.identity(4)
        m[0, 0], m[0, 1], m[1, 0], m[1, 1] = c, -s, s, c
        return cls(m)

    def __matmul__(self, other: "Transform") -> "Transform":
        return Transform(self.matrix @ other.matrix)

    def inverse(self) -> "Transform":
        """The inverse transform; raises ``numpy.linalg.LinAlgError`` if singular."""
        if self._inverse is None:
            inv = Transform(np.linalg.inv(self.matrix))
            inv._inverse = self
            self._inverse = inv
        return self._inverse

    def point(self, p) -> np.ndarray:
        return self.matrix[:3, :3] @ np.asarray(p, dtype=float) + self.matrix[:3, 3]

    def vector(self, v) -> np.ndarray:
        return self.matrix[:3, :3] @ np.asarray(v, dtype=float)

    def normal(self, n) -> np.ndarray:
        """Transform a surface normal by the inverse transpose."""
        return self.inverse().matrix[:3, :3].T @ np.asarray(n, dtype=float)

    def ray(self, ray: Ray) -> Ray:
        return Ray(self.point(ray.origin), self.vector(ray.direction))

    def box(self, box: AABB) -> AABB:
        """Bounding box of the transformed corners of ``box``."""
        if box.is_empty:
            return AABB.empty()
        corners = [
            self.point(vec3(x, y, z))
            for x, y, z in itertools.product(*zip(box.lo, box.hi))
        ]
        stacked = np.stack(corners)
        return AABB(stacked.min(axis=0), stacked.max(axis=0))

    def __repr__(self) -> str:
        return f"Transform({self.matrix.tolist()})"


class TransformOrder(enum.Enum):
    """Order in which scale, rotation and translation are applied."""

    SRT = 0
    STR = 1
    RST = 2
    RTS = 3
    TSR = 4
    TRS = 5


class RotationOrder(enum.Enum):
    """Order in which the per-axis rotations are applied."""

    XYZ = 0
    XZY = 1
    YXZ = 2
    YZX = 3
    ZXY = 4
    ZYX = 5


_AXIS_ROTATIONS = {
    "X": Transform.rotate_x,
    "Y": Transform.rotate_y,
    "Z": Transform.rotate_z,
}


def _compose(steps) -> Transform:
    """Compose transforms so that the first of ``steps`` is applied first."""
    return functools.reduce(operator.matmul, reversed(list(steps)), Transform())


class SceneTransform:
    """Scale, rotation (radians) and translation parameters of a scene node."""

    def __init__(self) -> None:
        self._translation = vec3(0, 0, 0)
        self._rotation = vec3(0, 0, 0)
        self._scale = vec3(1, 1, 1)
        self._order = TransformOrder.SRT
        self._rotation_order = RotationOrder.XYZ
        self._transform = Transform()

    @property
    def transform(self) -> Transform:
        return self._transform

    @property
    def scale(self) -> np.ndarray:
        return self._scale.copy()

    @property
    def rotation(self) -> np.ndarray:
        return self._rotation.copy()

    @property
    def translation(self) -> np.ndarray:
        return self._translation.copy()

    @property
    def order(self) -> TransformOrder:
        return self._order

    @property
    def rotation_order(self) -> RotationOrder:
        return self._rotation_order

    def s(self, x: float, y: float, z: float) -> None:
        self._scale = vec3(x, y, z)
        self._update()

    def r(self, x: float, y: float, z: float) -> None:
        self._rotation = vec3(x, y, z)
        self._update()

    def t(self, x: float, y: float, z: float) -> None:
        self._translation = vec3(x, y, z)
        self._update()

    def set_order(self, order: TransformOrder) -> None:
        self._order = TransformOrder(order)
        self._update()

    def set_rotation_order(self, order: RotationOrder) -> None:
        self._rotation_order = RotationOrder(order)
        self._update()

    def _update(self) -> None:
        angles = dict(zip("XYZ", self._rotation))
        rotation = _compose(
            _AXIS_ROTATIONS[axis](float(angles[axis])) for axis in self._rotation_order.name
        )
        parts = {
            "S": Transform.scale(self._scale),
            "R": rotation,
            "T": Transform.translate(self._translation),
        }
        self._transform = _compose(parts[step] for step in self._order.name)


class MatrixStack:
    """Stack of transforms whose product gives the current world transform."""

    def __init__(self) -> None:
        self._stack: list[Transform] = []

    def __len__(self) -> int:
        return len(self._stack)

    def push(self, transform: Transform) -> None:
        self._stack.append(transform)

    def pop(self) -> Transform:
        if not self._stack:
            raise IndexError("pop from empty matrix stack")
        return self._stack.pop()

    def reduce(self) -> Transform:
        """Product of all transforms, outermost first."""
        return functools.reduce(operator.matmul, self._stack, Transform())