"""Virtual camera and render configuration."""

from __future__ import annotations

import enum
import math
import random
from dataclasses import dataclass, field
from typing import Optional, Sequence

import numpy as np

from glacier_rt.interaction import normalize


def _vector(values: Sequence[float]) -> np.ndarray:
    items = [float(v) for v in values]
    if len(items) != 3:
        raise ValueError("look_from, look_at, and up must be 3-element lists")
    return np.array(items, dtype=float)


class Camera:
    """Look-from / look-at / field-of-view camera over an ``nx`` by ``ny`` raster."""

    def __init__(
        self,
        look_from: Sequence[float],
        look_at: Sequence[float],
        up: Sequence[float],
        fov: float,
        nx: int,
        ny: int,
        rng: Optional[random.Random] = None,
    ) -> None:
        look_from = _vector(look_from)
        look_at = _vector(look_at)
        up = _vector(up)
        nx, ny = int(nx), int(ny)
        if nx <= 0 or ny <= 0:
            raise ValueError("raster dimensions must be positive")

        self.nx = nx
        self.ny = ny
        self._rng = rng if rng is not None else random.Random()

        self.origin = look_from
        self.w = normalize(look_from - look_at)
        self.u = normalize(np.cross(up, self.w))
        self.v = np.cross(self.w, self.u)

        aspect = nx / ny
        self.view_height = 2.0 * math.tan(math.radians(float(fov)) / 2.0)
        self.view_width = self.view_height * aspect

        viewport_u = self.u * self.view_width
        viewport_v = -self.v * self.view_height

        self.pixel_u = viewport_u / nx
        self.pixel_v = viewport_v / ny

        self.pixel_origin = (
            self.origin
            - self.w
            - viewport_u / 2.0
            - viewport_v / 2.0
            + 0.5 * (self.pixel_u + self.pixel_v)
        )

    def _check(self, px: int, py: int) -> None:
        if not 0 <= px < self.nx:
            raise IndexError("px must be less than raster width")
        if not 0 <= py < self.ny:
            raise IndexError("py must be less than raster height")

    def p(self, px: int, py: int) -> np.ndarray:
        """World-space centre of pixel ``(px, py)``."""
        self._check(px, py)
        return self.pixel_origin + px * self.pixel_u + py * self.pixel_v

    def sample(self, px: int, py: int) -> np.ndarray:
        """Uniformly random world-space point inside pixel ``(px, py)``."""
        self._check(px, py)
        x = px + self._rng.uniform(-0.5, 0.5)
        y = py + self._rng.uniform(-0.5, 0.5)
        return self.pixel_origin + x * self.pixel_u + y * self.pixel_v


class _Labelled(enum.Enum):
    def __str__(self) -> str:
        return self.label

    @property
    def label(self) -> str:
        return "".join(part.capitalize() for part in self.name.split("_"))


class RenderingMode(_Labelled):
    FULL = 0
    NORMAL_MAP = 1


class SamplingKind(_Labelled):
    CENTER = 0
    UNIFORM_RANDOM = 1


class SpatialKind(_Labelled):
    PRIM_LIST = 0
    BVH = 1

    @property
    def label(self) -> str:
        return "BVH" if self is SpatialKind.BVH else "PrimList"


@dataclass
class Config:
    """Render settings."""

    rendering_mode: RenderingMode = field(default=RenderingMode.FULL)
    sampling_kind: SamplingKind = field(default=SamplingKind.UNIFORM_RANDOM)
    spatial_kind: SpatialKind = field(default=SpatialKind.BVH)
    samples_per_pixel: int = 100
    trace_depth: int = 50