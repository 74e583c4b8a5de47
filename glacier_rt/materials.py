"""Surface materials: how rays scatter or emit at a hit point."""

from __future__ import annotations

import enum
import math
import random
from typing import Optional, Sequence

import numpy as np

from glacier_rt.interaction import (
    Face,
    Ray,
    ScatterRecord,
    SurfaceInteraction,
    normalize,
    vec3,
)


def reflect(v, n) -> np.ndarray:
    """Mirror ``v`` about the unit normal ``n``."""
    v = np.asarray(v, dtype=float)
    n = np.asarray(n, dtype=float)
    return v - 2.0 * float(np.dot(v, n)) * n


def refract(v, n, ratio: float) -> np.ndarray:
    """Refract unit vector ``v`` through unit normal ``n`` with index ratio ``ratio``."""
    v = np.asarray(v, dtype=float)
    n = np.asarray(n, dtype=float)
    cos_theta = min(float(-np.dot(v, n)), 1.0)
    perp = ratio * (v + cos_theta * n)
    parallel = -math.sqrt(abs(1.0 - float(np.dot(perp, perp)))) * n
    return perp + parallel


def perturb(direction, alpha: float, beta: float) -> np.ndarray:
    """Tilt ``direction`` by polar angle ``alpha`` at azimuth ``beta``."""
    w = normalize(direction)
    helper = vec3(1, 0, 0) if abs(w[0]) < 0.9 else vec3(0, 1, 0)
    u = normalize(np.cross(helper, w))
    v = np.cross(w, u)
    return math.cos(alpha) * w + math.sin(alpha) * (math.cos(beta) * u + math.sin(beta) * v)


def _color(color: Sequence[float], owner: str) -> np.ndarray:
    values = [float(c) for c in color]
    if len(values) != 3:
        raise ValueError(f"{owner} color must be a 3-element list")
    return np.array(values, dtype=float)


class MaterialKind(enum.Enum):
    NULL = 0
    LAMBERTIAN = 1
    SPECULAR = 2
    MIRROR_SPECULAR = 3
    DIELECTRIC = 4
    EMISSIVE = 5


class Material:
    """Base material: absorbs every ray."""

    kind: MaterialKind = MaterialKind.NULL

    def scatter(self, incident: Ray, interaction: SurfaceInteraction) -> Optional[ScatterRecord]:
        return None


class Lambertian(Material):
    """Pure diffuse material."""

    kind = MaterialKind.LAMBERTIAN

    def __init__(self, color: Sequence[float], rng: Optional[random.Random] = None) -> None:
        self.color = _color(color, "Lambertian")
        self._rng = rng if rng is not None else random.Random()

    def scatter(self, incident: Ray, interaction: SurfaceInteraction) -> ScatterRecord:
        x1 = self._rng.random()
        x2 = self._rng.random()
        alpha = math.sqrt(math.acos(1.0 - x1))
        beta = 2.0 * math.pi * x2
        direction = perturb(interaction.n, alpha, beta)
        return ScatterRecord(Ray(interaction.p, direction), self.color.copy())


class Specular(Material):
    """Glossy reflector whose lobe width is set by a Phong exponent."""

    kind = MaterialKind.SPECULAR

    def __init__(
        self, color: Sequence[float], phong: float, rng: Optional[random.Random] = None
    ) -> None:
        self.color = _color(color, "Specular")
        self.phong = float(phong)
        self._rng = rng if rng is not None else random.Random()

    def scatter(self, incident: Ray, interaction: SurfaceInteraction) -> ScatterRecord:
        x1 = self._rng.random()
        x2 = self._rng.random()
        exponent = 1.0 / (self.phong + 1.0)
        alpha = math.acos((1.0 - x1) ** exponent)
        beta = 2.0 * math.pi * x2
        r = reflect(incident.direction, interaction.n)
        direction = perturb(r, alpha, beta)
        return ScatterRecord(Ray(interaction.p, direction), self.color.copy())


class MirrorSpecular(Material):
    """Perfect mirror."""

    kind = MaterialKind.MIRROR_SPECULAR

    def __init__(self, color: Sequence[float]) -> None:
        self.color = _color(color, "MirrorSpecular")

    def scatter(self, incident: Ray, interaction: SurfaceInteraction) -> ScatterRecord:
        r = reflect(incident.direction, interaction.n)
        return ScatterRecord(Ray(interaction.p, r), self.color.copy())


def _reflectance(cosine: float, ri: float) -> float:
    """Schlick's approximation of Fresnel reflectance."""
    r0 = ((1.0 - ri) / (1.0 + ri)) ** 2
    return r0 + (1.0 - r0) * (1.0 - cosine) ** 5


class Dielectric(Material):
    """Refractive material with index ratio ``eta``."""

    kind = MaterialKind.DIELECTRIC

    def __init__(self, eta: float, rng: Optional[random.Random] = None) -> None:
        self.eta = float(eta)
        self._rng = rng if rng is not None else random.Random()

    def scatter(self, incident: Ray, interaction: SurfaceInteraction) -> ScatterRecord:
        entering = interaction.face is Face.OUTSIDE
        n = interaction.n
        ri = self.eta if entering else 1.0 / self.eta

        l = normalize(incident.direction)
        cos_theta = min(float(-np.dot(l, n)), 1.0)
        sin_theta = math.sqrt(max(0.0, 1.0 - cos_theta * cos_theta))

        cannot_refract = ri * sin_theta > 1.0
        schlick = _reflectance(cos_theta, ri) > self._rng.random()

        if cannot_refract or schlick:
            direction = reflect(l, n)
        else:
            direction = refract(l, n, ri)
        return ScatterRecord(Ray(interaction.p, direction), vec3(1, 1, 1))


class Emissive(Material):
    """Light-emitting material; it does not scatter."""

    kind = MaterialKind.EMISSIVE

    def __init__(self, color: Sequence[float]) -> None:
        self.color = _color(color, "Emissive")

    def emitted(self) -> np.ndarray:
        return self.color.copy()