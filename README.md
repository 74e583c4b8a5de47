# glacier_rt

Building blocks for a physically based path tracer, written on top of NumPy:
rays and bounding boxes, scattering materials, affine transforms, ray-surface
intersection for a set of primitives, two acceleration structures and a
pinhole camera with render settings.

## Installation

```
pip install .
```

Install the test extra to run the test suite:

```
pip install ".[test]"
pytest
```

## Modules

- `glacier_rt.interaction`: `vec3`, `normalize`, `Ray` (with `at(t)`),
  `Interval` (with `contains`), `AABB` (`empty()`, `enclosure`, `axis`,
  `longest_axis`, `check_intersect`), the `Face` enum and the records
  `SurfaceInteraction` (`p`, `n`, `face`, `t`, `mat`) and `ScatterRecord`
  (`scattered`, `color`).
- `glacier_rt.materials`: `reflect`, `refract`, `perturb`, the `MaterialKind`
  enum and the materials below.
- `glacier_rt.transform`: `Transform`, a 4x4 affine transform; the
  `TransformOrder` and `RotationOrder` enums; `SceneTransform`; `MatrixStack`.
- `glacier_rt.primitives`: the `PrimitiveKind` enum, the abstract `Primitive`
  and `QuadPrim`, `DiskPrim`, `TrianglePrim`, `CuboidPrim`, `MeshPrim`.
- `glacier_rt.quadrics`: `quadratic_roots`, `SpherePrim` and `TubePrim`.
- `glacier_rt.spatial`: `SpatialStructure`, `PrimList`, and the bounding volume
  hierarchy `BVH` with its nodes `BVHNode`, `BVHPrim` and `BVHBranch`.
- `glacier_rt.camera`: `Camera`, `Config` and the enums `RenderingMode`,
  `SamplingKind` and `SpatialKind`.

## Example

```python
import math

from glacier_rt.camera import Camera
from glacier_rt.interaction import Ray, normalize
from glacier_rt.materials import Lambertian, MirrorSpecular
from glacier_rt.primitives import QuadPrim
from glacier_rt.quadrics import SpherePrim
from glacier_rt.spatial import BVH
from glacier_rt.transform import Transform

ground = QuadPrim((-5.0, 0.0, -5.0), (0.0, 0.0, 10.0), (10.0, 0.0, 0.0))
ground.material = Lambertian((0.8, 0.8, 0.8))

ball = SpherePrim((0.0, 0.0, 0.0), 1.0)
ball.material = MirrorSpecular((0.9, 0.9, 0.9))
ball.object_to_world = Transform.translate((0.0, 1.0, 0.0)) @ Transform.rotate_y(math.pi / 4)

world = BVH()
world.build([ground, ball])

camera = Camera(
    look_from=(0.0, 2.0, 6.0),
    look_at=(0.0, 1.0, 0.0),
    up=(0.0, 1.0, 0.0),
    fov=45.0,
    nx=160,
    ny=90,
)

target = camera.p(80, 45)
ray = Ray(camera.origin, normalize(target - camera.origin))
hit = world.intersect(ray)
if hit is not None:
    print(hit.t, hit.p, hit.n, hit.face)
    record = hit.mat.scatter(ray, hit)
    if record is not None:
        print(record.scattered.direction, record.color)
```

Primitives intersect rays in their own object space. Each primitive has an
`object_to_world` transform, a `material` and an object-space `aabb`.
`PrimList` and `BVH` map the world ray into object space, keep hits with
`t >= 0.001`, and return the closest hit. Its point and normal are moved back
to world space and its `mat` is set to the primitive's material. `BVH` splits
the primitives at the median along the longest axis of their combined box.

## Materials

- `Lambertian(color, rng=None)`: cosine-weighted diffuse scattering around the
  normal.
- `Specular(color, phong, rng=None)`: glossy scattering around the mirror
  direction. A larger `phong` gives a narrower lobe.
- `MirrorSpecular(color)`: perfect mirror reflection.
- `Dielectric(eta, rng=None)`: refraction with index ratio `eta`. It reflects
  on total internal reflection or when Schlick's reflectance wins a random draw.
  Its colour is always white.
- `Emissive(color)`: does not scatter. `emitted()` returns its colour.

`Material.scatter` returns `None` when a ray is absorbed. Colours must have three
components, otherwise `ValueError` is raised. The materials that sample
directions take an optional `random.Random`, which gives reproducible results.

## Primitives

- `QuadPrim(q, u, v)`: a parallelogram with corner `q` and edges `u` and `v`.
- `TrianglePrim(q, u, v)`: a triangle with corner `q` and edges `u` and `v`.
- `DiskPrim(q, u, v)`: an ellipse centred at `q` with semi-axes `u` and `v`.
- `CuboidPrim(o, x, y, z)`: a parallelepiped built from six quads.
- `MeshPrim(vertices, triangles)`: vertex positions plus index triples. Bad
  indices raise `IndexError` or `ValueError`.
- `SpherePrim(center, radius)`.
- `TubePrim(center, radius, height, top=True, bottom=True)`: a cylinder along
  z. Each end cap is optional.

Hits record which `Face` was struck. The normal always faces against the
incoming ray.

## Transforms

`Transform` offers the constructors `translate`, `scale`, `rotate_x`,
`rotate_y` and `rotate_z`, with angles in radians. It composes with the `@`
operator (`a @ b` applies `b` first). Its methods are `inverse()`, `point`,
`vector`, `normal` (inverse transpose), `ray` and `box`.

`SceneTransform` holds scale, rotation and translation. They are set with
`s(x, y, z)`, `r(x, y, z)` (radians) and `t(x, y, z)`. `set_order` and
`set_rotation_order` choose how the parts are combined. The result is read
from its `transform` property; `TransformOrder.SRT` applies scale, then
rotation, then translation.

`MatrixStack` supports `push` and `pop`. `reduce()` returns the product of the
stacked transforms, outermost first.

## Camera and settings

`Camera(look_from, look_at, up, fov, nx, ny, rng=None)` takes `fov` in degrees.
`p(px, py)` gives the world-space centre of a pixel and `sample(px, py)` gives
a random point inside it. Pixel indices outside the raster raise `IndexError`.

`Config` is a dataclass with these fields and defaults:

- `rendering_mode = RenderingMode.FULL`, the other choice being `NORMAL_MAP`;
- `sampling_kind = SamplingKind.UNIFORM_RANDOM`, the other choice being `CENTER`;
- `spatial_kind = SpatialKind.BVH`, the other choice being `PRIM_LIST`;
- `samples_per_pixel = 100`;
- `trace_depth = 50`.

`str()` of these enum members gives `"Full"`, `"NormalMap"`, `"Center"`,
`"UniformRandom"`, `"PrimList"` and `"BVH"`.

## What this package does not do

It has no scene graph of named nodes and no path-tracing render loop. It does
not write image files, and it has no command-line program. `Config` records
render settings, but nothing in the package consumes it. To produce an image,
drive the camera, a spatial structure and the materials yourself, as in the
example above.