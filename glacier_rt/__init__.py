"""Path tracing building blocks: rays, materials, transforms, primitives, acceleration structures and a camera."""

__version__ = "1.0.0"
__all__ = [
    "interaction",
    "materials",
    "transform",
    "primitives",
    "quadrics",
    "spatial",
    "camera",
]