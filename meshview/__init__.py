"""Vector and matrix math, a Wavefront OBJ mesh reader and viewer interaction state."""

__version__ = "0.1.0"
__all__ = ["vectors", "matrices", "matrix4", "mesh", "viewer"]