"""Vectors, matrices, quaternions, command scripting and raster image I/O."""

__version__ = "0.1.0"

__all__ = ["array", "core", "intvec", "matrices", "quat", "raster", "script", "symmat", "vectors"]