"""Simulation building blocks: vector-field particles, LBM fluid lattices, PBD cloth, meshes and noise tables."""

__version__ = "0.2.0"

__all__ = [
    "cloth",
    "constraints",
    "core",
    "fluid",
    "geometry",
    "noise",
    "point3d",
    "text",
    "velocity_code",
]