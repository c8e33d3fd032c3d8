"""Cloth fabric generation: mesh, particles and solver constraints."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .constraints import (
    BendingConstraint,
    MeshColoring,
    Particle,
    StretchConstraint,
    generate_bend_constraints2,
    generate_stretch_constraints,
)

# Gravity-like acceleration given to each particle; too small makes the cloth float.
_ACCELERATE = (0.0, -3.98, 0.0, 0.11)

# Inverse masses: pinned top corners, border particles, interior particles.
_PINNED_INV_MASS = 0.0
_BORDER_INV_MASS = 0.2
_INTERIOR_INV_MASS = 0.1


@dataclass
class ClothFabric:
    """A rectangular cloth of ``horizontal_num`` by ``vertical_num`` particles.

    Every interior vertex joins four or eight identical triangles that meet
    isotropically in x and y, which keeps the behaviour symmetric.
    ``vertices`` holds the grid index ``(w, h, 0)`` of each particle.
    """

    horizontal_num: int
    vertical_num: int
    vertices: list[tuple[int, int, int]]
    indices: list[int]
    particles: list[Particle]
    stretch_constraints: tuple[list[MeshColoring], list[StretchConstraint]]
    bend_constraints: tuple[list[MeshColoring], list[BendingConstraint]]


def _mesh(horizontal_num: int, vertical_num: int) -> tuple[list[tuple[int, int, int]], list[int]]:
    vertices: list[tuple[int, int, int]] = []
    indices: list[int] = []
    for h in range(vertical_num):
        offset = horizontal_num * h
        for w in range(horizontal_num):
            vertices.append((w, h, 0))
            if h == 0 or w == 0:
                continue
            current = offset + w
            left = current - 1
            top = current - horizontal_num
            if h % 2 == w % 2:
                indices.extend((top, top - 1, left, left, current, top))
            else:
                indices.extend((current, top, top - 1, top - 1, left, current))
    return vertices, indices


def _inverse_mass(w: int, h: int, horizontal_num: int, vertical_num: int) -> float:
    if h == 0 and (w == 0 or w == horizontal_num - 1):
        return _PINNED_INV_MASS
    if w == 0 or w == horizontal_num - 1 or h == vertical_num - 1:
        return _BORDER_INV_MASS
    return _INTERIOR_INV_MASS


def gen_fabric(
    horizontal_num: int,
    vertical_num: int,
    horizontal_pixel: float,
    vertical_pixel: float,
    a_pixel_on_ndc: float,
) -> ClothFabric:
    """Build a cloth centred at the origin spanning the given pixel size.

    The two top corners are pinned (zero inverse mass).
    """
    if horizontal_num < 3 or vertical_num < 2:
        raise ValueError("cloth needs at least 3 particles per row and 2 rows")

    vertices, indices = _mesh(horizontal_num, vertical_num)

    horizontal_step = horizontal_pixel / (horizontal_num - 1) * a_pixel_on_ndc
    vertical_step = vertical_pixel / (vertical_num - 1) * a_pixel_on_ndc
    uv_x_step = 1.0 / (horizontal_num - 1)
    uv_y_step = 1.0 / (vertical_num - 1)
    tl_x = -horizontal_step * ((horizontal_num - 1) / 2.0)
    tl_y = vertical_step * ((vertical_num - 1) / 2.0)

    particles: list[Particle] = []
    for h in range(vertical_num):
        for w in range(horizontal_num):
            pos = (tl_x + horizontal_step * w, tl_y - vertical_step * h, 0.0, 0.0)
            inv_mass = _inverse_mass(w, h, horizontal_num, vertical_num)
            particles.append(
                Particle(
                    pos=pos,
                    old_pos=pos,
                    accelerate=_ACCELERATE,
                    uv_mass=(uv_x_step * w, uv_y_step * h, inv_mass, 0.0),
                )
            )

    connect_particles(particles, horizontal_num, vertical_num)

    stretch = generate_stretch_constraints(horizontal_num, vertical_num, particles)
    bend = generate_bend_constraints2(horizontal_num, vertical_num, particles)

    return ClothFabric(
        horizontal_num=horizontal_num,
        vertical_num=vertical_num,
        vertices=vertices,
        indices=indices,
        particles=particles,
        stretch_constraints=stretch,
        bend_constraints=bend,
    )


def _neighbours(index: int, w: int, h: int, hn: int, vn: int) -> tuple[int, int, int, int]:
    up, down, left, right = index - hn, index + hn, index - 1, index + 1
    last_w, last_h = hn - 1, vn - 1
    if h == 0:
        if w == 0:
            return (right, down, right, down)
        if w == last_w:
            return (down, left, down, left)
        return (right, down, down, left)
    if h == last_h:
        if w == 0:
            return (up, right, up, right)
        if w == last_w:
            return (left, up, left, up)
        return (left, up, up, right)
    if w == 0:
        return (up, right, right, down)
    if w == last_w:
        return (down, left, left, up)
    return (up, right, down, left)


def connect_particles(
    particles: Sequence[Particle], horizontal_num: int, vertical_num: int
) -> None:
    """Record in each particle the four neighbours used to compute its normal."""
    if len(particles) != horizontal_num * vertical_num:
        raise ValueError("particle count does not match the grid size")
    for h in range(vertical_num):
        for w in range(horizontal_num):
            index = h * horizontal_num + w
            particles[index].connect = _neighbours(
                index, w, h, horizontal_num, vertical_num
            )