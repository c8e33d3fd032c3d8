"""Cloth particles, position-based dynamics constraints and their graph colouring."""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TypeVar

Vec4 = tuple[float, float, float, float]

# Constraints are coloured with at most this many independent groups.
MAX_GROUPS = 16

_ONE_THIRD = 1.0 / 3.0


@dataclass
class Particle:
    """One cloth particle as laid out for the solver."""

    pos: Vec4
    old_pos: Vec4
    accelerate: Vec4
    # u, v, inverse mass, padding
    uv_mass: Vec4
    # indices of four neighbouring particles, used to compute normals
    connect: tuple[int, int, int, int] = (0, 0, 0, 0)


@dataclass(frozen=True)
class StretchConstraint:
    """A distance constraint between two particles."""

    rest_length: float
    lambda_: float
    particle0: int
    particle1: int

    def shared_vertices(self, other: StretchConstraint) -> bool:
        """Whether the two constraints act on a common particle."""
        return bool({self.particle0, self.particle1} & {other.particle0, other.particle1})


@dataclass(frozen=True)
class BendingConstraint:
    """A triangle bending constraint: vertex ``v`` against base ``b0``-``b1``."""

    v: int
    b0: int
    b1: int
    h0: float

    def shared_vertices(self, other: BendingConstraint) -> bool:
        """Whether the two constraints act on a common particle."""
        return bool({self.v, self.b0, self.b1} & {other.v, other.b0, other.b1})

    def __repr__(self) -> str:
        return f"({self.v}, {self.b0}, {self.b1})"


@dataclass(frozen=True)
class BendingDynamicUniform:
    """Per-group, per-iteration parameters of the bending solver."""

    offset: int
    max_num_x: int
    # number of constraints in the current colour group
    group_len: int
    # reciprocal of the iteration count
    invert_iter: float


@dataclass(frozen=True)
class MeshColoring:
    """One colour group of constraints within the flattened constraint list."""

    offset: int
    max_num_x: int
    max_num_y: int
    group_len: int
    thread_group: tuple[int, int]

    def push_constants(self) -> list[int]:
        """The group description as four integers."""
        return [self.offset, self.max_num_x, self.max_num_y, self.group_len]

    def bending_dynamic_uniform(self, iter_count: int) -> BendingDynamicUniform:
        """Bending solver parameters for iteration ``iter_count`` (zero based)."""
        return BendingDynamicUniform(
            offset=self.offset,
            max_num_x=self.max_num_x,
            group_len=self.group_len,
            invert_iter=1.0 / (iter_count + 1),
        )


@dataclass
class ClothUniform:
    """Global parameters of the cloth solver."""

    num_x: int
    num_y: int
    gravity: float
    damping: float
    compliance: float
    stiffness: float
    dt: float


_C = TypeVar("_C", StretchConstraint, BendingConstraint)


def _join_group(
    groups: list[list[_C]], colours: list[int], gathered: Sequence[int], c: _C
) -> None:
    """Put ``c`` in the lowest colour group not used by its neighbours."""
    for g in range(MAX_GROUPS):
        if g not in gathered:
            colours.append(g)
            if len(groups) <= g:
                groups.append([])
            groups[g].append(c)
            return
    raise ValueError(f"constraint needs more than {MAX_GROUPS} colour groups")


def _colour_by_window(constraints: Sequence[_C], window: int) -> list[list[_C]]:
    """Colour constraints, comparing each with the ``window - 1`` before it."""
    if not constraints:
        raise ValueError("no constraints to colour")
    groups: list[list[_C]] = [[constraints[0]]]
    colours: list[int] = [0]
    for i in range(1, len(constraints)):
        c = constraints[i]
        gathered = [
            colours[i - j]
            for j in range(1, min(window, i + 1))
            if c.shared_vertices(constraints[i - j])
        ]
        _join_group(groups, colours, gathered, c)
    return groups


def _flatten(groups: list[list[_C]]) -> tuple[list[MeshColoring], list[_C]]:
    colorings: list[MeshColoring] = []
    flat: list[_C] = []
    offset = 0
    for group in groups:
        group_len = len(group)
        colorings.append(
            MeshColoring(
                offset=offset,
                max_num_x=0,
                max_num_y=0,
                group_len=group_len,
                thread_group=((group_len + 31) // 32, 1),
            )
        )
        flat.extend(group)
        offset += group_len
    return colorings, flat


def _distance(lh: Sequence[float], rh: Sequence[float]) -> float:
    return math.sqrt(sum((a - b) * (a - b) for a, b in zip(lh[:3], rh[:3])))


def get_h0(v: Particle, b0: Particle, b1: Particle) -> float:
    """Rest distance between ``v`` and the centroid of the triangle (v, b0, b1)."""
    centroid = tuple((v.pos[k] + b0.pos[k] + b1.pos[k]) * _ONE_THIRD for k in range(3))
    return _distance(v.pos, centroid)


def generate_bend_constraints(
    horizontal_num: int, vertical_num: int
) -> tuple[list[MeshColoring], list[BendingConstraint]]:
    """Straight-line bending constraints along rows, columns and both diagonals."""
    constraints: list[BendingConstraint] = []
    for h in range(vertical_num):
        offset_y = h * horizontal_num
        for w in range(horizontal_num):
            v = offset_y + w
            inner_w = 0 < w < horizontal_num - 1
            if inner_w:
                constraints.append(BendingConstraint(v, v - 1, v + 1, 0.0))
            if 0 < h < vertical_num - 1:
                constraints.append(
                    BendingConstraint(v, v - horizontal_num, v + horizontal_num, 0.0)
                )
                if inner_w:
                    constraints.append(
                        BendingConstraint(
                            v, v - horizontal_num - 1, v + horizontal_num + 1, 0.0
                        )
                    )
                    constraints.append(
                        BendingConstraint(
                            v, v - horizontal_num + 1, v + horizontal_num - 1, 0.0
                        )
                    )
    groups = _colour_by_window(constraints, horizontal_num * 4 * 4)
    return _flatten(groups)


def _gen_bend_constraint(
    particles: Sequence[Particle], horizontal_num: int, v: int, is_vertical: bool
) -> BendingConstraint:
    if is_vertical:
        b0 = v + 2 * horizontal_num
        b1 = b0 + 1
    else:
        b0 = v - 2
        b1 = b0 + horizontal_num
    h0 = get_h0(particles[v], particles[b0], particles[b1])
    return BendingConstraint(v, b0, b1, h0)


def generate_bend_constraints2(
    horizontal_num: int, vertical_num: int, particles: Sequence[Particle]
) -> tuple[list[MeshColoring], list[BendingConstraint]]:
    """Triangle bending constraints across the dihedral angles of the cloth mesh."""
    constraints: list[BendingConstraint] = []
    for h in range(vertical_num - 1):
        offset_y = h * horizontal_num
        for w in range(1, horizontal_num):
            if w + 1 < horizontal_num:
                v = offset_y + w + 1
                constraints.append(
                    _gen_bend_constraint(particles, horizontal_num, v, False)
                )
            if h == 0:
                continue
            v = offset_y + w - 1 - horizontal_num
            constraints.append(_gen_bend_constraint(particles, horizontal_num, v, True))
    groups = _colour_by_window(constraints, horizontal_num * 6)
    return _flatten(groups)


def _stretch(particles: Sequence[Particle], index0: int, index1: int) -> StretchConstraint:
    rest_length = _distance(particles[index0].pos, particles[index1].pos)
    return StretchConstraint(
        rest_length=rest_length, lambda_=0.0, particle0=index0, particle1=index1
    )


def generate_stretch_constraints(
    horizontal_num: int, vertical_num: int, particles: Sequence[Particle]
) -> tuple[list[MeshColoring], list[StretchConstraint]]:
    """Distance constraints along the cloth edges and diagonals, graph coloured."""
    constraints: list[StretchConstraint] = []
    for h in range(vertical_num):
        offset_y = h * horizontal_num
        for w in range(horizontal_num):
            index0 = offset_y + w
            if h == 0:
                if w < horizontal_num - 1:
                    constraints.append(_stretch(particles, index0, index0 + 1))
                continue
            top = index0 - horizontal_num
            constraints.append(_stretch(particles, index0, top))
            if w > 0:
                constraints.append(_stretch(particles, index0, top - 1))
                constraints.append(_stretch(particles, index0, index0 - 1))
                constraints.append(_stretch(particles, top, index0 - 1))
    return _group_distance_constraints(horizontal_num, constraints)


def _group_distance_constraints(
    horizontal_num: int, constraints: Sequence[StretchConstraint]
) -> tuple[list[MeshColoring], list[StretchConstraint]]:
    if not constraints:
        raise ValueError("no constraints to colour")
    groups: list[list[StretchConstraint]] = [[constraints[0]]]
    colours: list[int] = [0]
    first_row_num = horizontal_num - 1
    window = horizontal_num * 2 * 4
    for i in range(1, len(constraints)):
        c = constraints[i]
        gathered: list[int]
        if i < first_row_num:
            # along the first row only the two previous constraints can touch c
            gathered = colours[-2:]
        else:
            gathered = [
                colours[i - j]
                for j in range(1, min(window, i + 1))
                if c.shared_vertices(constraints[i - j])
            ]
        _join_group(groups, colours, gathered, c)
    return _flatten(groups)


GroupGatherer = Callable[[int], list[int]]