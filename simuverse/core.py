"""Simulation kinds, GPU-facing uniform records and CPU-side geometry helpers."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from enum import IntEnum

MAX_PARTICLE_COUNT = 205000

Vec3 = tuple[float, float, float]
Vec4 = tuple[float, float, float, float]


class SimuType(IntEnum):
    """The kinds of simulation the application can show."""

    FIELD = 0
    FLUID = 1
    NOISE = 2
    PB_DYNAMIC = 3
    D3_FLUID = 4
    CAD = 5


class FieldAnimationType(IntEnum):
    """Preset velocity fields and fluid set-ups."""

    BASIC = 0
    JULIA_SET = 1
    SPIRAL = 2
    BLACK_HOLE = 3
    POISEUILLE = 4
    LID_DRIVEN_CAVITY = 5
    CUSTOM = 6

    @classmethod
    def from_u32(cls, ty: int) -> FieldAnimationType:
        """Map a numeric selector to a type; unknown values mean CUSTOM."""
        if 0 <= ty <= 5:
            return cls(ty)
        return cls.CUSTOM


class ParticleColorType(IntEnum):
    """How trajectory particles are coloured."""

    MOVEMENT_ANGLE = 0
    SPEED = 1
    UNIFORM = 2

    @classmethod
    def from_u32(cls, ty: int) -> ParticleColorType:
        """Map a numeric selector to a colour type; unknown values mean UNIFORM."""
        if ty == 0:
            return cls.MOVEMENT_ANGLE
        if ty == 1:
            return cls.SPEED
        return cls.UNIFORM


@dataclass
class FieldUniform:
    """Parameters describing a velocity field lattice laid over the canvas."""

    lattice_size: tuple[int, int]
    lattice_pixel_size: tuple[float, float]
    canvas_size: tuple[int, int]
    proj_ratio: tuple[float, float]
    ndc_pixel: tuple[float, float]
    # 0: pixel speed (field simulator); 1: lattice speed (fluid simulator)
    speed_ty: int = 0


@dataclass
class ParticleUniform:
    """Parameters shared by all trajectory particles."""

    color: Vec4
    num: tuple[int, int]
    point_size: int
    life_time: float
    fade_out_factor: float
    speed_factor: float
    color_ty: int = ParticleColorType.MOVEMENT_ANGLE
    is_only_update_pos: int = 0


@dataclass(frozen=True)
class TrajectoryParticle:
    """A particle that traces the velocity field; all zero by default."""

    pos: tuple[float, float] = (0.0, 0.0)
    pos_initial: tuple[float, float] = (0.0, 0.0)
    life_time: float = 0.0
    fade: float = 0.0


@dataclass
class Pixel:
    """One canvas pixel of the particle trail image."""

    alpha: float
    speed: float
    rho: float


def get_particles_data(
    canvas_size: tuple[int, int],
    count: int,
    life_time: float,
    rng: random.Random | None = None,
) -> tuple[tuple[int, int], tuple[int, int, int], list[TrajectoryParticle]]:
    """Lay out about ``count`` particles over the canvas.

    Returns the particle grid size, the compute workgroup count and the
    particle list, padded with zero particles up to ``MAX_PARTICLE_COUNT``.
    """
    canvas_x, canvas_y = canvas_size
    ratio = canvas_x / canvas_y
    x = math.ceil(math.sqrt(count * ratio))
    width = int(x)
    height = int(math.ceil(x * (1.0 / ratio)))
    workgroup_count = ((width + 15) // 16, (height + 15) // 16, 1)

    particles = init_trajectory_particles(canvas_size, (width, height), life_time, rng)
    if len(particles) < MAX_PARTICLE_COUNT:
        particles.extend([TrajectoryParticle()] * (MAX_PARTICLE_COUNT - len(particles)))
    return (width, height), workgroup_count, particles


def init_trajectory_particles(
    canvas_size: tuple[int, int],
    num: tuple[int, int],
    life_time: float,
    rng: random.Random | None = None,
) -> list[TrajectoryParticle]:
    """Scatter a ``num`` grid of particles over the canvas with random jitter."""
    width, height = num
    if width < 2 or height < 2:
        raise ValueError("particle grid must be at least 2x2")
    if rng is None:
        rng = random.Random()

    step_x = canvas_size[0] / (width - 1)
    step_y = canvas_size[1] / (height - 1)
    life_max = 1.0 if life_time <= 0.0 else life_time

    particles: list[TrajectoryParticle] = []
    for x in range(width):
        pixel_x = step_x * x
        for y in range(height):
            pos = (
                pixel_x + rng.uniform(-step_x, step_x),
                step_y * y + rng.uniform(-step_y, step_y),
            )
            if life_time <= 1.0:
                pos_initial = (rng.random() * step_x, pos[1])
                life = 0.0
            else:
                pos_initial = pos
                life = rng.uniform(0.0, life_max)
            particles.append(TrajectoryParticle(pos, pos_initial, life, 0.0))
    return particles


def generate_circle_plane(r: float, fan_segment: int) -> tuple[list[Vec3], list[int]]:
    """Triangulate a disk of radius ``r`` as a fan written out as a triangle list."""
    z = 0.0
    vertices: list[Vec3] = [(0.0, 0.0, z), (r, 0.0, z)]
    indices: list[int] = []
    for i in range(1, fan_segment + 1):
        angle = math.tau / fan_segment * i
        vertices.append((r * math.cos(angle), r * math.sin(angle), z))
        indices.extend((0, i, 1 if i == fan_segment else i + 1))
    return vertices, indices


def generate_disc_plane(
    min_r: float, max_r: float, fan_segment: int
) -> tuple[list[tuple[Vec3, Vec4]], list[int]]:
    """Triangulate a ring between ``min_r`` and ``max_r``.

    Each vertex is a ``(position, tangent)`` pair; the tangent runs along the
    ring, perpendicular to the radius.
    """
    if fan_segment < 1:
        raise ValueError("fan_segment must be at least 1")
    z = 0.0
    start_tangent: Vec4 = (0.0, 1.0, z, 1.0)
    vertices: list[tuple[Vec3, Vec4]] = [
        ((min_r, 0.0, z), start_tangent),
        ((max_r, 0.0, z), start_tangent),
    ]
    indices: list[int] = []
    step = math.tau / fan_segment
    for i in range(1, fan_segment):
        angle = step * i
        tangent_angle = angle + math.pi / 2
        tangent: Vec4 = (math.cos(tangent_angle), math.sin(tangent_angle), 0.0, 1.0)
        cos_a, sin_a = math.cos(angle), math.sin(angle)
        vertices.append(((min_r * cos_a, min_r * sin_a, z), tangent))
        vertices.append(((max_r * cos_a, max_r * sin_a, z), tangent))
        index = i * 2
        indices.extend((index - 2, index - 1, index, index, index - 1, index + 1))
    index = (fan_segment - 1) * 2
    indices.extend((index, index + 1, 0, 0, index + 1, 1))
    return vertices, indices