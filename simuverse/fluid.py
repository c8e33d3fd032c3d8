"""Lattice Boltzmann (D2Q9) fluid set-up: uniforms, lattice materials and edits."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import IntEnum

from .core import FieldAnimationType

OBSTACLE_RADIUS = 28.0

# D2Q9 lattice directions:
# 6 2 5
# 3 0 1
# 7 4 8
# Each entry: direction x, direction y, weight, maximum value.
_E_W_MAX: tuple[tuple[float, float, float, float], ...] = (
    (0.0, 0.0, 0.444444, 0.6),
    (1.0, 0.0, 0.111111, 0.2222),
    (0.0, -1.0, 0.111111, 0.2222),
    (-1.0, 0.0, 0.111111, 0.2222),
    (0.0, 1.0, 0.111111, 0.2222),
    (1.0, -1.0, 0.0277777, 0.1111),
    (-1.0, -1.0, 0.0277777, 0.1111),
    (-1.0, 1.0, 0.0277777, 0.1111),
    (1.0, 1.0, 0.0277777, 0.1111),
)

_INVERSED_DIRECTION: tuple[int, ...] = (0, 3, 4, 1, 2, 7, 8, 5, 6)

# Byte size of one lattice cell record on the GPU.
CELL_BYTES = 16


@dataclass(frozen=True)
class LbmUniform:
    """Relaxation parameters and the D2Q9 direction tables."""

    tau: float
    omega: float
    # 0: poiseuille-like initialisation, 1: lid driven cavity
    fluid_ty: int
    # offset between directions in the structure-of-arrays lattice data
    soa_offset: int
    e_w_max: tuple[tuple[float, float, float, float], ...] = _E_W_MAX
    inversed_direction: tuple[int, ...] = _INVERSED_DIRECTION

    @classmethod
    def from_tau(cls, tau: float, fluid_ty: int, soa_offset: int) -> LbmUniform:
        """Build the uniform for relaxation time ``tau``."""
        return cls(tau=tau, omega=1.0 / tau, fluid_ty=fluid_ty, soa_offset=soa_offset)


class LatticeType(IntEnum):
    """Material of a lattice cell."""

    BULK = 1
    BOUNDARY = 2
    INLET = 3
    OBSTACLE = 4
    OUTLET = 5
    EXTERNAL_FORCE = 6
    GHOST = 7


@dataclass(frozen=True)
class LatticeInfo:
    """Material and imposed velocity of one lattice cell."""

    material: int
    # dynamic iteration count after which the material changes back
    block_iter: int = -1
    vx: float = 0.0
    vy: float = 0.0


def is_sd_sphere(p: tuple[float, float], r: float) -> bool:
    """Whether the offset ``p`` lies inside or on a circle of radius ``r``."""
    return math.hypot(p[0], p[1]) <= r


def init_lattice_material(
    width: int, height: int, depth: int, ty: FieldAnimationType
) -> list[LatticeInfo]:
    """Initial cell materials for a lattice, ordered z, then y, then x."""
    nx, ny, nz = width, height, depth
    s0 = (nx / 7.0 - OBSTACLE_RADIUS, ny / 2.0)
    s1 = (nx / 5.0, ny / 4.0)
    s2 = (nx / 5.0, ny * 0.75)

    def cell(x: int, y: int, z: int) -> LatticeInfo:
        material = LatticeType.BULK
        vx = 0.0
        if ty == FieldAnimationType.CUSTOM:
            if x == 0 or x == nx - 1 or y == 0 or y == ny - 1:
                material = LatticeType.BOUNDARY
        elif ty == FieldAnimationType.LID_DRIVEN_CAVITY:
            if x == 0 or x == nx - 1 or y == ny - 1:
                material = LatticeType.BOUNDARY
            elif y == 0:
                material = LatticeType.GHOST
            elif y == 1:
                material = LatticeType.EXTERNAL_FORCE
                vx = 0.13
        elif ty == FieldAnimationType.POISEUILLE:
            if y == 0 or y == ny - 1 or (nz > 1 and (z == 0 or z == nz - 1)):
                material = LatticeType.BOUNDARY
            elif x == 0 or x == nx - 1:
                material = LatticeType.GHOST
            elif x == 1:
                material = LatticeType.INLET
                vx = 0.12
            elif x == nx - 2:
                material = LatticeType.OUTLET
            elif any(
                is_sd_sphere((x - s[0], y - s[1]), OBSTACLE_RADIUS) for s in (s0, s1, s2)
            ):
                material = LatticeType.OBSTACLE
        return LatticeInfo(material=int(material), block_iter=-1, vx=vx, vy=0.0)

    return [cell(x, y, z) for z in range(nz) for y in range(ny) for x in range(nx)]


def _round_half_away(v: float) -> float:
    return math.copysign(math.floor(abs(v) + 0.5), v)


def _to_unsigned(v: float) -> int:
    """Saturating float to unsigned integer conversion."""
    if math.isnan(v) or v <= 0.0:
        return 0
    return int(v)


@dataclass
class FluidLattice:
    """CPU-side state of a D2Q9 lattice laid over a canvas."""

    canvas_size: tuple[int, int]
    scale_factor: float = 1.0
    animation_type: FieldAnimationType = FieldAnimationType.POISEUILLE
    fluid_viscosity: float = 0.02
    lattice_pixel_size: int = field(init=False)
    width: int = field(init=False)
    height: int = field(init=False)
    lattice_info: list[LatticeInfo] = field(init=False)

    def __post_init__(self) -> None:
        self.lattice_pixel_size = math.ceil(2.0 * self.scale_factor)
        if self.lattice_pixel_size < 1:
            raise ValueError("scale_factor must be positive")
        self.width = self.canvas_size[0] // self.lattice_pixel_size
        self.height = self.canvas_size[1] // self.lattice_pixel_size
        self.lattice_info = init_lattice_material(
            self.width, self.height, 1, self.animation_type
        )

    @property
    def workgroup_count(self) -> tuple[int, int, int]:
        """Compute dispatch size for 64x4 workgroups."""
        return ((self.width + 63) // 64, (self.height + 3) // 4, 1)

    @property
    def lbm_uniform(self) -> LbmUniform:
        """Uniform derived from the viscosity: tau = 3 * viscosity + 0.5."""
        tau = 3.0 * self.fluid_viscosity + 0.5
        fluid_ty = 1 if self.animation_type == FieldAnimationType.LID_DRIVEN_CAVITY else 0
        return LbmUniform.from_tau(tau, fluid_ty, self.width * self.height)

    def reset(self) -> None:
        """Restore the initial materials; only the Poiseuille set-up is rebuilt."""
        if self.animation_type == FieldAnimationType.POISEUILLE:
            self.lattice_info = init_lattice_material(
                self.width, self.height, 1, self.animation_type
            )

    def add_obstacle(self, x: int, y: int) -> tuple[int, list[LatticeInfo]]:
        """Place a round obstacle centred on cell (x, y).

        Returns the index of the first changed row's first cell and the cells
        of all rows the obstacle spans, ready to be uploaded from that index.
        """
        radius = int(OBSTACLE_RADIUS)
        min_y = y - radius
        max_y = min_y + radius * 2
        if min_y < 0 or max_y > self.height:
            raise ValueError("obstacle does not fit inside the lattice")
        obstacle = LatticeInfo(material=int(LatticeType.OBSTACLE), block_iter=-1)
        cx, cy = x + 0.5, y + 0.5
        written: list[LatticeInfo] = []
        for row in range(min_y, max_y):
            for col in range(self.width):
                index = self.width * row + col
                if is_sd_sphere((col + 0.5 - cx, row + 0.5 - cy), OBSTACLE_RADIUS):
                    self.lattice_info[index] = obstacle
                written.append(self.lattice_info[index])
        return self.width * min_y, written

    def external_force_cells(
        self, pos: tuple[float, float], pre_pos: tuple[float, float]
    ) -> list[tuple[int, LatticeInfo]]:
        """Cells along a drag from ``pre_pos`` to ``pos`` (pixels) that receive a push.

        Returns (cell index, cell record) pairs; the stored lattice is unchanged.
        """
        if self.lattice_pixel_size < 2:
            raise ValueError("lattice pixel size must be at least 2")
        dx = pos[0] - pre_pos[0]
        dy = pos[1] - pre_pos[1]
        dis = math.hypot(dx, dy)
        force = min(0.1 * (dis / 20.0), 0.12)
        radian = math.atan2(dy, dx)
        info = LatticeInfo(
            material=int(LatticeType.EXTERNAL_FORCE),
            block_iter=90,
            vx=force * math.cos(radian),
            vy=force * math.sin(radian),
        )
        count = math.ceil(dis / (self.lattice_pixel_size - 1))
        if count == 0:
            return []
        step = dis / count
        cells: list[tuple[int, LatticeInfo]] = []
        for i in range(count):
            distance = step * i
            px = _round_half_away(pre_pos[0] + distance * math.cos(radian))
            py = _round_half_away(pre_pos[1] + distance * math.sin(radian))
            x = _to_unsigned(px) // self.lattice_pixel_size
            y = _to_unsigned(py) // self.lattice_pixel_size
            if x < 1 or x >= self.width - 2 or y < 1 or y >= self.height - 2:
                continue
            cells.append((self.width * y + x, info))
        return cells