"""Plane and sphere meshes with positions, normals and texture coordinates."""

from __future__ import annotations

import math
from dataclasses import dataclass

Vec2 = tuple[float, float]
Vec3 = tuple[float, float, float]


@dataclass(frozen=True)
class PosUv:
    """A vertex with a position and a texture coordinate."""

    pos: Vec3
    uv: Vec2


@dataclass(frozen=True)
class PosNormalUv:
    """A vertex with a position, a normal and a texture coordinate."""

    pos: Vec3
    normal: Vec3
    uv: Vec2


@dataclass
class Plane:
    """A rectangular grid of ``h_segments`` columns by ``v_segments`` rows.

    By default it spans [-1, 1] on both axes. A non-zero ``x_offset`` sets the
    left edge; a non-zero ``y_offset`` sets the top edge.
    """

    h_segments: int
    v_segments: int
    width: float = 2.0
    height: float = 2.0
    x_offset: float = 0.0
    y_offset: float = 0.0

    def _most_left_x(self) -> float:
        if self.x_offset != 0.0:
            return self.x_offset
        return -self.width / 2.0

    def _most_bottom_y(self) -> float:
        if self.y_offset != 0.0:
            return self.y_offset - self.height
        return -self.height / 2.0

    def generate_vertices(self) -> tuple[list[PosUv], list[int]]:
        """Vertices column by column from the bottom left, and triangle indices."""
        segment_width = self.width / self.h_segments
        segment_height = self.height / self.v_segments
        h_gap = 1.0 / self.h_segments
        v_gap = 1.0 / self.v_segments
        left = self._most_left_x()
        bottom = self._most_bottom_y()

        vertices = [
            PosUv(
                pos=(left + segment_width * h, bottom + segment_height * v, 0.0),
                uv=(h_gap * h, 1.0 - v_gap * v),
            )
            for h in range(self.h_segments + 1)
            for v in range(self.v_segments + 1)
        ]
        return vertices, self.element_indices()

    def line_indices(self) -> list[int]:
        """Index pairs of a line list drawing the grid and its diagonals."""
        indices: list[int] = []
        v_point_num = self.v_segments + 1
        for v in range(1, self.v_segments + 1):
            indices.extend((v - 1, v))
        for h in range(1, self.h_segments + 1):
            base = v_point_num * h
            for v in range(self.v_segments + 1):
                current = base + v
                left = current - v_point_num
                if v == 0:
                    indices.extend((left, current))
                else:
                    indices.extend(
                        (current, left, current, left - 1, current, current - 1)
                    )
        return indices

    def element_indices(self) -> list[int]:
        """Triangle list indices, two triangles per grid cell."""
        indices: list[int] = []
        v_point_num = self.v_segments + 1
        for h in range(1, self.h_segments + 1):
            base = v_point_num * h
            for v in range(1, self.v_segments + 1):
                current = base + v
                left = current - v_point_num
                indices.extend(
                    (current, left, left - 1, current, left - 1, current - 1)
                )
        return indices


def _normalize(v: Vec3) -> Vec3:
    length = math.sqrt(v[0] * v[0] + v[1] * v[1] + v[2] * v[2])
    if length == 0.0:
        return (math.nan, math.nan, math.nan)
    return (v[0] / length, v[1] / length, v[2] / length)


@dataclass
class Sphere:
    """A UV sphere centred at the origin."""

    radius: float
    h_segments: int
    v_segments: int

    def generate_vertices(self) -> tuple[list[PosNormalUv], list[int]]:
        """Vertices row by row from the top pole, and triangle indices."""
        phi_len = math.tau
        theta_len = math.pi
        vertices: list[PosNormalUv] = []
        grid: list[list[int]] = []

        for iy in range(self.v_segments + 1):
            v = iy / self.v_segments
            u_offset = 0.0
            if iy == 0:
                u_offset = 0.5 / self.h_segments
            elif iy == self.h_segments:
                u_offset = -0.5 / self.h_segments

            row: list[int] = []
            for ix in range(self.h_segments + 1):
                u = ix / self.h_segments
                sin_theta = math.sin(v * theta_len)
                pos = (
                    -self.radius * math.cos(u * phi_len) * sin_theta,
                    self.radius * math.cos(v * theta_len),
                    self.radius * math.sin(u * phi_len) * sin_theta,
                )
                row.append(len(vertices))
                vertices.append(
                    PosNormalUv(pos=pos, normal=_normalize(pos), uv=(u + u_offset, 1.0 - v))
                )
            grid.append(row)

        indices: list[int] = []
        for iy in range(self.v_segments):
            for ix in range(self.h_segments):
                a = grid[iy][ix + 1]
                b = grid[iy][ix]
                c = grid[iy + 1][ix]
                d = grid[iy + 1][ix + 1]
                if iy != 0:
                    indices.extend((a, b, d))
                if iy != self.v_segments - 1:
                    indices.extend((b, c, d))
        return vertices, indices