import math

import pytest

from simuverse.cloth import ClothFabric, connect_particles, gen_fabric
from simuverse.constraints import Particle


@pytest.fixture
def fabric() -> ClothFabric:
    return gen_fabric(6, 5, 100.0, 80.0, 0.01)


def _make_particles(n):
    zero = (0.0, 0.0, 0.0, 0.0)
    return [Particle(zero, zero, zero, zero) for _ in range(n)]


def test_vertex_and_index_counts(fabric):
    assert len(fabric.vertices) == 6 * 5
    assert len(fabric.particles) == 6 * 5
    assert len(fabric.indices) == (6 - 1) * (5 - 1) * 6
    assert fabric.vertices[0] == (0, 0, 0)
    assert fabric.vertices[-1] == (5, 4, 0)


def test_indices_in_range(fabric):
    assert all(0 <= i < len(fabric.vertices) for i in fabric.indices)


def test_first_cell_triangles():
    f = gen_fabric(3, 3, 10.0, 10.0, 1.0)
    # h=1, w=1: odd/odd pattern; current=4, left=3, top=1
    assert f.indices[:6] == [1, 0, 3, 3, 4, 1]
    # h=1, w=2: mixed pattern; current=5, left=4, top=2
    assert f.indices[6:12] == [5, 2, 1, 1, 4, 5]


def test_top_corners_pinned(fabric):
    hn = fabric.horizontal_num
    assert fabric.particles[0].uv_mass[2] == 0.0
    assert fabric.particles[hn - 1].uv_mass[2] == 0.0
    assert fabric.particles[1].uv_mass[2] == 0.1
    assert fabric.particles[hn].uv_mass[2] == 0.2
    assert fabric.particles[-1].uv_mass[2] == 0.2


def test_positions_are_centred(fabric):
    first = fabric.particles[0].pos
    last = fabric.particles[-1].pos
    assert math.isclose(first[0], -last[0])
    assert math.isclose(first[1], -last[1])
    assert math.isclose(last[0] - first[0], 100.0 * 0.01)
    assert math.isclose(first[1] - last[1], 80.0 * 0.01)
    assert all(p.pos == p.old_pos for p in fabric.particles)


def test_uv_corners(fabric):
    assert fabric.particles[0].uv_mass[:2] == (0.0, 0.0)
    u, v = fabric.particles[-1].uv_mass[:2]
    assert math.isclose(u, 1.0) and math.isclose(v, 1.0)


def test_connect_points_to_grid_neighbours(fabric):
    hn = fabric.horizontal_num
    for index, p in enumerate(fabric.particles):
        w, h = index % hn, index // hn
        for other in p.connect:
            ow, oh = other % hn, other // hn
            assert abs(ow - w) + abs(oh - h) == 1


def test_connect_interior_order():
    particles = _make_particles(9)
    connect_particles(particles, 3, 3)
    assert particles[4].connect == (1, 5, 7, 3)


def test_connect_wrong_size():
    with pytest.raises(ValueError):
        connect_particles(_make_particles(5), 3, 3)


def test_stretch_rest_lengths_match_positions(fabric):
    colorings, constraints = fabric.stretch_constraints
    for c in constraints:
        a = fabric.particles[c.particle0].pos
        b = fabric.particles[c.particle1].pos
        assert math.isclose(c.rest_length, math.dist(a[:3], b[:3]))
    assert sum(g.group_len for g in colorings) == len(constraints)


def test_constraint_groups_are_independent(fabric):
    for colorings, constraints in (fabric.stretch_constraints, fabric.bend_constraints):
        for g in colorings:
            group = constraints[g.offset:g.offset + g.group_len]
            for i, a in enumerate(group):
                for b in group[i + 1:]:
                    assert not a.shared_vertices(b)


def test_too_small_grid_rejected():
    with pytest.raises(ValueError):
        gen_fabric(1, 5, 10.0, 10.0, 1.0)
    with pytest.raises(ValueError):
        gen_fabric(5, 1, 10.0, 10.0, 1.0)