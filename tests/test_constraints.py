import math

import pytest

from simuverse.constraints import (
    BendingConstraint,
    ClothUniform,
    MeshColoring,
    Particle,
    StretchConstraint,
    generate_bend_constraints,
    generate_bend_constraints2,
    generate_stretch_constraints,
    get_h0,
)


def _particle(x, y, z=0.0):
    p = (x, y, z, 0.0)
    return Particle(pos=p, old_pos=p, accelerate=(0.0, 0.0, 0.0, 0.0), uv_mass=(0.0, 0.0, 0.1, 0.0))


def _grid(hn, vn):
    return [_particle(float(w), -float(h)) for h in range(vn) for w in range(hn)]


def _groups(colorings, flat):
    return [flat[c.offset:c.offset + c.group_len] for c in colorings]


def _assert_independent(colorings, flat):
    for group in _groups(colorings, flat):
        for i, a in enumerate(group):
            for b in group[i + 1:]:
                assert not a.shared_vertices(b)


def _assert_layout(colorings, flat):
    offset = 0
    for c in colorings:
        assert c.offset == offset
        assert c.thread_group == ((c.group_len + 31) // 32, 1)
        offset += c.group_len
    assert offset == len(flat)


def test_stretch_shared_vertices():
    a = StretchConstraint(1.0, 0.0, 0, 1)
    assert a.shared_vertices(StretchConstraint(1.0, 0.0, 1, 2))
    assert a.shared_vertices(StretchConstraint(1.0, 0.0, 5, 0))
    assert not a.shared_vertices(StretchConstraint(1.0, 0.0, 2, 3))


def test_bending_shared_vertices():
    a = BendingConstraint(1, 0, 2, 0.0)
    assert a.shared_vertices(BendingConstraint(4, 2, 6, 0.0))
    assert not a.shared_vertices(BendingConstraint(4, 3, 5, 0.0))
    assert repr(a) == "(1, 0, 2)"


def test_mesh_coloring_push_constants_and_uniform():
    c = MeshColoring(offset=4, max_num_x=0, max_num_y=0, group_len=7, thread_group=(1, 1))
    assert c.push_constants() == [4, 0, 0, 7]
    first = c.bending_dynamic_uniform(0)
    assert first.invert_iter == 1.0
    assert first.offset == 4 and first.group_len == 7
    assert c.bending_dynamic_uniform(3).invert_iter == pytest.approx(0.25)


def test_get_h0_collinear_is_zero():
    v, b0, b1 = _particle(1.0, 0.0), _particle(0.0, 0.0), _particle(2.0, 0.0)
    assert get_h0(v, b0, b1) == pytest.approx(0.0)


def test_get_h0_is_distance_to_centroid():
    v, b0, b1 = _particle(0.0, 0.0), _particle(3.0, 0.0), _particle(0.0, 3.0)
    assert get_h0(v, b0, b1) == pytest.approx(math.hypot(1.0, 1.0))


@pytest.mark.parametrize("hn,vn", [(3, 3), (5, 4), (8, 8)])
def test_stretch_constraints_count_and_lengths(hn, vn):
    particles = _grid(hn, vn)
    colorings, flat = generate_stretch_constraints(hn, vn, particles)
    assert len(flat) == (hn - 1) + (vn - 1) * (1 + 4 * (hn - 1))
    for c in flat:
        p0, p1 = particles[c.particle0].pos, particles[c.particle1].pos
        assert c.rest_length == pytest.approx(math.dist(p0[:3], p1[:3]))
        assert c.lambda_ == 0.0
    _assert_layout(colorings, flat)


@pytest.mark.parametrize("hn,vn", [(3, 3), (6, 5), (10, 10)])
def test_stretch_constraints_groups_are_independent(hn, vn):
    colorings, flat = generate_stretch_constraints(hn, vn, _grid(hn, vn))
    _assert_independent(colorings, flat)
    assert len(colorings) <= 16


def test_stretch_constraints_empty_grid_raises():
    with pytest.raises(ValueError):
        generate_stretch_constraints(1, 1, _grid(1, 1))


@pytest.mark.parametrize("hn,vn", [(3, 3), (5, 6), (9, 9)])
def test_bend_constraints_are_straight_lines(hn, vn):
    colorings, flat = generate_bend_constraints(hn, vn)
    for c in flat:
        assert c.b0 + c.b1 == 2 * c.v
        assert c.h0 == 0.0
    _assert_layout(colorings, flat)
    _assert_independent(colorings, flat)


def test_bend_constraints_count():
    hn, vn = 5, 4
    _, flat = generate_bend_constraints(hn, vn)
    inner_w, inner_h = hn - 2, vn - 2
    expected = inner_w * vn + inner_h * hn + 2 * inner_w * inner_h
    assert len(flat) == expected


@pytest.mark.parametrize("hn,vn", [(3, 3), (6, 5), (10, 10)])
def test_bend_constraints2_count_and_h0(hn, vn):
    particles = _grid(hn, vn)
    colorings, flat = generate_bend_constraints2(hn, vn, particles)
    assert len(flat) == (vn - 1) * (hn - 2) + (vn - 2) * (hn - 1)
    for c in flat:
        assert c.h0 == pytest.approx(
            get_h0(particles[c.v], particles[c.b0], particles[c.b1])
        )
        assert 0 <= min(c.v, c.b0, c.b1)
        assert max(c.v, c.b0, c.b1) < hn * vn
    _assert_layout(colorings, flat)


def test_bend_constraints2_first_constraint():
    colorings, flat = generate_bend_constraints2(3, 3, _grid(3, 3))
    first = flat[colorings[0].offset]
    assert (first.v, first.b0, first.b1) == (2, 0, 3)


def test_bend_constraints2_too_small_raises():
    with pytest.raises(ValueError):
        generate_bend_constraints2(2, 2, _grid(2, 2))


def test_cloth_uniform_is_mutable_record():
    u = ClothUniform(num_x=2, num_y=3, gravity=-1.0, damping=0.5, compliance=0.0, stiffness=0.1, dt=0.01)
    u.damping = 0.25
    assert (u.num_x, u.num_y, u.damping) == (2, 3, 0.25)