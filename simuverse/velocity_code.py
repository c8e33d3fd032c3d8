"""Shader snippets that compute the velocity of the preset fields."""

from __future__ import annotations

from .core import FieldAnimationType

# Each snippet is the body of a WGSL function that receives the lattice
# coordinate ``p`` and the ``field`` uniform, and returns a 2D velocity.

_BASIC = """
    // vertical shear around the middle row, expressed in NDC units
    let dy = f32(p.y) - 0.5 * f32(field.lattice_size.y);
    return field.ndc_pixel * vec2<f32>(4.0, -8.0) * dy;
    """

_JULIA_SET = """
    // lattice position mapped onto [-1.5, 1.5]
    var z = vec2<f32>(p) / vec2<f32>(field.lattice_size) * 3.0 - vec2<f32>(1.5, 1.5);
    z = z * field.proj_ratio;
    for (var k: i32 = 0; k < 8; k = k + 1) {
        z = vec2<f32>(z.x * z.x - z.y * z.y, 2.0 * z.x * z.y) + vec2<f32>(0.4, 0.5);
    }
    return 0.6 * z;
    """

_BLACK_HOLE = """
    // lattice position mapped onto [-3.5, 3.5]
    var q = vec2<f32>(p) / vec2<f32>(field.lattice_size) * 7.0 - vec2<f32>(3.5, 3.5);
    q = q * field.proj_ratio;
    let r2 = dot(q, q);
    return vec2<f32>(q.y, -q.x) / r2 - 0.2 * q;
    """

_SPIRAL = """
    // lattice position mapped onto [-25, 25]
    var q = vec2<f32>(p) / vec2<f32>(field.lattice_size) * 50.0 - vec2<f32>(25.0, 25.0);
    q = q * field.proj_ratio;
    let dist = length(q);
    let angle = atan2(q.y, q.x);
    var w = vec2<f32>(q.y, -q.x) / dist;
    w = w * (sin(sqrt(15.0 * dist) + angle) * length(w) * 50.0);
    return 15.0 * (w + q) * field.ndc_pixel;
    """

_SNIPPETS = {
    FieldAnimationType.BASIC: _BASIC,
    FieldAnimationType.JULIA_SET: _JULIA_SET,
    FieldAnimationType.BLACK_HOLE: _BLACK_HOLE,
    FieldAnimationType.SPIRAL: _SPIRAL,
}


def get_velocity_code_snippet(ty: FieldAnimationType) -> str:
    """Return the shader body for ``ty``, or an empty string if it has none."""
    return _SNIPPETS.get(ty, "")