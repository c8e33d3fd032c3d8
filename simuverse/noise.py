"""Parameters and lookup tables for the Perlin noise texture generator."""

from __future__ import annotations

from dataclasses import dataclass

Color = tuple[float, float, float, float]

_BASE_PERMUTATION = (
    151, 160, 137, 91, 90, 15, 131, 13, 201, 95, 96, 53, 194, 233, 7, 225, 140, 36, 103, 30, 69,
    142, 8, 99, 37, 240, 21, 10, 23, 190, 6, 148, 247, 120, 234, 75, 0, 26, 197, 62, 94, 252, 219,
    203, 117, 35, 11, 32, 57, 177, 33, 88, 237, 149, 56, 87, 174, 20, 125, 136, 171, 168, 68, 175,
    74, 165, 71, 134, 139, 48, 27, 166, 77, 146, 158, 231, 83, 111, 229, 122, 60, 211, 133, 230,
    220, 105, 92, 41, 55, 46, 245, 40, 244, 102, 143, 54, 65, 25, 63, 161, 1, 216, 80, 73, 209, 76,
    132, 187, 208, 89, 18, 169, 200, 196, 135, 130, 116, 188, 159, 86, 164, 100, 109, 198, 173,
    186, 3, 64, 52, 217, 226, 250, 124, 123, 5, 202, 38, 147, 118, 126, 255, 82, 85, 212, 207, 206,
    59, 227, 47, 16, 58, 17, 182, 189, 28, 42, 223, 183, 170, 213, 119, 248, 152, 2, 44, 154, 163,
    70, 221, 153, 101, 155, 167, 43, 172, 9, 129, 22, 39, 253, 19, 98, 108, 110, 79, 113, 224, 232,
    178, 185, 112, 104, 218, 246, 97, 228, 251, 34, 242, 193, 238, 210, 144, 12, 191, 179, 162,
    241, 81, 51, 145, 235, 249, 14, 239, 107, 49, 192, 214, 31, 181, 199, 106, 157, 184, 84, 204,
    176, 115, 121, 50, 45, 127, 4, 150, 254, 138, 236, 205, 93, 222, 114, 67, 29, 24, 72, 243, 141,
    128, 195, 78, 66, 215, 61, 156, 180,
)

# The 256-entry permutation repeated so that lookups up to index 511 need no wrap.
PERMUTATION: tuple[int, ...] = _BASE_PERMUTATION * 2

GRADIENT: tuple[Color, ...] = (
    (1.0, 1.0, 0.0, 0.0),
    (-1.0, 1.0, 0.0, 0.0),
    (1.0, -1.0, 0.0, 0.0),
    (-1.0, -1.0, 0.0, 0.0),
    (1.0, 0.0, 1.0, 0.0),
    (-1.0, 0.0, 1.0, 0.0),
    (1.0, 0.0, -1.0, 0.0),
    (-1.0, 0.0, -1.0, 0.0),
    (0.0, 1.0, 1.0, 0.0),
    (0.0, -1.0, 1.0, 0.0),
    (0.0, 1.0, -1.0, 0.0),
    (0.0, -1.0, -1.0, 0.0),
    (1.0, 1.0, 0.0, 0.0),
    (0.0, -1.0, 1.0, 0.0),
    (-1.0, 1.0, 0.0, 0.0),
    (0.0, -1.0, -1.0, 0.0),
)


@dataclass
class TexGeneratorParams:
    """Settings of the noise texture generator; all zero by default."""

    bg_color: Color = (0.0, 0.0, 0.0, 0.0)
    front_color: Color = (0.0, 0.0, 0.0, 0.0)
    noise_scale: float = 0.0
    octave: int = 0
    lacunarity: float = 0.0
    gain: float = 0.0
    ty: int = 0


def is_the_same_f32(l: float, r: float) -> bool:
    """Whether two floats differ by no more than 1e-5."""
    return not abs(l - r) > 0.00001


def is_the_same_color(lh: Color, rh: Color) -> bool:
    """Whether all four channels of two colours are the same within 1e-5."""
    return all(is_the_same_f32(a, b) for a, b in zip(lh, rh))


def permutation_hash_table() -> list[tuple[int, int, int, int]]:
    """Hashes of four of the cube corners for every (x, y) in 256x256, row by row."""
    p = PERMUTATION
    table: list[tuple[int, int, int, int]] = []
    for y in range(256):
        for x in range(256):
            a = p[x] + y
            b = p[x + 1] + y
            table.append((p[a], p[a + 1], p[b], p[b + 1]))
    return table


def gradient_table() -> list[Color]:
    """The sixteen gradient directions, padded to four components."""
    return list(GRADIENT)