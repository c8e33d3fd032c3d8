import pytest

from simuverse.core import FieldAnimationType
from simuverse.velocity_code import get_velocity_code_snippet


@pytest.mark.parametrize(
    "ty",
    [
        FieldAnimationType.BASIC,
        FieldAnimationType.JULIA_SET,
        FieldAnimationType.SPIRAL,
        FieldAnimationType.BLACK_HOLE,
    ],
)
def test_preset_snippets_return_a_value(ty):
    code = get_velocity_code_snippet(ty)
    assert "return" in code
    assert "field." in code


@pytest.mark.parametrize(
    "ty",
    [
        FieldAnimationType.POISEUILLE,
        FieldAnimationType.LID_DRIVEN_CAVITY,
        FieldAnimationType.CUSTOM,
    ],
)
def test_other_types_have_no_snippet(ty):
    assert get_velocity_code_snippet(ty) == ""


def test_snippets_are_distinct():
    codes = {
        get_velocity_code_snippet(ty)
        for ty in (
            FieldAnimationType.BASIC,
            FieldAnimationType.JULIA_SET,
            FieldAnimationType.SPIRAL,
            FieldAnimationType.BLACK_HOLE,
        )
    }
    assert len(codes) == 4


def test_julia_set_constant():
    assert "vec2<f32>(0.4, 0.5)" in get_velocity_code_snippet(FieldAnimationType.JULIA_SET)